# Routes package init
"""
Pastebin Backend - Routes Package
==================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - pastes.py:  POST /api/paste            (create a paste)
                  GET  /api/paste/{id}       (paste as JSON)
    - pages.py:   GET  /                     (home page with paste form)
                  GET  /{id}                 (paste as HTML page)
    - health.py:  GET  /health               (service health check)

Design Principle:
    Routes are thin: they extract request data, call PasteService, and
    return the result. Validation and storage rules live in the service.

Registration order matters: pages.py owns the catch-all /{id}, so it is
included after every other router (see main.create_app).
"""
