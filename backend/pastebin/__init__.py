"""
Pastebin Backend - Application Package Initializer
===================================================

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Routes + Templates (HTTP layer)   │  ← status codes, HTML, JSON
    ├─────────────────────────────────────┤
    │     PasteService (Business Logic)   │  ← validation, id assignment
    ├─────────────────────────────────────┤
    │   PasteStore + Models (Persistence) │  ← one `pastes` table
    └─────────────────────────────────────┘

    The store is an explicit object owned by the app (app.state.store),
    opened at startup and closed at shutdown.
"""

__version__ = "1.0.0"
