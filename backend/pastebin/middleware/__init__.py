# Middleware package init
"""
Pastebin Backend - Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler
    Response ← [Request ID] ← [Logging] ← Route Handler

    - Request ID runs first so the access log line carries the ID
    - Logging measures the full handler time, including error handlers
"""
