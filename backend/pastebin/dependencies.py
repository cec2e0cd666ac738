"""
Pastebin Backend - FastAPI Dependencies
========================================

What:  Providers that hand the application's PasteStore and a PasteService
       to route handlers through Depends().
How:   The store lives on app.state (set by create_app); a PasteService is
       built around it for each request.

Example usage in a route:
    @router.get("/api/paste/{paste_id}")
    async def get_paste(paste_id: str, service: PasteService = Depends(get_paste_service)):
        return await service.get_paste(paste_id)
"""

from fastapi import Depends, Request

from pastebin.services.paste_service import PasteService
from pastebin.store import PasteStore


def get_paste_store(request: Request) -> PasteStore:
    return request.app.state.store


def get_paste_service(store: PasteStore = Depends(get_paste_store)) -> PasteService:
    return PasteService(store)
