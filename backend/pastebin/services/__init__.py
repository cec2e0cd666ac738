# Services package init
"""
Pastebin Backend - Services Layer
==================================

What:  Business logic between routes (HTTP) and the paste store (persistence).

Service Inventory:
    - identifier.py:     generate_paste_id(), random hex paste identifiers
    - paste_service.py:  PasteService, validation + create/get contract
"""
