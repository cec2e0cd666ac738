# Schemas package init
"""Pydantic request/response models for the paste API (schemas/paste.py)."""
