# Models package init
"""SQLAlchemy ORM models. One table: pastes (models/paste.py)."""
