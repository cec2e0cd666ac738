"""
Pastebin Backend - Paste SQLAlchemy Model
==========================================

What:  ORM model representing the `pastes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from the shared DeclarativeBase; PasteStore.open() and Alembic
       both build the table from this definition.
Who:   Used by PasteStore for inserts and primary-key lookups.

Table Design:
    - id: short random hex token; primary key and public URL segment
    - content: verbatim paste text (escaping happens at render time only)
    - created_at: assigned by the database server at insert, never updated

    No secondary indexes: the primary key is the only access path.
    No update or delete path exists anywhere in the application.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from pastebin.database import Base

# Wide enough for the largest configurable id (settings.id_bytes le=32)
ID_COLUMN_LENGTH = 64


class Paste(Base):
    """
    A single stored text submission.

    Lifecycle:
        1. Inserted by PasteService.create_paste() after validation
        2. Read any number of times by id
        3. Never modified, never deleted
    """

    __tablename__ = "pastes"

    # ── Primary Key ───────────────────────────────────────────────────────
    # Generated in Python (services/identifier.py), not by the database:
    # the id must be known before the insert to build the share URL
    id: Mapped[str] = mapped_column(
        String(ID_COLUMN_LENGTH),
        primary_key=True,
        comment="Random hex identifier, also the public URL path segment",
    )

    # ── Content ───────────────────────────────────────────────────────────
    # Length is bounded by PasteService at write time, not by the column
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Paste text, stored verbatim",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    # Server-side default only: the ORM omits the column from INSERT and the
    # database fills it. SQLite stores UTC without an offset.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this paste was created (UTC)",
    )

    def __repr__(self) -> str:
        return f"<Paste(id={self.id}, length={len(self.content or '')})>"
