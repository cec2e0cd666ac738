"""Create pastes table

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the `pastes` table: id primary key, content, created_at.
How:   Portable column types only, so the same revision runs on SQLite and
       PostgreSQL. Mirrors pastebin/models/paste.py; PasteStore.open() creates
       the identical table with CREATE TABLE IF NOT EXISTS.

Rollback: downgrade() drops the table entirely (destructive, all pastes lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pastes",
        sa.Column(
            "id",
            sa.String(64),
            nullable=False,
            comment="Random hex identifier, also the public URL path segment",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Paste text, stored verbatim",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this paste was created (UTC)",
        ),
        # Primary key is the only access path; no secondary indexes
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """WARNING: destructive, every stored paste is lost."""
    op.drop_table("pastes")
