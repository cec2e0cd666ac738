"""
Pastebin Backend - Paste Store
===============================

What:  The persistence boundary: a single `pastes` table reached through an
       explicit store object with an open/close lifecycle.
Why:   The application factory owns one PasteStore, opens it at startup,
       closes it at shutdown, and hands it to PasteService per request.
       Nothing reaches the database through module-level globals.
How:   Wraps an async SQLAlchemy engine and session factory (database.py).
       Every operation runs in its own transactional session_scope and
       translates SQLAlchemy errors into application exceptions.
Who:   Created in main.create_app(); used by PasteService and the health check.

Operations:
    open()                → create db directory + table if absent (idempotent)
    close()               → dispose engine, closing pooled connections
    ping()                → SELECT 1, True/False
    insert(id, content)   → ConstraintViolationError on duplicate id,
                            StorageError on any other failure
    get_by_id(id)         → Paste or None, StorageError on failure

Query plan:
    SELECT ... FROM pastes WHERE id = :id  → primary key lookup
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pastebin.database import (
    Base,
    create_engine,
    create_session_factory,
    session_scope,
    sqlite_file_path,
)
from pastebin.exceptions import ConstraintViolationError, StorageError
from pastebin.models.paste import Paste

logger = logging.getLogger(__name__)


class PasteStore:
    """
    Async store for Paste rows.

    The engine is created eagerly but connects lazily, so constructing a
    store never touches the database. Call open() before serving requests.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = create_engine(database_url)
        self._session_factory = create_session_factory(self.engine)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def open(self) -> None:
        """
        Prepare the database for use.

        Steps:
            1. For a file-backed SQLite URL, create the parent directory
            2. CREATE TABLE IF NOT EXISTS pastes (via metadata.create_all)

        Safe to call more than once. Raises StorageError if the database
        cannot be reached or the table cannot be created.
        """
        db_file = sqlite_file_path(self.database_url)
        try:
            if db_file is not None:
                db_file.parent.mkdir(parents=True, exist_ok=True)
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (OSError, SQLAlchemyError) as e:
            logger.error("Failed to open paste store: %s", str(e))
            raise StorageError(
                context={"operation": "open", "error_type": type(e).__name__},
            ) from e

        logger.info("Paste store ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        """Dispose the engine; pooled connections are closed."""
        await self.engine.dispose()
        logger.info("Paste store closed")

    async def ping(self) -> bool:
        """Lightweight connectivity check for the health endpoint."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Paste store ping failed: %s", str(e))
            return False

    # ── Operations ────────────────────────────────────────────────────────

    async def insert(self, paste_id: str, content: str) -> None:
        """
        Persist a new paste; created_at is assigned by the database.

        Raises:
            ConstraintViolationError: a paste with `paste_id` already exists
            StorageError: any other database failure
        """
        try:
            async with session_scope(self._session_factory) as session:
                session.add(Paste(id=paste_id, content=content))
        except IntegrityError as e:
            logger.warning("Insert rejected, id %s already exists", paste_id)
            raise ConstraintViolationError(
                paste_id=paste_id,
                context={"error": str(e.orig)},
            ) from e
        except (SQLAlchemyError, UnicodeError) as e:
            # The driver encodes text itself; encoding failures surface unwrapped
            logger.error("Database error inserting paste %s: %s", paste_id, str(e))
            raise StorageError(
                context={"operation": "insert", "paste_id": paste_id, "error_type": type(e).__name__},
            ) from e

    async def get_by_id(self, paste_id: str) -> Optional[Paste]:
        """
        Fetch a paste by primary key.

        Returns:
            The Paste row, or None when no row has this id.

        Raises:
            StorageError: the query could not be executed
        """
        try:
            async with session_scope(self._session_factory) as session:
                return await session.get(Paste, paste_id)
        except (SQLAlchemyError, UnicodeError) as e:
            logger.error("Database error fetching paste %s: %s", paste_id, str(e))
            raise StorageError(
                context={"operation": "get_by_id", "paste_id": paste_id, "error_type": type(e).__name__},
            ) from e
