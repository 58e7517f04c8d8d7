"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db(), and every document change runs inside
unit_of_work().
"""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session

from pos_ledger.config import get_settings
from pos_ledger.exceptions import ConflictError, StoreError

logger = logging.getLogger(__name__)

settings = get_settings()

# --- Engine ---
# pool_pre_ping=True tests connections before using them,
# which handles cases where the database restarted or a
# connection went stale.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# --- Session Factory ---
# autocommit=False: the caller decides when a posting is saved.
# autoflush=False: SQL is only sent on explicit flush or commit,
# so the services control exactly when each step hits the store.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally guarantees the session is closed even if
    the endpoint raises, so connections never leak from the pool.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Column or constraint name in the driver message -> conflict reported.
# Matches both SQLite ("UNIQUE constraint failed: purchases.invoice_number")
# and PostgreSQL ("... violates unique constraint "ix_purchases_invoice_number"").
UNIQUE_CONFLICTS = (
    ("invoice_number", "Invoice number already exists"),
    ("return_number", "Return number already exists"),
    ("journal_entries.reference", "Document already has a journal entry"),
    ("uq_journal_entries_reference", "Document already has a journal entry"),
)


def _unique_conflict(error: IntegrityError) -> str | None:
    """Conflict message for a unique key violation, None for anything else."""
    message = str(error.orig).lower()
    if "unique constraint" not in message:
        return None
    for marker, conflict in UNIQUE_CONFLICTS:
        if marker in message:
            return conflict
    return None


@contextmanager
def unit_of_work(db: Session):
    """
    Run a block as one atomic transaction.

    Commits when the block finishes, rolls back on any error.
    A unique key violation that slipped past validation (two
    writers racing on the same invoice or return number) surfaces
    as ConflictError. Other database errors are logged with their
    traceback and surfaced as StoreError. Nothing is retried, since
    re-running a posting could duplicate it.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        conflict = _unique_conflict(e)
        if conflict is None:
            logger.exception("Integrity failure, transaction rolled back")
            raise StoreError(
                "The operation could not be saved; no changes were made"
            ) from e
        logger.warning("Unique key violation, transaction rolled back: %s", e.orig)
        raise ConflictError(conflict) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store failure, transaction rolled back")
        raise StoreError(
            "The operation could not be saved; no changes were made"
        ) from e
    except Exception:
        db.rollback()
        raise
