"""Database schema bootstrap helpers.

SQLite databases get their tables created at startup. Other databases are
expected to be provisioned ahead of time.
"""

from __future__ import annotations

from planpilot.infrastructure.database.base import Base
from planpilot.infrastructure.database.engine import sync_engine


def ensure_sqlite_schema() -> None:
    """Best-effort schema creation for SQLite."""

    # Ensure ORM models are imported so they are registered on Base.metadata
    from planpilot.infrastructure.database import models as _models  # noqa: F401

    url = str(sync_engine.url)
    if url.startswith("sqlite"):
        Base.metadata.create_all(bind=sync_engine)
