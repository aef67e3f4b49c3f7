"""Database connection setup."""

from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

_LEGACY_SCHEME = "postgres://"


def _normalize_dsn(dsn: str) -> str:
    if dsn.startswith(_LEGACY_SCHEME):
        return "postgresql://" + dsn[len(_LEGACY_SCHEME):]
    return dsn


def init_database(dsn: str) -> Engine:
    """Create an engine for ``dsn`` and check that the database answers.

    Raises the driver's error when the DSN is invalid or the database is unreachable.
    """
    engine = create_engine(_normalize_dsn(dsn), pool_pre_ping=True)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        engine.dispose()
        raise
    return engine