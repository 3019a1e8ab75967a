"""SQLAlchemy engine and sessions backing the key/value storage table."""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///data/seo_keywords.db"
SQLITE_BUSY_TIMEOUT_MS = 5000


class Base(DeclarativeBase):
    pass


_engine: Optional[Engine] = None
_sessions: Optional[sessionmaker] = None


def _set_busy_timeout(dbapi_conn, connection_record):
    # History and settings are rewritten whole; wait on a locked file instead of failing.
    cursor = dbapi_conn.cursor()
    cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
    cursor.close()


def _sqlite_file(database_url: str) -> Optional[Path]:
    """Path of the SQLite file behind ``database_url``, or None for memory/other backends."""
    if not database_url.startswith("sqlite:///") or ":memory:" in database_url:
        return None
    return Path(database_url[len("sqlite:///"):])


def get_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """Return the process-wide engine, creating it on first use.

    The URL falls back to ``DATABASE_URL`` and then to a SQLite file
    under ``data/``.
    """
    global _engine, _sessions
    if _engine is not None:
        return _engine

    database_url = database_url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    db_file = _sqlite_file(database_url)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)

    is_sqlite = database_url.startswith("sqlite")
    _engine = create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )
    if is_sqlite:
        event.listen(_engine, "connect", _set_busy_timeout)
    _sessions = sessionmaker(bind=_engine, expire_on_commit=False)
    logger.info("Storage database: %s", database_url)
    return _engine


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Yield a session that commits on success and rolls back on error.

    Usage::

        with get_session() as session:
            session.get(StorageItem, "seo-tool-settings")
    """
    get_engine()
    session = _sessions()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(database_url: Optional[str] = None, echo: bool = False) -> None:
    """Create the storage table if it does not exist yet."""
    engine = get_engine(database_url=database_url, echo=echo)
    import seo_keywords.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("Storage tables verified.")


def reset_engine() -> None:
    """Dispose of the cached engine so the next call builds a fresh one."""
    global _engine, _sessions
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _sessions = None
