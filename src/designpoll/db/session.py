"""Database session management.

Provides session factory for SQLite database access with proper
thread-safety for FastAPI concurrency.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from designpoll.config import DEFAULT_DB_PATH, DEFAULT_STORE_TIMEOUT_S
from designpoll.db.schema import Base

# Module-level engine cache for connection pooling, keyed by (path, timeout)
_engine_cache: dict[tuple[str, float], Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[tuple[str, float], sessionmaker] = {}


def get_engine(
    db_path: Path | None = None,
    timeout_s: float = DEFAULT_STORE_TIMEOUT_S,
) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by resolved db_path and timeout_s. Subsequent calls
    with the same pair return the cached engine.

    Args:
        db_path: Path to SQLite database file. Defaults to data/designpoll.db.
        timeout_s: Seconds a statement waits on a locked database before
            failing with OperationalError.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    if db_path is None:
        db_path = DEFAULT_DB_PATH

    db_path = Path(db_path)
    cache_key = (str(db_path.resolve()), float(timeout_s))

    if cache_key in _engine_cache:
        return _engine_cache[cache_key]

    # Create parent directories only when creating a new engine
    db_path.parent.mkdir(parents=True, exist_ok=True)

    # SQLite thread-safety config for FastAPI concurrency:
    # - check_same_thread=False: pooled connections move between threads
    # - default QueuePool: each session gets its own connection, so one
    #   session's rollback never touches another's transaction
    # - timeout: bounded wait on locks, surfaced as StoreUnavailableError
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False, "timeout": timeout_s},
    )
    _engine_cache[cache_key] = engine

    return engine


def _get_session_factory(
    db_path: Path | None = None,
    timeout_s: float = DEFAULT_STORE_TIMEOUT_S,
) -> sessionmaker:
    """Get cached session factory for the database."""
    if db_path is None:
        db_path = DEFAULT_DB_PATH

    db_path = Path(db_path)
    cache_key = (str(db_path.resolve()), float(timeout_s))

    if cache_key in _session_factory_cache:
        return _session_factory_cache[cache_key]

    engine = get_engine(db_path, timeout_s)
    factory = sessionmaker(bind=engine)
    _session_factory_cache[cache_key] = factory

    return factory


def get_session(
    db_path: Path | None = None,
    timeout_s: float = DEFAULT_STORE_TIMEOUT_S,
) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session. For automatic
    resource management, use session_scope() instead.

    Args:
        db_path: Path to SQLite database file.
        timeout_s: Lock wait timeout in seconds.

    Returns:
        SQLAlchemy Session instance.
    """
    factory = _get_session_factory(db_path, timeout_s)
    return factory()


@contextmanager
def session_scope(db_path: Path | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Example:
        with session_scope() as session:
            repo.create_design(session, entity)
    """
    session = get_session(db_path)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(db_path: Path | None = None, timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
    """Initialize database schema.

    Call this once during application startup to create tables.
    """
    engine = get_engine(db_path, timeout_s)
    Base.metadata.create_all(engine)
