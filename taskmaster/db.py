# taskmaster/db.py

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger("taskmaster-db")

# -----------------------------
# Declarative base
# -----------------------------
Base = declarative_base()

# -----------------------------
# Process-wide engine / session factory
# -----------------------------
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def init_db(database_url: str, *, echo: bool = False, create_schema: bool = True) -> sessionmaker:
    """
    Build the engine and session factory once, before the server accepts
    connections. Calling it again while initialized is a no-op.
    """
    global _engine, _session_factory

    if _session_factory is not None:
        return _session_factory

    connect_args = {}
    if database_url.startswith("sqlite"):
        # handlers run in the threadpool
        connect_args["check_same_thread"] = False

    engine = None
    try:
        engine = create_engine(
            database_url,
            echo=echo,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        if create_schema:
            # registers the tasks table on Base.metadata
            from taskmaster.models import task  # noqa: F401

            Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("Failed to create session factory for %s", engine_label(database_url))
        if engine is not None:
            engine.dispose()
        raise

    _engine = engine
    _session_factory = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    logger.info("Session factory ready -> %s", engine_label(database_url))
    return _session_factory


def close_db() -> None:
    """Dispose of the engine at process shutdown."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
        logger.info("Session factory closed")
    _engine = None
    _session_factory = None


def get_session_factory() -> sessionmaker:
    if _session_factory is None:
        raise RuntimeError("Database is not initialized; call init_db() first")
    return _session_factory


@contextmanager
def session_scope(factory: Optional[sessionmaker] = None) -> Iterator[Session]:
    """
    One session + one transaction. Commits when the block exits cleanly,
    rolls back and re-raises otherwise. The session is always closed.
    """
    session = (factory or get_session_factory())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def ping() -> str:
    """Return the database status reported by /health."""
    if _engine is None:
        return "disconnected"
    try:
        with _engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return "connected"
    except Exception:
        logger.warning("Database ping failed", exc_info=True)
        return "error"


def engine_label(database_url: str) -> str:
    """Database URL with the password masked, for log lines."""
    scheme, sep, rest = database_url.partition("://")
    if not sep or "@" not in rest:
        return database_url
    credentials, _, location = rest.rpartition("@")
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{location}"
