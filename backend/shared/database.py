"""
Database engine and session factory for SQLAlchemy.

Provides a process-wide engine built from settings and the session factory
repositories use to open transactions.
"""

import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all mapped tables."""

    pass


# Module-level engine cache
_engine: Optional[Engine] = None


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given database URL.

    In-memory SQLite databases share a single connection so that every
    session sees the same data.

    Args:
        url: SQLAlchemy database URL
        echo: Log emitted SQL

    Returns:
        Configured Engine
    """
    kwargs: dict = {"echo": echo, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_url(url):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(url, **kwargs)
    logger.debug("Created database engine for %s", engine.url.render_as_string(hide_password=True))
    return engine


def get_engine() -> Engine:
    """
    Get the engine configured by settings.

    The engine is created on first use and the schema is ensured.

    Returns:
        Cached Engine
    """
    global _engine

    if _engine is None:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError(
                "Database configuration missing. "
                "Set the DATABASE_URL environment variable."
            )
        _engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        init_db(_engine)

    return _engine


def get_session_factory(engine: Optional[Engine] = None) -> sessionmaker[Session]:
    """
    Build a session factory bound to an engine.

    Args:
        engine: Engine to bind; defaults to the settings-configured engine

    Returns:
        sessionmaker producing non-expiring sessions
    """
    return sessionmaker(
        bind=engine or get_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> None:
    """
    Create all tables registered on Base.

    Feature modules register their tables when imported, so import them
    before calling this.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")


def reset_engine_cache() -> None:
    """
    Dispose and forget the cached engine.

    Useful for testing or when configuration changes.
    """
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None
