"""
Database Connection Module

Provides sync session management for the profile store.

Usage:
    with get_db_session() as session:
        profile = session.get(ProfileRecord, profile_id)
"""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, QueuePool, StaticPool

from config.settings import Settings, get_settings

from .models import Base

logger = logging.getLogger(__name__)

# Global engine and session factory (lazy initialization)
_engine = None
_session_factory = None


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build an engine for a URL.

    In-memory SQLite shares one connection so every session sees the same
    database; file SQLite opens a connection per use.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            return create_engine(
                url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_engine(
            url,
            echo=echo,
            poolclass=NullPool,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        url,
        echo=echo,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


def get_engine(settings: Optional[Settings] = None) -> Engine:
    """
    Get or create the SQLAlchemy engine.

    Args:
        settings: Application settings. If None, loads from environment.
    """
    global _engine

    if _engine is None:
        settings = settings or get_settings()
        logger.info(f"Creating database engine for {make_url(settings.database_url).get_backend_name()}")
        _engine = create_db_engine(settings.database_url, echo=settings.database_echo)

    return _engine


def get_session_factory(settings: Optional[Settings] = None) -> sessionmaker:
    """Get or create the session factory."""
    global _session_factory

    if _session_factory is None:
        engine = get_engine(settings)
        _session_factory = sessionmaker(
            bind=engine,
            expire_on_commit=False,
            autoflush=False,
            autocommit=False,
        )

    return _session_factory


def init_db(settings: Optional[Settings] = None) -> None:
    """Create tables that do not exist yet."""
    Base.metadata.create_all(get_engine(settings))


@contextmanager
def get_db_session(settings: Optional[Settings] = None) -> Generator[Session, None, None]:
    """
    Get a database session as a context manager.

    Yields:
        Session: SQLAlchemy session that auto-commits on success, rollbacks on error.
    """
    session_factory = get_session_factory(settings)
    session = session_factory()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def close_engine() -> None:
    """
    Close the engine and cleanup connections.

    Should be called during application shutdown.
    """
    global _engine, _session_factory

    if _engine is not None:
        logger.info("Closing database engine")
        _engine.dispose()
        _engine = None
        _session_factory = None
