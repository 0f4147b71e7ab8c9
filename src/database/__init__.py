"""
Database Layer for the profile store.

This module provides:
- ORM models: profiles, referral-link clicks, route restrictions
- RouteRestrictionRepository
- Lazily created engine and session factory
"""

from .models import Base, LinkClickRecord, ProfileRecord, RouteRestrictionRecord
from .connection import (
    close_engine,
    create_db_engine,
    get_db_session,
    get_engine,
    get_session_factory,
    init_db,
)
from .repositories import RestrictionStoreError, RouteRestrictionRepository

__all__ = [
    "Base",
    "LinkClickRecord",
    "ProfileRecord",
    "RouteRestrictionRecord",
    "RouteRestrictionRepository",
    "RestrictionStoreError",
    "close_engine",
    "create_db_engine",
    "get_db_session",
    "get_engine",
    "get_session_factory",
    "init_db",
]
