"""Pytest configuration and fixtures for test suite."""

import os
import sys
from pathlib import Path

import pytest

# Set test environment BEFORE any other imports
os.environ.setdefault("APP_ENVIRONMENT", "test")

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from sqlalchemy.orm import sessionmaker

from attribution.models import ReferrerProfile
from config.settings import Settings
from database.connection import create_db_engine
from database.models import Base, ProfileRecord
from rbac.identity import Identity
from rbac.roles import Role
from tests.helpers.factories import InMemoryProfileLookup, make_identity, make_settings


# =============================================================================
# SETTINGS
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def production_settings() -> Settings:
    return make_settings(environment="production", enforce_https=True)


# =============================================================================
# IDENTITIES
# =============================================================================

@pytest.fixture
def admin_identity() -> Identity:
    return make_identity(Role.ADMIN, user_id="admin-1", email="admin@taxgeniuspro.tax")


@pytest.fixture
def super_admin_identity() -> Identity:
    return make_identity(Role.SUPER_ADMIN, user_id="root-1", email="root@taxgeniuspro.tax")


@pytest.fixture
def preparer_identity() -> Identity:
    return make_identity(Role.TAX_PREPARER, user_id="prep-1", first_name="Sarah", last_name="Jones")


@pytest.fixture
def client_identity() -> Identity:
    return make_identity(Role.CLIENT, user_id="client-1")


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(bind=db_engine, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_profile(db_session):
    """Factory that inserts a profile and returns it."""

    def _add(role: Role = Role.TAX_PREPARER, **fields) -> ProfileRecord:
        record = ProfileRecord(role=role.value, **fields)
        db_session.add(record)
        db_session.commit()
        return record

    return _add


# =============================================================================
# REFERRER PROFILES
# =============================================================================

@pytest.fixture
def sarah_profile() -> ReferrerProfile:
    return ReferrerProfile(
        profile_id="profile-sarah",
        role=Role.TAX_PREPARER,
        user_id="user-sarah",
        first_name="Sarah",
        last_name="Jones",
        tracking_code="SARAH2024",
        custom_tracking_code="sarah-taxes",
    )


@pytest.fixture
def affiliate_profile() -> ReferrerProfile:
    return ReferrerProfile(
        profile_id="profile-aff",
        role=Role.AFFILIATE,
        user_id="user-aff",
        tracking_code="AFF001",
        short_link_username="bigpromo",
    )


@pytest.fixture
def client_referrer_profile() -> ReferrerProfile:
    return ReferrerProfile(
        profile_id="profile-cli",
        role=Role.CLIENT,
        user_id="user-cli",
        tracking_code="FRIEND42",
    )


@pytest.fixture
def profile_lookup(sarah_profile, affiliate_profile, client_referrer_profile) -> InMemoryProfileLookup:
    return InMemoryProfileLookup(sarah_profile, affiliate_profile, client_referrer_profile)
