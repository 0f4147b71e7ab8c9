"""
Integration Test Fixtures

Provides:
- app / client: the FastAPI app on an in-memory profile store, lifespan running
- seed_profile: insert profile rows through the app's own session factory
- token_for / auth_headers: session tokens signed with the test settings
- sign_in: seed a profile and attach its session cookie to the client
"""

from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from database.connection import get_db_session
from database.models import ProfileRecord
from rbac.jwt import create_access_token
from rbac.roles import Role
from tests.helpers.factories import make_settings
from web.app import create_app


# =============================================================================
# APPLICATION
# =============================================================================

@pytest.fixture
def app_settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(app_settings):
    return create_app(app_settings, exit_on_insecure=False)


@pytest.fixture
def client(app):
    """TestClient that does not follow redirects, so gate decisions are visible."""
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


# =============================================================================
# DATA
# =============================================================================

@pytest.fixture
def seed_profile(client, app_settings) -> Callable[..., str]:
    """Insert a profile row; returns its id. Requires the client (tables exist)."""

    def _seed(role: Role, **fields) -> str:
        with get_db_session(app_settings) as session:
            record = ProfileRecord(role=role.value, **fields)
            session.add(record)
            session.flush()
            return record.id

    return _seed


@pytest.fixture
def token_for(app_settings) -> Callable[..., str]:
    def _token(user_id: str, role: Role, overrides: Optional[Dict[str, bool]] = None, **kwargs) -> str:
        return create_access_token(
            user_id,
            role,
            permission_overrides=overrides,
            settings=app_settings,
            **kwargs,
        )

    return _token


@pytest.fixture
def auth_headers(token_for) -> Callable[..., Dict[str, str]]:
    def _headers(user_id: str, role: Role, **kwargs) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token_for(user_id, role, **kwargs)}"}

    return _headers


@pytest.fixture
def sign_in(client, seed_profile, token_for, app_settings) -> Callable[..., str]:
    """Seed a profile for user_id and sign the client in with a session cookie."""

    def _sign_in(
        user_id: str,
        role: Role,
        overrides: Optional[Dict[str, bool]] = None,
        username: Optional[str] = None,
        **fields,
    ) -> str:
        seed_profile(role, user_id=user_id, permission_overrides=overrides, **fields)
        token = token_for(user_id, role, username=username)
        client.cookies.set(app_settings.session_cookie_name, token)
        return token

    return _sign_in
