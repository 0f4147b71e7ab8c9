"""Builders shared by unit and integration tests."""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from attribution.models import ReferrerProfile
from config.settings import Settings
from rbac.identity import Identity
from rbac.roles import Role


TEST_SECRET = "test-secret-key-for-signing-0123456789abcdef"


def make_settings(**overrides) -> Settings:
    """Settings isolated from the process environment and .env files."""
    values = {
        "environment": "test",
        "secret_key": TEST_SECRET,
        "database_url": "sqlite://",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_identity(
    role: Role,
    user_id: str = "user-1",
    overrides: Optional[Dict[str, bool]] = None,
    **extra,
) -> Identity:
    return Identity(id=user_id, role=role, permission_overrides=overrides or {}, **extra)


class InMemoryProfileLookup:
    """ProfileLookup over a list of ReferrerProfile values and recorded link clicks."""

    def __init__(self, *profiles: ReferrerProfile):
        self.profiles = list(profiles)
        self.clicks: List[Tuple[str, ReferrerProfile, Optional[str], Optional[str], datetime]] = []
        self.calls = []

    def add_click(
        self,
        code: str,
        profile: ReferrerProfile,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        clicked_at: Optional[datetime] = None,
    ) -> None:
        self.clicks.append((code, profile, email, phone, clicked_at or datetime.utcnow()))

    def find_profile_by_any_tracking_code(self, code: str) -> Optional[ReferrerProfile]:
        self.calls.append(code)
        for profile in self.profiles:
            if code in (profile.tracking_code, profile.custom_tracking_code, profile.short_link_username):
                return profile
        return None

    def find_referrer_by_click_email(self, email: str, since: datetime) -> Optional[Tuple[str, ReferrerProfile]]:
        self.calls.append(("email", email))
        return self._latest(lambda click: click[2] == email, since)

    def find_referrer_by_click_phone(self, phone_key: str, since: datetime) -> Optional[Tuple[str, ReferrerProfile]]:
        self.calls.append(("phone", phone_key))
        return self._latest(lambda click: bool(click[3]) and click[3].endswith(phone_key), since)

    def _latest(self, predicate, since: datetime) -> Optional[Tuple[str, ReferrerProfile]]:
        matches = [click for click in self.clicks if click[4] >= since and predicate(click)]
        if not matches:
            return None
        code, profile, _, _, _ = max(matches, key=lambda click: click[4])
        return code, profile
