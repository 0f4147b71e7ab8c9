"""
Attribution data models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from core.cookies import CookieMutation
from rbac.roles import Role


class ReferrerType(str, Enum):
    """Kind of profile credited for a visit."""
    TAX_PREPARER = "TAX_PREPARER"
    AFFILIATE = "AFFILIATE"
    CLIENT = "CLIENT"
    OTHER = "OTHER"

    @classmethod
    def from_role(cls, role: Role) -> "ReferrerType":
        return _ROLE_TO_REFERRER.get(role, cls.OTHER)


_ROLE_TO_REFERRER = {
    Role.TAX_PREPARER: ReferrerType.TAX_PREPARER,
    Role.AFFILIATE: ReferrerType.AFFILIATE,
    Role.CLIENT: ReferrerType.CLIENT,
}


class AttributionMethod(str, Enum):
    REF_PARAM = "ref_param"
    COOKIE = "cookie"
    EMAIL_MATCH = "email_match"
    PHONE_MATCH = "phone_match"
    DIRECT = "direct"


# How sure each method is that the referrer really sent this visitor.
CONFIDENCE = {
    AttributionMethod.REF_PARAM: 100,
    AttributionMethod.COOKIE: 100,
    AttributionMethod.EMAIL_MATCH: 90,
    AttributionMethod.PHONE_MATCH: 85,
    AttributionMethod.DIRECT: 100,
}


@dataclass(frozen=True)
class ReferrerProfile:
    """The slice of a profile the attribution resolver needs."""
    profile_id: str
    role: Role
    user_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    tracking_code: Optional[str] = None
    custom_tracking_code: Optional[str] = None
    short_link_username: Optional[str] = None

    @property
    def display_name(self) -> Optional[str]:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or None


@dataclass(frozen=True)
class AttributionRecord:
    """Who gets credit for this request."""
    referrer_username: str
    referrer_type: ReferrerType
    referrer_profile_id: str
    method: AttributionMethod
    referrer_user_id: Optional[str] = None
    referrer_name: Optional[str] = None
    confidence: int = 100

    @classmethod
    def from_profile(
        cls,
        code: str,
        profile: ReferrerProfile,
        method: AttributionMethod,
    ) -> "AttributionRecord":
        return cls(
            referrer_username=code,
            referrer_type=ReferrerType.from_role(profile.role),
            referrer_profile_id=profile.profile_id,
            method=method,
            referrer_user_id=profile.user_id,
            referrer_name=profile.display_name,
            confidence=CONFIDENCE[method],
        )

    def to_dict(self) -> dict:
        return {
            "referrerUsername": self.referrer_username,
            "referrerType": self.referrer_type.value,
            "referrerProfileId": self.referrer_profile_id,
            "referrerName": self.referrer_name,
            "method": self.method.value,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class AttributionResult:
    """
    Result of resolving a request.

    success is always True; an unattributed visit has attribution None and
    method DIRECT.
    """
    attribution: Optional[AttributionRecord] = None
    method: AttributionMethod = AttributionMethod.DIRECT
    cookies: Tuple[CookieMutation, ...] = field(default_factory=tuple)
    success: bool = True

    @property
    def is_attributed(self) -> bool:
        return self.attribution is not None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "attribution": self.attribution.to_dict() if self.attribution else None,
            "method": self.method.value,
        }


@dataclass(frozen=True)
class VanityResolution:
    """Result of treating a path segment as a referral link."""
    found: bool
    attribution: Optional[AttributionRecord] = None
    cookies: Tuple[CookieMutation, ...] = field(default_factory=tuple)
