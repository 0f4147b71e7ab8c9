"""
Tax Genius Pro - Route Restrictions

Admin-managed rules layered on top of the role and capability gate. A
restriction targets a route pattern, where "*" matches any run of
characters (including "/"):

    /admin/users          only /admin/users
    /admin/*              /admin/users, /admin/users/123
    /dashboard/*/settings /dashboard/client/settings

Only the highest-priority active restriction matching a route applies.
It is evaluated in this order, first match wins:

    1. username in blocked_usernames   -> deny  (blocked_username)
    2. username in allowed_usernames   -> allow (allowed_username)
    3. not signed in                   -> allow if allow_non_logged_in,
                                          else deny (not_authenticated)
    4. role in blocked_roles           -> deny  (blocked_role)
    5. allowed_roles empty             -> allow (authenticated)
    6. role in allowed_roles           -> allow (allowed_role)
    7. otherwise                       -> deny  (no_permission)

Usernames compare lowercased and trimmed.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .roles import Role, UnknownRoleError, parse_role

logger = logging.getLogger(__name__)


class RestrictionReason(str, Enum):
    NO_RESTRICTION = "no_restriction"
    BLOCKED_USERNAME = "blocked_username"
    ALLOWED_USERNAME = "allowed_username"
    PUBLIC_ACCESS = "public_access"
    NOT_AUTHENTICATED = "not_authenticated"
    BLOCKED_ROLE = "blocked_role"
    AUTHENTICATED = "authenticated"
    ALLOWED_ROLE = "allowed_role"
    NO_PERMISSION = "no_permission"


def normalize_username(username: str) -> str:
    return username.strip().lower()


def match_route_pattern(route: str, pattern: str) -> bool:
    """True when route matches pattern; "*" is the only wildcard."""
    if "*" not in pattern:
        return route == pattern
    regex = "^" + re.escape(pattern).replace(r"\*", ".*") + "$"
    return re.match(regex, route) is not None


class RouteRestriction(BaseModel):
    """A single restriction rule, as stored and as accepted by the admin API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    route_path: str = Field(
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("route_path", "routePath"),
    )
    allowed_roles: FrozenSet[Role] = Field(
        default_factory=frozenset,
        validation_alias=AliasChoices("allowed_roles", "allowedRoles"),
    )
    blocked_roles: FrozenSet[Role] = Field(
        default_factory=frozenset,
        validation_alias=AliasChoices("blocked_roles", "blockedRoles"),
    )
    allowed_usernames: FrozenSet[str] = Field(
        default_factory=frozenset,
        validation_alias=AliasChoices("allowed_usernames", "allowedUsernames"),
    )
    blocked_usernames: FrozenSet[str] = Field(
        default_factory=frozenset,
        validation_alias=AliasChoices("blocked_usernames", "blockedUsernames"),
    )
    allow_non_logged_in: bool = Field(
        default=False,
        validation_alias=AliasChoices("allow_non_logged_in", "allowNonLoggedIn"),
    )
    redirect_url: Optional[str] = Field(
        default=None,
        max_length=500,
        validation_alias=AliasChoices("redirect_url", "redirectUrl"),
    )
    priority: int = 0
    is_active: bool = Field(
        default=True,
        validation_alias=AliasChoices("is_active", "isActive"),
    )

    @field_validator("route_path")
    @classmethod
    def _check_route_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("route path must start with /")
        return value

    @field_validator("allowed_roles", "blocked_roles", mode="before")
    @classmethod
    def _parse_roles(cls, value: Any) -> FrozenSet[Role]:
        if value is None:
            return frozenset()
        roles = set()
        for raw in value:
            try:
                roles.add(parse_role(raw))
            except UnknownRoleError:
                logger.warning(f"Dropping unknown role {raw!r} from route restriction")
        return frozenset(roles)

    @field_validator("allowed_usernames", "blocked_usernames", mode="before")
    @classmethod
    def _normalize_usernames(cls, value: Any) -> FrozenSet[str]:
        if value is None:
            return frozenset()
        return frozenset(normalize_username(str(u)) for u in value if str(u).strip())

    def matches(self, route: str) -> bool:
        return match_route_pattern(route, self.route_path)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "routePath": self.route_path,
            "allowedRoles": sorted(r.value for r in self.allowed_roles),
            "blockedRoles": sorted(r.value for r in self.blocked_roles),
            "allowedUsernames": sorted(self.allowed_usernames),
            "blockedUsernames": sorted(self.blocked_usernames),
            "allowNonLoggedIn": self.allow_non_logged_in,
            "redirectUrl": self.redirect_url,
            "priority": self.priority,
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class RestrictionResult:
    """Outcome of evaluating the restriction that applies to a route."""
    allowed: bool
    reason: RestrictionReason
    redirect_url: Optional[str] = None
    restriction: Optional[RouteRestriction] = None


def find_matching_restriction(
    route: str,
    restrictions: Iterable[RouteRestriction],
) -> Optional[RouteRestriction]:
    """Highest-priority active restriction matching route; ties keep input order."""
    best: Optional[RouteRestriction] = None
    for restriction in restrictions:
        if not restriction.is_active or not restriction.matches(route):
            continue
        if best is None or restriction.priority > best.priority:
            best = restriction
    return best


def evaluate_restriction(
    restriction: RouteRestriction,
    role: Optional[Role],
    username: Optional[str] = None,
) -> RestrictionResult:
    """
    Apply one restriction to a visitor.

    Args:
        restriction: The rule that applies to the route
        role: The visitor's role, None when not signed in
        username: The visitor's username, if they have one
    """

    def deny(reason: RestrictionReason) -> RestrictionResult:
        return RestrictionResult(False, reason, restriction.redirect_url, restriction)

    def allow(reason: RestrictionReason) -> RestrictionResult:
        return RestrictionResult(True, reason, None, restriction)

    name = normalize_username(username) if username else None

    if name and name in restriction.blocked_usernames:
        return deny(RestrictionReason.BLOCKED_USERNAME)
    if name and name in restriction.allowed_usernames:
        return allow(RestrictionReason.ALLOWED_USERNAME)

    if role is None:
        if restriction.allow_non_logged_in:
            return allow(RestrictionReason.PUBLIC_ACCESS)
        return deny(RestrictionReason.NOT_AUTHENTICATED)

    if role in restriction.blocked_roles:
        return deny(RestrictionReason.BLOCKED_ROLE)
    if not restriction.allowed_roles:
        return allow(RestrictionReason.AUTHENTICATED)
    if role in restriction.allowed_roles:
        return allow(RestrictionReason.ALLOWED_ROLE)
    return deny(RestrictionReason.NO_PERMISSION)


def check_route_restrictions(
    route: str,
    restrictions: Iterable[RouteRestriction],
    role: Optional[Role],
    username: Optional[str] = None,
) -> RestrictionResult:
    """Evaluate the restriction that applies to route; no match allows."""
    restriction = find_matching_restriction(route, restrictions)
    if restriction is None:
        return RestrictionResult(True, RestrictionReason.NO_RESTRICTION)

    logger.debug(f"Route {route} matched restriction {restriction.route_path!r} (priority {restriction.priority})")
    return evaluate_restriction(restriction, role, username)
