"""
Tax Genius Pro - Access Gate

The per-route check combining identity, effective role and effective
permissions. Evaluated on every request; nothing is cached.

Permission policy:
    NORMAL   actual role defaults + the user's stored overrides
    VIEWING  previewed role defaults, no overrides

Admin-managed route restrictions (restrictions.py) are consulted last,
against the effective role. Username rules are skipped while previewing.

Protected operations are not decided here (see protected.py).
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Iterable, Optional
from urllib.parse import urlencode, urlsplit

from config.settings import Settings, get_settings

from .identity import Identity
from .permissions import Permission, PermissionSet, has_permission, resolve_effective_permissions
from .restrictions import RouteRestriction, check_route_restrictions
from .roles import Role
from .viewing import EffectiveRoleInfo, ViewingState, resolve_effective_role

logger = logging.getLogger(__name__)


class AccessDecision(str, Enum):
    ALLOW = "allow"
    REDIRECT_SIGNIN = "redirect_signin"
    REDIRECT_FORBIDDEN = "redirect_forbidden"


@dataclass(frozen=True)
class AccessResult:
    """Outcome of check_access."""
    decision: AccessDecision
    redirect_url: Optional[str] = None
    reason: Optional[str] = None
    role_info: Optional[EffectiveRoleInfo] = None
    permissions: Optional[PermissionSet] = None

    @property
    def allowed(self) -> bool:
        return self.decision == AccessDecision.ALLOW


def effective_permissions(identity: Identity, role_info: EffectiveRoleInfo) -> PermissionSet:
    """Permission set for the effective role of this request."""
    if role_info.is_viewing_as_other_role:
        return resolve_effective_permissions(role_info.effective_role)
    return resolve_effective_permissions(role_info.actual_role, identity.permission_overrides)


def signin_redirect_url(return_to: Optional[str] = None, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    if not return_to:
        return settings.signin_url
    return f"{settings.signin_url}?{urlencode({'callbackUrl': return_to})}"


def check_access(
    identity: Optional[Identity],
    required_roles: Iterable[Role] = (),
    required_capability: Optional[Permission] = None,
    viewing_state: Optional[ViewingState] = None,
    return_to: Optional[str] = None,
    settings: Optional[Settings] = None,
    restrictions: Iterable[RouteRestriction] = (),
) -> AccessResult:
    """
    Decide ALLOW / REDIRECT(signin) / REDIRECT(forbidden).

    Args:
        identity: Validated identity, None when unauthenticated
        required_roles: Effective role must be one of these (empty = any role)
        required_capability: Capability the effective permissions must grant
        viewing_state: Decoded viewing-state cookie, if any
        return_to: Path (and query) to come back to after sign-in
        restrictions: Active route restrictions, matched against return_to's path
    """
    settings = settings or get_settings()

    if identity is None:
        logger.debug(f"Access check without identity for {return_to or '<unknown>'}")
        return AccessResult(
            decision=AccessDecision.REDIRECT_SIGNIN,
            redirect_url=signin_redirect_url(return_to, settings),
            reason="not authenticated",
        )

    role_info = resolve_effective_role(
        identity,
        viewing_state,
        max_age=timedelta(seconds=settings.viewing_cookie_max_age),
    )
    permissions = effective_permissions(identity, role_info)

    required = frozenset(required_roles)
    reason = None
    redirect_url = None
    if required and role_info.effective_role not in required:
        reason = f"role {role_info.effective_role.value} not in {sorted(r.value for r in required)}"
    elif required_capability is not None and not has_permission(permissions, required_capability):
        reason = f"missing capability {required_capability.value}"
    elif return_to:
        username = None if role_info.is_viewing_as_other_role else identity.username
        restricted = check_route_restrictions(
            urlsplit(return_to).path,
            restrictions,
            role_info.effective_role,
            username,
        )
        if not restricted.allowed:
            reason = f"route restriction {restricted.restriction.route_path!r}: {restricted.reason.value}"
            redirect_url = restricted.redirect_url

    if reason is not None:
        logger.info(f"Access denied for user {identity.id} to {return_to or '<unknown>'}: {reason}")
        return AccessResult(
            decision=AccessDecision.REDIRECT_FORBIDDEN,
            redirect_url=redirect_url or settings.forbidden_url,
            reason=reason,
            role_info=role_info,
            permissions=permissions,
        )

    logger.debug(
        f"Access allowed for user {identity.id} as {role_info.effective_role.value} "
        f"to {return_to or '<unknown>'}"
    )
    return AccessResult(
        decision=AccessDecision.ALLOW,
        role_info=role_info,
        permissions=permissions,
    )
