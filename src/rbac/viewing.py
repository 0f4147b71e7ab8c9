"""
Tax Genius Pro - Role Viewing (Admin Preview)

Admins can preview the app as another role. The choice lives in a signed,
HTTP-only cookie and is revalidated against the actual role on every request:

    NORMAL   effective_role == actual_role
    VIEWING  effective_role == viewing_state.viewing_role

Any state that fails revalidation (tampered, expired, wrong admin, role not
viewable, actual role no longer admin) is ignored and the request runs as
NORMAL. Protected operations never look at the viewing role; see protected.py.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, FrozenSet, Optional

from config.settings import Settings, get_settings
from core.cookies import CookieMutation, delete_cookie, set_cookie

from .identity import Identity
from .jwt import TOKEN_TYPE_VIEWING, decode_token_safe, encode_claims
from .roles import Role, UnknownRoleError, get_role_info, parse_role

logger = logging.getLogger(__name__)


class ViewingNotAllowedError(PermissionError):
    """Raised when an identity asks to view a role it may not preview."""


# =============================================================================
# VIEWABLE ROLES
# =============================================================================

_ADMIN_VIEWABLE = frozenset({
    Role.LEAD,
    Role.TAX_PREPARER,
    Role.AFFILIATE,
    Role.CLIENT,
})

VIEWABLE_ROLES: Dict[Role, FrozenSet[Role]] = {
    Role.SUPER_ADMIN: _ADMIN_VIEWABLE | {Role.ADMIN},
    Role.ADMIN: _ADMIN_VIEWABLE,
}


def get_viewable_roles(actual_role: Role) -> FrozenSet[Role]:
    """Roles the given actual role may preview. Empty for non-admins."""
    get_role_info(actual_role)
    return VIEWABLE_ROLES.get(actual_role, frozenset())


# =============================================================================
# STATE
# =============================================================================

@dataclass(frozen=True)
class ViewingState:
    """Cookie-held preview choice of an admin."""
    viewing_role: Role
    admin_user_id: str
    timestamp: datetime


@dataclass(frozen=True)
class EffectiveRoleInfo:
    """Actual and effective role for the current request."""
    actual_role: Role
    effective_role: Role
    is_viewing_as_other_role: bool
    viewing_role_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "actualRole": self.actual_role.value,
            "effectiveRole": self.effective_role.value,
            "isViewingAsOtherRole": self.is_viewing_as_other_role,
            "viewingRoleName": self.viewing_role_name,
        }


def start_viewing(
    identity: Identity,
    target_role: Role,
    now: Optional[datetime] = None,
) -> Optional[ViewingState]:
    """
    Begin previewing target_role.

    Returns None when target_role is the identity's own role; the caller
    should clear the viewing cookie (revert to NORMAL).

    Raises:
        ViewingNotAllowedError: If the actual role cannot preview target_role.
    """
    get_role_info(target_role)
    actual_role = identity.role

    if target_role == actual_role:
        logger.info(f"[VIEW-AS] Reverted | user={identity.id} | role={actual_role.value}")
        return None

    if target_role not in get_viewable_roles(actual_role):
        logger.warning(
            f"[VIEW-AS] Denied | user={identity.id} | actual={actual_role.value} | "
            f"target={target_role.value}"
        )
        raise ViewingNotAllowedError(
            f"Role {actual_role.value} cannot view the app as {target_role.value}"
        )

    state = ViewingState(
        viewing_role=target_role,
        admin_user_id=identity.id,
        timestamp=now or datetime.now(timezone.utc),
    )
    logger.info(
        f"[VIEW-AS] Started | user={identity.id} | actual={actual_role.value} | "
        f"viewing={target_role.value}"
    )
    return state


def resolve_effective_role(
    identity: Identity,
    viewing_state: Optional[ViewingState] = None,
    max_age: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> EffectiveRoleInfo:
    """
    Compute the effective role for this request.

    Never raises for a bad viewing state; it is logged and ignored.
    """
    actual_role = identity.role
    normal = EffectiveRoleInfo(
        actual_role=actual_role,
        effective_role=actual_role,
        is_viewing_as_other_role=False,
    )

    if viewing_state is None:
        return normal

    viewable = get_viewable_roles(actual_role)
    if not viewable:
        logger.debug(f"Ignoring viewing state for non-admin user {identity.id} ({actual_role.value})")
        return normal

    if viewing_state.admin_user_id != identity.id:
        logger.debug(f"Ignoring viewing state issued to {viewing_state.admin_user_id} for user {identity.id}")
        return normal

    if viewing_state.viewing_role not in viewable:
        logger.debug(
            f"Ignoring viewing state: {actual_role.value} cannot view {viewing_state.viewing_role.value}"
        )
        return normal

    if max_age is not None:
        now = now or datetime.now(timezone.utc)
        if now - viewing_state.timestamp > max_age:
            logger.debug(f"Ignoring expired viewing state for user {identity.id}")
            return normal

    return EffectiveRoleInfo(
        actual_role=actual_role,
        effective_role=viewing_state.viewing_role,
        is_viewing_as_other_role=True,
        viewing_role_name=get_role_info(viewing_state.viewing_role).name,
    )


# =============================================================================
# COOKIE SERIALIZATION
# =============================================================================

def encode_viewing_state(state: ViewingState, settings: Optional[Settings] = None) -> str:
    """Sign a viewing state for the cookie; expires with the cookie."""
    settings = settings or get_settings()
    claims = {
        "viewingRole": state.viewing_role.value,
        "adminUserId": state.admin_user_id,
        "timestamp": int(state.timestamp.timestamp()),
    }
    return encode_claims(
        claims,
        TOKEN_TYPE_VIEWING,
        timedelta(seconds=settings.viewing_cookie_max_age),
        settings,
    )


def decode_viewing_state(token: Optional[str], settings: Optional[Settings] = None) -> Optional[ViewingState]:
    """
    Verify and parse a viewing-state cookie.

    Returns None for a missing, tampered, expired or malformed cookie.
    """
    payload = decode_token_safe(token, TOKEN_TYPE_VIEWING, settings)
    if payload is None:
        if token:
            logger.debug("Ignoring invalid or expired viewing-state cookie")
        return None

    admin_user_id = payload.get("adminUserId")
    timestamp = payload.get("timestamp")
    if not isinstance(admin_user_id, str) or not admin_user_id:
        logger.debug("Ignoring viewing-state cookie without admin user id")
        return None
    if not isinstance(timestamp, int):
        logger.debug("Ignoring viewing-state cookie without timestamp")
        return None

    try:
        viewing_role = parse_role(payload.get("viewingRole"))
    except UnknownRoleError:
        logger.debug(f"Ignoring viewing-state cookie for unknown role {payload.get('viewingRole')!r}")
        return None

    return ViewingState(
        viewing_role=viewing_role,
        admin_user_id=admin_user_id,
        timestamp=datetime.fromtimestamp(timestamp, tz=timezone.utc),
    )


def viewing_state_cookie(state: ViewingState, settings: Optional[Settings] = None) -> CookieMutation:
    settings = settings or get_settings()
    return set_cookie(
        settings.viewing_cookie_name,
        encode_viewing_state(state, settings),
        max_age=settings.viewing_cookie_max_age,
        secure=settings.cookie_secure,
    )


def clear_viewing_state_cookie(settings: Optional[Settings] = None) -> CookieMutation:
    settings = settings or get_settings()
    return delete_cookie(settings.viewing_cookie_name, secure=settings.cookie_secure)
