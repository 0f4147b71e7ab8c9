"""
Tax Genius Pro - Role-Based Access Control (RBAC)

Six roles with explicit per-role capability defaults and per-user overrides.

    ADMINISTRATION   super_admin, admin
    PROFESSIONALS    tax_preparer, affiliate
    CUSTOMERS        lead, client

Admins can preview the app as another role (viewing.py); the access gate
(gate.py) decides every page and API request against the effective role
and any admin-managed route restrictions (restrictions.py),
while protected operations (protected.py) always use the actual role.

Usage:
    from rbac import Role, Permission, check_access

    result = check_access(identity, [Role.ADMIN, Role.SUPER_ADMIN], Permission.PAYOUTS)
    if not result.allowed:
        return RedirectResponse(result.redirect_url)
"""

from .roles import (
    ADMIN_ROLES,
    ROLES,
    Role,
    RoleInfo,
    UnknownRoleError,
    get_dashboard_url,
    get_role_info,
    parse_role,
)
from .permissions import (
    DEFAULT_PERMISSIONS,
    PERMISSION_LABELS,
    PERMISSION_TO_ROUTE,
    SECTION_PERMISSIONS,
    Permission,
    PermissionSet,
    Section,
    default_permissions,
    get_editable_permissions,
    get_section_permissions,
    has_permission,
    resolve_effective_permissions,
)
from .identity import Identity, IdentityValidationError, parse_identity
from .viewing import (
    EffectiveRoleInfo,
    ViewingNotAllowedError,
    ViewingState,
    clear_viewing_state_cookie,
    decode_viewing_state,
    encode_viewing_state,
    get_viewable_roles,
    resolve_effective_role,
    start_viewing,
    viewing_state_cookie,
)
from .protected import (
    ProtectedOperation,
    ProtectedOperationDenied,
    authorize_protected_operation,
    require_protected_operation,
)
from .restrictions import (
    RestrictionReason,
    RestrictionResult,
    RouteRestriction,
    check_route_restrictions,
    evaluate_restriction,
    find_matching_restriction,
    match_route_pattern,
)
from .gate import AccessDecision, AccessResult, check_access

__all__ = [
    # Roles
    "ADMIN_ROLES",
    "ROLES",
    "Role",
    "RoleInfo",
    "UnknownRoleError",
    "get_dashboard_url",
    "get_role_info",
    "parse_role",

    # Permissions
    "DEFAULT_PERMISSIONS",
    "PERMISSION_LABELS",
    "PERMISSION_TO_ROUTE",
    "SECTION_PERMISSIONS",
    "Permission",
    "PermissionSet",
    "Section",
    "default_permissions",
    "get_editable_permissions",
    "get_section_permissions",
    "has_permission",
    "resolve_effective_permissions",

    # Identity
    "Identity",
    "IdentityValidationError",
    "parse_identity",

    # Viewing
    "EffectiveRoleInfo",
    "ViewingNotAllowedError",
    "ViewingState",
    "clear_viewing_state_cookie",
    "decode_viewing_state",
    "encode_viewing_state",
    "get_viewable_roles",
    "resolve_effective_role",
    "start_viewing",
    "viewing_state_cookie",

    # Protected operations
    "ProtectedOperation",
    "ProtectedOperationDenied",
    "authorize_protected_operation",
    "require_protected_operation",

    # Route restrictions
    "RestrictionReason",
    "RestrictionResult",
    "RouteRestriction",
    "check_route_restrictions",
    "evaluate_restriction",
    "find_matching_restriction",
    "match_route_pattern",

    # Gate
    "AccessDecision",
    "AccessResult",
    "check_access",
]
