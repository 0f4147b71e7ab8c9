"""
Tax Genius Pro - Role Definitions

Six account roles. Capabilities are explicit per role (see permissions.py);
there is no implied privilege ordering between them, except that super_admin
is a superset of admin.

    ADMINISTRATION
    ├── super_admin   - Full system control (database, permissions, all files)
    └── admin         - Limited administration (users, payouts, analytics)

    PROFESSIONALS
    ├── tax_preparer  - Independent preparer, sees only their own clients
    └── affiliate     - External marketer promoting the platform

    CUSTOMERS
    ├── lead          - New signup pending approval (no dashboard access)
    └── client        - Tax service customer, can refer others
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Set


class UnknownRoleError(ValueError):
    """Raised when a value outside the closed role set reaches the catalog."""


class Role(str, Enum):
    """
    All 6 roles in the system.

    Values match the stored profile role column (lower_snake_case).
    """

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    TAX_PREPARER = "tax_preparer"
    AFFILIATE = "affiliate"
    LEAD = "lead"
    CLIENT = "client"


@dataclass(frozen=True)
class RoleInfo:
    """Display metadata for a role."""
    role: Role
    name: str
    description: str
    dashboard_url: str
    is_admin: bool
    can_refer: bool  # Has a tracking code that earns attribution


# =============================================================================
# ROLE REGISTRY
# =============================================================================

ROLES: dict[Role, RoleInfo] = {
    Role.SUPER_ADMIN: RoleInfo(
        role=Role.SUPER_ADMIN,
        name="Super Admin",
        description="Full system control - Database, Permissions, All Client Files",
        dashboard_url="/dashboard/admin",
        is_admin=True,
        can_refer=False,
    ),
    Role.ADMIN: RoleInfo(
        role=Role.ADMIN,
        name="Admin",
        description="Limited admin access - User Management, Payouts, Analytics",
        dashboard_url="/dashboard/admin",
        is_admin=True,
        can_refer=False,
    ),
    Role.TAX_PREPARER: RoleInfo(
        role=Role.TAX_PREPARER,
        name="Tax Preparer",
        description="Independent tax professional - Manages their assigned clients only",
        dashboard_url="/dashboard/tax-preparer",
        is_admin=False,
        can_refer=True,
    ),
    Role.AFFILIATE: RoleInfo(
        role=Role.AFFILIATE,
        name="Affiliate",
        description="External professional marketer - Promotes TaxGeniusPro",
        dashboard_url="/dashboard/affiliate",
        is_admin=False,
        can_refer=True,
    ),
    Role.LEAD: RoleInfo(
        role=Role.LEAD,
        name="Lead",
        description="New signup pending approval - No access until role changed",
        dashboard_url="/dashboard/lead",
        is_admin=False,
        can_refer=False,
    ),
    Role.CLIENT: RoleInfo(
        role=Role.CLIENT,
        name="Client",
        description="Tax service customer - Upload documents, view status, refer clients",
        dashboard_url="/dashboard/client",
        is_admin=False,
        can_refer=True,
    ),
}


def _require_role(role: Any) -> Role:
    if not isinstance(role, Role):
        raise UnknownRoleError(f"Not a catalog role: {role!r}")
    return role


def get_role_info(role: Role) -> RoleInfo:
    """Get information about a role."""
    return ROLES[_require_role(role)]


def get_dashboard_url(role: Role) -> str:
    """Landing dashboard for a role."""
    return get_role_info(role).dashboard_url


def parse_role(value: Any) -> Role:
    """
    Convert loosely typed input into a Role.

    Accepts Role members and strings in any case with surrounding whitespace
    ("TAX_PREPARER", " client "). Anything else raises UnknownRoleError.
    """
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        raise UnknownRoleError(f"Role must be a string, got {type(value).__name__}")
    try:
        return Role(value.strip().lower())
    except ValueError:
        raise UnknownRoleError(f"Unknown role: {value!r}") from None


def get_admin_roles() -> Set[Role]:
    """Roles with administrative access."""
    return {role for role, info in ROLES.items() if info.is_admin}


def get_referrer_roles() -> Set[Role]:
    """Roles that carry a tracking code and can receive attribution."""
    return {role for role, info in ROLES.items() if info.can_refer}


# =============================================================================
# ROLE SETS (for quick checks)
# =============================================================================

ADMIN_ROLES = frozenset({
    Role.SUPER_ADMIN,
    Role.ADMIN,
})

PROFESSIONAL_ROLES = frozenset({
    Role.TAX_PREPARER,
    Role.AFFILIATE,
})

CUSTOMER_ROLES = frozenset({
    Role.LEAD,
    Role.CLIENT,
})
