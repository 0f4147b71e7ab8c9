"""
Tax Genius Pro - Permission Definitions

Capabilities are named boolean feature flags, finer-grained than Role.
Every role has a default value for every capability; administrators can store
per-user overrides which are merged over the role defaults.

Categories:
    - Feature toggles: whole dashboard features (calendar, academy, ...)
    - Micro-toggles: individual actions inside a feature (calendar_delete, ...)
    - Sections: navigation groups used by the permission manager UI
"""

import logging
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from .roles import Role, get_role_info

logger = logging.getLogger(__name__)


class Permission(str, Enum):
    """
    All capabilities in the system.

    Values are the keys stored in a user's permission overrides.
    """

    # =========================================================================
    # FEATURE TOGGLES
    # =========================================================================

    DASHBOARD = "dashboard"
    USERS = "users"
    PAYOUTS = "payouts"
    CONTENT_GENERATOR = "contentGenerator"
    DATABASE = "database"
    ANALYTICS = "analytics"
    ADMIN_MANAGEMENT = "adminManagement"
    CLIENTS = "clients"
    DOCUMENTS = "documents"
    STORE = "store"
    ACADEMY = "academy"
    EARNINGS = "earnings"
    SETTINGS = "settings"
    MARKETING = "marketing"
    UPLOAD_DOCUMENTS = "uploadDocuments"
    CONTEST = "contest"
    TRACKING_CODE = "trackingCode"
    CLIENTS_STATUS = "clientsStatus"
    REFERRALS_STATUS = "referralsStatus"
    EMAILS = "emails"
    CALENDAR = "calendar"
    ADDRESS_BOOK = "addressBook"
    CLIENT_FILE_CENTER = "clientFileCenter"
    TAX_FORMS = "taxForms"
    MARKETING_ASSETS = "marketingAssets"
    GOOGLE_ANALYTICS = "googleAnalytics"
    REFERRALS_ANALYTICS = "referralsAnalytics"
    LEARNING_CENTER = "learningCenter"
    MARKETING_HUB = "marketingHub"
    QUICK_SHARE_LINKS = "quickShareLinks"
    ALERTS = "alerts"
    ROUTE_ACCESS_CONTROL = "routeAccessControl"

    # =========================================================================
    # MICRO-TOGGLES
    # =========================================================================

    # Calendar & Appointments
    CALENDAR_VIEW = "calendar_view"
    CALENDAR_CREATE = "calendar_create"
    CALENDAR_EDIT = "calendar_edit"
    CALENDAR_DELETE = "calendar_delete"

    # CRM Contacts
    CONTACTS_VIEW = "contacts_view"
    CONTACTS_CREATE = "contacts_create"
    CONTACTS_EDIT = "contacts_edit"
    CONTACTS_DELETE = "contacts_delete"
    CONTACTS_EXPORT = "contacts_export"

    # Client File Center
    FILES_VIEW = "files_view"
    FILES_UPLOAD = "files_upload"
    FILES_DOWNLOAD = "files_download"
    FILES_DELETE = "files_delete"
    FILES_SHARE = "files_share"

    # Academy
    ACADEMY_VIEW = "academy_view"
    ACADEMY_ENROLL = "academy_enroll"
    ACADEMY_COMPLETE = "academy_complete"

    # IRS Forms
    TAXFORMS_VIEW = "taxforms_view"
    TAXFORMS_DOWNLOAD = "taxforms_download"
    TAXFORMS_ASSIGN = "taxforms_assign"
    TAXFORMS_UPLOAD = "taxforms_upload"

    # Analytics
    ANALYTICS_VIEW = "analytics_view"
    ANALYTICS_EXPORT = "analytics_export"
    ANALYTICS_DETAILED = "analytics_detailed"

    # Tracking Code
    TRACKING_VIEW = "tracking_view"
    TRACKING_EDIT = "tracking_edit"
    TRACKING_ANALYTICS = "tracking_analytics"

    # Store
    STORE_VIEW = "store_view"
    STORE_PURCHASE = "store_purchase"
    STORE_CART = "store_cart"

    # Marketing Assets
    MARKETING_VIEW = "marketing_view"
    MARKETING_UPLOAD = "marketing_upload"
    MARKETING_DOWNLOAD = "marketing_download"
    MARKETING_DELETE = "marketing_delete"


# A total mapping from every Permission to a bool.
PermissionSet = Dict[Permission, bool]

_BY_VALUE: Dict[str, Permission] = {p.value: p for p in Permission}

# Micro-toggle groups, reused by the role grants and sections below
CALENDAR_TOGGLES = frozenset({
    Permission.CALENDAR_VIEW, Permission.CALENDAR_CREATE,
    Permission.CALENDAR_EDIT, Permission.CALENDAR_DELETE,
})
CONTACTS_TOGGLES = frozenset({
    Permission.CONTACTS_VIEW, Permission.CONTACTS_CREATE, Permission.CONTACTS_EDIT,
    Permission.CONTACTS_DELETE, Permission.CONTACTS_EXPORT,
})
FILES_TOGGLES = frozenset({
    Permission.FILES_VIEW, Permission.FILES_UPLOAD, Permission.FILES_DOWNLOAD,
    Permission.FILES_DELETE, Permission.FILES_SHARE,
})
ACADEMY_TOGGLES = frozenset({
    Permission.ACADEMY_VIEW, Permission.ACADEMY_ENROLL, Permission.ACADEMY_COMPLETE,
})
TAXFORMS_TOGGLES = frozenset({
    Permission.TAXFORMS_VIEW, Permission.TAXFORMS_DOWNLOAD,
    Permission.TAXFORMS_ASSIGN, Permission.TAXFORMS_UPLOAD,
})
ANALYTICS_TOGGLES = frozenset({
    Permission.ANALYTICS_VIEW, Permission.ANALYTICS_EXPORT, Permission.ANALYTICS_DETAILED,
})
TRACKING_TOGGLES = frozenset({
    Permission.TRACKING_VIEW, Permission.TRACKING_EDIT, Permission.TRACKING_ANALYTICS,
})
STORE_TOGGLES = frozenset({
    Permission.STORE_VIEW, Permission.STORE_PURCHASE, Permission.STORE_CART,
})
MARKETING_TOGGLES = frozenset({
    Permission.MARKETING_VIEW, Permission.MARKETING_UPLOAD,
    Permission.MARKETING_DOWNLOAD, Permission.MARKETING_DELETE,
})

MICRO_TOGGLES = (
    CALENDAR_TOGGLES | CONTACTS_TOGGLES | FILES_TOGGLES | ACADEMY_TOGGLES
    | TAXFORMS_TOGGLES | ANALYTICS_TOGGLES | TRACKING_TOGGLES | STORE_TOGGLES
    | MARKETING_TOGGLES
)


# =============================================================================
# ROLE -> GRANTED CAPABILITIES
# =============================================================================
# Anything not listed for a role defaults to False.

ROLE_GRANTS: dict[Role, FrozenSet[Permission]] = {
    # -------------------------------------------------------------------------
    # SUPER_ADMIN: Everything except the personal earnings/learning/share pages
    # -------------------------------------------------------------------------
    Role.SUPER_ADMIN: frozenset(Permission) - {
        Permission.EARNINGS,
        Permission.LEARNING_CENTER,
        Permission.QUICK_SHARE_LINKS,
    },

    # -------------------------------------------------------------------------
    # ADMIN: No permission management, database, GA, alerts or client lists.
    # Destructive micro-toggles are off to prevent accidental deletion.
    # -------------------------------------------------------------------------
    Role.ADMIN: frozenset({
        Permission.DASHBOARD,
        Permission.USERS,
        Permission.PAYOUTS,
        Permission.CONTENT_GENERATOR,
        Permission.ANALYTICS,
        Permission.SETTINGS,
        Permission.TRACKING_CODE,
        Permission.CLIENTS_STATUS,
        Permission.CLIENT_FILE_CENTER,
        Permission.TAX_FORMS,
        Permission.EMAILS,
        Permission.CALENDAR,
        Permission.ADDRESS_BOOK,
        Permission.REFERRALS_ANALYTICS,
        Permission.REFERRALS_STATUS,
        Permission.ACADEMY,
        Permission.MARKETING_HUB,
        Permission.MARKETING,
        Permission.MARKETING_ASSETS,
        Permission.STORE,
    }) | CALENDAR_TOGGLES | ACADEMY_TOGGLES | ANALYTICS_TOGGLES | STORE_TOGGLES | (
        CONTACTS_TOGGLES - {Permission.CONTACTS_DELETE}
    ) | (
        FILES_TOGGLES - {Permission.FILES_DELETE}
    ) | (
        TAXFORMS_TOGGLES - {Permission.TAXFORMS_UPLOAD}
    ) | (
        TRACKING_TOGGLES - {Permission.TRACKING_EDIT}
    ) | (
        MARKETING_TOGGLES - {Permission.MARKETING_DELETE}
    ),

    # -------------------------------------------------------------------------
    # TAX_PREPARER: Their own clients, documents and tracking code.
    # Full micro-toggle access, scoped to their clients by the data layer.
    # -------------------------------------------------------------------------
    Role.TAX_PREPARER: frozenset({
        Permission.DASHBOARD,
        Permission.CLIENTS,
        Permission.DOCUMENTS,
        Permission.CLIENT_FILE_CENTER,
        Permission.TAX_FORMS,
        Permission.ADDRESS_BOOK,
        Permission.CALENDAR,
        Permission.STORE,
        Permission.ACADEMY,
        Permission.ANALYTICS,
        Permission.TRACKING_CODE,
        Permission.MARKETING,
        Permission.MARKETING_ASSETS,
    }) | MICRO_TOGGLES,

    # -------------------------------------------------------------------------
    # AFFILIATE: Marketing, store and conversion tracking. No client data.
    # -------------------------------------------------------------------------
    Role.AFFILIATE: frozenset({
        Permission.DASHBOARD,
        Permission.STORE,
        Permission.MARKETING,
        Permission.ANALYTICS,
        Permission.TRACKING_CODE,
        Permission.MARKETING_ASSETS,
        Permission.MARKETING_VIEW,
        Permission.MARKETING_DOWNLOAD,
    }) | ANALYTICS_TOGGLES | TRACKING_TOGGLES | STORE_TOGGLES,

    # -------------------------------------------------------------------------
    # LEAD: Pending approval page only.
    # -------------------------------------------------------------------------
    Role.LEAD: frozenset(),

    # -------------------------------------------------------------------------
    # CLIENT: Upload documents and refer others.
    # -------------------------------------------------------------------------
    Role.CLIENT: frozenset({
        Permission.DASHBOARD,
        Permission.UPLOAD_DOCUMENTS,
        Permission.ANALYTICS,
        Permission.TRACKING_CODE,
        Permission.MARKETING,
        Permission.FILES_VIEW,
        Permission.FILES_UPLOAD,
        Permission.FILES_DOWNLOAD,
        Permission.MARKETING_VIEW,
        Permission.MARKETING_DOWNLOAD,
    }) | ANALYTICS_TOGGLES | TRACKING_TOGGLES,
}


def _build_defaults(granted: FrozenSet[Permission]) -> PermissionSet:
    return {permission: permission in granted for permission in Permission}


DEFAULT_PERMISSIONS: dict[Role, PermissionSet] = {
    role: _build_defaults(granted) for role, granted in ROLE_GRANTS.items()
}


# =============================================================================
# RESOLUTION
# =============================================================================

def coerce_permission(key: Any) -> Optional[Permission]:
    """Map a Permission or its stored string key to a Permission, else None."""
    if isinstance(key, Permission):
        return key
    if isinstance(key, str):
        return _BY_VALUE.get(key)
    return None


def default_permissions(role: Role) -> PermissionSet:
    """
    Get the default capability set for a role.

    Returns a fresh dict; callers may mutate it.

    Raises:
        UnknownRoleError: If role is not a Role member.
    """
    get_role_info(role)
    return dict(DEFAULT_PERMISSIONS[role])


def resolve_effective_permissions(
    role: Role,
    overrides: Optional[Mapping[Any, Any]] = None,
) -> PermissionSet:
    """
    Merge per-user overrides over the role defaults.

    Shallow merge: each override replaces the default for its key, so an
    override can grant or revoke. Keys that are not capabilities, and values
    that are not booleans, are skipped.
    """
    permissions = default_permissions(role)
    if not overrides:
        return permissions

    for key, value in overrides.items():
        permission = coerce_permission(key)
        if permission is None:
            logger.debug(f"Ignoring unknown permission override {key!r} for role {role.value}")
            continue
        if not isinstance(value, bool):
            logger.debug(f"Ignoring non-boolean override {permission.value}={value!r}")
            continue
        permissions[permission] = value

    return permissions


def has_permission(permissions: Mapping[Permission, bool], permission: Permission) -> bool:
    """Check if a resolved permission set grants a capability."""
    return permissions.get(permission) is True


def granted(permissions: Mapping[Permission, bool]) -> FrozenSet[Permission]:
    """The capabilities set to True."""
    return frozenset(p for p, allowed in permissions.items() if allowed is True)


def to_wire(permissions: Mapping[Permission, bool]) -> Dict[str, bool]:
    """Serialize a permission set with its stored string keys."""
    return {permission.value: bool(allowed) for permission, allowed in permissions.items()}


# =============================================================================
# EDITABLE PERMISSIONS (permission manager)
# =============================================================================

_EDITABLE: dict[Role, FrozenSet[Permission]] = {
    Role.SUPER_ADMIN: frozenset(Permission),
    Role.ADMIN: frozenset({
        Permission.DASHBOARD,
        Permission.USERS,
        Permission.PAYOUTS,
        Permission.CONTENT_GENERATOR,
        Permission.ANALYTICS,
        Permission.ADMIN_MANAGEMENT,
        Permission.DATABASE,
        Permission.SETTINGS,
        Permission.TRACKING_CODE,
        Permission.CLIENTS_STATUS,
        Permission.REFERRALS_STATUS,
        Permission.EMAILS,
        Permission.CALENDAR,
        Permission.ADDRESS_BOOK,
        Permission.CLIENT_FILE_CENTER,
        Permission.TAX_FORMS,
        Permission.GOOGLE_ANALYTICS,
        Permission.REFERRALS_ANALYTICS,
        Permission.MARKETING_HUB,
        Permission.MARKETING,
        Permission.MARKETING_ASSETS,
        Permission.ACADEMY,
        Permission.STORE,
    }) | MICRO_TOGGLES,
    Role.TAX_PREPARER: ROLE_GRANTS[Role.TAX_PREPARER],
    Role.AFFILIATE: frozenset({
        Permission.DASHBOARD,
        Permission.STORE,
        Permission.MARKETING,
        Permission.MARKETING_ASSETS,
        Permission.ANALYTICS,
        Permission.TRACKING_CODE,
    }) | ANALYTICS_TOGGLES | TRACKING_TOGGLES | STORE_TOGGLES | MARKETING_TOGGLES,
    Role.LEAD: frozenset(),
    Role.CLIENT: frozenset({
        Permission.DASHBOARD,
        Permission.UPLOAD_DOCUMENTS,
        Permission.ANALYTICS,
        Permission.TRACKING_CODE,
        Permission.MARKETING,
    }) | FILES_TOGGLES | ANALYTICS_TOGGLES | TRACKING_TOGGLES | MARKETING_TOGGLES,
}


def get_editable_permissions(role: Role) -> FrozenSet[Permission]:
    """
    Capabilities an administrator may toggle for a user of this role.

    Leads have none until their role is changed.
    """
    get_role_info(role)
    return _EDITABLE[role]


# =============================================================================
# SECTIONS, LABELS AND ROUTES
# =============================================================================

class Section(str, Enum):
    """Navigation sections grouping capabilities."""
    GENERAL = "section_general"
    CLIENT_MANAGEMENT = "section_client_management"
    COMMUNICATIONS = "section_communications"
    ANALYTICS = "section_analytics"
    GROWTH_MARKETING = "section_growth_marketing"
    CONTENT_LEARNING = "section_content_learning"
    MARKETING_MATERIALS = "section_marketing_materials"
    FINANCIAL = "section_financial"
    SYSTEM_ADMIN = "section_system_admin"


SECTION_NAMES: dict[Section, str] = {
    Section.GENERAL: "General",
    Section.CLIENT_MANAGEMENT: "Client Management",
    Section.COMMUNICATIONS: "Communications",
    Section.ANALYTICS: "Analytics & Reporting",
    Section.GROWTH_MARKETING: "Growth & Marketing",
    Section.CONTENT_LEARNING: "Content & Learning",
    Section.MARKETING_MATERIALS: "Marketing Materials",
    Section.FINANCIAL: "Financial",
    Section.SYSTEM_ADMIN: "System Administration",
}

SECTION_PERMISSIONS: dict[Section, List[Permission]] = {
    Section.GENERAL: [Permission.DASHBOARD, Permission.ALERTS],
    Section.CLIENT_MANAGEMENT: [
        Permission.CLIENTS_STATUS,
        Permission.CLIENTS,
        Permission.CLIENT_FILE_CENTER,
        *sorted(FILES_TOGGLES, key=lambda p: p.value),
        Permission.TAX_FORMS,
        *sorted(TAXFORMS_TOGGLES, key=lambda p: p.value),
        Permission.DOCUMENTS,
        Permission.UPLOAD_DOCUMENTS,
    ],
    Section.COMMUNICATIONS: [
        Permission.EMAILS,
        Permission.CALENDAR,
        *sorted(CALENDAR_TOGGLES, key=lambda p: p.value),
        Permission.ADDRESS_BOOK,
        *sorted(CONTACTS_TOGGLES, key=lambda p: p.value),
    ],
    Section.ANALYTICS: [
        Permission.ANALYTICS,
        *sorted(ANALYTICS_TOGGLES, key=lambda p: p.value),
        Permission.GOOGLE_ANALYTICS,
        Permission.REFERRALS_ANALYTICS,
        Permission.TRACKING_CODE,
        *sorted(TRACKING_TOGGLES, key=lambda p: p.value),
    ],
    Section.GROWTH_MARKETING: [
        Permission.REFERRALS_STATUS,
        Permission.CONTEST,
        Permission.QUICK_SHARE_LINKS,
    ],
    Section.CONTENT_LEARNING: [
        Permission.LEARNING_CENTER,
        Permission.ACADEMY,
        *sorted(ACADEMY_TOGGLES, key=lambda p: p.value),
    ],
    Section.MARKETING_MATERIALS: [
        Permission.MARKETING_HUB,
        Permission.MARKETING,
        Permission.MARKETING_ASSETS,
        *sorted(MARKETING_TOGGLES, key=lambda p: p.value),
        Permission.CONTENT_GENERATOR,
        Permission.STORE,
        *sorted(STORE_TOGGLES, key=lambda p: p.value),
    ],
    Section.FINANCIAL: [Permission.PAYOUTS, Permission.EARNINGS],
    Section.SYSTEM_ADMIN: [
        Permission.USERS,
        Permission.ADMIN_MANAGEMENT,
        Permission.DATABASE,
        Permission.SETTINGS,
        Permission.ROUTE_ACCESS_CONTROL,
    ],
}


def get_section_permissions(section: Section) -> List[Permission]:
    """Capabilities shown under a navigation section."""
    return list(SECTION_PERMISSIONS[section])


PERMISSION_LABELS: dict[Permission, str] = {
    Permission.DASHBOARD: "Dashboard",
    Permission.ALERTS: "Phone Alerts & Notifications",
    Permission.USERS: "User Management",
    Permission.PAYOUTS: "Payouts",
    Permission.CONTENT_GENERATOR: "Content Generator",
    Permission.DATABASE: "Database",
    Permission.ANALYTICS: "Analytics",
    Permission.ADMIN_MANAGEMENT: "Admin Management",
    Permission.CLIENTS: "Client List",
    Permission.DOCUMENTS: "Documents",
    Permission.STORE: "Store",
    Permission.ACADEMY: "Academy",
    Permission.EARNINGS: "Earnings",
    Permission.SETTINGS: "Settings",
    Permission.MARKETING: "Marketing Tools",
    Permission.UPLOAD_DOCUMENTS: "Upload Documents",
    Permission.CONTEST: "Contest",
    Permission.TRACKING_CODE: "My Tracking Code",
    Permission.CLIENTS_STATUS: "Clients Status",
    Permission.REFERRALS_STATUS: "Referrals Status",
    Permission.EMAILS: "Emails",
    Permission.CALENDAR: "Calendar & Appointments",
    Permission.ADDRESS_BOOK: "CRM Contacts",
    Permission.CLIENT_FILE_CENTER: "Client File Center",
    Permission.TAX_FORMS: "IRS Forms Library",
    Permission.MARKETING_ASSETS: "Marketing Assets",
    Permission.GOOGLE_ANALYTICS: "Google Analytics",
    Permission.REFERRALS_ANALYTICS: "Referrals Analytics",
    Permission.LEARNING_CENTER: "Learning Center",
    Permission.MARKETING_HUB: "Marketing Hub",
    Permission.QUICK_SHARE_LINKS: "Quick Share Links",
    Permission.ROUTE_ACCESS_CONTROL: "Route Access Control",
    Permission.CALENDAR_VIEW: "Calendar: View Appointments",
    Permission.CALENDAR_CREATE: "Calendar: Create Appointments",
    Permission.CALENDAR_EDIT: "Calendar: Edit Appointments",
    Permission.CALENDAR_DELETE: "Calendar: Delete Appointments",
    Permission.CONTACTS_VIEW: "Contacts: View Contact List",
    Permission.CONTACTS_CREATE: "Contacts: Create New Contacts",
    Permission.CONTACTS_EDIT: "Contacts: Edit Contact Info",
    Permission.CONTACTS_DELETE: "Contacts: Delete Contacts",
    Permission.CONTACTS_EXPORT: "Contacts: Export Contact Data",
    Permission.FILES_VIEW: "Files: View & Browse Files",
    Permission.FILES_UPLOAD: "Files: Upload New Files",
    Permission.FILES_DOWNLOAD: "Files: Download Files",
    Permission.FILES_DELETE: "Files: Delete Files",
    Permission.FILES_SHARE: "Files: Generate Share Links",
    Permission.ACADEMY_VIEW: "Academy: View Course Catalog",
    Permission.ACADEMY_ENROLL: "Academy: Enroll in Courses",
    Permission.ACADEMY_COMPLETE: "Academy: Complete Courses",
    Permission.TAXFORMS_VIEW: "Tax Forms: View Forms Library",
    Permission.TAXFORMS_DOWNLOAD: "Tax Forms: Download Forms",
    Permission.TAXFORMS_ASSIGN: "Tax Forms: Assign to Clients",
    Permission.TAXFORMS_UPLOAD: "Tax Forms: Upload Custom Forms",
    Permission.ANALYTICS_VIEW: "Analytics: View Dashboard",
    Permission.ANALYTICS_EXPORT: "Analytics: Export Data",
    Permission.ANALYTICS_DETAILED: "Analytics: Detailed Reports",
    Permission.TRACKING_VIEW: "Tracking: View Tracking Code",
    Permission.TRACKING_EDIT: "Tracking: Edit/Customize Code",
    Permission.TRACKING_ANALYTICS: "Tracking: View Performance",
    Permission.STORE_VIEW: "Store: Browse Products",
    Permission.STORE_PURCHASE: "Store: Make Purchases",
    Permission.STORE_CART: "Store: Manage Shopping Cart",
    Permission.MARKETING_VIEW: "Marketing: View Assets Library",
    Permission.MARKETING_UPLOAD: "Marketing: Upload New Assets",
    Permission.MARKETING_DOWNLOAD: "Marketing: Download Assets",
    Permission.MARKETING_DELETE: "Marketing: Delete Assets",
}

# Feature toggles map to the page they unlock; "*" is any role segment.
PERMISSION_TO_ROUTE: dict[Permission, str] = {
    Permission.DASHBOARD: "/dashboard",
    Permission.USERS: "/admin/users",
    Permission.PAYOUTS: "/admin/payouts",
    Permission.CONTENT_GENERATOR: "/admin/content-generator",
    Permission.DATABASE: "/admin/database",
    Permission.ANALYTICS: "/admin/analytics",
    Permission.ADMIN_MANAGEMENT: "/admin/permissions",
    Permission.CLIENTS: "/dashboard/tax-preparer/clients",
    Permission.DOCUMENTS: "/dashboard/tax-preparer/documents",
    Permission.STORE: "/store",
    Permission.ACADEMY: "/app/academy",
    Permission.EARNINGS: "/dashboard/*/earnings",
    Permission.SETTINGS: "/dashboard/*/settings",
    Permission.MARKETING: "/dashboard/*/marketing",
    Permission.UPLOAD_DOCUMENTS: "/upload-documents",
    Permission.CONTEST: "/dashboard/contest",
    Permission.TRACKING_CODE: "/dashboard/*/tracking",
    Permission.ALERTS: "/admin/alerts",
    Permission.CLIENTS_STATUS: "/admin/clients-status",
    Permission.REFERRALS_STATUS: "/admin/referrals-status",
    Permission.EMAILS: "/admin/emails",
    Permission.CALENDAR: "/admin/calendar",
    Permission.ADDRESS_BOOK: "/admin/address-book",
    Permission.CLIENT_FILE_CENTER: "/admin/file-center",
    Permission.GOOGLE_ANALYTICS: "/admin/analytics/google",
    Permission.REFERRALS_ANALYTICS: "/admin/analytics/referrals",
    Permission.LEARNING_CENTER: "/admin/learning-center",
    Permission.MARKETING_HUB: "/admin/marketing-hub",
    Permission.QUICK_SHARE_LINKS: "/admin/quick-share",
    Permission.ROUTE_ACCESS_CONTROL: "/admin/route-access-control",
}
