"""
RBAC Permission System Tests

Role defaults, override merging, editable permissions and the section
and label catalogs used by the permission manager.
"""

import pytest

from rbac.permissions import (
    DEFAULT_PERMISSIONS,
    MICRO_TOGGLES,
    PERMISSION_LABELS,
    PERMISSION_TO_ROUTE,
    SECTION_NAMES,
    SECTION_PERMISSIONS,
    Permission,
    Section,
    default_permissions,
    get_editable_permissions,
    get_section_permissions,
    granted,
    has_permission,
    resolve_effective_permissions,
    to_wire,
)
from rbac.roles import Role, UnknownRoleError


# =============================================================================
# ROLE DEFAULTS
# =============================================================================

class TestDefaultPermissions:
    """Every role has a value for every capability."""

    @pytest.mark.parametrize("role", list(Role))
    def test_defaults_are_total(self, role):
        defaults = default_permissions(role)
        assert set(defaults) == set(Permission)
        assert all(isinstance(v, bool) for v in defaults.values())

    def test_defaults_are_fresh_copies(self):
        first = default_permissions(Role.CLIENT)
        first[Permission.DATABASE] = True
        assert default_permissions(Role.CLIENT)[Permission.DATABASE] is False
        assert DEFAULT_PERMISSIONS[Role.CLIENT][Permission.DATABASE] is False

    def test_unknown_role_fails_fast(self):
        with pytest.raises(UnknownRoleError):
            default_permissions("tax_preparer")

    def test_lead_has_nothing(self):
        assert granted(default_permissions(Role.LEAD)) == frozenset()

    def test_super_admin_is_superset_of_admin(self):
        assert granted(default_permissions(Role.ADMIN)) <= granted(default_permissions(Role.SUPER_ADMIN))

    def test_super_admin_system_capabilities(self):
        perms = default_permissions(Role.SUPER_ADMIN)
        for p in (Permission.DATABASE, Permission.ADMIN_MANAGEMENT, Permission.ROUTE_ACCESS_CONTROL):
            assert perms[p] is True
        assert perms[Permission.EARNINGS] is False

    def test_admin_cannot_manage_permissions_or_database(self):
        perms = default_permissions(Role.ADMIN)
        assert perms[Permission.ADMIN_MANAGEMENT] is False
        assert perms[Permission.DATABASE] is False
        assert perms[Permission.USERS] is True
        assert perms[Permission.PAYOUTS] is True

    def test_admin_destructive_micro_toggles_off(self):
        perms = default_permissions(Role.ADMIN)
        assert perms[Permission.CALENDAR_DELETE] is True
        assert perms[Permission.CONTACTS_DELETE] is False
        assert perms[Permission.FILES_DELETE] is False
        assert perms[Permission.MARKETING_DELETE] is False

    def test_tax_preparer_defaults(self):
        perms = default_permissions(Role.TAX_PREPARER)
        assert perms[Permission.CALENDAR] is True
        assert perms[Permission.CLIENTS] is True
        assert perms[Permission.CLIENT_FILE_CENTER] is True
        assert perms[Permission.USERS] is False
        assert all(perms[p] for p in MICRO_TOGGLES)

    def test_affiliate_has_no_client_data(self):
        perms = default_permissions(Role.AFFILIATE)
        assert perms[Permission.CLIENTS] is False
        assert perms[Permission.CLIENT_FILE_CENTER] is False
        assert perms[Permission.TRACKING_CODE] is True

    def test_client_can_upload_and_refer(self):
        perms = default_permissions(Role.CLIENT)
        assert perms[Permission.UPLOAD_DOCUMENTS] is True
        assert perms[Permission.TRACKING_CODE] is True
        assert perms[Permission.FILES_DELETE] is False


# =============================================================================
# OVERRIDES
# =============================================================================

class TestResolveEffectivePermissions:
    """Shallow merge of overrides over role defaults."""

    def test_no_overrides_equals_defaults(self):
        for role in Role:
            assert resolve_effective_permissions(role) == default_permissions(role)
            assert resolve_effective_permissions(role, {}) == default_permissions(role)

    def test_override_revokes_default(self):
        """Preparer with calendar turned off."""
        perms = resolve_effective_permissions(Role.TAX_PREPARER, {"calendar": False})
        assert perms[Permission.CALENDAR] is False

    def test_override_grants_beyond_default(self):
        perms = resolve_effective_permissions(Role.CLIENT, {Permission.ACADEMY: True})
        assert perms[Permission.ACADEMY] is True

    def test_only_mentioned_keys_change(self):
        overrides = {"calendar": False, "store": False, "payouts": True}
        defaults = default_permissions(Role.TAX_PREPARER)
        perms = resolve_effective_permissions(Role.TAX_PREPARER, overrides)

        changed = {p for p in Permission if perms[p] != defaults[p]}
        assert changed <= {Permission.CALENDAR, Permission.STORE, Permission.PAYOUTS}
        assert perms[Permission.PAYOUTS] is True
        assert set(perms) == set(Permission)

    def test_applying_twice_is_idempotent(self):
        overrides = {"calendar": False, "academy": True}
        once = resolve_effective_permissions(Role.AFFILIATE, overrides)
        assert resolve_effective_permissions(Role.AFFILIATE, overrides) == once
        assert resolve_effective_permissions(Role.AFFILIATE, to_wire(once)) == once

    def test_unknown_keys_are_ignored(self):
        perms = resolve_effective_permissions(Role.CLIENT, {"teleport": True, "databaseManagement": True})
        assert perms == default_permissions(Role.CLIENT)

    def test_non_boolean_values_are_ignored(self):
        perms = resolve_effective_permissions(Role.CLIENT, {"store": "yes", "academy": 1})
        assert perms[Permission.STORE] is False
        assert perms[Permission.ACADEMY] is False

    def test_unknown_role_fails_fast(self):
        with pytest.raises(UnknownRoleError):
            resolve_effective_permissions("client", {"store": True})


class TestHelpers:

    def test_has_permission(self):
        perms = default_permissions(Role.ADMIN)
        assert has_permission(perms, Permission.USERS)
        assert not has_permission(perms, Permission.DATABASE)
        assert not has_permission({}, Permission.USERS)

    def test_to_wire_uses_stored_keys(self):
        wire = to_wire(default_permissions(Role.TAX_PREPARER))
        assert wire["clientFileCenter"] is True
        assert wire["calendar_delete"] is True
        assert len(wire) == len(Permission)


# =============================================================================
# PERMISSION MANAGER CATALOGS
# =============================================================================

class TestEditablePermissions:

    def test_lead_has_no_editable_permissions(self):
        assert get_editable_permissions(Role.LEAD) == frozenset()

    def test_super_admin_can_edit_everything(self):
        assert get_editable_permissions(Role.SUPER_ADMIN) == frozenset(Permission)

    def test_admin_editable_includes_gated_features(self):
        editable = get_editable_permissions(Role.ADMIN)
        assert Permission.ADMIN_MANAGEMENT in editable
        assert Permission.DATABASE in editable
        assert Permission.EARNINGS not in editable

    def test_client_editable(self):
        editable = get_editable_permissions(Role.CLIENT)
        assert Permission.UPLOAD_DOCUMENTS in editable
        assert Permission.CLIENTS not in editable


class TestSectionsAndLabels:

    def test_every_section_is_named(self):
        assert set(SECTION_NAMES) == set(Section)
        assert set(SECTION_PERMISSIONS) == set(Section)

    def test_every_permission_is_in_exactly_one_section(self):
        seen = [p for s in Section for p in get_section_permissions(s)]
        assert sorted(p.value for p in seen) == sorted(p.value for p in Permission)

    def test_every_permission_has_a_label(self):
        assert set(PERMISSION_LABELS) == set(Permission)

    def test_section_permissions_returns_copy(self):
        items = get_section_permissions(Section.GENERAL)
        items.append(Permission.DATABASE)
        assert Permission.DATABASE not in get_section_permissions(Section.GENERAL)

    def test_routes_are_paths(self):
        assert PERMISSION_TO_ROUTE[Permission.DATABASE] == "/admin/database"
        assert all(route.startswith("/") for route in PERMISSION_TO_ROUTE.values())
