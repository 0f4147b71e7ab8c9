"""
Gated Page Integration Tests

Pages redirect (303) to sign-in or forbidden; allowed pages return JSON
describing the effective role.
"""

import pytest

from rbac.roles import Role


def _location(response):
    return response.headers["location"]


class TestSignInRedirect:

    def test_unauthenticated_admin_page(self, client):
        response = client.get("/admin/users")
        assert response.status_code == 303
        assert _location(response) == "/auth/signin?callbackUrl=%2Fadmin%2Fusers"

    def test_callback_keeps_query_string(self, client):
        response = client.get("/admin/users", params={"ref": "x"})
        assert response.status_code == 303
        assert _location(response) == "/auth/signin?callbackUrl=%2Fadmin%2Fusers%3Fref%3Dx"

    def test_unauthenticated_dashboard(self, client):
        response = client.get("/dashboard")
        assert response.status_code == 303
        assert _location(response).startswith("/auth/signin")

    def test_signin_page_echoes_callback(self, client):
        response = client.get("/auth/signin", params={"callbackUrl": "/store"})
        assert response.json()["callbackUrl"] == "/store"


class TestRoleGates:

    def test_preparer_on_admin_page_is_forbidden(self, client, sign_in):
        sign_in("prep-1", Role.TAX_PREPARER)
        response = client.get("/dashboard/admin")
        assert response.status_code == 303
        assert _location(response) == "/forbidden"

    def test_admin_dashboard(self, client, sign_in):
        sign_in("admin-1", Role.ADMIN)
        response = client.get("/dashboard/admin")
        assert response.status_code == 200
        assert response.json() == {
            "page": "/dashboard/admin",
            "effectiveRole": "admin",
            "isViewingAsOtherRole": False,
            "viewingRoleName": None,
        }

    @pytest.mark.parametrize("role,url", [
        (Role.SUPER_ADMIN, "/dashboard/admin"),
        (Role.ADMIN, "/dashboard/admin"),
        (Role.TAX_PREPARER, "/dashboard/tax-preparer"),
        (Role.AFFILIATE, "/dashboard/affiliate"),
        (Role.LEAD, "/dashboard/lead"),
        (Role.CLIENT, "/dashboard/client"),
    ])
    def test_dashboard_redirects_to_role_dashboard(self, client, sign_in, role, url):
        sign_in("user-1", role)
        response = client.get("/dashboard")
        assert response.status_code == 303
        assert _location(response) == url

        assert client.get(url).status_code == 200

    def test_client_cannot_open_other_dashboards(self, client, sign_in):
        sign_in("client-1", Role.CLIENT)
        for path in ("/dashboard/tax-preparer", "/dashboard/affiliate", "/dashboard/lead", "/admin/users"):
            assert _location(client.get(path)) == "/forbidden"


class TestCapabilityGates:

    def test_admin_database_is_forbidden(self, client, sign_in):
        sign_in("admin-1", Role.ADMIN)
        assert _location(client.get("/admin/database")) == "/forbidden"

    def test_super_admin_database(self, client, sign_in):
        sign_in("root-1", Role.SUPER_ADMIN)
        assert client.get("/admin/database").status_code == 200
        assert client.get("/admin/permissions").status_code == 200

    def test_override_revokes_page(self, client, sign_in):
        sign_in("admin-1", Role.ADMIN, overrides={"payouts": False})
        assert _location(client.get("/admin/payouts")) == "/forbidden"
        assert client.get("/admin/users").status_code == 200

    def test_override_grants_page(self, client, sign_in):
        sign_in("client-1", Role.CLIENT, overrides={"academy": True})
        assert client.get("/app/academy").status_code == 200

    def test_capability_only_page(self, client, sign_in):
        sign_in("lead-1", Role.LEAD)
        assert _location(client.get("/store")) == "/forbidden"


class TestViewingPages:

    def test_admin_previewing_preparer(self, client, sign_in):
        sign_in("admin-1", Role.ADMIN)
        client.post("/api/admin/view-as", json={"role": "tax_preparer"})

        assert _location(client.get("/dashboard")) == "/dashboard/tax-preparer"

        response = client.get("/dashboard/tax-preparer/clients")
        assert response.status_code == 200
        assert response.json()["isViewingAsOtherRole"] is True
        assert response.json()["viewingRoleName"] == "Tax Preparer"

        assert _location(client.get("/admin/users")) == "/forbidden"

    def test_preview_ends_after_revert(self, client, sign_in):
        sign_in("admin-1", Role.ADMIN)
        client.post("/api/admin/view-as", json={"role": "client"})
        client.delete("/api/admin/view-as")
        assert client.get("/admin/users").status_code == 200

    def test_tampered_viewing_cookie_is_ignored(self, client, sign_in, app_settings):
        sign_in("admin-1", Role.ADMIN)
        client.cookies.set(app_settings.viewing_cookie_name, "not.a.token")
        response = client.get("/dashboard/admin")
        assert response.status_code == 200
        assert response.json()["effectiveRole"] == "admin"
