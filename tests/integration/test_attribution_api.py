"""
Attribution API Integration Tests

Tests for:
- /api/attribution over the SQLite profile store
- Referral cookie persistence across requests
- /api/tracking-codes/validate
- /ref/<code> vanity links
- /api/attribution/lead email and phone matching
"""

from unittest.mock import patch

import pytest

from attribution.repository import AttributionLookupError
from rbac.roles import Role


@pytest.fixture
def referrers(seed_profile):
    """Sarah (preparer), an affiliate and a referring client."""
    return {
        "sarah": seed_profile(
            Role.TAX_PREPARER,
            user_id="user-sarah",
            first_name="Sarah",
            last_name="Jones",
            tracking_code="SARAH2024",
            custom_tracking_code="sarah-taxes",
        ),
        "affiliate": seed_profile(Role.AFFILIATE, user_id="user-aff", short_link_username="bigpromo"),
        "client": seed_profile(Role.CLIENT, user_id="user-cli", tracking_code="FRIEND42"),
        "squatter": seed_profile(Role.AFFILIATE, tracking_code="dashboard"),
    }


class TestAttributionEndpoint:

    def test_ref_param(self, client, referrers):
        response = client.get("/api/attribution", params={"ref": "SARAH2024"})
        data = response.json()

        assert data["success"] is True
        assert data["method"] == "ref_param"
        assert data["attribution"] == {
            "referrerUsername": "SARAH2024",
            "referrerType": "TAX_PREPARER",
            "referrerProfileId": referrers["sarah"],
            "referrerName": "Sarah Jones",
            "method": "ref_param",
            "confidence": 100,
        }
        assert data["leadOwnerId"] == "user-sarah"

        set_cookie = response.headers.get_list("set-cookie")
        assert any(c.startswith("ref=SARAH2024") for c in set_cookie)
        assert any(c.startswith("ref_click=") for c in set_cookie)
        assert all("HttpOnly" in c for c in set_cookie)

    def test_cookie_carries_attribution_to_later_visits(self, client, referrers):
        client.get("/api/attribution", params={"ref": "SARAH2024"})
        data = client.get("/api/attribution").json()
        assert data["method"] == "cookie"
        assert data["attribution"]["referrerUsername"] == "SARAH2024"

    def test_affiliate_lead_goes_to_corporate(self, client, referrers):
        data = client.get("/api/attribution", params={"code": "bigpromo"}).json()
        assert data["attribution"]["referrerType"] == "AFFILIATE"
        assert data["leadOwnerId"] is None

    def test_client_referral(self, client, referrers):
        data = client.get("/api/attribution", params={"ref": "FRIEND42"}).json()
        assert data["attribution"]["referrerType"] == "CLIENT"
        assert data["leadOwnerId"] is None

    def test_direct(self, client, referrers):
        response = client.get("/api/attribution")
        assert response.json() == {"success": True, "attribution": None, "method": "direct", "leadOwnerId": None}
        assert "set-cookie" not in response.headers

    def test_reserved_code_is_direct_even_if_stored(self, client, referrers):
        data = client.get("/api/attribution", params={"ref": "dashboard"}).json()
        assert data["method"] == "direct"

    def test_lookup_failure_is_direct(self, client, referrers):
        with patch(
            "attribution.repository.ProfileRepository.find_profile_by_any_tracking_code",
            side_effect=AttributionLookupError("db down"),
        ):
            response = client.get("/api/attribution", params={"ref": "SARAH2024"})
        assert response.status_code == 200
        assert response.json()["method"] == "direct"


class TestTrackingCodeValidation:

    def test_available(self, client, referrers):
        data = client.get("/api/tracking-codes/validate", params={"code": "new-code"}).json()
        assert data == {"code": "new-code", "valid": True, "available": True, "error": None}

    @pytest.mark.parametrize("code", ["SARAH2024", "sarah-taxes", "bigpromo"])
    def test_taken_in_any_namespace(self, client, referrers, code):
        data = client.get("/api/tracking-codes/validate", params={"code": code}).json()
        assert data["valid"] is True
        assert data["available"] is False

    def test_invalid_format(self, client):
        data = client.get("/api/tracking-codes/validate", params={"code": "admin"}).json()
        assert data["valid"] is False
        assert "reserved" in data["error"]

    def test_store_unavailable(self, client):
        with patch(
            "attribution.repository.ProfileRepository.is_code_available",
            side_effect=AttributionLookupError("db down"),
        ):
            response = client.get("/api/tracking-codes/validate", params={"code": "new-code"})
        assert response.status_code == 503


class TestReferralLinks:

    def test_vanity_link_sets_cookie_and_redirects_home(self, client, referrers):
        response = client.get("/ref/sarah-taxes")
        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert any(c.startswith("ref=sarah-taxes") for c in response.headers.get_list("set-cookie"))

        data = client.get("/api/attribution").json()
        assert data["method"] == "cookie"
        assert data["leadOwnerId"] == "user-sarah"

    @pytest.mark.parametrize("segment", ["dashboard", "nobody-here", "x"])
    def test_unknown_or_reserved_goes_to_not_found(self, client, referrers, segment):
        response = client.get(f"/ref/{segment}")
        assert response.status_code == 303
        assert response.headers["location"] == "/not-found"
        assert "set-cookie" not in response.headers


class TestLeadAttribution:

    def test_cookie_visit_is_matched_later_by_email(self, client, referrers):
        client.get("/api/attribution", params={"ref": "bigpromo"})
        first = client.post("/api/attribution/lead", json={"email": "Jane@Example.com", "phone": "+1 404 555 0100"})
        assert first.json()["method"] == "cookie"

        client.cookies.clear()
        data = client.post("/api/attribution/lead", json={"email": "jane@example.com"}).json()
        assert data["method"] == "email_match"
        assert data["attribution"]["referrerUsername"] == "bigpromo"
        assert data["attribution"]["confidence"] == 90
        assert data["leadOwnerId"] is None

    def test_phone_match(self, client, referrers):
        client.post("/api/attribution/lead?ref=SARAH2024", json={"phone": "404-555-0100"})

        client.cookies.clear()
        data = client.post("/api/attribution/lead", json={"phone": "(404) 555-0100"}).json()
        assert data["method"] == "phone_match"
        assert data["attribution"]["referrerUsername"] == "SARAH2024"
        assert data["attribution"]["confidence"] == 85
        assert data["leadOwnerId"] == "user-sarah"

    def test_unknown_contact_is_direct(self, client, referrers):
        data = client.post("/api/attribution/lead", json={"email": "new@example.com"}).json()
        assert data["method"] == "direct"
        assert data["attribution"] is None

    def test_click_store_failure_still_answers(self, client, referrers):
        with patch(
            "attribution.repository.ProfileRepository.record_link_click",
            side_effect=AttributionLookupError("db down"),
        ):
            response = client.post("/api/attribution/lead?ref=SARAH2024", json={"email": "jane@example.com"})
        assert response.status_code == 200
        assert response.json()["method"] == "ref_param"
