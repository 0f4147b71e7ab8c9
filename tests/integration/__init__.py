"""
Integration Tests Package

End-to-end tests against the FastAPI app with an in-memory profile store.

Structure:
- conftest.py: Shared fixtures for integration tests
- test_health_endpoints.py: Health endpoint
- test_access_api.py: Effective access, role viewing and the permission manager
- test_pages.py: Gated pages and redirects
- test_attribution_api.py: Attribution, tracking codes and referral links
"""
