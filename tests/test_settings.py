"""Settings loading and startup security validation."""

import pytest

from config.settings import (
    INSECURE_DEFAULT_SECRET,
    Settings,
    StartupSecurityError,
    get_settings,
    validate_startup_security,
)
from tests.helpers.factories import TEST_SECRET, make_settings


class TestDefaults:

    def test_defaults(self):
        settings = make_settings()
        assert settings.signin_url == "/auth/signin"
        assert settings.forbidden_url == "/forbidden"
        assert settings.attribution_cookie_name == "ref"
        assert settings.attribution_click_cookie_name == "ref_click"
        assert settings.attribution_cookie_max_age == 30 * 24 * 60 * 60
        assert settings.attribution_model == "last_click"
        assert settings.viewing_cookie_max_age == 4 * 60 * 60

    def test_cookies_are_not_secure_outside_production(self):
        assert make_settings().cookie_secure is False
        assert make_settings(environment="production").cookie_secure is True
        assert make_settings(environment="staging").cookie_secure is True

    def test_signing_key_prefers_jwt_secret(self):
        assert make_settings().signing_key == TEST_SECRET
        assert make_settings(jwt_secret_key="j" * 32).signing_key == "j" * 32


class TestEnvironment:

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("APP_ATTRIBUTION_MODEL", "FIRST_CLICK")
        monkeypatch.setenv("APP_SIGNIN_URL", "/login")
        settings = Settings(_env_file=None)
        assert settings.attribution_model == "first_click"
        assert settings.signin_url == "/login"

    def test_unknown_attribution_model_is_rejected(self):
        with pytest.raises(ValueError):
            make_settings(attribution_model="linear")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestProductionSecurity:

    def test_development_skips_checks(self):
        settings = make_settings(environment="development", secret_key=INSECURE_DEFAULT_SECRET)
        assert settings.validate_production_security() == []
        assert validate_startup_security(settings, exit_on_failure=False)

    def test_insecure_default_secret(self):
        settings = make_settings(environment="production", secret_key=INSECURE_DEFAULT_SECRET, enforce_https=True)
        errors = settings.validate_production_security()
        assert len(errors) == 1
        assert errors[0].startswith("APP_SECRET_KEY")

    def test_short_secrets(self):
        settings = make_settings(
            environment="production",
            secret_key="short",
            jwt_secret_key="also-short",
            enforce_https=True,
        )
        errors = settings.validate_production_security()
        assert any("APP_SECRET_KEY" in e for e in errors)
        assert any("APP_JWT_SECRET_KEY" in e for e in errors)

    def test_https_required(self):
        settings = make_settings(environment="production")
        assert any("APP_ENFORCE_HTTPS" in e for e in settings.validate_production_security())

    def test_startup_raises_without_exit(self):
        settings = make_settings(environment="production", secret_key=INSECURE_DEFAULT_SECRET)
        with pytest.raises(StartupSecurityError):
            validate_startup_security(settings, exit_on_failure=False)

    def test_startup_exits(self):
        settings = make_settings(environment="production", secret_key=INSECURE_DEFAULT_SECRET)
        with pytest.raises(SystemExit):
            validate_startup_security(settings)

    def test_valid_production(self, production_settings):
        assert production_settings.validate_production_security() == []
        assert validate_startup_security(production_settings, exit_on_failure=False)
