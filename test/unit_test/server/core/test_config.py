"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds its environment variables and
that the grouped configuration properties expose them.
"""

import pytest

from bibliafs.server.core.config import (
    AuthConfig,
    BibleApiConfig,
    CORSConfig,
    OpenAIConfig,
    SchedulerConfig,
    Settings,
    StripeConfig,
    WebPushConfig,
)


@pytest.fixture
def make_settings(monkeypatch):
    """Build Settings from the given environment only, ignoring any local .env file."""

    def _make(**env: str) -> Settings:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return Settings(_env_file=None)

    return _make


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_server_binding(self, make_settings):
        settings = make_settings(BIBLIAFS_SERVER_HOST="127.0.0.1", BIBLIAFS_SERVER_PORT="8080", BIBLIAFS_LOG_LEVEL="DEBUG")

        assert settings.server_host == "127.0.0.1"
        assert settings.server_port == 8080
        assert settings.log_level == "DEBUG"

    def test_database_url_binding(self, make_settings):
        settings = make_settings(DATABASE_URL="sqlite+aiosqlite:///./bibliafs.db")

        assert settings.database_url == "sqlite+aiosqlite:///./bibliafs.db"

    def test_cors_origins_binding(self, make_settings):
        settings = make_settings(CORS_ORIGINS='["https://bibliafs.com.br"]')

        assert settings.cors_origins == ["https://bibliafs.com.br"]


class TestSettingsDefaults:
    def test_server_defaults(self, make_settings, monkeypatch):
        for key in ("BIBLIAFS_SERVER_HOST", "BIBLIAFS_SERVER_PORT", "DATABASE_URL"):
            monkeypatch.delenv(key, raising=False)
        settings = make_settings()

        assert settings.server_host == "0.0.0.0"
        assert settings.server_port == 5000
        assert settings.database_url.startswith("postgresql+asyncpg://")

    def test_integrations_are_unconfigured_by_default(self, make_settings, monkeypatch):
        for key in (
            "OPENAI_API_KEY",
            "STRIPE_SECRET_KEY",
            "VAPID_PUBLIC_KEY",
            "VAPID_PRIVATE_KEY",
            "NOTIFICATION_SCHEDULER_ENABLED",
        ):
            monkeypatch.delenv(key, raising=False)
        settings = make_settings()

        assert settings.openai.is_configured is False
        assert settings.stripe.is_configured is False
        assert settings.web_push.is_configured is False
        assert settings.scheduler.enabled is True


class TestGroupedConfigs:
    """The grouped properties rebuild typed configs from the flat variables."""

    def test_openai(self, make_settings):
        config = make_settings(OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-4o-mini").openai

        assert isinstance(config, OpenAIConfig)
        assert config.api_key == "sk-test"
        assert config.model == "gpt-4o-mini"
        assert config.is_configured

    def test_auth(self, make_settings):
        config = make_settings(SUPABASE_JWT_SECRET="secret", JWT_AUDIENCE="mobile").auth

        assert isinstance(config, AuthConfig)
        assert (config.jwt_secret, config.jwt_algorithm, config.jwt_audience) == ("secret", "HS256", "mobile")

    def test_stripe(self, make_settings):
        config = make_settings(
            STRIPE_SECRET_KEY="sk_live", STRIPE_WEBHOOK_SECRET="whsec", APP_URL="https://bibliafs.com.br"
        ).stripe

        assert isinstance(config, StripeConfig)
        assert config.is_configured
        assert config.webhook_secret == "whsec"
        assert config.app_url == "https://bibliafs.com.br"

    def test_web_push_needs_both_keys(self, make_settings, monkeypatch):
        monkeypatch.delenv("VAPID_PRIVATE_KEY", raising=False)
        config = make_settings(VAPID_PUBLIC_KEY="public").web_push

        assert isinstance(config, WebPushConfig)
        assert config.is_configured is False

    def test_bible_api(self, make_settings):
        config = make_settings(BIBLE_API_TOKEN="token", BIBLE_API_RETRIES="0", BIBLE_API_TIMEOUT="2.5").bible_api

        assert isinstance(config, BibleApiConfig)
        assert (config.token, config.retries, config.timeout) == ("token", 0, 2.5)

    def test_scheduler(self, make_settings):
        config = make_settings(
            NOTIFICATION_SCHEDULER_ENABLED="false", NOTIFICATION_SCHEDULER_INTERVAL="30"
        ).scheduler

        assert isinstance(config, SchedulerConfig)
        assert config.enabled is False
        assert config.interval_seconds == 30.0

    def test_cors(self, make_settings):
        config = make_settings(CORS_ALLOW_CREDENTIALS="false").cors

        assert isinstance(config, CORSConfig)
        assert config.allow_credentials is False
        assert config.origins == ["*"]

    def test_grouped_configs_accept_field_names(self):
        assert StripeConfig(secret_key="sk_test").is_configured
        assert WebPushConfig(public_key="a", private_key="b").is_configured
