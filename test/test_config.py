"""
Tests for environment-driven settings.
"""

import pytest

from spirolink.config import Settings, get_settings
from spirolink.shared.exceptions import ConfigurationError


class TestSettings:
    def test_default_values(self) -> None:
        # Declared defaults, independent of the developer's environment.
        fields = Settings.model_fields
        assert fields["port"].default == 5000
        assert fields["openai_model"].default == "gpt-4o-mini"
        assert fields["smtp_host"].default == "smtp.gmail.com"
        assert fields["smtp_port"].default == 587
        assert fields["smtp_timeout_seconds"].default == 5.0
        assert fields["contact_recipient"].default == "contact@spirolink.com"
        assert fields["email_from"].default == "noreply@spirolink.com"

    def test_reads_deployment_variable_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("RESEND_API_KEY", "re_env")
        monkeypatch.setenv("EMAIL_USER", "ops@gmail.com")
        monkeypatch.setenv("EMAIL_PASSWORD", "app-pass")
        monkeypatch.setenv("PORT", "8080")

        settings = Settings(_env_file=None)

        assert settings.openai_api_key == "sk-env"
        assert settings.resend_configured is True
        assert settings.sendgrid_configured is False
        assert settings.smtp_configured is True
        assert settings.port == 8080

    def test_smtp_requires_user_and_password(self) -> None:
        settings = Settings(_env_file=None, email_user="ops@gmail.com")

        assert settings.smtp_configured is False

    def test_cors_origins_list(self) -> None:
        settings = Settings(_env_file=None, cors_origins="https://a.example, https://b.example,")

        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]

    def test_require_openai_key(self) -> None:
        Settings(_env_file=None, openai_api_key="sk-test").require_openai_key()

        with pytest.raises(ConfigurationError) as exc_info:
            Settings(_env_file=None, openai_api_key="").require_openai_key()

        assert exc_info.value.message == "OPENAI_API_KEY missing"

    def test_get_settings_is_fresh_under_pytest(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SENDGRID_API_KEY", "SG.first")
        assert get_settings().sendgrid_api_key == "SG.first"

        monkeypatch.setenv("SENDGRID_API_KEY", "SG.second")
        assert get_settings().sendgrid_api_key == "SG.second"
