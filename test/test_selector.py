"""
Tests for startup email transport selection.
"""

from unittest.mock import AsyncMock, patch

import pytest

from spirolink.config import Settings
from spirolink.email.http_providers import ResendEmailProvider, SendGridEmailProvider
from spirolink.email.interfaces import ProviderType
from spirolink.email.selector import ProviderState, select_provider
from spirolink.email.smtp_provider import SMTPEmailProvider


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, openai_api_key="k", **overrides)


class TestSelectProvider:
    @pytest.mark.asyncio
    async def test_nothing_configured_is_disabled(self) -> None:
        state = await select_provider(_settings())

        assert state.provider_type == ProviderType.DISABLED
        assert state.provider is None
        assert state.is_disabled is True
        assert state.service_name == "disabled"

    @pytest.mark.asyncio
    async def test_resend_has_top_priority(self) -> None:
        state = await select_provider(
            _settings(
                resend_api_key="re_key",
                sendgrid_api_key="SG.key",
                email_user="a@gmail.com",
                email_password="pw",
            )
        )

        assert state.provider_type == ProviderType.RESEND
        assert isinstance(state.provider, ResendEmailProvider)
        assert state.provider.default_from == "noreply@spirolink.com"
        assert state.verified is True

    @pytest.mark.asyncio
    async def test_sendgrid_before_smtp(self) -> None:
        state = await select_provider(
            _settings(sendgrid_api_key="SG.key", email_user="a@gmail.com", email_password="pw")
        )

        assert state.provider_type == ProviderType.SENDGRID
        assert isinstance(state.provider, SendGridEmailProvider)

    @pytest.mark.asyncio
    async def test_smtp_verified(self) -> None:
        with patch.object(SMTPEmailProvider, "verify", AsyncMock(return_value=True)) as verify:
            state = await select_provider(_settings(email_user="a@gmail.com", email_password="pw"))

        verify.assert_awaited_once()
        assert state.provider_type == ProviderType.GMAIL
        assert isinstance(state.provider, SMTPEmailProvider)
        assert state.verified is True
        assert state.provider.default_from == "a@gmail.com"

    @pytest.mark.asyncio
    async def test_smtp_unverified_is_kept_not_skipped(self) -> None:
        with patch.object(SMTPEmailProvider, "verify", AsyncMock(return_value=False)):
            state = await select_provider(_settings(email_user="a@gmail.com", email_password="pw"))

        assert state.provider_type == ProviderType.GMAIL
        assert state.verified is False
        assert state.is_disabled is False

    @pytest.mark.asyncio
    async def test_smtp_needs_both_user_and_password(self) -> None:
        state = await select_provider(_settings(email_user="a@gmail.com"))

        assert state.provider_type == ProviderType.DISABLED

    @pytest.mark.asyncio
    async def test_initialization_error_degrades_to_disabled(self) -> None:
        with patch.object(SMTPEmailProvider, "verify", AsyncMock(side_effect=RuntimeError("boom"))):
            state = await select_provider(_settings(email_user="a@gmail.com", email_password="pw"))

        assert state == ProviderState.disabled()


def test_provider_state_is_immutable() -> None:
    state = ProviderState.disabled()

    with pytest.raises(AttributeError):
        state.provider_type = ProviderType.RESEND  # type: ignore[misc]
