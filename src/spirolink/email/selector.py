"""
Email transport selection.

Evaluated once at startup. Configuration presence is checked in priority
order (Resend, SendGrid, SMTP account) and the first configured transport
becomes the terminal, immutable ProviderState. Nothing configured, or a
failure while building the transport, yields the DISABLED state.

An SMTP account whose handshake fails is still selected, flagged as
unverified: sends go through it and surface the real error rather than
silently moving to another transport.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from spirolink.config import Settings
from spirolink.email.http_providers import ResendEmailProvider, SendGridEmailProvider
from spirolink.email.interfaces import EmailProvider, ProviderType
from spirolink.email.smtp_provider import SMTPEmailProvider
from spirolink.shared.logging import get_logger, mask_secret

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProviderState:
    """Selected transport, fixed for the life of the process."""

    provider_type: ProviderType
    provider: EmailProvider | None = None
    verified: bool = False

    @classmethod
    def disabled(cls) -> "ProviderState":
        return cls(provider_type=ProviderType.DISABLED)

    @property
    def is_disabled(self) -> bool:
        return self.provider_type is ProviderType.DISABLED or self.provider is None

    @property
    def service_name(self) -> str:
        return self.provider_type.value


async def select_provider(
    settings: Settings,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> ProviderState:
    """Choose exactly one email transport from configuration.

    Args:
        settings: Application settings.
        http_transport: Optional transport handed to the HTTP API providers.

    Returns:
        The terminal ProviderState. Never raises: any error degrades to DISABLED.
    """
    try:
        return await _select(settings, http_transport)
    except Exception:
        logger.exception("Email transport initialization failed; email disabled")
        return ProviderState.disabled()


async def _select(
    settings: Settings,
    http_transport: httpx.AsyncBaseTransport | None,
) -> ProviderState:
    if settings.resend_configured:
        logger.info(
            "Email service: Resend API",
            extra={"api_key": mask_secret(settings.resend_api_key)},
        )
        provider = ResendEmailProvider(
            api_key=settings.resend_api_key,
            from_email=settings.email_from,
            timeout_seconds=settings.email_http_timeout_seconds,
            transport=http_transport,
        )
        return ProviderState(ProviderType.RESEND, provider, verified=True)

    if settings.sendgrid_configured:
        logger.info(
            "Email service: SendGrid API",
            extra={"api_key": mask_secret(settings.sendgrid_api_key)},
        )
        provider = SendGridEmailProvider(
            api_key=settings.sendgrid_api_key,
            from_email=settings.email_from,
            timeout_seconds=settings.email_http_timeout_seconds,
            transport=http_transport,
        )
        return ProviderState(ProviderType.SENDGRID, provider, verified=True)

    if settings.smtp_configured:
        smtp = SMTPEmailProvider(
            username=settings.email_user,
            password=settings.email_password,
            host=settings.smtp_host,
            port=settings.smtp_port,
            timeout_seconds=settings.smtp_timeout_seconds,
        )
        verified = await smtp.verify()
        if verified:
            logger.info(
                "Email service: SMTP account",
                extra={"user": settings.email_user, "host": settings.smtp_host},
            )
        else:
            logger.warning(
                "Email service: SMTP account configured but unverified; sends will report errors",
                extra={"user": settings.email_user, "host": settings.smtp_host},
            )
        return ProviderState(ProviderType.GMAIL, smtp, verified=verified)

    logger.warning("Email service disabled: no provider configured")
    return ProviderState.disabled()
