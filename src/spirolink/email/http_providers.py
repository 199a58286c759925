"""
Transactional email HTTP API providers.

Both services authenticate with a bearer API key and accept one message per
synchronous POST. No connection is kept between sends.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

import httpx

from spirolink.email.interfaces import (
    EmailFailure,
    EmailMessage,
    EmailProvider,
    EmailResult,
    ProviderType,
)
from spirolink.shared.logging import get_logger

logger = get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"


def classify_status(status_code: int) -> EmailFailure:
    if status_code in (401, 403):
        return EmailFailure.AUTHENTICATION
    if status_code == 422:
        return EmailFailure.RECIPIENT_REJECTED
    return EmailFailure.PROVIDER


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        if isinstance(data.get("message"), str):
            return data["message"]
        errors = data.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            return str(errors[0].get("message", errors[0]))
    return f"HTTP {response.status_code}"


class HTTPEmailProvider(EmailProvider):
    """Shared request/response handling for bearer-key email APIs."""

    api_url: str = ""
    label: str = ""
    success_codes: tuple[int, ...] = (200,)

    def __init__(
        self,
        api_key: str,
        from_email: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            api_key: Bearer API key.
            from_email: Default sender address.
            timeout_seconds: Request timeout.
            transport: Optional injected transport (tests use httpx.MockTransport).
        """
        self._api_key = api_key
        self._from_email = from_email
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def default_from(self) -> str:
        return self._from_email

    @abstractmethod
    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        """Translate a message into the service's JSON body."""
        raise NotImplementedError

    @abstractmethod
    def extract_message_id(self, response: httpx.Response) -> str | None:
        raise NotImplementedError

    async def send(self, message: EmailMessage) -> EmailResult:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(message)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(
                f"{self.label} request failed",
                extra={"to": message.to_email, "error": str(e)},
            )
            return EmailResult.failed(EmailFailure.NETWORK, f"{self.label} API failed: {e}")

        if response.status_code not in self.success_codes:
            failure = classify_status(response.status_code)
            detail = _error_detail(response)
            logger.error(
                f"{self.label} rejected message",
                extra={
                    "to": message.to_email,
                    "status_code": response.status_code,
                    "failure": failure.value,
                    "error": detail,
                },
            )
            return EmailResult.failed(failure, f"{self.label} API failed: {detail}")

        message_id = self.extract_message_id(response)
        logger.info(
            f"{self.label} email sent",
            extra={"to": message.to_email, "message_id": message_id},
        )
        return EmailResult(success=True, provider_message_id=message_id)


class ResendEmailProvider(HTTPEmailProvider):
    """Primary HTTP API transport (Resend)."""

    api_url = RESEND_API_URL
    label = "Resend"
    success_codes = (200, 201)

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.RESEND

    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": message.from_email or self._from_email,
            "to": [message.to_email],
            "subject": message.subject,
            "html": message.body_html,
        }
        if message.reply_to:
            payload["reply_to"] = message.reply_to
        return payload

    def extract_message_id(self, response: httpx.Response) -> str | None:
        try:
            data = response.json()
        except ValueError:
            return None
        return data.get("id") if isinstance(data, dict) else None


class SendGridEmailProvider(HTTPEmailProvider):
    """Secondary HTTP API transport (SendGrid v3)."""

    api_url = SENDGRID_API_URL
    label = "SendGrid"
    success_codes = (200, 202)

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.SENDGRID

    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "personalizations": [{"to": [{"email": message.to_email}]}],
            "from": {"email": message.from_email or self._from_email},
            "subject": message.subject,
            "content": [{"type": "text/html", "value": message.body_html}],
        }
        if message.reply_to:
            payload["reply_to"] = {"email": message.reply_to}
        return payload

    def extract_message_id(self, response: httpx.Response) -> str | None:
        return response.headers.get("X-Message-Id")
