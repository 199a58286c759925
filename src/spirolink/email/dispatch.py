"""
Contact-form dispatch.

For one submitted contact request, render the operator notification and the
submitter confirmation and send both, in that order, through the transport
selected at startup. A failed send stops the dispatch and is reported; no
other transport is tried. With email disabled no network call is made and
the rendered messages are returned for logging.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from spirolink.email.interfaces import EmailFailure, EmailMessage, ProviderType
from spirolink.email.selector import ProviderState
from spirolink.email.templates import (
    render_confirmation_body,
    render_confirmation_subject,
    render_notification_body,
    render_notification_subject,
)
from spirolink.shared.exceptions import AppError, ValidationError
from spirolink.shared.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS_MESSAGE = "Name, email, and message are required"


@dataclass(frozen=True)
class ContactRequest:
    """A contact-form submission."""

    name: str
    email: str
    message: str
    phone: Optional[str] = None
    service_type: Optional[str] = None


class DispatchStatus(str, Enum):
    SENT = "sent"
    DISABLED = "disabled"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a dispatch that did not fail."""

    provider: ProviderType
    status: DispatchStatus
    notification: EmailMessage
    confirmation: EmailMessage

    @property
    def success(self) -> bool:
        return True

    @property
    def disabled(self) -> bool:
        return self.status is DispatchStatus.DISABLED


class ProviderSendError(AppError):
    """A transport failed to deliver one of the dispatch messages."""

    def __init__(
        self,
        provider: ProviderType,
        cause: str,
        failure: EmailFailure | None = None,
    ) -> None:
        super().__init__(cause, "PROVIDER_SEND_ERROR")
        self.provider = provider
        self.cause = cause
        self.failure = failure


@dataclass(frozen=True)
class DispatchSettings:
    """Addresses and branding used to render dispatch messages."""

    contact_recipient: str = "contact@spirolink.com"
    brand_name: str = "SPIROLINK"


def validate_contact(request: ContactRequest) -> None:
    """Raise ValidationError unless name, email and message are non-empty."""
    for value in (request.name, request.email, request.message):
        if not value or not value.strip():
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)


class DispatchCoordinator:
    """Sends the two contact-form emails through the selected transport."""

    def __init__(self, state: ProviderState, settings: DispatchSettings | None = None) -> None:
        self._state = state
        self._settings = settings or DispatchSettings()

    @property
    def state(self) -> ProviderState:
        return self._state

    def render(self, request: ContactRequest) -> tuple[EmailMessage, EmailMessage]:
        """Build the operator notification and the submitter confirmation."""
        sender = self._state.provider.default_from if self._state.provider else None

        notification = EmailMessage(
            to_email=self._settings.contact_recipient,
            subject=render_notification_subject(request.service_type),
            body_html=render_notification_body(
                name=request.name,
                email=request.email,
                message=request.message,
                phone=request.phone,
                service_type=request.service_type,
            ),
            from_email=sender,
            reply_to=request.email,
        )
        confirmation = EmailMessage(
            to_email=request.email,
            subject=render_confirmation_subject(self._settings.brand_name),
            body_html=render_confirmation_body(request.name, self._settings.brand_name),
            from_email=sender,
        )
        return notification, confirmation

    async def submit_contact(self, request: ContactRequest) -> DispatchResult:
        """Validate, render and send one contact request.

        Raises:
            ValidationError: A required field is empty. No transport is touched.
            ProviderSendError: A send failed. The confirmation is never sent
                after a failed notification.
        """
        validate_contact(request)
        notification, confirmation = self.render(request)

        state = self._state
        provider = state.provider
        if state.is_disabled or provider is None:
            return self._log_disabled(notification, confirmation)

        for email in (notification, confirmation):
            result = await provider.send(email)
            if not result.success:
                cause = result.error_message or "unknown error"
                logger.error(
                    "Contact dispatch failed",
                    extra={
                        "provider": state.service_name,
                        "verified": state.verified,
                        "to": email.to_email,
                        "failure": result.failure.value if result.failure else None,
                    },
                )
                raise ProviderSendError(state.provider_type, cause, result.failure)

        logger.info("Contact emails sent", extra={"provider": state.service_name})
        return DispatchResult(
            provider=state.provider_type,
            status=DispatchStatus.SENT,
            notification=notification,
            confirmation=confirmation,
        )

    def _log_disabled(
        self,
        notification: EmailMessage,
        confirmation: EmailMessage,
    ) -> DispatchResult:
        logger.warning(
            "Email service disabled; logging contact submission instead",
            extra={
                "to": notification.to_email,
                "subject": notification.subject,
                "body": notification.body_html,
                "confirmation_to": confirmation.to_email,
            },
        )
        return DispatchResult(
            provider=ProviderType.DISABLED,
            status=DispatchStatus.DISABLED,
            notification=notification,
            confirmation=confirmation,
        )
