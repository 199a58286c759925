"""
Email provider interfaces and data types.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ProviderType(str, Enum):
    """Email transports, in selection priority order."""

    RESEND = "resend"
    SENDGRID = "sendgrid"
    GMAIL = "gmail"
    DISABLED = "disabled"


class EmailFailure(str, Enum):
    """Provider-independent reason for a failed send."""

    NETWORK = "network"
    AUTHENTICATION = "authentication"
    RECIPIENT_REJECTED = "recipient_rejected"
    PROVIDER = "provider"


@dataclass(frozen=True)
class EmailMessage:
    """Email message to be sent."""

    to_email: str
    subject: str
    body_html: str
    from_email: Optional[str] = None
    reply_to: Optional[str] = None


@dataclass(frozen=True)
class EmailResult:
    """Result of email send operation."""

    success: bool
    provider_message_id: Optional[str] = None
    error_message: Optional[str] = None
    failure: Optional[EmailFailure] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def failed(cls, failure: EmailFailure, error_message: str) -> "EmailResult":
        return cls(success=False, error_message=error_message, failure=failure)


class EmailProvider(ABC):
    """
    Abstract interface for email providers.

    Implementations never retry and never raise for transport problems:
    every outcome is reported through EmailResult.
    """

    @property
    @abstractmethod
    def provider_type(self) -> ProviderType:
        """Transport identifier."""
        raise NotImplementedError

    @property
    @abstractmethod
    def default_from(self) -> str:
        """Sender used when the message carries none."""
        raise NotImplementedError

    @abstractmethod
    async def send(self, message: EmailMessage) -> EmailResult:
        """
        Send an email message.

        Args:
            message: The email message to send.

        Returns:
            EmailResult with success status and provider details.
        """
        raise NotImplementedError

    async def verify(self) -> bool:
        """Check connectivity and credentials. Stateless HTTP APIs have nothing to check."""
        return True

    async def close(self) -> None:
        """Release held resources."""
        return None
