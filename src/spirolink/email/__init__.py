"""
Contact-form email delivery.

- Provider adapters: Resend and SendGrid HTTP APIs, SMTP mail account
- Transport selected once at startup, in priority order
- Notification and confirmation sent sequentially, failures reported
"""

from spirolink.email.dispatch import (
    ContactRequest,
    DispatchCoordinator,
    DispatchResult,
    DispatchStatus,
    ProviderSendError,
)
from spirolink.email.interfaces import EmailMessage, EmailProvider, EmailResult, ProviderType
from spirolink.email.selector import ProviderState, select_provider

__all__ = [
    "ContactRequest",
    "DispatchCoordinator",
    "DispatchResult",
    "DispatchStatus",
    "EmailMessage",
    "EmailProvider",
    "EmailResult",
    "ProviderSendError",
    "ProviderState",
    "ProviderType",
    "select_provider",
]
