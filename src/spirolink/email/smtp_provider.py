"""
SMTP mail-account provider.

Authenticates with a username/secret pair against a fixed SMTP host using
STARTTLS. One authenticated connection is pooled and reused across sends;
it is checked with NOOP before each use and dropped after any failure.
Every operation runs in a worker thread with bounded connection/socket
timeouts.
"""

import smtplib
import ssl
import threading
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid

import anyio

from spirolink.email.interfaces import (
    EmailFailure,
    EmailMessage,
    EmailProvider,
    EmailResult,
    ProviderType,
)
from spirolink.shared.logging import get_logger

logger = get_logger(__name__)


def classify_smtp_error(exc: Exception) -> EmailFailure:
    """Map an smtplib/socket exception to a provider-independent failure."""
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return EmailFailure.AUTHENTICATION
    if isinstance(exc, (smtplib.SMTPRecipientsRefused, smtplib.SMTPSenderRefused)):
        return EmailFailure.RECIPIENT_REJECTED
    if isinstance(exc, (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected)):
        return EmailFailure.NETWORK
    if isinstance(exc, smtplib.SMTPException):
        return EmailFailure.PROVIDER
    # socket.timeout, ConnectionRefusedError, gaierror, ...
    return EmailFailure.NETWORK


class SMTPEmailProvider(EmailProvider):
    """SMTP-based email provider for a single authenticated mail account."""

    def __init__(
        self,
        username: str,
        password: str,
        host: str = "smtp.gmail.com",
        port: int = 587,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._username = username
        self._password = password
        self._host = host
        self._port = port
        self._timeout_seconds = timeout_seconds
        self._server: smtplib.SMTP | None = None
        self._lock = threading.Lock()

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GMAIL

    @property
    def default_from(self) -> str:
        return self._username

    async def send(self, message: EmailMessage) -> EmailResult:
        """Send email via SMTP in a worker thread."""
        return await anyio.to_thread.run_sync(self._send_sync, message)

    async def verify(self) -> bool:
        """One-time handshake: connect, STARTTLS and log in.

        A successful handshake seeds the connection pool.
        """
        return await anyio.to_thread.run_sync(self._verify_sync)

    async def close(self) -> None:
        await anyio.to_thread.run_sync(self._close_sync)

    def _connect(self) -> smtplib.SMTP:
        server = smtplib.SMTP(self._host, self._port, timeout=self._timeout_seconds)
        try:
            server.starttls(context=ssl.create_default_context())
            server.login(self._username, self._password)
        except Exception:
            server.close()
            raise
        return server

    def _acquire(self) -> smtplib.SMTP:
        """Return the pooled connection, reconnecting when it has gone stale.

        Caller holds self._lock.
        """
        if self._server is not None:
            try:
                self._server.noop()
                return self._server
            except (smtplib.SMTPException, OSError):
                self._discard()
        self._server = self._connect()
        return self._server

    def _discard(self) -> None:
        server, self._server = self._server, None
        if server is None:
            return
        try:
            server.quit()
        except (smtplib.SMTPException, OSError):
            server.close()

    def _build_mime(self, message: EmailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = message.from_email or self.default_from
        msg["To"] = message.to_email
        if message.reply_to:
            msg["Reply-To"] = message.reply_to
        msg["Message-ID"] = make_msgid(domain=self._host)
        msg.attach(MIMEText(message.body_html, "html", "utf-8"))
        return msg

    def _send_sync(self, message: EmailMessage) -> EmailResult:
        msg = self._build_mime(message)
        with self._lock:
            try:
                self._acquire().send_message(msg)
            except (smtplib.SMTPException, OSError) as e:
                self._discard()
                failure = classify_smtp_error(e)
                logger.error(
                    "SMTP send failed",
                    extra={"to": message.to_email, "failure": failure.value, "error": str(e)},
                )
                return EmailResult.failed(failure, f"Gmail SMTP failed: {e}")

        logger.info(
            "SMTP email sent",
            extra={"to": message.to_email, "message_id": msg["Message-ID"]},
        )
        return EmailResult(success=True, provider_message_id=msg["Message-ID"])

    def _verify_sync(self) -> bool:
        with self._lock:
            self._discard()
            try:
                self._server = self._connect()
            except (smtplib.SMTPException, OSError) as e:
                logger.warning(
                    "SMTP verification failed",
                    extra={"host": self._host, "port": self._port, "error": str(e)},
                )
                return False
        return True

    def _close_sync(self) -> None:
        with self._lock:
            self._discard()
