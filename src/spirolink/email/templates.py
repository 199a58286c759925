"""
HTML bodies for contact-form emails.
"""

import html

NOTIFICATION_TEMPLATE = """
    <h2>New Contact Form Submission</h2>
    <p><strong>Name:</strong> {name}</p>
    <p><strong>Email:</strong> {email}</p>
    <p><strong>Phone:</strong> {phone}</p>
    <p><strong>Service:</strong> {service}</p>
    <p><strong>Message:</strong></p>
    <p>{message}</p>
    <hr>
    <p><em>Reply to: {email}</em></p>
"""

CONFIRMATION_TEMPLATE = """
    <h3>Hello {name},</h3>
    <p>Thank you for contacting {brand}.</p>
    <p>We have received your message and will get back to you shortly.</p>
    <br>
    <p>Regards,<br>{brand} Team</p>
"""

NOTIFICATION_SUBJECT = "New Contact Form - {service}"
CONFIRMATION_SUBJECT = "We received your message - {brand}"


def _esc(value: str) -> str:
    return html.escape(value, quote=True)


def message_to_html(message: str) -> str:
    """Escape a free-text message and turn its line breaks into <br>."""
    normalized = message.replace("\r\n", "\n").replace("\r", "\n")
    return "<br>".join(_esc(line) for line in normalized.split("\n"))


def render_notification_subject(service_type: str | None) -> str:
    return NOTIFICATION_SUBJECT.format(service=service_type or "General")


def render_notification_body(
    name: str,
    email: str,
    message: str,
    phone: str | None = None,
    service_type: str | None = None,
) -> str:
    return NOTIFICATION_TEMPLATE.format(
        name=_esc(name),
        email=_esc(email),
        phone=_esc(phone or "N/A"),
        service=_esc(service_type or "N/A"),
        message=message_to_html(message),
    )


def render_confirmation_subject(brand: str) -> str:
    return CONFIRMATION_SUBJECT.format(brand=brand)


def render_confirmation_body(name: str, brand: str) -> str:
    return CONFIRMATION_TEMPLATE.format(name=_esc(name), brand=_esc(brand))
