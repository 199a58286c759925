"""Tests for contact email templates."""

from spirolink.email.templates import (
    message_to_html,
    render_confirmation_body,
    render_confirmation_subject,
    render_notification_body,
    render_notification_subject,
)


def test_message_newlines_become_breaks() -> None:
    assert message_to_html("line one\nline two\r\nline three") == "line one<br>line two<br>line three"


def test_message_is_escaped() -> None:
    assert message_to_html("<script>alert(1)</script>") == "&lt;script&gt;alert(1)&lt;/script&gt;"


def test_notification_subject_defaults_to_general() -> None:
    assert render_notification_subject(None) == "New Contact Form - General"
    assert render_notification_subject("") == "New Contact Form - General"
    assert render_notification_subject("Wireless") == "New Contact Form - Wireless"


def test_notification_body_fields() -> None:
    body = render_notification_body(
        name="Jane <b>Doe</b>",
        email="jane@example.com",
        message="Hello",
        phone="555-0100",
        service_type="Fiber",
    )

    assert "<h2>New Contact Form Submission</h2>" in body
    assert "<strong>Name:</strong> Jane &lt;b&gt;Doe&lt;/b&gt;" in body
    assert "<strong>Phone:</strong> 555-0100" in body
    assert "<strong>Service:</strong> Fiber" in body
    assert "<em>Reply to: jane@example.com</em>" in body


def test_confirmation() -> None:
    assert render_confirmation_subject("SPIROLINK") == "We received your message - SPIROLINK"
    body = render_confirmation_body("Jane", "SPIROLINK")
    assert "<h3>Hello Jane,</h3>" in body
    assert "SPIROLINK Team" in body
