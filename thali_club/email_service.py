"""
Email service for catering requests and contact inquiries.

Renders an order (or inquiry) into HTML + plain text and sends it over SMTP.

Transport strategy:
1. Refuse to send when SMTP credentials are missing (EmailRelayConfigError);
   no connection is attempted.
2. Connect with the configured transport: implicit TLS (SMTP_SSL) when
   SMTP_SECURE is true, which is the usual port 465 setup, else STARTTLS.
3. If connecting or logging in fails, retry once on port 587 with STARTTLS
   required. Skipped when the primary attempt already was 587/STARTTLS.

Environment variables (see config.py):
- SMTP_HOST, SMTP_PORT, SMTP_SECURE, SMTP_USER, SMTP_PASS
- CATERING_TO_EMAIL, CATERING_FROM_EMAIL
"""

import logging
import smtplib
import ssl
from dataclasses import dataclass
from decimal import Decimal
from email.errors import MessageError
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from html import escape
from typing import Optional

from . import config
from .schemas.relay import CateringEmailRequest, ContactInquiryRequest

logger = logging.getLogger(__name__)


class EmailRelayError(Exception):
    """Sending an email failed."""


class EmailRelayConfigError(EmailRelayError):
    """SMTP is not configured well enough to attempt delivery."""


@dataclass(frozen=True)
class SmtpSettings:
    """Everything needed to reach the SMTP provider."""
    host: str
    port: int
    secure: bool
    username: Optional[str]
    password: Optional[str]
    to_email: Optional[str]
    from_email: Optional[str]
    sender_name: str = config.CATERING_SENDER_NAME
    timeout: float = config.SMTP_TIMEOUT
    fallback_port: int = config.SMTP_FALLBACK_PORT

    @classmethod
    def from_config(cls) -> "SmtpSettings":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            secure=config.SMTP_SECURE,
            username=config.SMTP_USER,
            password=config.SMTP_PASS,
            to_email=config.CATERING_TO_EMAIL,
            from_email=config.CATERING_FROM_EMAIL,
        )


def is_email_configured(settings: SmtpSettings) -> bool:
    """Check if SMTP is configured well enough to send."""
    return all([settings.host, settings.username, settings.password, settings.to_email, settings.from_email])


# =============================================================================
# Rendering
# =============================================================================

def _money(amount) -> str:
    return f"${Decimal(amount or 0):.2f}"


def _or_dash(value) -> str:
    if value is None or value == "":
        return "—"
    return escape(str(value))


def render_catering_email(order: CateringEmailRequest) -> tuple[str, str, str]:
    """
    Build the subject, plain-text body, and HTML body for a catering order.

    Returns:
        Tuple of (subject, body_text, body_html)
    """
    form = order.form
    subject = f"🥗 New Catering Request — {order.package} — {form.full_name or 'Unknown'}"

    text_lines = ["New Catering Request", "", f"Package: {order.package}"]
    html_parts = [
        "<h2>🍽️ New Catering Request</h2>",
        "<h3>Package</h3>",
        f"<p><strong>{escape(order.package)}</strong></p>",
    ]

    if order.is_weight_order and form.weight_kg:
        text_lines.append(f"Weight (kg): {form.weight_kg:.2f}")
        html_parts.append(f"<p><strong>Weight (kg):</strong> {form.weight_kg:.2f}</p>")

    if order.base_items:
        text_lines += ["", "Base Items:"] + [f"  - {item}" for item in order.base_items]
        html_parts.append("<h3>Base Items</h3>")
        html_parts.append("<ul>" + "".join(f"<li>{escape(item)}</li>" for item in order.base_items) + "</ul>")

    if order.steps:
        text_lines += ["", "Selections:"]
        html_parts.append("<h3>Selections</h3>")
        for step in order.steps:
            picked = ", ".join(step.selections) if step.selections else "—"
            text_lines.append(f"  {step.title}: {picked}")
            html_parts.append(f"<p><strong>{escape(step.title)}</strong><br/>{escape(picked)}</p>")

    if not order.is_weight_order:
        fee = f" (+{_money(order.add_on_fee)}/person)" if order.add_on_fee is not None else ""
        eco_text = f"Yes{fee}" if order.include_add_on else "No"
        eco_html = f"✅ Yes{fee}" if order.include_add_on else "❌ No"
        text_lines += ["", f"Eco Option: {eco_text}"]
        html_parts.append(f"<h3>Eco Option</h3><p>{eco_html}</p>")

    text_lines += ["", "Pricing Summary:"]
    pricing_html = []
    if not order.is_weight_order:
        text_lines.append(f"  Per Person: {_money(order.per_person)}")
        pricing_html.append(f"Per Person: <strong>{_money(order.per_person)}</strong><br/>")
    text_lines.append(f"  Subtotal: {_money(order.subtotal)}")
    pricing_html.append(f"Subtotal: {_money(order.subtotal)}<br/>")
    if order.tax and order.tax > 0:
        text_lines.append(f"  Tax: {_money(order.tax)}")
        pricing_html.append(f"Tax: {_money(order.tax)}<br/>")
    text_lines.append(f"  Total: {_money(order.grand_total)}")
    pricing_html.append(f"<strong>Total: {_money(order.grand_total)}</strong>")
    html_parts.append("<h3>Pricing Summary</h3><p>" + "".join(pricing_html) + "</p>")

    client_rows = [
        ("Name", form.full_name),
        ("Phone", form.phone),
        ("Email", form.email),
        ("Event Type / Location", form.event_type),
        ("Date of Event", form.date),
    ]
    if not order.is_weight_order:
        client_rows.append(("Party Size", form.party_size))
    client_rows.append(("Message", form.message))

    text_lines += ["", "Client Info:"] + [
        f"  {label}: {value if value not in (None, '') else '—'}" for label, value in client_rows
    ]
    html_parts.append(
        "<h3>Client Info</h3><p>"
        + "<br/>".join(f"<strong>{label}:</strong> {_or_dash(value)}" for label, value in client_rows)
        + "</p>"
    )

    body_text = "\n".join(text_lines) + "\n"
    body_html = (
        "<html><body style=\"font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
        "max-width: 600px; margin: 0 auto; padding: 20px;\">"
        + "\n".join(html_parts)
        + "</body></html>"
    )
    return subject, body_text, body_html


def render_contact_email(inquiry: ContactInquiryRequest) -> tuple[str, str, str]:
    """Build the subject, plain-text body, and HTML body for a contact inquiry."""
    subject = f"New Contact Inquiry — {inquiry.full_name}"
    rows = [
        ("Full Name", inquiry.full_name),
        ("Email", inquiry.email),
        ("Phone", inquiry.phone),
        ("Date / Time", inquiry.date_time),
        ("People", inquiry.people),
        ("Instructions", inquiry.instructions),
    ]
    body_text = "New Contact Inquiry\n\n" + "\n".join(f"{label}: {value}" for label, value in rows) + "\n"
    body_html = (
        "<html><body><h2>New Contact Inquiry</h2><p>"
        + "<br/>".join(f"<strong>{label}:</strong> {escape(value)}" for label, value in rows)
        + "</p></body></html>"
    )
    return subject, body_text, body_html


# =============================================================================
# Transport
# =============================================================================

def _header_value(value: Optional[str]) -> str:
    """Collapse line breaks so form input can't start a new header."""
    return " ".join((value or "").splitlines()).strip()


def _open_connection(settings: SmtpSettings, port: int, secure: bool) -> smtplib.SMTP:
    """Connect and log in. Implicit TLS when secure, otherwise STARTTLS is required."""
    context = ssl.create_default_context()
    if secure:
        server = smtplib.SMTP_SSL(settings.host, port, timeout=settings.timeout, context=context)
    else:
        server = smtplib.SMTP(settings.host, port, timeout=settings.timeout)
    try:
        if not secure:
            server.starttls(context=context)
        server.login(settings.username, settings.password)
    except Exception:
        server.close()
        raise
    return server


def connect(settings: SmtpSettings) -> smtplib.SMTP:
    """
    Open an authenticated SMTP connection, falling back to 587/STARTTLS once.

    Raises:
        EmailRelayConfigError: If credentials or addresses are missing
        EmailRelayError: If both the primary and the fallback attempt fail
    """
    if not is_email_configured(settings):
        raise EmailRelayConfigError(
            "SMTP is not configured. Set SMTP_USER, SMTP_PASS and CATERING_TO_EMAIL."
        )

    try:
        return _open_connection(settings, settings.port, settings.secure)
    except (smtplib.SMTPException, OSError) as primary_error:
        if settings.port == settings.fallback_port and not settings.secure:
            raise EmailRelayError(f"SMTP connection failed: {primary_error}") from primary_error
        logger.warning(
            "SMTP connection on port %d failed (%s); retrying on port %d with STARTTLS",
            settings.port,
            primary_error,
            settings.fallback_port,
        )

    try:
        return _open_connection(settings, settings.fallback_port, False)
    except (smtplib.SMTPException, OSError) as fallback_error:
        raise EmailRelayError(f"SMTP fallback connection failed: {fallback_error}") from fallback_error


def send_email(
    settings: SmtpSettings,
    subject: str,
    body_text: str,
    body_html: str,
    reply_to: Optional[str] = None,
    to_email: Optional[str] = None,
) -> None:
    """
    Send one multipart email through the relay transport.

    Raises:
        EmailRelayConfigError: If SMTP is not configured
        EmailRelayError: If the message could not be delivered
    """
    recipient = to_email or settings.to_email

    msg = MIMEMultipart("alternative")
    try:
        msg["Subject"] = _header_value(subject)
        msg["From"] = formataddr((settings.sender_name, settings.from_email or ""))
        msg["To"] = _header_value(recipient)
        if reply_to:
            msg["Reply-To"] = _header_value(reply_to)

        msg.attach(MIMEText(body_text, "plain"))
        msg.attach(MIMEText(body_html, "html"))
        message = msg.as_string()
    except (MessageError, ValueError) as e:
        raise EmailRelayError(f"Could not build email: {e}") from e

    server = connect(settings)
    try:
        server.sendmail(settings.from_email, [recipient], message)
    except (smtplib.SMTPException, OSError) as e:
        raise EmailRelayError(f"Failed to send email: {e}") from e
    finally:
        try:
            server.quit()
        except (smtplib.SMTPException, OSError):
            server.close()

    logger.info("Email sent: %s", subject)


def send_catering_email(order: CateringEmailRequest, settings: Optional[SmtpSettings] = None) -> None:
    """Email a catering order to the kitchen. Raises EmailRelayError on failure."""
    settings = settings or SmtpSettings.from_config()
    subject, body_text, body_html = render_catering_email(order)
    send_email(settings, subject, body_text, body_html, reply_to=order.form.email or None)


def send_contact_email(inquiry: ContactInquiryRequest, settings: Optional[SmtpSettings] = None) -> None:
    """Email a contact inquiry. Raises EmailRelayError on failure."""
    settings = settings or SmtpSettings.from_config()
    subject, body_text, body_html = render_contact_email(inquiry)
    send_email(settings, subject, body_text, body_html, reply_to=inquiry.email)
