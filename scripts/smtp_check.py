"""
SMTP sanity check for the catering email relay.

Sends a test email with the configured SMTP settings (.env), using the same
transport strategy as the relay: primary port first, then 587/STARTTLS.

Usage:
    python scripts/smtp_check.py
"""
import sys
sys.stdout.reconfigure(encoding='utf-8')
from dotenv import load_dotenv
load_dotenv()

from thali_club.email_service import EmailRelayError, SmtpSettings, send_email

settings = SmtpSettings.from_config()

print("SMTP_USER:", settings.username)
print("SMTP_PASS length:", len(settings.password) if settings.password else 0)
print(f"SMTP_HOST: {settings.host}:{settings.port} (secure={settings.secure})")

try:
    send_email(
        settings,
        subject="Test — Catering SMTP",
        body_text="Hello! This is a test email from the catering setup.",
        body_html="<p>Hello! This is a test email from the catering setup.</p>",
    )
except EmailRelayError as e:
    print(f"Test failed: {e}")
    sys.exit(1)

print(f"Test email sent to {settings.to_email}")
