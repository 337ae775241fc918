"""
Input Validation Functions.

Validation of contact details typed into the checkout and contact forms.
Both functions return ``(normalized_value, error_message)``; exactly one of
the two is None.
"""

import logging

import phonenumbers
from phonenumbers.phonenumberutil import NumberParseException
from email_validator import validate_email, EmailNotValidError

logger = logging.getLogger(__name__)

# Numbers without a country code are read as North American
DEFAULT_PHONE_REGION = "CA"


def validate_email_address(email: str) -> tuple[str | None, str | None]:
    """
    Validate an email address using the email-validator library.

    Only syntax is checked (no DNS/MX lookups): a new or private domain should
    not block a catering request.

    Args:
        email: The email address to validate

    Returns:
        Tuple of (normalized_email, error_message).
    """
    if not email or not email.strip():
        return (None, "Please enter an email address.")

    try:
        result = validate_email(email.strip(), check_deliverability=False)
        return (result.normalized, None)
    except EmailNotValidError as e:
        logger.debug("Email validation failed: %s", e)
        return (None, "Please enter a valid email address.")


def validate_phone_number(phone: str) -> tuple[str | None, str | None]:
    """
    Validate a phone number using Google's phonenumbers library.

    Args:
        phone: Raw phone number string (any common format)

    Returns:
        Tuple of (validated_phone, error_message). The phone is returned in
        E.164 format (e.g., "+14169671111").
    """
    if not phone or not phone.strip():
        return (None, "Please enter a phone number.")

    try:
        parsed_number = phonenumbers.parse(phone, DEFAULT_PHONE_REGION)
    except NumberParseException as e:
        logger.debug("Phone validation failed: %s", e)
        return (None, "Please enter a valid phone number.")

    if not phonenumbers.is_valid_number(parsed_number):
        return (None, "Please enter a valid phone number.")

    return (phonenumbers.format_number(parsed_number, phonenumbers.PhoneNumberFormat.E164), None)
