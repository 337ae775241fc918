"""
Email Relay Routes
==================

Endpoints that turn a submitted form into an email to the kitchen.

Endpoints:
----------
- POST /api/send-catering-email: A finished catering order (sent by the
  configurator's submission gateway)
- POST /api/contact: An inquiry from the site's contact form

Responses:
----------
- 200 ``{"success": true}`` once the SMTP server accepted the message
- 500 ``{"success": false, "message": ...}`` when SMTP is not configured or
  delivery failed. No stack trace is ever returned.
- 400 when the contact form's email or phone number is not valid
- 429 when the client exceeds RATE_LIMIT_EMAIL

Rate Limiting:
--------------
Both endpoints end in an SMTP send, so both are limited per client IP
(default: 5/minute).
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import RATE_LIMIT_ENABLED, get_rate_limit_email
from ..catering.validators import validate_email_address, validate_phone_number
from ..email_service import (
    EmailRelayConfigError,
    EmailRelayError,
    send_catering_email,
    send_contact_email,
)
from ..schemas.relay import CateringEmailRequest, ContactInquiryRequest, RelayResponse


logger = logging.getLogger(__name__)

relay_router = APIRouter(prefix="/api", tags=["Email Relay"])

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

NOT_CONFIGURED_MESSAGE = "Email service is not configured."
SEND_FAILED_MESSAGE = "Failed to send email."


def _failure(e: EmailRelayError) -> JSONResponse:
    if isinstance(e, EmailRelayConfigError):
        logger.error("Email relay not configured: %s", e)
        message = NOT_CONFIGURED_MESSAGE
    else:
        logger.error("Email relay failed: %s", e)
        message = SEND_FAILED_MESSAGE
    return JSONResponse(
        status_code=500,
        content=RelayResponse(success=False, message=message).model_dump(),
    )


@relay_router.post("/send-catering-email", response_model=RelayResponse)
@limiter.limit(get_rate_limit_email)
def send_catering_request(request: Request, order: CateringEmailRequest):
    """Email a catering order to the kitchen."""
    logger.debug("Catering email requested for package '%s' by %s", order.package, order.form.email)
    try:
        send_catering_email(order)
    except EmailRelayError as e:
        return _failure(e)
    return RelayResponse(success=True)


@relay_router.post("/contact", response_model=RelayResponse)
@limiter.limit(get_rate_limit_email)
def send_contact_inquiry(request: Request, inquiry: ContactInquiryRequest):
    """Email an inquiry from the contact form."""
    email, email_error = validate_email_address(inquiry.email)
    if email_error:
        raise HTTPException(status_code=400, detail=email_error)
    phone, phone_error = validate_phone_number(inquiry.phone)
    if phone_error:
        raise HTTPException(status_code=400, detail=phone_error)

    inquiry = inquiry.model_copy(update={"email": email, "phone": phone})
    try:
        send_contact_email(inquiry)
    except EmailRelayError as e:
        return _failure(e)
    return RelayResponse(success=True, message="Thanks! We'll get back to you shortly.")
