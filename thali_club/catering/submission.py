"""
Submission Gateway for Catering Orders.

Hands a finished wizard session to the email relay:

1. Validate the contact form locally. Problems come back as a single message
   and nothing is sent.
2. Refuse a second submit from the same client while one is in flight.
3. Serialize the order (package, selections, quote, contact form) and POST it
   to the relay exactly once.
4. Any non-2xx answer or transport error is reported as the same generic
   failure. The caller keeps the session so the customer can retry.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Set

import requests

from ..schemas.relay import CateringEmailRequest, CateringForm, StepSelections
from .catalog import PricingModel
from .models import PartySize, WeightKg, WizardSession
from .validators import validate_email_address, validate_phone_number
from .wizard import WizardStateMachine

logger = logging.getLogger(__name__)

SENT_MESSAGE = "Request submitted! We'll reach out shortly. A copy has been sent to admin."
FAILED_MESSAGE = "Failed to send. Please try again."
BUSY_MESSAGE = "Your request is already being sent. Please wait."


class SubmissionOutcome(str, Enum):
    SENT = "sent"
    INVALID = "invalid"  # local validation failed, nothing sent
    BUSY = "busy"  # another submit for this client is in flight
    FAILED = "failed"  # relay rejected the order or could not be reached


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionOutcome
    message: str

    @property
    def ok(self) -> bool:
        return self.outcome == SubmissionOutcome.SENT


class SubmissionGateway:
    """
    Sends finished orders to the email relay.

    Args:
        machine: Wizard state machine (catalog and pricing)
        relay_url: URL of the relay's catering endpoint
        timeout: Request timeout in seconds
    """

    def __init__(self, machine: WizardStateMachine, relay_url: str, timeout: float = 15):
        self.machine = machine
        self.relay_url = relay_url
        self.timeout = timeout
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self, session: WizardSession) -> Optional[str]:
        """Return a message describing what's wrong with the order, or None."""
        package = self.machine.package_for(session)
        if package is None:
            return "Please choose a package first."

        contact = session.contact
        weight_order = package.pricing_model == PricingModel.PER_WEIGHT
        quantity_label = "Weight" if weight_order else "Party Size"

        if not all(v.strip() for v in (contact.full_name, contact.phone, contact.email, contact.date)):
            return f"Please fill in Full Name, Phone, Email, Date and {quantity_label}."

        quantity = session.quantity
        if weight_order:
            if not isinstance(quantity, WeightKg) or quantity.kg <= 0:
                return f"Please fill in Full Name, Phone, Email, Date and {quantity_label}."
        else:
            min_party = self.machine.policy.min_party_size
            if not isinstance(quantity, PartySize) or quantity.people < min_party:
                return f"Party size must be at least {min_party}."

        _, email_error = validate_email_address(contact.email)
        if email_error:
            return email_error
        _, phone_error = validate_phone_number(contact.phone)
        if phone_error:
            return phone_error
        return None

    # =========================================================================
    # Serialization
    # =========================================================================

    def build_payload(self, session: WizardSession) -> Dict[str, Any]:
        """Serialize an order into the relay's request body."""
        package = self.machine.package_for(session)
        quote = self.machine.quote(session)
        per_person = package.pricing_model == PricingModel.PER_PERSON

        form = CateringForm(**session.contact.model_dump())
        if isinstance(session.quantity, PartySize):
            form.party_size = session.quantity.people
        else:
            form.weight_kg = session.quantity.kg

        request = CateringEmailRequest(
            package=package.name,
            pricing_model=package.pricing_model,
            unit_price=package.unit_price,
            base_items=list(package.included_items),
            steps=[
                StepSelections(title=step.title, selections=session.selections_at(index))
                for index, step in enumerate(package.steps, start=1)
            ],
            include_add_on=session.include_add_on if per_person else False,
            add_on_fee=self.machine.pricing.add_on_fee_for(package) if per_person else None,
            per_person=quote.per_person,
            subtotal=quote.subtotal,
            tax=quote.tax,
            grand_total=quote.grand_total,
            form=form,
        )
        return request.model_dump(mode="json")

    # =========================================================================
    # Submit
    # =========================================================================

    def submit(self, client_id: str, session: WizardSession) -> SubmissionResult:
        """
        Validate and send an order.

        Args:
            client_id: Browsing client submitting the order (for the busy flag)
            session: The order

        Returns:
            SubmissionResult; only SENT means the session may be discarded
        """
        error = self.validate(session)
        if error:
            return SubmissionResult(SubmissionOutcome.INVALID, error)

        with self._lock:
            if client_id in self._in_flight:
                return SubmissionResult(SubmissionOutcome.BUSY, BUSY_MESSAGE)
            self._in_flight.add(client_id)

        try:
            payload = self.build_payload(session)
            try:
                response = requests.post(self.relay_url, json=payload, timeout=self.timeout)
            except requests.RequestException as e:
                logger.error("Catering relay unreachable: %s", e)
                return SubmissionResult(SubmissionOutcome.FAILED, FAILED_MESSAGE)

            if not response.ok:
                logger.error("Catering relay returned HTTP %s", response.status_code)
                return SubmissionResult(SubmissionOutcome.FAILED, FAILED_MESSAGE)

            logger.info("Catering request sent for package '%s'", payload["package"])
            return SubmissionResult(SubmissionOutcome.SENT, SENT_MESSAGE)
        finally:
            with self._lock:
                self._in_flight.discard(client_id)
