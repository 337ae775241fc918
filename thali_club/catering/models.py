"""
Pydantic models for an in-progress catering order.

A WizardSession is the whole state of one browsing client's configurator:
which package is open, where the wizard is, what has been picked, the
quantity, and the contact form. Sessions are treated as values; the wizard
state machine returns updated copies instead of mutating in place.

Quantity is a tagged variant so per-person and per-weight orders cannot be
confused:

    PartySize(people=20)      # per_person packages
    WeightKg(kg=Decimal("2.5"))  # per_weight packages
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Dict, List, Literal, Union

from pydantic import BaseModel, Field


class WizardState(str, Enum):
    """Where a client is in the configurator."""
    CLOSED = "closed"  # no order open
    CONFIGURING = "configuring"  # on one of the package's steps
    SUMMARY = "summary"  # reviewing selections and quote
    CHECKOUT = "checkout"  # filling in the contact form


class PartySize(BaseModel):
    """Number of guests for a per-person package."""
    kind: Literal["party_size"] = "party_size"
    people: int


class WeightKg(BaseModel):
    """Tray weight for a per-weight package."""
    kind: Literal["weight"] = "weight"
    kg: Decimal


Quantity = Annotated[Union[PartySize, WeightKg], Field(discriminator="kind")]


class ContactForm(BaseModel):
    """
    Customer details collected at checkout.

    Only validated when the order is submitted.

    Attributes:
        full_name: Customer's full name
        phone: Contact phone number
        email: Contact email address
        event_type: Event type or location
        date: Date of the event (yyyy-mm-dd as typed by the user)
        message: Anything else the kitchen should know
    """
    full_name: str = ""
    phone: str = ""
    email: str = ""
    event_type: str = ""
    date: str = ""
    message: str = ""


class WizardSession(BaseModel):
    """State of an open catering order."""

    package_name: str
    current_step: int = 1
    step_selections: Dict[int, List[str]] = Field(default_factory=dict)
    include_add_on: bool = False
    quantity: Quantity
    contact: ContactForm = Field(default_factory=ContactForm)
    checkout_reached: bool = False

    def selections_at(self, step_index: int) -> List[str]:
        """Selections recorded for a step, in the order they were picked."""
        return list(self.step_selections.get(step_index, []))

    def with_selections(self, step_index: int, items: List[str]) -> "WizardSession":
        """Copy of this session with one step's selections replaced."""
        selections = {idx: list(values) for idx, values in self.step_selections.items()}
        selections[step_index] = list(items)
        return self.model_copy(update={"step_selections": selections})
