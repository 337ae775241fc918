"""
Email Relay Schemas
===================

Request and response bodies for the endpoints that turn a form into an email:

- POST /api/send-catering-email: a finished catering order
- POST /api/contact: a general contact inquiry

The catering request is also what the configurator's submission gateway
sends, so the two sides share one definition of the payload.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..catering.catalog import PricingModel

MAX_INSTRUCTIONS_LENGTH = 200


class StepSelections(BaseModel):
    """Title of a wizard step and what the customer picked there."""
    title: str
    selections: List[str] = []


class CateringForm(BaseModel):
    """Contact details and quantity as entered by the customer."""
    full_name: str = ""
    phone: str = ""
    email: str = ""
    event_type: str = ""
    date: str = ""
    message: str = ""
    party_size: Optional[int] = None
    weight_kg: Optional[Decimal] = None


class CateringEmailRequest(BaseModel):
    """
    A catering order to be emailed to the kitchen.

    Attributes:
        package: Package name
        pricing_model: per_person or per_weight
        unit_price: Price per person or per kg
        base_items: Items included with every order of the package
        steps: Each configuration step with its selections
        include_add_on: Whether the eco-friendly disposable set was chosen
        add_on_fee: Per-person fee of the eco set
        per_person: Price per person including the add-on (per-person only)
        subtotal: Price before tax
        tax: Tax amount (0 when the deployment quotes tax-free)
        grand_total: Amount due
        form: Customer details, party size or weight
    """
    package: str
    pricing_model: PricingModel = PricingModel.PER_PERSON
    unit_price: Optional[Decimal] = None
    base_items: List[str] = []
    steps: List[StepSelections] = []
    include_add_on: bool = False
    add_on_fee: Optional[Decimal] = None
    per_person: Optional[Decimal] = None
    subtotal: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    grand_total: Decimal = Decimal("0")
    form: CateringForm = Field(default_factory=CateringForm)

    @property
    def is_weight_order(self) -> bool:
        return self.pricing_model == PricingModel.PER_WEIGHT


class ContactInquiryRequest(BaseModel):
    """Inquiry from the site's contact form. Every field is required."""
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    date_time: str = Field(..., min_length=1)
    people: str = Field(..., min_length=1)
    instructions: str = Field(..., min_length=1, max_length=MAX_INSTRUCTIONS_LENGTH)


class RelayResponse(BaseModel):
    """Outcome of an email relay call."""
    success: bool
    message: Optional[str] = None
