"""
Catering Configurator Schemas
=============================

Request bodies and responses for the /catering endpoints.

Every endpoint that touches the open order answers with a WizardView: the
wizard state, the step the customer is on (with its options and how many
picks it still needs), the selections so far, and a fresh quote. The page
re-renders from that one object.

Money is returned as Decimal, which serializes to a string with cents
("429.60") so no float rounding reaches the browser.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..catering.catalog import PricingModel, StepKind
from ..catering.models import WizardState


# =============================================================================
# Requests
# =============================================================================

class OpenOrderRequest(BaseModel):
    package: str = Field(..., min_length=1)


class SelectionRequest(BaseModel):
    """Toggle an item on a choice step (the current step unless step is given)."""
    item: str = Field(..., min_length=1)
    step: Optional[int] = None


class BreadRequest(BaseModel):
    item: str = Field(..., min_length=1)
    step: Optional[int] = None


class WeightRequest(BaseModel):
    kg: Decimal = Field(allow_inf_nan=False)


class PartySizeRequest(BaseModel):
    people: int


class AddOnRequest(BaseModel):
    include: bool


class ContactUpdateRequest(BaseModel):
    """Partial contact form update; omitted fields keep their value."""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    event_type: Optional[str] = None
    date: Optional[str] = None
    message: Optional[str] = None


# =============================================================================
# Responses
# =============================================================================

class StepOut(BaseModel):
    title: str
    kind: StepKind
    max_selections: Optional[int] = None
    options: List[str] = []


class PackageOut(BaseModel):
    """A package as listed on the catering page."""
    name: str
    pricing_model: PricingModel
    unit_price: Decimal
    description: str = ""
    image: Optional[str] = None
    included_items: List[str] = []
    add_on_fee: Optional[Decimal] = None
    steps: List[StepOut] = []


class CurrentStepOut(BaseModel):
    """
    The step the customer is on.

    Attributes:
        index: 1-based step number
        total: Number of steps in the package
        selected: Picks made on this step so far
        remaining: Picks still needed before Next is enabled (choice steps)
        can_advance: Whether Next is enabled
    """
    index: int
    total: int
    title: str
    kind: StepKind
    options: List[str] = []
    max_selections: Optional[int] = None
    selected: List[str] = []
    remaining: Optional[int] = None
    can_advance: bool = False


class QuantityOut(BaseModel):
    party_size: Optional[int] = None
    weight_kg: Optional[Decimal] = None


class QuoteOut(BaseModel):
    per_person: Optional[Decimal] = None
    subtotal: Decimal
    tax: Decimal
    grand_total: Decimal
    has_tax: bool


class ContactOut(BaseModel):
    full_name: str = ""
    phone: str = ""
    email: str = ""
    event_type: str = ""
    date: str = ""
    message: str = ""


class WizardView(BaseModel):
    """Full state of a client's configurator, as the page renders it."""
    state: WizardState
    package: Optional[PackageOut] = None
    current_step: Optional[CurrentStepOut] = None
    selections: Dict[str, List[str]] = {}  # step number -> picks
    include_add_on: bool = False
    add_on_fee: Optional[Decimal] = None
    quantity: Optional[QuantityOut] = None
    min_party_size: Optional[int] = None
    min_weight_kg: Optional[Decimal] = None
    contact: Optional[ContactOut] = None
    quote: Optional[QuoteOut] = None


class SubmitResponse(BaseModel):
    success: bool
    message: str
    view: WizardView
