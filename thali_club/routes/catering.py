"""
Catering Configurator Routes
============================

JSON endpoints behind the catering page's order wizard. The wizard state
lives on the server; each user interaction is one call that updates the
client's session and returns the whole WizardView.

Endpoints:
----------
- GET    /catering/packages: Packages on offer
- GET    /catering/order: Current order (state "closed" when none is open)
- POST   /catering/order: Open an order for a package (replaces any open one)
- DELETE /catering/order: Close the open order and clear its snapshot
- POST   /catering/order/selections: Toggle an item on a choice step
- POST   /catering/order/bread: Choose the bread on a bread step
- PUT    /catering/order/weight: Set the tray weight (per-weight packages)
- PUT    /catering/order/party-size: Set the number of guests (per-person)
- PUT    /catering/order/add-on: Turn the eco-friendly set on or off
- PATCH  /catering/order/contact: Update contact form fields
- POST   /catering/order/next: Advance one step (or to the summary)
- POST   /catering/order/back: Go back one step (or leave checkout)
- POST   /catering/order/checkout: Move from the summary to the contact form
- POST   /catering/order/submit: Validate and send the order

Client Identity:
----------------
Browsing clients are identified by the ``catering_client`` cookie. A client
without one gets a new random id on its first call.

Error Handling:
---------------
- 404: No open order, or unknown package on open
- 400: Submission failed validation (single message in ``detail``)
- 409: A submission for this client is already in flight
- 502: The email relay failed; the order stays open for a retry

Out-of-bounds selections and navigation are not errors: the call succeeds and
the view comes back unchanged.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from .. import config
from ..catering.catalog import Package, PricingModel, get_default_catalog
from ..catering.models import PartySize, WeightKg, WizardSession
from ..catering.submission import SubmissionGateway, SubmissionOutcome
from ..catering.wizard import UnknownPackageError, WizardStateMachine
from ..schemas.catering import (
    AddOnRequest,
    BreadRequest,
    ContactOut,
    ContactUpdateRequest,
    CurrentStepOut,
    OpenOrderRequest,
    PackageOut,
    PartySizeRequest,
    QuantityOut,
    QuoteOut,
    SelectionRequest,
    StepOut,
    SubmitResponse,
    WeightRequest,
    WizardView,
)
from ..services.wizard_session import (
    discard_wizard_session,
    get_wizard_session,
    save_wizard_session,
)


logger = logging.getLogger(__name__)

catering_router = APIRouter(prefix="/catering", tags=["Catering"])

NO_OPEN_ORDER = "No catering order is open."

_machine: Optional[WizardStateMachine] = None
_gateway: Optional[SubmissionGateway] = None


# =============================================================================
# Dependencies
# =============================================================================

def get_machine() -> WizardStateMachine:
    """Wizard state machine over the site catalog and the deployment's pricing policy."""
    global _machine
    if _machine is None:
        _machine = WizardStateMachine(get_default_catalog(), config.get_pricing_policy())
    return _machine


def get_gateway(machine: WizardStateMachine = Depends(get_machine)) -> SubmissionGateway:
    global _gateway
    if _gateway is None or _gateway.machine is not machine:
        _gateway = SubmissionGateway(
            machine,
            relay_url=config.CATERING_RELAY_URL,
            timeout=config.CATERING_RELAY_TIMEOUT,
        )
    return _gateway


def get_client_id(request: Request, response: Response) -> str:
    """Read the client cookie, issuing a new id when there is none."""
    client_id = request.cookies.get(config.CLIENT_COOKIE_NAME)
    if not client_id:
        client_id = uuid.uuid4().hex
        response.set_cookie(
            config.CLIENT_COOKIE_NAME,
            client_id,
            httponly=True,
            samesite="lax",
            max_age=60 * 60 * 24 * 30,
        )
        logger.debug("Issued new catering client id %s", client_id)
    return client_id


# =============================================================================
# Helper Functions
# =============================================================================

def serialize_package(machine: WizardStateMachine, package: Package) -> PackageOut:
    per_person = package.pricing_model == PricingModel.PER_PERSON
    return PackageOut(
        name=package.name,
        pricing_model=package.pricing_model,
        unit_price=package.unit_price,
        description=package.description,
        image=package.image,
        included_items=list(package.included_items),
        add_on_fee=machine.pricing.add_on_fee_for(package) if per_person else None,
        steps=[
            StepOut(
                title=step.title,
                kind=step.kind,
                max_selections=step.max_selections,
                options=list(step.options),
            )
            for step in package.steps
        ],
    )


def build_view(machine: WizardStateMachine, session: Optional[WizardSession]) -> WizardView:
    """Render a session (or the absence of one) as a WizardView."""
    state = machine.state_of(session)
    package = machine.package_for(session)
    if package is None:
        return WizardView(state=state)

    current = None
    step = machine.current_step(session)
    if step is not None:
        selected = session.selections_at(session.current_step)
        current = CurrentStepOut(
            index=session.current_step,
            total=package.step_count,
            title=step.title,
            kind=step.kind,
            options=list(step.options),
            max_selections=step.max_selections,
            selected=selected,
            remaining=step.max_selections - len(selected) if step.max_selections else None,
            can_advance=machine.can_advance(session),
        )

    quantity = session.quantity
    quote = machine.quote(session)
    per_person = package.pricing_model == PricingModel.PER_PERSON

    return WizardView(
        state=state,
        package=serialize_package(machine, package),
        current_step=current,
        selections={str(index): items for index, items in sorted(session.step_selections.items())},
        include_add_on=session.include_add_on,
        add_on_fee=machine.pricing.add_on_fee_for(package) if per_person else None,
        quantity=QuantityOut(
            party_size=quantity.people if isinstance(quantity, PartySize) else None,
            weight_kg=quantity.kg if isinstance(quantity, WeightKg) else None,
        ),
        min_party_size=machine.policy.min_party_size if per_person else None,
        min_weight_kg=machine.policy.min_weight_kg if not per_person else None,
        contact=ContactOut(**session.contact.model_dump()),
        quote=QuoteOut(
            per_person=quote.per_person,
            subtotal=quote.subtotal,
            tax=quote.tax,
            grand_total=quote.grand_total,
            has_tax=quote.has_tax,
        ),
    )


def _require_session(client_id: str, machine: WizardStateMachine) -> WizardSession:
    session = get_wizard_session(client_id, machine)
    if session is None:
        raise HTTPException(status_code=404, detail=NO_OPEN_ORDER)
    return session


def _apply(client_id: str, machine: WizardStateMachine, operation, *args, **kwargs) -> WizardView:
    """Run a state machine operation on the client's open order and save any change."""
    session = _require_session(client_id, machine)
    updated = operation(session, *args, **kwargs)
    if updated is not session:
        save_wizard_session(client_id, updated)
    return build_view(machine, updated)


# =============================================================================
# Catalog Endpoints
# =============================================================================

@catering_router.get("/packages", response_model=list[PackageOut])
def list_packages(machine: WizardStateMachine = Depends(get_machine)) -> list[PackageOut]:
    """List the packages customers can configure."""
    return [serialize_package(machine, package) for package in machine.catalog]


# =============================================================================
# Order Lifecycle Endpoints
# =============================================================================

@catering_router.get("/order", response_model=WizardView)
def get_order(
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    """Current order. Restores a saved order the first time a client is seen."""
    return build_view(machine, get_wizard_session(client_id, machine))


@catering_router.post("/order", response_model=WizardView)
def open_order(
    req: OpenOrderRequest,
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    """Open a fresh order for a package."""
    try:
        session = machine.open_order(req.package)
    except UnknownPackageError:
        raise HTTPException(status_code=404, detail=f"Unknown package: {req.package}")
    save_wizard_session(client_id, session)
    return build_view(machine, session)


@catering_router.delete("/order", response_model=WizardView)
def close_order(
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    """Close the open order. Closing with nothing open is a no-op."""
    session = get_wizard_session(client_id, machine)
    machine.close_order(session)
    discard_wizard_session(client_id)
    return build_view(machine, None)


# =============================================================================
# Selection Endpoints
# =============================================================================

@catering_router.post("/order/selections", response_model=WizardView)
def toggle_selection(
    req: SelectionRequest,
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    return _apply(client_id, machine, machine.toggle_choice, req.item, step_index=req.step)


@catering_router.post("/order/bread", response_model=WizardView)
def choose_bread(
    req: BreadRequest,
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    return _apply(client_id, machine, machine.select_bread, req.item, step_index=req.step)


@catering_router.put("/order/weight", response_model=WizardView)
def set_weight(
    req: WeightRequest,
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    return _apply(client_id, machine, machine.set_weight, req.kg)


@catering_router.put("/order/party-size", response_model=WizardView)
def set_party_size(
    req: PartySizeRequest,
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    return _apply(client_id, machine, machine.set_party_size, req.people)


@catering_router.put("/order/add-on", response_model=WizardView)
def set_add_on(
    req: AddOnRequest,
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    return _apply(client_id, machine, machine.set_add_on, req.include)


@catering_router.patch("/order/contact", response_model=WizardView)
def update_contact(
    req: ContactUpdateRequest,
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    return _apply(client_id, machine, machine.update_contact, **req.model_dump(exclude_none=True))


# =============================================================================
# Navigation Endpoints
# =============================================================================

@catering_router.post("/order/next", response_model=WizardView)
def next_step(
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    return _apply(client_id, machine, machine.advance)


@catering_router.post("/order/back", response_model=WizardView)
def previous_step(
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    return _apply(client_id, machine, machine.retreat)


@catering_router.post("/order/checkout", response_model=WizardView)
def enter_checkout(
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
) -> WizardView:
    return _apply(client_id, machine, machine.enter_checkout)


# =============================================================================
# Submission Endpoint
# =============================================================================

@catering_router.post("/order/submit", response_model=SubmitResponse)
def submit_order(
    client_id: str = Depends(get_client_id),
    machine: WizardStateMachine = Depends(get_machine),
    gateway: SubmissionGateway = Depends(get_gateway),
) -> SubmitResponse:
    """
    Send the open order to the email relay.

    Only a successful send closes the order. Any failure leaves it open so the
    customer can fix the form or try again.
    """
    session = _require_session(client_id, machine)
    result = gateway.submit(client_id, session)

    if result.outcome == SubmissionOutcome.INVALID:
        raise HTTPException(status_code=400, detail=result.message)
    if result.outcome == SubmissionOutcome.BUSY:
        raise HTTPException(status_code=409, detail=result.message)
    if result.outcome == SubmissionOutcome.FAILED:
        raise HTTPException(status_code=502, detail=result.message)

    discard_wizard_session(client_id)
    return SubmitResponse(success=True, message=result.message, view=build_view(machine, None))
