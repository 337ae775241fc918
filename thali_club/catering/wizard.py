"""
Wizard State Machine for Catering Orders.

The configurator walks a customer through a package's steps, then a summary,
then the contact form:

    closed --open_order--> configuring(1) --advance--> ... configuring(n)
        --advance--> summary --enter_checkout--> checkout

Moving forward requires the current step to be complete. Moving back is
always allowed. Out-of-bounds attempts (an extra pick past a step's cap, an
item that is not on offer, a forward move from an incomplete step) leave the
session unchanged instead of raising; the UI simply shows nothing happened.

Every operation takes a WizardSession and returns the resulting session. The
input is never mutated, so callers can compare before/after to decide whether
anything needs saving.
"""

import logging
from decimal import Decimal
from typing import Optional

from .catalog import Catalog, Package, PricingModel, StepDefinition, StepKind
from .models import ContactForm, PartySize, WeightKg, WizardSession, WizardState
from .pricing import PricingEngine, PricingPolicy, Quote

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT_KG = Decimal("1")


class UnknownPackageError(LookupError):
    """Raised when an order is opened for a package the catalog doesn't have."""


class WizardStateMachine:
    """
    Applies user interactions to wizard sessions.

    Args:
        catalog: Packages customers can order
        policy: Pricing policy (tax, add-on fee, quantity floors)
    """

    def __init__(self, catalog: Catalog, policy: PricingPolicy):
        self.catalog = catalog
        self.policy = policy
        self.pricing = PricingEngine(policy)

    # =========================================================================
    # Lookups
    # =========================================================================

    def package_for(self, session: Optional[WizardSession]) -> Optional[Package]:
        """The package a session was opened for, or None."""
        if session is None:
            return None
        return self.catalog.get(session.package_name)

    def state_of(self, session: Optional[WizardSession]) -> WizardState:
        package = self.package_for(session)
        if package is None:
            return WizardState.CLOSED
        if session.checkout_reached:
            return WizardState.CHECKOUT
        if session.current_step > package.step_count:
            return WizardState.SUMMARY
        return WizardState.CONFIGURING

    def current_step(self, session: WizardSession) -> Optional[StepDefinition]:
        """Step definition the session is on, None at summary or checkout."""
        if session.checkout_reached:
            return None
        package = self.package_for(session)
        return package.step(session.current_step) if package else None

    def quote(self, session: WizardSession) -> Quote:
        return self.pricing.quote(self.package_for(session), session)

    # =========================================================================
    # Opening and closing
    # =========================================================================

    def open_order(self, package_name: str) -> WizardSession:
        """
        Start a fresh order for a package.

        Raises:
            UnknownPackageError: If the package is not in the catalog
        """
        package = self.catalog.get(package_name)
        if package is None:
            raise UnknownPackageError(package_name)

        if package.pricing_model == PricingModel.PER_WEIGHT:
            quantity = WeightKg(kg=max(DEFAULT_WEIGHT_KG, self.policy.min_weight_kg))
        else:
            quantity = PartySize(people=self.policy.min_party_size)

        logger.info("Opened catering order for package '%s'", package.name)
        return WizardSession(package_name=package.name, quantity=quantity)

    def close_order(self, session: Optional[WizardSession]) -> None:
        """Discard an order. The caller is responsible for clearing its snapshot."""
        if session is not None:
            logger.info("Closed catering order for package '%s'", session.package_name)
        return None

    # =========================================================================
    # Selections
    # =========================================================================

    def _configuring_step(
        self, session: WizardSession, step_index: Optional[int], kind: StepKind
    ) -> Optional[int]:
        """Resolve a step index for a selection, or None if selection isn't allowed there."""
        if session.checkout_reached:
            return None
        package = self.package_for(session)
        if package is None:
            return None
        index = session.current_step if step_index is None else step_index
        step = package.step(index)
        if step is None or step.kind != kind:
            return None
        return index

    def toggle_choice(
        self, session: WizardSession, item: str, step_index: Optional[int] = None
    ) -> WizardSession:
        """
        Pick or unpick an item on a choice step.

        Picked items are removed. Unpicked items are added only while the step
        is under its cap; at the cap the toggle does nothing.
        """
        index = self._configuring_step(session, step_index, StepKind.CHOICE)
        if index is None:
            return session
        step = self.package_for(session).step(index)
        if item not in step.options:
            return session

        current = session.selections_at(index)
        if item in current:
            current.remove(item)
        elif len(current) < step.max_selections:
            current.append(item)
        else:
            logger.debug("Ignoring '%s': step %d already has %d picks", item, index, step.max_selections)
            return session
        return session.with_selections(index, current)

    def select_bread(
        self, session: WizardSession, item: str, step_index: Optional[int] = None
    ) -> WizardSession:
        """Record the single bread choice for a bread step, replacing any earlier pick."""
        index = self._configuring_step(session, step_index, StepKind.BREAD_CHOICE)
        if index is None:
            return session
        if item not in self.package_for(session).step(index).options:
            return session
        return session.with_selections(index, [item])

    # =========================================================================
    # Quantity, add-on, contact form
    # =========================================================================

    def set_weight(self, session: WizardSession, kg) -> WizardSession:
        """Set the tray weight, clamped to the policy's weight range."""
        if not isinstance(session.quantity, WeightKg):
            return session
        kg = Decimal(str(kg))
        if not kg.is_finite():
            return session
        kg = min(max(kg, self.policy.min_weight_kg), self.policy.max_weight_kg)
        return session.model_copy(update={"quantity": WeightKg(kg=kg)})

    def set_party_size(self, session: WizardSession, people: int) -> WizardSession:
        """Set the number of guests, clamped to the policy's party-size range."""
        if not isinstance(session.quantity, PartySize):
            return session
        people = min(max(int(people), self.policy.min_party_size), self.policy.max_party_size)
        return session.model_copy(update={"quantity": PartySize(people=people)})

    def set_add_on(self, session: WizardSession, include: bool) -> WizardSession:
        """Turn the eco-set add-on on or off (per-person packages only)."""
        package = self.package_for(session)
        if package is None or package.pricing_model != PricingModel.PER_PERSON:
            return session
        return session.model_copy(update={"include_add_on": bool(include)})

    def update_contact(self, session: WizardSession, **fields) -> WizardSession:
        """Merge contact form fields. Unknown field names are ignored."""
        known = {
            name: str(value)
            for name, value in fields.items()
            if name in ContactForm.model_fields and value is not None
        }
        if not known:
            return session
        contact = session.contact.model_copy(update=known)
        return session.model_copy(update={"contact": contact})

    # =========================================================================
    # Navigation
    # =========================================================================

    def can_advance(self, session: WizardSession, step_index: Optional[int] = None) -> bool:
        """
        Whether a step is complete enough to move past.

        Choice steps need exactly max_selections picks, bread steps one pick,
        and weight steps a positive weight.
        """
        package = self.package_for(session)
        if package is None:
            return False
        index = session.current_step if step_index is None else step_index
        step = package.step(index)
        if step is None:
            return False

        count = len(session.selections_at(index))
        if step.kind == StepKind.CHOICE:
            return count == step.max_selections
        if step.kind == StepKind.BREAD_CHOICE:
            return count >= 1
        if step.kind == StepKind.WEIGHT_INPUT:
            return isinstance(session.quantity, WeightKg) and session.quantity.kg > 0
        raise TypeError(f"Unhandled step kind: {step.kind!r}")

    def advance(self, session: WizardSession) -> WizardSession:
        """Move to the next step, or to the summary after the last step."""
        if self.state_of(session) != WizardState.CONFIGURING:
            return session
        if not self.can_advance(session):
            return session
        return session.model_copy(update={"current_step": session.current_step + 1})

    def retreat(self, session: WizardSession) -> WizardSession:
        """Leave checkout for the summary, or go back one step (never before step 1)."""
        if session.checkout_reached:
            return session.model_copy(update={"checkout_reached": False})
        if session.current_step <= 1:
            return session
        return session.model_copy(update={"current_step": session.current_step - 1})

    def enter_checkout(self, session: WizardSession) -> WizardSession:
        """Proceed from the summary to the contact form."""
        if self.state_of(session) != WizardState.SUMMARY:
            return session
        return session.model_copy(update={"checkout_reached": True})
