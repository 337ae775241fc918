"""
Pricing Engine for Catering Orders.

This module turns an open order into a price quotation. Two pricing models
are supported:

- **Per person**: ``(unit price + eco-set fee if chosen) x party size``, then
  the deployment's tax rate on top.
- **Per weight**: ``kg x unit price``. No add-on and no tax.

All arithmetic is done on ``Decimal`` and every money amount is rounded to
cents with ROUND_HALF_UP, so toggling the add-on back and forth never drifts.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional

from .catalog import Package, PricingModel
from .models import PartySize, WeightKg, WizardSession


CENT = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    """Round to 2 decimal places for currency, whatever the magnitude."""
    amount = Decimal(amount)
    with localcontext() as ctx:
        # Integer digits plus the two cent digits must fit in the precision
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PricingPolicy:
    """
    Deployment-wide pricing knobs.

    Attributes:
        tax_rate: Fraction applied to per-person subtotals (0 = no tax line)
        add_on_fee: Default eco-set fee per person
        min_party_size: Smallest party a per-person order may have
        min_weight_kg: Smallest weight a per-weight order may have
        max_party_size: Largest party the configurator accepts
        max_weight_kg: Largest weight the configurator accepts
    """

    tax_rate: Decimal = Decimal("0.13")
    add_on_fee: Decimal = Decimal("0.99")
    min_party_size: int = 15
    min_weight_kg: Decimal = Decimal("0.5")
    max_party_size: int = 5000
    max_weight_kg: Decimal = Decimal("500")

    def __post_init__(self):
        if self.tax_rate < 0:
            raise ValueError("tax_rate cannot be negative")
        if self.add_on_fee < 0:
            raise ValueError("add_on_fee cannot be negative")
        if self.min_party_size < 1:
            raise ValueError("min_party_size must be at least 1")
        if self.min_weight_kg <= 0:
            raise ValueError("min_weight_kg must be positive")
        if self.max_party_size < self.min_party_size:
            raise ValueError("max_party_size cannot be below min_party_size")
        if self.max_weight_kg < self.min_weight_kg:
            raise ValueError("max_weight_kg cannot be below min_weight_kg")


@dataclass(frozen=True)
class Quote:
    """Price quotation for an order. per_person is None for weight orders."""

    per_person: Optional[Decimal]
    subtotal: Decimal
    tax: Decimal
    grand_total: Decimal

    @property
    def has_tax(self) -> bool:
        return self.tax > 0


class PricingEngine:
    """
    Computes quotations for wizard sessions under a pricing policy.

    The engine is stateless apart from its policy; every method is a pure
    function of its arguments.
    """

    def __init__(self, policy: PricingPolicy):
        self.policy = policy

    def add_on_fee_for(self, package: Package) -> Decimal:
        """Eco-set fee for a package: its own fee, else the policy default."""
        if package.add_on_fee is not None:
            return package.add_on_fee
        return self.policy.add_on_fee

    def per_unit(self, package: Package, include_add_on: bool) -> Decimal:
        """Price per person (or per kg) before quantity is applied."""
        if include_add_on and package.pricing_model == PricingModel.PER_PERSON:
            return package.unit_price + self.add_on_fee_for(package)
        return package.unit_price

    def quote(self, package: Package, session: WizardSession) -> Quote:
        """
        Price an open order.

        Args:
            package: The package the session was opened for
            session: The wizard session

        Returns:
            Quote with per-person price, subtotal, tax, and grand total

        Raises:
            TypeError: If the session's quantity does not match the package's
                pricing model
        """
        quantity = session.quantity

        if package.pricing_model == PricingModel.PER_PERSON:
            if not isinstance(quantity, PartySize):
                raise TypeError(f"Per-person package '{package.name}' needs a party size")
            per_person = self.per_unit(package, session.include_add_on)
            subtotal = round_money(per_person * quantity.people)
            tax = round_money(subtotal * self.policy.tax_rate)
            return Quote(
                per_person=round_money(per_person),
                subtotal=subtotal,
                tax=tax,
                grand_total=subtotal + tax,
            )

        if package.pricing_model == PricingModel.PER_WEIGHT:
            if not isinstance(quantity, WeightKg):
                raise TypeError(f"Weight package '{package.name}' needs a weight")
            subtotal = round_money(quantity.kg * package.unit_price)
            return Quote(
                per_person=None,
                subtotal=subtotal,
                tax=Decimal("0.00"),
                grand_total=subtotal,
            )

        raise TypeError(f"Unhandled pricing model: {package.pricing_model!r}")
