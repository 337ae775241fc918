"""
Tests for the catering catalog.
"""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from thali_club.catering.catalog import (
    ADD_ON_MENU,
    BREAD_OPTIONS,
    Catalog,
    Package,
    PricingModel,
    StepDefinition,
    StepKind,
    get_default_catalog,
)


def _choice_step(max_selections=2, category="dessertChoices"):
    return StepDefinition(
        title="Pick sweets",
        kind=StepKind.CHOICE,
        category=category,
        max_selections=max_selections,
    )


class TestDefaultCatalog:
    """The packages shown on the site."""

    def test_has_four_packages(self, catalog):
        assert len(catalog) == 4
        assert "Vegetarian" in catalog
        assert "Curry Tray by Weight" in catalog

    def test_vegetarian_steps(self, catalog):
        package = catalog.get("Vegetarian")
        assert package.pricing_model == PricingModel.PER_PERSON
        assert package.unit_price == Decimal("16.99")
        assert [step.max_selections for step in package.steps] == [3, 1]

    def test_snacks_package_ends_with_bread_step(self, catalog):
        package = catalog.get("Snacks & Main Course")
        assert package.step_count == 4
        assert package.steps[-1].kind == StepKind.BREAD_CHOICE
        assert package.steps[-1].options == BREAD_OPTIONS

    def test_weight_package_has_single_weight_step(self, catalog):
        package = catalog.get("Curry Tray by Weight")
        assert package.pricing_model == PricingModel.PER_WEIGHT
        assert package.step_count == 1
        assert package.steps[0].kind == StepKind.WEIGHT_INPUT
        assert package.steps[0].options == ()

    def test_main_course_step_offers_paneer_and_veg(self, catalog):
        step = catalog.get("Vegetarian").step(1)
        assert "Shahi Paneer" in step.options
        assert "Channa Masala" in step.options
        assert len(step.options) == len(ADD_ON_MENU["vegetarianChoices"]) + len(ADD_ON_MENU["paneerChoices"])

    def test_step_lookup_is_one_based(self, catalog):
        package = catalog.get("Vegetarian")
        assert package.step(0) is None
        assert package.step(1).title.startswith("Select 3")
        assert package.step(3) is None

    def test_unknown_package(self, catalog):
        assert catalog.get("Sushi Platter") is None
        assert catalog.get(None) is None

    def test_fresh_catalog_each_call(self):
        assert get_default_catalog() is not get_default_catalog()


class TestStepDefinitionValidation:
    """Invalid steps are rejected at construction."""

    def test_choice_step_needs_cap(self):
        with pytest.raises(ValidationError):
            StepDefinition(title="x", kind=StepKind.CHOICE, category="dessertChoices")

    def test_choice_step_needs_known_category(self):
        with pytest.raises(ValidationError):
            _choice_step(category="sushi")

    def test_bread_step_cannot_have_cap(self):
        with pytest.raises(ValidationError):
            StepDefinition(title="Bread", kind=StepKind.BREAD_CHOICE, max_selections=1)

    def test_steps_are_frozen(self):
        step = _choice_step()
        with pytest.raises(ValidationError):
            step.max_selections = 5


class TestPackageValidation:
    """Package invariants."""

    def test_weight_package_rejects_choice_steps(self):
        with pytest.raises(ValidationError):
            Package(
                name="Bad Tray",
                pricing_model=PricingModel.PER_WEIGHT,
                unit_price=Decimal("25"),
                steps=(_choice_step(),),
            )

    def test_per_person_package_rejects_weight_step(self):
        with pytest.raises(ValidationError):
            Package(
                name="Bad Thali",
                pricing_model=PricingModel.PER_PERSON,
                unit_price=Decimal("20"),
                steps=(StepDefinition(title="kg", kind=StepKind.WEIGHT_INPUT),),
            )

    def test_package_needs_steps(self):
        with pytest.raises(ValidationError):
            Package(name="Empty", pricing_model=PricingModel.PER_PERSON, unit_price=Decimal("10"), steps=())

    def test_package_needs_positive_price(self):
        with pytest.raises(ValidationError):
            Package(
                name="Free",
                pricing_model=PricingModel.PER_PERSON,
                unit_price=Decimal("0"),
                steps=(_choice_step(),),
            )

    def test_duplicate_names_rejected(self):
        package = Package(
            name="Thali",
            pricing_model=PricingModel.PER_PERSON,
            unit_price=Decimal("10"),
            steps=(_choice_step(),),
        )
        with pytest.raises(ValueError):
            Catalog([package, package])
