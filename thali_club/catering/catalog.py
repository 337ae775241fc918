"""
Catering catalog: packages, their configuration steps, and the add-on menu.

Packages are immutable. Invariant violations (a weight package with a choice
step, a choice step without a cap, ...) raise at construction so a broken
catalog never reaches the wizard.
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator


class PricingModel(str, Enum):
    """How a package is priced."""
    PER_PERSON = "per_person"
    PER_WEIGHT = "per_weight"


class StepKind(str, Enum):
    """Kind of input a wizard step asks for."""
    CHOICE = "choice"  # pick up to max_selections from a menu category
    BREAD_CHOICE = "bread_choice"  # pick exactly one bread
    WEIGHT_INPUT = "weight_input"  # enter a weight in kg


BREAD_OPTIONS: Tuple[str, ...] = ("Roti", "Tandoori Naan")


# Menu categories offered by choice steps
ADD_ON_MENU: Dict[str, Tuple[str, ...]] = {
    "vegetarianSnacks": (
        "Aloo Tikki",
        "Samosa",
        "Palak Pakora",
        "Veg Pakora",
        "Paneer Pakora",
        "Chat Papri",
        "Spring Roll",
        "Dahi Bhalla",
        "Bhel Puri",
        "Pani Puri",
        "Chilli Paneer",
        "Veg Manchurian",
        "Tandoori Soya Chaap",
    ),
    "chineseSnacks": (
        "Manchurian",
        "Veg Chilli",
        "Chilli Paneer",
        "Chilli Potato",
        "Fried Rice (Veg)",
        "Noodles (Veg)",
    ),
    "paneerChoices": (
        "Shahi Paneer",
        "Palak Saag Paneer",
        "Mutter Paneer",
        "Malai Kofta",
    ),
    "vegetarianChoices": (
        "Mix Veg",
        "Kebab Curry",
        "Kadhi Pakoda",
        "Aloo Gobhi",
        "Palak Saag",
        "Karahi Soya Chaap",
        "Veg Manchurian",
        "Soya Chaap Tikka Masala",
        "Channa Masala",
    ),
    "dessertChoices": ("Gajjar Halwa", "Gulab Jamun", "Suji Halwa"),
}

# Main-course steps offer paneer dishes alongside the vegetarian mains
COMBINED_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "vegetarianChoices": ("vegetarianChoices", "paneerChoices"),
}


class StepDefinition(BaseModel):
    """One stage of a package's configuration wizard."""
    model_config = ConfigDict(frozen=True)

    title: str
    kind: StepKind
    category: Optional[str] = None
    max_selections: Optional[int] = None

    @model_validator(mode="after")
    def check_kind_fields(self):
        if self.kind == StepKind.CHOICE:
            if self.category not in ADD_ON_MENU:
                raise ValueError(f"Choice step '{self.title}' has unknown category {self.category!r}")
            if self.max_selections is None or self.max_selections < 1:
                raise ValueError(f"Choice step '{self.title}' needs max_selections >= 1")
        elif self.category is not None or self.max_selections is not None:
            raise ValueError(f"{self.kind.value} step '{self.title}' cannot set category or max_selections")
        return self

    @property
    def options(self) -> Tuple[str, ...]:
        """Items a user may pick at this step (empty for weight input)."""
        if self.kind == StepKind.BREAD_CHOICE:
            return BREAD_OPTIONS
        if self.kind == StepKind.CHOICE:
            categories = COMBINED_CATEGORIES.get(self.category, (self.category,))
            return tuple(item for cat in categories for item in ADD_ON_MENU[cat])
        return ()


class Package(BaseModel):
    """A purchasable catering offering."""
    model_config = ConfigDict(frozen=True)

    name: str
    pricing_model: PricingModel
    unit_price: Decimal
    included_items: Tuple[str, ...] = ()
    steps: Tuple[StepDefinition, ...]
    description: str = ""
    image: Optional[str] = None
    # Overrides the deployment's default eco-set fee when set
    add_on_fee: Optional[Decimal] = None

    @model_validator(mode="after")
    def check_steps(self):
        if not self.steps:
            raise ValueError(f"Package '{self.name}' has no steps")
        if self.unit_price <= 0:
            raise ValueError(f"Package '{self.name}' needs a positive unit price")
        if self.pricing_model == PricingModel.PER_WEIGHT:
            if len(self.steps) != 1 or self.steps[0].kind != StepKind.WEIGHT_INPUT:
                raise ValueError(f"Weight package '{self.name}' must have exactly one weight step")
            if self.add_on_fee is not None:
                raise ValueError(f"Weight package '{self.name}' cannot carry an add-on fee")
        elif any(step.kind == StepKind.WEIGHT_INPUT for step in self.steps):
            raise ValueError(f"Per-person package '{self.name}' cannot have a weight step")
        return self

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def step(self, index: int) -> Optional[StepDefinition]:
        """Return the step at a 1-based index, or None outside the real steps."""
        if 1 <= index <= len(self.steps):
            return self.steps[index - 1]
        return None


class Catalog:
    """Read-only collection of packages, looked up by name."""

    def __init__(self, packages):
        self._packages: Dict[str, Package] = {}
        for package in packages:
            if package.name in self._packages:
                raise ValueError(f"Duplicate package name: {package.name}")
            self._packages[package.name] = package

    def __iter__(self):
        return iter(self._packages.values())

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, name: str) -> bool:
        return name in self._packages

    def get(self, name: Optional[str]) -> Optional[Package]:
        if name is None:
            return None
        return self._packages.get(name)


DEFAULT_PACKAGES: Tuple[Package, ...] = (
    Package(
        name="Vegetarian",
        pricing_model=PricingModel.PER_PERSON,
        unit_price=Decimal("16.99"),
        image="/images/res/1.jpg",
        description="Pick 3 Main Dishes & 1 Dessert",
        included_items=("Boondi Raita", "Jeera Rice", "Salad", "Roti or Naan"),
        steps=(
            StepDefinition(
                title="Select 3 Main Dishes (Paneer or Veg)",
                kind=StepKind.CHOICE,
                category="vegetarianChoices",
                max_selections=3,
            ),
            StepDefinition(
                title="Select 1 Dessert",
                kind=StepKind.CHOICE,
                category="dessertChoices",
                max_selections=1,
            ),
        ),
    ),
    Package(
        name="Snacks & Main Course",
        pricing_model=PricingModel.PER_PERSON,
        unit_price=Decimal("25.00"),
        image="/images/res/2.jpg",
        description="Pick 2 Veg Snacks, 1 Main Dish (Paneer or Veg), 2 Sweets & Bread",
        included_items=("Boondi Raita", "Jeera Rice", "Salad"),
        steps=(
            StepDefinition(
                title="Pick 2 Veg Snacks",
                kind=StepKind.CHOICE,
                category="vegetarianSnacks",
                max_selections=2,
            ),
            StepDefinition(
                title="Pick 1 Main Dish (Paneer or Veg)",
                kind=StepKind.CHOICE,
                category="vegetarianChoices",
                max_selections=1,
            ),
            StepDefinition(
                title="Pick 2 Sweets",
                kind=StepKind.CHOICE,
                category="dessertChoices",
                max_selections=2,
            ),
            StepDefinition(title="Choose Bread Option", kind=StepKind.BREAD_CHOICE),
        ),
    ),
    Package(
        name="Premium Vegetarian",
        pricing_model=PricingModel.PER_PERSON,
        unit_price=Decimal("30.00"),
        image="/images/res/3.jpg",
        description="Pick 4 Veg Snacks, 4 Main Course (Paneer or Veg) & 1 Dessert",
        included_items=("Rice", "Raita", "Salad", "Plain Naan or Tandoori Naan"),
        steps=(
            StepDefinition(
                title="Pick 4 Veg Snacks",
                kind=StepKind.CHOICE,
                category="vegetarianSnacks",
                max_selections=4,
            ),
            StepDefinition(
                title="Pick 4 Main Dishes (Paneer or Veg)",
                kind=StepKind.CHOICE,
                category="vegetarianChoices",
                max_selections=4,
            ),
            StepDefinition(
                title="Pick 1 Dessert",
                kind=StepKind.CHOICE,
                category="dessertChoices",
                max_selections=1,
            ),
        ),
    ),
    Package(
        name="Curry Tray by Weight",
        pricing_model=PricingModel.PER_WEIGHT,
        unit_price=Decimal("25.00"),
        image="/images/res/4.jpg",
        description="Chef's mixed curry tray, priced per kilogram",
        included_items=("Jeera Rice", "Salad"),
        steps=(
            StepDefinition(title="Enter Tray Weight (kg)", kind=StepKind.WEIGHT_INPUT),
        ),
    ),
)


def get_default_catalog() -> Catalog:
    """Catalog of the packages shown on the site."""
    return Catalog(DEFAULT_PACKAGES)
