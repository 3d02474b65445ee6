"""Data models for plan requests, catalog reference data and plan results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PlanPeriod(Enum):
    """Planning horizons a family can request."""

    MEAL = "meal"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @property
    def target_slots(self) -> int:
        """Number of meal-slots this period has to fill."""
        return PERIOD_SLOTS[self]


class AgeGroup(Enum):
    """Age groups with a fixed serving-weight multiplier."""

    ADULT = "adult"
    TEEN = "teen"
    CHILD = "child"

    @property
    def serving_weight(self) -> float:
        """Fraction of an adult serving eaten by this age group."""
        return AGE_SERVING_WEIGHTS[self]


class DietPreference(Enum):
    """Diet preferences, each narrowing meals to a set of tags."""

    CLASSIC = "classic"
    HEALTHY = "healthy"
    VEGETARIAN = "vegetarian"
    BUDGET = "budget"

    @property
    def required_tags(self) -> frozenset[str]:
        """Meal tags that satisfy this preference (empty = any meal)."""
        return DIET_TAGS[self]


PERIOD_SLOTS: dict[PlanPeriod, int] = {
    PlanPeriod.MEAL: 1,
    PlanPeriod.DAY: 3,
    PlanPeriod.WEEK: 21,
    PlanPeriod.MONTH: 90,
}

AGE_SERVING_WEIGHTS: dict[AgeGroup, float] = {
    AgeGroup.ADULT: 1.0,
    AgeGroup.TEEN: 0.9,
    AgeGroup.CHILD: 0.65,
}

DIET_TAGS: dict[DietPreference, frozenset[str]] = {
    DietPreference.CLASSIC: frozenset(),
    DietPreference.HEALTHY: frozenset({"protein"}),
    DietPreference.VEGETARIAN: frozenset({"vegetarian"}),
    DietPreference.BUDGET: frozenset({"budget"}),
}

KNOWN_ALLERGENS: tuple[str, ...] = (
    "nuts",
    "lactose",
    "gluten",
    "seafood",
    "eggs",
    "soy",
)

PRODUCT_CATEGORIES: tuple[str, ...] = (
    "protein",
    "garnish",
    "vegetable",
    "dairy",
    "basic",
)


# ============================================================================
# Catalog reference data
# ============================================================================


@dataclass(frozen=True)
class Product:
    """A grocery product and its price at every store that stocks it."""

    id: str
    name: str
    unit: str
    allergens: frozenset[str] = frozenset()
    category: str = "basic"
    prices: dict[str, float] = field(default_factory=dict)  # store_id -> price per unit


@dataclass(frozen=True)
class MealProduct:
    """One ingredient line of a meal, per adult serving."""

    product_id: str
    units_per_serving: float


@dataclass(frozen=True)
class Meal:
    """A recipe the planner can schedule."""

    id: str
    title: str
    description: str = ""
    minutes: int = 0
    tags: tuple[str, ...] = ()
    products: tuple[MealProduct, ...] = ()
    steps: tuple[str, ...] = ()
    calories: Optional[int] = None


@dataclass(frozen=True)
class RetailStore:
    """A store that groceries can be ordered from."""

    id: str
    name: str
    delivery_fee: float = 0.0
    checkout_url: str = ""


# ============================================================================
# Requests
# ============================================================================


@dataclass
class FamilyMember:
    """A person the plan has to feed."""

    id: str
    name: str
    age_group: AgeGroup = AgeGroup.ADULT
    allergies: list[str] = field(default_factory=list)


@dataclass
class PlanRequest:
    """Input parameters for the planner."""

    period: PlanPeriod
    budget: float
    family: list[FamilyMember] = field(default_factory=list)
    diet: Optional[DietPreference] = None

    @property
    def family_weight(self) -> float:
        """Sum of serving weights across the family."""
        return sum(member.age_group.serving_weight for member in self.family)


# ============================================================================
# Results
# ============================================================================


@dataclass
class PlannedMeal:
    """A selected meal and how many times it is cooked."""

    meal: Meal
    times: int
    estimated_total: float


@dataclass
class CartItem:
    """Total quantity of one product, assigned to its cheapest store."""

    product_id: str
    quantity: float
    selected_store_id: str


@dataclass
class StoreLine:
    """A priced line item on a store's part of the order."""

    product_name: str
    quantity: float
    unit: str
    price: float


@dataclass
class StoreSummary:
    """Everything bought from a single store, delivery included."""

    store: RetailStore
    subtotal: float
    items: list[StoreLine] = field(default_factory=list)


@dataclass
class PlanResponse:
    """Complete output from the planner."""

    family_size: int
    period: PlanPeriod
    budget: float
    total_estimated: float
    meals: list[PlannedMeal]
    stores: list[StoreSummary]
    cart: list[CartItem]
    notes: list[str] = field(default_factory=list)
    target_slots: int = 0
    filled_slots: int = 0


@dataclass
class OrderLink:
    """Checkout link for one store in an order draft."""

    store_id: str
    store_name: str
    checkout_url: str


@dataclass
class OrderDraft:
    """A not-yet-submitted order split across stores."""

    order_id: str
    status: str
    order_links: list[OrderLink]
    message: str


# Custom exceptions


class PlannerError(Exception):
    """Base exception for familycart errors."""

    pass


class InvalidRequestError(PlannerError):
    """Raised when a plan or order request is malformed."""

    pass


class NotFoundError(PlannerError):
    """Raised when the catalog has no entry for a referenced id."""

    def __init__(self, message: str, entity_id: Optional[str] = None):
        super().__init__(message)
        self.entity_id = entity_id


class NoEligibleMealsError(PlannerError):
    """Raised when allergy constraints rule out every meal."""

    def __init__(self, message: str, blocked_allergens: Optional[list[str]] = None):
        super().__init__(message)
        self.blocked_allergens = blocked_allergens or []


class CatalogError(PlannerError):
    """Raised when catalog data is malformed or inconsistent."""

    pass
