"""Pytest fixtures for familycart tests."""

from __future__ import annotations

import pytest

from familycart.catalog.catalog import Catalog
from familycart.catalog.loader import load_catalog
from familycart.planner.models import (
    AgeGroup,
    FamilyMember,
    Meal,
    MealProduct,
    Product,
    RetailStore,
)


def make_meal(meal_id: str, items: list[tuple[str, float]], tags=()) -> Meal:
    """Build a meal from (product_id, units_per_serving) pairs."""
    return Meal(
        id=meal_id,
        title=meal_id.replace("-", " ").title(),
        tags=tuple(tags),
        products=tuple(MealProduct(pid, units) for pid, units in items),
    )


def adult(name: str = "Alex", allergies=None, member_id: str = "1") -> FamilyMember:
    return FamilyMember(
        id=member_id, name=name, age_group=AgeGroup.ADULT, allergies=list(allergies or [])
    )


@pytest.fixture
def stores():
    """Two stores with different delivery fees."""
    return [
        RetailStore(id="s1", name="Store One", delivery_fee=5.0, checkout_url="https://one.test/checkout"),
        RetailStore(id="s2", name="Store Two", delivery_fee=2.0, checkout_url="https://two.test/cart"),
    ]


@pytest.fixture
def products():
    """Products with known cheapest stores.

    rice -> s1 (2.0), chicken -> s2 (8.0), milk -> s1 (tie at 1.0),
    bread -> s2 (1.5), peanuts -> s1 (4.0), tomato -> s2 (2.5)
    """
    return [
        Product(id="rice", name="Rice", unit="kg", prices={"s1": 2.0, "s2": 3.0}),
        Product(id="chicken", name="Chicken", unit="kg", category="protein",
                prices={"s1": 10.0, "s2": 8.0}),
        Product(id="milk", name="Milk", unit="l", category="dairy",
                allergens=frozenset({"lactose"}), prices={"s1": 1.0, "s2": 1.0}),
        Product(id="bread", name="Bread", unit="pcs",
                allergens=frozenset({"gluten"}), prices={"s2": 1.5}),
        Product(id="peanuts", name="Peanuts", unit="kg",
                allergens=frozenset({"nuts"}), prices={"s1": 4.0}),
        Product(id="tomato", name="Tomato", unit="kg", category="vegetable",
                prices={"s1": 3.0, "s2": 2.5}),
    ]


@pytest.fixture
def meals():
    """Meals ordered so that catalog order differs from cost order.

    Per-serving costs: rice-bowl 1.5, chicken-rice 2.6, porridge 0.7,
    toast 1.15, tomato-salad 1.0
    """
    return [
        make_meal("rice-bowl", [("rice", 0.5), ("tomato", 0.2)], tags=["budget", "vegetarian"]),
        make_meal("chicken-rice", [("chicken", 0.2), ("rice", 0.5)], tags=["protein"]),
        make_meal("porridge", [("milk", 0.3), ("rice", 0.2)], tags=["budget", "vegetarian"]),
        make_meal("toast", [("bread", 0.5), ("peanuts", 0.1)], tags=["budget", "vegetarian"]),
        make_meal("tomato-salad", [("tomato", 0.4)], tags=["vegetarian"]),
    ]


@pytest.fixture
def catalog(products, meals, stores):
    """Small synthetic catalog."""
    return Catalog(products=products, meals=meals, stores=stores)


@pytest.fixture
def allergen_catalog(stores):
    """Catalog in which every meal contains nuts or gluten."""
    return Catalog(
        products=[
            Product(id="peanuts", name="Peanuts", unit="kg",
                    allergens=frozenset({"nuts"}), prices={"s1": 4.0}),
            Product(id="bread", name="Bread", unit="pcs",
                    allergens=frozenset({"gluten"}), prices={"s2": 1.5}),
        ],
        meals=[
            make_meal("peanut-snack", [("peanuts", 0.1)]),
            make_meal("bread-plate", [("bread", 1.0)]),
        ],
        stores=stores,
    )


@pytest.fixture
def sample_catalog():
    """The bundled sample catalog."""
    return load_catalog()
