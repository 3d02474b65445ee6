"""Tests for cart aggregation."""

from __future__ import annotations

import pytest

from conftest import make_meal
from familycart.catalog.catalog import Catalog
from familycart.planner.cart import build_cart
from familycart.planner.models import NotFoundError, PlannedMeal


def planned(catalog, meal_id: str, times: int = 1) -> PlannedMeal:
    return PlannedMeal(meal=catalog.get_meal(meal_id), times=times, estimated_total=0.0)


class TestBuildCart:
    """Tests for build_cart function."""

    def test_shared_product_is_merged(self, catalog):
        """Rice used by two meals becomes a single cart item."""
        cart = build_cart(
            catalog, [planned(catalog, "porridge"), planned(catalog, "rice-bowl")], 1.0
        )

        rice = [item for item in cart if item.product_id == "rice"]
        assert len(rice) == 1
        assert rice[0].quantity == pytest.approx(0.2 + 0.5)
        assert rice[0].selected_store_id == "s1"

    def test_quantity_scales_with_times_and_weight(self, catalog):
        cart = build_cart(catalog, [planned(catalog, "chicken-rice", times=3)], 1.65)

        chicken = next(item for item in cart if item.product_id == "chicken")
        assert chicken.quantity == pytest.approx(0.2 * 1.65 * 3)
        assert chicken.selected_store_id == "s2"

    def test_order_of_first_use(self, catalog):
        cart = build_cart(
            catalog, [planned(catalog, "chicken-rice"), planned(catalog, "tomato-salad")], 1.0
        )
        assert [item.product_id for item in cart] == ["chicken", "rice", "tomato"]

    def test_empty_plan(self, catalog):
        assert build_cart(catalog, [], 1.0) == []

    def test_unknown_product(self, products, stores):
        """A meal referencing a missing product fails loudly."""
        broken = make_meal("mystery", [("unobtainium", 1.0)])
        catalog = Catalog(products=products, meals=[broken], stores=stores, validate=False)

        with pytest.raises(NotFoundError):
            build_cart(catalog, [planned(catalog, "mystery")], 1.0)
