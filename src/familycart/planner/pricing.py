"""Cheapest-store price resolution."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from familycart.planner.models import Meal, NotFoundError

if TYPE_CHECKING:
    from familycart.catalog.catalog import Catalog


def cheapest_store(catalog: Catalog, product_id: str) -> tuple[str, float]:
    """Find the store offering a product at the lowest price.

    Ties go to the store listed first in the product's price mapping.

    Args:
        catalog: Reference catalog
        product_id: Product to price

    Returns:
        (store_id, unit_price) tuple

    Raises:
        NotFoundError: If the product is unknown or has no prices.
    """
    product = catalog.get_product(product_id)
    if not product.prices:
        raise NotFoundError(f"Product {product_id} has no store prices", product_id)

    # min() keeps the first of equal keys, so ties stay in input order
    store_id, price = min(product.prices.items(), key=lambda item: item[1])
    return store_id, price


def meal_cost_per_serving(catalog: Catalog, meal: Meal) -> float:
    """Cost of one adult serving of a meal at cheapest-store prices."""
    return sum(
        cheapest_store(catalog, entry.product_id)[1] * entry.units_per_serving
        for entry in meal.products
    )


def round_money(value: float, places: int = 2) -> float:
    """Round to `places` decimals with halves rounded away from zero.

    The built-in round() sends exact binary halves to the even digit
    (round(0.125, 2) == 0.12); money rounds them up (0.13). The float is
    converted exactly, so values just below a half (1.005 is stored as
    1.00499...) still round down.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
