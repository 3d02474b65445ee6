"""Shopping cart aggregation across planned meals."""

from __future__ import annotations

from typing import TYPE_CHECKING

from familycart.planner.models import CartItem, PlannedMeal
from familycart.planner.pricing import cheapest_store

if TYPE_CHECKING:
    from familycart.catalog.catalog import Catalog


def build_cart(
    catalog: Catalog,
    planned: list[PlannedMeal],
    family_weight: float,
) -> list[CartItem]:
    """Aggregate product quantities for every planned meal occurrence.

    Each product appears once, assigned to its cheapest store. Quantities are
    left unrounded; rounding happens when the plan is assembled.

    Args:
        catalog: Reference catalog
        planned: Selected meals with repetition counts
        family_weight: Sum of member serving weights

    Returns:
        Cart items in order of first use

    Raises:
        NotFoundError: If a meal references an unknown product.
    """
    cart: dict[str, CartItem] = {}

    for entry in planned:
        for ingredient in entry.meal.products:
            needed = ingredient.units_per_serving * family_weight * entry.times
            store_id, _ = cheapest_store(catalog, ingredient.product_id)

            existing = cart.get(ingredient.product_id)
            if existing:
                existing.quantity += needed
            else:
                cart[ingredient.product_id] = CartItem(
                    product_id=ingredient.product_id,
                    quantity=needed,
                    selected_store_id=store_id,
                )

    return list(cart.values())
