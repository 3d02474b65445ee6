"""Per-store grouping of the cart with subtotals and delivery fees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from familycart.logging import get_logger
from familycart.planner.models import CartItem, StoreLine, StoreSummary
from familycart.planner.pricing import round_money

if TYPE_CHECKING:
    from familycart.catalog.catalog import Catalog

logger = get_logger(__name__)


def summarize_stores(catalog: Catalog, cart: list[CartItem]) -> list[StoreSummary]:
    """Group cart items by their assigned store.

    Line price is unit price x unrounded quantity. The store's delivery fee is
    added once per store. Items assigned to a store missing from the catalog
    are dropped rather than failing the plan; unknown products still raise.

    Args:
        catalog: Reference catalog
        cart: Cart items with selected stores

    Returns:
        Store summaries in order of first appearance in the cart

    Raises:
        NotFoundError: If a cart item references an unknown product.
    """
    groups: dict[str, StoreSummary] = {}

    for item in cart:
        product = catalog.get_product(item.product_id)
        store = catalog.find_store(item.selected_store_id)

        unit_price = product.prices.get(item.selected_store_id)

        if store is None or unit_price is None:
            logger.warning(
                "Dropping %s from cart: no price at store %s",
                item.product_id, item.selected_store_id,
            )
            continue

        price = unit_price * item.quantity

        if store.id not in groups:
            groups[store.id] = StoreSummary(store=store, subtotal=0.0)

        group = groups[store.id]
        group.subtotal += price
        group.items.append(
            StoreLine(
                product_name=product.name,
                quantity=round_money(item.quantity),
                unit=product.unit,
                price=price,
            )
        )

    summaries = []
    for group in groups.values():
        summaries.append(
            StoreSummary(
                store=group.store,
                subtotal=round_money(group.subtotal + group.store.delivery_fee),
                items=[
                    StoreLine(
                        product_name=line.product_name,
                        quantity=line.quantity,
                        unit=line.unit,
                        price=round_money(line.price),
                    )
                    for line in group.items
                ],
            )
        )

    return summaries
