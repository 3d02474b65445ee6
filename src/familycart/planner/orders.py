"""Order drafts: split a cart into per-store checkout links."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from familycart.planner.models import (
    CartItem,
    InvalidRequestError,
    OrderDraft,
    OrderLink,
)

if TYPE_CHECKING:
    from familycart.catalog.catalog import Catalog

DRAFT_MESSAGE = (
    "Order draft created. Checkout happens on each store's site; "
    "no retail checkout session has been opened."
)


def create_order_draft(
    catalog: Catalog,
    cart: list[CartItem],
    now: Optional[datetime] = None,
) -> OrderDraft:
    """Create an order draft with one checkout link per store in the cart.

    Stores missing from the catalog still get a link entry, named by id and
    with an empty URL.

    Args:
        catalog: Reference catalog
        cart: Cart items with selected stores
        now: Timestamp used for the order id (defaults to the current time)

    Returns:
        OrderDraft

    Raises:
        InvalidRequestError: If the cart is empty.
    """
    if not cart:
        raise InvalidRequestError("Cart is empty.")

    now = now or datetime.now()
    store_ids = list(dict.fromkeys(item.selected_store_id for item in cart))

    links = []
    for store_id in store_ids:
        store = catalog.find_store(store_id)
        links.append(
            OrderLink(
                store_id=store_id,
                store_name=store.name if store else store_id,
                checkout_url=store.checkout_url if store else "",
            )
        )

    return OrderDraft(
        order_id=f"ORD-{int(now.timestamp() * 1000)}",
        status="created",
        order_links=links,
        message=DRAFT_MESSAGE,
    )
