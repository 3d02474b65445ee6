"""Plan assembly: eligibility, selection, cart and store allocation."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from familycart.logging import get_logger
from familycart.planner.cart import build_cart
from familycart.planner.eligibility import blocked_allergens, filter_eligible_meals
from familycart.planner.models import (
    CartItem,
    InvalidRequestError,
    PlanRequest,
    PlanResponse,
)
from familycart.planner.pricing import round_money
from familycart.planner.selector import select_meals
from familycart.planner.stores import summarize_stores

if TYPE_CHECKING:
    from familycart.catalog.catalog import Catalog

logger = get_logger(__name__)


class MealPlanner:
    """Builds meal plans and shopping carts against a fixed catalog.

    The planner holds no per-request state, so one instance can serve any
    number of requests, including concurrently.
    """

    def __init__(self, catalog: Catalog):
        """Initialize the planner.

        Args:
            catalog: Read-only reference catalog
        """
        self.catalog = catalog

    def build_plan(self, request: PlanRequest) -> PlanResponse:
        """Build a complete plan for a family.

        Args:
            request: Plan request

        Returns:
            PlanResponse with meals, cart, per-store summaries and notes

        Raises:
            InvalidRequestError: If the family is empty or the budget is not
                positive.
            NoEligibleMealsError: If allergies rule out every meal.
            NotFoundError: If the catalog references an unknown product.
        """
        validate_request(request)

        blocked = blocked_allergens(request.family)
        family_weight = request.family_weight
        target_slots = request.period.target_slots

        eligible = filter_eligible_meals(self.catalog, blocked, request.diet)
        selection = select_meals(
            self.catalog,
            eligible,
            budget=request.budget,
            target_slots=target_slots,
            family_weight=family_weight,
        )

        cart = build_cart(self.catalog, selection.meals, family_weight)
        stores = summarize_stores(self.catalog, cart)
        total_estimated = round_money(sum(summary.subtotal for summary in stores))

        notes = []
        if selection.slots_filled < target_slots:
            notes.append(
                f"Budget covers {selection.slots_filled} of {target_slots} meals. "
                "Increase the budget for a full plan."
            )
        if blocked:
            notes.append(f"Excluded allergens: {', '.join(blocked)}.")

        logger.info(
            "Planned %d/%d slots for %d people, total %.2f",
            selection.slots_filled, target_slots, len(request.family), total_estimated,
        )

        return PlanResponse(
            family_size=len(request.family),
            period=request.period,
            budget=request.budget,
            total_estimated=total_estimated,
            meals=selection.meals,
            stores=stores,
            cart=[
                CartItem(
                    product_id=item.product_id,
                    quantity=round_money(item.quantity),
                    selected_store_id=item.selected_store_id,
                )
                for item in cart
            ],
            notes=notes,
            target_slots=target_slots,
            filled_slots=selection.slots_filled,
        )


def validate_request(request: PlanRequest) -> None:
    """Reject requests the planner cannot serve.

    Raises:
        InvalidRequestError: If the family is empty or the budget is not a
            finite positive number.
    """
    if not request.family:
        raise InvalidRequestError("Add at least one family member.")
    if not math.isfinite(request.budget) or request.budget <= 0:
        raise InvalidRequestError("Budget must be greater than 0.")


def build_plan(request: PlanRequest, catalog: Catalog) -> PlanResponse:
    """Build a plan with a one-off planner. See MealPlanner.build_plan."""
    return MealPlanner(catalog).build_plan(request)
