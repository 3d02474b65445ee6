"""Greedy, budget-bounded meal selection.

Eligible meals are ranked by per-serving cost and taken cheapest-first in a
repeating cycle until every meal-slot of the period is filled or the next meal
would exceed the budget. This is a heuristic, not an exact optimizer.

Invariants:
- The first meal is always accepted, even if it alone exceeds the budget, so
  a plan is never empty. A single expensive meal can therefore overshoot.
- The loop ends when the target is filled or the budget check fails. Every
  iteration that does not break places a meal, so the cursor always equals
  the number of planned slots and never exceeds the target. The
  SELECTION_CURSOR_FACTOR x target cap is kept as a hard upper bound but
  cannot be reached by the current loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from familycart.logging import get_logger
from familycart.planner.models import Meal, PlannedMeal
from familycart.planner.pricing import meal_cost_per_serving, round_money

if TYPE_CHECKING:
    from familycart.catalog.catalog import Catalog

logger = get_logger(__name__)

SELECTION_CURSOR_FACTOR = 3


@dataclass
class SelectionResult:
    """Outcome of meal selection."""

    meals: list[PlannedMeal] = field(default_factory=list)
    slots_filled: int = 0
    spent: float = 0.0


def rank_meals_by_cost(catalog: Catalog, meals: list[Meal]) -> list[tuple[Meal, float]]:
    """Pair meals with their per-serving cost, cheapest first.

    The sort is stable, so equally priced meals keep catalog order.
    """
    costed = [(meal, meal_cost_per_serving(catalog, meal)) for meal in meals]
    return sorted(costed, key=lambda pair: pair[1])


def select_meals(
    catalog: Catalog,
    eligible: list[Meal],
    budget: float,
    target_slots: int,
    family_weight: float,
) -> SelectionResult:
    """Fill meal-slots greedily within a budget.

    Args:
        catalog: Reference catalog used for pricing
        eligible: Meals that passed the eligibility filter
        budget: Total money available
        target_slots: Meal-slots the period requires
        family_weight: Sum of member serving weights

    Returns:
        SelectionResult with planned meals in first-selection order
    """
    if not eligible or target_slots <= 0:
        return SelectionResult()

    ranked = rank_meals_by_cost(catalog, eligible)
    max_cursor = target_slots * SELECTION_CURSOR_FACTOR

    plan: dict[str, PlannedMeal] = {}
    spent = 0.0
    planned_count = 0
    cursor = 0

    while planned_count < target_slots:
        meal, per_serving = ranked[cursor % len(ranked)]
        cost = per_serving * family_weight

        if spent + cost > budget and planned_count > 0:
            logger.debug(
                "Budget reached after %d of %d slots (spent %.2f, next %s costs %.2f)",
                planned_count, target_slots, spent, meal.id, cost,
            )
            break

        existing = plan.get(meal.id)
        if existing:
            existing.times += 1
            existing.estimated_total += cost
        else:
            plan[meal.id] = PlannedMeal(meal=meal, times=1, estimated_total=cost)

        spent += cost
        planned_count += 1
        cursor += 1

        if cursor > max_cursor:
            logger.debug("Cursor bound %d reached", max_cursor)
            break

    meals = [
        PlannedMeal(
            meal=entry.meal,
            times=entry.times,
            estimated_total=round_money(entry.estimated_total),
        )
        for entry in plan.values()
    ]

    return SelectionResult(meals=meals, slots_filled=planned_count, spent=spent)
