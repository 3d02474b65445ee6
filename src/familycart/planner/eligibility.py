"""Meal eligibility: allergen exclusion and diet-tag narrowing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from familycart.logging import get_logger
from familycart.planner.models import (
    DietPreference,
    FamilyMember,
    Meal,
    NoEligibleMealsError,
)

if TYPE_CHECKING:
    from familycart.catalog.catalog import Catalog

logger = get_logger(__name__)

# Diet narrowing only applies when it leaves at least this many meals
MIN_DIET_MATCHES = 3


def blocked_allergens(family: Iterable[FamilyMember]) -> list[str]:
    """Union of all members' allergies, in first-seen order."""
    return list(
        dict.fromkeys(allergy for member in family for allergy in member.allergies)
    )


def meal_contains_allergen(
    catalog: Catalog, meal: Meal, blocked: set[str] | frozenset[str]
) -> bool:
    """Check whether any product in a meal carries a blocked allergen."""
    return any(
        not catalog.get_product(entry.product_id).allergens.isdisjoint(blocked)
        for entry in meal.products
    )


def meal_matches_diet(meal: Meal, diet: Optional[DietPreference]) -> bool:
    """Check whether a meal satisfies a diet preference."""
    if diet is None or not diet.required_tags:
        return True
    return any(tag in diet.required_tags for tag in meal.tags)


def filter_eligible_meals(
    catalog: Catalog,
    blocked: Iterable[str],
    diet: Optional[DietPreference] = None,
) -> list[Meal]:
    """Select the meals a family can be offered.

    Algorithm:
    1. Drop every meal containing a blocked allergen
    2. If the diet requires tags, keep only matching meals, but only when at
       least MIN_DIET_MATCHES remain; otherwise keep all allergen-safe meals

    Args:
        catalog: Reference catalog
        blocked: Allergens the family must avoid
        diet: Optional diet preference

    Returns:
        Eligible meals in catalog order

    Raises:
        NoEligibleMealsError: If no allergen-safe meal exists.
    """
    blocked_list = list(blocked)
    blocked_set = frozenset(blocked_list)

    safe_meals = [
        meal for meal in catalog.meals
        if not meal_contains_allergen(catalog, meal, blocked_set)
    ]

    if not safe_meals:
        raise NoEligibleMealsError(
            "No meals are safe for the selected allergies: "
            + (", ".join(blocked_list) or "none"),
            blocked_allergens=blocked_list,
        )

    diet_meals = [meal for meal in safe_meals if meal_matches_diet(meal, diet)]
    if len(diet_meals) >= MIN_DIET_MATCHES:
        logger.debug(
            "Diet %s narrowed %d safe meals to %d",
            diet.value if diet else None, len(safe_meals), len(diet_meals),
        )
        return diet_meals

    logger.debug(
        "Only %d meals match diet %s, keeping all %d safe meals",
        len(diet_meals), diet.value if diet else None, len(safe_meals),
    )
    return safe_meals
