"""Schema export for scripts and LLM agents.

Machine-readable documentation of the plan request format, so a caller can
construct valid requests without reading the source.
"""

from __future__ import annotations

from typing import Any, Optional

from familycart.catalog.catalog import Catalog
from familycart.planner.eligibility import MIN_DIET_MATCHES
from familycart.planner.models import (
    AgeGroup,
    DietPreference,
    KNOWN_ALLERGENS,
    PlanPeriod,
)


def get_request_schema() -> dict[str, Any]:
    """Get the plan request schema.

    Returns:
        Schema dictionary describing all request fields
    """
    return {
        "description": "Schema for family meal plan requests",
        "format": {
            "period": {
                "type": "enum",
                "options": {period.value: period.target_slots for period in PlanPeriod},
                "description": "Planning horizon; value is the number of meal-slots",
                "default": "week",
            },
            "budget": {
                "type": "number",
                "constraint": "> 0",
                "description": "Total money available for the period",
            },
            "family": {
                "type": "list",
                "constraint": "non-empty",
                "item_format": {
                    "id": {"type": "string", "description": "Unique within the request"},
                    "name": {"type": "string"},
                    "ageGroup": {
                        "type": "enum",
                        "options": {
                            group.value: group.serving_weight for group in AgeGroup
                        },
                        "description": "Value is the serving-weight multiplier",
                    },
                    "allergies": {
                        "type": "list",
                        "options": list(KNOWN_ALLERGENS),
                    },
                },
            },
            "dietPref": {
                "type": "enum",
                "optional": True,
                "options": {
                    diet.value: sorted(diet.required_tags) for diet in DietPreference
                },
                "description": (
                    "Preferred meal tags; ignored when fewer than "
                    f"{MIN_DIET_MATCHES} safe meals match"
                ),
            },
        },
        "example": {
            "period": "week",
            "budget": 150,
            "family": [
                {"id": "1", "name": "Alex", "ageGroup": "adult", "allergies": []},
                {"id": "2", "name": "Sam", "ageGroup": "child", "allergies": ["nuts"]},
            ],
            "dietPref": "healthy",
        },
    }


def get_meal_tags(catalog: Optional[Catalog] = None) -> list[str]:
    """List all meal tags used in a catalog, sorted."""
    if catalog is None:
        return []
    return sorted({tag for meal in catalog.meals for tag in meal.tags})
