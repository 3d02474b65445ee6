"""Meal planning and grocery allocation engine."""

from familycart.planner.engine import MealPlanner, build_plan
from familycart.planner.models import (
    AgeGroup,
    CartItem,
    CatalogError,
    DietPreference,
    FamilyMember,
    InvalidRequestError,
    Meal,
    MealProduct,
    NoEligibleMealsError,
    NotFoundError,
    PlannedMeal,
    PlannerError,
    PlanPeriod,
    PlanRequest,
    PlanResponse,
    Product,
    RetailStore,
    StoreSummary,
)
from familycart.planner.orders import create_order_draft

__all__ = [
    "AgeGroup",
    "CartItem",
    "CatalogError",
    "DietPreference",
    "FamilyMember",
    "InvalidRequestError",
    "Meal",
    "MealPlanner",
    "MealProduct",
    "NoEligibleMealsError",
    "NotFoundError",
    "PlanPeriod",
    "PlanRequest",
    "PlanResponse",
    "PlannedMeal",
    "PlannerError",
    "Product",
    "RetailStore",
    "StoreSummary",
    "build_plan",
    "create_order_draft",
]
