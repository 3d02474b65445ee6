"""familycart: budget-aware family meal plans with cheapest-store shopping."""

from familycart.catalog import Catalog, load_catalog
from familycart.planner import MealPlanner, build_plan

__version__ = "0.1.0"

__all__ = ["Catalog", "MealPlanner", "build_plan", "load_catalog"]
