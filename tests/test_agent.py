"""Tests for agent JSON envelopes."""

from __future__ import annotations

from datetime import datetime

from conftest import adult
from familycart.agent.response import (
    error_response,
    order_response,
    plan_response,
    suggestions_for_error,
    validation_response,
)
from familycart.planner.engine import MealPlanner
from familycart.planner.models import (
    CartItem,
    CatalogError,
    InvalidRequestError,
    NoEligibleMealsError,
    NotFoundError,
    PlanPeriod,
    PlanRequest,
)
from familycart.planner.orders import create_order_draft


class TestPlanResponse:
    """Tests for plan_response function."""

    def test_full_plan(self, catalog):
        request = PlanRequest(period=PlanPeriod.DAY, budget=1000, family=[adult()])
        response = MealPlanner(catalog).build_plan(request)
        envelope = plan_response(response).to_dict()

        assert envelope["success"] is True
        assert envelope["command"] == "plan"
        assert envelope["data"]["plan"]["targetSlots"] == 3
        assert envelope["warnings"] == []
        assert envelope["suggestions"] == []
        assert envelope["human_summary"].startswith("3/3 meals for 1 people")

    def test_shortfall_notes_become_warnings(self, catalog):
        request = PlanRequest(
            period=PlanPeriod.MONTH, budget=5, family=[adult(allergies=["nuts"])]
        )
        response = MealPlanner(catalog).build_plan(request)
        envelope = plan_response(response, saved=True)

        assert envelope.warnings == response.notes
        assert any("Excluded allergens: nuts." == w for w in envelope.warnings)
        assert any("--budget" in s for s in envelope.suggestions)
        assert any("familycart order" in s for s in envelope.suggestions)


class TestOrderResponse:
    """Tests for order_response function."""

    def test_wraps_draft(self, catalog):
        draft = create_order_draft(
            catalog,
            [CartItem("rice", 1.0, "s1"), CartItem("tomato", 1.0, "s2")],
            now=datetime(2024, 1, 1),
        )
        envelope = order_response(draft).to_dict()

        assert envelope["command"] == "order"
        assert envelope["data"]["orderId"] == draft.order_id
        assert envelope["human_summary"] == f"Order {draft.order_id} across 2 stores"


class TestValidationResponse:
    """Tests for validation_response function."""

    def test_valid_catalog(self, catalog):
        envelope = validation_response(catalog, [])

        assert envelope.success is True
        assert envelope.data["meals"] == len(catalog.meals)
        assert envelope.human_summary == "Catalog is valid"

    def test_problems_fail(self, catalog):
        envelope = validation_response(catalog, ["Meal x uses unknown product y"])

        assert envelope.success is False
        assert envelope.errors == ["Meal x uses unknown product y"]
        assert envelope.human_summary == "1 catalog problems"


class TestErrorResponse:
    """Tests for error envelopes and suggestions."""

    def test_no_eligible_meals_names_allergens(self):
        error = NoEligibleMealsError("No meals left", ["nuts", "gluten"])
        suggestions = suggestions_for_error(error)

        assert len(suggestions) == 1
        assert "nuts, gluten" in suggestions[0]

    def test_suggestion_per_error_type(self):
        assert "catalog validate" in suggestions_for_error(CatalogError("bad"))[0]
        assert "schema request" in suggestions_for_error(InvalidRequestError("bad"))[0]
        assert "--catalog" in suggestions_for_error(NotFoundError("gone", "x"))[0]

    def test_error_envelope(self):
        envelope = error_response("plan", InvalidRequestError("Budget must be greater than 0."))
        data = envelope.to_dict()

        assert data["success"] is False
        assert data["errors"] == ["Budget must be greater than 0."]
        assert data["human_summary"] == "Error: Budget must be greater than 0."
        assert data["suggestions"]
