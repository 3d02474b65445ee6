"""Tests for request and response serialization."""

from __future__ import annotations

import json

import pytest

from conftest import adult
from familycart.planner.engine import MealPlanner
from familycart.planner.models import (
    AgeGroup,
    DietPreference,
    FamilyMember,
    InvalidRequestError,
    PlanPeriod,
    PlanRequest,
)
from familycart.planner.serialization import (
    deserialize_cart,
    deserialize_request,
    serialize_request,
    serialize_response,
)


class TestRequestSerialization:
    """Tests for PlanRequest parsing and round-trip."""

    def test_deserialize_client_payload(self):
        request = deserialize_request({
            "period": "day",
            "budget": 42.5,
            "family": [
                {"id": "a", "name": "Alex", "ageGroup": "adult", "allergies": ["nuts"]},
                {"id": "b", "name": "Sam", "ageGroup": "child", "allergies": []},
            ],
            "dietPref": "vegetarian",
        })

        assert request.period is PlanPeriod.DAY
        assert request.budget == 42.5
        assert [m.age_group for m in request.family] == [AgeGroup.ADULT, AgeGroup.CHILD]
        assert request.family[0].allergies == ["nuts"]
        assert request.diet is DietPreference.VEGETARIAN

    def test_defaults(self):
        """Missing member ids, age group and diet get defaults."""
        request = deserialize_request({"budget": 10, "family": [{"name": "Alex"}]})

        assert request.period is PlanPeriod.WEEK
        assert request.diet is None
        assert request.family[0].id == "member-1"
        assert request.family[0].age_group is AgeGroup.ADULT

    def test_roundtrip(self):
        request = PlanRequest(
            period=PlanPeriod.MONTH,
            budget=300.0,
            family=[
                adult("Alex", ["eggs"]),
                FamilyMember(id="2", name="Kim", age_group=AgeGroup.TEEN),
            ],
            diet=DietPreference.BUDGET,
        )
        restored = deserialize_request(serialize_request(request))
        assert restored == request

    @pytest.mark.parametrize(
        "payload",
        [
            {"period": "year", "budget": 10, "family": []},
            {"budget": 10, "family": [{"ageGroup": "senior"}]},
            {"budget": "lots", "family": []},
            {"budget": True, "family": []},
            {"budget": 10, "family": "Alex"},
            {"budget": 10, "family": [], "dietPref": "keto"},
            {"family": []},
            {"budget": 10, "family": [{"id": "1"}, {"id": "1"}]},
            {"budget": 10, "family": [{"allergies": "nuts"}]},
            ["not", "an", "object"],
        ],
    )
    def test_malformed_payloads(self, payload):
        with pytest.raises(InvalidRequestError):
            deserialize_request(payload)

    def test_empty_family_parses(self):
        """Shape is valid; emptiness is rejected by the planner."""
        request = deserialize_request({"budget": 10, "family": []})
        assert request.family == []


class TestResponseSerialization:
    """Tests for PlanResponse JSON shape."""

    def test_response_shape(self, catalog):
        request = PlanRequest(period=PlanPeriod.DAY, budget=100, family=[adult(allergies=["nuts"])])
        data = serialize_response(MealPlanner(catalog).build_plan(request))

        assert set(data) == {
            "familySize", "period", "budget", "totalEstimated", "targetSlots",
            "filledSlots", "meals", "stores", "cart", "notes",
        }
        assert data["period"] == "day"
        assert set(data["meals"][0]) == {"meal", "times", "estimatedTotal"}
        assert set(data["stores"][0]) == {"store", "subtotal", "items"}
        assert set(data["stores"][0]["store"]) == {"id", "name", "deliveryFee", "checkoutUrl"}
        assert set(data["cart"][0]) == {"productId", "quantity", "selectedStoreId"}
        assert set(data["stores"][0]["items"][0]) == {"productName", "quantity", "unit", "price"}
        json.dumps(data)

    def test_cart_roundtrip(self, catalog):
        request = PlanRequest(period=PlanPeriod.DAY, budget=100, family=[adult()])
        response = MealPlanner(catalog).build_plan(request)

        cart = deserialize_cart(serialize_response(response)["cart"])
        assert cart == response.cart

    @pytest.mark.parametrize(
        "payload",
        ["cart", [1, 2], [{"quantity": 1, "selectedStoreId": "s1"}]],
    )
    def test_malformed_cart(self, payload):
        with pytest.raises(InvalidRequestError):
            deserialize_cart(payload)
