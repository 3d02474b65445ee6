"""Conversion between planner dataclasses and JSON-ready dicts.

Keys are camelCase to match the JSON shapes exchanged with the web client:
``deserialize_request`` accepts what the client posts and
``serialize_response`` produces what it renders.
"""

from __future__ import annotations

from typing import Any

from familycart.planner.models import (
    AgeGroup,
    CartItem,
    DietPreference,
    FamilyMember,
    InvalidRequestError,
    Meal,
    OrderDraft,
    PlannedMeal,
    PlanPeriod,
    PlanRequest,
    PlanResponse,
    RetailStore,
    StoreSummary,
)


def parse_enum(enum_cls, value: Any, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        options = ", ".join(member.value for member in enum_cls)
        raise InvalidRequestError(
            f"Invalid {field_name} {value!r}; expected one of: {options}"
        ) from None


def _parse_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise InvalidRequestError(f"{field_name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidRequestError(f"{field_name} must be a number") from None


# ============================================================================
# Requests
# ============================================================================


def deserialize_member(data: dict[str, Any], index: int = 0) -> FamilyMember:
    """Build a FamilyMember from its JSON shape.

    Missing ids default to ``member-<n>`` (1-based position in the family).
    """
    if not isinstance(data, dict):
        raise InvalidRequestError("Each family member must be an object")

    allergies = data.get("allergies") or []
    if not isinstance(allergies, list):
        raise InvalidRequestError("allergies must be a list")

    return FamilyMember(
        id=str(data.get("id") or f"member-{index + 1}"),
        name=str(data.get("name", "")),
        age_group=parse_enum(AgeGroup, data.get("ageGroup", "adult"), "ageGroup"),
        allergies=[str(allergy) for allergy in allergies],
    )


def deserialize_request(data: dict[str, Any]) -> PlanRequest:
    """Convert a JSON/dict payload into a PlanRequest.

    Only shape is checked here; an empty family or non-positive budget is
    rejected by the planner itself.

    Args:
        data: Dictionary with period, budget, family and optional dietPref

    Returns:
        PlanRequest

    Raises:
        InvalidRequestError: If a field is missing or has the wrong type.
    """
    if not isinstance(data, dict):
        raise InvalidRequestError("Plan request must be an object")

    family_data = data.get("family", [])
    if not isinstance(family_data, list):
        raise InvalidRequestError("family must be a list")

    members = [deserialize_member(item, i) for i, item in enumerate(family_data)]

    seen_ids: set[str] = set()
    for member in members:
        if member.id in seen_ids:
            raise InvalidRequestError(f"Duplicate family member id: {member.id}")
        seen_ids.add(member.id)

    diet_value = data.get("dietPref")
    diet = (
        parse_enum(DietPreference, diet_value, "dietPref")
        if diet_value is not None
        else None
    )

    if "budget" not in data:
        raise InvalidRequestError("budget is required")

    return PlanRequest(
        period=parse_enum(PlanPeriod, data.get("period", "week"), "period"),
        budget=_parse_number(data["budget"], "budget"),
        family=members,
        diet=diet,
    )


def serialize_request(request: PlanRequest) -> dict[str, Any]:
    """Convert a PlanRequest to the dict accepted by deserialize_request()."""
    data: dict[str, Any] = {
        "period": request.period.value,
        "budget": request.budget,
        "family": [
            {
                "id": member.id,
                "name": member.name,
                "ageGroup": member.age_group.value,
                "allergies": list(member.allergies),
            }
            for member in request.family
        ],
    }
    if request.diet is not None:
        data["dietPref"] = request.diet.value
    return data


# ============================================================================
# Responses
# ============================================================================


def serialize_meal(meal: Meal) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": meal.id,
        "title": meal.title,
        "description": meal.description,
        "minutes": meal.minutes,
        "tags": list(meal.tags),
        "products": [
            {"productId": entry.product_id, "unitsPerServing": entry.units_per_serving}
            for entry in meal.products
        ],
        "steps": list(meal.steps),
    }
    if meal.calories is not None:
        data["calories"] = meal.calories
    return data


def serialize_store(store: RetailStore) -> dict[str, Any]:
    return {
        "id": store.id,
        "name": store.name,
        "deliveryFee": store.delivery_fee,
        "checkoutUrl": store.checkout_url,
    }


def serialize_planned_meal(planned: PlannedMeal) -> dict[str, Any]:
    return {
        "meal": serialize_meal(planned.meal),
        "times": planned.times,
        "estimatedTotal": planned.estimated_total,
    }


def serialize_store_summary(summary: StoreSummary) -> dict[str, Any]:
    return {
        "store": serialize_store(summary.store),
        "subtotal": summary.subtotal,
        "items": [
            {
                "productName": line.product_name,
                "quantity": line.quantity,
                "unit": line.unit,
                "price": line.price,
            }
            for line in summary.items
        ],
    }


def serialize_cart(cart: list[CartItem]) -> list[dict[str, Any]]:
    return [
        {
            "productId": item.product_id,
            "quantity": item.quantity,
            "selectedStoreId": item.selected_store_id,
        }
        for item in cart
    ]


def deserialize_cart(data: Any) -> list[CartItem]:
    """Parse a cart list as produced by serialize_cart().

    Raises:
        InvalidRequestError: If the cart is not a list of cart objects.
    """
    if not isinstance(data, list):
        raise InvalidRequestError("cart must be a list")

    cart = []
    for entry in data:
        if not isinstance(entry, dict):
            raise InvalidRequestError("Each cart item must be an object")
        try:
            cart.append(
                CartItem(
                    product_id=str(entry["productId"]),
                    quantity=_parse_number(entry.get("quantity", 0), "quantity"),
                    selected_store_id=str(entry["selectedStoreId"]),
                )
            )
        except KeyError as e:
            raise InvalidRequestError(f"Cart item is missing {e.args[0]}") from None
    return cart


def serialize_response(response: PlanResponse) -> dict[str, Any]:
    """Convert a PlanResponse to its JSON shape."""
    return {
        "familySize": response.family_size,
        "period": response.period.value,
        "budget": response.budget,
        "totalEstimated": response.total_estimated,
        "targetSlots": response.target_slots,
        "filledSlots": response.filled_slots,
        "meals": [serialize_planned_meal(planned) for planned in response.meals],
        "stores": [serialize_store_summary(summary) for summary in response.stores],
        "cart": serialize_cart(response.cart),
        "notes": list(response.notes),
    }


def serialize_order_draft(draft: OrderDraft) -> dict[str, Any]:
    """Convert an OrderDraft to its JSON shape."""
    return {
        "orderId": draft.order_id,
        "status": draft.status,
        "orderLinks": [
            {
                "storeId": link.store_id,
                "storeName": link.store_name,
                "checkoutUrl": link.checkout_url,
            }
            for link in draft.order_links
        ],
        "message": draft.message,
    }
