"""JSON envelopes for plan, order and catalog commands.

Every command run with --json prints one AgentResponse. The builders here
decide what goes into it for each command: plan notes become warnings,
planner errors carry a follow-up suggestion, and each envelope has a one-line
human summary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from familycart.planner.models import (
    CatalogError,
    InvalidRequestError,
    NoEligibleMealsError,
    NotFoundError,
    OrderDraft,
    PlannerError,
    PlanResponse,
)
from familycart.planner.serialization import serialize_order_draft, serialize_response

if TYPE_CHECKING:
    from familycart.catalog.catalog import Catalog


@dataclass
class AgentResponse:
    """Envelope shared by every --json command."""

    success: bool
    command: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    human_summary: str = ""
    schema_version: str = "1.0"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "command": self.command,
            "data": self.data,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "human_summary": self.human_summary,
            "timestamp": datetime.now().isoformat(),
            "schema_version": self.schema_version,
        }


def plan_summary(response: PlanResponse) -> str:
    """One-line description of a plan, e.g. "21/21 meals for 3 people, estimated 84.20"."""
    return (
        f"{response.filled_slots}/{response.target_slots} meals for "
        f"{response.family_size} people, estimated {response.total_estimated:.2f}"
    )


def plan_response(response: PlanResponse, saved: bool = False) -> AgentResponse:
    """Wrap a plan for the `plan` command.

    Args:
        response: The assembled plan
        saved: Whether the plan was also written to a file for `order`

    Returns:
        AgentResponse with the serialized plan under data["plan"]
    """
    suggestions = []
    if response.filled_slots < response.target_slots:
        suggestions.append("Increase --budget or choose a shorter --period for a full plan")
    if saved:
        suggestions.append("Run 'familycart order <plan.json>' to get checkout links")

    return AgentResponse(
        success=True,
        command="plan",
        data={"plan": serialize_response(response)},
        warnings=list(response.notes),
        suggestions=suggestions,
        human_summary=plan_summary(response),
    )


def order_response(draft: OrderDraft) -> AgentResponse:
    """Wrap an order draft for the `order` command."""
    return AgentResponse(
        success=True,
        command="order",
        data=serialize_order_draft(draft),
        human_summary=f"Order {draft.order_id} across {len(draft.order_links)} stores",
    )


def validation_response(catalog: Catalog, problems: list[str]) -> AgentResponse:
    """Wrap catalog validation results. Fails when any problem is listed."""
    suggestions = []
    if problems:
        suggestions.append("Fix the listed entries in the catalog YAML and validate again")

    return AgentResponse(
        success=not problems,
        command="catalog validate",
        data={
            "products": len(catalog.products),
            "meals": len(catalog.meals),
            "stores": len(catalog.stores),
            "problems": problems,
        },
        errors=list(problems),
        suggestions=suggestions,
        human_summary="Catalog is valid" if not problems
        else f"{len(problems)} catalog problems",
    )


def suggestions_for_error(error: PlannerError) -> list[str]:
    """Follow-up hints for a planner error."""
    if isinstance(error, NoEligibleMealsError):
        if error.blocked_allergens:
            allergens = ", ".join(error.blocked_allergens)
            return [
                f"Every meal contains one of: {allergens}. "
                "Remove an allergy or use a catalog with more meals"
            ]
        return ["Use a catalog with more meals"]
    if isinstance(error, CatalogError):
        return ["Run 'familycart catalog validate' to list catalog problems"]
    if isinstance(error, NotFoundError):
        return ["The plan and the catalog disagree; rebuild the plan with the same --catalog"]
    if isinstance(error, InvalidRequestError):
        return ["Run 'familycart schema request' to see the request format"]
    return []


def error_response(command: str, error: PlannerError) -> AgentResponse:
    """Create a failed envelope from a planner error.

    Args:
        command: The command that failed
        error: The error that stopped it

    Returns:
        AgentResponse with success=False
    """
    return AgentResponse(
        success=False,
        command=command,
        errors=[str(error)],
        suggestions=suggestions_for_error(error),
        human_summary=f"Error: {error}",
    )
