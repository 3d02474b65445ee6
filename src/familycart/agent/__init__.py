"""Agent interface module for scripted and LLM tool usage."""

from __future__ import annotations

from familycart.agent.response import (
    AgentResponse,
    error_response,
    order_response,
    plan_response,
    plan_summary,
    suggestions_for_error,
    validation_response,
)
from familycart.agent.schema import get_meal_tags, get_request_schema

__all__ = [
    "AgentResponse",
    "error_response",
    "get_meal_tags",
    "get_request_schema",
    "order_response",
    "plan_response",
    "plan_summary",
    "suggestions_for_error",
    "validation_response",
]
