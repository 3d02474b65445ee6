"""CLI interface using Typer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from familycart.catalog import Catalog, load_catalog
from familycart.config import get_settings
from familycart.logging import configure_logging
from familycart.planner.models import (
    AgeGroup,
    DietPreference,
    FamilyMember,
    InvalidRequestError,
    PlannerError,
    PlanPeriod,
    PlanRequest,
)
from familycart.planner.serialization import parse_enum

app = typer.Typer(
    help="Family meal planning with budget-aware grocery allocation",
    no_args_is_help=True,
)
console = Console()

# Subcommand groups
catalog_app = typer.Typer(help="Browse and validate the product/meal catalog")
schema_app = typer.Typer(help="Export schemas for scripts and LLM agents")

app.add_typer(catalog_app, name="catalog")
app.add_typer(schema_app, name="schema")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2, ensure_ascii=False)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def resolve_catalog(catalog_path: Optional[Path]) -> Catalog:
    """Load the catalog from --catalog, the settings file, or the bundled sample."""
    settings = get_settings()
    return load_catalog(catalog_path or settings.catalog.path)


def parse_member_spec(spec: str, index: int) -> FamilyMember:
    """Parse a --member value of the form NAME[:AGE_GROUP[:ALLERGY,ALLERGY]].

    Examples: "Alex", "Sam:child", "Kim:teen:nuts,eggs"
    """
    parts = spec.split(":")
    if len(parts) > 3 or not parts[0].strip():
        raise InvalidRequestError(
            f"Invalid member '{spec}'. Use NAME[:AGE_GROUP[:ALLERGY,...]]"
        )

    name = parts[0].strip()
    age_value = parts[1].strip() if len(parts) > 1 and parts[1].strip() else "adult"
    age_group = parse_enum(AgeGroup, age_value, "age group")

    allergies = []
    if len(parts) > 2:
        allergies = [a.strip() for a in parts[2].split(",") if a.strip()]

    return FamilyMember(
        id=str(index + 1),
        name=name,
        age_group=age_group,
        allergies=allergies,
    )


def load_request_file(path: Path) -> dict[str, Any]:
    """Read a plan request from a JSON or YAML file."""
    if not path.exists():
        raise InvalidRequestError(f"Request file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise InvalidRequestError(f"Could not parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidRequestError("Request file must contain an object")
    return data


def extract_cart(payload: dict[str, Any]) -> Any:
    """Find the cart in a saved plan or in a `plan --json` envelope."""
    if "cart" in payload:
        return payload["cart"]

    data = payload.get("data")
    plan = data.get("plan") if isinstance(data, dict) else None
    if not isinstance(plan, dict) or "cart" not in plan:
        raise InvalidRequestError(
            "Plan file has no cart. Save one with 'familycart plan --save-to'"
        )
    return plan["cart"]


def fail(command: str, error: PlannerError, json_output: bool) -> None:
    """Report a planner error and exit with status 1."""
    from familycart.agent.response import error_response, suggestions_for_error

    if json_output:
        output_json(error_response(command, error).to_dict())
    else:
        console.print(f"[red]Error: {error}[/red]")
        for suggestion in suggestions_for_error(error):
            console.print(f"[dim]{suggestion}[/dim]")
    raise typer.Exit(1)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Family meal planning with budget-aware grocery allocation."""
    try:
        settings = get_settings()
    except (yaml.YAMLError, ValueError) as e:
        console.print(f"[red]Error: could not read settings file: {e}[/red]")
        console.print("[dim]Fix or remove ~/.familycart/config.yaml[/dim]")
        raise typer.Exit(1)
    configure_logging(log_level or settings.logging.level)


# ============================================================================
# Main Commands
# ============================================================================


@app.command()
def plan(
    budget: Optional[float] = typer.Option(
        None, "--budget", "-b", help="Total budget for the period"
    ),
    period: Optional[str] = typer.Option(
        None, "--period", "-p", help="Planning period: meal, day, week, month"
    ),
    member: Optional[list[str]] = typer.Option(
        None, "--member", "-m", help="Family member NAME[:AGE_GROUP[:ALLERGY,...]]. Repeatable."
    ),
    diet: Optional[str] = typer.Option(
        None, "--diet", "-d", help="Diet preference: classic, healthy, vegetarian, budget"
    ),
    request_file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="JSON or YAML plan request (overrides other options)"
    ),
    catalog_path: Optional[Path] = typer.Option(
        None, "--catalog", help="Catalog YAML file"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format: table, json, markdown"
    ),
    save_to: Optional[Path] = typer.Option(
        None, "--save-to", help="Also write the plan as JSON to this file"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output as JSON with agent-friendly envelope"
    ),
) -> None:
    """Build a meal plan and shopping cart for a family."""
    from familycart.agent.response import plan_response
    from familycart.export.formatters import format_plan
    from familycart.planner.engine import MealPlanner
    from familycart.planner.serialization import deserialize_request, serialize_response

    settings = get_settings()

    try:
        catalog = resolve_catalog(catalog_path)

        if request_file:
            request = deserialize_request(load_request_file(request_file))
        else:
            if budget is None:
                raise InvalidRequestError("Provide --budget or a request --file")
            diet_value = diet or settings.defaults.diet
            request = PlanRequest(
                period=parse_enum(PlanPeriod, period or settings.defaults.period, "period"),
                budget=budget,
                family=[parse_member_spec(spec, i) for i, spec in enumerate(member or [])],
                diet=parse_enum(DietPreference, diet_value, "diet") if diet_value else None,
            )

        response = MealPlanner(catalog).build_plan(request)
    except PlannerError as e:
        fail("plan", e, json_output)
        return

    if save_to:
        save_to.parent.mkdir(parents=True, exist_ok=True)
        with open(save_to, "w", encoding="utf-8") as f:
            output_json(serialize_response(response), f)

    if json_output:
        output_json(plan_response(response, saved=save_to is not None).to_dict())
        return

    formatted = format_plan(response, output or settings.defaults.output_format, console)
    if formatted is not None:
        print(formatted)


@app.command()
def order(
    plan_file: Path = typer.Argument(..., help="Plan JSON written by 'plan --save-to'"),
    catalog_path: Optional[Path] = typer.Option(
        None, "--catalog", help="Catalog YAML file"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output as JSON with agent-friendly envelope"
    ),
) -> None:
    """Create an order draft with a checkout link per store."""
    from familycart.agent.response import order_response
    from familycart.planner.orders import create_order_draft
    from familycart.planner.serialization import deserialize_cart

    try:
        if not plan_file.exists():
            raise InvalidRequestError(f"Plan file not found: {plan_file}")
        with open(plan_file, encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidRequestError(f"Could not parse {plan_file}: {e}") from e
        if not isinstance(payload, dict):
            raise InvalidRequestError("Plan file must contain an object")

        cart_data = extract_cart(payload)

        catalog = resolve_catalog(catalog_path)
        draft = create_order_draft(catalog, deserialize_cart(cart_data))
    except PlannerError as e:
        fail("order", e, json_output)
        return

    if json_output:
        output_json(order_response(draft).to_dict())
        return

    console.print(f"[bold]Order {draft.order_id}[/bold] ({draft.status})")
    table = Table(title="Checkout Links")
    table.add_column("Store", style="cyan")
    table.add_column("Checkout URL")
    for link in draft.order_links:
        table.add_row(link.store_name, link.checkout_url or "-")
    console.print(table)
    console.print(f"[dim]{draft.message}[/dim]")


# ============================================================================
# Catalog Commands
# ============================================================================


@catalog_app.command("meals")
def catalog_meals(
    tag: Optional[str] = typer.Option(None, "--tag", help="Only meals with this tag"),
    allergy: Optional[list[str]] = typer.Option(
        None, "--allergy", "-a", help="Hide meals containing this allergen. Repeatable."
    ),
    catalog_path: Optional[Path] = typer.Option(
        None, "--catalog", help="Catalog YAML file"
    ),
) -> None:
    """List meals with their per-serving cost."""
    from familycart.planner.eligibility import meal_contains_allergen
    from familycart.planner.pricing import meal_cost_per_serving

    try:
        catalog = resolve_catalog(catalog_path)
    except PlannerError as e:
        fail("catalog meals", e, False)
        return

    blocked = frozenset(allergy or [])
    table = Table(title="Meals")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Tags")
    table.add_column("Minutes", justify="right")
    table.add_column("Per serving", justify="right", style="green")

    for meal in catalog.meals:
        if tag and tag not in meal.tags:
            continue
        if blocked and meal_contains_allergen(catalog, meal, blocked):
            continue
        table.add_row(
            meal.id,
            meal.title,
            ", ".join(meal.tags),
            str(meal.minutes),
            f"{meal_cost_per_serving(catalog, meal):.2f}",
        )

    console.print(table)


@catalog_app.command("products")
def catalog_products(
    catalog_path: Optional[Path] = typer.Option(
        None, "--catalog", help="Catalog YAML file"
    ),
) -> None:
    """List products with their cheapest store."""
    from familycart.planner.pricing import cheapest_store

    try:
        catalog = resolve_catalog(catalog_path)
    except PlannerError as e:
        fail("catalog products", e, False)
        return

    table = Table(title="Products")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Unit")
    table.add_column("Allergens")
    table.add_column("Cheapest at")
    table.add_column("Price", justify="right", style="green")

    for product in catalog.products:
        store_id, price = cheapest_store(catalog, product.id)
        store = catalog.find_store(store_id)
        table.add_row(
            product.id,
            product.name,
            product.unit,
            ", ".join(sorted(product.allergens)) or "-",
            store.name if store else store_id,
            f"{price:.2f}",
        )

    console.print(table)


@catalog_app.command("stores")
def catalog_stores(
    catalog_path: Optional[Path] = typer.Option(
        None, "--catalog", help="Catalog YAML file"
    ),
) -> None:
    """List retail stores."""
    try:
        catalog = resolve_catalog(catalog_path)
    except PlannerError as e:
        fail("catalog stores", e, False)
        return

    table = Table(title="Stores")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Delivery", justify="right", style="green")
    table.add_column("Checkout URL")

    for store in catalog.stores:
        table.add_row(store.id, store.name, f"{store.delivery_fee:.2f}", store.checkout_url)

    console.print(table)


@catalog_app.command("validate")
def catalog_validate(
    catalog_path: Optional[Path] = typer.Argument(
        None, help="Catalog YAML file (defaults to the configured catalog)"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output as JSON with agent-friendly envelope"
    ),
) -> None:
    """Check a catalog for dangling references and missing prices."""
    from familycart.agent.response import validation_response
    from familycart.catalog.loader import load_catalog as load

    path = catalog_path or get_settings().catalog.path
    try:
        catalog = load(path, validate=False)
    except PlannerError as e:
        fail("catalog validate", e, json_output)
        return

    problems = catalog.validate()

    if json_output:
        output_json(validation_response(catalog, problems).to_dict())
    elif problems:
        console.print(f"[red]{len(problems)} problems found:[/red]")
        for problem in problems:
            console.print(f"  - {problem}")
    else:
        console.print(
            f"[green]Catalog is valid[/green] ({len(catalog.products)} products, "
            f"{len(catalog.meals)} meals, {len(catalog.stores)} stores)"
        )

    if problems:
        raise typer.Exit(1)


# ============================================================================
# Schema Commands
# ============================================================================


@schema_app.command("request")
def schema_request() -> None:
    """Export the plan request schema as JSON."""
    from familycart.agent.schema import get_request_schema

    output_json(get_request_schema())


@schema_app.command("tags")
def schema_tags(
    catalog_path: Optional[Path] = typer.Option(
        None, "--catalog", help="Catalog YAML file"
    ),
) -> None:
    """Export the meal tags used in the catalog as JSON."""
    from familycart.agent.schema import get_meal_tags

    try:
        catalog = resolve_catalog(catalog_path)
    except PlannerError as e:
        fail("schema tags", e, True)
        return

    output_json({"tags": get_meal_tags(catalog)})


if __name__ == "__main__":
    app()
