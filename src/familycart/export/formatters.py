"""Output formatters for plan responses."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from familycart.planner.models import PlanResponse
from familycart.planner.serialization import serialize_response


class TableFormatter:
    """Format plans as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, response: PlanResponse) -> None:
        """Print formatted tables to console.

        Args:
            response: Plan to format
        """
        complete = response.filled_slots >= response.target_slots
        status_color = "green" if complete else "yellow"
        header_lines = [
            f"[bold]FAMILY PLAN[/bold] - {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            f"Period: {response.period.value} | Family size: {response.family_size}",
            f"Meals: [{status_color}]{response.filled_slots}/{response.target_slots}"
            f"[/{status_color}]",
            f"Budget: {response.budget:.2f} | Estimated: {response.total_estimated:.2f}",
        ]
        self.console.print(Panel("\n".join(header_lines), title="Meal Plan"))

        meal_table = Table(title="Planned Meals")
        meal_table.add_column("Meal", style="cyan", max_width=40)
        meal_table.add_column("Times", justify="right")
        meal_table.add_column("Minutes", justify="right")
        meal_table.add_column("Cost", justify="right", style="green")

        for planned in response.meals:
            meal_table.add_row(
                planned.meal.title[:40],
                str(planned.times),
                str(planned.meal.minutes),
                f"{planned.estimated_total:.2f}",
            )

        self.console.print(meal_table)

        for summary in response.stores:
            store_table = Table(title=f"{summary.store.name}")
            store_table.add_column("Product", style="cyan", max_width=40)
            store_table.add_column("Quantity", justify="right")
            store_table.add_column("Price", justify="right", style="green")

            for line in summary.items:
                store_table.add_row(
                    line.product_name,
                    f"{line.quantity:g} {line.unit}",
                    f"{line.price:.2f}",
                )

            store_table.add_row("Delivery", "", f"{summary.store.delivery_fee:.2f}")
            store_table.add_row(
                "[bold]SUBTOTAL[/bold]",
                "",
                f"[bold]{summary.subtotal:.2f}[/bold]",
                style="bold",
            )
            self.console.print(store_table)

        for note in response.notes:
            self.console.print(f"[yellow]Note:[/yellow] {note}")


class JSONFormatter:
    """Format plans as JSON for programmatic use."""

    def format(self, response: PlanResponse) -> str:
        """Return JSON string.

        Args:
            response: Plan to format

        Returns:
            JSON string
        """
        return json.dumps(serialize_response(response), indent=2, ensure_ascii=False)


class MarkdownFormatter:
    """Format plans as Markdown for sharing."""

    def format(self, response: PlanResponse) -> str:
        """Return Markdown string.

        Args:
            response: Plan to format

        Returns:
            Markdown string
        """
        lines = [
            f"# Meal Plan ({response.period.value})",
            "",
            f"**Family size:** {response.family_size}",
            f"**Budget:** {response.budget:.2f}",
            f"**Estimated total:** {response.total_estimated:.2f}",
            f"**Meals planned:** {response.filled_slots} of {response.target_slots}",
            "",
            "## Meals",
            "",
            "| Meal | Times | Cost |",
            "|------|-------|------|",
        ]

        for planned in response.meals:
            lines.append(
                f"| {planned.meal.title} | {planned.times} | {planned.estimated_total:.2f} |"
            )

        lines.extend(["", "## Shopping List"])

        for summary in response.stores:
            lines.extend(["", f"### {summary.store.name} ({summary.subtotal:.2f})", ""])
            for line in summary.items:
                lines.append(
                    f"- [ ] {line.product_name}: {line.quantity:g} {line.unit} ({line.price:.2f})"
                )
            if summary.store.checkout_url:
                lines.append(f"- Checkout: {summary.store.checkout_url}")

        if response.notes:
            lines.extend(["", "## Notes", ""])
            lines.extend(f"- {note}" for note in response.notes)

        return "\n".join(lines)


def format_plan(
    response: PlanResponse,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a plan in the specified format.

    Args:
        response: Plan to format
        output_format: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        formatter = TableFormatter(console)
        formatter.format(response)
        return None
    elif output_format == "json":
        return JSONFormatter().format(response)
    elif output_format == "markdown":
        return MarkdownFormatter().format(response)
    else:
        raise ValueError(f"Unknown output format: {output_format}")
