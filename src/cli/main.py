#!/usr/bin/env python3
"""
Calendar Navigator CLI - drive datepicker widgets from the terminal.

Opens a browser on a page hosting a jQuery UI style datepicker, walks the
calendar to the requested month and clicks the requested day.
"""

import asyncio
import atexit
import os
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.navigator.browser import open_picker  # noqa: E402
from src.navigator.calendar_navigator import CalendarNavigator  # noqa: E402
from src.navigator.config import NavigatorConfig, load_config  # noqa: E402
from src.navigator.direction import NavigationPolicy, decide_direction  # noqa: E402
from src.navigator.exceptions import CalendarInteractionError  # noqa: E402
from src.navigator.models import DateSelectionResult  # noqa: E402
from src.navigator.months import MONTH_NAMES, month_index  # noqa: E402
from src.utils.logger import navigator_logger  # noqa: E402

use_rich = os.getenv("NO_COLOR") is None
console = Console(no_color=not use_rich)
app = typer.Typer(
    name="calendar-nav",
    help="📅 Calendar Navigator - select dates on datepicker widgets",
    rich_markup_mode="rich",
)


def _shutdown_metrics() -> None:
    """Flush pending metrics before exit."""
    try:
        from src.utils.metrics import get_metrics

        get_metrics().shutdown(timeout_seconds=5)
    except Exception:
        # Exiting anyway
        pass


atexit.register(_shutdown_metrics)


def setup_environment(verbose: bool = False) -> None:
    """Load .env and choose the log level for CLI usage."""
    from dotenv import load_dotenv

    load_dotenv()

    os.environ["LOG_LEVEL"] = "DEBUG" if verbose else "ERROR"


def handle_cli_error(e: Exception, verbose: bool = False) -> None:
    """Print a user-friendly error message."""
    error_message = str(e)

    if isinstance(e, CalendarInteractionError):
        console.print(f"[red]❌ {error_message}[/red]")
    elif "TimeoutError" in str(type(e)) or "timeout" in error_message.lower():
        console.print(
            "[red]❌ Operation timed out - the page may be slow or unavailable[/red]"
        )
        if verbose:
            console.print(f"[dim]Full error: {error_message}[/dim]")
    else:
        console.print(f"[red]❌ Error: {error_message}[/red]")

    if verbose:
        console.print("\n[dim]Full stack trace:[/dim]")
        console.print_exception()
    else:
        console.print("[dim]💡 Use --verbose/-v to see full error details[/dim]")


def display_result(result: DateSelectionResult, input_value: Optional[str]) -> None:
    """Show the outcome of a date selection."""
    status = (
        "[green]✅ Day selected[/green]"
        if result.day_selected
        else "[yellow]⚠️  No day cell matched[/yellow]"
    )
    lines = [
        f"🎯 Target: [bold]{result.target}[/bold]",
        f"🧭 Navigations: {result.navigations}",
        status,
    ]
    if input_value is not None:
        lines.append(f"📝 Input value: [bold cyan]{input_value}[/bold cyan]")

    console.print(Panel("\n".join(lines), title="Date Selection", border_style="blue"))


async def run_pick(
    config: NavigatorConfig,
    year: str,
    month: str,
    day: str,
    policy: NavigationPolicy,
) -> tuple[DateSelectionResult, str]:
    """Open the picker page and select the date."""
    async with open_picker(config) as widget:
        result = await CalendarNavigator(config).select_date(
            widget, year, month, day, policy
        )
        return result, await widget.input_value()


@app.command()
def pick(
    year: Annotated[str, typer.Argument(help="Target year, e.g. 2026")],
    month: Annotated[str, typer.Argument(help="Target month name, e.g. February")],
    day: Annotated[str, typer.Argument(help="Target day, e.g. 4")],
    direction: Annotated[
        NavigationPolicy,
        typer.Option("--direction", "-d", help="Navigation policy"),
    ] = NavigationPolicy.AUTO,
    url: Annotated[
        Optional[str], typer.Option("--url", help="Page hosting the datepicker")
    ] = None,
    headless: Annotated[
        bool,
        typer.Option("--headless/--no-headless", help="Run browser in headless mode"),
    ] = True,
    max_navigations: Annotated[
        Optional[int],
        typer.Option("--max-navigations", "-m", help="Navigation budget", min=1),
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail when the day cell is missing")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose output")
    ] = False,
) -> None:
    """
    📅 Select a date on a datepicker widget.
    """
    setup_environment(verbose)

    try:
        config = load_config()
        navigator_logger.get_logger().setLevel(config.log_level)

        overrides = {"headless": headless, "strict_day": strict or config.strict_day}
        if url:
            overrides["picker_url"] = url
        if max_navigations:
            overrides["max_navigations"] = max_navigations
        config = NavigatorConfig(**{**config.model_dump(), **overrides})

        with console.status(f"Selecting {month} {day}, {year}..."):
            result, input_value = asyncio.run(
                run_pick(config, year, month, day, direction)
            )

        display_result(result, input_value)

    except Exception as e:
        handle_cli_error(e, verbose)
        raise typer.Exit(1) from e


@app.command("direction")
def direction_command(
    current_year: Annotated[str, typer.Argument(help="Displayed year")],
    current_month: Annotated[str, typer.Argument(help="Displayed month name")],
    target_year: Annotated[str, typer.Argument(help="Target year")],
    target_month: Annotated[str, typer.Argument(help="Target month name")],
    policy: Annotated[
        NavigationPolicy, typer.Option("--policy", "-p", help="Navigation policy")
    ] = NavigationPolicy.AUTO,
) -> None:
    """
    🧭 Show which way the calendar would move next.
    """
    move = decide_direction(
        current_year, current_month, target_year, target_month, policy
    )
    arrow = "➡️" if move.value == "forward" else "⬅️"
    console.print(
        f"{arrow}  {current_month} {current_year} → {target_month} {target_year}: "
        f"[bold]{move.value}[/bold] ({policy.value})"
    )


@app.command()
def months() -> None:
    """
    🗓️  List the month names the navigator recognises.
    """
    table = Table(title="Month names")
    table.add_column("Ordinal", justify="right", style="cyan")
    table.add_column("Name", style="bold")

    for name in MONTH_NAMES:
        table.add_row(str(month_index(name)), name)

    console.print(table)


if __name__ == "__main__":
    app()
