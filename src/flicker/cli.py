"""Command-line interface."""

import calendar
import logging
import sys
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Any

import click

from .config import ConfigurationError, PickerConfig
from .date_utils import weekday_index, weekday_order
from .models import MonthGrid, SelectionMode
from .store import Store

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]
CELL_WIDTH = 4


def _to_date(value: datetime | date | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def _months_between(start: date, end: date) -> int:
    return (end.year * 12 + end.month) - (start.year * 12 + start.month)


def _format_cell(store: Store, cell: date | None) -> str:
    if cell is None:
        return " " * CELL_WIDTH
    state = store.day_state(cell)
    if state.selected:
        left, right = "[", "]"
    elif state.in_range:
        left, right = "(", ")"
    elif state.disabled:
        left, right = " ", "x"
    else:
        left, right = " ", " "
    return f"{left}{cell.day:>2}{right}"


def _format_month_grid(store: Store, grid: MonthGrid) -> list[str]:
    """Render one month as text lines (title, weekday header, week rows)."""
    width = CELL_WIDTH * 7
    title = f"{calendar.month_name[grid.month.month]} {grid.month.year}"
    header = "".join(
        f" {WEEKDAY_LABELS[index]} " for index in weekday_order(grid.first_day_of_week)
    )
    lines = [title.center(width).rstrip(), header.rstrip()]
    for week in grid.weeks:
        lines.append("".join(_format_cell(store, cell) for cell in week).rstrip())
    return lines


def _format_selection(dates: list[date]) -> str:
    if not dates:
        return "(empty)"
    return ", ".join(d.isoformat() for d in dates)


def _build_config(ctx: click.Context, **overrides: Any) -> PickerConfig:
    try:
        config = PickerConfig.load(ctx.obj.get("env_file"))
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    values = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **values)


def _build_store(config: PickerConfig) -> Store:
    try:
        return Store(config)
    except ConfigurationError as e:
        raise click.ClickException(f"Invalid picker configuration: {e}") from e


def _echo_summary(store: Store, taps: list[date]) -> None:
    click.echo("\n" + "=" * 30)
    click.echo("Selection Summary")
    click.echo("=" * 30)
    click.echo(f"Mode:      {store.mode.value} (limit {store.selection_count})")
    click.echo(f"Taps:      {len(taps)}")
    click.echo(f"Selection: {_format_selection(store.selected_dates)}")
    click.echo(f"Display:   {store.display:%Y-%m}")
    click.echo("=" * 30)


@click.group()
@click.option(
    "--env-file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .env file",
)
@click.option("--debug/--no-debug", default=False, help="Enable debug logging")
@click.pass_context
def main(ctx, env_file: Path | None, debug: bool):
    """Inspect the date picker state engine from the terminal."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file


@main.command()
@click.option("--month", "month_", type=click.DateTime(formats=["%Y-%m"]), help="Month to show (default: display month)")
@click.option("--mode", type=click.Choice([m.value for m in SelectionMode]), help="Selection mode")
@click.option("--select", "selected", multiple=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="Pre-selected date (repeatable)")
@click.option("--count", type=int, help="Selection count for many mode")
@click.option("--first-day-of-week", "-f", type=click.IntRange(0, 6), help="0=Sunday ... 6=Saturday")
@click.option("--view-count", "-n", type=int, help="Months per view (1 or 2)")
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), help="First selectable date")
@click.option("--end", type=click.DateTime(formats=["%Y-%m-%d"]), help="Last selectable date")
@click.pass_context
def month(
    ctx,
    month_: datetime | None,
    mode: str | None,
    selected: tuple[datetime, ...],
    count: int | None,
    first_day_of_week: int | None,
    view_count: int | None,
    start: datetime | None,
    end: datetime | None,
):
    """Print the month grid(s) with selection markers."""
    config = _build_config(
        ctx,
        mode=SelectionMode(mode) if mode else None,
        value=tuple(_to_date(d) for d in selected) or None,
        selection_count=count,
        first_day_of_week=first_day_of_week,
        view_count=view_count,
        start_date=_to_date(start),
        end_date=_to_date(end),
    )
    store = _build_store(config)
    target = _to_date(month_)
    if target is not None:
        store.navigate_months(_months_between(store.display, target))

    for grid in store.cells():
        click.echo("\n".join(_format_month_grid(store, grid)))
        click.echo("")
    click.echo(f"Selection: {_format_selection(store.selected_dates)}")


@main.command()
@click.option("--mode", type=click.Choice([m.value for m in SelectionMode]), default="single", show_default=True)
@click.option("--count", type=int, help="Selection count for many mode")
@click.option("--tap", "taps", multiple=True, required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="Tapped date (repeatable, in order)")
@click.option("--disable-weekday", "disabled_weekdays", multiple=True, type=click.IntRange(0, 6), help="Disable a weekday, 0=Sunday (repeatable)")
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), help="First selectable date")
@click.option("--end", type=click.DateTime(formats=["%Y-%m-%d"]), help="Last selectable date")
@click.pass_context
def select(
    ctx,
    mode: str,
    count: int | None,
    taps: tuple[datetime, ...],
    disabled_weekdays: tuple[int, ...],
    start: datetime | None,
    end: datetime | None,
):
    """Replay taps through the picker and show how the selection evolves."""
    blocked = set(disabled_weekdays)
    changes: list[list[date]] = []

    config = _build_config(
        ctx,
        mode=SelectionMode(mode),
        selection_count=count,
        start_date=_to_date(start),
        end_date=_to_date(end),
        disabled_date=(lambda day: weekday_index(day) in blocked) if blocked else None,
        on_value_change=changes.append,
    )
    store = _build_store(config)

    tapped: list[date] = []
    for raw in taps:
        day = raw.date()
        tapped.append(day)
        before = len(changes)
        result = store.on_select_date(day)
        note = "" if len(changes) > before else "  (ignored)"
        click.echo(f"Tap {day.isoformat()} -> {_format_selection(result)}{note}")

    _echo_summary(store, tapped)


@main.command()
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), help="First selectable date")
@click.option("--end", type=click.DateTime(formats=["%Y-%m-%d"]), help="Last selectable date")
@click.pass_context
def years(ctx, start: datetime | None, end: datetime | None):
    """Print the span of years offered by the year view."""
    config = _build_config(ctx, start_date=_to_date(start), end_date=_to_date(end))
    store = _build_store(config)
    click.echo(f"Years: {store.start_year}-{store.end_year} ({store.end_year - store.start_year + 1} total)")


if __name__ == "__main__":
    main()
