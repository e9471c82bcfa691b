from __future__ import annotations

import warnings
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shiftgate.civil import date_key, get_zone, to_civil
from shiftgate.config import RosterConfig, load_roster
from shiftgate.core.errors import ResolutionDegradedWarning
from shiftgate.scheduling import (
    EligibilityResult,
    evaluate,
    format_shift_hours,
    format_work_days,
    summarize_week,
    week_calendar,
    week_dataframe,
)
from shiftgate.telemetry import append_evaluation

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


def _load(roster_path: Path) -> RosterConfig:
    try:
        return load_roster(roster_path)
    except (ValueError, FileNotFoundError, yaml.YAMLError) as exc:
        console.print(f"[red]Invalid roster {roster_path}:[/red] {escape(str(exc))}")
        raise typer.Exit(1)


def _parse_at(value: str | None, zone: str) -> datetime:
    """Parse ``--at``; naive values are read as wall-clock time in the roster zone."""
    if value is None:
        return datetime.now(UTC)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Invalid --at value:[/red] {value!r} (expected ISO 8601)")
        raise typer.Exit(2)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=get_zone(zone))
    return parsed


def _local(instant: datetime, zone: str) -> str:
    local = instant.astimezone(get_zone(zone))
    return local.strftime("%a %Y-%m-%d %H:%M %Z")


def _print_result(result: EligibilityResult, now: datetime, roster: RosterConfig) -> None:
    zone = roster.timezone
    table = Table(title=f"Check-in eligibility: {roster.name}")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Evaluated at", _local(now, zone))
    table.add_row("Eligible now", "[green]yes[/green]" if result.eligible_now else "[red]no[/red]")
    table.add_row("Reason", f"{result.reason.value} ({result.message})")
    if result.next_eligible_instant is not None:
        table.add_row("Next check-in", _local(result.next_eligible_instant, zone))
        table.add_row("Time until", result.time_until(now) or "")
    if result.return_date is not None:
        table.add_row("Return to work", result.return_date.strftime("%A, %b %d"))
    if result.days_probed:
        table.add_row("Days probed", str(result.days_probed))
    if result.degraded:
        table.add_row("Resolution", "[yellow]degraded (naive UTC fallback)[/yellow]")
    console.print(table)


@app.command()
def validate(roster_path: Path = typer.Argument(..., help="Path to roster YAML file.")) -> None:
    """Validate a roster YAML and print a summary."""
    roster = _load(roster_path)
    t = Table(title=f"Roster: {roster.name}")
    t.add_column("Setting")
    t.add_column("Value")
    t.add_row("Time zone", roster.timezone)
    t.add_row("Work days", format_work_days(roster.pattern))
    t.add_row("Shift", format_shift_hours(roster.pattern))
    t.add_row("Grace period", f"{roster.grace_minutes} min")
    t.add_row("Exemptions", str(len(roster.exemptions)))
    t.add_row("Absences", str(len(roster.absences)))
    t.add_row("Workers", ", ".join(roster.worker_ids()) or "-")
    console.print(t)


@app.command()
def check(
    roster_path: Path = typer.Argument(..., help="Path to roster YAML file."),
    worker: Annotated[
        str | None,
        typer.Option(
            "--worker", "-w", help="Worker ID whose leave and check-ins apply (none when omitted)."
        ),
    ] = None,
    at: Annotated[
        str | None,
        typer.Option("--at", help="Evaluation instant (ISO 8601). Defaults to the current time."),
    ] = None,
    checked_in: Annotated[
        bool,
        typer.Option(
            "--checked-in",
            help="Worker already checked in today (also inferred from roster check-ins).",
        ),
    ] = False,
    grace: Annotated[
        int | None,
        typer.Option("--grace", min=0, help="Override the roster grace period (minutes)."),
    ] = None,
    out_jsonl: Annotated[
        Path | None,
        typer.Option("--out-jsonl", help="Append the evaluation as a JSON line to this file."),
    ] = None,
) -> None:
    """Evaluate whether check-in is open and when it opens next."""
    roster = _load(roster_path)
    now = _parse_at(at, roster.timezone)
    today = to_civil(now, roster.timezone).date()
    recorded = any(
        to_civil(record.checked_in_at, roster.timezone).date() == today
        for record in roster.checkins_for(worker)
    )
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ResolutionDegradedWarning)
        result = evaluate(
            now,
            roster.pattern,
            roster.timezone,
            roster.exemptions_for(worker),
            grace_minutes=roster.grace_minutes if grace is None else grace,
            already_checked_in_today=checked_in or recorded,
            worker_id=worker,
        )
    for item in caught:
        console.print(f"[yellow]Warning:[/yellow] {item.message}")
    _print_result(result, now, roster)
    if out_jsonl is not None:
        append_evaluation(
            out_jsonl, result, now=now, zone=roster.timezone, worker_id=worker, roster=roster.name
        )
        console.print(f"[dim]Evaluation appended to {out_jsonl}[/dim]")


@app.command()
def week(
    roster_path: Path = typer.Argument(..., help="Path to roster YAML file."),
    worker: Annotated[
        str | None,
        typer.Option(
            "--worker", "-w", help="Worker ID for leave, absences and check-ins (none if omitted)."
        ),
    ] = None,
    at: Annotated[
        str | None,
        typer.Option("--at", help="Any instant inside the week to show (ISO 8601)."),
    ] = None,
    out_csv: Annotated[
        Path | None, typer.Option("--out-csv", help="Optional path to write the week as CSV.")
    ] = None,
) -> None:
    """Show the Monday-Sunday calendar containing the evaluation instant."""
    roster = _load(roster_path)
    now = _parse_at(at, roster.timezone)
    days = week_calendar(
        now,
        roster.pattern,
        roster.timezone,
        checkins=[record.checked_in_at for record in roster.checkins_for(worker)],
        exemptions=roster.exemptions_for(worker),
        absences=roster.absences_for(worker),
        worker_id=worker,
    )
    today = to_civil(now, roster.timezone).date()
    t = Table(title=f"Week of {date_key(days[0].day)} ({roster.timezone})")
    for column in ("Day", "Date", "Work day", "Checked in", "Leave", "Absence"):
        t.add_column(column)
    for day in days:
        label = day.day_code.value + (" *" if day.day == today else "")
        t.add_row(
            label,
            day.date_key,
            "yes" if day.is_work_day else "-",
            "yes" if day.checked_in else "",
            "leave" if day.is_exempted else "",
            day.absence_status.value if day.absence_status else "",
        )
    console.print(t)
    summary = summarize_week(days)
    console.print(
        f"Check-ins: {summary.checkins}; "
        f"work days: {summary.work_days} (passed {summary.work_days_passed}); "
        f"absences excused={summary.excused_absences} "
        f"unexcused={summary.unexcused_absences} pending={summary.pending_absences}"
    )
    if out_csv is not None:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        week_dataframe(days).to_csv(out_csv, index=False)
        console.print(f"[dim]Week written to {out_csv}[/dim]")


if __name__ == "__main__":
    app()
