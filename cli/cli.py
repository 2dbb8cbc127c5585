"""SwimTracker developer CLI.

Runs the analytics core against local files and the configured database:
workout analysis from a sample bundle, weekly endurance targets and
progress, plan proposal checks and coach insights.
"""

import asyncio
import json
from datetime import datetime
from pathlib import Path

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from swimtracker.analysis.insights import generate_insights
from swimtracker.analysis.statistics import (
    all_time_stats,
    compare_weeks,
    completed_week_averages,
    consistency_streak,
    distance_trend,
    heart_rate_zones,
    monthly_totals,
    recent_weeks,
    sessions_since,
    weekly_totals,
)
from swimtracker.config.settings import settings
from swimtracker.core.logger import setup_logger
from swimtracker.db.repository import (
    add_session,
    list_endurance_targets,
    list_external_ids,
    list_sessions,
    set_endurance_target,
)
from swimtracker.db.session import get_session, init_db
from swimtracker.ingestion.errors import SampleFetchError
from swimtracker.ingestion.import_workout import import_workout
from swimtracker.ingestion.source import BundleSampleSource
from swimtracker.ingestion.types import SourceWorkout, sample_bundle_from_dict
from swimtracker.plans.endurance.planner import EnduranceTargetPlanner
from swimtracker.plans.endurance.progression import build_progression
from swimtracker.plans.endurance.types import PlannerConfig, WeeklyProgress
from swimtracker.plans.proposals import propose_plan
from swimtracker.plans.reconciliation.distance import format_distance_formula
from swimtracker.sessions.service import log_manual_session
from swimtracker.utils.calendar import to_naive_local
from swimtracker.workouts.service import analyze_workout

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="swimtracker",
    help="SwimTracker CLI - workout analysis and endurance planning",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    stage: list[str] = typer.Option([], "--stage", help="Only show debug output for these stages (e.g. SEGMENTER)"),
) -> None:
    """Configure logging for every command."""
    setup_logger(
        level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        stages=stage or None,
    )


def _parse_now(now: str | None) -> datetime:
    if now is None:
        return datetime.now()
    try:
        return to_naive_local(datetime.fromisoformat(now))
    except ValueError as e:
        raise typer.BadParameter(f"Invalid ISO date/time: {now}") from e


def _read_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read {path}: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


def _load_planner_and_sessions():
    with get_session() as db:
        overrides = list_endurance_targets(db)
        sessions = list_sessions(db)
    planner = EnduranceTargetPlanner(PlannerConfig.from_settings(settings), overrides)
    return planner, sessions


def _format_optional(value: float | None, fmt: str = "{:.1f}") -> str:
    return fmt.format(value) if value is not None else "-"


@app.command("init-db")
def init_db_command() -> None:
    """Create the database tables."""
    init_db()
    console.print("[green]Database initialized[/green]")


@app.command()
def analyze(path: Path = typer.Argument(..., help="JSON sample bundle (window + sample streams)")) -> None:
    """Build laps, sets and workout metrics from a sample bundle file."""
    data = _read_json(path)
    if not isinstance(data, dict) or "window" not in data:
        console.print("[red]Sample bundle must be an object with a 'window' key[/red]")
        raise typer.Exit(1)
    try:
        bundle = sample_bundle_from_dict(data)
    except ValidationError as e:
        console.print(f"[red]Invalid sample bundle: {e.error_count()} validation error(s)[/red]")
        raise typer.Exit(1) from e

    detail = analyze_workout(bundle)

    table = Table(title="Sets")
    for column in ("#", "Laps", "Distance (m)", "Duration (s)", "SWOLF", "Pace /100m", "Stroke", "Avg HR", "Rest after (s)"):
        table.add_column(column)
    for index, swim_set in enumerate(detail.sets, start=1):
        table.add_row(
            str(index),
            str(len(swim_set.laps)),
            f"{swim_set.total_distance:.0f}",
            f"{swim_set.total_duration:.0f}",
            _format_optional(swim_set.average_swolf),
            _format_optional(swim_set.average_pace, "{:.2f}"),
            swim_set.majority_stroke_type,
            _format_optional(swim_set.average_heart_rate, "{:.0f}"),
            f"{swim_set.rest_after_seconds:.0f}",
        )
    console.print(table)
    console.print(
        f"Total {detail.total_distance:.0f}m in {detail.total_duration / 60:.1f} min, "
        f"longest continuous {detail.longest_continuous_distance:.0f}m"
    )


@app.command()
def target(week: int = typer.Option(..., "--week", "-w", min=0, help="Training week number")) -> None:
    """Show the endurance target for a training week."""
    planner, sessions = _load_planner_and_sessions()
    week_target = planner.target_for_week(week, sessions)
    console.print(f"Week {week}: [bold]{week_target.target_distance:.0f}m[/bold] ({week_target.source})")


def _progress_panel(title: str, progress: WeeklyProgress) -> Panel:
    achieved = progress.best_achieved_distance >= progress.target_distance
    style = "bold green" if achieved else "bold yellow"
    source = "coach target" if progress.is_override_target else "linear plan"
    body = Text(
        f"{progress.week_start.isoformat()} -> {progress.week_end.isoformat()}\n"
        f"Target: {progress.target_distance:.0f}m ({source})\n"
        f"Best continuous: {progress.best_achieved_distance:.0f}m\n"
        f"Days left: {progress.days_left}",
        style=style,
    )
    return Panel(body, title=title, border_style="green" if achieved else "yellow")


@app.command()
def progress(now: str | None = typer.Option(None, "--now", help="Reference date/time (ISO), default: now")) -> None:
    """Show this week's and last week's endurance progress."""
    reference = _parse_now(now)
    planner, sessions = _load_planner_and_sessions()
    console.print(_progress_panel("This week", planner.current_week_progress(sessions, reference)))
    console.print(_progress_panel("Last week", planner.last_week_progress(sessions, reference)))


@app.command()
def progression(now: str | None = typer.Option(None, "--now", help="Reference date/time (ISO), default: now")) -> None:
    """Show the week-by-week fixed plan, adaptive plan and actual best distance."""
    reference = _parse_now(now)
    planner, sessions = _load_planner_and_sessions()

    table = Table(title="Endurance progression")
    for column in ("Week", "Start", "Fixed (m)", "Adaptive (m)", "Actual (m)"):
        table.add_column(column)
    for point in build_progression(planner, sessions, reference):
        table.add_row(
            str(point.week_number),
            point.week_start.isoformat(),
            f"{point.fixed_plan:.0f}",
            f"{point.adaptive_plan:.0f}",
            _format_optional(point.actual, "{:.0f}"),
        )
    console.print(table)


@app.command()
def insights(now: str | None = typer.Option(None, "--now", help="Reference date/time (ISO), default: now")) -> None:
    """Show coach insights for recent sessions."""
    reference = _parse_now(now)
    _, sessions = _load_planner_and_sessions()
    for insight in generate_insights(sessions, reference, settings.goal_distance_meters):
        console.print(f"[bold]{insight.title}[/bold] ({insight.type})\n  {insight.description}")


def _signed(value: float | None, suffix: str = "m") -> str:
    return f"{value:+.0f}{suffix}" if value is not None else "-"


@app.command()
def stats(
    days: int | None = typer.Option(60, "--days", min=1, help="Only sessions of the last N days"),
    all_time: bool = typer.Option(False, "--all", help="Use every session instead of --days"),
    now: str | None = typer.Option(None, "--now", help="Reference date/time (ISO), default: now"),
) -> None:
    """Show weekly and monthly volume, streak, recent weeks and all-time records."""
    reference = _parse_now(now)
    _, all_sessions = _load_planner_and_sessions()
    if not all_sessions:
        console.print("[yellow]No swims yet[/yellow]")
        return
    sessions = sessions_since(all_sessions, reference, None if all_time else days)
    first_weekday = settings.week_start_day

    weekly = weekly_totals(sessions, first_weekday)
    table = Table(title="Weekly volume")
    for column in ("Week", "Distance (m)", "Swims"):
        table.add_column(column)
    for week in weekly:
        table.add_row(week.period_start.isoformat(), f"{week.distance:.0f}", str(week.swims))
    console.print(table)
    console.print(f"Weekly trend: {_signed(distance_trend(weekly))}")

    table = Table(title="Monthly volume")
    for column in ("Month", "Distance (m)", "Swims"):
        table.add_column(column)
    for month in monthly_totals(sessions):
        table.add_row(month.period_start.strftime("%Y-%m"), f"{month.distance:.0f}", str(month.swims))
    console.print(table)

    weeks = recent_weeks(all_sessions, reference, first_weekday=first_weekday)
    change = compare_weeks(weeks[-1], weeks[-2])
    avg_distance, avg_longest = completed_week_averages(weeks)
    table = Table(title="Recent weeks")
    for column in ("Week", "Distance (m)", "Longest set (m)"):
        table.add_column(column)
    for week in weeks:
        label = f"{week.week_start.isoformat()}{' (now)' if week.is_current else ''}"
        table.add_row(label, f"{week.distance:.0f}", _format_optional(week.longest_set, "{:.0f}"))
    console.print(table)
    console.print(
        f"vs last week: distance {_signed(change.distance_change)}, "
        f"longest set {_signed(change.longest_set_change)}; "
        f"completed-week average {_format_optional(avg_distance, '{:.0f}')}m"
        f" / longest {_format_optional(avg_longest, '{:.0f}')}m"
    )

    record = all_time_stats(all_sessions)
    console.print(
        Panel(
            f"Swims: {record.total_swims}   Distance: {record.total_distance:.0f}m   "
            f"Time: {record.total_minutes:.0f} min\n"
            f"Average distance: {record.average_distance:.0f}m   Best distance: {record.best_distance:.0f}m\n"
            f"Best pace: {_format_optional(record.best_pace, '{:.2f}')} /100m   "
            f"Best SWOLF: {_format_optional(record.best_swolf, '{:.0f}')}   "
            f"Longest continuous: {record.longest_continuous:.0f}m\n"
            f"Consistency: {consistency_streak(all_sessions, reference)} days",
            title="All-time",
        )
    )

    zones = heart_rate_zones(sessions)
    if zones:
        console.print("HR zones: " + ", ".join(f"{name} {pct:.0f}%" for name, pct in zones.items()))


@app.command()
def check_plan(path: Path = typer.Argument(..., help="JSON list of proposed workouts")) -> None:
    """Reconcile the declared totals of a proposed plan against its sets."""
    data = _read_json(path)
    if not isinstance(data, list):
        console.print("[red]Plan file must contain a JSON list of workouts[/red]")
        raise typer.Exit(1)

    pending = propose_plan(data)
    for item in pending.items:
        result = item.reconciliation
        formula = format_distance_formula(item.workout.sets) or "no sets"
        if result.is_mismatch:
            console.print(
                f"[yellow]! {item.workout.title}: {formula} = {result.actual_total}m "
                f"(reported {result.declared_total}m)[/yellow]"
            )
        else:
            console.print(f"[green]OK {item.workout.title}: {formula} = {result.actual_total}m[/green]")
    console.print(f"{len(pending.items)} workouts, {len(pending.mismatches)} with distance mismatch")


@app.command()
def set_target(
    week: int = typer.Option(..., "--week", "-w", min=0, help="Training week number"),
    distance: float = typer.Option(..., "--distance", "-d", min=1, help="Target continuous distance in meters"),
    notes: str | None = typer.Option(None, "--notes", help="Coach notes"),
) -> None:
    """Set (or replace) the coach endurance target for a week."""
    with get_session() as db:
        set_endurance_target(db, week, distance, datetime.now(), notes)
    console.print(f"[green]Week {week} target set to {distance:.0f}m[/green]")


@app.command("import")
def import_command(
    path: Path = typer.Argument(..., help="JSON sample bundle exported from the health-data store"),
    external_id: str = typer.Option(..., "--external-id", help="Source workout identifier"),
    effort: int | None = typer.Option(None, "--effort", help="Source effort score (1-10)"),
) -> None:
    """Import an exported workout as a session with lap/set detail."""
    data = _read_json(path)
    if not isinstance(data, dict) or "window" not in data:
        console.print("[red]Sample bundle must be an object with a 'window' key[/red]")
        raise typer.Exit(1)
    try:
        bundle = sample_bundle_from_dict(data)
    except ValidationError as e:
        console.print(f"[red]Invalid sample bundle: {e.error_count()} validation error(s)[/red]")
        raise typer.Exit(1) from e

    workout = SourceWorkout(
        **bundle.window.model_dump(),
        external_id=external_id,
        effort_score=effort,
    )
    with get_session() as db:
        known = list_external_ids(db)
    try:
        swim_session = asyncio.run(
            import_workout(BundleSampleSource(bundle), workout, known, settings.sample_fetch_timeout_seconds)
        )
    except SampleFetchError as e:
        console.print(f"[red]Import failed: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    if swim_session is None:
        console.print(f"[yellow]Workout {external_id} already imported[/yellow]")
        return
    with get_session() as db:
        add_session(db, swim_session)
    console.print(f"[green]Imported {swim_session.total_distance_meters:.0f}m swim ({swim_session.id})[/green]")


@app.command()
def log(
    distance: float = typer.Option(..., "--distance", "-d", min=0, help="Distance in meters"),
    duration: float = typer.Option(..., "--duration", min=0, help="Duration in minutes"),
    difficulty: int = typer.Option(5, "--difficulty", min=1, max=10, help="Difficulty 1-10"),
    notes: str = typer.Option("", "--notes", help="Notes"),
    date: str | None = typer.Option(None, "--date", help="Date/time (ISO), default: now"),
) -> None:
    """Log a swim manually."""
    swim_session = log_manual_session(_parse_now(date), distance, duration, notes, difficulty)
    with get_session() as db:
        add_session(db, swim_session)
    logger.debug(f"Logged session {swim_session.id}")
    console.print(f"[green]Logged {distance:.0f}m swim ({swim_session.id})[/green]")


if __name__ == "__main__":
    app()
