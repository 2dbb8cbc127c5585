"""Week-by-week endurance progression (fixed plan vs adaptive plan vs actual)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from swimtracker.plans.endurance.planner import EnduranceTargetPlanner
from swimtracker.plans.endurance.types import ProgressionPoint
from swimtracker.sessions.models import SwimSession
from swimtracker.utils.calendar import as_date


def _best_until(sessions: Sequence[SwimSession], until: date, default: float) -> float:
    return max(
        (s.longest_continuous_distance for s in sessions if as_date(s.date) <= until),
        default=default,
    )


def build_progression(
    planner: EnduranceTargetPlanner,
    sessions: Sequence[SwimSession],
    today: date | datetime,
) -> list[ProgressionPoint]:
    """Build one progression point per training week, from week 0 to the goal week.

    The fixed plan is the straight line from the baseline to the goal. The
    adaptive plan uses coach overrides where they exist; otherwise it tracks
    the best achieved distance for past weeks and re-projects a straight line
    from the current best to the goal for future weeks.

    Args:
        planner: Planner holding the configuration and overrides
        sessions: All sessions
        today: Reference date

    Returns:
        List of ProgressionPoint, one per week
    """
    config = planner.config
    today_date = as_date(today)
    total_weeks = planner.total_weeks
    goal = config.goal_distance_meters
    baseline = planner.baseline(sessions)

    training_sessions = [s for s in sessions if as_date(s.date) >= config.training_start_date]
    current_best = max((s.longest_continuous_distance for s in training_sessions), default=baseline)
    current_week = min(planner.week_number(today_date), total_weeks)
    weeks_left = total_weeks - current_week
    fixed_increment = (goal - baseline) / total_weeks

    points: list[ProgressionPoint] = []
    for week in range(total_weeks + 1):
        start = config.training_start_date + timedelta(weeks=week)
        end = start + timedelta(days=6)

        override = planner.override_target(week)
        if override is not None:
            adaptive = override.target_distance
        elif week <= current_week:
            adaptive = _best_until(training_sessions, end, baseline)
        elif weeks_left > 0:
            adaptive = current_best + (goal - current_best) / weeks_left * (week - current_week)
        else:
            adaptive = goal

        actual: float | None = None
        if start <= today_date:
            in_week = [s.longest_continuous_distance for s in sessions if start <= as_date(s.date) < start + timedelta(days=7)]
            actual = max(in_week) if in_week else None

        points.append(
            ProgressionPoint(
                week_number=week,
                week_start=start,
                week_end=end,
                fixed_plan=baseline + fixed_increment * week,
                adaptive_plan=adaptive,
                actual=actual,
            )
        )
    return points
