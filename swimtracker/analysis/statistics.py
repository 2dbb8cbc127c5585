"""Training statistics over logged sessions.

Pure summaries for the statistics screen: weekly and monthly totals, swim
frequency, the day streak, the recent-weeks comparison, all-time records and
the heart-rate zone split of imported laps. "Now" is always a parameter.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from swimtracker.sessions.models import SwimSession
from swimtracker.utils.calendar import SUNDAY, as_date, week_start

# Upper bounds (exclusive) of the heart-rate zones, in bpm; the last zone is open
HEART_RATE_ZONES: tuple[tuple[str, float | None], ...] = (
    ("Recovery", 120),
    ("Aerobic", 150),
    ("Threshold", 170),
    ("Max Effort", None),
)

COMPARISON_WEEKS = 5


@dataclass(frozen=True)
class PeriodTotal:
    """Distance and swim count for one week or month."""

    period_start: date
    distance: float
    swims: int


@dataclass(frozen=True)
class WeekSummary:
    """One week of the recent-weeks comparison."""

    week_start: date
    distance: float
    longest_set: float | None  # None when no session that week has lap detail
    is_current: bool


@dataclass(frozen=True)
class WeekChange:
    """Change from one week to the next; None where the earlier week has nothing to compare."""

    distance_change: float | None
    distance_change_pct: float | None
    longest_set_change: float | None
    longest_set_change_pct: float | None


@dataclass(frozen=True)
class AllTimeStats:
    total_swims: int
    total_distance: float
    total_minutes: float
    average_distance: float
    best_pace: float | None  # min/100m
    best_distance: float
    best_swolf: float | None
    longest_continuous: float


def sessions_since(sessions: Sequence[SwimSession], now: datetime, days: int | None) -> list[SwimSession]:
    """Sessions of the last `days` days, or all of them when days is None."""
    if days is None:
        return list(sessions)
    start = now - timedelta(days=days)
    return [s for s in sessions if s.date >= start]


def weekly_totals(sessions: Sequence[SwimSession], first_weekday: int = SUNDAY) -> list[PeriodTotal]:
    """Distance and swim count per week that has swims, oldest first."""
    return _period_totals(sessions, lambda s: week_start(s.date, first_weekday))


def monthly_totals(sessions: Sequence[SwimSession]) -> list[PeriodTotal]:
    """Distance and swim count per calendar month that has swims, oldest first."""
    return _period_totals(sessions, lambda s: as_date(s.date).replace(day=1))


def _period_totals(sessions: Sequence[SwimSession], period_of) -> list[PeriodTotal]:
    distance: dict[date, float] = {}
    swims: dict[date, int] = {}
    for session in sessions:
        start = period_of(session)
        distance[start] = distance.get(start, 0.0) + session.total_distance_meters
        swims[start] = swims.get(start, 0) + 1
    return [PeriodTotal(period_start=start, distance=distance[start], swims=swims[start]) for start in sorted(distance)]


def distance_trend(weekly: Sequence[PeriodTotal]) -> float | None:
    """Last week's total minus the first week's, with at least two weeks of data."""
    if len(weekly) < 2:
        return None
    return weekly[-1].distance - weekly[0].distance


def consistency_streak(sessions: Sequence[SwimSession], today: date | datetime) -> int:
    """Consecutive swim days ending today or yesterday; 0 once a full day is missed."""
    swim_days = sorted({as_date(s.date) for s in sessions}, reverse=True)
    if not swim_days or (as_date(today) - swim_days[0]).days > 1:
        return 0

    streak = 1
    for newer, older in zip(swim_days, swim_days[1:]):
        if (newer - older).days > 1:
            break
        streak += 1
    return streak


def recent_weeks(
    sessions: Sequence[SwimSession],
    now: datetime,
    weeks: int = COMPARISON_WEEKS,
    first_weekday: int = SUNDAY,
) -> list[WeekSummary]:
    """The current week and the weeks before it, oldest first, including empty weeks."""
    current = week_start(now, first_weekday)
    summaries: list[WeekSummary] = []
    for offset in range(weeks - 1, -1, -1):
        start = current - timedelta(weeks=offset)
        in_week = [s for s in sessions if start <= as_date(s.date) < start + timedelta(days=7)]
        longest = [s.detail.longest_continuous_distance for s in in_week if s.detail is not None]
        summaries.append(
            WeekSummary(
                week_start=start,
                distance=sum(s.total_distance_meters for s in in_week),
                longest_set=max(longest) if longest else None,
                is_current=offset == 0,
            )
        )
    return summaries


def _change(current: float | None, previous: float | None) -> tuple[float | None, float | None]:
    if current is None or previous is None or previous <= 0:
        return (None, None)
    change = current - previous
    return (change, change / previous * 100)


def compare_weeks(current: WeekSummary, previous: WeekSummary) -> WeekChange:
    distance_change, distance_pct = _change(current.distance, previous.distance)
    longest_change, longest_pct = _change(current.longest_set, previous.longest_set)
    return WeekChange(
        distance_change=distance_change,
        distance_change_pct=distance_pct,
        longest_set_change=longest_change,
        longest_set_change_pct=longest_pct,
    )


def completed_week_averages(weeks: Sequence[WeekSummary]) -> tuple[float | None, float | None]:
    """Average distance and longest set over completed weeks that have data."""
    completed = [w for w in weeks if not w.is_current]
    distances = [w.distance for w in completed if w.distance > 0]
    longest = [w.longest_set for w in completed if w.longest_set]
    return (
        sum(distances) / len(distances) if distances else None,
        sum(longest) / len(longest) if longest else None,
    )


def all_time_stats(sessions: Sequence[SwimSession]) -> AllTimeStats:
    total_distance = sum(s.total_distance_meters for s in sessions)
    paces = [
        s.total_duration_minutes / (s.total_distance_meters / 100) for s in sessions if s.total_distance_meters > 0
    ]
    swolfs = [s.detail.average_swolf for s in sessions if s.detail is not None and s.detail.average_swolf is not None]
    return AllTimeStats(
        total_swims=len(sessions),
        total_distance=total_distance,
        total_minutes=sum(s.total_duration_minutes for s in sessions),
        average_distance=total_distance / len(sessions) if sessions else 0.0,
        best_pace=min(paces) if paces else None,
        best_distance=max((s.total_distance_meters for s in sessions), default=0.0),
        best_swolf=min(swolfs) if swolfs else None,
        longest_continuous=max((s.longest_continuous_distance for s in sessions), default=0.0),
    )


def heart_rate_zones(sessions: Sequence[SwimSession]) -> dict[str, float]:
    """Percentage of laps with heart rate in each zone, over imported sessions.

    Returns an empty dict when no lap has a heart rate.
    """
    rates = [
        lap.avg_heart_rate_bpm
        for s in sessions
        if s.detail is not None
        for swim_set in s.detail.sets
        for lap in swim_set.laps
        if lap.avg_heart_rate_bpm is not None
    ]
    if not rates:
        return {}

    counts = dict.fromkeys((name for name, _ in HEART_RATE_ZONES), 0)
    for bpm in rates:
        for name, upper in HEART_RATE_ZONES:
            if upper is None or bpm < upper:
                counts[name] += 1
                break
    return {name: count * 100 / len(rates) for name, count in counts.items()}
