"""Endurance target planner.

Weekly continuous-distance targets follow a three-tier policy:
1. Coach override for the exact week
2. Linear interpolation between the nearest overrides bounding the week
3. Linear formula from the baseline to the goal distance over the plan

Overrides are never extrapolated: weeks before the first or after the last
override fall through to the linear formula. Targets are rounded half-up to
whole meters. "Now" is always passed in by the caller.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

from loguru import logger

from swimtracker.plans.endurance.types import PlannerConfig, WeeklyProgress, WeekTarget
from swimtracker.sessions.models import EnduranceTargetOverride, SwimSession
from swimtracker.utils.calendar import as_date, days_until, round_half_up, week_start, weeks_between


class EnduranceTargetPlanner:
    """Computes weekly endurance targets and progress snapshots.

    The override lookup is built once at construction; if the same week
    appears more than once, the last value wins.
    """

    def __init__(self, config: PlannerConfig, overrides: Iterable[EnduranceTargetOverride] = ()):
        self.config = config
        lookup: dict[int, float] = {}
        for override in overrides:
            if override.week_number in lookup:
                logger.debug(f"[ENDURANCE] Duplicate override for week {override.week_number}, keeping last value")
            lookup[override.week_number] = override.target_distance_meters
        self._overrides = lookup
        self._override_weeks = sorted(lookup)

    @property
    def has_overrides(self) -> bool:
        return bool(self._overrides)

    @property
    def total_weeks(self) -> int:
        """Whole weeks from training start to the goal date, at least 1."""
        return max(weeks_between(self.config.training_start_date, self.config.goal_date), 1)

    def week_start_for(self, d: date | datetime) -> date:
        return week_start(d, self.config.week_start_day)

    def week_number(self, d: date | datetime) -> int:
        """Training week containing d, floored at 0."""
        return weeks_between(self.config.training_start_date, self.week_start_for(d))

    def baseline(self, sessions: Sequence[SwimSession]) -> float:
        """Longest continuous distance of the earliest session, or the default baseline."""
        if not sessions:
            return self.config.default_baseline_meters
        earliest = min(sessions, key=lambda s: s.date)
        return earliest.longest_continuous_distance

    def override_target(self, week: int) -> WeekTarget | None:
        """Exact or interpolated override target for a week, if the overrides cover it."""
        if week in self._overrides:
            return WeekTarget(week_number=week, target_distance=self._overrides[week], source="override")

        if not self._override_weeks:
            return None

        first_week, last_week = self._override_weeks[0], self._override_weeks[-1]
        if week < first_week or week > last_week:
            return None

        # week is strictly between two override weeks here (exact hits returned above)
        position = bisect.bisect_left(self._override_weeks, week)
        lower_week = self._override_weeks[position - 1]
        upper_week = self._override_weeks[position]

        lower_value = self._overrides[lower_week]
        upper_value = self._overrides[upper_week]
        fraction = (week - lower_week) / (upper_week - lower_week)
        value = round_half_up(lower_value + (upper_value - lower_value) * fraction)
        return WeekTarget(week_number=week, target_distance=float(value), source="interpolated")

    def linear_target(self, week: int, baseline: float) -> WeekTarget:
        """Target on the straight line from baseline (week 0) to the goal distance."""
        increment = (self.config.goal_distance_meters - baseline) / self.total_weeks
        value = round_half_up(baseline + increment * week)
        return WeekTarget(week_number=week, target_distance=float(value), source="linear")

    def target_for_week(self, week: int, sessions: Sequence[SwimSession]) -> WeekTarget:
        """Resolve the target for a week: override, then interpolation, then linear formula."""
        target = self.override_target(week)
        if target is not None:
            return target
        if self.has_overrides:
            logger.debug(f"[ENDURANCE] Week {week} outside override range, using linear formula")
        return self.linear_target(week, self.baseline(sessions))

    def _progress(
        self,
        sessions: Sequence[SwimSession],
        start: date,
        days_left: int,
    ) -> WeeklyProgress:
        end_exclusive = start + timedelta(days=7)
        target = self.target_for_week(self.week_number(start), sessions)
        in_week = [s for s in sessions if start <= as_date(s.date) < end_exclusive]
        best = max((s.longest_continuous_distance for s in in_week), default=0.0)
        return WeeklyProgress(
            week_start=start,
            week_end=start + timedelta(days=6),
            target_distance=target.target_distance,
            best_achieved_distance=best,
            days_left=days_left,
            is_override_target=target.is_override_target,
        )

    def current_week_progress(self, sessions: Sequence[SwimSession], now: date | datetime) -> WeeklyProgress:
        """Progress for the week containing now."""
        start = self.week_start_for(now)
        return self._progress(sessions, start, days_until(now, start + timedelta(days=6)))

    def last_week_progress(self, sessions: Sequence[SwimSession], now: date | datetime) -> WeeklyProgress:
        """Progress for the week before the one containing now (days_left is always 0)."""
        start = self.week_start_for(now) - timedelta(days=7)
        return self._progress(sessions, start, 0)
