"""Endurance planner configuration and outputs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel

if TYPE_CHECKING:
    from swimtracker.config.settings import Settings

TargetSource = Literal["override", "interpolated", "linear"]


@dataclass(frozen=True)
class PlannerConfig:
    """Fixed anchor and goal for the endurance plan.

    Attributes:
        training_start_date: First day of week 0
        goal_date: Date the goal distance should be reached
        goal_distance_meters: Continuous distance goal
        default_baseline_meters: Baseline used before any session exists
        week_start_day: First weekday of a training week (0=Monday, 6=Sunday)
    """

    training_start_date: date
    goal_date: date
    goal_distance_meters: float
    default_baseline_meters: float = 625.0
    week_start_day: int = 6

    @classmethod
    def from_settings(cls, settings: Settings) -> PlannerConfig:
        return cls(
            training_start_date=settings.training_start_date,
            goal_date=settings.goal_date,
            goal_distance_meters=settings.goal_distance_meters,
            default_baseline_meters=settings.default_baseline_meters,
            week_start_day=settings.week_start_day,
        )


@dataclass(frozen=True)
class WeekTarget:
    """Target distance for one week and how it was derived."""

    week_number: int
    target_distance: float
    source: TargetSource

    @property
    def is_override_target(self) -> bool:
        return self.source != "linear"


class WeeklyProgress(BaseModel):
    """Progress snapshot for one training week.

    Attributes:
        week_start: First day of the week
        week_end: Last day of the week
        target_distance: Continuous distance target for the week
        best_achieved_distance: Best longest-continuous distance swum that week
        days_left: Whole days left until week_end (0 for past weeks)
        is_override_target: Whether the target came from coach overrides
    """

    week_start: date
    week_end: date
    target_distance: float
    best_achieved_distance: float
    days_left: int
    is_override_target: bool


class ProgressionPoint(BaseModel):
    """One week of the endurance progression chart."""

    week_number: int
    week_start: date
    week_end: date
    fixed_plan: float
    adaptive_plan: float
    actual: float | None = None
