"""Proposed-then-accepted plan staging.

propose -> reconcile -> accept/reject. The pending plan is an immutable value
passed through the call chain; nothing holds it as shared state.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from loguru import logger
from pydantic import ValidationError

from swimtracker.plans.reconciliation.distance import reconcile_proposed_workout
from swimtracker.plans.reconciliation.types import DistanceReconciliation
from swimtracker.plans.types import PlannedWorkout, ProposedWorkout
from swimtracker.sessions.models import SwimSession

# Default assumed speed when a completed workout has no recorded duration
DEFAULT_METERS_PER_MINUTE = 50.0
DEFAULT_DIFFICULTY = 5


@dataclass(frozen=True)
class ProposalItem:
    workout: ProposedWorkout
    reconciliation: DistanceReconciliation


@dataclass(frozen=True)
class PendingPlan:
    """Proposed workouts with their reconciliation, awaiting acceptance."""

    items: tuple[ProposalItem, ...]

    @property
    def mismatches(self) -> list[ProposalItem]:
        return [item for item in self.items if item.reconciliation.is_mismatch]


def propose_plan(raw_items: Iterable[dict[str, Any]]) -> PendingPlan:
    """Parse and reconcile candidate workouts from the planning service.

    Malformed items are skipped with a warning; the rest are kept.
    """
    items: list[ProposalItem] = []
    for index, raw in enumerate(raw_items):
        try:
            workout = ProposedWorkout.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"[PLAN_PROPOSAL] Skipping malformed workout #{index}: {e.error_count()} validation error(s)")
            continue
        items.append(ProposalItem(workout=workout, reconciliation=reconcile_proposed_workout(workout)))

    pending = PendingPlan(items=tuple(items))
    logger.info(f"[PLAN_PROPOSAL] Proposed {len(pending.items)} workouts ({len(pending.mismatches)} with distance mismatch)")
    return pending


def accept_plan(pending: PendingPlan, today: date | datetime) -> list[PlannedWorkout]:
    """Schedule every proposed workout at today + days_from_now.

    Distance mismatches are advisory and do not block acceptance; the
    reconciled total is kept alongside the declared one.
    """
    start = today.date() if isinstance(today, datetime) else today
    planned = [
        PlannedWorkout(
            scheduled_date=start + timedelta(days=item.workout.days_from_now),
            title=item.workout.title,
            declared_total_distance=item.reconciliation.declared_total,
            actual_total_distance=item.reconciliation.actual_total,
            focus=item.workout.focus,
            effort_level=item.workout.effort_level,
            sets=list(item.workout.sets),
        )
        for item in pending.items
    ]
    logger.info(f"[PLAN_PROPOSAL] Accepted {len(planned)} workouts")
    return planned


def reject_plan(pending: PendingPlan) -> None:
    """Discard a pending plan."""
    logger.info(f"[PLAN_PROPOSAL] Rejected plan with {len(pending.items)} workouts")


def parse_difficulty(effort_level: str) -> int:
    """Largest number in an effort description ("6-7/10" -> 7, "10/10" -> 10), default 5.

    A trailing "/N" scale is ignored.
    """
    numbers = [int(n) for n in re.findall(r"\d+", re.sub(r"/\s*\d+", "", effort_level))]
    value = max(numbers) if numbers else DEFAULT_DIFFICULTY
    return max(1, min(10, value))


def complete_workout(
    planned: PlannedWorkout,
    completed_at: datetime,
    duration_minutes: float | None = None,
) -> SwimSession:
    """Build the session recording a completed planned workout."""
    distance = float(planned.actual_total_distance)
    if duration_minutes is None:
        duration_minutes = distance / DEFAULT_METERS_PER_MINUTE

    notes = f"{planned.title} - {planned.focus}" if planned.focus else planned.title
    session = SwimSession(
        date=completed_at,
        total_distance_meters=distance,
        total_duration_minutes=duration_minutes,
        notes=notes,
        difficulty=parse_difficulty(planned.effort_level),
        workout_id=planned.id,
    )
    logger.info(f"[PLAN_PROPOSAL] Completed planned workout {planned.id} as session {session.id}")
    return session
