"""Declared-total reconciliation for proposed workouts.

Planning services sometimes report a total that does not match their own
sets. The computed total (sum of reps x distance) is authoritative; the
declared total is only used when the sets sum to zero.
"""

from collections.abc import Sequence

from loguru import logger

from swimtracker.plans.reconciliation.types import DistanceReconciliation
from swimtracker.plans.types import ProposedSet, ProposedWorkout

DISTANCE_TOLERANCE_METERS = 50


def compute_actual_total(sets: Sequence[ProposedSet], declared_total: int) -> int:
    """Sum of reps x distance, or the declared total when the sets sum to 0."""
    sets_total = sum(s.reps * s.distance for s in sets)
    return sets_total if sets_total > 0 else declared_total


def reconcile_distance(declared_total: int, sets: Sequence[ProposedSet]) -> DistanceReconciliation:
    """Compare a declared total with its sets; flag differences above the tolerance."""
    actual_total = compute_actual_total(sets, declared_total)
    difference = actual_total - declared_total
    return DistanceReconciliation(
        declared_total=declared_total,
        actual_total=actual_total,
        difference=difference,
        is_mismatch=abs(difference) > DISTANCE_TOLERANCE_METERS,
    )


def reconcile_proposed_workout(workout: ProposedWorkout) -> DistanceReconciliation:
    """Reconcile one proposed workout, logging a warning on mismatch."""
    result = reconcile_distance(workout.total_distance, workout.sets)
    if result.is_mismatch:
        logger.warning(
            f"[PLAN_RECONCILE] '{workout.title}': declared {result.declared_total}m, "
            f"sets add up to {result.actual_total}m (diff {result.difference:+d}m)"
        )
    return result


def format_distance_formula(sets: Sequence[ProposedSet]) -> str:
    """Render sets as a distance formula, e.g. "(10x100) + 200"."""
    parts = [str(s.distance) if s.reps == 1 else f"({s.reps}x{s.distance})" for s in sets]
    return " + ".join(parts)
