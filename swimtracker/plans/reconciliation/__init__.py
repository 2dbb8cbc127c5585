"""Distance reconciliation for proposed workouts.

Compares the total a planning service declares with the sum of its own sets.
Advisory only: nothing here blocks a plan from being accepted.
"""

from swimtracker.plans.reconciliation.distance import (
    DISTANCE_TOLERANCE_METERS,
    compute_actual_total,
    format_distance_formula,
    reconcile_distance,
    reconcile_proposed_workout,
)
from swimtracker.plans.reconciliation.types import DistanceReconciliation

__all__ = [
    "DISTANCE_TOLERANCE_METERS",
    "DistanceReconciliation",
    "compute_actual_total",
    "format_distance_formula",
    "reconcile_distance",
    "reconcile_proposed_workout",
]
