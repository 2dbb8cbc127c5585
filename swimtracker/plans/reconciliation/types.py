"""Distance reconciliation result model."""

from pydantic import BaseModel


class DistanceReconciliation(BaseModel):
    """Declared vs computed total distance of a proposed workout.

    Advisory only: a mismatch never blocks acceptance.

    Attributes:
        declared_total: Total distance reported by the planning service
        actual_total: Sum of reps x distance over the sets (declared total if that sum is 0)
        difference: actual_total - declared_total
        is_mismatch: Whether |difference| exceeds the tolerance
    """

    declared_total: int
    actual_total: int
    difference: int
    is_mismatch: bool
