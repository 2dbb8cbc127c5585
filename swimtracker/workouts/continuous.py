"""Longest continuous distance, the personal-record signal for endurance progress."""

from __future__ import annotations

from collections.abc import Sequence

from swimtracker.workouts.models import SwimSet


def longest_continuous_distance(sets: Sequence[SwimSet], total_distance: float) -> float:
    """Largest set distance, or the workout total when there are no sets."""
    if not sets:
        return total_distance
    return max(swim_set.total_distance for swim_set in sets)
