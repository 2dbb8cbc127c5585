"""Set and workout aggregate metrics.

Workout-level metrics are computed over the flattened lap list, not as a
mean of per-set means, so short sets are not over-weighted.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from swimtracker.workouts.continuous import longest_continuous_distance
from swimtracker.workouts.lap_builder import pace_min_per_100m
from swimtracker.workouts.models import UNKNOWN_STROKE_TYPE, Lap, SwimSet, WorkoutDetail
from swimtracker.workouts.segmentation import LapGroup


@dataclass(frozen=True)
class LapAggregates:
    total_distance: float
    total_duration: float
    average_swolf: float | None
    average_pace: float | None
    majority_stroke_type: str
    average_heart_rate: int | None
    max_heart_rate: int | None


def majority_stroke_type(laps: Sequence[Lap]) -> str:
    """Most frequent stroke type among laps, first-encountered wins ties."""
    counts: dict[str, int] = {}
    for lap in laps:
        if lap.stroke_type is not None:
            key = str(lap.stroke_type)
            counts[key] = counts.get(key, 0) + 1
    if not counts:
        return UNKNOWN_STROKE_TYPE
    # max() keeps the first key with the highest count (dict preserves insertion order)
    return max(counts, key=lambda key: counts[key])


def aggregate_laps(laps: Sequence[Lap]) -> LapAggregates:
    """Compute distance, duration, SWOLF, pace, stroke and heart-rate aggregates."""
    total_distance = sum(lap.distance_meters for lap in laps)
    total_duration = sum(lap.duration_seconds for lap in laps)

    swolf_values = [lap.swolf for lap in laps if lap.swolf is not None]
    average_swolf = sum(swolf_values) / len(swolf_values) if swolf_values else None

    hr_values = [lap.avg_heart_rate_bpm for lap in laps if lap.avg_heart_rate_bpm is not None]
    average_hr = sum(hr_values) // len(hr_values) if hr_values else None
    max_hr = max(hr_values) if hr_values else None

    return LapAggregates(
        total_distance=total_distance,
        total_duration=total_duration,
        average_swolf=average_swolf,
        average_pace=pace_min_per_100m(total_duration, total_distance),
        majority_stroke_type=majority_stroke_type(laps),
        average_heart_rate=average_hr,
        max_heart_rate=max_hr,
    )


def summarize_set(group: LapGroup) -> SwimSet:
    """Build a SwimSet with aggregates from a lap group."""
    aggregates = aggregate_laps(group.laps)
    return SwimSet(
        laps=list(group.laps),
        rest_after_seconds=group.rest_after_seconds,
        total_distance=aggregates.total_distance,
        total_duration=aggregates.total_duration,
        average_swolf=aggregates.average_swolf,
        average_pace=aggregates.average_pace,
        majority_stroke_type=aggregates.majority_stroke_type,
        average_heart_rate=aggregates.average_heart_rate,
        max_heart_rate=aggregates.max_heart_rate,
    )


def summarize_workout(sets: Sequence[SwimSet]) -> WorkoutDetail:
    """Build a WorkoutDetail with workout-level aggregates over all laps."""
    laps = [lap for swim_set in sets for lap in swim_set.laps]
    aggregates = aggregate_laps(laps)
    return WorkoutDetail(
        sets=list(sets),
        total_distance=aggregates.total_distance,
        total_duration=aggregates.total_duration,
        longest_continuous_distance=longest_continuous_distance(sets, aggregates.total_distance),
        average_swolf=aggregates.average_swolf,
        average_pace=aggregates.average_pace,
        majority_stroke_type=aggregates.majority_stroke_type,
        average_heart_rate=aggregates.average_heart_rate,
        max_heart_rate=aggregates.max_heart_rate,
    )
