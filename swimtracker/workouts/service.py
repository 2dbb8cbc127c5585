"""Workout analysis pipeline: samples -> laps -> sets -> WorkoutDetail."""

from __future__ import annotations

from loguru import logger

from swimtracker.ingestion.types import SampleBundle
from swimtracker.workouts.aggregation import summarize_set, summarize_workout
from swimtracker.workouts.lap_builder import build_fallback_lap, build_laps, heart_rate_stats
from swimtracker.workouts.models import UNKNOWN_STROKE_TYPE, SwimSet, WorkoutDetail
from swimtracker.workouts.segmentation import segment_laps


def _fallback_detail(bundle: SampleBundle) -> WorkoutDetail:
    """Single-set detail for a workout without distance samples.

    Heart-rate aggregates cover every sample in the workout window.
    """
    lap = build_fallback_lap(bundle.window, bundle.heart_rate_samples)
    avg_hr, max_hr = heart_rate_stats(bundle.heart_rate_samples)

    swim_set = SwimSet(
        laps=[lap],
        rest_after_seconds=0.0,
        total_distance=lap.distance_meters,
        total_duration=lap.duration_seconds,
        average_pace=lap.pace_min_per_100m,
        majority_stroke_type=UNKNOWN_STROKE_TYPE,
        average_heart_rate=avg_hr,
        max_heart_rate=max_hr,
    )
    logger.info(
        f"[WORKOUT_ANALYSIS] Fallback: no distance samples, single set. "
        f"total_distance={int(lap.distance_meters)}m"
    )
    return WorkoutDetail(
        sets=[swim_set],
        total_distance=lap.distance_meters,
        total_duration=lap.duration_seconds,
        longest_continuous_distance=lap.distance_meters,
        average_pace=lap.pace_min_per_100m,
        majority_stroke_type=UNKNOWN_STROKE_TYPE,
        average_heart_rate=avg_hr,
        max_heart_rate=max_hr,
    )


def analyze_workout(bundle: SampleBundle) -> WorkoutDetail:
    """Turn a workout's sample streams into its set structure and metrics.

    Args:
        bundle: Distance, stroke-count and heart-rate samples for one workout

    Returns:
        WorkoutDetail; a single synthetic lap/set when no distance samples exist
    """
    if not bundle.distance_samples:
        return _fallback_detail(bundle)

    laps = build_laps(bundle.distance_samples, bundle.stroke_samples, bundle.heart_rate_samples)
    sets = [summarize_set(group) for group in segment_laps(laps, bundle.distance_samples)]
    detail = summarize_workout(sets)

    logger.info(
        f"[WORKOUT_ANALYSIS] Workout details: {len(detail.sets)} sets, "
        f"total_distance={int(detail.total_distance)}m, "
        f"longest_continuous_distance={int(detail.longest_continuous_distance)}m"
    )
    for index, swim_set in enumerate(detail.sets, start=1):
        swolf = f"{swim_set.average_swolf:.1f}" if swim_set.average_swolf is not None else "N/A"
        logger.debug(
            f"[WORKOUT_ANALYSIS]   Set {index}: {int(swim_set.total_distance)}m, {len(swim_set.laps)} laps, "
            f"SWOLF={swolf}, stroke={swim_set.majority_stroke_type}"
        )
    return detail
