"""Lap construction from raw distance, stroke-count and heart-rate samples.

Each distance sample is one lap. Stroke and heart-rate samples are matched
to a lap by time:
- stroke-count samples whose interval lies fully inside [lap start, lap end]
- heart-rate samples whose start lies in [lap start, lap end)

Missing stroke or heart-rate data leaves the corresponding lap fields None.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from swimtracker.ingestion.types import HeartRateSample, LapSample, StrokeCountSample, StrokeStyle, WorkoutWindow
from swimtracker.utils.calendar import round_half_up
from swimtracker.workouts.models import Lap


def pace_min_per_100m(duration_seconds: float, distance_meters: float) -> float | None:
    """Pace in minutes per 100m, or None when distance is zero."""
    if distance_meters <= 0:
        return None
    return (duration_seconds / 60.0) / (distance_meters / 100.0)


def compute_swolf(stroke_count: int | None, duration_seconds: float) -> int | None:
    """SWOLF = strokes + rounded seconds, only defined with a stroke count."""
    if stroke_count is None:
        return None
    return stroke_count + round_half_up(duration_seconds)


def heart_rate_stats(samples: Sequence[HeartRateSample]) -> tuple[int | None, int | None]:
    """Return (truncated average, max) bpm over samples, or (None, None) when empty."""
    if not samples:
        return (None, None)
    values = [sample.bpm for sample in samples]
    return (int(sum(values) / len(values)), int(max(values)))


def _matching_stroke_samples(
    lap_sample: LapSample,
    stroke_samples: Sequence[StrokeCountSample],
) -> list[StrokeCountSample]:
    return [
        s for s in stroke_samples if s.started_at >= lap_sample.started_at and s.ended_at <= lap_sample.ended_at
    ]


def _matching_heart_rate_samples(
    lap_sample: LapSample,
    heart_rate_samples: Sequence[HeartRateSample],
) -> list[HeartRateSample]:
    return [s for s in heart_rate_samples if lap_sample.started_at <= s.started_at < lap_sample.ended_at]


def _stroke_type(samples: Sequence[StrokeCountSample]) -> StrokeStyle | None:
    for sample in samples:
        if sample.stroke_style is not None:
            return sample.stroke_style
    return None


def build_lap(
    lap_sample: LapSample,
    stroke_samples: Sequence[StrokeCountSample],
    heart_rate_samples: Sequence[HeartRateSample],
) -> Lap:
    """Build one enriched lap from its distance sample and the overlapping samples.

    Args:
        lap_sample: Distance sample for the lap
        stroke_samples: All stroke-count samples of the workout
        heart_rate_samples: All heart-rate samples of the workout

    Returns:
        Lap with derived metrics (None where data is missing)
    """
    duration = max((lap_sample.ended_at - lap_sample.started_at).total_seconds(), 0.0)

    strokes = _matching_stroke_samples(lap_sample, stroke_samples)
    stroke_count = int(sum(s.count for s in strokes)) if strokes else None

    avg_hr, _ = heart_rate_stats(_matching_heart_rate_samples(lap_sample, heart_rate_samples))

    return Lap(
        distance_meters=lap_sample.distance_meters,
        duration_seconds=duration,
        stroke_count=stroke_count,
        swolf=compute_swolf(stroke_count, duration),
        pace_min_per_100m=pace_min_per_100m(duration, lap_sample.distance_meters),
        stroke_type=_stroke_type(strokes),
        avg_heart_rate_bpm=avg_hr,
    )


def build_laps(
    distance_samples: Sequence[LapSample],
    stroke_samples: Sequence[StrokeCountSample],
    heart_rate_samples: Sequence[HeartRateSample],
) -> list[Lap]:
    """Build one lap per distance sample, preserving order."""
    laps = [build_lap(sample, stroke_samples, heart_rate_samples) for sample in distance_samples]

    without_strokes = sum(1 for lap in laps if lap.stroke_count is None)
    without_hr = sum(1 for lap in laps if lap.avg_heart_rate_bpm is None)
    if without_strokes or without_hr:
        logger.debug(
            f"[LAP_BUILDER] Built {len(laps)} laps: {without_strokes} without stroke data, {without_hr} without heart rate"
        )
    else:
        logger.debug(f"[LAP_BUILDER] Built {len(laps)} laps")
    return laps


def build_fallback_lap(window: WorkoutWindow, heart_rate_samples: Sequence[HeartRateSample]) -> Lap:
    """Build a single lap spanning the whole workout when no distance samples exist."""
    duration = window.duration_seconds
    avg_hr, _ = heart_rate_stats(heart_rate_samples)
    return Lap(
        distance_meters=window.total_distance_meters,
        duration_seconds=duration,
        pace_min_per_100m=pace_min_per_100m(duration, window.total_distance_meters),
        avg_heart_rate_bpm=avg_hr,
    )
