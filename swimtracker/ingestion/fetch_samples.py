"""Concurrent fetch of the three sample streams for one workout.

The distance, stroke-count and heart-rate streams are fetched in parallel and
joined before lap construction. Stroke-count and heart-rate failures degrade
to empty streams; a distance failure aborts the import of that workout.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from loguru import logger

from swimtracker.ingestion.errors import SampleFetchError
from swimtracker.ingestion.source import SampleSource
from swimtracker.ingestion.types import SampleBundle, WorkoutWindow

T = TypeVar("T")


async def _with_timeout(awaitable: Awaitable[T], timeout_seconds: float) -> T:
    return await asyncio.wait_for(awaitable, timeout=timeout_seconds)


def _describe(error: BaseException) -> str:
    if isinstance(error, TimeoutError):
        return "timed out"
    return f"{type(error).__name__}: {error}"


async def fetch_workout_samples(
    source: SampleSource,
    window: WorkoutWindow,
    timeout_seconds: float,
) -> SampleBundle:
    """Fetch distance, stroke-count and heart-rate samples for a workout window.

    Args:
        source: Sample source to query
        window: Workout time window and totals
        timeout_seconds: Timeout applied to each stream independently

    Returns:
        SampleBundle with all three streams (empty lists for degraded streams)

    Raises:
        SampleFetchError: If the distance stream fails or times out
    """
    start, end = window.started_at, window.ended_at

    distance_result, stroke_result, hr_result = await asyncio.gather(
        _with_timeout(source.fetch_distance_samples(start, end), timeout_seconds),
        _with_timeout(source.fetch_stroke_count_samples(start, end), timeout_seconds),
        _with_timeout(source.fetch_heart_rate_samples(start, end), timeout_seconds),
        return_exceptions=True,
    )

    # Caller cancellation must not be swallowed as a degraded stream
    for result in (distance_result, stroke_result, hr_result):
        if isinstance(result, asyncio.CancelledError):
            raise result

    if isinstance(distance_result, BaseException):
        logger.error(f"[FETCH_SAMPLES] Distance samples unavailable for {start.isoformat()}: {_describe(distance_result)}")
        raise SampleFetchError("distance", _describe(distance_result)) from distance_result

    stroke_samples = stroke_result
    if isinstance(stroke_result, BaseException):
        logger.warning(f"[FETCH_SAMPLES] Stroke count samples unavailable ({_describe(stroke_result)}), continuing without")
        stroke_samples = []

    heart_rate_samples = hr_result
    if isinstance(hr_result, BaseException):
        logger.warning(f"[FETCH_SAMPLES] Heart rate samples unavailable ({_describe(hr_result)}), continuing without")
        heart_rate_samples = []

    logger.debug(
        f"[FETCH_SAMPLES] Fetched {len(distance_result)} distance, {len(stroke_samples)} stroke, "
        f"{len(heart_rate_samples)} heart rate samples"
    )
    return SampleBundle(
        window=window,
        distance_samples=list(distance_result),
        stroke_samples=list(stroke_samples),
        heart_rate_samples=list(heart_rate_samples),
    )
