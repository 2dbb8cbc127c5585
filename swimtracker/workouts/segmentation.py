"""Set segmentation.

Splits an ordered lap sequence into sets. A new set starts whenever the rest
gap between one distance sample's end and the next one's start exceeds
REST_GAP_THRESHOLD_SECONDS. The last set always has rest_after_seconds=0.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from swimtracker.ingestion.types import LapSample
from swimtracker.workouts.models import Lap

REST_GAP_THRESHOLD_SECONDS = 30.0


@dataclass(frozen=True)
class LapGroup:
    """Laps of one set and the rest taken after it."""

    laps: list[Lap]
    rest_after_seconds: float


def rest_gap_seconds(current: LapSample, following: LapSample) -> float:
    """Wall-clock gap between the end of one distance sample and the start of the next."""
    return (following.started_at - current.ended_at).total_seconds()


def segment_laps(
    laps: Sequence[Lap],
    samples: Sequence[LapSample],
    threshold_seconds: float = REST_GAP_THRESHOLD_SECONDS,
) -> list[LapGroup]:
    """Partition laps into sets using the rest-gap rule.

    Args:
        laps: Laps in order, one per distance sample
        samples: The distance samples the laps were built from (same order)
        threshold_seconds: Gaps strictly greater than this start a new set

    Returns:
        Lap groups in order; concatenating their laps yields the input laps

    Raises:
        ValueError: If laps and samples differ in length
    """
    if len(laps) != len(samples):
        raise ValueError(f"Expected one distance sample per lap, got {len(laps)} laps and {len(samples)} samples")

    groups: list[LapGroup] = []
    current: list[Lap] = []

    for index, lap in enumerate(laps):
        current.append(lap)

        if index == len(laps) - 1:
            groups.append(LapGroup(laps=current, rest_after_seconds=0.0))
            break

        gap = rest_gap_seconds(samples[index], samples[index + 1])
        if gap > threshold_seconds:
            groups.append(LapGroup(laps=current, rest_after_seconds=gap))
            current = []

    logger.debug(f"[SEGMENTER] {len(laps)} laps -> {len(groups)} sets")
    return groups
