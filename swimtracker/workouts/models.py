"""Structured swim workout models.

A workout is an ordered list of sets; a set is an ordered, non-empty list of
laps swum without a rest gap above the threshold. Optional metrics are None
when the underlying data is missing, never zero.
"""

from pydantic import BaseModel, Field

from swimtracker.ingestion.types import StrokeStyle

UNKNOWN_STROKE_TYPE = "Unknown"

# Current WorkoutDetail document version
WORKOUT_DETAIL_SCHEMA_VERSION = 2


class Lap(BaseModel):
    """One lap derived from a distance sample.

    Attributes:
        distance_meters: Lap distance
        duration_seconds: Lap duration (sample end - start)
        stroke_count: Sum of contained stroke-count samples, if any matched
        swolf: stroke_count + round(duration_seconds), only with a stroke count
        pace_min_per_100m: Minutes per 100m, None for zero-distance laps
        stroke_type: Stroke style tagged on the matched stroke samples
        avg_heart_rate_bpm: Truncated mean of heart-rate samples starting in the lap
    """

    distance_meters: float
    duration_seconds: float
    stroke_count: int | None = None
    swolf: int | None = None
    pace_min_per_100m: float | None = None
    stroke_type: StrokeStyle | None = None
    avg_heart_rate_bpm: int | None = None


class SwimSet(BaseModel):
    """A run of laps with no rest gap above the threshold."""

    laps: list[Lap] = Field(min_length=1)
    rest_after_seconds: float = 0.0
    total_distance: float
    total_duration: float
    average_swolf: float | None = None
    average_pace: float | None = None
    majority_stroke_type: str = UNKNOWN_STROKE_TYPE
    average_heart_rate: int | None = None
    max_heart_rate: int | None = None


class WorkoutDetail(BaseModel):
    """Set structure and aggregate metrics for one workout."""

    schema_version: int = WORKOUT_DETAIL_SCHEMA_VERSION
    sets: list[SwimSet] = Field(default_factory=list)
    total_distance: float
    total_duration: float
    longest_continuous_distance: float
    average_swolf: float | None = None
    average_pace: float | None = None
    majority_stroke_type: str = UNKNOWN_STROKE_TYPE
    average_heart_rate: int | None = None
    max_heart_rate: int | None = None

    @property
    def laps(self) -> list[Lap]:
        """All laps across all sets, in order."""
        return [lap for swim_set in self.sets for lap in swim_set.laps]
