"""Tests for set and workout aggregates."""

import pytest

from swimtracker.ingestion.types import StrokeStyle
from swimtracker.workouts.aggregation import aggregate_laps, majority_stroke_type, summarize_set, summarize_workout
from swimtracker.workouts.continuous import longest_continuous_distance
from swimtracker.workouts.models import Lap
from swimtracker.workouts.segmentation import LapGroup


def _lap(
    distance: float = 25.0,
    duration: float = 30.0,
    swolf: int | None = None,
    stroke: StrokeStyle | None = None,
    hr: int | None = None,
) -> Lap:
    return Lap(
        distance_meters=distance,
        duration_seconds=duration,
        stroke_count=swolf - int(duration) if swolf is not None else None,
        swolf=swolf,
        stroke_type=stroke,
        avg_heart_rate_bpm=hr,
    )


class TestMajorityStrokeType:
    """Tests for the most frequent stroke type."""

    def test_most_frequent_wins(self):
        laps = [_lap(stroke=StrokeStyle.BREASTSTROKE), _lap(stroke=StrokeStyle.FREESTYLE), _lap(stroke=StrokeStyle.FREESTYLE)]
        assert majority_stroke_type(laps) == "Freestyle"

    def test_tie_keeps_first_encountered(self):
        laps = [_lap(stroke=StrokeStyle.BACKSTROKE), _lap(stroke=StrokeStyle.FREESTYLE)]
        assert majority_stroke_type(laps) == "Backstroke"

    def test_untagged_laps_are_unknown(self):
        assert majority_stroke_type([_lap(), _lap()]) == "Unknown"


class TestAggregateLaps:
    """Tests for lap aggregates."""

    def test_averages_skip_missing_values(self):
        """Laps without SWOLF or heart rate are left out of the averages."""
        aggregates = aggregate_laps([_lap(swolf=48, hr=140), _lap(swolf=50), _lap(hr=151)])
        assert aggregates.average_swolf == pytest.approx(49.0)
        assert aggregates.average_heart_rate == 145
        assert aggregates.max_heart_rate == 151

    def test_missing_data_is_none_not_zero(self):
        aggregates = aggregate_laps([_lap(), _lap()])
        assert aggregates.average_swolf is None
        assert aggregates.average_heart_rate is None
        assert aggregates.max_heart_rate is None

    def test_pace_from_totals(self):
        """Pace is total duration over total distance, not a mean of lap paces."""
        aggregates = aggregate_laps([_lap(distance=25, duration=20), _lap(distance=75, duration=100)])
        assert aggregates.total_distance == 100
        assert aggregates.total_duration == 120
        assert aggregates.average_pace == pytest.approx(2.0)


class TestSummaries:
    """Tests for SwimSet and WorkoutDetail construction."""

    def test_summarize_set(self):
        swim_set = summarize_set(LapGroup(laps=[_lap(swolf=48), _lap(swolf=50)], rest_after_seconds=45.0))
        assert swim_set.total_distance == 50
        assert swim_set.rest_after_seconds == 45.0
        assert swim_set.average_swolf == pytest.approx(49.0)

    def test_workout_swolf_is_lap_weighted(self):
        """A short set does not count as much as a long one."""
        long_set = summarize_set(LapGroup(laps=[_lap(swolf=40)] * 3, rest_after_seconds=60.0))
        short_set = summarize_set(LapGroup(laps=[_lap(swolf=60)], rest_after_seconds=0.0))
        detail = summarize_workout([long_set, short_set])
        assert detail.average_swolf == pytest.approx(45.0)
        assert detail.total_distance == 100
        assert detail.longest_continuous_distance == 75

    def test_longest_continuous_without_sets(self):
        assert longest_continuous_distance([], 1500.0) == 1500.0
