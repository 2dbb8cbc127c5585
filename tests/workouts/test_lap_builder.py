"""Tests for lap construction from distance, stroke and heart-rate samples."""

import pytest

from swimtracker.ingestion.types import StrokeStyle
from swimtracker.workouts.lap_builder import (
    build_fallback_lap,
    build_lap,
    build_laps,
    compute_swolf,
    heart_rate_stats,
    pace_min_per_100m,
)
from tests.samples import hr_sample, lap_sample, stroke_sample, window


class TestDerivedMetrics:
    """Tests for SWOLF, pace and heart-rate helpers."""

    def test_swolf_adds_rounded_seconds(self):
        """SWOLF is strokes plus duration rounded half-up."""
        assert compute_swolf(18, 30.0) == 48
        assert compute_swolf(18, 30.5) == 49
        assert compute_swolf(18, 30.49) == 48

    def test_swolf_undefined_without_strokes(self):
        """No stroke count means no SWOLF."""
        assert compute_swolf(None, 30.0) is None

    def test_pace_per_100m(self):
        """25m in 30s is 2:00 per 100m."""
        assert pace_min_per_100m(30.0, 25.0) == pytest.approx(2.0)

    def test_pace_undefined_for_zero_distance(self):
        """Zero distance gives no pace instead of dividing by zero."""
        assert pace_min_per_100m(30.0, 0.0) is None

    def test_heart_rate_stats_truncates_average(self):
        """Average is truncated to an integer, max is the highest reading."""
        samples = [hr_sample(0, 140), hr_sample(5, 141), hr_sample(10, 141)]
        assert heart_rate_stats(samples) == (140, 141)

    def test_heart_rate_stats_empty(self):
        assert heart_rate_stats([]) == (None, None)


class TestBuildLap:
    """Tests for matching samples to a single lap."""

    def test_contained_stroke_samples_are_summed(self):
        """Only stroke samples fully inside the lap count."""
        lap = build_lap(
            lap_sample(0, 30),
            [
                stroke_sample(0, 15, 9, style=2),
                stroke_sample(15, 15, 9.4),
                stroke_sample(25, 10, 5),  # extends past the lap end
            ],
            [],
        )
        assert lap.stroke_count == 18
        assert lap.swolf == 48
        assert lap.stroke_type == StrokeStyle.FREESTYLE

    def test_stroke_count_sum_is_truncated(self):
        """Fractional stroke counts sum first, then drop the fraction."""
        lap = build_lap(lap_sample(0, 30), [stroke_sample(0, 15, 8.5), stroke_sample(15, 30, 9.4)], [])
        assert lap.stroke_count == 17
        assert lap.swolf == 47

    def test_no_stroke_samples_leaves_fields_none(self):
        """Missing stroke data degrades to None, not zero."""
        lap = build_lap(lap_sample(0, 30), [], [])
        assert lap.stroke_count is None
        assert lap.swolf is None
        assert lap.stroke_type is None
        assert lap.pace_min_per_100m == pytest.approx(2.0)

    def test_stroke_type_uses_first_tagged_sample(self):
        lap = build_lap(
            lap_sample(0, 30),
            [stroke_sample(0, 10, 6), stroke_sample(10, 10, 6, style="Backstroke"), stroke_sample(20, 10, 6, style=5)],
            [],
        )
        assert lap.stroke_type == StrokeStyle.BACKSTROKE

    def test_unknown_style_code_is_untagged(self):
        """Style code 0 and unknown codes carry no stroke type."""
        lap = build_lap(lap_sample(0, 30), [stroke_sample(0, 30, 18, style=0)], [])
        assert lap.stroke_count == 18
        assert lap.stroke_type is None

    def test_heart_rate_matched_on_half_open_interval(self):
        """A sample starting exactly at lap end belongs to the next lap."""
        lap = build_lap(lap_sample(0, 30), [], [hr_sample(0, 130), hr_sample(29, 135), hr_sample(30, 180)])
        assert lap.avg_heart_rate_bpm == 132

    def test_zero_distance_lap(self):
        lap = build_lap(lap_sample(0, 30, distance=0.0), [stroke_sample(0, 30, 10)], [])
        assert lap.pace_min_per_100m is None
        assert lap.swolf == 40


class TestBuildLaps:
    """Tests for building the lap list and the fallback lap."""

    def test_one_lap_per_sample_in_order(self):
        samples = [lap_sample(0, 30, 25), lap_sample(35, 32, 50), lap_sample(70, 28, 25)]
        laps = build_laps(samples, [], [])
        assert [lap.distance_meters for lap in laps] == [25, 50, 25]
        assert [lap.duration_seconds for lap in laps] == [30, 32, 28]

    def test_fallback_lap_spans_window(self):
        """Without distance samples the whole workout becomes one lap."""
        lap = build_fallback_lap(window(1200, total_distance=1000), [hr_sample(10, 120), hr_sample(600, 150)])
        assert lap.distance_meters == 1000
        assert lap.duration_seconds == 1200
        assert lap.pace_min_per_100m == pytest.approx(2.0)
        assert lap.avg_heart_rate_bpm == 135
        assert lap.stroke_count is None
        assert lap.swolf is None
