"""Tests for the end-to-end workout analysis pipeline."""

import pytest

from swimtracker.ingestion.types import SampleBundle
from swimtracker.workouts.service import analyze_workout
from tests.samples import consecutive_laps, hr_sample, lap_sample, stroke_sample, window


class TestAnalyzeWorkout:
    """Tests for analyze_workout."""

    def test_interval_workout(self):
        """4x25 with short rest, a long rest, then 2x25."""
        distance = consecutive_laps(4) + consecutive_laps(2, start=200)
        strokes = [stroke_sample(offset, 30, 18, style=2) for offset in (0, 35, 70, 105, 200, 235)]
        heart_rate = [hr_sample(5, 140), hr_sample(40, 150), hr_sample(205, 160)]
        bundle = SampleBundle(
            window=window(300, total_distance=150),
            distance_samples=distance,
            stroke_samples=strokes,
            heart_rate_samples=heart_rate,
        )

        detail = analyze_workout(bundle)

        assert [len(s.laps) for s in detail.sets] == [4, 2]
        assert [s.total_distance for s in detail.sets] == [100, 50]
        assert detail.sets[0].rest_after_seconds == pytest.approx(65)
        assert detail.sets[-1].rest_after_seconds == 0
        assert detail.total_distance == 150
        assert detail.longest_continuous_distance == 100
        assert detail.average_swolf == pytest.approx(48.0)
        assert detail.majority_stroke_type == "Freestyle"
        assert detail.average_heart_rate == 150
        assert detail.max_heart_rate == 160

    def test_laps_are_preserved_in_order(self):
        distance = consecutive_laps(3) + consecutive_laps(3, start=300)
        detail = analyze_workout(SampleBundle(window=window(500), distance_samples=distance))
        assert [lap.duration_seconds for lap in detail.laps] == [30.0] * 6
        assert len(detail.laps) == len(distance)

    def test_workout_without_stroke_or_heart_rate_data(self):
        """Missing streams degrade to None metrics, not errors."""
        detail = analyze_workout(SampleBundle(window=window(100), distance_samples=[lap_sample(0, 30), lap_sample(35, 30)]))
        assert len(detail.sets) == 1
        assert detail.average_swolf is None
        assert detail.average_heart_rate is None
        assert detail.majority_stroke_type == "Unknown"
        assert detail.average_pace == pytest.approx(2.0)

    def test_fallback_without_distance_samples(self):
        """No distance samples: a single lap and set covering the window."""
        bundle = SampleBundle(
            window=window(1800, total_distance=1200),
            heart_rate_samples=[hr_sample(60, 130), hr_sample(900, 150), hr_sample(1700, 171)],
        )
        detail = analyze_workout(bundle)
        assert len(detail.sets) == 1
        assert len(detail.laps) == 1
        assert detail.total_distance == 1200
        assert detail.total_duration == 1800
        assert detail.longest_continuous_distance == 1200
        assert detail.average_heart_rate == 150
        assert detail.max_heart_rate == 171
        assert detail.majority_stroke_type == "Unknown"
        assert detail.average_swolf is None
