"""Tests for WorkoutDetail document encoding and decoding."""

import json

import pytest

from swimtracker.ingestion.types import StrokeStyle
from swimtracker.workouts.codec import decode_workout_detail, encode_workout_detail
from swimtracker.workouts.errors import WorkoutDetailDecodeError
from swimtracker.workouts.models import WORKOUT_DETAIL_SCHEMA_VERSION, Lap, SwimSet, WorkoutDetail


@pytest.fixture
def detail() -> WorkoutDetail:
    """Two-set workout with partial metrics."""
    first = SwimSet(
        laps=[
            Lap(distance_meters=25, duration_seconds=30, stroke_count=18, swolf=48, stroke_type=StrokeStyle.FREESTYLE),
            Lap(distance_meters=25, duration_seconds=31),
        ],
        rest_after_seconds=40.0,
        total_distance=50,
        total_duration=61,
        average_swolf=48.0,
        majority_stroke_type="Freestyle",
    )
    second = SwimSet(laps=[Lap(distance_meters=100, duration_seconds=130)], total_distance=100, total_duration=130)
    return WorkoutDetail(sets=[first, second], total_distance=150, total_duration=191, longest_continuous_distance=100)


class TestWorkoutCodec:
    """Tests for the versioned JSON document."""

    def test_round_trip_preserves_absent_fields(self, detail: WorkoutDetail):
        """None fields stay None and present fields keep their values."""
        decoded = decode_workout_detail(encode_workout_detail(detail))
        assert decoded == detail
        assert decoded.sets[0].laps[1].swolf is None
        assert decoded.sets[0].laps[0].stroke_type == StrokeStyle.FREESTYLE

    def test_absent_fields_are_omitted(self, detail: WorkoutDetail):
        document = json.loads(encode_workout_detail(detail))
        assert "swolf" not in document["sets"][0]["laps"][1]
        assert "average_heart_rate" not in document
        assert document["schema_version"] == WORKOUT_DETAIL_SCHEMA_VERSION

    def test_old_document_is_upgraded(self):
        """A v1 document without derived fields gets them recomputed."""
        document = json.dumps(
            {
                "sets": [
                    {"laps": [{"distance_meters": 25, "duration_seconds": 30}], "total_distance": 25, "total_duration": 30},
                    {"laps": [{"distance_meters": 200, "duration_seconds": 260}], "total_distance": 200, "total_duration": 260},
                ],
                "total_distance": 225,
                "total_duration": 290,
            }
        )
        decoded = decode_workout_detail(document)
        assert decoded.schema_version == WORKOUT_DETAIL_SCHEMA_VERSION
        assert decoded.longest_continuous_distance == 200
        assert decoded.sets[0].majority_stroke_type == "Unknown"

    def test_newer_document_ignores_unknown_fields(self, detail: WorkoutDetail):
        document = json.loads(encode_workout_detail(detail))
        document["schema_version"] = WORKOUT_DETAIL_SCHEMA_VERSION + 1
        document["new_metric"] = 12
        decoded = decode_workout_detail(json.dumps(document))
        assert decoded.total_distance == 150

    @pytest.mark.parametrize(
        "document",
        [
            "not json",
            "[1, 2, 3]",
            '{"schema_version": "two", "total_distance": 1, "total_duration": 1}',
            '{"sets": [{"laps": []}], "total_distance": 1, "total_duration": 1}',
            '{"total_duration": 1, "longest_continuous_distance": 1}',
        ],
    )
    def test_invalid_documents_raise(self, document: str):
        with pytest.raises(WorkoutDetailDecodeError):
            decode_workout_detail(document)
