"""Tests for importing sample-source workouts as sessions."""

import pytest

from swimtracker.ingestion.errors import SampleFetchError
from swimtracker.ingestion.import_workout import difficulty_from_effort, import_workout, import_workouts
from swimtracker.ingestion.types import SourceWorkout
from tests.ingestion.fake_source import FakeSampleSource
from tests.samples import WORKOUT_START, at, consecutive_laps, stroke_sample

TIMEOUT = 0.05


def _workout(external_id: str = "hk-1", total_distance: float = 200.0, effort: int | None = None) -> SourceWorkout:
    return SourceWorkout(
        external_id=external_id,
        started_at=WORKOUT_START,
        ended_at=at(1800),
        total_distance_meters=total_distance,
        effort_score=effort,
    )


@pytest.fixture
def source() -> FakeSampleSource:
    """8x25 in two sets of four."""
    distance = consecutive_laps(4) + consecutive_laps(4, start=300)
    return FakeSampleSource(distance=distance, strokes=[stroke_sample(0, 30, 20)])


class TestDifficultyFromEffort:
    """Tests for effort score mapping."""

    def test_missing_effort_defaults_to_five(self):
        assert difficulty_from_effort(None) == 5

    @pytest.mark.parametrize(("effort", "expected"), [(0, 1), (7, 7), (14, 10)])
    def test_effort_is_clamped(self, effort: int, expected: int):
        assert difficulty_from_effort(effort) == expected


class TestImportWorkout:
    """Tests for import_workout and import_workouts."""

    @pytest.mark.asyncio
    async def test_builds_session_with_detail(self, source: FakeSampleSource):
        session = await import_workout(source, _workout(effort=8), set(), TIMEOUT)

        assert session is not None
        assert session.external_id == "hk-1"
        assert session.date == WORKOUT_START
        assert session.total_distance_meters == 200
        assert session.total_duration_minutes == pytest.approx(30.0)
        assert session.difficulty == 8
        assert session.detail is not None
        assert len(session.detail.sets) == 2
        assert session.longest_continuous_distance == 100

    @pytest.mark.asyncio
    async def test_uses_lap_total_when_source_total_missing(self, source: FakeSampleSource):
        session = await import_workout(source, _workout(total_distance=0.0), set(), TIMEOUT)
        assert session is not None
        assert session.total_distance_meters == 200

    @pytest.mark.asyncio
    async def test_already_imported_workout_is_skipped(self, source: FakeSampleSource):
        session = await import_workout(source, _workout(), {"hk-1"}, TIMEOUT)
        assert session is None
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_distance_failure_propagates(self, source: FakeSampleSource):
        source.failures["distance"] = RuntimeError("boom")
        with pytest.raises(SampleFetchError):
            await import_workout(source, _workout(), set(), TIMEOUT)

    @pytest.mark.asyncio
    async def test_import_many_skips_failures_and_duplicates(self, source: FakeSampleSource):
        """Known IDs and repeated IDs are imported once; failed workouts are skipped."""
        workouts = [_workout("hk-1"), _workout("hk-2"), _workout("hk-2"), _workout("hk-3")]
        sessions = await import_workouts(source, workouts, {"hk-1"}, TIMEOUT)
        assert [s.external_id for s in sessions] == ["hk-2", "hk-3"]

        source.failures["distance"] = RuntimeError("boom")
        assert await import_workouts(source, [_workout("hk-4")], set(), TIMEOUT) == []
