"""Import of sample-source workouts as swim sessions."""

from __future__ import annotations

from collections.abc import Collection

from loguru import logger

from swimtracker.ingestion.errors import SampleFetchError
from swimtracker.ingestion.fetch_samples import fetch_workout_samples
from swimtracker.ingestion.source import SampleSource
from swimtracker.ingestion.types import SourceWorkout
from swimtracker.sessions.models import SwimSession
from swimtracker.workouts.service import analyze_workout

DEFAULT_DIFFICULTY = 5


def difficulty_from_effort(effort_score: int | None) -> int:
    """Map a source effort score to session difficulty, clamped to 1-10."""
    if effort_score is None:
        return DEFAULT_DIFFICULTY
    return max(1, min(10, effort_score))


async def import_workout(
    source: SampleSource,
    workout: SourceWorkout,
    existing_external_ids: Collection[str],
    timeout_seconds: float,
) -> SwimSession | None:
    """Fetch samples for a workout and build a session with its lap/set detail.

    Args:
        source: Sample source to fetch from
        workout: The workout to import
        existing_external_ids: External IDs already stored (re-imports are skipped)
        timeout_seconds: Per-stream fetch timeout

    Returns:
        The new session, or None if the workout was already imported

    Raises:
        SampleFetchError: If the distance stream could not be fetched
    """
    if workout.external_id in existing_external_ids:
        logger.debug(f"[IMPORT] Workout {workout.external_id} already imported, skipping")
        return None

    logger.info(f"[IMPORT] Importing workout {workout.external_id} ({workout.started_at.isoformat()})")
    bundle = await fetch_workout_samples(source, workout, timeout_seconds)
    detail = analyze_workout(bundle)

    session = SwimSession(
        date=workout.started_at,
        total_distance_meters=workout.total_distance_meters or detail.total_distance,
        total_duration_minutes=workout.duration_seconds / 60.0,
        difficulty=difficulty_from_effort(workout.effort_score),
        external_id=workout.external_id,
        detail=detail,
    )
    logger.info(
        f"[IMPORT] Imported workout {workout.external_id}: {int(session.total_distance_meters)}m, "
        f"{len(detail.sets)} sets, longest continuous {int(detail.longest_continuous_distance)}m"
    )
    return session


async def import_workouts(
    source: SampleSource,
    workouts: list[SourceWorkout],
    existing_external_ids: Collection[str],
    timeout_seconds: float,
) -> list[SwimSession]:
    """Import several workouts, skipping known ones and those whose distance fetch fails."""
    seen = set(existing_external_ids)
    sessions: list[SwimSession] = []
    for workout in workouts:
        try:
            session = await import_workout(source, workout, seen, timeout_seconds)
        except SampleFetchError as e:
            logger.error(f"[IMPORT] Failed to import workout {workout.external_id}: {e}")
            continue
        if session is not None:
            sessions.append(session)
            seen.add(workout.external_id)
    return sessions
