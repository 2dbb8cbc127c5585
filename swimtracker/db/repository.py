"""Storage of swim sessions and endurance overrides.

Each session's WorkoutDetail is stored as a JSON document. A document that
cannot be decoded only affects its own record: the session is returned
without detail and a warning is logged.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from swimtracker.db.models import EnduranceTargetRecord, SwimSessionRecord
from swimtracker.sessions.models import EnduranceTargetOverride, SwimSession
from swimtracker.sessions.service import apply_session_edit
from swimtracker.workouts.codec import decode_workout_detail, encode_workout_detail
from swimtracker.workouts.errors import SessionNotFoundError, WorkoutDetailDecodeError


def _to_record(swim_session: SwimSession) -> SwimSessionRecord:
    return SwimSessionRecord(
        id=swim_session.id,
        date=swim_session.date,
        total_distance_meters=swim_session.total_distance_meters,
        total_duration_minutes=swim_session.total_duration_minutes,
        notes=swim_session.notes,
        difficulty=swim_session.difficulty,
        workout_id=swim_session.workout_id,
        external_id=swim_session.external_id,
        workout_details=encode_workout_detail(swim_session.detail) if swim_session.detail else None,
    )


def _scalar_session(record: SwimSessionRecord) -> SwimSession:
    return SwimSession(
        id=record.id,
        date=record.date,
        total_distance_meters=record.total_distance_meters,
        total_duration_minutes=record.total_duration_minutes,
        notes=record.notes,
        difficulty=record.difficulty,
        workout_id=record.workout_id,
        external_id=record.external_id,
    )


def record_to_session(record: SwimSessionRecord) -> SwimSession:
    """Convert a stored record to a SwimSession.

    Raises:
        WorkoutDetailDecodeError: If the stored detail document is invalid
    """
    swim_session = _scalar_session(record)
    if record.workout_details:
        swim_session.detail = decode_workout_detail(record.workout_details)
    return swim_session


def _session_or_without_detail(record: SwimSessionRecord) -> SwimSession:
    try:
        return record_to_session(record)
    except WorkoutDetailDecodeError as e:
        logger.warning(f"[SESSIONS] Could not decode workout details for session {record.id}: {e}")
        return _scalar_session(record)


def add_session(session: Session, swim_session: SwimSession) -> SwimSession:
    """Store a new session."""
    session.add(_to_record(swim_session))
    session.flush()
    logger.info(f"[SESSIONS] Stored session {swim_session.id} ({swim_session.date.isoformat()})")
    return swim_session


def get_session_by_external_id(session: Session, external_id: str) -> SwimSession | None:
    record = session.execute(
        select(SwimSessionRecord).where(SwimSessionRecord.external_id == external_id)
    ).scalar_one_or_none()
    return record_to_session(record) if record else None


def list_external_ids(session: Session) -> set[str]:
    """External IDs of all imported sessions."""
    rows = session.execute(
        select(SwimSessionRecord.external_id).where(SwimSessionRecord.external_id.is_not(None))
    ).scalars()
    return set(rows)


def list_sessions(session: Session) -> list[SwimSession]:
    """All sessions ordered by date, newest first.

    Records whose detail document cannot be decoded are returned without detail.
    """
    records = session.execute(select(SwimSessionRecord).order_by(SwimSessionRecord.date.desc())).scalars().all()
    return [_session_or_without_detail(record) for record in records]


def _get_record(session: Session, session_id: str) -> SwimSessionRecord:
    record = session.get(SwimSessionRecord, session_id)
    if record is None:
        raise SessionNotFoundError(f"Session {session_id} not found")
    return record


def update_session(session: Session, session_id: str, changes: dict[str, Any]) -> SwimSession:
    """Apply an explicit edit to a stored session.

    Only the scalar columns change; the stored detail document is left as is,
    so a session whose detail cannot be decoded can still be edited.

    Raises:
        SessionNotFoundError: If the session does not exist (or was deleted)
        ValueError: If a change targets a non-editable field
    """
    record = _get_record(session, session_id)
    updated = apply_session_edit(_scalar_session(record), changes)

    record.date = updated.date
    record.total_distance_meters = updated.total_distance_meters
    record.total_duration_minutes = updated.total_duration_minutes
    record.notes = updated.notes
    record.difficulty = updated.difficulty
    session.flush()
    return _session_or_without_detail(record)


def delete_session(session: Session, session_id: str) -> None:
    """Delete a stored session.

    Raises:
        SessionNotFoundError: If the session does not exist
    """
    record = _get_record(session, session_id)
    session.delete(record)
    session.flush()
    logger.info(f"[SESSIONS] Deleted session {session_id}")


def set_endurance_target(
    session: Session,
    week_number: int,
    target_distance_meters: float,
    set_date: datetime,
    notes: str | None = None,
) -> EnduranceTargetOverride:
    """Create or replace the override for a week."""
    override = EnduranceTargetOverride(
        week_number=week_number,
        target_distance_meters=target_distance_meters,
        set_date=set_date,
        notes=notes,
    )
    record = session.get(EnduranceTargetRecord, week_number)
    if record is None:
        record = EnduranceTargetRecord(week_number=week_number)
        session.add(record)
    record.target_distance_meters = override.target_distance_meters
    record.set_date = override.set_date
    record.notes = override.notes
    session.flush()
    logger.info(f"[ENDURANCE] Week {week_number} target set to {int(target_distance_meters)}m")
    return override


def delete_endurance_target(session: Session, week_number: int) -> bool:
    """Remove the override for a week. Returns False if none existed."""
    record = session.get(EnduranceTargetRecord, week_number)
    if record is None:
        return False
    session.delete(record)
    session.flush()
    return True


def list_endurance_targets(session: Session) -> list[EnduranceTargetOverride]:
    records = session.execute(select(EnduranceTargetRecord).order_by(EnduranceTargetRecord.week_number)).scalars().all()
    return [
        EnduranceTargetOverride(
            week_number=r.week_number,
            target_distance_meters=r.target_distance_meters,
            set_date=r.set_date,
            notes=r.notes,
        )
        for r in records
    ]
