"""Manual session entry and editing."""

from datetime import datetime
from typing import Any

from loguru import logger

from swimtracker.sessions.models import SwimSession

# Fields a user may change on an existing session
EDITABLE_FIELDS = frozenset(
    {"date", "total_distance_meters", "total_duration_minutes", "notes", "difficulty"}
)


def log_manual_session(
    date: datetime,
    distance_meters: float,
    duration_minutes: float,
    notes: str = "",
    difficulty: int = 5,
) -> SwimSession:
    """Create a session from manual entry (no lap detail)."""
    session = SwimSession(
        date=date,
        total_distance_meters=distance_meters,
        total_duration_minutes=duration_minutes,
        notes=notes,
        difficulty=difficulty,
    )
    logger.info(f"[SESSIONS] Logged manual session {session.id}: {int(distance_meters)}m in {duration_minutes:.0f} min")
    return session


def apply_session_edit(session: SwimSession, changes: dict[str, Any]) -> SwimSession:
    """Return a validated copy of session with the given edits applied.

    Raises:
        ValueError: If a change targets a field that cannot be edited
        pydantic.ValidationError: If an edited value is invalid
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    updated = SwimSession.model_validate({**session.model_dump(), **changes})
    logger.debug(f"[SESSIONS] Edited session {session.id}: {sorted(changes)}")
    return updated
