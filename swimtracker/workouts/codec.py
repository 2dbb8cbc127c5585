"""WorkoutDetail document encoding for storage next to a session record.

Documents are versioned JSON. Absent optional fields are omitted on encode
and decode back to None, so a round trip preserves absent-vs-present.
Older documents missing derived fields are upgraded by recomputing them
from their sets.
"""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from pydantic import ValidationError

from swimtracker.workouts.errors import WorkoutDetailDecodeError
from swimtracker.workouts.models import UNKNOWN_STROKE_TYPE, WORKOUT_DETAIL_SCHEMA_VERSION, WorkoutDetail


def encode_workout_detail(detail: WorkoutDetail) -> str:
    """Serialize a WorkoutDetail to a JSON document."""
    return detail.model_dump_json(exclude_none=True)


def _upgrade_document(document: dict[str, Any]) -> dict[str, Any]:
    """Fill fields that older document versions did not store."""
    version = document.get("schema_version", 1)
    if not isinstance(version, int):
        raise WorkoutDetailDecodeError(f"Invalid schema_version: {version!r}")

    upgraded = dict(document)
    sets = upgraded.get("sets") or []
    if not isinstance(sets, list):
        raise WorkoutDetailDecodeError("'sets' must be a list")

    if upgraded.get("longest_continuous_distance") is None:
        set_distances = [s.get("total_distance") for s in sets if isinstance(s, dict)]
        set_distances = [d for d in set_distances if isinstance(d, (int, float))]
        upgraded["longest_continuous_distance"] = (
            max(set_distances) if set_distances else upgraded.get("total_distance", 0.0)
        )
        logger.debug(f"[WORKOUT_CODEC] Recomputed longest_continuous_distance for v{version} document")

    upgraded["sets"] = [
        {**s, "majority_stroke_type": s.get("majority_stroke_type") or UNKNOWN_STROKE_TYPE}
        if isinstance(s, dict)
        else s
        for s in sets
    ]
    upgraded["schema_version"] = WORKOUT_DETAIL_SCHEMA_VERSION
    return upgraded


def decode_workout_detail(document: str | bytes) -> WorkoutDetail:
    """Parse a stored WorkoutDetail document.

    Args:
        document: JSON text produced by encode_workout_detail (any version)

    Returns:
        Decoded WorkoutDetail at the current schema version

    Raises:
        WorkoutDetailDecodeError: If the document is not valid JSON or fails validation
    """
    try:
        raw = json.loads(document)
    except (TypeError, ValueError) as e:
        raise WorkoutDetailDecodeError(f"Workout detail is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise WorkoutDetailDecodeError(f"Workout detail must be a JSON object, got {type(raw).__name__}")

    version = raw.get("schema_version", 1)
    if isinstance(version, int) and version > WORKOUT_DETAIL_SCHEMA_VERSION:
        logger.debug(f"[WORKOUT_CODEC] Decoding newer document version {version}; unknown fields ignored")

    try:
        return WorkoutDetail.model_validate(_upgrade_document(raw))
    except ValidationError as e:
        raise WorkoutDetailDecodeError(f"Workout detail failed validation: {e.error_count()} error(s)") from e
