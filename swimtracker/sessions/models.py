"""Session and endurance override models."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from swimtracker.utils.calendar import to_naive_local
from swimtracker.workouts.models import WorkoutDetail


class SwimSession(BaseModel):
    """A logged swim, entered manually or imported from the sample source.

    Attributes:
        id: Session ID (string UUID)
        date: When the swim took place
        total_distance_meters: Total distance swum
        total_duration_minutes: Total duration
        notes: Free-text notes
        difficulty: Perceived difficulty 1-10
        workout_id: Planned workout this session completed, if any
        external_id: Sample source workout ID, used to de-duplicate imports
        detail: Lap/set structure, only for imported sessions
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    date: datetime
    total_distance_meters: float = Field(ge=0)
    total_duration_minutes: float = Field(ge=0)
    notes: str = ""
    difficulty: int = Field(default=5, ge=1, le=10)
    workout_id: str | None = None
    external_id: str | None = None
    detail: WorkoutDetail | None = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        """Store naive local time, like the database columns."""
        return to_naive_local(v)

    @property
    def longest_continuous_distance(self) -> float:
        """Longest set distance when detail exists, otherwise the session total."""
        if self.detail is not None:
            return self.detail.longest_continuous_distance
        return self.total_distance_meters


class EnduranceTargetOverride(BaseModel):
    """Coach-set target distance for one training week."""

    week_number: int = Field(ge=0)
    target_distance_meters: float = Field(gt=0)
    set_date: datetime
    notes: str | None = None
