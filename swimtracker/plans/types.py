"""Proposed and planned workout schemas.

Proposed workouts come from the external planning service with camelCase
keys; snake_case is accepted too.
"""

import uuid
from datetime import date

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ProposedSet(BaseModel):
    """One set of a proposed workout (reps x distance)."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = "Main"  # "Warm-up", "Kick", "Pull", "Main", ...
    reps: int = Field(ge=0)
    distance: int = Field(ge=0, description="Meters per rep")
    rest: int = Field(default=0, ge=0, description="Seconds between reps")
    instructions: str = ""


class ProposedWorkout(BaseModel):
    """A candidate workout supplied by the planning service."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    days_from_now: int = Field(ge=0, validation_alias=AliasChoices("daysFromNow", "days_from_now"))
    total_distance: int = Field(ge=0, validation_alias=AliasChoices("totalDistance", "total_distance"))
    sets: list[ProposedSet] = Field(default_factory=list)
    focus: str = ""
    effort_level: str = Field(default="", validation_alias=AliasChoices("effortLevel", "effort_level"))


class PlannedWorkout(BaseModel):
    """An accepted workout scheduled on a date."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    scheduled_date: date
    title: str
    declared_total_distance: int
    actual_total_distance: int
    focus: str = ""
    effort_level: str = ""
    sets: list[ProposedSet] = Field(default_factory=list)
