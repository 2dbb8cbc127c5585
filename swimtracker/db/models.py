from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""


class SwimSessionRecord(Base):
    """Stored swim session.

    Stores:
    - id: Session ID (string UUID)
    - date: When the swim took place
    - total_distance_meters / total_duration_minutes: Session totals
    - notes, difficulty: User-entered fields
    - workout_id: Planned workout completed by this session (optional)
    - external_id: Sample source workout ID (optional, unique when set)
    - workout_details: WorkoutDetail JSON document (optional)
    """

    __tablename__ = "swim_sessions"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    total_distance_meters: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_duration_minutes: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    difficulty: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    workout_id: Mapped[str | None] = mapped_column(String, nullable=True)
    external_id: Mapped[str | None] = mapped_column(String, nullable=True, unique=True, index=True)
    workout_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))


class EnduranceTargetRecord(Base):
    """Coach-set endurance target for one training week (unique per week)."""

    __tablename__ = "endurance_targets"

    week_number: Mapped[int] = mapped_column(Integer, primary_key=True)
    target_distance_meters: Mapped[float] = mapped_column(Float, nullable=False)
    set_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
