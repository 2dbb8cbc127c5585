"""Raw sample types supplied by the sample source.

Each sample covers one interval of a single workout's time window:
- LapSample: one per lap (distance stream)
- StrokeCountSample: stroke counts, optionally tagged with a stroke style
- HeartRateSample: heart-rate readings in bpm
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class StrokeStyle(StrEnum):
    """Swimming stroke styles reported on stroke-count samples."""

    MIXED = "Mixed"
    FREESTYLE = "Freestyle"
    BACKSTROKE = "Backstroke"
    BREASTSTROKE = "Breaststroke"
    BUTTERFLY = "Butterfly"
    KICKBOARD = "Kickboard"


# Integer stroke-style codes as reported by the sample source (0 = unknown)
STROKE_STYLE_CODES: dict[int, StrokeStyle] = {
    1: StrokeStyle.MIXED,
    2: StrokeStyle.FREESTYLE,
    3: StrokeStyle.BACKSTROKE,
    4: StrokeStyle.BREASTSTROKE,
    5: StrokeStyle.BUTTERFLY,
    6: StrokeStyle.KICKBOARD,
}


def parse_stroke_style(value: object) -> StrokeStyle | None:
    """Map a source stroke-style tag (code or name) to a StrokeStyle.

    Unknown codes and names map to None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, StrokeStyle):
        return value
    if isinstance(value, int):
        return STROKE_STYLE_CODES.get(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        for style in StrokeStyle:
            if style.value.lower() == normalized:
                return style
    return None


class LapSample(BaseModel):
    """Distance sample for one lap."""

    started_at: datetime
    ended_at: datetime
    distance_meters: float = Field(ge=0)


class StrokeCountSample(BaseModel):
    """Stroke count over an interval, optionally tagged with a stroke style."""

    started_at: datetime
    ended_at: datetime
    count: float = Field(ge=0)
    stroke_style: StrokeStyle | None = None

    @field_validator("stroke_style", mode="before")
    @classmethod
    def _parse_stroke_style(cls, value: object) -> StrokeStyle | None:
        return parse_stroke_style(value)


class HeartRateSample(BaseModel):
    """Heart-rate reading in beats per minute."""

    started_at: datetime
    ended_at: datetime
    bpm: float = Field(gt=0)


class WorkoutWindow(BaseModel):
    """Time window and totals of one workout as reported by the sample source."""

    started_at: datetime
    ended_at: datetime
    total_distance_meters: float = Field(default=0.0, ge=0)

    @property
    def duration_seconds(self) -> float:
        return max((self.ended_at - self.started_at).total_seconds(), 0.0)


class SourceWorkout(WorkoutWindow):
    """A workout listed by the sample source, eligible for import."""

    external_id: str
    effort_score: int | None = None


@dataclass(frozen=True)
class SampleBundle:
    """The three sample streams fetched for one workout window."""

    window: WorkoutWindow
    distance_samples: list[LapSample] = field(default_factory=list)
    stroke_samples: list[StrokeCountSample] = field(default_factory=list)
    heart_rate_samples: list[HeartRateSample] = field(default_factory=list)


def sample_bundle_from_dict(data: dict[str, Any]) -> SampleBundle:
    """Build a SampleBundle from a JSON-like mapping.

    Expected keys: "window" (required), "distance_samples", "stroke_samples",
    "heart_rate_samples" (each optional, default empty).

    Raises:
        pydantic.ValidationError: If any sample is invalid
    """
    return SampleBundle(
        window=WorkoutWindow.model_validate(data["window"]),
        distance_samples=[LapSample.model_validate(s) for s in data.get("distance_samples", [])],
        stroke_samples=[StrokeCountSample.model_validate(s) for s in data.get("stroke_samples", [])],
        heart_rate_samples=[HeartRateSample.model_validate(s) for s in data.get("heart_rate_samples", [])],
    )
