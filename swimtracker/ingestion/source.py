"""Sample source interface.

The sample source (e.g. a health-data store) returns samples for a single
workout's time window, ordered by start time ascending.
"""

from datetime import datetime
from typing import Protocol

from swimtracker.ingestion.types import HeartRateSample, LapSample, SampleBundle, StrokeCountSample


class SampleSource(Protocol):
    async def fetch_distance_samples(self, start: datetime, end: datetime) -> list[LapSample]: ...

    async def fetch_stroke_count_samples(self, start: datetime, end: datetime) -> list[StrokeCountSample]: ...

    async def fetch_heart_rate_samples(self, start: datetime, end: datetime) -> list[HeartRateSample]: ...


class BundleSampleSource:
    """Sample source serving pre-captured samples (e.g. an exported sample file)."""

    def __init__(self, bundle: SampleBundle):
        self._bundle = bundle

    async def fetch_distance_samples(self, start: datetime, end: datetime) -> list[LapSample]:
        return [s for s in self._bundle.distance_samples if start <= s.started_at <= end]

    async def fetch_stroke_count_samples(self, start: datetime, end: datetime) -> list[StrokeCountSample]:
        return [s for s in self._bundle.stroke_samples if start <= s.started_at <= end]

    async def fetch_heart_rate_samples(self, start: datetime, end: datetime) -> list[HeartRateSample]:
        return [s for s in self._bundle.heart_rate_samples if start <= s.started_at <= end]
