"""Domain errors for workout analysis and storage.

Data-quality problems (missing samples, unmatched metadata, zero distance)
are never raised: they produce degraded results with None fields. These
errors cover the conditions that must reach the caller.
"""


class SwimTrackerError(Exception):
    """Base exception for all SwimTracker errors."""

    pass


class WorkoutDetailDecodeError(SwimTrackerError):
    """Raised when a stored WorkoutDetail document cannot be decoded."""

    pass


class SessionNotFoundError(SwimTrackerError):
    """Raised when editing or deleting a session that does not exist."""

    pass
