"""Errors raised at the sample-source boundary."""

from swimtracker.workouts.errors import SwimTrackerError


class SampleFetchError(SwimTrackerError):
    """Raised when the primary distance stream cannot be fetched.

    Attributes:
        stream: Name of the stream that failed
    """

    def __init__(self, stream: str, message: str):
        self.stream = stream
        super().__init__(f"{stream}: {message}")
