"""Exceptions raised by the streaming filters."""

from __future__ import annotations


class FilterError(RuntimeError):
    """Base class for filter misuse errors."""


class NotVerifiedError(FilterError):
    """Raised when samples are pushed before the sample rate was verified."""

    def __init__(self, message: str = "Sample rate is not verified!") -> None:
        super().__init__(message)


class RateMismatchError(FilterError):
    """
    Raised when the caller's sampling interval is too far from the design rate.

    Both intervals are kept on the exception so callers can report them or
    decide whether to reconfigure.
    """

    def __init__(self, expected_interval: float, actual_interval: float) -> None:
        self.expected_interval = float(expected_interval)
        self.actual_interval = float(actual_interval)
        super().__init__(
            "Sample rate does not match! desired interval[%f] input interval[%f]"
            % (self.expected_interval, self.actual_interval)
        )
