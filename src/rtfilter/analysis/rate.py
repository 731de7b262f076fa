from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Deque, Iterable, Optional

if TYPE_CHECKING:
    from ..core.butterworth import ButterworthFilter


class IntervalMonitor:
    """
    Estimate the real sampling interval from sample timestamps.

    Notes
    -----
    - Timestamps are assumed to be in seconds (monotonic increasing).
    - Only the last ``window_size`` timestamps are kept; the estimate is the
      mean spacing across that window.
    """

    def __init__(self, window_size: int = 100) -> None:
        if window_size <= 1:
            raise ValueError("window_size must be > 1")
        self._times: Deque[float] = deque(maxlen=window_size)

    def add_sample_time(self, t: float) -> None:
        """
        Append a new sample timestamp.

        Parameters
        ----------
        t:
            Sample timestamp in seconds (monotonic increasing).
        """
        self._times.append(float(t))

    def feed_times(self, times: Iterable[float]) -> None:
        """Convenience method to bulk-add timestamps."""
        for t in times:
            self.add_sample_time(t)

    @property
    def mean_interval_s(self) -> Optional[float]:
        """Mean spacing of the current window, or None if unavailable."""
        span = self.buffer_span_s
        if span <= 0:
            return None
        return span / (len(self._times) - 1)

    @property
    def estimated_hz(self) -> float:
        """Rate implied by :attr:`mean_interval_s` (0.0 if unavailable)."""
        interval = self.mean_interval_s
        if interval is None:
            return 0.0
        return 1.0 / interval

    @property
    def buffer_span_s(self) -> float:
        """Time span (seconds) covered by the current timestamp window."""
        if len(self._times) < 2:
            return 0.0
        return self._times[-1] - self._times[0]

    @property
    def buffer_size(self) -> int:
        """Number of timestamps currently in the window."""
        return len(self._times)

    def reset(self) -> None:
        """Clear all timestamps."""
        self._times.clear()


def verify_rate_from_times(
    filt: "ButterworthFilter",
    times: Iterable[float],
    *,
    window_size: int = 100,
) -> float:
    """
    Verify ``filt`` against the mean interval of ``times``.

    Returns the measured interval. Raises ``ValueError`` when fewer than two
    increasing timestamps are given, and propagates
    :class:`~rtfilter.core.errors.RateMismatchError` from the filter.
    """
    monitor = IntervalMonitor(window_size=window_size)
    monitor.feed_times(times)
    interval = monitor.mean_interval_s
    if interval is None:
        raise ValueError(
            f"need at least two increasing timestamps, got {monitor.buffer_size}"
        )
    filt.verify_rate(interval)
    return interval
