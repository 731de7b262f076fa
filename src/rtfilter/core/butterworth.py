"""Sample-by-sample evaluation of a designed Butterworth low-pass filter."""

from __future__ import annotations

import logging
import math

from .errors import NotVerifiedError, RateMismatchError
from .models import REFERENCE_SPEC, FilteredSample, FilterSpec
from .ringbuffer import RingBuffer

logger = logging.getLogger(__name__)

# Accepted relative deviation of the caller's interval from the design interval.
RATE_TOLERANCE = 0.49


class ButterworthFilter:
    """
    Causal IIR filter evaluated one sample at a time.

    Evaluates the direct-form difference equation::

        y[n] = b0*x[n] + sum_{i=1..order} (b_i*x[n-i] - a_i*y[n-i])

    with the last ``order`` inputs and outputs held in fixed-size buffers.
    The first ``order`` samples only fill the history: they report
    ``ready=False`` and record 0.0 as their output.

    The caller must confirm the real sampling interval with
    :meth:`verify_rate` before the first :meth:`process` call, since the
    coefficients are only valid for the rate they were designed for.

    Instances are not thread-safe; use one filter per stream.
    """

    def __init__(self, spec: FilterSpec | None = None) -> None:
        self._spec = spec if spec is not None else REFERENCE_SPEC
        self._x_buf = RingBuffer(self._spec.order)
        self._y_buf = RingBuffer(self._spec.order)
        self._rate_verified = False
        self._samples_seen = 0

    @property
    def spec(self) -> FilterSpec:
        return self._spec

    @property
    def order(self) -> int:
        return self._spec.order

    @property
    def sample_rate_hz(self) -> float:
        return self._spec.sample_rate_hz

    @property
    def group_delay_samples(self) -> float:
        return self._spec.group_delay_samples

    @property
    def group_delay_s(self) -> float:
        return self._spec.group_delay_s

    @property
    def is_verified(self) -> bool:
        return self._rate_verified

    @property
    def is_ready(self) -> bool:
        """True once the next :meth:`process` call will produce a value."""
        return self._x_buf.is_full

    @property
    def samples_seen(self) -> int:
        return self._samples_seen

    @property
    def input_history(self) -> tuple[float, ...]:
        """Most recent inputs, newest first."""
        return self._x_buf.snapshot()

    @property
    def output_history(self) -> tuple[float, ...]:
        """Most recent outputs (0.0 placeholders during warm-up), newest first."""
        return self._y_buf.snapshot()

    def verify_rate(self, dt: float) -> None:
        """
        Check the caller's sampling interval against the design rate.

        Parameters
        ----------
        dt:
            Real interval between consecutive samples, in seconds.

        Raises
        ------
        RateMismatchError
            If ``dt`` deviates from ``1 / sample_rate_hz`` by 49% or more.
            An earlier successful verification stays in effect.
        """
        expected = self._spec.expected_interval_s
        if not abs(dt - expected) < RATE_TOLERANCE * expected:
            logger.warning(
                "Sample rate mismatch: desired interval %.6f s, input interval %r s",
                expected,
                dt,
            )
            raise RateMismatchError(expected, dt)

        if not self._rate_verified:
            logger.info(
                "Sample rate verified: interval %.6f s (design %.3f Hz)",
                dt,
                self._spec.sample_rate_hz,
            )
        self._rate_verified = True

    def process(self, x: float) -> FilteredSample:
        """
        Push one raw sample and return ``(value, ready)``.

        ``value`` is NaN and ``ready`` is False for the first ``order``
        samples. Non-finite inputs are not rejected and propagate through
        the recursion.

        Raises
        ------
        NotVerifiedError
            If :meth:`verify_rate` has not succeeded yet.
        """
        if not self._rate_verified:
            raise NotVerifiedError()

        x = float(x)
        x_buf = self._x_buf
        y_buf = self._y_buf
        self._samples_seen += 1

        if not x_buf.is_full:  # not enough data
            x_buf.push(x)
            y_buf.push(0.0)
            if x_buf.is_full:
                logger.debug("Filter history filled after %d samples", self._samples_seen)
            return FilteredSample(math.nan, False)

        a = self._spec.a
        b = self._spec.b
        y = b[0] * x
        for i in range(1, self._spec.order + 1):
            y = y + b[i] * x_buf[i - 1] - a[i] * y_buf[i - 1]

        x_buf.push(x)
        y_buf.push(y)
        return FilteredSample(y, True)

    def reset(self) -> None:
        """Forget all history; rate verification is kept."""
        self._x_buf.clear()
        self._y_buf.clear()
        self._samples_seen = 0
        logger.debug("Filter history cleared")
