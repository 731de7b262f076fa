"""Filter configuration and result types."""

from __future__ import annotations

import logging
import math
import operator
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)


def _as_coeffs(name: str, values: Sequence[float]) -> tuple[float, ...]:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must contain only finite values")
    return tuple(float(v) for v in arr)


@dataclass(frozen=True)
class FilterSpec:
    """
    Immutable description of a designed IIR filter.

    H(z) = B(z) / A(z) = [b0 + b1 z^-1 + ... + bn z^-n] / [a0 + a1 z^-1 + ... + an z^-n]

    The coefficients come from an offline design step (e.g. MATLAB/SciPy
    ``butter``) and are only evaluated here.

    order: recursion depth n; ``a`` and ``b`` both hold ``order + 1`` values.
    sample_rate_hz: rate the coefficients were designed for.
    group_delay_samples: passband delay of the output, in samples.
    cutoff_hz: design cutoff, kept for reference only.
    """

    order: int
    sample_rate_hz: float
    a: tuple[float, ...]
    b: tuple[float, ...]
    group_delay_samples: float = 0.0
    cutoff_hz: Optional[float] = None

    def __post_init__(self) -> None:
        try:
            order = operator.index(self.order)
        except TypeError:
            order = 0
        if isinstance(self.order, bool) or order <= 0:
            raise ValueError(f"order must be a positive integer, got {self.order!r}")
        object.__setattr__(self, "order", order)

        rate = float(self.sample_rate_hz)
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"sample_rate_hz must be > 0, got {self.sample_rate_hz}")
        object.__setattr__(self, "sample_rate_hz", rate)

        a = _as_coeffs("a", self.a)
        b = _as_coeffs("b", self.b)
        expected = self.order + 1
        if len(a) != expected or len(b) != expected:
            raise ValueError(
                f"order {self.order} needs {expected} coefficients in a and b, "
                f"got len(a)={len(a)}, len(b)={len(b)}"
            )
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", b)

        delay = float(self.group_delay_samples)
        if not math.isfinite(delay) or delay < 0:
            raise ValueError(f"group_delay_samples must be >= 0, got {self.group_delay_samples}")
        object.__setattr__(self, "group_delay_samples", delay)

        if self.cutoff_hz is not None:
            cutoff = float(self.cutoff_hz)
            if not math.isfinite(cutoff) or cutoff <= 0:
                raise ValueError(f"cutoff_hz must be > 0, got {self.cutoff_hz}")
            object.__setattr__(self, "cutoff_hz", cutoff)

        if a[0] != 1.0:
            # a[0] is not part of the recursion, so an unnormalized design
            # produces a scaled response.
            logger.warning("FilterSpec a[0] is %r, expected 1.0 (normalized design)", a[0])

    @property
    def expected_interval_s(self) -> float:
        """Sampling interval the coefficients were designed for."""
        return 1.0 / self.sample_rate_hz

    @property
    def group_delay_s(self) -> float:
        return self.group_delay_samples / self.sample_rate_hz

    @property
    def dc_gain(self) -> float:
        """Steady-state gain for a constant input, ``sum(b) / sum(a)``."""
        denom = math.fsum(self.a)
        if denom == 0.0:
            return math.inf
        return math.fsum(self.b) / denom

    def poles(self) -> np.ndarray:
        """Return the roots of A(z)."""
        return np.roots(np.asarray(self.a, dtype=float))

    @property
    def is_stable(self) -> bool:
        """True when every pole lies strictly inside the unit circle."""
        return bool(np.all(np.abs(self.poles()) < 1.0))


class FilteredSample(NamedTuple):
    """Result of pushing one sample; ``value`` is NaN while ``ready`` is False."""

    value: float
    ready: bool


# fc = 5 Hz, fs = 100 Hz, order 2: [b, a] = butter(2, fc / (fs / 2))
REFERENCE_SPEC = FilterSpec(
    order=2,
    sample_rate_hz=100.0,
    a=(1.000000000000000, -1.561018075800718, 0.641351538057563),
    b=(0.020083365564211, 0.040166731128423, 0.020083365564211),
    group_delay_samples=5,
    cutoff_hz=5.0,
)
