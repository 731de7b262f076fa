"""Real-time Butterworth low-pass filtering for fixed-rate sample streams."""

from .analysis import IntervalMonitor, verify_rate_from_times
from .config import load_filter_spec, save_filter_spec, spec_from_mapping, spec_to_mapping
from .core import (
    REFERENCE_SPEC,
    ButterworthFilter,
    FilteredSample,
    FilterError,
    FilterSpec,
    NotVerifiedError,
    RateMismatchError,
    RingBuffer,
)

__version__ = "0.1.0"

__all__ = [
    "ButterworthFilter",
    "FilterSpec",
    "FilteredSample",
    "REFERENCE_SPEC",
    "RingBuffer",
    "FilterError",
    "NotVerifiedError",
    "RateMismatchError",
    "IntervalMonitor",
    "verify_rate_from_times",
    "load_filter_spec",
    "save_filter_spec",
    "spec_from_mapping",
    "spec_to_mapping",
]
