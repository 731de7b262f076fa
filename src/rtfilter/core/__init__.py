"""Core streaming filter: configuration, history buffers, and evaluation.

Everything here is pure Python with NumPy only used for coefficient
handling, so filters can run inside acquisition loops, scripts, or tests
without extra dependencies.
"""

from .butterworth import RATE_TOLERANCE, ButterworthFilter
from .errors import FilterError, NotVerifiedError, RateMismatchError
from .models import REFERENCE_SPEC, FilteredSample, FilterSpec
from .ringbuffer import RingBuffer

__all__ = [
    "ButterworthFilter",
    "RATE_TOLERANCE",
    "FilterSpec",
    "FilteredSample",
    "REFERENCE_SPEC",
    "RingBuffer",
    "FilterError",
    "NotVerifiedError",
    "RateMismatchError",
]
