"""Helpers that measure the incoming stream before it is filtered.

Modules here stay free of I/O so they can be used from acquisition loops,
command-line scripts, or tests alike.
"""

from .rate import IntervalMonitor, verify_rate_from_times

__all__ = ["IntervalMonitor", "verify_rate_from_times"]
