"""Utility constants and helpers for tempora.

Time unit constants are millisecond counts. The WEEK, MONTH and YEAR
figures are approximations: use them for Duration maths, never to derive
an Instant's absolute value from a calendar field.
"""

import math

# Time unit constants (all values in milliseconds)
MILLISECONDS_PER_SECOND = 1000
MILLISECONDS_PER_MINUTE = 60000
MILLISECONDS_PER_HOUR = 3600000
MILLISECONDS_PER_DAY = 86400000

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365

MILLISECONDS_PER_WEEK = MILLISECONDS_PER_DAY * DAYS_PER_WEEK
MILLISECONDS_PER_MONTH = MILLISECONDS_PER_DAY * DAYS_PER_MONTH
MILLISECONDS_PER_YEAR = MILLISECONDS_PER_DAY * DAYS_PER_YEAR


def floor(value: float) -> float:
    """math.floor that passes NaN and infinities through."""
    if not math.isfinite(value):
        return value
    return math.floor(value)


def ceil(value: float) -> float:
    """math.ceil that passes NaN and infinities through."""
    if not math.isfinite(value):
        return value
    return math.ceil(value)


def round_half_up(value: float) -> float:
    """Round to the nearest integer, halves towards positive infinity.

    Matches JavaScript's Math.round rather than Python's banker's rounding:
    round_half_up(2.5) == 3 and round_half_up(-2.5) == -2.
    """
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def nan_max(a: float, b: float) -> float:
    """max() that returns NaN when either argument is NaN, like Math.max."""
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return max(a, b)


def nan_min(a: float, b: float) -> float:
    """min() that returns NaN when either argument is NaN, like Math.min."""
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return min(a, b)


def require_finite(value: float, operation: str) -> float:
    """Return `value`, or raise ValueError if it is NaN or infinite.

    datetime has no invalid state, so conversions to it cannot carry NaN or
    infinities through the way Duration arithmetic does.
    """
    if not math.isfinite(value):
        raise ValueError(
            f"{operation} needs a finite number of milliseconds.\n"
            f"Got: {value!r}\n"
            f"Hint: Check for NaN or infinite durations before converting,\n"
            f"  e.g. math.isfinite(duration.milliseconds)"
        )
    return value
