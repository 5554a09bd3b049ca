"""Clock capabilities injected wherever tempora reads the current time.

A clock is any zero-argument callable returning milliseconds. Tests pass
their own callable instead of patching the system clock.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from time import monotonic
from time import time as current_time

from dateutil.tz import tzlocal

Clock = Callable[[], float]


def system_clock() -> float:
    """Wall-clock time as milliseconds since the Unix epoch."""
    return int(current_time() * 1000)


def monotonic_clock() -> float:
    """Milliseconds from an arbitrary origin; never goes backwards."""
    return monotonic() * 1000


def local_offset_minutes(epoch_ms: float) -> float:
    """UTC offset of the host's local zone at `epoch_ms`, in minutes.

    Zones ahead of UTC give positive values (e.g. +120 for CEST).
    """
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    offset = moment.astimezone(tzlocal()).utcoffset()
    if offset is None:
        return 0
    return offset.total_seconds() / 60
