from enum import IntEnum

from tempora.util import (
    MILLISECONDS_PER_DAY,
    MILLISECONDS_PER_HOUR,
    MILLISECONDS_PER_MINUTE,
    MILLISECONDS_PER_MONTH,
    MILLISECONDS_PER_SECOND,
    MILLISECONDS_PER_WEEK,
    MILLISECONDS_PER_YEAR,
)


class TemporalUnit(IntEnum):
    """Units a Duration can be expressed in, ordered from finest to coarsest."""

    MILLISECONDS = 0
    SECONDS = 1
    MINUTES = 2
    HOURS = 3
    DAYS = 4
    WEEKS = 5
    MONTHS = 6
    YEARS = 7

    @property
    def label(self) -> str:
        """Singular name understood by relative-time formatters."""
        return _LABELS[self]


_MILLIS_PER_UNIT: dict[TemporalUnit, int] = {
    TemporalUnit.MILLISECONDS: 1,
    TemporalUnit.SECONDS: MILLISECONDS_PER_SECOND,
    TemporalUnit.MINUTES: MILLISECONDS_PER_MINUTE,
    TemporalUnit.HOURS: MILLISECONDS_PER_HOUR,
    TemporalUnit.DAYS: MILLISECONDS_PER_DAY,
    TemporalUnit.WEEKS: MILLISECONDS_PER_WEEK,
    TemporalUnit.MONTHS: MILLISECONDS_PER_MONTH,
    TemporalUnit.YEARS: MILLISECONDS_PER_YEAR,
}

_LABELS: dict[TemporalUnit, str] = {
    TemporalUnit.MILLISECONDS: "millisecond",
    TemporalUnit.SECONDS: "second",
    TemporalUnit.MINUTES: "minute",
    TemporalUnit.HOURS: "hour",
    TemporalUnit.DAYS: "day",
    TemporalUnit.WEEKS: "week",
    TemporalUnit.MONTHS: "month",
    TemporalUnit.YEARS: "year",
}


def millis_per(unit: TemporalUnit) -> int:
    """Return how many milliseconds one of `unit` stands for."""
    return _MILLIS_PER_UNIT[unit]


def finest(*units: TemporalUnit) -> TemporalUnit:
    """Return the most precise (lowest ordinal) of the given units."""
    if not units:
        raise ValueError(
            "finest() requires at least one unit argument.\n"
            "Example: finest(TemporalUnit.SECONDS, TemporalUnit.MINUTES)"
        )
    return TemporalUnit(min(units))
