"""Proleptic Gregorian calendar-field arithmetic.

Fields are plain wall-clock readings with no zone attached. Any field may be
pushed outside its usual range; converting back to an epoch value rolls the
excess into the next field (January 35th is February 4th, hour 25 is 01:00
the next day), the same way calendar setters do in most date libraries.
"""

from dataclasses import dataclass, replace

from tempora.units import TemporalUnit
from tempora.util import (
    DAYS_PER_WEEK,
    MILLISECONDS_PER_DAY,
    MILLISECONDS_PER_HOUR,
    MILLISECONDS_PER_MINUTE,
    MILLISECONDS_PER_SECOND,
)

# Days from 0000-03-01 to 1970-01-01
_EPOCH_SHIFT = 719468
_DAYS_PER_ERA = 146097


@dataclass(frozen=True, kw_only=True)
class CalendarFields:
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    def __str__(self) -> str:
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
            f".{self.millisecond:03d}"
        )


def days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for an in-range year/month/day.

    Counts eras of 400 years from a March-based year so leap days fall at
    the end of each year.
    """
    y = year - 1 if month <= 2 else year
    era = y // 400
    year_of_era = y - era * 400
    shifted_month = month - 3 if month > 2 else month + 9
    day_of_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = (
        year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    )
    return era * _DAYS_PER_ERA + day_of_era - _EPOCH_SHIFT


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of days_from_civil: (year, month, day) for days since epoch."""
    z = days + _EPOCH_SHIFT
    era = z // _DAYS_PER_ERA
    day_of_era = z - era * _DAYS_PER_ERA
    year_of_era = (
        day_of_era
        - day_of_era // 1460
        + day_of_era // 36524
        - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (
        365 * year_of_era + year_of_era // 4 - year_of_era // 100
    )
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400
    return (year + 1 if month <= 2 else year, month, day)


def to_epoch_ms(fields: CalendarFields) -> int:
    """Milliseconds since epoch for `fields`, rolling over out-of-range values."""
    year = fields.year + (fields.month - 1) // 12
    month = (fields.month - 1) % 12 + 1
    days = days_from_civil(year, month, 1) + fields.day - 1
    return (
        days * MILLISECONDS_PER_DAY
        + fields.hour * MILLISECONDS_PER_HOUR
        + fields.minute * MILLISECONDS_PER_MINUTE
        + fields.second * MILLISECONDS_PER_SECOND
        + fields.millisecond
    )


def from_epoch_ms(value: int) -> CalendarFields:
    """Calendar reading of `value` milliseconds since epoch."""
    days, remainder = divmod(value, MILLISECONDS_PER_DAY)
    year, month, day = civil_from_days(days)
    hour, remainder = divmod(remainder, MILLISECONDS_PER_HOUR)
    minute, remainder = divmod(remainder, MILLISECONDS_PER_MINUTE)
    second, millisecond = divmod(remainder, MILLISECONDS_PER_SECOND)
    return CalendarFields(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        millisecond=millisecond,
    )


def shift(fields: CalendarFields, unit: TemporalUnit, delta: int) -> CalendarFields:
    """Add `delta` to the field matching `unit` and normalise the result.

    WEEKS has no field of its own and is applied to the day field.
    """
    match unit:
        case TemporalUnit.MILLISECONDS:
            moved = replace(fields, millisecond=fields.millisecond + delta)
        case TemporalUnit.SECONDS:
            moved = replace(fields, second=fields.second + delta)
        case TemporalUnit.MINUTES:
            moved = replace(fields, minute=fields.minute + delta)
        case TemporalUnit.HOURS:
            moved = replace(fields, hour=fields.hour + delta)
        case TemporalUnit.DAYS:
            moved = replace(fields, day=fields.day + delta)
        case TemporalUnit.WEEKS:
            moved = replace(fields, day=fields.day + delta * DAYS_PER_WEEK)
        case TemporalUnit.MONTHS:
            moved = replace(fields, month=fields.month + delta)
        case TemporalUnit.YEARS:
            moved = replace(fields, year=fields.year + delta)
    return from_epoch_ms(to_epoch_ms(moved))
