"""Offset-aware points in time.

An Instant stores `value`, milliseconds since the epoch already shifted into
its own fixed offset, alongside that `offset` as a Duration. Reading `value`
as a UTC timestamp therefore gives the local wall clock, which is what the
calendar-field arithmetic works on. The offset never follows daylight-saving
rules; it is whatever was captured when the Instant was made.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from typing_extensions import override

from tempora import calendar
from tempora.clock import Clock, local_offset_minutes, system_clock
from tempora.duration import ZERO, Duration
from tempora.format import AbsoluteTimeFormatter, iso_absolute
from tempora.units import TemporalUnit
from tempora.util import require_finite, round_half_up

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLISECOND = timedelta(milliseconds=1)


@dataclass(frozen=True, kw_only=True)
class Instant:
    value: float
    offset: Duration[Any] = ZERO

    @property
    def unix(self) -> float:
        """Milliseconds since the epoch in UTC."""
        return self.value - self.offset.milliseconds

    @property
    def fields(self) -> calendar.CalendarFields:
        """Local wall-clock reading of this instant.

        Raises:
            ValueError: If value is NaN or infinite
        """
        value = require_finite(self.value, "Instant.fields")
        return calendar.from_epoch_ms(int(value))

    def add(self, delta: Duration[Any]) -> "Instant":
        """Step the calendar field matching the delta's unit.

        Months and years move calendar fields rather than a fixed number of
        milliseconds, so 2019-01-31 plus one month is 2019-03-03 (February
        has no 31st and the excess rolls over). Weeks are applied as days.
        The delta is rounded to a whole number first and the offset is kept.

        A non-finite value or delta yields an Instant with a NaN value.
        """
        if delta.unit == TemporalUnit.WEEKS:
            unit = TemporalUnit.DAYS
            amount = round_half_up(delta.days)
        else:
            unit = delta.unit
            amount = round_half_up(delta.value)

        if not (math.isfinite(self.value) and math.isfinite(amount)):
            return Instant(value=math.nan, offset=self.offset)

        moved = calendar.shift(self.fields, unit, int(amount))
        return Instant(value=calendar.to_epoch_ms(moved), offset=self.offset)

    def subtract(self, delta: Duration[Any]) -> "Instant":
        return self.add(delta.negate())

    def change_offset(self, offset: Duration[Any] = ZERO) -> "Instant":
        """Express the same moment under a different fixed offset."""
        value = self.value - self.offset.milliseconds + offset.milliseconds
        return Instant(value=value, offset=offset)

    def is_before(self, other: "Instant") -> bool:
        return self.unix < other.unix

    def is_after(self, other: "Instant") -> bool:
        return self.unix > other.unix

    def __add__(self, other: object) -> "Instant":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: object) -> "Instant":
        return self.__add__(other)

    def __sub__(self, other: object) -> "Instant | Duration[Any]":
        """Instant - Duration steps back; Instant - Instant gives elapsed milliseconds."""
        if isinstance(other, Instant):
            return Duration.of_milliseconds(self.unix - other.unix)
        if isinstance(other, Duration):
            return self.subtract(other)
        return NotImplemented

    def as_date(self) -> datetime:
        """Aware datetime for the same moment, in a fixed zone of this offset.

        Raises:
            ValueError: If the instant is NaN or infinite
        """
        unix = require_finite(self.unix, "Instant.as_date()")
        zone = timezone(timedelta(milliseconds=self.offset.milliseconds))
        return (_EPOCH + timedelta(milliseconds=unix)).astimezone(zone)

    def format(
        self,
        locale: str | None = None,
        *,
        formatter: AbsoluteTimeFormatter = iso_absolute,
        **options: Any,
    ) -> str:
        return formatter(self.as_date(), locale=locale, **options)

    @override
    def __str__(self) -> str:
        return self.format()

    def to_json(self) -> dict[str, Any]:
        return {"value": self.value, "offset": self.offset.to_json()}

    @staticmethod
    def from_datetime(moment: datetime) -> "Instant":
        """Instant for an aware datetime, keeping its current UTC offset.

        Raises:
            TypeError: If moment is a naive datetime
        """
        offset = moment.utcoffset()
        if offset is None:
            raise TypeError(
                f"Instant.from_datetime() requires a timezone-aware datetime.\n"
                f"Got naive datetime: {moment!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        shift = Duration.of_minutes(offset / timedelta(minutes=1))
        unix = (moment - _EPOCH) // _ONE_MILLISECOND
        return Instant(value=unix + shift.milliseconds, offset=shift)

    @staticmethod
    def now(clock: Clock = system_clock) -> "Instant":
        """Read the clock once and attach the host's current local offset."""
        utc = clock()
        offset = Duration.of_minutes(local_offset_minutes(utc))
        return Instant(value=utc + offset.milliseconds, offset=offset)

    @staticmethod
    def local_offset(
        clock: Clock = system_clock,
    ) -> "Duration[Any]":
        """The host's UTC offset right now, in MINUTES."""
        return Duration.of_minutes(local_offset_minutes(clock()))

    @staticmethod
    def parse(text: str, *, numeric_offsets: bool = False) -> "Instant":
        """Parse `YYYY-MM-DD[( |T)HH:MM[:SS[.mmm]][Z|±HH:MM]]`.

        See tempora.parse.parse_instant for the accepted grammar and errors.
        """
        # Import at runtime to avoid circular dependency
        from tempora.parse import parse_instant

        return parse_instant(text, numeric_offsets=numeric_offsets)
