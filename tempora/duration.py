"""Durations: a numeric value tagged with the unit it is measured in.

Every binary operation first agrees on a common unit, always the finer of
the operands, so no precision is thrown away:

    >>> Duration.of_seconds(1) + Duration.of_milliseconds(1)
    Duration(unit=<TemporalUnit.MILLISECONDS: 0>, value=1001)

Values are not validated. NaN and infinities flow through arithmetic,
conversion and clamping untouched.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar

from dateutil.parser import isoparse
from typing_extensions import override

from tempora.clock import Clock, monotonic_clock, system_clock
from tempora.format import RelativeTimeFormatter, english_relative
from tempora.units import TemporalUnit, finest, millis_per
from tempora.util import (
    MILLISECONDS_PER_DAY,
    MILLISECONDS_PER_HOUR,
    MILLISECONDS_PER_MINUTE,
    MILLISECONDS_PER_MONTH,
    MILLISECONDS_PER_SECOND,
    MILLISECONDS_PER_WEEK,
    MILLISECONDS_PER_YEAR,
    ceil,
    floor,
    nan_max,
    nan_min,
    require_finite,
    round_half_up,
)

if TYPE_CHECKING:
    from tempora.instant import Instant

U = TypeVar("U", bound=TemporalUnit, covariant=True)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLISECOND = timedelta(milliseconds=1)

# Upper bounds (exclusive) on absolute milliseconds for each normalised unit.
# MONTHS is absent: anything past a month normalises to YEARS.
_NORMALISE_LADDER: tuple[tuple[TemporalUnit, int], ...] = (
    (TemporalUnit.MILLISECONDS, MILLISECONDS_PER_SECOND),
    (TemporalUnit.SECONDS, MILLISECONDS_PER_MINUTE),
    (TemporalUnit.MINUTES, MILLISECONDS_PER_HOUR),
    (TemporalUnit.HOURS, MILLISECONDS_PER_DAY),
    (TemporalUnit.DAYS, MILLISECONDS_PER_WEEK),
    (TemporalUnit.WEEKS, MILLISECONDS_PER_MONTH),
)


@dataclass(frozen=True, kw_only=True)
class Duration(Generic[U]):
    unit: U
    value: float

    # Arithmetic

    def add(self, other: "Duration[Any]") -> "Duration[TemporalUnit]":
        unit = finest(self.unit, other.unit)
        return Duration(unit=unit, value=self.as_unit(unit) + other.as_unit(unit))

    def subtract(self, other: "Duration[Any]") -> "Duration[TemporalUnit]":
        unit = finest(self.unit, other.unit)
        return Duration(unit=unit, value=self.as_unit(unit) - other.as_unit(unit))

    def multiply(self, factor: float) -> "Duration[U]":
        return Duration(unit=self.unit, value=self.value * factor)

    def negate(self) -> "Duration[U]":
        return Duration(unit=self.unit, value=-self.value)

    def clamp(
        self,
        minimum: "Duration[Any] | None" = None,
        maximum: "Duration[Any] | None" = None,
    ) -> "Duration[TemporalUnit]":
        """Limit this duration to [minimum, maximum]; either bound may be omitted.

        The result is expressed in the finest unit among this duration and
        the bounds that were given. A NaN anywhere makes the result NaN.

        Example:
            >>> Duration.of_minutes(1).clamp(ZERO, Duration.of_seconds(5))
            Duration(unit=<TemporalUnit.SECONDS: 1>, value=5)
        """
        present = [bound.unit for bound in (minimum, maximum) if bound is not None]
        unit = finest(self.unit, *present)
        a = self.as_unit(unit)
        b = minimum.as_unit(unit) if minimum is not None else a
        c = maximum.as_unit(unit) if maximum is not None else nan_max(a, b)
        return Duration(unit=unit, value=nan_min(nan_max(a, b), c))

    def __add__(self, other: object) -> "Duration[TemporalUnit]":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Duration[TemporalUnit]":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, factor: object) -> "Duration[U]":
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return self.multiply(factor)

    def __rmul__(self, factor: object) -> "Duration[U]":
        return self.__mul__(factor)

    def __neg__(self) -> "Duration[U]":
        return self.negate()

    # Conversion

    def as_unit(self, unit: TemporalUnit) -> float:
        """Return the magnitude of this duration counted in `unit`.

        Converting to the duration's own unit returns `value` untouched, so
        there is no float drift from going through milliseconds and back.
        """
        if unit == self.unit:
            return self.value
        return self.milliseconds / millis_per(unit)

    def convert(self, unit: TemporalUnit) -> "Duration[TemporalUnit]":
        return Duration(unit=unit, value=self.as_unit(unit))

    @property
    def milliseconds(self) -> float:
        if self.unit == TemporalUnit.MILLISECONDS:
            return self.value
        return self.value * millis_per(self.unit)

    @property
    def seconds(self) -> float:
        return self.as_unit(TemporalUnit.SECONDS)

    @property
    def minutes(self) -> float:
        return self.as_unit(TemporalUnit.MINUTES)

    @property
    def hours(self) -> float:
        return self.as_unit(TemporalUnit.HOURS)

    @property
    def days(self) -> float:
        return self.as_unit(TemporalUnit.DAYS)

    @property
    def weeks(self) -> float:
        return self.as_unit(TemporalUnit.WEEKS)

    @property
    def months(self) -> float:
        return self.as_unit(TemporalUnit.MONTHS)

    @property
    def years(self) -> float:
        return self.as_unit(TemporalUnit.YEARS)

    def normalise(self) -> "Duration[TemporalUnit]":
        """Re-express this duration in the largest unit it fills at least once.

        Thresholds go milliseconds, seconds, minutes, hours, days, weeks and
        then straight to years; MONTHS is never chosen. The sign is kept.
        """
        base = self.milliseconds
        magnitude = abs(base)
        for unit, limit in _NORMALISE_LADDER:
            if magnitude < limit:
                return Duration(unit=unit, value=base / millis_per(unit))
        return Duration(unit=TemporalUnit.YEARS, value=base / MILLISECONDS_PER_YEAR)

    def split(self) -> "SplitDuration":
        """Break this duration into whole years, months, days, ... milliseconds.

        Larger units are peeled off first with floor division. Weeks are
        skipped so the breakdown reads like a calendar (years, months, days).
        """
        base = self.milliseconds
        years, base = divmod(base, MILLISECONDS_PER_YEAR)
        months, base = divmod(base, MILLISECONDS_PER_MONTH)
        days, base = divmod(base, MILLISECONDS_PER_DAY)
        hours, base = divmod(base, MILLISECONDS_PER_HOUR)
        minutes, base = divmod(base, MILLISECONDS_PER_MINUTE)
        seconds, base = divmod(base, MILLISECONDS_PER_SECOND)
        return SplitDuration(
            years=Duration.of_years(years),
            months=Duration.of_months(months),
            days=Duration.of_days(days),
            hours=Duration.of_hours(hours),
            minutes=Duration.of_minutes(minutes),
            seconds=Duration.of_seconds(seconds),
            milliseconds=Duration.of_milliseconds(base),
        )

    def floor(self) -> "Duration[U]":
        return Duration(unit=self.unit, value=floor(self.value))

    def round(self) -> "Duration[U]":
        """Round half up, so 2.5 becomes 3 and -2.5 becomes -2."""
        return Duration(unit=self.unit, value=round_half_up(self.value))

    def ceil(self) -> "Duration[U]":
        return Duration(unit=self.unit, value=ceil(self.value))

    def to_date(self) -> datetime:
        """Read this duration as an epoch timestamp and return an aware UTC datetime.

        Raises:
            ValueError: If the duration is NaN or infinite
        """
        millis = require_finite(self.milliseconds, "Duration.to_date()")
        return _EPOCH + timedelta(milliseconds=millis)

    def to_instant(self, offset: "Duration[Any] | None" = None) -> "Instant":
        # Import at runtime to avoid circular dependency
        from tempora.instant import Instant

        return Instant(value=self.milliseconds, offset=ZERO if offset is None else offset)

    def to_timedelta(self) -> timedelta:
        millis = require_finite(self.milliseconds, "Duration.to_timedelta()")
        return timedelta(milliseconds=millis)

    def format(
        self,
        locale: str | None = None,
        *,
        formatter: RelativeTimeFormatter = english_relative,
        **options: Any,
    ) -> str:
        """Render through a relative-time formatter, e.g. "in 5 minutes".

        Relative formatters have no millisecond unit, so millisecond
        durations are rendered in seconds.
        """
        if self.unit == TemporalUnit.MILLISECONDS:
            return formatter(
                self.seconds, TemporalUnit.SECONDS.label, locale=locale, **options
            )
        return formatter(self.value, self.unit.label, locale=locale, **options)

    @override
    def __str__(self) -> str:
        return self.format()

    def to_json(self) -> dict[str, Any]:
        return {"value": self.value, "units": self.unit.name}

    @staticmethod
    def from_json(data: Mapping[str, Any]) -> "Duration[TemporalUnit]":
        """Rebuild a duration from the mapping produced by to_json()."""
        name = data["units"]
        try:
            unit = TemporalUnit[name]
        except KeyError:
            valid = ", ".join(unit.name for unit in TemporalUnit)
            raise ValueError(
                f"Unknown duration units {name!r}.\n" f"Valid units: {valid}"
            ) from None
        return Duration(unit=unit, value=data["value"])

    # Construction from dates and clocks

    @staticmethod
    def from_date(
        value: "datetime | date | str | Instant",
    ) -> "Duration[Literal[TemporalUnit.MILLISECONDS]]":
        """Epoch milliseconds of `value` as a MILLISECONDS duration."""
        return Duration.of_milliseconds(_epoch_milliseconds(value))

    @staticmethod
    def from_timedelta(
        value: timedelta,
    ) -> "Duration[Literal[TemporalUnit.MILLISECONDS]]":
        return Duration.of_milliseconds(value / _ONE_MILLISECOND)

    @staticmethod
    def since(
        value: "datetime | date | str | Instant", clock: Clock = system_clock
    ) -> "Duration[Literal[TemporalUnit.MILLISECONDS]]":
        """Time elapsed from `value` (a moment in the past) until now."""
        return Duration.of_milliseconds(clock() - _epoch_milliseconds(value))

    @staticmethod
    def until(
        value: "datetime | date | str | Instant", clock: Clock = system_clock
    ) -> "Duration[Literal[TemporalUnit.MILLISECONDS]]":
        """Time remaining from now until `value` (a moment in the future)."""
        return Duration.of_milliseconds(_epoch_milliseconds(value) - clock())

    @staticmethod
    def delta(
        clock: Clock = monotonic_clock,
    ) -> "Callable[[], Duration[Literal[TemporalUnit.MILLISECONDS]]]":
        """Start a stopwatch; each call of the result returns the time elapsed.

        Example:
            >>> elapsed = Duration.delta()
            >>> do_work()
            >>> print(elapsed().seconds)
        """
        start = clock()

        def elapsed() -> "Duration[Literal[TemporalUnit.MILLISECONDS]]":
            return Duration.of_milliseconds(clock() - start)

        return elapsed

    # Per-unit factories

    @staticmethod
    def of_years(value: float) -> "Duration[Literal[TemporalUnit.YEARS]]":
        return Duration(unit=TemporalUnit.YEARS, value=value)

    @staticmethod
    def of_months(value: float) -> "Duration[Literal[TemporalUnit.MONTHS]]":
        return Duration(unit=TemporalUnit.MONTHS, value=value)

    @staticmethod
    def of_weeks(value: float) -> "Duration[Literal[TemporalUnit.WEEKS]]":
        return Duration(unit=TemporalUnit.WEEKS, value=value)

    @staticmethod
    def of_days(value: float) -> "Duration[Literal[TemporalUnit.DAYS]]":
        return Duration(unit=TemporalUnit.DAYS, value=value)

    @staticmethod
    def of_hours(value: float) -> "Duration[Literal[TemporalUnit.HOURS]]":
        return Duration(unit=TemporalUnit.HOURS, value=value)

    @staticmethod
    def of_minutes(value: float) -> "Duration[Literal[TemporalUnit.MINUTES]]":
        return Duration(unit=TemporalUnit.MINUTES, value=value)

    @staticmethod
    def of_seconds(value: float) -> "Duration[Literal[TemporalUnit.SECONDS]]":
        return Duration(unit=TemporalUnit.SECONDS, value=value)

    @staticmethod
    def of_milliseconds(
        value: float,
    ) -> "Duration[Literal[TemporalUnit.MILLISECONDS]]":
        return Duration(unit=TemporalUnit.MILLISECONDS, value=value)


@dataclass(frozen=True, kw_only=True)
class SplitDuration:
    """Calendar breakdown of a duration into whole units, largest first."""

    years: Duration[Any]
    months: Duration[Any]
    days: Duration[Any]
    hours: Duration[Any]
    minutes: Duration[Any]
    seconds: Duration[Any]
    milliseconds: Duration[Any]

    def parts(self) -> tuple[Duration[Any], ...]:
        return (
            self.years,
            self.months,
            self.days,
            self.hours,
            self.minutes,
            self.seconds,
            self.milliseconds,
        )

    def total(self) -> "Duration[Literal[TemporalUnit.MILLISECONDS]]":
        """Recombine the parts into a single MILLISECONDS duration."""
        return Duration.of_milliseconds(sum(part.milliseconds for part in self.parts()))


def _epoch_milliseconds(value: "datetime | date | str | Instant") -> float:
    """Convert a date-like value to milliseconds since the Unix epoch.

    Accepts:
    - Instant: its unix time
    - datetime: must be timezone-aware
    - date: midnight UTC of that day
    - str: ISO-8601, read as UTC when it carries no offset

    Raises:
        TypeError: If value is an unsupported type or naive datetime
    """
    # Import at runtime to avoid circular dependency
    from tempora.instant import Instant

    if isinstance(value, Instant):
        return value.unix
    if isinstance(value, str):
        parsed = isoparse(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return (parsed - _EPOCH) // _ONE_MILLISECOND
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise TypeError(
                f"Duration.from_date() requires a timezone-aware datetime.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return (value - _EPOCH) // _ONE_MILLISECOND
    if isinstance(value, date):
        return (datetime.combine(value, time.min, tzinfo=timezone.utc) - _EPOCH) // (
            _ONE_MILLISECOND
        )
    raise TypeError(
        f"Expected datetime, date, ISO string or Instant.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


ZERO: Duration[Literal[TemporalUnit.YEARS]] = Duration.of_years(0)
"""The empty duration.

It uses the largest unit, so combining it with any other duration keeps the
other duration's unit: ZERO + of_seconds(5) is still in SECONDS.
"""

# Unit values for convenience
SECOND = Duration.of_seconds(1)
MINUTE = Duration.of_minutes(1)
HOUR = Duration.of_hours(1)
DAY = Duration.of_days(1)
WEEK = Duration.of_weeks(1)
MONTH = Duration.of_months(1)
YEAR = Duration.of_years(1)
