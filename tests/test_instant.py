"""Tests for offset-aware instants."""

import math
import time
from datetime import datetime, timedelta, timezone

import pytest

from tempora import CalendarFields, Duration, Instant, ZERO


def at(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> Instant:
    return Instant.from_datetime(
        datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
    )


def ymd(year: int, month: int, day: int, **time: int) -> CalendarFields:
    return CalendarFields(year=year, month=month, day=day, **time)


@pytest.fixture
def local_zone(monkeypatch):
    """Switch the process time zone, restoring it afterwards."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset() is not available on this platform")

    def use(zone: str) -> None:
        monkeypatch.setenv("TZ", zone)
        time.tzset()

    yield use
    monkeypatch.undo()
    time.tzset()


def test_unix_removes_the_offset():
    instant = Instant(value=7_200_000, offset=Duration.of_hours(1))
    assert instant.unix == 3_600_000


def test_default_offset_is_zero():
    assert Instant(value=5).offset == ZERO
    assert Instant(value=5).unix == 5


def test_fields_read_the_local_wall_clock():
    instant = Instant(value=3_600_000, offset=Duration.of_hours(1))
    assert instant.fields == ymd(1970, 1, 1, hour=1)


def test_add_months_shifts_the_calendar_field():
    """Test that month arithmetic follows the calendar, not 30-day blocks."""
    assert at(2019, 1, 31).add(Duration.of_months(1)).fields == ymd(2019, 3, 3)
    assert at(2019, 5, 15).add(Duration.of_months(1)).fields == ymd(2019, 6, 15)


def test_add_years_from_leap_day():
    assert at(2020, 2, 29).add(Duration.of_years(1)).fields == ymd(2021, 3, 1)


def test_add_days_crosses_month_boundaries():
    assert at(2019, 1, 31).add(Duration.of_days(1)).fields == ymd(2019, 2, 1)


def test_add_weeks_applies_days():
    assert at(2019, 12, 28).add(Duration.of_weeks(1)).fields == ymd(2020, 1, 4)
    assert at(2019, 1, 1).add(Duration.of_weeks(1.5)).fields == ymd(2019, 1, 12)


def test_add_rounds_fractional_deltas():
    assert at(2019, 1, 1).add(Duration.of_hours(1.4)).fields == ymd(2019, 1, 1, hour=1)
    assert at(2019, 1, 1).add(Duration.of_minutes(0.5)).fields == ymd(
        2019, 1, 1, minute=1
    )


def test_add_small_units():
    start = at(2019, 1, 1)

    assert start.add(Duration.of_milliseconds(1)).unix == start.unix + 1
    assert start.add(Duration.of_seconds(90)).fields == ymd(
        2019, 1, 1, minute=1, second=30
    )


def test_add_keeps_the_offset():
    offset = Duration.of_minutes(120)
    instant = Instant(value=0, offset=offset)

    assert instant.add(Duration.of_days(1)).offset == offset


def test_subtract_is_add_of_the_negation():
    start = at(2019, 3, 31)

    assert start.subtract(Duration.of_months(1)).fields == ymd(2019, 3, 3)
    assert start.subtract(Duration.of_days(1)) == start.add(Duration.of_days(-1))
    # -2.5 rounds half up to -2
    assert start.subtract(Duration.of_seconds(2.5)).unix == start.unix - 2000


def test_operators():
    start = at(2019, 1, 1)
    later = at(2019, 1, 2)

    assert start + Duration.of_days(1) == later
    assert later - Duration.of_days(1) == start
    assert later - start == Duration.of_milliseconds(86_400_000)
    assert Duration.of_days(1) + start == later


def test_non_finite_arithmetic_gives_nan():
    assert math.isnan(Instant(value=0).add(Duration.of_days(math.nan)).value)
    assert math.isnan(Instant(value=math.inf).add(Duration.of_days(1)).value)


def test_nan_instants_have_no_calendar_reading():
    invalid = Instant(value=0).add(Duration.of_days(math.nan))

    with pytest.raises(ValueError, match="Instant.fields"):
        invalid.fields
    with pytest.raises(ValueError, match="Instant.as_date"):
        invalid.as_date()
    with pytest.raises(ValueError, match="finite number of milliseconds"):
        invalid.format()


def test_change_offset_keeps_the_moment():
    instant = Instant(value=0)
    shifted = instant.change_offset(Duration.of_minutes(60))

    assert shifted.value == 3_600_000
    assert shifted.unix == 0
    assert shifted.offset == Duration.of_minutes(60)
    assert shifted.change_offset() == Instant(value=0, offset=ZERO)


def test_comparisons_use_unix_time():
    ahead = Instant(value=3_600_000, offset=Duration.of_hours(1))
    utc = Instant(value=1000)

    assert ahead.is_before(utc)
    assert utc.is_after(ahead)
    assert not ahead.is_after(utc)
    assert not ahead.is_before(ahead.change_offset())


def test_as_date_keeps_the_offset():
    instant = Instant(value=3_600_000, offset=Duration.of_hours(1))
    moment = instant.as_date()

    assert moment == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert moment.utcoffset() == timedelta(hours=1)
    assert moment.hour == 1


def test_format_defaults_to_iso():
    assert Instant(value=0).format() == "1970-01-01T00:00:00.000+00:00"
    assert str(Instant(value=1500)) == "1970-01-01T00:00:01.500+00:00"
    assert Instant(value=0).format(sep=" ") == "1970-01-01 00:00:00.000+00:00"


def test_format_delegates_to_formatter():
    seen = []

    def formatter(moment, *, locale=None, **options):
        seen.append((moment, locale))
        return "formatted"

    instant = Instant(value=0)
    assert instant.format("fr", formatter=formatter) == "formatted"
    assert seen == [(instant.as_date(), "fr")]


def test_from_datetime_keeps_the_offset():
    moment = datetime(2020, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
    instant = Instant.from_datetime(moment)

    assert instant.offset == Duration.of_minutes(120)
    assert instant.fields == ymd(2020, 1, 1, hour=12)
    assert instant.unix == at(2020, 1, 1, 10).unix


def test_from_datetime_rejects_naive_datetime():
    with pytest.raises(TypeError, match="timezone-aware"):
        Instant.from_datetime(datetime(2020, 1, 1))


def test_to_json():
    assert Instant(value=10, offset=Duration.of_minutes(30)).to_json() == {
        "value": 10,
        "offset": {"value": 30, "units": "MINUTES"},
    }


def test_now_reads_the_clock_once():
    reads = []

    def clock() -> float:
        reads.append(1)
        return 1_000_000

    instant = Instant.now(clock)

    assert len(reads) == 1
    assert instant.unix == 1_000_000
    assert instant.offset == Instant.local_offset(lambda: 1_000_000)


def test_local_offset_is_positive_ahead_of_utc(local_zone):
    # POSIX offsets count westwards: EET-2 is two hours ahead of UTC
    local_zone("EET-2")

    assert Instant.local_offset() == Duration.of_minutes(120)
    instant = Instant.now(lambda: 0)
    assert instant.value == 7_200_000
    assert instant.fields == ymd(1970, 1, 1, hour=2)


def test_local_offset_in_utc(local_zone):
    local_zone("UTC0")

    assert Instant.local_offset() == Duration.of_minutes(0)
    assert Instant.now(lambda: 42).value == 42


def test_parse_delegates_to_parser():
    parsed = Instant.parse("2018-04-04T16:00Z")

    assert parsed.unix == at(2018, 4, 4, 16).unix
    assert parsed.offset == ZERO
