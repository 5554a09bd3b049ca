"""Tests for the default formatter collaborators."""

from datetime import datetime, timedelta, timezone

from tempora import english_relative, iso_absolute


def test_future_and_past():
    assert english_relative(3, "hour") == "in 3 hours"
    assert english_relative(-3, "hour") == "3 hours ago"


def test_singular_for_exactly_one():
    assert english_relative(1, "day") == "in 1 day"
    assert english_relative(-1, "day") == "1 day ago"
    assert english_relative(1.5, "day") == "in 1.5 days"


def test_zero_keeps_its_sign():
    assert english_relative(0, "second") == "in 0 seconds"
    assert english_relative(-0.0, "second") == "0 seconds ago"


def test_numbers_are_grouped_and_trimmed():
    assert english_relative(1234.5, "minute") == "in 1,234.5 minutes"
    assert english_relative(1 / 3, "week") == "in 0.333 weeks"


def test_locale_is_accepted():
    assert english_relative(2, "month", locale="en-GB") == "in 2 months"


def test_iso_absolute():
    moment = datetime(2018, 4, 4, 18, 0, 1, 500000, tzinfo=timezone(timedelta(hours=2)))

    assert iso_absolute(moment) == "2018-04-04T18:00:01.500+02:00"
    assert iso_absolute(moment, sep=" ") == "2018-04-04 18:00:01.500+02:00"


def test_noun_agrees_with_the_printed_number():
    """Test that values printed as 1 read as singular."""
    assert english_relative(1.0001, "second") == "in 1 second"
    assert english_relative(-0.9999, "hour") == "1 hour ago"
    assert english_relative(1.001, "day") == "in 1.001 days"
