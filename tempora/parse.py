"""Parser for the ISO-8601 subset tempora accepts.

Grammar:
    YYYY-MM-DD
    YYYY-MM-DD( |T)HH:MM[:SS[.mmm]][Z|+HH:MM|-HH:MM]

Parsing runs in three steps: match the date prefix, match what is left
against the time part, then require that nothing is left over.

Numeric offsets (`+02:00`) match the grammar but are rejected with
UnsupportedTimezoneError unless the caller opts in with
`numeric_offsets=True`. Only `Z` (or no zone at all) is read as UTC by
default.
"""

import logging
import re
from typing import Any

from tempora.calendar import CalendarFields, to_epoch_ms
from tempora.duration import ZERO, Duration
from tempora.errors import ParseError, UnsupportedTimezoneError
from tempora.instant import Instant

logger = logging.getLogger(__name__)

_DATE = re.compile(r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})", re.ASCII)
_TIME = re.compile(
    r"( |T)(?P<hour>\d\d):(?P<minute>\d\d)"
    r"(:(?P<second>\d\d)(\.(?P<ms>\d\d\d))?)?"
    r"(?P<offset>Z|\+\d\d:\d\d|-\d\d:\d\d)?",
    re.ASCII,
)


def parse_instant(text: str, *, numeric_offsets: bool = False) -> Instant:
    """Parse `text` into an Instant.

    Args:
        text: Date, optionally followed by a time and a zone suffix
        numeric_offsets: Honour `±HH:MM` suffixes. The fields are then the
            local wall clock and the offset becomes the Instant's offset.

    Returns:
        Instant; its offset is ZERO for `Z` or a missing suffix

    Raises:
        ParseError: If the date prefix is missing or text is left over
        UnsupportedTimezoneError: If a numeric offset is present and
            numeric_offsets is False

    Example:
        >>> parse_instant("2018-04-04T16:00:00.000Z").unix
        1522857600000
    """
    date_match = _DATE.match(text)
    if date_match is None:
        logger.debug("rejected %r: no date prefix", text)
        raise ParseError(
            f"Invalid instant {text!r}: expected a YYYY-MM-DD date prefix.\n"
            f"Examples: '2018-04-04', '2018-04-04T16:00Z', "
            f"'2018-04-04 16:00:00.000'",
            text,
        )

    rest = text[date_match.end() :]
    time_match = _TIME.fullmatch(rest) if rest else None
    if rest and time_match is None:
        logger.debug("rejected %r: unconsumed text %r", text, rest)
        raise ParseError(
            f"Invalid instant {text!r}: unexpected text {rest!r} after the date.\n"
            f"A time must follow a space or 'T' as HH:MM[:SS[.mmm]], "
            f"optionally ending in Z or ±HH:MM",
            text,
        )

    def group(name: str) -> int:
        if time_match is None:
            return 0
        found = time_match.group(name)
        return int(found) if found else 0

    fields = CalendarFields(
        year=int(date_match.group("year")),
        month=int(date_match.group("month")),
        day=int(date_match.group("day")),
        hour=group("hour"),
        minute=group("minute"),
        second=group("second"),
        millisecond=group("ms"),
    )
    suffix = time_match.group("offset") if time_match is not None else None
    offset = _offset(text, suffix, numeric_offsets)
    return Instant(value=to_epoch_ms(fields), offset=offset)


def _offset(
    text: str, suffix: str | None, numeric_offsets: bool
) -> Duration[Any]:
    if not suffix or suffix == "Z":
        return ZERO
    if not numeric_offsets:
        logger.debug("rejected %r: numeric offset %s", text, suffix)
        raise UnsupportedTimezoneError(
            f"Unsupported timezone {suffix!r} in {text!r}.\n"
            f"Only 'Z' (UTC) is read by default.\n"
            f"Hint: Pass numeric_offsets=True to honour ±HH:MM offsets:\n"
            f"  parse_instant({text!r}, numeric_offsets=True)",
            text,
            suffix,
        )
    sign = -1 if suffix[0] == "-" else 1
    hours, minutes = suffix[1:].split(":")
    return Duration.of_minutes(sign * (int(hours) * 60 + int(minutes)))
