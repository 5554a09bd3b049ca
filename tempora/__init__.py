from importlib.resources import files

from .calendar import CalendarFields
from .clock import Clock, monotonic_clock, system_clock
from .duration import (
    DAY,
    HOUR,
    MINUTE,
    MONTH,
    SECOND,
    WEEK,
    YEAR,
    ZERO,
    Duration,
    SplitDuration,
)
from .errors import ParseError, TemporaError, UnsupportedTimezoneError
from .format import (
    AbsoluteTimeFormatter,
    RelativeTimeFormatter,
    english_relative,
    iso_absolute,
)
from .instant import Instant
from .parse import parse_instant
from .units import TemporalUnit, finest, millis_per

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "TemporalUnit",
    "millis_per",
    "finest",
    "Duration",
    "SplitDuration",
    "Instant",
    "CalendarFields",
    "parse_instant",
    "ZERO",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "MONTH",
    "YEAR",
    "Clock",
    "system_clock",
    "monotonic_clock",
    "RelativeTimeFormatter",
    "AbsoluteTimeFormatter",
    "english_relative",
    "iso_absolute",
    "TemporaError",
    "ParseError",
    "UnsupportedTimezoneError",
    "docs",
]
