"""Formatter collaborators used by Duration.format and Instant.format.

Locale-aware rendering is left to whatever formatter the caller passes in.
The defaults here are locale-independent: English relative phrases and
ISO-8601 timestamps.
"""

import math
from datetime import datetime
from typing import Any, Protocol


class RelativeTimeFormatter(Protocol):
    def __call__(
        self, value: float, unit: str, *, locale: str | None = None, **options: Any
    ) -> str: ...


class AbsoluteTimeFormatter(Protocol):
    def __call__(
        self, moment: datetime, *, locale: str | None = None, **options: Any
    ) -> str: ...


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return text


def english_relative(
    value: float, unit: str, *, locale: str | None = None, **options: Any
) -> str:
    """Render `value` `unit`s as an English relative phrase.

    Positive values (and +0) read as future ("in 3 hours"), negative values
    (and -0) as past ("3 hours ago"). `locale` is accepted and ignored.

    Example:
        >>> english_relative(-1, "day")
        '1 day ago'
        >>> english_relative(2.5, "hour")
        'in 2.5 hours'
    """
    magnitude = abs(value)
    number = _format_number(magnitude)
    noun = unit if number == "1" else f"{unit}s"
    if value < 0 or math.copysign(1.0, value) < 0:
        return f"{number} {noun} ago"
    return f"in {number} {noun}"


def iso_absolute(
    moment: datetime, *, locale: str | None = None, **options: Any
) -> str:
    """Render `moment` as ISO-8601 with millisecond precision.

    `options` may carry `sep` (default "T"); `locale` is ignored.
    """
    return moment.isoformat(sep=options.get("sep", "T"), timespec="milliseconds")
