"""Exceptions raised by tempora.

Only parsing can fail; arithmetic and conversion propagate degenerate
numbers (NaN, infinities) instead of raising.
"""


class TemporaError(Exception):
    """Base class for tempora errors."""


class ParseError(TemporaError, ValueError):
    """The text is not in the supported ISO-8601 subset."""

    def __init__(self, message: str, text: str):
        super().__init__(message)
        self.text: str = text


class UnsupportedTimezoneError(ParseError):
    """The text carries a numeric UTC offset and offsets were not enabled."""

    def __init__(self, message: str, text: str, offset: str):
        super().__init__(message, text)
        self.offset: str = offset
