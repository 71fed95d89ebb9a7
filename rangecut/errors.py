"""Errors reported while reading a range list.

The engine returns these as values inside ``ParseResult`` and
``ExtractionResult`` instead of raising them. They are still exceptions, so
a caller that prefers raising can call ``result.unwrap()``.
"""


class RangeError(ValueError):
    """Base class for range list failures."""

    def __init__(self, message: str, token: str | None = None):
        super().__init__(message)
        self.token: str | None = token


class MalformedRangeToken(RangeError):
    """A token is not ``N``, ``A-B`` or ``A-``, or is a decreasing range."""


class InvalidRange(RangeError):
    """A range starts below position 1."""

    def __init__(self, token: str | None = None):
        super().__init__("Values may not include zero.", token)
