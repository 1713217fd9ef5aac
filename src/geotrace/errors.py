"""Typed errors for geotrace values and codecs."""


class GeoTraceError(Exception):
    """Base error for the package."""


class InvalidArgumentError(GeoTraceError, ValueError):
    """A value or argument was rejected (None, wrong vector length, bad tag)."""


class DecodeError(GeoTraceError):
    """Binary input was truncated or malformed."""


class ParseError(GeoTraceError, ValueError):
    """Text input could not be turned into a value."""


class MissingTimestampError(ParseError, IndexError):
    """Trace text had no 5th whitespace token to use as the timestamp."""
