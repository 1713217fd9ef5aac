"""Configuration for GeoTrace text and binary codecs."""

from dataclasses import dataclass


@dataclass
class CodecConfig:
    """Settings shared by the trace text and binary codecs.

    The defaults reproduce the canonical record formats exactly, so values
    written with one default-configured instance are readable by any other.
    Only change them when both ends of an exchange agree.
    """

    # Text rendering
    point_separator: str = "; "          # Between rendered points
    absent_timestamp: str = "null"       # Rendered in place of a missing timestamp

    # Text parsing
    multipoint_cast: bool = False        # Parse each ';' segment on its own

    # Binary decoding
    max_points: int = 1_000_000          # Reject counts above this as malformed

    @classmethod
    def default(cls) -> "CodecConfig":
        """Canonical formats, compatible parsing."""
        return cls()

    @classmethod
    def per_segment(cls) -> "CodecConfig":
        """Canonical rendering, but multi-point text parses point by point."""
        return cls(multipoint_cast=True)
