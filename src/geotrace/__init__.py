"""GeoTrace answer values.

An answer value for questions that record a path: an ordered, open
sequence of geo points (latitude, longitude, altitude, accuracy), each
logged with its capture timestamp.

Key pieces:
- GeoTraceData: the trace answer value (get/set, binary and text codecs,
  boolean and numeric views for expression evaluation)
- GeoPointData: the single point value the trace delegates to
- AnswerData: the capability interface both implement, with a tag-keyed
  factory for decoding tagged records
"""

from .answer import (
    AnswerData,
    UncastData,
    register_answer_type,
    registered_tags,
    create_answer,
    write_tagged,
    read_tagged,
)
from .config import CodecConfig
from .errors import (
    GeoTraceError,
    InvalidArgumentError,
    DecodeError,
    ParseError,
    MissingTimestampError,
)
from .point import GeoPointData
from .trace import GeoTrace, GeoTraceData, PointRecord, trace_from_vectors

__all__ = [
    # Interface
    "AnswerData",
    "UncastData",
    "register_answer_type",
    "registered_tags",
    "create_answer",
    "write_tagged",
    "read_tagged",
    # Values
    "GeoPointData",
    "GeoTrace",
    "GeoTraceData",
    "PointRecord",
    "trace_from_vectors",
    # Config
    "CodecConfig",
    # Errors
    "GeoTraceError",
    "InvalidArgumentError",
    "DecodeError",
    "ParseError",
    "MissingTimestampError",
]
