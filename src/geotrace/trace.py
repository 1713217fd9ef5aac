"""GeoTrace answer value: an open, ordered path of logged geo points.

A trace is a sequence of PointRecords, each pairing a 4-slot geo vector
[latitude, longitude, altitude, accuracy] with the timestamp it was
captured at. Order matters and duplicates are allowed; an empty trace
means "nothing recorded yet".

Per-point formatting, parsing, binary encoding and accuracy reading are
delegated to GeoPointData so a trace and a single point always agree on
how a point looks.

Formats:
- text:   "<lat> <lon> <alt> <acc> <timestamp>" per point, joined by "; "
- binary: numeric count, then per point the geo point record followed by
          a nullable string timestamp

Usage:
    data = GeoTraceData()
    data.set_value(GeoTrace([PointRecord([45.5, -73.6, 20.0, 5.0], "t0")]))

    data.to_numeric()       # worst accuracy, 5.0
    text = data.uncast()    # UncastData("45.5 -73.6 20.0 5.0 t0")
"""

from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, List, Optional, Sequence
import numpy as np

from .answer import AnswerData, UncastData, register_answer_type
from .config import CodecConfig
from .errors import DecodeError, InvalidArgumentError, MissingTimestampError
from .log import get_logger
from .point import VECTOR_SIZE, GeoPointData
from .streams import read_nullable_string, read_numeric, write_nullable_string, write_numeric

logger = get_logger(__name__)

TIMESTAMP_TOKEN = 4  # Timestamp follows the four vector values


def _zero_vector() -> np.ndarray:
    return np.zeros(VECTOR_SIZE, dtype=np.float64)


@dataclass(eq=False)
class PointRecord:
    """One logged sample: geo vector plus capture timestamp."""
    vector: np.ndarray = field(default_factory=_zero_vector)
    timestamp: Optional[str] = None

    def __post_init__(self):
        try:
            arr = np.array(self.vector, dtype=np.float64).reshape(-1)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Point vector must be numeric: {self.vector!r}") from e
        if arr.size > VECTOR_SIZE:
            raise InvalidArgumentError(
                f"Point vector has {arr.size} values, at most {VECTOR_SIZE} allowed"
            )
        vec = _zero_vector()
        vec[:arr.size] = arr
        self.vector = vec

        if self.timestamp is not None and not isinstance(self.timestamp, str):
            raise InvalidArgumentError(
                f"Point timestamp must be a string or None, got {type(self.timestamp).__name__}"
            )

    @property
    def latitude(self) -> float:
        return float(self.vector[0])

    @property
    def longitude(self) -> float:
        return float(self.vector[1])

    @property
    def altitude(self) -> float:
        return float(self.vector[2])

    @property
    def accuracy(self) -> float:
        return float(self.vector[3])

    def copy(self) -> "PointRecord":
        return PointRecord(self.vector.copy(), self.timestamp)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PointRecord):
            return NotImplemented
        return (
            np.array_equal(self.vector, other.vector, equal_nan=True)
            and self.timestamp == other.timestamp
        )


@dataclass(eq=False)
class GeoTrace:
    """Plain value form of a trace, as exchanged through get/set."""
    points: List[PointRecord] = field(default_factory=list)

    def copy(self) -> "GeoTrace":
        return GeoTrace([p.copy() for p in self.points])

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PointRecord]:
        return iter(self.points)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GeoTrace):
            return NotImplemented
        return self.points == other.points


def _split_segments(text: str) -> List[str]:
    """Split on ';', dropping trailing empty segments.

    Text without any ';' is a single segment, even when empty.
    """
    if ";" not in text:
        return [text]
    parts = text.split(";")
    while parts and parts[-1] == "":
        parts.pop()
    return parts


@register_answer_type("geotrace")
class GeoTraceData(AnswerData):
    """Answer value holding an open sequence of logged geo points.

    The point list is owned by the instance. Reads return deep copies and
    writes replace the whole sequence, so callers never share points with it.
    """

    def __init__(self, source=None, config: Optional[CodecConfig] = None):
        """Create an empty trace, or a deep copy of source.

        Args:
            source: Optional GeoTraceData or GeoTrace to copy
            config: Codec settings; copies of a GeoTraceData keep its config
        """
        if config is None:
            config = source.config if isinstance(source, GeoTraceData) else CodecConfig.default()
        self.config = config
        self._points: List[PointRecord] = []

        if isinstance(source, GeoTraceData):
            self._points = [p.copy() for p in source._points]
        elif isinstance(source, GeoTrace):
            self._points = [p.copy() for p in source.points]
        elif source is not None:
            raise InvalidArgumentError(
                f"Cannot build a GeoTraceData from {type(source).__name__}"
            )

    def __len__(self) -> int:
        return len(self._points)

    def clone(self) -> "GeoTraceData":
        return GeoTraceData(self)

    def display_text(self) -> str:
        rendered = []
        for p in self._points:
            timestamp = p.timestamp if p.timestamp is not None else self.config.absent_timestamp
            rendered.append(f"{GeoPointData(p.vector).display_text()} {timestamp}")
        return self.config.point_separator.join(rendered)

    def get_value(self) -> GeoTrace:
        return GeoTrace([p.copy() for p in self._points])

    def set_value(self, value):
        """Replace all points.

        Anything other than a GeoTrace is converted to text and parsed
        with cast(). Nothing changes if that parse fails.
        """
        if value is None:
            raise InvalidArgumentError("Attempt to set an answer value to None")
        if not isinstance(value, GeoTrace):
            value = self.cast(UncastData(str(value))).get_value()
        self._points = [p.copy() for p in value.points]

    def read_external(self, stream: BinaryIO):
        self._points = []

        count = read_numeric(stream)
        if not 0 <= count <= self.config.max_points:
            raise DecodeError(f"Invalid trace point count: {count}")

        points = []
        for _ in range(count):
            point = GeoPointData()
            point.read_external(stream)
            timestamp = read_nullable_string(stream)
            points.append(PointRecord(point.get_value(), timestamp))

        self._points = points
        logger.debug("Decoded geo trace with %d points", count)

    def write_external(self, stream: BinaryIO):
        write_numeric(stream, len(self._points))
        for p in self._points:
            GeoPointData(p.vector).write_external(stream)
            write_nullable_string(stream, p.timestamp)

    def uncast(self) -> UncastData:
        return UncastData(self.display_text())

    def cast(self, data: UncastData) -> "GeoTraceData":
        """Parse trace text into a new GeoTraceData.

        Compatible parsing reads the point and timestamp from the whole
        text, once per ';' segment. Only single-point text round-trips;
        "1 2 3 4 a; 5 6 7 8 b" gives two copies of (1, 2, 3, 4, "a;").
        Set CodecConfig.multipoint_cast to parse every segment on its own.

        Raises:
            MissingTimestampError: Fewer than 5 space-separated tokens
            ParseError: The point values are rejected by GeoPointData
        """
        text = str(data.value)
        if self.config.multipoint_cast:
            return self._cast_per_segment(text)

        result = GeoTraceData(config=self.config)
        segments = _split_segments(text)
        for _ in segments:
            tokens = text.strip().split(" ")
            # Allow arbitrary whitespace around each value
            normalized = " ".join(t.strip() for t in tokens)
            vector = GeoPointData().cast(UncastData(normalized)).get_value()
            if len(tokens) <= TIMESTAMP_TOKEN:
                raise MissingTimestampError(
                    f"Geo trace text has no timestamp token: {text!r}"
                )
            result._points.append(PointRecord(vector, tokens[TIMESTAMP_TOKEN]))

        logger.debug("Cast geo trace text into %d points", len(result._points))
        return result

    def _cast_per_segment(self, text: str) -> "GeoTraceData":
        result = GeoTraceData(config=self.config)
        for segment in _split_segments(text):
            tokens = segment.split()
            vector = GeoPointData().cast(UncastData(segment)).get_value()
            if len(tokens) <= TIMESTAMP_TOKEN:
                raise MissingTimestampError(
                    f"Geo trace segment has no timestamp token: {segment!r}"
                )
            result._points.append(PointRecord(vector, tokens[TIMESTAMP_TOKEN]))

        logger.debug("Cast geo trace text into %d points (per segment)", len(result._points))
        return result

    def to_boolean(self) -> bool:
        return len(self._points) > 0

    def to_numeric(self) -> float:
        """Worst (largest) accuracy in the trace.

        The running maximum starts at 0.0, so negative readings report 0.0.
        """
        if not self._points:
            return GeoPointData.NO_ACCURACY_VALUE

        max_value = 0.0
        for p in self._points:
            max_value = float(np.maximum(max_value, GeoPointData(p.vector).to_numeric()))
        return max_value


def trace_from_vectors(
    vectors: Sequence[Sequence[float]],
    timestamps: Optional[Sequence[Optional[str]]] = None,
) -> GeoTrace:
    """Build a GeoTrace from parallel vector and timestamp sequences."""
    if timestamps is None:
        timestamps = [None] * len(vectors)
    if len(timestamps) != len(vectors):
        raise InvalidArgumentError(
            f"Got {len(vectors)} vectors but {len(timestamps)} timestamps"
        )
    return GeoTrace([PointRecord(v, t) for v, t in zip(vectors, timestamps)])
