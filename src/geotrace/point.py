"""Single geo point answer value.

A GeoPointData holds the fixed 4-slot vector

    [latitude, longitude, altitude, accuracy]

plus `length`, the number of leading slots that were actually supplied
(2 to 4; 0 for a freshly constructed, not yet populated value). Unused
slots are zero. Only a point with all four slots reports an accuracy;
shorter points read as NO_ACCURACY_VALUE.
"""

from typing import BinaryIO, Optional, Sequence, Tuple
import numpy as np

from .answer import AnswerData, UncastData, register_answer_type
from .errors import DecodeError, InvalidArgumentError, ParseError
from .streams import read_decimal, read_numeric, write_decimal, write_numeric

VECTOR_SIZE = 4
MIN_VALUES = 2  # latitude and longitude


def _to_vector(values: Sequence[float]) -> Tuple[np.ndarray, int]:
    """Copy 2..4 numbers into a zero-filled float64[4] vector.

    Returns the vector and the number of values supplied.
    """
    try:
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Geo point values must be numeric: {values!r}") from e
    if not MIN_VALUES <= arr.size <= VECTOR_SIZE:
        raise InvalidArgumentError(
            f"Geo point needs {MIN_VALUES} to {VECTOR_SIZE} values, got {arr.size}"
        )
    vec = np.zeros(VECTOR_SIZE, dtype=np.float64)
    vec[:arr.size] = arr
    return vec, arr.size


@register_answer_type("geopoint")
class GeoPointData(AnswerData):
    """A single latitude/longitude/altitude/accuracy reading."""

    NO_ACCURACY_VALUE = 9999999.0

    def __init__(self, values: Optional[Sequence[float]] = None):
        self.vector = np.zeros(VECTOR_SIZE, dtype=np.float64)
        self.length = 0
        if values is not None:
            self.set_value(values)

    def clone(self) -> "GeoPointData":
        copy = GeoPointData()
        copy.vector = self.vector.copy()
        copy.length = self.length
        return copy

    def display_text(self) -> str:
        return " ".join(repr(float(v)) for v in self.vector[:self.length])

    def get_value(self) -> np.ndarray:
        return self.vector.copy()

    def set_value(self, value):
        if value is None:
            raise InvalidArgumentError("Attempt to set a geo point to None")
        self.vector, self.length = _to_vector(value)

    def read_external(self, stream: BinaryIO):
        length = read_numeric(stream)
        # 0 is the unpopulated point written by a default-constructed value
        if length != 0 and not MIN_VALUES <= length <= VECTOR_SIZE:
            raise DecodeError(f"Geo point record has invalid value count {length}")
        vec = np.zeros(VECTOR_SIZE, dtype=np.float64)
        for i in range(length):
            vec[i] = read_decimal(stream)
        self.vector = vec
        self.length = length

    def write_external(self, stream: BinaryIO):
        write_numeric(stream, self.length)
        for v in self.vector[:self.length]:
            write_decimal(stream, v)

    def uncast(self) -> UncastData:
        return UncastData(self.display_text())

    def cast(self, data: UncastData) -> "GeoPointData":
        """Parse whitespace-separated numbers.

        At least latitude and longitude are required. Tokens past the
        fourth are ignored, so a trailing timestamp is tolerated.
        """
        tokens = str(data.value).split()
        if len(tokens) < MIN_VALUES:
            raise ParseError(
                f"Geo point text needs at least {MIN_VALUES} values: {data.value!r}"
            )
        try:
            values = [float(t) for t in tokens[:VECTOR_SIZE]]
        except ValueError as e:
            raise ParseError(f"Geo point text is not numeric: {data.value!r}") from e
        return GeoPointData(values)

    def to_boolean(self) -> bool:
        return True

    def to_numeric(self) -> float:
        if self.length < VECTOR_SIZE:
            return self.NO_ACCURACY_VALUE
        return float(self.vector[3])
