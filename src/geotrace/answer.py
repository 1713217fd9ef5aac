"""Answer-value capability interface and tagged factory.

Every answer-value kind (a single geo point, a geo trace, ...) implements
AnswerData: the value exchange surface used by answer storage, the binary
record codec used by persistence, the uncast/cast text pair used by
imports and defaults, and the boolean/numeric coercions read by the
expression evaluator.

Kinds are looked up through an explicit registration table keyed by a
string tag, so a tagged record can be decoded without knowing its kind
up front:

    @register_answer_type("geotrace")
    class GeoTraceData(AnswerData):
        ...

    write_tagged(stream, data)
    data = read_tagged(stream)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Dict, Optional, Type

from .errors import DecodeError, InvalidArgumentError
from .streams import read_string, write_string


@dataclass(frozen=True)
class UncastData:
    """The plain text form of an answer value."""
    value: str

    def __str__(self) -> str:
        return self.value


class AnswerData(ABC):
    """Capability interface shared by all answer-value kinds."""

    type_tag: Optional[str] = None  # Set by register_answer_type

    @abstractmethod
    def clone(self) -> "AnswerData":
        """Deep copy."""

    @abstractmethod
    def display_text(self) -> str:
        """Human-readable text; also the uncast form."""

    @abstractmethod
    def get_value(self) -> Any:
        """Copy of the value in its plain representation."""

    @abstractmethod
    def set_value(self, value: Any):
        """Replace the whole value."""

    @abstractmethod
    def read_external(self, stream: BinaryIO):
        """Replace the value with one decoded from a binary stream."""

    @abstractmethod
    def write_external(self, stream: BinaryIO):
        """Encode the value onto a binary stream."""

    @abstractmethod
    def uncast(self) -> UncastData:
        ...

    @abstractmethod
    def cast(self, data: UncastData) -> "AnswerData":
        """Build a new value of this kind from its uncast text."""

    @abstractmethod
    def to_boolean(self) -> bool:
        ...

    @abstractmethod
    def to_numeric(self) -> float:
        ...

    def __str__(self) -> str:
        return self.display_text()


_REGISTRY: Dict[str, Type[AnswerData]] = {}


def register_answer_type(tag: str) -> Callable[[Type[AnswerData]], Type[AnswerData]]:
    """Class decorator adding an answer kind to the factory table."""
    def decorator(cls: Type[AnswerData]) -> Type[AnswerData]:
        if tag in _REGISTRY:
            raise InvalidArgumentError(
                f"Answer type tag {tag!r} already registered to {_REGISTRY[tag].__name__}"
            )
        _REGISTRY[tag] = cls
        cls.type_tag = tag
        return cls
    return decorator


def registered_tags() -> list:
    return sorted(_REGISTRY)


def create_answer(tag: str) -> AnswerData:
    """Create an empty answer value of the kind registered under tag."""
    try:
        cls = _REGISTRY[tag]
    except KeyError:
        raise InvalidArgumentError(f"Unknown answer type tag: {tag!r}") from None
    return cls()


def write_tagged(stream: BinaryIO, data: AnswerData):
    """Write the kind tag followed by the value's own record."""
    tag = type(data).type_tag
    if tag is None or _REGISTRY.get(tag) is not type(data):
        raise InvalidArgumentError(f"{type(data).__name__} is not a registered answer type")
    write_string(stream, tag)
    data.write_external(stream)


def read_tagged(stream: BinaryIO) -> AnswerData:
    """Read a record written by write_tagged."""
    tag = read_string(stream)
    if tag not in _REGISTRY:
        raise DecodeError(f"Unknown answer type tag in stream: {tag!r}")
    data = create_answer(tag)
    data.read_external(stream)
    return data
