"""Tests for the answer interface and tag-keyed factory."""

import io

import pytest

from geotrace import (
    AnswerData,
    GeoPointData,
    GeoTraceData,
    UncastData,
    create_answer,
    read_tagged,
    register_answer_type,
    registered_tags,
    trace_from_vectors,
    write_tagged,
)
from geotrace.errors import DecodeError, InvalidArgumentError
from geotrace.streams import write_string


class TestFactory:
    """Test the registration table."""

    def test_builtin_kinds(self):
        assert {"geopoint", "geotrace"} <= set(registered_tags())

    def test_create(self):
        assert isinstance(create_answer("geotrace"), GeoTraceData)
        assert isinstance(create_answer("geopoint"), GeoPointData)
        assert len(create_answer("geotrace")) == 0

    def test_unknown_tag(self):
        with pytest.raises(InvalidArgumentError):
            create_answer("geoshape-unknown")

    def test_duplicate_tag(self):
        with pytest.raises(InvalidArgumentError):
            @register_answer_type("geotrace")
            class Another(GeoTraceData):
                pass

    def test_interface(self):
        """Both kinds are usable wherever an AnswerData is expected."""
        for tag in ("geopoint", "geotrace"):
            assert isinstance(create_answer(tag), AnswerData)


class TestTaggedRecords:
    """Test tag + record encoding."""

    def test_trace_round_trip(self):
        data = GeoTraceData(trace_from_vectors([[1, 2, 3, 4], [5, 6, 7, 8]], ["a", None]))
        buf = io.BytesIO()
        write_tagged(buf, data)
        buf.seek(0)
        decoded = read_tagged(buf)
        assert isinstance(decoded, GeoTraceData)
        assert decoded.get_value() == data.get_value()

    def test_point_round_trip(self):
        buf = io.BytesIO()
        write_tagged(buf, GeoPointData([1.5, 2.5, 3.5]))
        buf.seek(0)
        decoded = read_tagged(buf)
        assert isinstance(decoded, GeoPointData)
        assert decoded.display_text() == "1.5 2.5 3.5"

    def test_unknown_tag_in_stream(self):
        buf = io.BytesIO()
        write_string(buf, "nope")
        buf.seek(0)
        with pytest.raises(DecodeError):
            read_tagged(buf)

    def test_unregistered_subclass(self):
        class Unregistered(GeoTraceData):
            pass

        with pytest.raises(InvalidArgumentError):
            write_tagged(io.BytesIO(), Unregistered())


class TestUncastData:

    def test_str(self):
        assert str(UncastData("1 2 3 4 t")) == "1 2 3 4 t"
        assert UncastData("x") == UncastData("x")
