# File: tests/core/test_opening_types.py
"""Tests for core opening types and vector helpers."""

import math

import pytest

from wall_opening_generator.core.errors import (
    DocumentNotFoundError,
    InvalidSegment,
    OpeningGeneratorError,
    SetupError,
)
from wall_opening_generator.core.geometry import (
    distance_3d,
    is_finite_vector,
    is_unit_vector,
    normalize_vector,
)
from wall_opening_generator.core.opening_types import (
    DuctRecord,
    DuctShape,
    ElementKey,
    PlacementRequest,
    Segment,
)


class TestElementKey:
    """Test compound wall identity."""

    def test_value_equality(self):
        """Keys with the same parts are equal and hash the same."""
        assert ElementKey(5) == ElementKey(5)
        assert hash(ElementKey(5, 9)) == hash(ElementKey(5, 9))

    def test_container_distinguishes(self):
        """Same local id in different documents is a different wall."""
        assert ElementKey(5) != ElementKey(5, container=9)
        assert ElementKey(5, container=9) != ElementKey(5, container=10)

    def test_is_linked(self):
        assert ElementKey(5).is_linked is False
        assert ElementKey(5, container=9).is_linked is True

    def test_str(self):
        assert str(ElementKey(5)) == "5"
        assert str(ElementKey(5, container=9)) == "9:5"

    def test_dict_round_trip(self):
        key = ElementKey("a", container="link")
        assert ElementKey.from_dict(key.to_dict()) == key


class TestSegment:
    """Test segment helpers."""

    def test_point_at(self):
        segment = Segment((1.0, 2.0, 3.0), (0.0, 1.0, 0.0), 5.0)
        assert segment.point_at(2.5) == (1.0, 4.5, 3.0)

    def test_end(self):
        segment = Segment((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), 4.0)
        assert segment.end == (0.0, 0.0, 4.0)


class TestDuctRecord:
    """Test duct record parsing."""

    def test_from_dict_with_point_mappings(self):
        duct = DuctRecord.from_dict({
            "id": "D1",
            "start": {"x": 0, "y": 0, "z": 1},
            "end": {"x": 10, "y": 0, "z": 1},
            "diameter": 0.3,
        })

        assert duct.start == (0.0, 0.0, 1.0)
        assert duct.end == (10.0, 0.0, 1.0)
        assert duct.shape == DuctShape.ROUND

    def test_from_dict_with_point_lists(self):
        duct = DuctRecord.from_dict({
            "id": 7,
            "start": [0, 0, 0],
            "end": [0, 5, 0],
            "shape": "rectangular",
            "width": 0.4,
            "height": 0.2,
        })

        assert duct.end == (0.0, 5.0, 0.0)
        assert duct.shape == DuctShape.RECTANGULAR
        assert duct.diameter is None

    def test_to_dict(self):
        duct = DuctRecord(id="D1", start=(0, 0, 0), end=(1, 0, 0), diameter=0.2)
        data = duct.to_dict()

        assert data["shape"] == "round"
        assert data["end"] == {"x": 1, "y": 0, "z": 0}


class TestPlacementRequest:

    def test_to_dict(self):
        request = PlacementRequest((4.0, 0.0, 0.0), ElementKey(1), "L1", 0.3, 0.3)
        data = request.to_dict()

        assert data["insertion_point"] == {"x": 4.0, "y": 0.0, "z": 0.0}
        assert data["host_key"] == {"local": 1, "container": None}
        assert data["width"] == data["height"] == 0.3


class TestGeometry:
    """Test vector helpers."""

    def test_normalize(self):
        assert normalize_vector((3.0, 0.0, 4.0)) == pytest.approx((0.6, 0.0, 0.8))

    def test_normalize_zero_vector(self):
        """Zero vector stays zero instead of dividing by zero."""
        assert normalize_vector((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)

    def test_is_unit_vector(self):
        assert is_unit_vector((1.0, 0.0, 0.0))
        assert not is_unit_vector((2.0, 0.0, 0.0))

    def test_is_finite_vector(self):
        assert is_finite_vector((1.0, 2.0, 3.0))
        assert not is_finite_vector((math.nan, 0.0, 0.0))
        assert not is_finite_vector((0.0, math.inf, 0.0))

    def test_distance(self):
        assert distance_3d((0, 0, 0), (1, 2, 2)) == pytest.approx(3.0)


class TestErrors:
    """Test error taxonomy."""

    def test_codes(self):
        assert InvalidSegment("x").code == "invalid_segment"
        assert DocumentNotFoundError("x").code == "document_not_found"

    def test_hierarchy(self):
        assert issubclass(DocumentNotFoundError, SetupError)
        assert issubclass(SetupError, OpeningGeneratorError)

    def test_extra_defaults_to_empty(self):
        error = InvalidSegment("bad")
        assert error.message == "bad"
        assert error.extra == {}
