"""Unit tests for encoded size calculation."""

from __future__ import annotations

import pytest

from becode import (
    ByteString,
    Dictionary,
    EncodeError,
    ErrorKind,
    Float,
    Integer,
    List,
    encoded_size,
    serialize,
)


class TestEncodedSize:
    """Test size matches serialized length."""

    @pytest.mark.parametrize(
        "value",
        [
            ByteString(b""),
            ByteString(b"x" * 1234),
            Integer(0),
            Integer(-(2**63)),
            List([]),
            List([Integer(1), List([ByteString(b"ab")])]),
            Dictionary({b"spam": Integer(1), b"cow": Dictionary({})}),
        ],
    )
    def test_matches_serialize(self, value: object) -> None:
        """Test size of assorted trees."""
        assert encoded_size(value) == len(serialize(value))  # type: ignore[arg-type]

    def test_sample(self, sample_value: Dictionary, sample_buffer: bytes) -> None:
        """Test nested sample."""
        assert encoded_size(sample_value) == len(sample_buffer)

    def test_deep_nesting(self, deep_list: List, deep_nesting: int) -> None:
        """Test trees deeper than the interpreter recursion limit."""
        assert encoded_size(deep_list) == 2 * deep_nesting

    def test_float(self) -> None:
        """Test float literal length."""
        value = List([Float(1e-7), Float(-2.5)])
        assert encoded_size(value, allow_float_extension=True) == len(
            serialize(value, allow_float_extension=True)
        )


class TestEncodedSizeErrors:
    """Test size calculation fails like serialize."""

    def test_float_disallowed(self) -> None:
        """Test float without extension, with offset."""
        with pytest.raises(EncodeError) as exc_info:
            encoded_size(Dictionary({b"a": Integer(1), b"b": Float(0.5)}))
        assert exc_info.value.kind is ErrorKind.FLOAT_EXTENSION_DISALLOWED
        assert exc_info.value.offset == len(b"d1:ai1e1:b")

    def test_non_finite(self) -> None:
        """Test NaN rejected."""
        with pytest.raises(EncodeError) as exc_info:
            encoded_size(Float(float("nan")), allow_float_extension=True)
        assert exc_info.value.kind is ErrorKind.NON_FINITE_FLOAT
