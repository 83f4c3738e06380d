"""Unit tests for native object conversion."""

from __future__ import annotations

import pytest

from becode import (
    ByteString,
    DecodeError,
    Dictionary,
    EncodeError,
    Float,
    Integer,
    List,
    decode_native,
    encode,
    from_python,
    serialize,
    to_python,
)


class TestFromPython:
    """Test native objects to Value trees."""

    def test_scalars(self) -> None:
        """Test int, float and bytes."""
        assert from_python(7) == Integer(7)
        assert from_python(0.5) == Float(0.5)
        assert from_python(b"x") == ByteString(b"x")
        assert from_python(bytearray(b"x")) == ByteString(b"x")

    def test_text(self) -> None:
        """Test str encoded with the given encoding."""
        assert from_python("café") == ByteString(b"caf\xc3\xa9")
        assert from_python("café", encoding="latin-1") == ByteString(b"caf\xe9")

    def test_text_disabled(self) -> None:
        """Test str rejected without an encoding."""
        with pytest.raises(TypeError):
            from_python("spam", encoding=None)
        with pytest.raises(TypeError):
            from_python({"spam": b"x"}, encoding=None)

    def test_containers_are_structural(self) -> None:
        """Test lists stay lists even when a dict has numeric keys."""
        assert from_python([1, (2, 3)]) == List([Integer(1), List([Integer(2), Integer(3)])])
        assert from_python({"0": 1, "1": 2}) == Dictionary({b"0": Integer(1), b"1": Integer(2)})

    def test_values_pass_through(self) -> None:
        """Test existing Values are kept."""
        value = Integer(3)
        assert from_python(value) is value
        assert from_python([value]) == List([value])

    @pytest.mark.parametrize("obj", [True, None, {1, 2}, object()])
    def test_unsupported(self, obj: object) -> None:
        """Test objects without a bencode form."""
        with pytest.raises(TypeError):
            from_python(obj)

    def test_non_string_keys(self) -> None:
        """Test integer keys rejected."""
        with pytest.raises(TypeError):
            from_python({1: b"x"})

    def test_colliding_keys(self) -> None:
        """Test str and bytes keys that encode to the same bytes."""
        with pytest.raises(ValueError):
            from_python({"a": 1, b"a": 2})

    def test_integer_out_of_range(self) -> None:
        """Test big ints are not truncated."""
        with pytest.raises(ValueError):
            from_python(2**64)

    def test_deep_nesting(self, deep_nesting: int) -> None:
        """Test native trees deeper than the interpreter recursion limit."""
        native: object = {"k": [1]}
        for _ in range(deep_nesting - 1):
            native = [native]
        data = serialize(from_python(native))
        assert data == b"l" * (deep_nesting - 1) + b"d1:kli1eee" + b"e" * (deep_nesting - 1)


class TestToPython:
    """Test Value trees to native objects."""

    def test_round_trip(self, sample_value: Dictionary) -> None:
        """Test nested conversion."""
        native = to_python(sample_value)
        assert native[b"info"][b"length"] == 1024
        assert native[b"tags"] == [b"spam", b"eggs"]
        assert from_python(native) == sample_value

    def test_deep_nesting(self, deep_list: List, deep_nesting: int) -> None:
        """Test trees deeper than the interpreter recursion limit."""
        native = to_python(deep_list)
        for _ in range(deep_nesting - 1):
            assert isinstance(native, list)
            assert len(native) == 1
            native = native[0]
        assert native == []

    def test_not_a_value(self) -> None:
        """Test native input rejected."""
        with pytest.raises(TypeError):
            to_python([1])  # type: ignore[arg-type]


class TestShortcuts:
    """Test package-level encode/decode_native."""

    def test_encode(self) -> None:
        """Test native encode with canonical ordering."""
        assert encode({"spam": 1, "cow": 2}) == b"d3:cowi2e4:spami1ee"
        assert encode({"spam": 1, "cow": 2}, canonical_key_order=False) == b"d4:spami1e3:cowi2ee"

    def test_encode_float_requires_extension(self) -> None:
        """Test floats still go through the extension check."""
        with pytest.raises(EncodeError):
            encode([1.5])
        assert encode([1.5], allow_float_extension=True) == b"lf1.5ee"

    def test_decode_native(self) -> None:
        """Test native decode."""
        assert decode_native(b"d3:cowl3:mooi1eee") == {b"cow": [b"moo", 1]}

    def test_decode_native_errors(self) -> None:
        """Test decode errors propagate."""
        with pytest.raises(DecodeError):
            decode_native(b"i03e")
