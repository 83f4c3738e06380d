"""Bencode decoder.

This module provides the decode() function that turns a byte buffer into a
Value tree in a single forward pass.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import DecodeError, ErrorKind
from ..models.config import DecoderConfig
from ..models.value import (
    INT64_MAX,
    INT64_MIN,
    ByteString,
    Dictionary,
    Float,
    Integer,
    List,
    Value,
)

logger = logging.getLogger(__name__)

_DIGITS = frozenset(b"0123456789")
_ZERO = ord("0")
_COLON = ord(":")
_END = ord("e")

# Lower-case 'e' ends the token, so only an upper-case exponent can appear
_FLOAT_LITERAL = re.compile(
    rb"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:E[+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)

# Longest decimal string that can still fit in 64 bits
_INT64_DIGITS = len(str(INT64_MAX))


def _describe(buffer: bytes, pos: int) -> str:
    if pos >= len(buffer):
        return "end of input"
    return repr(buffer[pos : pos + 1].decode("latin-1"))


def _decode_error(
    buffer: bytes, kind: ErrorKind, offset: int, expected: str, found: str | None = None
) -> DecodeError:
    """Build a DecodeError, describing the byte at ``offset`` unless ``found`` is given."""
    if found is None:
        found = _describe(buffer, offset)
    return DecodeError(kind, offset, expected, found)


@dataclass
class _Container:
    """A list or dictionary whose closing 'e' has not been read yet."""

    kind: str
    items: list[Value] = field(default_factory=list)
    entries: dict[bytes, Value] = field(default_factory=dict)
    # Dictionary key read but not yet paired with its value
    pending_key: bytes | None = None

    @property
    def awaiting_key(self) -> bool:
        return self.kind == "dictionary" and self.pending_key is None

    def add(self, value: Value) -> None:
        if self.kind == "list":
            self.items.append(value)
        else:
            assert self.pending_key is not None
            self.entries[self.pending_key] = value
            self.pending_key = None

    def build(self) -> Value:
        if self.kind == "list":
            return List(self.items)
        return Dictionary(self.entries)


class Decoder:
    """Single-pass decoder for one buffer.

    Open containers are kept on an explicit stack, so nesting depth is bounded
    only by ``max_nesting_depth`` and never by the interpreter's call stack.
    An instance holds the cursor for a single decode call and must not be
    reused or shared. Use decode() or decode_prefix() instead of creating one
    directly.

    Args:
        buffer: Complete input; copied so the result never aliases caller memory
        config: Decoder options
    """

    def __init__(self, buffer: bytes, config: DecoderConfig) -> None:
        self._buffer = bytes(buffer)
        self._config = config
        self._pos = 0
        self._depth = 0

    @property
    def position(self) -> int:
        """Offset of the next unread byte."""
        return self._pos

    def decode_element(self) -> Value:
        """Decode the element starting at the cursor."""
        stack: list[_Container] = []
        while True:
            top = stack[-1] if stack else None
            if top is not None and top.pending_key is None and self._at_end_marker(top.kind):
                self._pos += 1
                self._depth -= 1
                value = stack.pop().build()
            elif top is not None and top.awaiting_key:
                self._read_key(top)
                continue
            else:
                token_value = self._decode_token(stack)
                if token_value is None:
                    continue
                value = token_value

            if not stack:
                return value
            stack[-1].add(value)

    def _error(
        self, kind: ErrorKind, offset: int, expected: str, found: str | None = None
    ) -> DecodeError:
        return _decode_error(self._buffer, kind, offset, expected, found)

    def _decode_token(self, stack: list[_Container]) -> Value | None:
        """Decode a scalar, or open a container and return None."""
        buffer = self._buffer
        pos = self._pos
        if pos >= len(buffer):
            raise self._error(ErrorKind.UNEXPECTED_END, pos, "a value")

        token = buffer[pos]
        if token == ord("i"):
            return self._decode_integer()
        if token == ord("f"):
            return self._decode_float()
        if token in _DIGITS:
            return self._decode_byte_string()
        if token == ord("l"):
            self._enter_container()
            stack.append(_Container("list"))
            return None
        if token == ord("d"):
            self._enter_container()
            stack.append(_Container("dictionary"))
            return None
        raise self._error(ErrorKind.INVALID_TOKEN, pos, "one of 'i', 'l', 'd' or a digit")

    def _read_numeral(self) -> tuple[bytes, int]:
        """Consume a one-letter prefix and everything up to the next 'e'.

        Returns:
            The bytes between prefix and terminator, and their start offset
        """
        start = self._pos + 1
        end = self._buffer.find(b"e", start)
        if end == -1:
            raise self._error(ErrorKind.UNEXPECTED_END, len(self._buffer), "'e'")
        self._pos = end + 1
        return self._buffer[start:end], start

    def _decode_integer(self) -> Integer:
        numeral, start = self._read_numeral()

        negative = numeral[:1] == b"-"
        digits_start = start + 1 if negative else start
        digits = numeral[1:] if negative else numeral

        if not digits:
            raise self._error(ErrorKind.MALFORMED_NUMBER, digits_start, "a digit")
        for index, byte in enumerate(digits):
            if byte not in _DIGITS:
                raise self._error(ErrorKind.MALFORMED_NUMBER, digits_start + index, "a digit")
        if digits[0] == _ZERO and len(digits) > 1:
            raise self._error(
                ErrorKind.MALFORMED_NUMBER, digits_start, "no leading zero", repr(numeral.decode())
            )
        if negative and digits == b"0":
            raise self._error(
                ErrorKind.MALFORMED_NUMBER, start, "a non-zero negative integer", "'-0'"
            )

        if len(digits) > _INT64_DIGITS:
            raise self._error(
                ErrorKind.OVERFLOW, start, "a signed 64-bit integer", f"{len(digits)} digits"
            )
        value = -int(digits) if negative else int(digits)
        if not INT64_MIN <= value <= INT64_MAX:
            raise self._error(ErrorKind.OVERFLOW, start, "a signed 64-bit integer", str(value))

        return Integer(value)

    def _decode_float(self) -> Float:
        if not self._config.allow_float_extension:
            raise self._error(
                ErrorKind.FLOAT_EXTENSION_DISALLOWED,
                self._pos,
                "float extension to be enabled",
                "'f'",
            )

        numeral, start = self._read_numeral()
        if not numeral:
            raise self._error(ErrorKind.MALFORMED_NUMBER, start, "a float literal", "'e'")
        if _FLOAT_LITERAL.fullmatch(numeral) is None:
            found = repr(numeral.decode("latin-1"))
            raise self._error(ErrorKind.MALFORMED_NUMBER, start, "a float literal", found)

        return Float(float(numeral))

    def _enter_container(self) -> None:
        self._depth += 1
        if self._depth > self._config.max_nesting_depth:
            raise self._error(
                ErrorKind.NESTING_TOO_DEEP,
                self._pos,
                f"at most {self._config.max_nesting_depth} nested containers",
                f"depth {self._depth}",
            )
        # Skip the 'l' or 'd'
        self._pos += 1

    def _at_end_marker(self, what: str) -> bool:
        if self._pos >= len(self._buffer):
            raise self._error(ErrorKind.UNEXPECTED_END, self._pos, f"'e' closing the {what}")
        return self._buffer[self._pos] == _END

    def _read_key(self, container: _Container) -> None:
        key_offset = self._pos
        if self._buffer[key_offset] not in _DIGITS:
            raise self._error(ErrorKind.KEY_TYPE_ERROR, key_offset, "a byte string key")
        key = self._decode_byte_string().value

        if key in container.entries and self._config.reject_duplicate_keys:
            raise self._error(
                ErrorKind.DUPLICATE_KEY, key_offset, "a unique key", f"repeated {key!r}"
            )
        if self._pos < len(self._buffer) and self._buffer[self._pos] == _END:
            raise self._error(ErrorKind.INVALID_TOKEN, self._pos, f"a value for key {key!r}")
        container.pending_key = key

    def _decode_byte_string(self) -> ByteString:
        buffer = self._buffer
        start = self._pos
        pos = start
        while pos < len(buffer) and buffer[pos] in _DIGITS:
            pos += 1

        if pos >= len(buffer):
            raise self._error(ErrorKind.UNEXPECTED_END, pos, "':' after byte string length")
        if buffer[pos] != _COLON:
            raise self._error(
                ErrorKind.MALFORMED_NUMBER, pos, "a digit or ':' in byte string length"
            )

        length_field = buffer[start:pos]
        if length_field[0] == _ZERO and len(length_field) > 1:
            found = repr(length_field.decode("ascii"))
            raise self._error(ErrorKind.MALFORMED_NUMBER, start, "no leading zero", found)

        data_start = pos + 1
        remaining = len(buffer) - data_start
        # A length with more digits than the buffer size can never be satisfied
        if len(length_field) > len(str(len(buffer))) or int(length_field) > remaining:
            raise self._error(
                ErrorKind.INSUFFICIENT_DATA,
                data_start,
                f"{length_field.decode('ascii')} bytes",
                f"{remaining} bytes",
            )

        end = data_start + int(length_field)
        self._pos = end
        return ByteString(buffer[data_start:end])


def _run(buffer: bytes, config: DecoderConfig, whole: bool) -> tuple[Value, int]:
    try:
        if not buffer:
            raise _decode_error(buffer, ErrorKind.INSUFFICIENT_DATA, 0, "a value")
        decoder = Decoder(buffer, config)
        value = decoder.decode_element()

        end = decoder.position
        if whole and end != len(buffer) and not config.allow_trailing_data:
            raise _decode_error(buffer, ErrorKind.TRAILING_DATA, end, "end of input")
    except DecodeError as e:
        logger.debug("decode failed: %s at offset %d", e.kind.value, e.offset)
        raise

    return value, end


def decode(buffer: bytes, config: DecoderConfig | None = None, **options: Any) -> Value:
    """Decode a complete bencoded buffer to a Value tree.

    Args:
        buffer: Bencoded bytes (bytes, bytearray or memoryview)
        config: Decoder options (defaults are used if None)
        **options: Individual DecoderConfig fields overriding ``config``

    Returns:
        Decoded value

    Raises:
        ConfigError: If the options are invalid
        DecodeError: If the buffer is not valid bencode, contains a disallowed
            float, nests too deeply, or has trailing bytes

    Examples:
        ```python
        from becode import decode, ByteString, Integer, List

        decode(b"i42e")                 # Integer(42)
        decode(b"l4:spam4:eggse")       # List([ByteString(b"spam"), ByteString(b"eggs")])
        decode(b"f1.5e", allow_float_extension=True)
        decode(b"i1ei2e", allow_trailing_data=True)   # Integer(1)
        ```
    """
    resolved = DecoderConfig.resolve(config, **options)
    value, _ = _run(bytes(buffer), resolved, whole=True)
    return value


def decode_prefix(
    buffer: bytes, config: DecoderConfig | None = None, **options: Any
) -> tuple[Value, int]:
    """Decode the first element of a buffer and report where it ended.

    Bytes after the element are never an error here, whatever
    ``allow_trailing_data`` says. Useful for buffers holding several
    concatenated messages.

    Args:
        buffer: Bencoded bytes
        config: Decoder options (defaults are used if None)
        **options: Individual DecoderConfig fields overriding ``config``

    Returns:
        Tuple of (decoded value, offset one past the element)

    Raises:
        ConfigError: If the options are invalid
        DecodeError: If the first element is not valid bencode

    Example:
        >>> decode_prefix(b"i1e4:spam")
        (Integer(value=1), 3)
    """
    resolved = DecoderConfig.resolve(config, **options)
    return _run(bytes(buffer), resolved, whole=False)
