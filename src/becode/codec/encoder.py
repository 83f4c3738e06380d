"""Bencode encoder.

This module provides the serialize() function that converts a Value tree to
bencoded bytes. Output depends only on the value and the options, so equal
inputs always produce byte-identical output.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any, Iterator

from ..exceptions import EncodeError, ErrorKind
from ..models.config import EncoderConfig
from ..models.value import ByteString, Dictionary, Float, Integer, List, Value

logger = logging.getLogger(__name__)


def float_literal(value: float) -> str:
    """Shortest round-tripping decimal for a finite float, without exponent.

    The wire format ends a float token at the first 'e', so scientific
    notation is expanded to positional digits.

    Example:
        >>> float_literal(1e-7)
        '0.0000001'
        >>> float_literal(2.0)
        '2.0'
    """
    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text


def child_entries(
    container: List | Dictionary, canonical_key_order: bool
) -> Iterator[tuple[bytes | None, Value]]:
    """Children of a container in output order, paired with their key.

    List items are paired with None.
    """
    if isinstance(container, List):
        return ((None, item) for item in container.items)
    entries = container.items()
    if canonical_key_order:
        # Keys are unique, so comparing keys alone gives a total order
        entries = sorted(entries, key=lambda entry: entry[0])
    return iter(entries)


class Encoder:
    """Accumulates the encoding of one value tree.

    Containers are walked with an explicit stack of child iterators, so
    arbitrarily deep trees encode without touching the interpreter's
    recursion limit.

    Args:
        config: Encoder options
    """

    def __init__(self, config: EncoderConfig) -> None:
        self._config = config
        self._out = bytearray()

    def to_bytes(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._out)

    def write_value(self, value: Value) -> None:
        """Append the encoding of ``value``.

        Raises:
            EncodeError: If a Float cannot be encoded under the current options
            TypeError: If ``value`` is not a Value variant
        """
        pending: list[Iterator[tuple[bytes | None, Value]]] = [iter(((None, value),))]
        while pending:
            entry = next(pending[-1], None)
            if entry is None:
                pending.pop()
                if pending:
                    self._out += b"e"
                continue

            key, item = entry
            if key is not None:
                self.write_byte_string(key)

            if isinstance(item, ByteString):
                self.write_byte_string(item.value)
            elif isinstance(item, Integer):
                self._out += b"i%de" % item.value
            elif isinstance(item, Float):
                self.write_float(item.value)
            elif isinstance(item, List):
                self._out += b"l"
                pending.append(child_entries(item, self._config.canonical_key_order))
            elif isinstance(item, Dictionary):
                self._out += b"d"
                pending.append(child_entries(item, self._config.canonical_key_order))
            else:
                raise TypeError(f"Cannot encode {type(item).__name__}: not a becode Value")

    def write_byte_string(self, data: bytes) -> None:
        self._out += b"%d:" % len(data)
        self._out += data

    def write_float(self, value: float) -> None:
        if not self._config.allow_float_extension:
            raise EncodeError(
                ErrorKind.FLOAT_EXTENSION_DISALLOWED,
                len(self._out),
                f"Float {value!r} requires allow_float_extension=True",
            )
        if not math.isfinite(value):
            raise EncodeError(
                ErrorKind.NON_FINITE_FLOAT,
                len(self._out),
                f"Float {value!r} has no textual encoding",
            )
        self._out += b"f"
        self._out += float_literal(value).encode("ascii")
        self._out += b"e"


def serialize(value: Value, config: EncoderConfig | None = None, **options: Any) -> bytes:
    """Serialize a Value tree to bencoded bytes.

    Args:
        value: Value tree to encode
        config: Encoder options (defaults are used if None)
        **options: Individual EncoderConfig fields overriding ``config``

    Returns:
        Bencoded representation

    Raises:
        ConfigError: If the options are invalid
        EncodeError: If the tree holds a Float while the float extension is
            disabled, or a NaN/infinite Float
        TypeError: If the tree contains something other than Values

    Examples:
        ```python
        from becode import Dictionary, Float, Integer, serialize

        d = Dictionary({b"spam": Integer(1), b"cow": Integer(2)})

        serialize(d)                             # b"d3:cowi2e4:spami1ee"
        serialize(d, canonical_key_order=False)  # b"d4:spami1e3:cowi2ee"
        serialize(Float(0.5), allow_float_extension=True)  # b"f0.5e"
        ```
    """
    resolved = EncoderConfig.resolve(config, **options)

    encoder = Encoder(resolved)
    try:
        encoder.write_value(value)
    except EncodeError as e:
        logger.debug("encode failed: %s at offset %d", e.kind.value, e.offset)
        raise

    return encoder.to_bytes()
