"""Encoded size calculation utilities.

This module provides a function to calculate the encoded size of a value tree
without actually encoding it.
"""

from __future__ import annotations

import math
from typing import Any, Iterator

from ..codec.encoder import child_entries, float_literal
from ..exceptions import EncodeError, ErrorKind
from ..models.config import EncoderConfig
from ..models.value import ByteString, Dictionary, Float, Integer, List, Value


def encoded_size(value: Value, config: EncoderConfig | None = None, **options: Any) -> int:
    """Calculate the number of bytes serialize() would produce.

    Key order does not change the size, but Float handling does: the same
    options that make serialize() fail make this fail too.

    Args:
        value: Value tree to measure
        config: Encoder options (defaults are used if None)
        **options: Individual EncoderConfig fields overriding ``config``

    Returns:
        Size in bytes

    Raises:
        ConfigError: If the options are invalid
        EncodeError: If the tree cannot be encoded under these options

    Example:
        >>> encoded_size(Dictionary({b"cow": Integer(2)}))
        10
    """
    resolved = EncoderConfig.resolve(config, **options)
    return _size(value, resolved)


def _byte_string_size(length: int) -> int:
    return len(str(length)) + 1 + length


def _size(value: Value, config: EncoderConfig) -> int:
    """Walk the tree in output order, keeping a running total as the offset."""
    total = 0
    pending: list[Iterator[tuple[bytes | None, Value]]] = [iter(((None, value),))]
    while pending:
        entry = next(pending[-1], None)
        if entry is None:
            pending.pop()
            if pending:
                total += 1
            continue

        key, item = entry
        if key is not None:
            total += _byte_string_size(len(key))

        if isinstance(item, ByteString):
            total += _byte_string_size(len(item.value))
        elif isinstance(item, Integer):
            total += len(str(item.value)) + 2
        elif isinstance(item, Float):
            total += _float_size(item.value, config, total)
        elif isinstance(item, (List, Dictionary)):
            total += 1
            pending.append(child_entries(item, config.canonical_key_order))
        else:
            raise TypeError(f"Cannot measure {type(item).__name__}: not a becode Value")
    return total


def _float_size(value: float, config: EncoderConfig, offset: int) -> int:
    if not config.allow_float_extension:
        raise EncodeError(
            ErrorKind.FLOAT_EXTENSION_DISALLOWED,
            offset,
            f"Float {value!r} requires allow_float_extension=True",
        )
    if not math.isfinite(value):
        raise EncodeError(
            ErrorKind.NON_FINITE_FLOAT, offset, f"Float {value!r} has no textual encoding"
        )
    return len(float_literal(value)) + 2
