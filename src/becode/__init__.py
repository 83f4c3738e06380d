"""becode: Bencode Codec

A Python library for decoding and encoding bencode, the compact
self-describing format used for hierarchical data exchange (integers, byte
strings, lists, dictionaries), with an optional extension for floats.

Key Features:
- Typed, immutable value tree (no list/dictionary guessing)
- Single-pass decoder with byte offsets on every error
- Deterministic encoder with canonical (sorted) dictionary keys
- Bounded nesting depth against hostile input
- Optional f<literal>e float extension

Quick Start:
    >>> from becode import Dictionary, Integer, decode, serialize
    >>>
    >>> value = decode(b"d3:cow3:moo4:spami1ee")
    >>> value[b"spam"]
    Integer(value=1)
    >>> serialize(Dictionary({b"spam": Integer(1), b"cow": Integer(2)}))
    b'd3:cowi2e4:spami1ee'

Native Python objects:
    >>> from becode import decode_native, encode
    >>> encode({"spam": [1, 2]})
    b'd4:spamli1ei2eee'
    >>> decode_native(b"d4:spamli1ei2eee")
    {b'spam': [1, 2]}
"""

from __future__ import annotations

import logging
from typing import Any

from .codec import decode, decode_prefix, serialize
from .exceptions import BecodeError, ConfigError, DecodeError, EncodeError, ErrorKind
from .models import (
    ByteString,
    DecoderConfig,
    Dictionary,
    EncoderConfig,
    Float,
    Integer,
    List,
    Value,
    from_python,
    to_python,
)
from .utils import encoded_size

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"


def encode(obj: Any, config: EncoderConfig | None = None, **options: Any) -> bytes:
    """Bencode a native Python object (see from_python for the mapping).

    Raises:
        TypeError: If the object has no bencode representation
        ConfigError: If the options are invalid
        EncodeError: If the resulting tree cannot be serialized
    """
    return serialize(from_python(obj), config, **options)


def decode_native(buffer: bytes, config: DecoderConfig | None = None, **options: Any) -> Any:
    """Decode a buffer straight to native Python objects (see to_python).

    Raises:
        ConfigError: If the options are invalid
        DecodeError: If the buffer is not valid bencode
    """
    return to_python(decode(buffer, config, **options))


__all__ = [
    # Core API
    "decode",
    "decode_prefix",
    "serialize",
    # Native objects
    "encode",
    "decode_native",
    "from_python",
    "to_python",
    # Value tree
    "Value",
    "Integer",
    "Float",
    "ByteString",
    "List",
    "Dictionary",
    # Options
    "DecoderConfig",
    "EncoderConfig",
    # Exceptions
    "BecodeError",
    "ConfigError",
    "DecodeError",
    "EncodeError",
    "ErrorKind",
    # Sizing
    "encoded_size",
    # Version
    "__version__",
]
