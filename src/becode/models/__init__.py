"""Value tree, conversion helpers and codec options."""

from __future__ import annotations

from .config import CodecConfig, DecoderConfig, EncoderConfig
from .convert import from_python, to_python
from .value import ByteString, Dictionary, Float, Integer, List, Value

__all__ = [
    "Value",
    "Integer",
    "Float",
    "ByteString",
    "List",
    "Dictionary",
    "CodecConfig",
    "DecoderConfig",
    "EncoderConfig",
    "from_python",
    "to_python",
]
