"""Bencode codec for becode.

This module provides the decoder and encoder that translate between bencoded
bytes and Value trees.
"""

from __future__ import annotations

from .decoder import Decoder, decode, decode_prefix
from .encoder import Encoder, float_literal, serialize

__all__ = [
    "decode",
    "decode_prefix",
    "serialize",
    "Decoder",
    "Encoder",
    "float_literal",
]
