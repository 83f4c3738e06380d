"""Exception hierarchy for becode.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BecodeError for easy catching of any becode-specific error.
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Machine-readable reason attached to every codec error."""

    INVALID_TOKEN = "invalid token"
    UNEXPECTED_END = "unexpected end"
    INSUFFICIENT_DATA = "insufficient data"
    KEY_TYPE_ERROR = "key type error"
    DUPLICATE_KEY = "duplicate key"
    NESTING_TOO_DEEP = "nesting too deep"
    OVERFLOW = "overflow"
    MALFORMED_NUMBER = "malformed number"
    FLOAT_EXTENSION_DISALLOWED = "float extension disallowed"
    TRAILING_DATA = "trailing data"
    NON_FINITE_FLOAT = "non-finite float"


class BecodeError(Exception):
    """Base exception for all becode errors."""

    pass


class ConfigError(BecodeError):
    """Raised when decoder or encoder options are invalid.

    Examples:
        - Unknown option name
        - max_nesting_depth below 1
        - Option value of the wrong type
    """

    pass


class DecodeError(BecodeError):
    """Raised when a buffer is not valid bencode.

    Decoding stops at the first problem, so there is never a partial result.

    Attributes:
        kind: What went wrong
        offset: Byte offset in the input where the problem was detected
        expected: Short description of what the decoder was looking for
        found: Short description of what it saw instead

    Examples:
        - Leading zero in an integer (``i03e``)
        - Byte string length running past the end of the buffer
        - Dictionary key that is not a byte string
        - Bytes left over after the top-level element
    """

    def __init__(self, kind: ErrorKind, offset: int, expected: str, found: str) -> None:
        self.kind = kind
        self.offset = offset
        self.expected = expected
        self.found = found
        super().__init__(f"{kind.value} at offset {offset}: expected {expected}, found {found}")


class EncodeError(BecodeError):
    """Raised when a value tree cannot be serialized.

    Attributes:
        kind: What went wrong
        offset: Number of output bytes produced before the problem was detected
        detail: Human-readable explanation

    Examples:
        - Float value with the float extension disabled
        - NaN or infinite float
    """

    def __init__(self, kind: ErrorKind, offset: int, detail: str) -> None:
        self.kind = kind
        self.offset = offset
        self.detail = detail
        super().__init__(f"{kind.value} at offset {offset}: {detail}")
