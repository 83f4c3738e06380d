"""Value tree produced by decoding and consumed by encoding.

Five frozen variants make up a closed union: Integer, Float, ByteString, List
and Dictionary. Instances never change after construction and hold no
reference to the buffer they were parsed from.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


@dataclass(frozen=True)
class Integer:
    """Signed 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Integer requires int, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"Integer {self.value} outside signed 64-bit range")

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class Float:
    """IEEE binary64 value, only encodable with the float extension enabled."""

    value: float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"Float requires float, got {type(self.value).__name__}")
        object.__setattr__(self, "value", float(self.value))

    def __float__(self) -> float:
        return self.value


@dataclass(frozen=True)
class ByteString:
    """Raw octets. Not assumed to be text."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(f"ByteString requires bytes, got {type(self.value).__name__}")
        # Always hold a private copy
        object.__setattr__(self, "value", bytes(self.value))

    def __bytes__(self) -> bytes:
        return self.value

    def __len__(self) -> int:
        return len(self.value)


@dataclass(frozen=True)
class List:
    """Ordered sequence of values."""

    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, VALUE_TYPES):
                raise TypeError(f"List items must be Values, got {type(item).__name__}")
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]


@dataclass(frozen=True)
class Dictionary:
    """Insertion-ordered mapping from raw key bytes to values.

    Accepts either a mapping or an iterable of ``(key, value)`` pairs. Keys may
    be given as bytes, bytearray or ByteString and are stored as bytes. A pair
    iterable containing the same key twice is rejected.

    Equality compares contents, not insertion order.

    Example:
        >>> d = Dictionary({b"spam": Integer(1), b"cow": Integer(2)})
        >>> list(d.keys())
        [b'spam', b'cow']
        >>> d[b"cow"]
        Integer(value=2)
    """

    entries: Mapping[bytes, Value] = field(default_factory=dict)

    def __post_init__(self) -> None:
        source: Any = self.entries
        pairs = source.items() if isinstance(source, Mapping) else source

        entries: dict[bytes, Value] = {}
        for key, item in pairs:
            raw_key = _key_bytes(key)
            if raw_key in entries:
                raise ValueError(f"Duplicate dictionary key {raw_key!r}")
            if not isinstance(item, VALUE_TYPES):
                raise TypeError(
                    f"Dictionary value for {raw_key!r} must be a Value, got {type(item).__name__}"
                )
            entries[raw_key] = item

        object.__setattr__(self, "entries", MappingProxyType(entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.entries)

    def __getitem__(self, key: bytes) -> Value:
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def keys(self) -> Iterable[bytes]:
        return self.entries.keys()

    def items(self) -> Iterable[tuple[bytes, Value]]:
        return self.entries.items()

    def get(self, key: bytes, default: Value | None = None) -> Value | None:
        return self.entries.get(key, default)


def _key_bytes(key: object) -> bytes:
    if isinstance(key, ByteString):
        return key.value
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"Dictionary keys must be byte strings, got {type(key).__name__}")


Value = Union[Integer, Float, ByteString, List, Dictionary]

VALUE_TYPES = (Integer, Float, ByteString, List, Dictionary)
