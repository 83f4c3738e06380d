"""Conversion between native Python objects and Value trees.

The mapping is purely structural: a list is always a List and a mapping is
always a Dictionary. Nothing is inferred from key shape.

Native     | Value
---------- | ----------
int        | Integer
float      | Float
bytes      | ByteString
str        | ByteString (encoded, only if an encoding is given)
list/tuple | List
Mapping    | Dictionary
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from .value import VALUE_TYPES, ByteString, Dictionary, Float, Integer, List, Value


@dataclass
class _Pending:
    """A native container whose children are still being converted."""

    key: bytes | None
    children: Iterator[tuple[bytes | None, Any]]
    build: Callable[[list[tuple[bytes | None, Value]]], Value] | None
    parts: list[tuple[bytes | None, Value]] = field(default_factory=list)


def from_python(obj: Any, *, encoding: str | None = "utf-8") -> Value:
    """Build a Value tree from native Python objects.

    Nesting depth is not limited by the interpreter's recursion limit.

    Args:
        obj: Object to convert; Values already in the tree pass through
        encoding: Text encoding for ``str`` values and keys, or None to reject text

    Returns:
        Equivalent Value tree

    Raises:
        TypeError: If the object (or anything nested in it) has no Value
            counterpart, including ``bool`` and ``None``
        ValueError: If an integer is outside the signed 64-bit range, or two
            keys of a mapping become the same bytes after encoding

    Example:
        >>> from_python([1, "spam"])
        List(items=(Integer(value=1), ByteString(value=b'spam')))
    """
    root = _Pending(None, iter(((None, obj),)), None)
    stack = [root]
    while stack:
        frame = stack[-1]
        entry = next(frame.children, None)
        if entry is None:
            stack.pop()
            if stack:
                assert frame.build is not None
                stack[-1].parts.append((frame.key, frame.build(frame.parts)))
            continue

        key, item = entry
        if isinstance(item, VALUE_TYPES):
            frame.parts.append((key, item))
        elif isinstance(item, (list, tuple)):
            stack.append(_Pending(key, ((None, child) for child in item), _build_list))
        elif isinstance(item, Mapping):
            children = ((_key(k, encoding), child) for k, child in item.items())
            stack.append(_Pending(key, children, Dictionary))
        else:
            frame.parts.append((key, _from_scalar(item, encoding)))

    return root.parts[0][1]


def _build_list(parts: list[tuple[bytes | None, Value]]) -> List:
    return List(item for _, item in parts)


def _from_scalar(obj: Any, encoding: str | None) -> Value:
    if isinstance(obj, bool) or obj is None:
        raise TypeError(f"{obj!r} has no bencode representation")
    if isinstance(obj, int):
        return Integer(obj)
    if isinstance(obj, float):
        return Float(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return ByteString(obj)
    if isinstance(obj, str):
        return ByteString(_encode_text(obj, encoding))
    raise TypeError(f"Cannot convert {type(obj).__name__} to a becode Value")


def to_python(value: Value) -> Any:
    """Convert a Value tree to native Python objects.

    Byte strings stay ``bytes`` (including dictionary keys); no text decoding
    is attempted. Containers are attached to their parent before being filled,
    so nesting depth is not limited by the interpreter's recursion limit.

    Example:
        >>> to_python(List([Integer(1), ByteString(b"x")]))
        [1, b'x']
    """
    result: list[Any] = []
    pending: list[tuple[Iterator[tuple[bytes | None, Value]], Any]] = [
        (iter(((None, value),)), result)
    ]
    while pending:
        children, target = pending[-1]
        entry = next(children, None)
        if entry is None:
            pending.pop()
            continue

        key, item = entry
        native: Any
        if isinstance(item, (Integer, Float, ByteString)):
            native = item.value
        elif isinstance(item, List):
            native = []
            pending.append((((None, child) for child in item.items), native))
        elif isinstance(item, Dictionary):
            native = {}
            pending.append((iter(item.items()), native))
        else:
            raise TypeError(f"Expected a becode Value, got {type(item).__name__}")

        if key is None:
            target.append(native)
        else:
            target[key] = native

    return result[0]


def _encode_text(text: str, encoding: str | None) -> bytes:
    if encoding is None:
        raise TypeError(f"str {text!r} given but text encoding is disabled; pass bytes")
    return text.encode(encoding)


def _key(key: Any, encoding: str | None) -> bytes:
    if isinstance(key, str):
        return _encode_text(key, encoding)
    if isinstance(key, (bytes, bytearray, memoryview, ByteString)):
        return bytes(key)
    raise TypeError(f"Dictionary keys must be bytes or str, got {type(key).__name__}")
