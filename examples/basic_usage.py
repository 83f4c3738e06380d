#!/usr/bin/env python3
"""Basic usage example for becode.

This example demonstrates:
1. Building a value tree
2. Serializing it to bencode
3. Decoding it back
4. Handling the float extension and decode errors
"""

from __future__ import annotations

from becode import (
    ByteString,
    DecodeError,
    Dictionary,
    Float,
    Integer,
    List,
    decode,
    decode_native,
    encode,
    encoded_size,
    serialize,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("becode Basic Usage Example")
    print("=" * 60)
    print()

    # Build a value tree
    print("1. Building a value tree...")
    value = Dictionary(
        {
            b"spam": List([ByteString(b"a"), ByteString(b"b")]),
            b"cow": ByteString(b"moo"),
            b"count": Integer(3),
        }
    )
    print(f"   Keys (insertion order): {list(value.keys())}")
    print()

    # Serialize
    print("2. Serializing (canonical key order)...")
    data = serialize(value)
    print(f"   Encoded: {data!r}")
    print(f"   Size: {len(data)} bytes (predicted {encoded_size(value)})")
    print()

    # Decode
    print("3. Decoding...")
    decoded = decode(data)
    print(f"   Round-trip OK: {decoded == value}")
    print()

    # Float extension
    print("4. Float extension...")
    ratio = serialize(Dictionary({b"ratio": Float(0.75)}), allow_float_extension=True)
    print(f"   Encoded: {ratio!r}")
    try:
        decode(ratio)
    except DecodeError as e:
        print(f"   Strict decode refused it: {e}")
    print(f"   Permissive decode: {decode_native(ratio, allow_float_extension=True)}")
    print()

    # Native objects
    print("5. Native Python objects...")
    print(f"   encode(...) = {encode({'announce': 'http://tracker', 'length': 1024})!r}")
    print()

    print("=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
