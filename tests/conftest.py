"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from becode import ByteString, Dictionary, Integer, List


@pytest.fixture
def sample_buffer() -> bytes:
    """Canonically encoded torrent-like metainfo."""
    return (
        b"d8:announce20:http://tracker/annnc"
        b"4:infod6:lengthi1024e4:name8:file.bin12:piece lengthi256e"
        b"6:pieces0:e"
        b"4:tagsl4:spam4:eggsee"
    )


@pytest.fixture
def sample_value() -> Dictionary:
    """Value tree matching sample_buffer."""
    return Dictionary(
        {
            b"announce": ByteString(b"http://tracker/annnc"),
            b"info": Dictionary(
                {
                    b"length": Integer(1024),
                    b"name": ByteString(b"file.bin"),
                    b"piece length": Integer(256),
                    b"pieces": ByteString(b""),
                }
            ),
            b"tags": List([ByteString(b"spam"), ByteString(b"eggs")]),
        }
    )


@pytest.fixture
def deep_nesting() -> int:
    """Depth beyond the interpreter's default recursion limit."""
    return 1500


@pytest.fixture
def deep_list(deep_nesting: int) -> List:
    """Singly nested lists ``deep_nesting`` levels deep."""
    value = List([])
    for _ in range(deep_nesting - 1):
        value = List([value])
    return value
