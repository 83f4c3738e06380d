"""Utility functions for becode."""

from __future__ import annotations

from .sizing import encoded_size

__all__ = [
    "encoded_size",
]
