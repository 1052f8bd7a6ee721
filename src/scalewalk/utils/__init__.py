"""Utility functions for scalewalk."""

from __future__ import annotations

from .hexstr import bytes_to_hex, hex_to_bytes

__all__ = [
    "bytes_to_hex",
    "hex_to_bytes",
]
