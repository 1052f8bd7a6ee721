"""SCALE decoding for scalewalk.

This module provides the registry-driven decode engine and the compact and
primitive codecs it is built on.
"""

from __future__ import annotations

from .config import DecodeConfig
from .decoder import Decoder, decode, decode_all, decode_hex
from .primitives import decode_compact

__all__ = [
    "DecodeConfig",
    "Decoder",
    "decode",
    "decode_all",
    "decode_compact",
    "decode_hex",
]
