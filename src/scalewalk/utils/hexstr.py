"""Hex text conversion.

Chain RPC endpoints and metadata snapshots carry binary data as ``0x``-prefixed
hex strings; the decoder itself only accepts bytes.
"""

from __future__ import annotations

from ..exceptions import HexFormatError


def hex_to_bytes(text: str) -> bytes:
    """Parse hex text into bytes.

    The ``0x`` prefix is optional and surrounding whitespace is ignored. An odd
    number of digits is read as if a leading zero were present.

    Raises:
        HexFormatError: If the text contains non-hex characters

    Example:
        >>> hex_to_bytes("0x0102ff")
        b'\\x01\\x02\\xff'
        >>> hex_to_bytes("abc")
        b'\\n\\xbc'
    """
    digits = text.strip()
    if digits[:2] in ("0x", "0X"):
        digits = digits[2:]
    if len(digits) % 2:
        digits = "0" + digits

    try:
        return bytes.fromhex(digits)
    except ValueError as e:
        raise HexFormatError(f"Not valid hex: {text!r}") from e


def bytes_to_hex(data: bytes) -> str:
    """Format bytes as ``0x``-prefixed lower-case hex."""
    return "0x" + bytes(data).hex()
