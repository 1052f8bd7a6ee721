"""Compact integer and primitive codecs.

Every function takes the remaining input and returns ``(value, tail)``, where
``tail`` is the input with the consumed prefix removed. Integers are
little-endian throughout.

Slicing keeps the input type, so a ``memoryview`` input yields ``memoryview``
tails that share the caller's buffer instead of copying it.
"""

from __future__ import annotations

from typing import Union

from ..exceptions import (
    InsufficientBytes,
    InvalidEncoding,
    NonCanonicalCompact,
    TypeNotImplemented,
)
from ..models.descriptors import PrimitiveKind

Buffer = Union[bytes, memoryview]

# Smallest value each compact mode may carry when encodings must be minimal.
_COMPACT_MODE_FLOOR = (0, 1 << 6, 1 << 14, 1 << 30)


def take(data: Buffer, count: int, what: str = "value") -> tuple[Buffer, Buffer]:
    """Split ``count`` bytes off the front of ``data``.

    Raises:
        InsufficientBytes: If fewer than ``count`` bytes are available
    """
    if count > len(data):
        raise InsufficientBytes(count, len(data), what)
    return data[:count], data[count:]


def decode_compact(data: Buffer, strict: bool = True) -> tuple[int, Buffer]:
    """Decode a compact (variable-length) unsigned integer.

    The two low bits of the first byte select the mode:

    - ``0b00``: single byte, value in the upper 6 bits
    - ``0b01``: two bytes, value in the upper 14 bits
    - ``0b10``: four bytes, value in the upper 30 bits
    - ``0b11``: big integer; the upper 6 bits of the first byte hold
      ``byte_count - 4`` and that many value bytes follow

    Args:
        data: Remaining input
        strict: If True, reject encodings that are not the shortest form

    Returns:
        Tuple (value, tail)

    Raises:
        InsufficientBytes: If the input ends inside the integer
        NonCanonicalCompact: If ``strict`` and the encoding is not minimal
    """
    if not data:
        raise InsufficientBytes(1, 0, "compact integer")

    mode = data[0] & 0b11
    if mode == 0b00:
        return data[0] >> 2, data[1:]

    if mode == 0b01:
        raw, tail = take(data, 2, "compact integer")
        value = int.from_bytes(raw, "little") >> 2
    elif mode == 0b10:
        raw, tail = take(data, 4, "compact integer")
        value = int.from_bytes(raw, "little") >> 2
    else:
        byte_count = (data[0] >> 2) + 4
        raw, tail = take(data[1:], byte_count, "compact integer")
        value = int.from_bytes(raw, "little")
        if strict and raw[-1] == 0:
            raise NonCanonicalCompact(
                f"Compact big integer of {byte_count} bytes has a zero high byte"
            )

    if strict and value < _COMPACT_MODE_FLOOR[mode]:
        raise NonCanonicalCompact(f"Compact value {value} encoded in oversized mode {mode:#04b}")

    return value, tail


def decode_uint(bit_length: int, data: Buffer) -> tuple[int, Buffer]:
    """Decode a little-endian unsigned integer of ``bit_length`` bits."""
    raw, tail = take(data, bit_length // 8, f"U{bit_length}")
    return int.from_bytes(raw, "little"), tail


def decode_int(bit_length: int, data: Buffer) -> tuple[int, Buffer]:
    """Decode a little-endian two's complement integer of ``bit_length`` bits."""
    raw, tail = take(data, bit_length // 8, f"I{bit_length}")
    return int.from_bytes(raw, "little", signed=True), tail


def decode_bool(data: Buffer) -> tuple[bool, Buffer]:
    """Decode a boolean byte.

    Raises:
        InvalidEncoding: If the byte is neither 0 nor 1
    """
    raw, tail = take(data, 1, "Bool")
    if raw[0] > 1:
        raise InvalidEncoding(f"Invalid boolean byte: {raw[0]:#04x}")
    return raw[0] == 1, tail


def decode_str(data: Buffer, strict: bool = True) -> tuple[str, Buffer]:
    """Decode a compact-length-prefixed UTF-8 string.

    Raises:
        InvalidEncoding: If the bytes are not valid UTF-8
    """
    length, rest = decode_compact(data, strict)
    raw, tail = take(rest, length, "Str")
    try:
        return bytes(raw).decode("utf-8"), tail
    except UnicodeDecodeError as e:
        raise InvalidEncoding(f"Invalid UTF-8 in string: {e}") from e


def decode_char(data: Buffer) -> tuple[str, Buffer]:
    """Decode a Unicode scalar value stored as a little-endian u32.

    Raises:
        InvalidEncoding: If the value is a surrogate or above U+10FFFF
    """
    code_point, tail = decode_uint(32, data)
    if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
        raise InvalidEncoding(f"Invalid char code point: {code_point:#x}")
    return chr(code_point), tail


def decode_primitive(name: str, data: Buffer, strict: bool = True) -> tuple[object, Buffer]:
    """Decode a primitive by its (upper-case) name.

    Raises:
        TypeNotImplemented: If the name is not a known primitive
    """
    try:
        kind = PrimitiveKind(name)
    except ValueError:
        raise TypeNotImplemented(f"No decode rule for primitive {name!r}") from None

    if kind.is_integer:
        if kind.signed:
            return decode_int(kind.bit_length, data)
        return decode_uint(kind.bit_length, data)
    if kind is PrimitiveKind.BOOL:
        return decode_bool(data)
    if kind is PrimitiveKind.STR:
        return decode_str(data, strict)
    return decode_char(data)
