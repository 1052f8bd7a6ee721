"""Exception hierarchy for scalewalk.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ScaleError for easy catching of any scalewalk-specific error.
"""

from __future__ import annotations


class ScaleError(Exception):
    """Base exception for all scalewalk errors."""

    pass


class RegistryError(ScaleError):
    """Raised when a type registry cannot be built from raw descriptor data.

    A failed construction never yields a partially populated registry.
    """

    pass


class InvalidTypeId(RegistryError):
    """Raised when a record's declared id does not match its position."""

    def __init__(self, type_id: object, position: int) -> None:
        super().__init__(f"Invalid type id: {type_id!r} at position {position}")
        self.type_id = type_id
        self.position = position


class MissingDefinition(RegistryError):
    """Raised when a raw record carries no definition blob."""

    pass


class UnknownTypeKind(RegistryError):
    """Raised when a definition names a descriptor kind that does not exist."""

    pass


class MalformedDefinition(RegistryError):
    """Raised when a definition payload has the wrong shape.

    Examples:
        - More than one kind key in the definition
        - Array length missing or negative
        - Two variant cases sharing one discriminant
    """

    pass


class TypeNotFound(ScaleError, LookupError):
    """Raised when a type id has no descriptor in the registry."""

    def __init__(self, type_id: int) -> None:
        super().__init__(f"Type not found: id {type_id}")
        self.type_id = type_id


class DecodeError(ScaleError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Discriminant byte with no matching variant case
        - Invalid boolean byte or malformed UTF-8
    """

    pass


class TypeNotImplemented(DecodeError):
    """Raised for descriptor kinds or primitive names without a decode rule."""

    pass


class VariantIndexOutOfRange(DecodeError):
    """Raised when a discriminant byte matches no declared variant case."""

    def __init__(self, index: int, available: list[int]) -> None:
        super().__init__(f"Variant index {index} out of range (declared: {available})")
        self.index = index
        self.available = available


class InsufficientBytes(DecodeError):
    """Raised when fewer bytes remain than a decode step requires."""

    def __init__(self, needed: int, available: int, what: str = "value") -> None:
        super().__init__(
            f"Insufficient bytes decoding {what}: need {needed}, have {available}"
        )
        self.needed = needed
        self.available = available


class InvalidEncoding(DecodeError):
    """Raised when bytes are present but do not form a valid value."""

    pass


class NonCanonicalCompact(InvalidEncoding):
    """Raised when a compact integer uses a wider mode than its value needs."""

    pass


class RecursionDepthExceeded(DecodeError):
    """Raised when nested decoding goes deeper than the configured limit."""

    pass


class TrailingBytes(DecodeError):
    """Raised when a single-value decode leaves bytes unconsumed."""

    def __init__(self, remaining: bytes) -> None:
        super().__init__(f"{len(remaining)} trailing byte(s) after value: 0x{remaining.hex()}")
        self.remaining = remaining


class HexFormatError(ScaleError, ValueError):
    """Raised when text cannot be parsed as hexadecimal bytes."""

    pass
