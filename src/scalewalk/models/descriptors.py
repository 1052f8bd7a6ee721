"""Type descriptors held by a portable registry.

Descriptors are immutable and refer to other types only by integer id, never
by direct reference, so cyclic and forward-referencing type graphs need no
special handling.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union


class PrimitiveKind(str, enum.Enum):
    """Scalar kinds with a built-in decode rule."""

    U8 = "U8"
    U16 = "U16"
    U32 = "U32"
    U64 = "U64"
    U128 = "U128"
    U256 = "U256"
    I8 = "I8"
    I16 = "I16"
    I32 = "I32"
    I64 = "I64"
    I128 = "I128"
    I256 = "I256"
    BOOL = "BOOL"
    STR = "STR"
    CHAR = "CHAR"

    @property
    def is_integer(self) -> bool:
        return self.value[0] in ("U", "I")

    @property
    def signed(self) -> bool:
        return self.value[0] == "I"

    @property
    def bit_length(self) -> int:
        """Width in bits for integer kinds.

        Raises:
            ValueError: If the kind is not an integer
        """
        if not self.is_integer:
            raise ValueError(f"{self.value} has no fixed bit length")
        return int(self.value[1:])


@dataclass(frozen=True)
class PrimitiveType:
    """A scalar type.

    Attributes:
        name: Primitive name, normalised to upper case (e.g. "U32", "STR")
    """

    name: str

    @property
    def kind(self) -> Optional[PrimitiveKind]:
        """The matching PrimitiveKind, or None if the name is unrecognised."""
        try:
            return PrimitiveKind(self.name)
        except ValueError:
            return None


@dataclass(frozen=True)
class CompactType:
    """A compact-encoded unsigned integer, optionally wrapping a named type."""

    type_id: Optional[int] = None


@dataclass(frozen=True)
class SequenceType:
    """A compact-length-prefixed homogeneous list."""

    type_id: int


@dataclass(frozen=True)
class ArrayType:
    """A fixed-length homogeneous list with no length prefix."""

    type_id: int
    length: int


@dataclass(frozen=True)
class TupleType:
    """A positional product of types."""

    type_ids: tuple[int, ...]


@dataclass(frozen=True)
class Field:
    """A named member of a struct."""

    name: str
    type_id: int


@dataclass(frozen=True)
class StructType:
    """A named product of types, in declaration order."""

    fields: tuple[Field, ...]


@dataclass(frozen=True)
class UnitType:
    """A zero-width value."""


@dataclass(frozen=True)
class SimpleVariant:
    """A variant case with no payload."""

    name: str
    index: int


@dataclass(frozen=True)
class TupleVariant:
    """A variant case with a positional payload."""

    name: str
    index: int
    tuple: TupleType


@dataclass(frozen=True)
class StructVariant:
    """A variant case with a named payload."""

    name: str
    index: int
    struct: StructType


VariantCase = Union[SimpleVariant, TupleVariant, StructVariant]


@dataclass(frozen=True)
class VariantType:
    """A tagged sum type.

    Cases are selected by their explicit discriminant, never by position.
    """

    cases: tuple[VariantCase, ...]

    def case_for(self, index: int) -> Optional[VariantCase]:
        """Return the case declared with discriminant ``index``, if any."""
        for case in self.cases:
            if case.index == index:
                return case
        return None


@dataclass(frozen=True)
class BitSequenceType:
    """A bit-packed sequence. Represented, but has no decode rule."""

    store_type_id: int
    order_type_id: int


TypeDescriptor = Union[
    PrimitiveType,
    CompactType,
    SequenceType,
    ArrayType,
    TupleType,
    StructType,
    UnitType,
    VariantType,
    BitSequenceType,
]
