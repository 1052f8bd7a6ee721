"""Type descriptors and raw registry models for scalewalk.

This module provides the closed set of descriptor types the decoder dispatches
on, plus the pydantic models that validate raw registry data.
"""

from __future__ import annotations

from .descriptors import (
    ArrayType,
    BitSequenceType,
    CompactType,
    Field,
    PrimitiveKind,
    PrimitiveType,
    SequenceType,
    SimpleVariant,
    StructType,
    StructVariant,
    TupleType,
    TupleVariant,
    TypeDescriptor,
    UnitType,
    VariantCase,
    VariantType,
)
from .raw import RawTypeRecord

__all__ = [
    "ArrayType",
    "BitSequenceType",
    "CompactType",
    "Field",
    "PrimitiveKind",
    "PrimitiveType",
    "RawTypeRecord",
    "SequenceType",
    "SimpleVariant",
    "StructType",
    "StructVariant",
    "TupleType",
    "TupleVariant",
    "TypeDescriptor",
    "UnitType",
    "VariantCase",
    "VariantType",
]
