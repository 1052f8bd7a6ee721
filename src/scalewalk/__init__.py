"""scalewalk: registry-driven SCALE decoder

A Python library for decoding SCALE-encoded blockchain data (storage values,
events, extrinsics) against a chain's portable type registry.

Key Features:
- Immutable, id-indexed registry built from raw metadata types
- Recursive decoder for primitives, compacts, arrays, sequences, tuples,
  structs and variants
- Exact byte accounting: every decode returns the unconsumed tail
- Pydantic validation of raw registry data

Quick Start:
    >>> from scalewalk import PortableRegistry, decode
    >>>
    >>> registry = PortableRegistry([
    ...     {"id": 0, "definition": {"primitive": "u8"}},
    ...     {"id": 1, "definition": {"primitive": "str"}},
    ...     {"id": 2, "definition": {"composite": {"fields": [
    ...         {"name": "age", "type": 0},
    ...         {"name": "name", "type": 1},
    ...     ]}}},
    ... ])
    >>> decode(2, b"\\x05\\x08hi", registry)
    ({'age': 5, 'name': 'hi'}, b'')
"""

from __future__ import annotations

from .codec import DecodeConfig, Decoder, decode, decode_all, decode_compact, decode_hex
from .exceptions import (
    DecodeError,
    HexFormatError,
    InsufficientBytes,
    InvalidEncoding,
    InvalidTypeId,
    MalformedDefinition,
    MissingDefinition,
    NonCanonicalCompact,
    RecursionDepthExceeded,
    RegistryError,
    ScaleError,
    TrailingBytes,
    TypeNotFound,
    TypeNotImplemented,
    UnknownTypeKind,
    VariantIndexOutOfRange,
)
from .models import (
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
from .registry import PortableRegistry
from .utils import bytes_to_hex, hex_to_bytes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "PortableRegistry",
    "decode",
    "decode_hex",
    "decode_all",
    "decode_compact",
    "Decoder",
    "DecodeConfig",
    # Descriptors
    "TypeDescriptor",
    "PrimitiveKind",
    "PrimitiveType",
    "CompactType",
    "SequenceType",
    "ArrayType",
    "TupleType",
    "Field",
    "StructType",
    "UnitType",
    "VariantCase",
    "SimpleVariant",
    "TupleVariant",
    "StructVariant",
    "VariantType",
    "BitSequenceType",
    # Exceptions
    "ScaleError",
    "RegistryError",
    "InvalidTypeId",
    "MissingDefinition",
    "UnknownTypeKind",
    "MalformedDefinition",
    "TypeNotFound",
    "DecodeError",
    "TypeNotImplemented",
    "VariantIndexOutOfRange",
    "InsufficientBytes",
    "InvalidEncoding",
    "NonCanonicalCompact",
    "RecursionDepthExceeded",
    "TrailingBytes",
    "HexFormatError",
    # Hex helpers
    "hex_to_bytes",
    "bytes_to_hex",
    # Version
    "__version__",
]
