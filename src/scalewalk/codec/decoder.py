"""Registry-driven decoder.

This module provides decode(), which walks a byte buffer guided by a type
registry and returns the decoded value together with the unconsumed tail.
Compound types decode their members in declaration order, each member
starting where the previous one stopped.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..exceptions import (
    DecodeError,
    InsufficientBytes,
    RecursionDepthExceeded,
    TrailingBytes,
    TypeNotImplemented,
    VariantIndexOutOfRange,
)
from ..models.descriptors import (
    ArrayType,
    BitSequenceType,
    CompactType,
    PrimitiveType,
    SequenceType,
    SimpleVariant,
    StructType,
    TupleType,
    TupleVariant,
    UnitType,
    VariantType,
)
from ..registry import PortableRegistry
from ..utils.hexstr import hex_to_bytes
from .config import DEFAULT_CONFIG, DecodeConfig
from .primitives import decode_compact, decode_primitive

logger = logging.getLogger(__name__)

DecodeResult = tuple[Any, bytes]
ViewResult = tuple[Any, memoryview]


class Decoder:
    """Decodes values against a fixed registry and configuration.

    A Decoder holds no per-call state, so one instance may be shared by
    concurrent callers.
    """

    def __init__(self, registry: PortableRegistry, config: Optional[DecodeConfig] = None) -> None:
        self.registry = registry
        self.config = config or DEFAULT_CONFIG

    def decode(self, type_id: int, data: bytes | bytearray | memoryview) -> DecodeResult:
        """Decode one value of type ``type_id`` from the front of ``data``.

        The walk runs over a read-only view of ``data``; only the returned
        tail is copied back into ``bytes``.

        Raises:
            TypeNotFound: If ``type_id`` (or a type it references) is missing
            TypeNotImplemented: If the type has no decode rule
            RecursionDepthExceeded: If nesting exceeds ``config.max_depth``
            DecodeError: If the bytes do not form a valid value
        """
        value, tail = self._decode(type_id, memoryview(bytes(data)), 0)
        return value, bytes(tail)

    def _decode(self, type_id: int, data: memoryview, depth: int) -> ViewResult:
        if depth > self.config.max_depth:
            raise RecursionDepthExceeded(
                f"Nesting deeper than {self.config.max_depth} while decoding type {type_id}"
            )

        descriptor = self.registry.get_type(type_id)
        logger.debug(
            "Decoding type %d (%s), %d bytes left", type_id, type(descriptor).__name__, len(data)
        )

        if isinstance(descriptor, PrimitiveType):
            return decode_primitive(descriptor.name, data, self.config.strict_compact)
        if isinstance(descriptor, CompactType):
            return decode_compact(data, self.config.strict_compact)
        if isinstance(descriptor, ArrayType):
            return self._decode_repeated(descriptor.type_id, descriptor.length, data, depth)
        if isinstance(descriptor, SequenceType):
            return self._decode_sequence(descriptor, data, depth)
        if isinstance(descriptor, TupleType):
            return self._decode_tuple(descriptor, data, depth)
        if isinstance(descriptor, StructType):
            return self._decode_struct(descriptor, data, depth)
        if isinstance(descriptor, UnitType):
            return (), data
        if isinstance(descriptor, VariantType):
            return self._decode_variant(descriptor, data, depth)
        if isinstance(descriptor, BitSequenceType):
            raise TypeNotImplemented(f"Type {type_id}: bit sequences are not supported")
        raise TypeNotImplemented(f"Type {type_id}: no decode rule for {descriptor!r}")

    def _decode_many(
        self, type_ids: list[int], data: memoryview, depth: int
    ) -> tuple[list[Any], memoryview]:
        values = []
        for type_id in type_ids:
            value, data = self._decode(type_id, data, depth + 1)
            values.append(value)
        return values, data

    def _decode_sequence(
        self, descriptor: SequenceType, data: memoryview, depth: int
    ) -> ViewResult:
        length, data = decode_compact(data, self.config.strict_compact)
        if length > len(data):
            # Only zero-width elements can outnumber the remaining bytes.
            _, tail = self._decode(descriptor.type_id, data, depth + 1)
            if len(tail) == len(data):
                raise DecodeError(
                    f"Sequence of {length} zero-width elements exceeds the "
                    f"{len(data)} remaining bytes"
                )
            raise InsufficientBytes(length, len(data), "sequence elements")
        return self._decode_repeated(descriptor.type_id, length, data, depth)

    def _decode_repeated(
        self, type_id: int, length: int, data: memoryview, depth: int
    ) -> ViewResult:
        values = []
        for _ in range(length):
            value, data = self._decode(type_id, data, depth + 1)
            values.append(value)
        return values, data

    def _decode_tuple(
        self, descriptor: TupleType, data: memoryview, depth: int
    ) -> ViewResult:
        # A one-member tuple is its member; callers never see an arity-1 wrapper.
        if len(descriptor.type_ids) == 1:
            return self._decode(descriptor.type_ids[0], data, depth + 1)
        values, data = self._decode_many(list(descriptor.type_ids), data, depth)
        return tuple(values), data

    def _decode_struct(
        self, descriptor: StructType, data: memoryview, depth: int
    ) -> ViewResult:
        result: dict[str, Any] = {}
        for field in descriptor.fields:
            result[field.name], data = self._decode(field.type_id, data, depth + 1)
        return result, data

    def _decode_variant(
        self, descriptor: VariantType, data: memoryview, depth: int
    ) -> ViewResult:
        if not data:
            raise InsufficientBytes(1, 0, "variant discriminant")

        index = data[0]
        case = descriptor.case_for(index)
        if case is None:
            raise VariantIndexOutOfRange(index, [c.index for c in descriptor.cases])

        data = data[1:]
        if isinstance(case, SimpleVariant):
            return case.name, data
        if isinstance(case, TupleVariant):
            value, data = self._decode_tuple(case.tuple, data, depth)
        else:
            value, data = self._decode_struct(case.struct, data, depth)
        return {case.name: value}, data


def decode(
    type_id: int,
    data: bytes | bytearray | memoryview,
    registry: PortableRegistry,
    config: Optional[DecodeConfig] = None,
) -> DecodeResult:
    """Decode one value of type ``type_id`` from the front of ``data``.

    Args:
        type_id: Registry id of the type to decode
        data: Encoded bytes; only a prefix needs to belong to the value
        registry: Registry describing the types
        config: Decode policy (defaults to DecodeConfig())

    Returns:
        Tuple (value, tail) where tail holds the unconsumed bytes

    Raises:
        TypeNotFound: If a type id is missing from the registry
        TypeNotImplemented: If a type has no decode rule
        DecodeError: If the bytes do not form a valid value

    Examples:
        ```python
        from scalewalk import PortableRegistry, decode

        registry = PortableRegistry([
            {"id": 0, "definition": {"primitive": "u8"}},
            {"id": 1, "definition": {"array": {"len": 2, "type": 0}}},
        ])
        value, tail = decode(1, b"\\x01\\x02\\xff", registry)
        # value == [1, 2], tail == b"\\xff"
        ```
    """
    return Decoder(registry, config).decode(type_id, data)


def decode_hex(
    type_id: int,
    hex_text: str,
    registry: PortableRegistry,
    config: Optional[DecodeConfig] = None,
) -> Any:
    """Decode exactly one value from hex text.

    Raises:
        HexFormatError: If the text is not valid hex
        TrailingBytes: If bytes remain after the value
    """
    value, tail = decode(type_id, hex_to_bytes(hex_text), registry, config)
    if tail:
        raise TrailingBytes(tail)
    return value


def decode_all(
    type_id: int,
    data: bytes | bytearray | memoryview,
    registry: PortableRegistry,
    config: Optional[DecodeConfig] = None,
) -> list[Any]:
    """Decode back-to-back values of one type until ``data`` is exhausted."""
    decoder = Decoder(registry, config)
    remaining = memoryview(bytes(data))
    values = []
    while remaining:
        value, tail = decoder._decode(type_id, remaining, 0)
        if len(tail) == len(remaining):
            # zero-width type
            raise DecodeError(f"Type {type_id} consumes no bytes; cannot split input")
        values.append(value)
        remaining = tail
    return values
