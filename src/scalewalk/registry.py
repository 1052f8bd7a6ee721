"""Portable type registry.

A registry is an immutable, id-indexed collection of type descriptors built
once from raw records. Record N must declare id N, which lets the registry be
a dense tuple and makes every lookup O(1). Construction never follows type
references, so cyclic and forward-referencing registries build fine; dangling
references surface only when a decode reaches them.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from .exceptions import (
    InvalidTypeId,
    MalformedDefinition,
    MissingDefinition,
    TypeNotFound,
    UnknownTypeKind,
)
from .models.descriptors import (
    ArrayType,
    BitSequenceType,
    CompactType,
    Field,
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
from .models.raw import (
    ArrayDef,
    BitSequenceDef,
    CompactDef,
    CompositeDef,
    PrimitiveDef,
    RawField,
    RawTypeRecord,
    SequenceDef,
    TupleDef,
    VariantDef,
)

logger = logging.getLogger(__name__)


class PortableRegistry:
    """Immutable registry of type descriptors indexed by type id.

    Example:
        >>> registry = PortableRegistry([
        ...     {"id": 0, "definition": {"primitive": "u8"}},
        ...     {"id": 1, "definition": {"sequence": {"type": 0}}},
        ... ])
        >>> registry.describe(1)
        'Vec<U8>'
    """

    __slots__ = ("_types", "_paths")

    def __init__(self, records: Iterable[Any]) -> None:
        """Build a registry from raw records.

        Args:
            records: Raw records in id order (dicts or RawTypeRecord instances)

        Raises:
            InvalidTypeId: If a record's id differs from its position
            MissingDefinition: If a record has no definition
            UnknownTypeKind: If a definition names an unknown kind
            MalformedDefinition: If a definition payload is malformed
        """
        types: list[TypeDescriptor] = []
        paths: list[tuple[str, ...]] = []
        for position, data in enumerate(records):
            record = _parse_record(data, position)
            types.append(_build_type(record, position))
            paths.append(record.path)

        self._types: tuple[TypeDescriptor, ...] = tuple(types)
        self._paths: tuple[tuple[str, ...], ...] = tuple(paths)
        logger.debug("Built portable registry with %d types", len(self._types))

    @classmethod
    def from_json(cls, text: str | bytes) -> PortableRegistry:
        """Build a registry from JSON text.

        The document may be a list of records or an object holding the list
        under ``"types"``.
        """
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedDefinition(f"Registry is not valid JSON: {e}") from e

        if isinstance(document, dict):
            document = document.get("types")
        if not isinstance(document, list):
            raise MalformedDefinition("Registry JSON must be a list of types or {'types': [...]}")
        return cls(document)

    @classmethod
    def from_file(cls, path: str | Path) -> PortableRegistry:
        """Build a registry from a JSON file.

        Raises:
            MalformedDefinition: If the file is not UTF-8 JSON
            OSError: If the file cannot be read
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDefinition(f"Registry file {path} is not UTF-8: {e}") from e
        return cls.from_json(text)

    def get_type(self, type_id: int) -> TypeDescriptor:
        """Return the descriptor for ``type_id``.

        Raises:
            TypeNotFound: If the id is not in the registry
        """
        if type_id not in self:
            raise TypeNotFound(type_id)
        return self._types[type_id]

    def path(self, type_id: int) -> tuple[str, ...]:
        """Return the declared path of a type (empty when none was given)."""
        if type_id not in self:
            raise TypeNotFound(type_id)
        return self._paths[type_id]

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._types)

    def __contains__(self, type_id: object) -> bool:
        return (
            isinstance(type_id, int)
            and not isinstance(type_id, bool)
            and 0 <= type_id < len(self._types)
        )

    def __repr__(self) -> str:
        return f"PortableRegistry({len(self._types)} types)"

    def describe(self, type_id: int) -> str:
        """Render a readable type expression for ``type_id``.

        Types already being rendered further up print as ``#id`` so that
        cyclic definitions terminate.

        Raises:
            TypeNotFound: If ``type_id`` itself is not in the registry
        """
        if type_id not in self:
            raise TypeNotFound(type_id)
        return self._render(type_id, ())

    def _render(self, type_id: int, stack: tuple[int, ...]) -> str:
        if type_id in stack or type_id not in self:
            return f"#{type_id}"

        descriptor = self._types[type_id]
        stack = stack + (type_id,)

        if isinstance(descriptor, PrimitiveType):
            return descriptor.name
        if isinstance(descriptor, CompactType):
            if descriptor.type_id is None:
                return "Compact"
            return f"Compact<{self._render(descriptor.type_id, stack)}>"
        if isinstance(descriptor, SequenceType):
            return f"Vec<{self._render(descriptor.type_id, stack)}>"
        if isinstance(descriptor, ArrayType):
            return f"[{self._render(descriptor.type_id, stack)}; {descriptor.length}]"
        if isinstance(descriptor, TupleType):
            return self._render_tuple(descriptor, stack)
        if isinstance(descriptor, StructType):
            return self._render_struct(descriptor, stack)
        if isinstance(descriptor, UnitType):
            return "()"
        if isinstance(descriptor, VariantType):
            if not descriptor.cases:
                return "!"
            return " | ".join(self._render_case(case, stack) for case in descriptor.cases)
        if isinstance(descriptor, BitSequenceType):
            store = self._render(descriptor.store_type_id, stack)
            order = self._render(descriptor.order_type_id, stack)
            return f"BitSequence<{store}, {order}>"
        raise TypeError(f"Unknown descriptor {descriptor!r}")

    def _render_tuple(self, descriptor: TupleType, stack: tuple[int, ...]) -> str:
        members = ", ".join(self._render(member, stack) for member in descriptor.type_ids)
        return f"({members})"

    def _render_struct(self, descriptor: StructType, stack: tuple[int, ...]) -> str:
        fields = ", ".join(
            f"{field.name}: {self._render(field.type_id, stack)}" for field in descriptor.fields
        )
        return f"{{ {fields} }}"

    def _render_case(self, case: VariantCase, stack: tuple[int, ...]) -> str:
        if isinstance(case, TupleVariant):
            return f"{case.name}{self._render_tuple(case.tuple, stack)}"
        if isinstance(case, StructVariant):
            return f"{case.name} {self._render_struct(case.struct, stack)}"
        return case.name


def _parse_record(data: Any, position: int) -> RawTypeRecord:
    try:
        return RawTypeRecord.from_data(data)
    except ValidationError as e:
        raise MalformedDefinition(f"Type record at position {position} is malformed: {e}") from e


def _build_type(record: RawTypeRecord, position: int) -> TypeDescriptor:
    """Map one validated record onto a descriptor."""
    type_id = record.id
    if isinstance(type_id, bool) or not isinstance(type_id, int) or type_id != position:
        raise InvalidTypeId(type_id, position)

    definition = record.definition
    if not definition:
        raise MissingDefinition(f"Type {type_id} has no definition")
    if len(definition) != 1:
        raise MalformedDefinition(
            f"Type {type_id}: definition must have exactly one kind, got {sorted(definition)}"
        )

    ((kind, payload),) = definition.items()
    builder = _BUILDERS.get(_normalise_kind(kind))
    if builder is None:
        raise UnknownTypeKind(f"Type {type_id}: unknown type kind {kind!r}")

    try:
        return builder(payload)
    except ValidationError as e:
        raise MalformedDefinition(f"Type {type_id} ({kind}): {e}") from e
    except MalformedDefinition as e:
        raise MalformedDefinition(f"Type {type_id} ({kind}): {e}") from e


def _normalise_kind(kind: str) -> str:
    return kind.replace("_", "").lower()


def _build_primitive(payload: Any) -> TypeDescriptor:
    return PrimitiveType(name=PrimitiveDef.validate_python(payload).upper())


def _build_compact(payload: Any) -> TypeDescriptor:
    return CompactType(type_id=CompactDef.model_validate(payload or {}).type)


def _build_sequence(payload: Any) -> TypeDescriptor:
    return SequenceType(type_id=SequenceDef.model_validate(payload).type)


def _build_array(payload: Any) -> TypeDescriptor:
    raw = ArrayDef.model_validate(payload)
    return ArrayType(type_id=raw.type, length=raw.len)


def _build_tuple(payload: Any) -> TypeDescriptor:
    return TupleType(type_ids=tuple(TupleDef.validate_python(payload)))


def _build_bit_sequence(payload: Any) -> TypeDescriptor:
    raw = BitSequenceDef.model_validate(payload)
    return BitSequenceType(store_type_id=raw.bit_store_type, order_type_id=raw.bit_order_type)


def _build_composite(payload: Any) -> TypeDescriptor:
    fields = CompositeDef.model_validate(payload).fields
    if not fields:
        return UnitType()
    if fields[0].name is None:
        return TupleType(type_ids=tuple(field.type for field in fields))
    return _struct_from_fields(fields)


def _struct_from_fields(fields: list[RawField]) -> StructType:
    members: list[Field] = []
    for field in fields:
        # every struct member needs a key
        if field.name is None:
            raise MalformedDefinition("named and unnamed fields are mixed")
        members.append(Field(name=field.name, type_id=field.type))
    return StructType(fields=tuple(members))


def _build_variant(payload: Any) -> TypeDescriptor:
    raw_cases = VariantDef.model_validate(payload).variants

    seen: set[int] = set()
    cases: list[VariantCase] = []
    for raw in raw_cases:
        if raw.index in seen:
            raise MalformedDefinition(f"duplicate variant index {raw.index} ({raw.name})")
        seen.add(raw.index)

        if not raw.fields:
            cases.append(SimpleVariant(name=raw.name, index=raw.index))
        elif raw.fields[0].name is None:
            members = TupleType(type_ids=tuple(field.type for field in raw.fields))
            cases.append(TupleVariant(name=raw.name, index=raw.index, tuple=members))
        else:
            struct = _struct_from_fields(raw.fields)
            cases.append(StructVariant(name=raw.name, index=raw.index, struct=struct))

    return VariantType(cases=tuple(cases))


_BUILDERS: dict[str, Callable[[Any], TypeDescriptor]] = {
    "primitive": _build_primitive,
    "compact": _build_compact,
    "sequence": _build_sequence,
    "array": _build_array,
    "tuple": _build_tuple,
    "composite": _build_composite,
    "variant": _build_variant,
    "bitsequence": _build_bit_sequence,
}
