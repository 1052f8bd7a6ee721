"""Pydantic models for raw registry records.

Raw records arrive as loosely-typed JSON-like data, either in the short form
``{"id": 0, "definition": {"primitive": "u8"}}`` or in the on-chain portable
registry form ``{"id": 0, "type": {"path": [...], "def": {...}}}``. These
models validate each shape once, at the registry boundary; nothing past
construction looks at raw data again.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, NonNegativeInt, TypeAdapter


class RawModel(BaseModel):
    """Base for raw payload models.

    Metadata carries documentation and display-only keys (``docs``,
    ``typeName``) that have no bearing on decoding, so extra keys are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class RawTypeRecord(RawModel):
    """One entry of a raw registry.

    ``id`` is kept unvalidated here; the registry checks it against the
    record's position so the failure is reported as an invalid id.
    """

    id: Any = None
    definition: Optional[dict[str, Any]] = None
    path: tuple[str, ...] = ()

    @classmethod
    def from_data(cls, data: Any) -> RawTypeRecord:
        """Build a record from either supported raw shape."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            return cls.model_validate(data)

        definition = data.get("definition")
        path: Any = data.get("path", ())
        if definition is None and "def" in data:
            definition = data["def"]
        nested = data.get("type")
        if definition is None and isinstance(nested, dict):
            definition = nested.get("def")
            path = nested.get("path", path)
        return cls.model_validate(
            {"id": data.get("id"), "definition": definition, "path": path or ()}
        )


class RawField(RawModel):
    name: Optional[str] = None
    type: NonNegativeInt


class CompactDef(RawModel):
    type: Optional[NonNegativeInt] = None


class SequenceDef(RawModel):
    type: NonNegativeInt


class ArrayDef(RawModel):
    len: NonNegativeInt
    type: NonNegativeInt


class BitSequenceDef(RawModel):
    bit_store_type: NonNegativeInt = Field(
        validation_alias=AliasChoices("bitStoreType", "bit_store_type")
    )
    bit_order_type: NonNegativeInt = Field(
        validation_alias=AliasChoices("bitOrderType", "bit_order_type")
    )


class CompositeDef(RawModel):
    fields: list[RawField] = []


class RawVariantCase(RawModel):
    name: str
    index: int = Field(ge=0, le=255)
    fields: list[RawField] = []


class VariantDef(RawModel):
    variants: list[RawVariantCase] = []


PrimitiveDef = TypeAdapter(str)
TupleDef = TypeAdapter(list[NonNegativeInt])
