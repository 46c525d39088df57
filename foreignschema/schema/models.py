"""
Schema models - OpenAPI schema nodes produced by the mappers.

Supports:
- Primitive types (string, integer, number, boolean, null)
- Arrays and objects (ordered properties, additionalProperties)
- anyOf / oneOf / allOf compositions
- $ref references and nullable reference envelopes
"""

from dataclasses import dataclass, field as dataclass_field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config import DEFAULT_REF_PREFIX


class SchemaType(str, Enum):
    """Schema types emitted for inline nodes"""
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"


class Composition(str, Enum):
    """Schema composition keywords"""
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    ALL_OF = "allOf"


def _with_nullable(result: Dict[str, Any], nullable: bool) -> Dict[str, Any]:
    if nullable:
        result["nullable"] = True
    return result


@dataclass(frozen=True)
class RefSchema:
    """Reference to a named definition in the registry"""
    name: str

    @property
    def nullable(self) -> bool:
        return False

    def to_dict(self, ref_prefix: str = DEFAULT_REF_PREFIX) -> Dict[str, Any]:
        return {"$ref": f"{ref_prefix}{self.name}"}


@dataclass(frozen=True)
class PrimitiveSchema:
    type: SchemaType
    enum: Tuple[Any, ...] = ()
    nullable: bool = False

    def to_dict(self, ref_prefix: str = DEFAULT_REF_PREFIX) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type.value}
        if self.enum:
            result["enum"] = list(self.enum)
        return _with_nullable(result, self.nullable)


@dataclass(frozen=True)
class ArraySchema:
    items: "SchemaNode"
    nullable: bool = False

    def to_dict(self, ref_prefix: str = DEFAULT_REF_PREFIX) -> Dict[str, Any]:
        result = {"type": SchemaType.ARRAY.value, "items": self.items.to_dict(ref_prefix)}
        return _with_nullable(result, self.nullable)


@dataclass(frozen=True)
class ObjectSchema:
    """Object with ordered properties; property order is declaration order"""
    properties: Dict[str, "SchemaNode"] = dataclass_field(default_factory=dict)
    additional_properties: Optional["SchemaNode"] = None
    nullable: bool = False

    def to_dict(self, ref_prefix: str = DEFAULT_REF_PREFIX) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": SchemaType.OBJECT.value,
            "properties": {k: v.to_dict(ref_prefix) for k, v in self.properties.items()},
        }
        if self.additional_properties is not None:
            result["additionalProperties"] = self.additional_properties.to_dict(ref_prefix)
        return _with_nullable(result, self.nullable)


@dataclass(frozen=True)
class CompositeSchema:
    keyword: Composition
    schemas: List["SchemaNode"] = dataclass_field(default_factory=list)
    nullable: bool = False

    def to_dict(self, ref_prefix: str = DEFAULT_REF_PREFIX) -> Dict[str, Any]:
        result = {self.keyword.value: [s.to_dict(ref_prefix) for s in self.schemas]}
        return _with_nullable(result, self.nullable)


@dataclass(frozen=True)
class NullableSchema:
    """
    Nullable envelope around a reference.

    A bare $ref cannot carry sibling keywords, so the reference is embedded in
    an allOf next to the nullable marker.
    """
    wrapped: RefSchema

    @property
    def nullable(self) -> bool:
        return True

    @property
    def title(self) -> str:
        return self.wrapped.name

    def to_dict(self, ref_prefix: str = DEFAULT_REF_PREFIX) -> Dict[str, Any]:
        return {
            "title": self.title,
            "nullable": True,
            "allOf": [self.wrapped.to_dict(ref_prefix)],
        }


SchemaNode = Union[
    RefSchema,
    PrimitiveSchema,
    ArraySchema,
    ObjectSchema,
    CompositeSchema,
    NullableSchema,
]

INLINE_SCHEMAS = (PrimitiveSchema, ArraySchema, ObjectSchema, CompositeSchema)


def primitive(schema_type: SchemaType) -> PrimitiveSchema:
    return PrimitiveSchema(type=schema_type)


def tag_schema(variant_name: str) -> PrimitiveSchema:
    """String schema admitting exactly one variant name"""
    return PrimitiveSchema(type=SchemaType.STRING, enum=(variant_name,))


def mark_nullable(schema: SchemaNode) -> SchemaNode:
    """Copy of an inline schema with the nullable marker set"""
    return replace(schema, nullable=True)
