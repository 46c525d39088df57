"""OpenAPI schema nodes emitted by the mapping engine."""

from .models import (
    ArraySchema,
    Composition,
    CompositeSchema,
    NullableSchema,
    ObjectSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
    SchemaType,
)

__all__ = [
    "ArraySchema",
    "Composition",
    "CompositeSchema",
    "NullableSchema",
    "ObjectSchema",
    "PrimitiveSchema",
    "RefSchema",
    "SchemaNode",
    "SchemaType",
]
