"""Nullable wrapper for the optional exposure of a resolved schema."""
from ..schema.models import NullableSchema, RefSchema, SchemaNode, mark_nullable


def make_nullable(schema: SchemaNode) -> SchemaNode:
    """
    Produce the nullable variant of a schema

    A reference is wrapped in a NullableSchema envelope; the registered
    definition it points at is left untouched. An inline schema is returned as
    a copy with its nullable marker set.
    """
    if isinstance(schema, NullableSchema):
        return schema
    if isinstance(schema, RefSchema):
        return NullableSchema(wrapped=schema)
    return mark_nullable(schema)
