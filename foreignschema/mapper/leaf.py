"""Leaf mapper: primitive trace kinds to primitive schemas."""
from typing import Dict

from ..errors import UnmappableTraceError
from ..schema.models import PrimitiveSchema, SchemaType
from ..trace.models import PrimitiveKind, PrimitiveTrace

_LEAF_TYPES: Dict[PrimitiveKind, SchemaType] = {
    PrimitiveKind.STR: SchemaType.STRING,
    PrimitiveKind.CHAR: SchemaType.STRING,
    PrimitiveKind.BOOL: SchemaType.BOOLEAN,
    PrimitiveKind.I8: SchemaType.INTEGER,
    PrimitiveKind.I16: SchemaType.INTEGER,
    PrimitiveKind.I32: SchemaType.INTEGER,
    PrimitiveKind.I64: SchemaType.INTEGER,
    PrimitiveKind.I128: SchemaType.INTEGER,
    PrimitiveKind.U8: SchemaType.INTEGER,
    PrimitiveKind.U16: SchemaType.INTEGER,
    PrimitiveKind.U32: SchemaType.INTEGER,
    PrimitiveKind.U64: SchemaType.INTEGER,
    PrimitiveKind.U128: SchemaType.INTEGER,
    PrimitiveKind.F32: SchemaType.NUMBER,
    PrimitiveKind.F64: SchemaType.NUMBER,
    PrimitiveKind.UNIT: SchemaType.NULL,
}


def map_leaf(trace: PrimitiveTrace) -> PrimitiveSchema:
    """Map a primitive trace node. Returns a fresh node on every call."""
    try:
        schema_type = _LEAF_TYPES[PrimitiveKind(trace.kind)]
    except (KeyError, ValueError):
        raise UnmappableTraceError(f"Primitive({trace.kind!r})") from None
    return PrimitiveSchema(type=schema_type, enum=tuple(trace.values))
