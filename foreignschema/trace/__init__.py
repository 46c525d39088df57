"""
Structural trace data model.

The closed set of shapes a trace producer can report for a type, and the input
to the schema mappers.
"""

from .models import (
    EnumRepresentation,
    EnumTrace,
    Field,
    MapTrace,
    NamedStructTrace,
    NewTypePayload,
    OptionTrace,
    PrimitiveKind,
    PrimitiveTrace,
    SeqTrace,
    StructPayload,
    TagStyle,
    TraceNode,
    TuplePayload,
    TupleTrace,
    UnitPayload,
    UnnamedStructTrace,
    Variant,
    node_kind,
)

__all__ = [
    "EnumRepresentation",
    "EnumTrace",
    "Field",
    "MapTrace",
    "NamedStructTrace",
    "NewTypePayload",
    "OptionTrace",
    "PrimitiveKind",
    "PrimitiveTrace",
    "SeqTrace",
    "StructPayload",
    "TagStyle",
    "TraceNode",
    "TuplePayload",
    "TupleTrace",
    "UnitPayload",
    "UnnamedStructTrace",
    "Variant",
    "node_kind",
]
