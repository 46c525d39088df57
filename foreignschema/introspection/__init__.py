"""
Introspection Module

Produces structural traces for Python types at runtime:
- Scalars, options, sequences, maps and tuples
- Dataclasses, NamedTuple and TypedDict classes
- NewType aliases and enum.Enum subclasses
- Tagged unions marked with TaggedUnion
"""

from .type_tracer import TaggedUnion, TypeTracer, trace_of

__all__ = [
    "TaggedUnion",
    "TypeTracer",
    "trace_of",
]
