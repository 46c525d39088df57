"""
Mapping engine - structural traces to OpenAPI schema nodes.

Components:
- Leaf mapper (primitive kinds)
- Composite mapper (containers, structs, registry-backed references)
- Newtype unwrapper
- Enum representation resolver
- Nullable wrapper
"""

from .composite import TraceMapper, map_trace
from .enums import EnumRepresentationResolver
from .leaf import map_leaf
from .newtype import unwrap_newtype
from .nullable import make_nullable

__all__ = [
    "TraceMapper",
    "map_trace",
    "EnumRepresentationResolver",
    "map_leaf",
    "unwrap_newtype",
    "make_nullable",
]
