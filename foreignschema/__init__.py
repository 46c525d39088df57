"""
foreignschema - OpenAPI schemas for types you do not own.

Traces the serialized shape of a Python type at runtime and maps it to OpenAPI
schema nodes, registering each named type once:

```python
registry = TypeRegistry()
schema = resolve_required(ExternalType, registry)
registry.to_dict()   # components/schemas
```
"""

__version__ = "0.1.0"

from .api.foreign import Foreign, ForeignOpt, resolve_optional, resolve_required
from .errors import (
    ForeignSchemaError,
    RegistryInvariantError,
    TraceError,
    UnmappableTraceError,
)
from .introspection.type_tracer import TaggedUnion, TypeTracer, trace_of
from .mapper.composite import TraceMapper, map_trace
from .mapper.nullable import make_nullable
from .registry.type_registry import TypeRegistry

__all__ = [
    "Foreign",
    "ForeignOpt",
    "ForeignSchemaError",
    "RegistryInvariantError",
    "TaggedUnion",
    "TraceError",
    "TraceMapper",
    "TypeRegistry",
    "TypeTracer",
    "UnmappableTraceError",
    "make_nullable",
    "map_trace",
    "resolve_optional",
    "resolve_required",
    "trace_of",
]
