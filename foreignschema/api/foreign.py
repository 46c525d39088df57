"""
Foreign / ForeignOpt - schema entry points for types the API does not own.

Usage:
```python
registry = TypeRegistry()
Foreign.schema_ref(ExternalType, registry)     # {"$ref": ".../ExternalType"}
ForeignOpt.schema_ref(ExternalType, registry)  # nullable allOf envelope
Foreign(ExternalType(id=1, name="a")).to_json()
```
"""

import dataclasses
import enum
import logging
from collections.abc import Mapping
from typing import Any, Generic, Optional, TypeVar

from ..introspection.type_tracer import TypeTracer
from ..mapper.composite import TraceMapper
from ..mapper.nullable import make_nullable
from ..registry.type_registry import TypeRegistry
from ..schema.models import SchemaNode
from ..trace.models import EnumTrace, NamedStructTrace, UnnamedStructTrace

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_required(
    tp: Any, registry: TypeRegistry, tracer: Optional[TypeTracer] = None
) -> SchemaNode:
    """
    Resolve the schema of a type exposed as required

    Args:
        tp: The foreign type
        registry: Registry receiving named definitions
        tracer: Trace producer (a fresh TypeTracer by default)

    Returns:
        The mapped schema, a reference for named types

    Raises:
        TraceError: If the type cannot be introspected
    """
    tracer = tracer or TypeTracer()
    trace = tracer.trace(tp)
    return TraceMapper(registry).map(trace)


def resolve_optional(
    tp: Any, registry: TypeRegistry, tracer: Optional[TypeTracer] = None
) -> SchemaNode:
    """Resolve the schema of a type exposed as optional (nullable)"""
    return make_nullable(resolve_required(tp, registry, tracer))


def encode_value(value: Any) -> Any:
    """
    Convert a wrapped value to JSON-ready data

    Values with their own to_dict() delegate to it. Dataclasses, NamedTuples and
    mappings become dicts, sequences and sets become lists and Enum members
    become their values, recursively. Bytes become lists of byte values, like
    the u8 sequences they are traced as.
    """
    if value is None:
        return None
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, enum.Enum):
        return encode_value(value.value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: encode_value(getattr(value, f.name)) for f in dataclasses.fields(value)
        }
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {name: encode_value(item) for name, item in value._asdict().items()}
    if isinstance(value, Mapping):
        return {encode_value(key): encode_value(item) for key, item in value.items()}
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [encode_value(item) for item in value]
    return value


def _exposed_name(trace) -> Optional[str]:
    if isinstance(trace, UnnamedStructTrace) and trace.is_newtype():
        return _exposed_name(trace.shapes[0])
    if isinstance(trace, (NamedStructTrace, UnnamedStructTrace, EnumTrace)):
        return trace.name
    return None


class Foreign(Generic[T]):
    """Wraps a value of a foreign type for use as a required API payload"""

    is_required = True

    def __init__(self, value: T):
        self.value = value

    @classmethod
    def schema_ref(
        cls, tp: Any, registry: TypeRegistry, tracer: Optional[TypeTracer] = None
    ) -> SchemaNode:
        return resolve_required(tp, registry, tracer)

    @classmethod
    def schema_name(cls, tp: Any, tracer: Optional[TypeTracer] = None) -> Optional[str]:
        """
        Name under which the type's schema is registered

        A newtype is exposed under its inner type's name. Returns None for
        shapes that produce no named definition.
        """
        tracer = tracer or TypeTracer()
        return _exposed_name(tracer.trace(tp))

    def to_json(self) -> Any:
        return encode_value(self.value)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Foreign):
            return type(self) is type(other) and self.value == other.value
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class ForeignOpt(Foreign[Optional[T]]):
    """Wraps an optional value of a foreign type; its schema is nullable"""

    is_required = False

    def __init__(self, value: Optional[T] = None):
        super().__init__(value)

    @classmethod
    def schema_ref(
        cls, tp: Any, registry: TypeRegistry, tracer: Optional[TypeTracer] = None
    ) -> SchemaNode:
        return resolve_optional(tp, registry, tracer)
