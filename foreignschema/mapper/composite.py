"""
Composite mapper - walks a structural trace and produces schema nodes.

Handles:
- Options (mapped as their inner shape; nullability is the facade's decision)
- Sequences and string-keyed maps
- Anonymous tuples and tuple structs (positional objects)
- Named structs (registered once, returned as $ref)
- Newtypes and enums (delegated to their own components)
"""

import logging
from typing import Dict, Iterable, Optional

from ..errors import UnmappableTraceError
from ..registry.type_registry import RegistrationState, TypeRegistry
from ..schema.models import (
    ArraySchema,
    ObjectSchema,
    RefSchema,
    SchemaNode,
    SchemaType,
    primitive,
)
from ..trace.models import (
    EnumTrace,
    Field,
    MapTrace,
    NamedStructTrace,
    OptionTrace,
    PrimitiveTrace,
    SeqTrace,
    TupleTrace,
    UnnamedStructTrace,
    node_kind,
)
from .enums import EnumRepresentationResolver
from .leaf import map_leaf
from .newtype import unwrap_newtype

logger = logging.getLogger(__name__)


class TraceMapper:
    """Maps structural trace nodes to schema nodes, registering named types"""

    def __init__(
        self,
        registry: TypeRegistry,
        enum_resolver: Optional[EnumRepresentationResolver] = None,
    ):
        self.registry = registry
        self.enum_resolver = enum_resolver or EnumRepresentationResolver()

    def map(self, trace) -> SchemaNode:
        """
        Map a trace node to a schema node

        Args:
            trace: Any structural trace node

        Returns:
            Inline schema for anonymous shapes, RefSchema for named types

        Raises:
            UnmappableTraceError: If the node is not a known trace shape
        """
        if isinstance(trace, PrimitiveTrace):
            return map_leaf(trace)

        if isinstance(trace, OptionTrace):
            return self.map(trace.inner)

        if isinstance(trace, SeqTrace):
            return ArraySchema(items=self.map(trace.inner))

        if isinstance(trace, MapTrace):
            # Only string keys are representable; other key kinds are treated as strings
            return ObjectSchema(additional_properties=self.map(trace.value))

        if isinstance(trace, TupleTrace):
            return self.positional_object(trace.shapes)

        if isinstance(trace, NamedStructTrace):
            return self._map_named_struct(trace)

        if isinstance(trace, UnnamedStructTrace):
            if trace.is_newtype():
                return unwrap_newtype(trace.name, trace.shapes[0], self)
            return self._map_tuple_struct(trace)

        if isinstance(trace, EnumTrace):
            return self.enum_resolver.resolve(trace, self)

        raise UnmappableTraceError(node_kind(trace), getattr(trace, "name", None))

    def map_fields(self, fields: Iterable[Field]) -> ObjectSchema:
        """Map named fields, in declared order, to an inline object"""
        properties: Dict[str, SchemaNode] = {}
        for field in fields:
            properties[field.name] = self.map(field.shape)
        return ObjectSchema(properties=properties)

    def positional_object(self, shapes: Iterable) -> ObjectSchema:
        """Map positional shapes to an object keyed "0", "1", ..."""
        properties: Dict[str, SchemaNode] = {}
        for index, shape in enumerate(shapes):
            properties[str(index)] = self.map(shape)
        return ObjectSchema(properties=properties)

    def register(self, name: str, build) -> RefSchema:
        """
        Register a named definition once and return a reference to it

        Args:
            name: Registry name of the type
            build: Zero-argument callable producing the definition body; only
                called when this call claimed the name

        Raises:
            Whatever build raises; the claim on name is released first
        """
        if self.registry.begin(name) == RegistrationState.START:
            try:
                definition = build()
            except Exception:
                self.registry.abandon(name)
                raise
            self.registry.finish(name, definition)
        return RefSchema(name)

    def _map_named_struct(self, trace: NamedStructTrace) -> RefSchema:
        return self.register(trace.name, lambda: self.map_fields(trace.fields))

    def _map_tuple_struct(self, trace: UnnamedStructTrace) -> RefSchema:
        if not trace.shapes:
            # Unit struct
            return self.register(trace.name, lambda: primitive(SchemaType.NULL))
        logger.debug(f"Tuple struct {trace.name} mapped to a positional object")
        return self.register(trace.name, lambda: self.positional_object(trace.shapes))


def map_trace(trace, registry: TypeRegistry) -> SchemaNode:
    """Map a trace against a registry with the default enum resolver"""
    return TraceMapper(registry).map(trace)
