"""Exceptions raised while tracing types and mapping traces to schemas."""
from typing import Optional


class ForeignSchemaError(Exception):
    """Base class for all foreignschema errors."""


class TraceError(ForeignSchemaError):
    """A type could not be introspected into a structural trace."""


class RegistryInvariantError(ForeignSchemaError, RuntimeError):
    """The type registry was driven through an invalid state transition."""

    def __init__(self, message: str, type_name: Optional[str] = None):
        super().__init__(message)
        self.type_name = type_name


class UnmappableTraceError(ForeignSchemaError, RuntimeError):
    """A mapper reached a trace node outside the supported shapes."""

    def __init__(self, node_kind: str, type_name: Optional[str] = None):
        where = f" while mapping {type_name}" if type_name else ""
        super().__init__(f"Cannot map trace node of kind {node_kind}{where}")
        self.node_kind = node_kind
        self.type_name = type_name
