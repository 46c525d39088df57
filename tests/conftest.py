"""Shared fixtures: hand-built structural traces."""
import pytest

from foreignschema.registry import TypeRegistry
from foreignschema.trace import (
    Field,
    NamedStructTrace,
    PrimitiveKind,
    PrimitiveTrace,
    SeqTrace,
)


@pytest.fixture
def registry():
    """Fresh type registry"""
    return TypeRegistry()


@pytest.fixture
def external_type_trace():
    """ExternalType { id: i64, name: str }"""
    return NamedStructTrace(
        name="ExternalType",
        fields=[
            Field("id", PrimitiveTrace(PrimitiveKind.I64)),
            Field("name", PrimitiveTrace(PrimitiveKind.STR)),
        ],
    )


@pytest.fixture
def tree_trace():
    """TreeNode { value: i32, children: list[TreeNode] } as a cyclic trace"""
    node = NamedStructTrace(name="TreeNode")
    node.fields.append(Field("value", PrimitiveTrace(PrimitiveKind.I32)))
    node.fields.append(Field("children", SeqTrace(node)))
    return node
