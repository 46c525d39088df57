"""
Tests for the Foreign / ForeignOpt facade.

Tests:
- Required and optional resolution end to end
- Nullable envelopes never alter registered definitions
- Newtype transparency through NewType
- Pass-through value encoding, nested values included
- Schemas agree with the encoded values
"""

import json

import pytest

from foreignschema import Foreign, ForeignOpt, TypeRegistry, TypeTracer
from foreignschema.api import encode_value, resolve_optional, resolve_required
from foreignschema.errors import TraceError
from foreignschema.schema import NullableSchema, RefSchema

from sample_types import (
    Account,
    AccountRef,
    Color,
    Drawing,
    ExternalType,
    Level,
    Pair,
    Plain,
    Point,
    Status,
    TreeNode,
    UserId,
)

EXTERNAL_DEFINITION = {
    "type": "object",
    "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
}


class TestRequiredResolution:
    """Test resolve_required."""

    def test_external_type(self, registry):
        schema = resolve_required(ExternalType, registry)
        assert schema == RefSchema("ExternalType")
        assert registry.to_dict() == {"ExternalType": EXTERNAL_DEFINITION}

    def test_dedup_through_two_fields(self, registry):
        resolve_required(Pair, registry)
        definitions = registry.to_dict()
        assert list(definitions) == ["Pair", "ExternalType"]
        assert definitions["Pair"]["properties"]["left"] == definitions["Pair"]["properties"]["right"]

    def test_self_referential(self, registry):
        assert resolve_required(TreeNode, registry) == RefSchema("TreeNode")
        items = registry.to_dict()["TreeNode"]["properties"]["children"]["items"]
        assert items == {"$ref": "#/components/schemas/TreeNode"}

    def test_newtype_over_integer(self, registry):
        assert resolve_required(UserId, registry).to_dict() == {"type": "integer"}
        assert len(registry) == 0

    def test_newtype_over_struct(self, registry):
        assert resolve_required(AccountRef, registry) == RefSchema("ExternalType")
        assert registry.names() == ["ExternalType"]

    def test_graph_with_enums(self, registry):
        assert resolve_required(Drawing, registry) == RefSchema("Drawing")
        assert registry.names() == ["Drawing", "Shape", "Circle", "Square", "Color"]

        drawing = registry.to_dict()["Drawing"]["properties"]
        assert drawing["shapes"] == {
            "type": "array",
            "items": {"$ref": "#/components/schemas/Shape"},
        }
        assert drawing["palette"]["additionalProperties"] == {
            "$ref": "#/components/schemas/Color"
        }
        assert drawing["owner"] == {"type": "integer"}

    def test_shared_tracer_and_registry(self, registry):
        tracer = TypeTracer()
        resolve_required(Pair, registry, tracer)
        resolve_required(ExternalType, registry, tracer)
        assert registry.names() == ["Pair", "ExternalType"]

    def test_trace_error_propagates(self, registry):
        with pytest.raises(TraceError):
            resolve_required(Plain, registry)
        assert len(registry) == 0

    def test_deterministic(self):
        outputs = []
        for _ in range(3):
            registry = TypeRegistry()
            root = resolve_required(Drawing, registry)
            outputs.append(json.dumps([root.to_dict(), registry.to_dict()]))
        assert len(set(outputs)) == 1


class TestOptionalResolution:
    """Test resolve_optional."""

    def test_external_type_envelope(self, registry):
        schema = resolve_optional(ExternalType, registry)
        assert isinstance(schema, NullableSchema)
        assert schema.to_dict() == {
            "title": "ExternalType",
            "nullable": True,
            "allOf": [{"$ref": "#/components/schemas/ExternalType"}],
        }
        assert registry.to_dict() == {"ExternalType": EXTERNAL_DEFINITION}

    def test_required_then_optional(self, registry):
        required = resolve_required(ExternalType, registry)
        before = registry.to_dict()
        optional = resolve_optional(ExternalType, registry)

        assert required == RefSchema("ExternalType")
        assert optional.wrapped == required
        assert registry.to_dict() == before
        assert "nullable" not in registry.to_dict()["ExternalType"]

    def test_optional_newtype_is_inline(self, registry):
        assert resolve_optional(UserId, registry).to_dict() == {
            "type": "integer",
            "nullable": True,
        }


class TestForeignWrappers:
    """Test the Foreign and ForeignOpt classes."""

    def test_is_required(self):
        assert Foreign.is_required is True
        assert ForeignOpt.is_required is False

    def test_schema_ref(self, registry):
        assert Foreign.schema_ref(ExternalType, registry) == RefSchema("ExternalType")
        assert ForeignOpt.schema_ref(ExternalType, registry) == NullableSchema(
            RefSchema("ExternalType")
        )

    def test_schema_name(self):
        assert Foreign.schema_name(ExternalType) == "ExternalType"
        assert Foreign.schema_name(AccountRef) == "ExternalType"
        assert Foreign.schema_name(Color) == "Color"
        assert Foreign.schema_name(UserId) is None
        assert Foreign.schema_name(int) is None

    def test_to_json_dataclass(self):
        value = Foreign(ExternalType(id=1, name="hello"))
        assert value.to_json() == {"id": 1, "name": "hello"}

    def test_to_json_optional(self):
        assert ForeignOpt(None).to_json() is None
        assert ForeignOpt().to_json() is None
        assert ForeignOpt(ExternalType(id=2, name="x")).to_json() == {"id": 2, "name": "x"}

    def test_to_json_delegates(self):
        class Custom:
            def to_dict(self):
                return {"custom": True}

        assert Foreign(Custom()).to_json() == {"custom": True}
        assert Foreign(Color.RED).to_json() == "red"
        assert Foreign(Point(1.0, 2.0)).to_json() == {"x": 1.0, "y": 2.0}
        assert encode_value(42) == 42

    def test_equality(self):
        assert Foreign(1) == Foreign(1)
        assert Foreign(1) != ForeignOpt(1)
        assert repr(ForeignOpt(None)) == "ForeignOpt(None)"

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Foreign(ExternalType(id=1, name="a")))


class TestSchemaMatchesEncoding:
    """The resolved schema describes what to_json() sends."""

    @pytest.mark.parametrize("member", list(Color) + list(Level))
    def test_enum_member_value_is_allowed(self, registry, member):
        resolve_required(type(member), registry)
        definition = registry.to_dict()[type(member).__name__]
        allowed = [value for candidate in definition["anyOf"] for value in candidate["enum"]]
        assert Foreign(member).to_json() in allowed

    def test_enum_definition(self, registry):
        resolve_required(Color, registry)
        assert registry.to_dict()["Color"] == {
            "anyOf": [
                {"type": "string", "enum": ["red"]},
                {"type": "string", "enum": ["green"]},
            ]
        }

    def test_nested_values_are_json(self, registry):
        account = Account(
            login="ana",
            status=Status.ACTIVE,
            history=[Status.LOCKED, Status.ACTIVE],
            home=Point(1.0, 2.0),
            limits={Level.LOW: 10.0},
        )
        encoded = Foreign(account).to_json()

        assert encoded == {
            "login": "ana",
            "status": "active",
            "history": ["locked", "active"],
            "home": {"x": 1.0, "y": 2.0},
            "limits": {1: 10.0},
        }
        assert json.loads(json.dumps(encoded))["home"] == {"x": 1.0, "y": 2.0}

        resolve_required(Account, registry)
        properties = registry.to_dict()["Account"]["properties"]
        assert list(properties) == list(encoded)

    def test_bytes_encode_as_byte_list(self):
        assert encode_value(b"\x01\x02") == [1, 2]



if __name__ == "__main__":
    pytest.main([__file__, "-v"])
