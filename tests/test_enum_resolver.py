"""
Tests for the enum representation resolver.

Tests:
- Default external tagging for every payload kind
- Internal, adjacent and untagged representations
- Fallback when a variant cannot be internally tagged
- Registration and cycles through enums
"""

import logging

import pytest

from foreignschema.mapper import map_trace
from foreignschema.schema import RefSchema
from foreignschema.trace import (
    EnumRepresentation,
    EnumTrace,
    Field,
    NamedStructTrace,
    NewTypePayload,
    PrimitiveKind,
    PrimitiveTrace,
    SeqTrace,
    StructPayload,
    TagStyle,
    TuplePayload,
    UnitPayload,
    Variant,
)

REF = "#/components/schemas/"
F64 = PrimitiveTrace(PrimitiveKind.F64)
STR = PrimitiveTrace(PrimitiveKind.STR)


@pytest.fixture
def circle_trace():
    return NamedStructTrace(name="Circle", fields=[Field("radius", F64)])


def shape_trace(representation=None):
    """Enum with a unit, a newtype, a tuple and a struct variant"""
    return EnumTrace(
        name="Shape",
        variants=[
            Variant("Empty", UnitPayload()),
            Variant("Label", NewTypePayload(STR)),
            Variant("Point", TuplePayload((F64, F64))),
            Variant("Rect", StructPayload((Field("w", F64), Field("h", F64)))),
        ],
        representation=representation,
    )


def tag(name):
    return {"type": "string", "enum": [name]}


class TestExternalTagging:
    """Test the default representation."""

    def test_enum_is_registered(self, registry):
        schema = map_trace(shape_trace(), registry)
        assert schema == RefSchema("Shape")
        assert registry.names() == ["Shape"]

    def test_variants_in_declared_order(self, registry):
        map_trace(shape_trace(), registry)
        assert registry.to_dict()["Shape"] == {
            "anyOf": [
                {"type": "object", "properties": {"Empty": {"type": "null"}}},
                {"type": "object", "properties": {"Label": {"type": "string"}}},
                {
                    "type": "object",
                    "properties": {
                        "Point": {
                            "type": "object",
                            "properties": {"0": {"type": "number"}, "1": {"type": "number"}},
                        }
                    },
                },
                {
                    "type": "object",
                    "properties": {
                        "Rect": {
                            "type": "object",
                            "properties": {"w": {"type": "number"}, "h": {"type": "number"}},
                        }
                    },
                },
            ]
        }

    def test_explicit_external_matches_default(self, registry):
        map_trace(shape_trace(EnumRepresentation(TagStyle.EXTERNAL)), registry)
        other = type(registry)()
        map_trace(shape_trace(), other)
        assert registry.to_dict() == other.to_dict()

    def test_newtype_variant_over_named_struct(self, registry, circle_trace):
        trace = EnumTrace(name="Figure", variants=[Variant("Circle", NewTypePayload(circle_trace))])
        map_trace(trace, registry)
        assert registry.to_dict()["Figure"] == {
            "anyOf": [{"type": "object", "properties": {"Circle": {"$ref": REF + "Circle"}}}]
        }
        assert registry.names() == ["Figure", "Circle"]

    def test_recursive_enum(self, registry):
        expr = EnumTrace(name="Expr")
        expr.variants.append(Variant("Lit", NewTypePayload(PrimitiveTrace(PrimitiveKind.I64))))
        expr.variants.append(Variant("Sum", NewTypePayload(SeqTrace(expr))))

        map_trace(expr, registry)

        sum_variant = registry.to_dict()["Expr"]["anyOf"][1]
        assert sum_variant["properties"]["Sum"]["items"] == {"$ref": REF + "Expr"}


class TestInternalTagging:
    """Test tag-inside-payload representation."""

    def test_struct_and_unit_variants(self, registry):
        trace = EnumTrace(
            name="Event",
            variants=[
                Variant("Started", UnitPayload()),
                Variant("Moved", StructPayload((Field("x", F64), Field("y", F64)))),
            ],
            representation=EnumRepresentation(TagStyle.INTERNAL, tag="type"),
        )
        map_trace(trace, registry)
        assert registry.to_dict()["Event"] == {
            "anyOf": [
                {"type": "object", "properties": {"type": tag("Started")}},
                {
                    "type": "object",
                    "properties": {
                        "type": tag("Moved"),
                        "x": {"type": "number"},
                        "y": {"type": "number"},
                    },
                },
            ]
        }

    def test_newtype_over_named_struct_uses_all_of(self, registry, circle_trace):
        trace = EnumTrace(
            name="Figure",
            variants=[Variant("Circle", NewTypePayload(circle_trace))],
            representation=EnumRepresentation(TagStyle.INTERNAL, tag="kind"),
        )
        map_trace(trace, registry)
        assert registry.to_dict()["Figure"] == {
            "anyOf": [
                {
                    "allOf": [
                        {"type": "object", "properties": {"kind": tag("Circle")}},
                        {"$ref": REF + "Circle"},
                    ]
                }
            ]
        }
        # The referenced definition never gets the tag
        assert "kind" not in registry.to_dict()["Circle"]["properties"]

    def test_untaggable_variants_fall_back(self, registry, caplog):
        trace = EnumTrace(
            name="Mixed",
            variants=[
                Variant("Label", NewTypePayload(STR)),
                Variant("Point", TuplePayload((F64, F64))),
            ],
            representation=EnumRepresentation(TagStyle.INTERNAL, tag="kind"),
        )
        with caplog.at_level(logging.WARNING):
            map_trace(trace, registry)

        anyof = registry.to_dict()["Mixed"]["anyOf"]
        assert list(anyof[0]["properties"]) == ["Label"]
        assert list(anyof[1]["properties"]) == ["Point"]
        assert "Mixed::Label" in caplog.text
        assert "Mixed::Point" in caplog.text

    def test_representation_requires_tag(self):
        with pytest.raises(ValueError):
            EnumRepresentation(TagStyle.INTERNAL)


class TestAdjacentAndUntagged:
    """Test the remaining representations."""

    def test_adjacent(self, registry):
        map_trace(shape_trace(EnumRepresentation(TagStyle.ADJACENT, tag="t", content="c")), registry)
        anyof = registry.to_dict()["Shape"]["anyOf"]
        assert anyof[0] == {"type": "object", "properties": {"t": tag("Empty")}}
        assert anyof[1] == {
            "type": "object",
            "properties": {"t": tag("Label"), "c": {"type": "string"}},
        }
        assert list(anyof[3]["properties"]) == ["t", "c"]

    def test_adjacent_requires_content(self):
        with pytest.raises(ValueError):
            EnumRepresentation(TagStyle.ADJACENT, tag="t")

    def test_untagged(self, registry, circle_trace):
        trace = EnumTrace(
            name="Value",
            variants=[
                Variant("Nothing", UnitPayload()),
                Variant("Text", NewTypePayload(STR)),
                Variant("Circle", NewTypePayload(circle_trace)),
            ],
            representation=EnumRepresentation(TagStyle.UNTAGGED),
        )
        map_trace(trace, registry)
        assert registry.to_dict()["Value"] == {
            "anyOf": [{"type": "null"}, {"type": "string"}, {"$ref": REF + "Circle"}]
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
