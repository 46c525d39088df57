"""
Enum representation resolver - shapes an enum as anyOf its variants.

Tagging conventions:
- external (default): {"<Variant>": payload}
- internal: {"<tag>": "<Variant>", ...payload fields}
- adjacent: {"<tag>": "<Variant>", "<content>": payload}
- untagged: payload

A convention other than external is used only when the trace carries an
EnumRepresentation. Without one, every enum gets the external form.
"""

import logging
from typing import Dict, List

from ..schema.models import (
    Composition,
    CompositeSchema,
    ObjectSchema,
    RefSchema,
    SchemaNode,
    SchemaType,
    primitive,
    tag_schema,
)
from ..trace.models import (
    EnumRepresentation,
    EnumTrace,
    NewTypePayload,
    StructPayload,
    TagStyle,
    TuplePayload,
    UnitPayload,
    Variant,
)

logger = logging.getLogger(__name__)

_DEFAULT_REPRESENTATION = EnumRepresentation(TagStyle.EXTERNAL)


class EnumRepresentationResolver:
    """Builds the registered anyOf definition for an enum trace"""

    def resolve(self, trace: EnumTrace, mapper) -> RefSchema:
        representation = trace.representation or _DEFAULT_REPRESENTATION
        return mapper.register(
            trace.name, lambda: self._build(trace, representation, mapper)
        )

    def _build(self, trace: EnumTrace, representation: EnumRepresentation, mapper) -> CompositeSchema:
        candidates: List[SchemaNode] = []
        for variant in trace.variants:
            payload = self.payload_schema(variant, mapper)
            candidates.append(self._candidate(trace.name, variant, payload, representation))
        return CompositeSchema(keyword=Composition.ANY_OF, schemas=candidates)

    @staticmethod
    def payload_schema(variant: Variant, mapper) -> SchemaNode:
        """Schema for the data carried by one variant"""
        payload = variant.payload
        if isinstance(payload, UnitPayload):
            return primitive(SchemaType.NULL)
        if isinstance(payload, NewTypePayload):
            return mapper.map(payload.shape)
        if isinstance(payload, TuplePayload):
            return mapper.positional_object(payload.shapes)
        if isinstance(payload, StructPayload):
            return mapper.map_fields(payload.fields)
        return mapper.map(payload)

    def _candidate(
        self,
        enum_name: str,
        variant: Variant,
        payload: SchemaNode,
        representation: EnumRepresentation,
    ) -> SchemaNode:
        style = representation.style
        is_unit = isinstance(variant.payload, UnitPayload)

        if style == TagStyle.UNTAGGED:
            return payload

        if style == TagStyle.ADJACENT:
            properties: Dict[str, SchemaNode] = {representation.tag: tag_schema(variant.name)}
            if not is_unit:
                properties[representation.content] = payload
            return ObjectSchema(properties=properties)

        if style == TagStyle.INTERNAL:
            internal = self._internal_candidate(variant, payload, representation.tag, is_unit)
            if internal is not None:
                return internal
            logger.warning(
                f"Variant {enum_name}::{variant.name} cannot be internally tagged, "
                f"using external tagging"
            )

        return ObjectSchema(properties={variant.name: payload})

    @staticmethod
    def _internal_candidate(variant: Variant, payload: SchemaNode, tag: str, is_unit: bool):
        tag_object = ObjectSchema(properties={tag: tag_schema(variant.name)})
        if is_unit:
            return tag_object
        if isinstance(payload, ObjectSchema) and payload.additional_properties is None:
            if isinstance(variant.payload, TuplePayload):
                return None
            properties: Dict[str, SchemaNode] = {tag: tag_schema(variant.name)}
            for name, schema in payload.properties.items():
                if name != tag:
                    properties[name] = schema
            return ObjectSchema(properties=properties)
        if isinstance(payload, RefSchema):
            return CompositeSchema(keyword=Composition.ALL_OF, schemas=[tag_object, payload])
        return None
