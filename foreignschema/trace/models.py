"""
Structural trace models - the runtime description of a type's serialized shape.

A trace is a tree of nodes:
- Primitive leaves (strings, integers of every width, floats, booleans, unit)
- Containers (option, sequence, map, anonymous tuple)
- Named containers (struct with fields, tuple struct, enum with variants)

Named nodes may point back at each other, so the object graph of a trace can be
cyclic. Named nodes therefore compare by identity and print only their name.
"""

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Union


class PrimitiveKind(str, Enum):
    """Primitive leaf kinds reported by a trace producer"""
    STR = "str"
    CHAR = "char"
    BOOL = "bool"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    F32 = "f32"
    F64 = "f64"
    UNIT = "unit"


class TagStyle(str, Enum):
    """How the variant of an enum value is encoded on the wire"""
    EXTERNAL = "external"
    INTERNAL = "internal"
    ADJACENT = "adjacent"
    UNTAGGED = "untagged"


@dataclass(frozen=True)
class EnumRepresentation:
    """Tagging convention signalled by the trace producer for one enum"""
    style: TagStyle = TagStyle.EXTERNAL
    tag: Optional[str] = None
    content: Optional[str] = None

    def __post_init__(self):
        if self.style in (TagStyle.INTERNAL, TagStyle.ADJACENT) and not self.tag:
            raise ValueError(f"{self.style.value} tagging requires a tag field name")
        if self.style == TagStyle.ADJACENT and not self.content:
            raise ValueError("adjacent tagging requires a content field name")


@dataclass(frozen=True)
class PrimitiveTrace:
    """A primitive leaf, optionally restricted to a fixed set of literal values"""
    kind: PrimitiveKind
    values: tuple = ()

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        if self.values:
            return {"literal": self.kind.value, "values": list(self.values)}
        return self.kind.value



@dataclass(frozen=True)
class OptionTrace:
    inner: "TraceNode"

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        return {"option": self.inner.to_dict(_seen)}


@dataclass(frozen=True)
class SeqTrace:
    inner: "TraceNode"

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        return {"seq": self.inner.to_dict(_seen)}


@dataclass(frozen=True)
class MapTrace:
    key: "TraceNode"
    value: "TraceNode"

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        return {"map": {"key": self.key.to_dict(_seen), "value": self.value.to_dict(_seen)}}


@dataclass(frozen=True)
class TupleTrace:
    shapes: tuple

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        return {"tuple": [shape.to_dict(_seen) for shape in self.shapes]}


@dataclass(frozen=True)
class Field:
    """A named field of a struct or of a struct-like enum variant"""
    name: str
    shape: "TraceNode"


def _fields_to_dict(fields: List[Field], seen: Set[int]) -> Dict[str, Any]:
    return {f.name: f.shape.to_dict(seen) for f in fields}


class _NamedTrace:
    """Identity semantics shared by named trace nodes"""

    name: str

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def _enter(self, seen: Optional[Set[int]]) -> Optional[Set[int]]:
        """Return the visited set, or None if this node was already rendered."""
        seen = set() if seen is None else seen
        if id(self) in seen:
            return None
        seen.add(id(self))
        return seen


@dataclass(eq=False, repr=False)
class NamedStructTrace(_NamedTrace):
    name: str
    fields: List[Field] = dataclass_field(default_factory=list)

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        seen = self._enter(_seen)
        if seen is None:
            return {"ref": self.name}
        return {"struct": self.name, "fields": _fields_to_dict(self.fields, seen)}


@dataclass(eq=False, repr=False)
class UnnamedStructTrace(_NamedTrace):
    name: str
    shapes: List["TraceNode"] = dataclass_field(default_factory=list)

    def is_newtype(self) -> bool:
        """Check if this is a single-field wrapper"""
        return len(self.shapes) == 1

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        seen = self._enter(_seen)
        if seen is None:
            return {"ref": self.name}
        key = "newtype" if self.is_newtype() else "tuple_struct"
        return {key: self.name, "shapes": [s.to_dict(seen) for s in self.shapes]}


@dataclass(frozen=True)
class UnitPayload:
    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        return None


@dataclass(frozen=True)
class NewTypePayload:
    shape: "TraceNode"

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        return self.shape.to_dict(_seen)


@dataclass(frozen=True)
class TuplePayload:
    shapes: tuple

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        return [s.to_dict(_seen) for s in self.shapes]


@dataclass(frozen=True)
class StructPayload:
    fields: tuple

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        return _fields_to_dict(list(self.fields), _seen if _seen is not None else set())


VariantPayload = Union[UnitPayload, NewTypePayload, TuplePayload, StructPayload]


@dataclass(frozen=True)
class Variant:
    """One alternative of an enum, with its payload shape"""
    name: str
    payload: VariantPayload = UnitPayload()


@dataclass(eq=False, repr=False)
class EnumTrace(_NamedTrace):
    name: str
    variants: List[Variant] = dataclass_field(default_factory=list)
    representation: Optional[EnumRepresentation] = None

    def to_dict(self, _seen: Optional[Set[int]] = None) -> Any:
        seen = self._enter(_seen)
        if seen is None:
            return {"ref": self.name}
        result = {
            "enum": self.name,
            "variants": {v.name: v.payload.to_dict(seen) for v in self.variants},
        }
        if self.representation is not None:
            result["representation"] = {
                "style": self.representation.style.value,
                "tag": self.representation.tag,
                "content": self.representation.content,
            }
        return result


TraceNode = Union[
    PrimitiveTrace,
    OptionTrace,
    SeqTrace,
    MapTrace,
    TupleTrace,
    NamedStructTrace,
    UnnamedStructTrace,
    EnumTrace,
]


def node_kind(node: Any) -> str:
    """Short kind label for a trace node, used in logs and errors"""
    return type(node).__name__.replace("Trace", "")
