"""
Type Tracer - Produces structural traces from Python type annotations.

Supports:
- Builtin scalars (str, int, float, bool, None, bytes)
- Optional / X | None
- Sequences, sets, maps and tuples (typing and builtin generics)
- typing.NewType (as newtypes) and typing.Literal (as literal values)
- enum.Enum subclasses (members sent as their values)
- Dataclasses, NamedTuple and TypedDict classes (named structs); Required,
  NotRequired and ReadOnly keys are traced as their value type
- Tagged unions declared with Annotated[Union[...], TaggedUnion(...)]

Named types are memoized per tracer, so self- and mutually-referential classes
come out as cyclic trace graphs instead of infinite recursion.
"""

import collections
import collections.abc
import dataclasses
import enum
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, get_args, get_origin, get_type_hints

from ..errors import TraceError
from ..trace.models import (
    EnumRepresentation,
    EnumTrace,
    Field,
    MapTrace,
    NamedStructTrace,
    NewTypePayload,
    OptionTrace,
    PrimitiveKind,
    PrimitiveTrace,
    SeqTrace,
    TagStyle,
    TupleTrace,
    UnnamedStructTrace,
    Variant,
)

logger = logging.getLogger(__name__)

_PRIMITIVES: Dict[type, PrimitiveKind] = {
    str: PrimitiveKind.STR,
    bool: PrimitiveKind.BOOL,
    int: PrimitiveKind.I64,
    float: PrimitiveKind.F64,
    type(None): PrimitiveKind.UNIT,
}

_BYTE_TYPES = (bytes, bytearray)

_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.deque,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
)

_MAPPING_ORIGINS = (
    dict,
    collections.OrderedDict,
    collections.defaultdict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)

_UNION_ORIGINS = (typing.Union, types.UnionType)

# TypedDict key qualifiers; the value shape is the wrapped type
_KEY_QUALIFIERS = {typing.Required, typing.NotRequired}
if hasattr(typing, "ReadOnly"):
    _KEY_QUALIFIERS.add(typing.ReadOnly)


@dataclass(frozen=True)
class TaggedUnion:
    """
    Marks a Union as a named enum for tracing

    Usage:
    ```python
    Shape = Annotated[Union[Circle, Square], TaggedUnion("Shape", tag="kind")]
    ```

    tag alone means internal tagging, tag plus content means adjacent tagging,
    untagged=True means no tag at all, and no arguments means external tagging.
    """
    name: str
    tag: Optional[str] = None
    content: Optional[str] = None
    untagged: bool = False

    def representation(self) -> EnumRepresentation:
        if self.untagged:
            return EnumRepresentation(TagStyle.UNTAGGED)
        if self.tag and self.content:
            return EnumRepresentation(TagStyle.ADJACENT, tag=self.tag, content=self.content)
        if self.tag:
            return EnumRepresentation(TagStyle.INTERNAL, tag=self.tag)
        return EnumRepresentation(TagStyle.EXTERNAL)


class TypeTracer:
    """
    Traces Python types into structural trace nodes

    Usage:
    ```python
    tracer = TypeTracer()
    trace = tracer.trace(Order)
    ```
    """

    def __init__(self, qualified_names: bool = False):
        """
        Initialize Type Tracer

        Args:
            qualified_names: Name registry entries module.QualName instead of
                the bare class name
        """
        self.qualified_names = qualified_names
        self._named: Dict[Any, Any] = {}

    def type_name(self, tp: Any) -> str:
        """Registry name for a named type"""
        if self.qualified_names:
            module = getattr(tp, "__module__", None)
            qualname = getattr(tp, "__qualname__", None) or tp.__name__
            return f"{module}.{qualname}" if module else qualname
        return tp.__name__

    def trace(self, tp: Any):
        """
        Trace a type

        Args:
            tp: A class, typing construct or NewType

        Returns:
            Root trace node

        Raises:
            TraceError: If the type has no supported serialized shape
        """
        if tp is None:
            return PrimitiveTrace(PrimitiveKind.UNIT)

        if isinstance(tp, type) and tp in _PRIMITIVES:
            return PrimitiveTrace(_PRIMITIVES[tp])

        if tp in _BYTE_TYPES:
            return SeqTrace(PrimitiveTrace(PrimitiveKind.U8))

        if hasattr(tp, "__supertype__"):
            return self._trace_newtype(tp)

        origin = get_origin(tp)
        args = get_args(tp)

        if origin is typing.Annotated:
            base, *metadata = args
            for marker in metadata:
                if isinstance(marker, TaggedUnion):
                    return self._trace_tagged_union(base, marker)
            return self.trace(base)

        if origin is typing.Literal:
            kinds = {_PRIMITIVES.get(type(arg)) for arg in args}
            if len(kinds) != 1 or None in kinds:
                raise TraceError(f"Literal values must share one primitive type: {tp!r}")
            return PrimitiveTrace(kinds.pop(), values=tuple(args))

        if origin in _KEY_QUALIFIERS:
            return self.trace(args[0])

        if origin in _UNION_ORIGINS:
            return self._trace_union(tp, args)

        if origin is not None:
            return self._trace_generic(tp, origin, args)

        if isinstance(tp, type):
            if issubclass(tp, enum.Enum):
                return self._trace_enum(tp)
            if dataclasses.is_dataclass(tp):
                return self._trace_struct(tp, [f.name for f in dataclasses.fields(tp)])
            if issubclass(tp, tuple) and hasattr(tp, "_fields"):
                return self._trace_struct(tp, list(tp._fields))
            if typing.is_typeddict(tp):
                return self._trace_struct(tp, list(tp.__annotations__))
            if tp in _SEQUENCE_ORIGINS or tp in _MAPPING_ORIGINS or tp is tuple:
                raise TraceError(f"Container {tp.__name__} needs type parameters to be traced")

        raise TraceError(f"Type {tp!r} cannot be traced")

    def _trace_union(self, tp: Any, args: tuple):
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(members) < len(args):
            return OptionTrace(self.trace(members[0]))
        raise TraceError(
            f"Union {tp!r} has no name; declare it as "
            f"Annotated[Union[...], TaggedUnion(name)]"
        )

    def _trace_generic(self, tp: Any, origin: Any, args: tuple):
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return SeqTrace(self.trace(args[0]))
            if args == ((),):
                return TupleTrace(())
            return TupleTrace(tuple(self.trace(arg) for arg in args))

        if origin in _SEQUENCE_ORIGINS:
            if not args:
                raise TraceError(f"Sequence {tp!r} needs an item type")
            return SeqTrace(self.trace(args[0]))

        if origin in _MAPPING_ORIGINS:
            if len(args) != 2:
                raise TraceError(f"Mapping {tp!r} needs key and value types")
            return MapTrace(self.trace(args[0]), self.trace(args[1]))

        raise TraceError(f"Generic type {tp!r} cannot be traced")

    def _trace_newtype(self, tp: Any) -> UnnamedStructTrace:
        if tp in self._named:
            return self._named[tp]
        node = UnnamedStructTrace(name=self.type_name(tp))
        self._named[tp] = node
        with self._building(tp):
            node.shapes.append(self.trace(tp.__supertype__))
        return node

    def _trace_enum(self, tp: type) -> EnumTrace:
        """
        Trace an Enum class

        Members are sent as their values, so each variant carries a literal
        primitive of that value and the enum is untagged.
        """
        if tp in self._named:
            return self._named[tp]
        variants = []
        for member in tp:
            kind = _PRIMITIVES.get(type(member.value))
            if kind is None or kind == PrimitiveKind.UNIT:
                raise TraceError(
                    f"Enum member {tp.__name__}.{member.name} has a value of "
                    f"unsupported type {type(member.value).__name__}"
                )
            literal = PrimitiveTrace(kind, values=(member.value,))
            variants.append(Variant(name=member.name, payload=NewTypePayload(literal)))
        node = EnumTrace(
            name=self.type_name(tp),
            variants=variants,
            representation=EnumRepresentation(TagStyle.UNTAGGED),
        )
        self._named[tp] = node
        return node

    def _trace_struct(self, tp: type, field_names: List[str]) -> NamedStructTrace:
        if tp in self._named:
            return self._named[tp]
        node = NamedStructTrace(name=self.type_name(tp))
        self._named[tp] = node
        with self._building(tp):
            try:
                hints = get_type_hints(tp, include_extras=True)
            except NameError as e:
                raise TraceError(f"Unresolved annotation on {tp.__name__}: {e}") from e
            for field_name in field_names:
                if field_name not in hints:
                    raise TraceError(f"Field {tp.__name__}.{field_name} has no annotation")
                node.fields.append(Field(field_name, self.trace(hints[field_name])))
        logger.debug(f"Traced struct {node.name} with {len(node.fields)} fields")
        return node

    def _trace_tagged_union(self, base: Any, marker: TaggedUnion) -> EnumTrace:
        key = ("tagged", marker.name)
        if key in self._named:
            return self._named[key]
        if get_origin(base) not in _UNION_ORIGINS:
            raise TraceError(f"TaggedUnion {marker.name} must annotate a Union, got {base!r}")

        node = EnumTrace(name=marker.name, representation=marker.representation())
        self._named[key] = node
        with self._building(key):
            for member in get_args(base):
                if not isinstance(member, type) or member is type(None):
                    raise TraceError(
                        f"TaggedUnion {marker.name} members must be classes, got {member!r}"
                    )
                node.variants.append(
                    Variant(name=member.__name__, payload=NewTypePayload(self.trace(member)))
                )
        return node

    def _building(self, key: Any) -> "_MemoGuard":
        return _MemoGuard(self._named, key)


class _MemoGuard:
    """Drops a half-built named node from the memo if tracing it fails"""

    def __init__(self, memo: Dict[Any, Any], key: Any):
        self.memo = memo
        self.key = key

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.memo.pop(self.key, None)
        return False


def trace_of(tp: Any, qualified_names: bool = False):
    """Trace a type with a fresh tracer"""
    return TypeTracer(qualified_names=qualified_names).trace(tp)
