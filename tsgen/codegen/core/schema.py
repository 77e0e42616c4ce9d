"""
Core type description for code generation.

Converts Python dataclasses and typing hints into a normalized
type graph that generators can walk consistently.
"""

import collections.abc
import dataclasses
import queue
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional


class Kind(Enum):
    """Structural kinds a type descriptor can have."""

    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    STRING = "string"
    INTERFACE = "interface"  # Open/dynamic value
    STRUCT = "struct"
    POINTER = "pointer"
    SLICE = "slice"
    MAP = "map"
    FUNC = "func"
    CHAN = "chan"
    OPAQUE = "opaque"  # Class with no structural meaning


IGNORE_NAME = "-"


@dataclass(frozen=True)
class FieldTag:
    """Per-field metadata: external name, optionality and output overrides."""

    json: Optional[str] = None
    omitempty: bool = False
    ts_type: Optional[str] = None
    ts_transform: Optional[str] = None

    @classmethod
    def parse(
        cls,
        json_tag: Optional[str] = None,
        ts_type: Optional[str] = None,
        ts_transform: Optional[str] = None,
    ) -> "FieldTag":
        """
        Build a tag from a ``"name,omitempty"`` style string.

        Args:
            json_tag: External name with optional comma separated modifiers
            ts_type: Explicit TypeScript type for the field
            ts_transform: Initializer expression containing ``__VALUE__``

        Returns:
            Parsed FieldTag
        """
        name = None
        omitempty = False
        if json_tag is not None:
            parts = json_tag.split(",")
            name = parts[0].strip() or None
            omitempty = "omitempty" in (part.strip() for part in parts[1:])

        return cls(
            json=name,
            omitempty=omitempty,
            ts_type=ts_type or None,
            ts_transform=ts_transform or None,
        )

    @classmethod
    def from_metadata(cls, metadata: typing.Mapping[str, Any]) -> "FieldTag":
        """Read a tag from dataclass field metadata."""
        return cls.parse(
            metadata.get("json"),
            ts_type=metadata.get("ts_type"),
            ts_transform=metadata.get("ts_transform"),
        )

    @property
    def ignored(self) -> bool:
        return self.json == IGNORE_NAME


class TypeDescriptor:
    """
    Handle to a host type.

    Structs resolve their field list lazily so self-referencing and
    mutually-referencing types can be described without recursion.
    Two descriptors are equal when their keys are equal.
    """

    def __init__(
        self,
        name: str,
        kind: Kind,
        key: Any = None,
        elem: Optional["TypeDescriptor"] = None,
        map_key: Optional["TypeDescriptor"] = None,
        fields: Optional[Iterable["FieldDescriptor"]] = None,
        fields_factory: Optional[Callable[[], Iterable["FieldDescriptor"]]] = None,
    ):
        self.name = name
        self.kind = kind
        self.key = key if key is not None else (kind, name)
        self.elem = elem
        self.map_key = map_key
        self._fields = list(fields) if fields is not None else None
        self._fields_factory = fields_factory

    @property
    def fields(self) -> List["FieldDescriptor"]:
        """Declared fields in order (empty for non-struct kinds)."""
        if self._fields is None:
            if self._fields_factory is None:
                self._fields = []
            else:
                self._fields = list(self._fields_factory())
        return self._fields

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeDescriptor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.name!r}, {self.kind.value})"

    # Explicit constructors

    @classmethod
    def primitive(cls, kind: Kind, name: Optional[str] = None) -> "TypeDescriptor":
        return cls(name or kind.value, kind)

    @classmethod
    def struct(
        cls,
        name: str,
        fields: Optional[Iterable["FieldDescriptor"]] = None,
        key: Any = None,
        fields_factory: Optional[Callable[[], Iterable["FieldDescriptor"]]] = None,
    ) -> "TypeDescriptor":
        if fields is None and fields_factory is None:
            fields = []
        return cls(
            name,
            Kind.STRUCT,
            key=key if key is not None else (Kind.STRUCT, name),
            fields=fields,
            fields_factory=fields_factory,
        )

    @classmethod
    def pointer(cls, elem: "TypeDescriptor", key: Any = None) -> "TypeDescriptor":
        return cls(
            f"*{elem.name}",
            Kind.POINTER,
            key=key if key is not None else (Kind.POINTER, elem.key),
            elem=elem,
        )

    @classmethod
    def slice(cls, elem: "TypeDescriptor", key: Any = None) -> "TypeDescriptor":
        return cls(
            f"[]{elem.name}",
            Kind.SLICE,
            key=key if key is not None else (Kind.SLICE, elem.key),
            elem=elem,
        )

    @classmethod
    def map(
        cls, map_key: "TypeDescriptor", value: "TypeDescriptor", key: Any = None
    ) -> "TypeDescriptor":
        return cls(
            f"map[{map_key.name}]{value.name}",
            Kind.MAP,
            key=key if key is not None else (Kind.MAP, map_key.key, value.key),
            elem=value,
            map_key=map_key,
        )


@dataclass
class FieldDescriptor:
    """Represents a single declared field of a struct."""

    name: str
    type: TypeDescriptor
    tag: FieldTag = field(default_factory=FieldTag)
    embedded: bool = False

    @property
    def external_name(self) -> str:
        """Serialized name; falls back to the attribute name."""
        return self.tag.json if self.tag.json is not None else self.name

    @property
    def ignored(self) -> bool:
        return self.tag.ignored

    @property
    def optional(self) -> bool:
        return self.type.kind == Kind.POINTER or self.tag.omitempty


@dataclass(frozen=True)
class FieldOptions:
    """Resolved output overrides for one field."""

    ts_type: Optional[str] = None
    ts_transform: Optional[str] = None

    def merged_with(self, other: "FieldOptions") -> "FieldOptions":
        """Return options where values set on ``other`` win."""
        return FieldOptions(
            ts_type=other.ts_type or self.ts_type,
            ts_transform=other.ts_transform or self.ts_transform,
        )

    def __bool__(self) -> bool:
        return bool(self.ts_type or self.ts_transform)


@dataclass
class StructType:
    """A struct registration with a per-type field option table."""

    type: Any
    field_options: Dict[Any, FieldOptions] = field(default_factory=dict)


def ts_field(
    json: Optional[str] = None,
    *,
    omitempty: bool = False,
    ts_type: Optional[str] = None,
    ts_transform: Optional[str] = None,
    embed: bool = False,
    **kwargs: Any,
):
    """
    Declare a dataclass field carrying generator metadata.

    Args:
        json: External name, or ``"-"`` to skip the field
        omitempty: Mark the field optional in the output
        ts_type: Explicit TypeScript type
        ts_transform: Initializer expression with a ``__VALUE__`` placeholder
        embed: Inline the (dataclass) field's own fields into the parent
        **kwargs: Passed through to ``dataclasses.field``

    Returns:
        A ``dataclasses.field`` with the metadata attached
    """
    metadata = dict(kwargs.pop("metadata", None) or {})

    if json is not None or omitempty:
        tag = json or ""
        if omitempty:
            tag += ",omitempty"
        metadata["json"] = tag
    if ts_type:
        metadata["ts_type"] = ts_type
    if ts_transform:
        metadata["ts_transform"] = ts_transform
    if embed:
        metadata["embed"] = True

    return dataclasses.field(metadata=metadata, **kwargs)


# Reflection over Python types

_SEQUENCE_ORIGINS = {
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
}

_MAPPING_ORIGINS = {
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}

_CHANNEL_TYPES = (queue.Queue, queue.SimpleQueue)


def describe(tp: Any) -> TypeDescriptor:
    """
    Describe a Python type as a TypeDescriptor.

    Args:
        tp: A class, a typing construct, or an existing descriptor

    Returns:
        TypeDescriptor for the type
    """
    if isinstance(tp, TypeDescriptor):
        return tp

    if tp is Any or tp is object:
        return TypeDescriptor("any", Kind.INTERFACE, key=tp)

    if isinstance(tp, typing.TypeVar):
        return TypeDescriptor(tp.__name__, Kind.INTERFACE, key=tp)

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is typing.Annotated:
        return describe(args[0])

    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1:
            return TypeDescriptor.pointer(describe(members[0]), key=tp)
        # Mixed unions have no single structural shape
        return TypeDescriptor("any", Kind.INTERFACE, key=tp)

    if origin in _SEQUENCE_ORIGINS:
        elem = describe(args[0]) if args else describe(Any)
        return TypeDescriptor.slice(elem, key=tp)

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return TypeDescriptor.slice(describe(args[0]), key=tp)
        return TypeDescriptor("any", Kind.INTERFACE, key=tp)

    if origin in _MAPPING_ORIGINS:
        key_type, value_type = args if args else (str, Any)
        return TypeDescriptor.map(describe(key_type), describe(value_type), key=tp)

    if origin is collections.abc.Callable:
        return TypeDescriptor("func", Kind.FUNC, key=tp)

    if origin is typing.Literal:
        return describe(type(args[0])) if args else describe(Any)

    if origin is not None:
        return describe(origin)

    if isinstance(tp, typing.NewType):
        return describe(tp.__supertype__)

    if isinstance(tp, type):
        return _describe_class(tp)

    if callable(tp):
        return TypeDescriptor("func", Kind.FUNC, key=tp)

    return TypeDescriptor(repr(tp), Kind.OPAQUE, key=tp)


def _describe_class(cls: type) -> TypeDescriptor:
    """Describe a plain class."""
    if dataclasses.is_dataclass(cls):
        return TypeDescriptor.struct(
            cls.__name__, key=cls, fields_factory=lambda: _dataclass_fields(cls)
        )

    if issubclass(cls, Enum):
        return TypeDescriptor(cls.__name__, _enum_kind(cls), key=cls)

    if issubclass(cls, bool):
        kind = Kind.BOOL
    elif issubclass(cls, int):
        kind = Kind.INT
    elif issubclass(cls, float):
        kind = Kind.FLOAT64
    elif issubclass(cls, complex):
        kind = Kind.COMPLEX128
    elif issubclass(cls, str):
        kind = Kind.STRING
    elif cls in (list, tuple, set, frozenset):
        return TypeDescriptor.slice(describe(Any), key=cls)
    elif cls is dict:
        return TypeDescriptor.map(describe(str), describe(Any), key=cls)
    elif issubclass(cls, _CHANNEL_TYPES):
        kind = Kind.CHAN
    elif cls in (types.FunctionType, types.BuiltinFunctionType, types.MethodType):
        kind = Kind.FUNC
    else:
        kind = Kind.OPAQUE

    return TypeDescriptor(cls.__name__, kind, key=cls)


def _enum_kind(cls: typing.Type[Enum]) -> Kind:
    """Structural kind of an Enum class, taken from its member values."""
    value_kinds = {_describe_class(type(member.value)).kind for member in cls}
    if len(value_kinds) == 1:
        return value_kinds.pop()
    return Kind.INTERFACE


def _dataclass_fields(cls: type) -> List[FieldDescriptor]:
    """Describe the declared fields of a dataclass in order."""
    hints = typing.get_type_hints(cls)
    result = []
    for dc_field in dataclasses.fields(cls):
        result.append(
            FieldDescriptor(
                name=dc_field.name,
                type=describe(hints.get(dc_field.name, dc_field.type)),
                tag=FieldTag.from_metadata(dc_field.metadata),
                embedded=bool(dc_field.metadata.get("embed", False)),
            )
        )
    return result


def deep_fields(typ: TypeDescriptor) -> List[FieldDescriptor]:
    """
    Flatten embedded fields into the parent's field list.

    Embedded structs (and embedded pointers to structs) contribute their
    own fields, recursively, in place of the embedding field.
    """
    if typ.kind == Kind.POINTER:
        typ = typ.elem

    if typ.kind != Kind.STRUCT:
        return []

    fields: List[FieldDescriptor] = []
    for fld in typ.fields:
        embedded_type = fld.type
        if embedded_type.kind == Kind.POINTER:
            embedded_type = embedded_type.elem

        if fld.embedded and embedded_type.kind == Kind.STRUCT:
            fields.extend(deep_fields(embedded_type))
        else:
            fields.append(fld)

    return fields
