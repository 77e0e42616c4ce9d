import queue
from datetime import datetime
from typing import Any, Callable, Dict, List, NewType, Optional, Sequence, Tuple, Union

from tsgen import Kind, TypeDescriptor, TypeScriptify
from tsgen.codegen.core.schema import FieldDescriptor, FieldTag, deep_fields, describe

from sample_models import Color, Document, Person, Plain, Profile


def test_describe_primitives():
    assert describe(bool).kind == Kind.BOOL
    assert describe(int).kind == Kind.INT
    assert describe(float).kind == Kind.FLOAT64
    assert describe(complex).kind == Kind.COMPLEX128
    assert describe(str).kind == Kind.STRING
    assert describe(Any).kind == Kind.INTERFACE
    assert describe(datetime).kind == Kind.OPAQUE


def test_describe_containers():
    opt = describe(Optional[int])
    assert opt.kind == Kind.POINTER
    assert opt.elem.kind == Kind.INT

    assert describe(int | None).kind == Kind.POINTER

    nested = describe(List[List[str]])
    assert nested.kind == Kind.SLICE
    assert nested.elem.kind == Kind.SLICE
    assert nested.elem.elem.kind == Kind.STRING

    assert describe(Sequence[int]).kind == Kind.SLICE
    assert describe(Tuple[int, ...]).kind == Kind.SLICE
    assert describe(Tuple[int, str]).kind == Kind.INTERFACE

    mapping = describe(Dict[str, float])
    assert mapping.kind == Kind.MAP
    assert mapping.map_key.kind == Kind.STRING
    assert mapping.elem.kind == Kind.FLOAT64


def test_describe_unsupported_kinds():
    assert describe(Callable[[int], int]).kind == Kind.FUNC
    assert describe(queue.Queue).kind == Kind.CHAN
    assert describe(Union[int, str]).kind == Kind.INTERFACE


def test_describe_enum_kind_follows_values():
    assert describe(Color).kind == Kind.INT
    assert describe(Plain).kind == Kind.STRING
    assert describe(Color).key is Color


def test_describe_dataclass_fields():
    person = describe(Person)

    assert person.kind == Kind.STRUCT
    assert person.name == "Person"
    names = [fld.external_name for fld in person.fields]
    assert names == [
        "name",
        "personal_info",
        "nicknames",
        "addresses",
        "address",
        "metadata",
        "friends",
        "-",
    ]
    friends = person.fields[6]
    assert friends.type.elem == person
    assert person.fields[-1].ignored
    assert person.fields[4].optional


def test_descriptor_equality_by_key():
    assert describe(Profile) == describe(Profile)
    assert hash(describe(Profile)) == hash(describe(Profile))
    assert describe(Profile) != describe(Person)


def test_field_tag_parse():
    tag = FieldTag.parse("name,omitempty")
    assert tag.json == "name"
    assert tag.omitempty

    tag = FieldTag.parse(",omitempty")
    assert tag.json is None
    assert tag.omitempty

    assert FieldTag.parse("-").ignored
    assert not FieldTag.parse(None).omitempty


def test_profile_tags():
    fields = describe(Profile).fields

    assert fields[1].name == "age"
    assert fields[1].external_name == "age"
    assert fields[1].optional
    assert not fields[0].optional


def test_deep_fields_flatten_embedded():
    names = [fld.name for fld in deep_fields(describe(Document))]

    assert names == ["created", "updated", "title"]


def test_explicit_descriptors_convert():
    address = TypeDescriptor.struct(
        "Address", [FieldDescriptor("city", TypeDescriptor.primitive(Kind.STRING))]
    )
    node = TypeDescriptor.struct(
        "Node",
        fields_factory=lambda: [
            FieldDescriptor("home", TypeDescriptor.pointer(address)),
            FieldDescriptor("children", TypeDescriptor.slice(node)),
            FieldDescriptor(
                "hook", TypeDescriptor.primitive(Kind.FUNC), FieldTag(json="-")
            ),
            FieldDescriptor(
                "size", TypeDescriptor.primitive(Kind.UINT64), FieldTag(json="Size")
            ),
        ],
    )

    code = TypeScriptify().add(node).convert()

    assert code.index("export class Address {") < code.index("export class Node {")
    assert "    home?: Address;" in code
    assert "    children: Node[];" in code
    assert "    Size: number;" in code
    assert "hook" not in code


def test_describe_new_type():
    user_id = NewType("UserId", int)

    assert describe(user_id).kind == Kind.INT
    assert describe(Optional[user_id]).elem.kind == Kind.INT
