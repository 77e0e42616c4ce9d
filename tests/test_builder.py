import pytest

from tsgen import FieldOptions, Kind, TypeDescriptor
from tsgen.codegen.core.errors import UnsupportedTypeError
from tsgen.codegen.languages.typescript.builder import TypeScriptClassBuilder, map_type
from tsgen.codegen.languages.typescript.types import TypeScriptTypeMapper


def make_builder(indent="  "):
    return TypeScriptClassBuilder(TypeScriptTypeMapper(), indent, "Owner")


def test_kind_mapping():
    mapper = TypeScriptTypeMapper()

    assert mapper.map_kind(Kind.BOOL) == "boolean"
    assert mapper.map_kind(Kind.UINT16) == "number"
    assert mapper.map_kind(Kind.FLOAT32) == "number"
    assert mapper.map_kind(Kind.STRING) == "string"
    assert mapper.map_kind(Kind.INTERFACE) == "any"
    assert mapper.map_kind(Kind.COMPLEX64) is None
    assert mapper.map_kind(Kind.STRUCT) is None


def test_kind_mapping_overrides():
    mapper = TypeScriptTypeMapper({Kind.INT64: "bigint"})

    assert mapper.map_kind(Kind.INT64) == "bigint"
    assert mapper.map_kind(Kind.INT32) == "number"


def test_require_reports_field_and_owner():
    mapper = TypeScriptTypeMapper()

    with pytest.raises(UnsupportedTypeError, match=r"complex128/complex \(field 'z' of Point\)"):
        mapper.require(Kind.COMPLEX128, "z", "Point", "complex")


def test_simple_fields():
    builder = make_builder()
    builder.add_simple_field("id", False, TypeDescriptor.primitive(Kind.INT), FieldOptions())
    builder.add_simple_field("note", True, TypeDescriptor.primitive(Kind.STRING), FieldOptions())

    assert builder.fields == ["  id: number;", "  note?: string;"]
    assert builder.constructor_body == [
        '    this.id = source["id"];',
        '    this.note = source["note"];',
    ]
    assert not builder.needs_convert_values


def test_simple_field_overrides():
    builder = make_builder()
    opts = FieldOptions(ts_type="Date", ts_transform="new Date(__VALUE__)")
    builder.add_simple_field("at", False, TypeDescriptor.primitive(Kind.OPAQUE), opts)

    assert builder.fields == ["  at: Date;"]
    assert builder.constructor_body == ['    this.at = new Date(source["at"]);']


def test_simple_field_without_mapping_fails():
    builder = make_builder()

    with pytest.raises(UnsupportedTypeError, match="'cb' of Owner"):
        builder.add_simple_field("cb", False, TypeDescriptor.primitive(Kind.FUNC), FieldOptions())


def test_array_fields():
    builder = make_builder()
    builder.add_simple_array_field(
        "grid", False, TypeDescriptor.primitive(Kind.FLOAT64), 2, FieldOptions()
    )
    builder.add_simple_array_field(
        "raw", True, TypeDescriptor.primitive(Kind.UINT8), 1, FieldOptions(ts_type="string")
    )
    builder.add_typed_array_field("colors", False, "Color", 1)

    assert builder.fields == ["  grid: number[][];", "  raw?: string;", "  colors: Color[];"]


def test_struct_and_map_fields():
    builder = make_builder()
    builder.add_struct_field("home", True, "Address")
    builder.add_array_of_structs_field("stops", False, "Address", 1)
    builder.add_map_field("by_id", False, "number", "Address", "Address")
    builder.add_map_field("counts", False, "string", "number")

    assert builder.fields == [
        "  home?: Address;",
        "  stops: Address[];",
        "  by_id: {[key: number]: Address};",
        "  counts: {[key: string]: number};",
    ]
    assert builder.constructor_body == [
        '    this.home = this.convertValues(source["home"], Address);',
        '    this.stops = this.convertValues(source["stops"], Address);',
        '    this.by_id = this.convertValues(source["by_id"], Address, true);',
        '    this.counts = source["counts"];',
    ]
    assert builder.needs_convert_values


def test_map_type():
    assert map_type("string", "number[]") == "{[key: string]: number[]}"
