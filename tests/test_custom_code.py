import pytest

from tsgen.codegen.core.custom_code import (
    load_custom_code,
    parse_custom_code,
    render_custom_block,
)

PREVIOUS_OUTPUT = """\
export class Person {
    name: string;
    //[Person:]
    greet(): string {
        return "hi " + this.name;
    }

    //[end]
}

export class Address {
  //[Address:]
  // nothing yet
  //[end]
}
"""


def test_parse_blocks():
    blocks = parse_custom_code(PREVIOUS_OUTPUT)

    assert blocks == {
        "Person": '    greet(): string {\n        return "hi " + this.name;\n    }',
        "Address": "  // nothing yet",
    }


def test_parse_ignores_unterminated_block():
    blocks = parse_custom_code("//[Person:]\nfoo()\n//[Address:]\nbar()\n")

    assert blocks == {}


def test_parse_end_without_start():
    assert parse_custom_code("//[end]\nfoo()\n") == {}


def test_render_block():
    block = render_custom_block("Person", "    greet() {}", "    ")

    assert block == "    //[Person:]\n    greet() {}\n\n    //[end]\n"


def test_rendered_block_parses_back():
    code = '    greet(): string {\n        return "hi";\n    }'
    block = render_custom_block("Person", code, "  ")

    assert parse_custom_code(block) == {"Person": code}


def test_load_missing_file(tmp_path):
    assert load_custom_code(tmp_path / "missing.ts") == {}


def test_load_file(tmp_path):
    path = tmp_path / "models.ts"
    path.write_text(PREVIOUS_OUTPUT, encoding="utf-8")

    assert set(load_custom_code(path)) == {"Person", "Address"}


def test_load_unreadable_path_propagates(tmp_path):
    with pytest.raises(OSError):
        load_custom_code(tmp_path)
