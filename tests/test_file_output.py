from datetime import datetime

import pytest

from tsgen import TypeScriptify
from tsgen.codegen.core.config import DEFAULT_HEADER
from tsgen.codegen.core.custom_code import parse_custom_code
from tsgen.codegen.core.errors import UnsupportedTypeError
from tsgen.utils import backup_file, backup_timestamp, write_generated_file

from sample_models import Job, Profile

CUSTOM_METHOD = "    greet(): string {\n        return this.name;\n    }"


@pytest.fixture
def backup_dir(tmp_path):
    path = tmp_path / "backups"
    path.mkdir()
    return path


def test_backup_timestamp():
    assert backup_timestamp(datetime(2024, 5, 1, 13, 45, 7, 250000)) == "2024-05-01T13_45_07.25"
    assert backup_timestamp(datetime(2024, 5, 1, 13, 45, 7, 300000)) == "2024-05-01T13_45_07.3"
    assert backup_timestamp(datetime(2024, 5, 1, 13, 45, 7, 4000)) == "2024-05-01T13_45_07"


def test_backup_file(tmp_path, backup_dir):
    source = tmp_path / "models.ts"
    source.write_text("old", encoding="utf-8")

    backup = backup_file(source, backup_dir, now=datetime(2024, 1, 2, 3, 4, 5))

    assert backup == backup_dir / "models.ts-2024-01-02T03_04_05.backup"
    assert backup.read_text(encoding="utf-8") == "old"


def test_backup_missing_file(tmp_path, backup_dir):
    assert backup_file(tmp_path / "missing.ts", backup_dir) is None
    assert list(backup_dir.iterdir()) == []


def test_backup_into_missing_dir_fails(tmp_path):
    source = tmp_path / "models.ts"
    source.write_text("old", encoding="utf-8")

    with pytest.raises(OSError):
        backup_file(source, tmp_path / "nope")


def test_write_generated_file(tmp_path):
    path = write_generated_file(tmp_path / "out.ts", "/* header */", "\nexport enum A {\n}")

    assert path.read_text(encoding="utf-8") == "/* header */\n\n\nexport enum A {\n}"


def test_convert_to_file_writes_header(tmp_path):
    path = tmp_path / "models.ts"
    generator = TypeScriptify().with_backup_dir("").add(Profile)

    generator.convert_to_file(path)

    assert path.read_text(encoding="utf-8") == f"{DEFAULT_HEADER}\n\n{generator.convert()}"


def test_convert_to_file_keeps_custom_code(tmp_path, backup_dir):
    path = tmp_path / "models.ts"
    generator = TypeScriptify().with_backup_dir(backup_dir).add(Profile)

    generator.convert_to_file(path)
    assert list(backup_dir.iterdir()) == []

    first = path.read_text(encoding="utf-8")
    head, _, tail = first.rpartition("}")
    edited = f"{head}//[Profile:]\n{CUSTOM_METHOD}\n    //[end]\n}}{tail}"
    path.write_text(edited, encoding="utf-8")

    generator.convert_to_file(path)
    second = path.read_text(encoding="utf-8")

    assert parse_custom_code(second) == {"Profile": CUSTOM_METHOD}
    assert second.endswith(f"    }}\n    //[Profile:]\n{CUSTOM_METHOD}\n\n    //[end]\n}}")

    backups = list(backup_dir.iterdir())
    assert len(backups) == 1
    assert backups[0].name.startswith("models.ts-")
    assert backups[0].suffix == ".backup"
    assert backups[0].read_text(encoding="utf-8") == edited

    generator.with_backup_dir("").convert_to_file(path)
    assert path.read_text(encoding="utf-8") == second


def test_custom_code_for_unknown_entity_is_dropped(tmp_path):
    path = tmp_path / "models.ts"
    path.write_text("//[Gone:]\n    old() {}\n//[end]\n", encoding="utf-8")

    TypeScriptify().with_backup_dir("").add(Profile).convert_to_file(path)

    assert "old()" not in path.read_text(encoding="utf-8")


def test_failed_conversion_leaves_file_untouched(tmp_path, backup_dir):
    path = tmp_path / "models.ts"
    path.write_text("previous", encoding="utf-8")

    with pytest.raises(UnsupportedTypeError):
        TypeScriptify().with_backup_dir(backup_dir).add(Job).convert_to_file(path)

    assert path.read_text(encoding="utf-8") == "previous"
