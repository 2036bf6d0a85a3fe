import logging
import os
import stat
import sys

import pytest
from rich import inspect

from file_type_masks import FILE_TYPES, UNKNOWN, TypeAssignment, host_type_assignments, host_type_mask
from ftype_table import (
    Collision,
    TranslationError,
    add_ftype,
    apply_translation,
    build_ftype_table,
    new_table,
    parse_translation,
)
from mask_analyzer import MaskLayout, analyze_mask


@pytest.fixture
def layout() -> MaskLayout:
    return analyze_mask(0xF000)


@pytest.fixture
def assignments():
    return (
        TypeAssignment("S_IFDIR", 0x4000, 'd'),
        TypeAssignment("S_IFREG", 0x8000, '-'),
        TypeAssignment("S_IFLNK", 0xA000, 'l'),
    )


def test_new_table_is_unknown():
    table = new_table(16)
    assert len(table) == 16
    assert all(c == UNKNOWN for c in table)
    assert str(table) == "?" * 16


def test_build_table(layout: MaskLayout, assignments):
    table = build_ftype_table(layout, assignments)
    assert len(table) == layout.table_size == 16
    assert table[8] == '-'
    assert table[4] == 'd'
    assert table[10] == 'l'
    others = [c for i, c in enumerate(table) if i not in (4, 8, 10)]
    assert others == [UNKNOWN] * 13
    assert table.collisions == []


def test_collision_keeps_first(layout: MaskLayout, caplog: pytest.LogCaptureFixture):
    first = TypeAssignment("S_IFDOOR", 0xD000, 'D')
    second = TypeAssignment("S_IFPORT", 0xD000, 'E')
    with caplog.at_level(logging.ERROR):
        table = build_ftype_table(layout, (first, second))
    assert table[13] == 'D'
    assert table.collisions == [Collision(position=13, incoming='E', existing='D')]
    assert "collision, position 13, 'E' vs 'D'" in caplog.text


def test_collision_order_follows_assignments(layout: MaskLayout):
    first = TypeAssignment("S_IFDOOR", 0xD000, 'D')
    second = TypeAssignment("S_IFPORT", 0xD000, 'E')
    table = build_ftype_table(layout, (second, first))
    assert table[13] == 'E'


def test_add_ftype_outside_table(caplog: pytest.LogCaptureFixture):
    table = new_table(4)
    with caplog.at_level(logging.ERROR):
        assert not add_ftype(table, 4, 'x')
    assert str(table) == "????"
    assert "outside the table" in caplog.text


def test_parse_translation():
    assert parse_translation("") == []
    assert parse_translation("dD") == [("d", "D")]
    assert parse_translation("abbc") == [("a", "b"), ("b", "c")]


def test_parse_translation_odd_length():
    with pytest.raises(TranslationError):
        parse_translation("abc")


def test_translate_single():
    table = new_table(4)
    table[1] = 'a'
    apply_translation(table, parse_translation("ab"))
    assert str(table) == "?b??"


def test_translate_chains_within_pass():
    table = new_table(4)
    table[2] = 'a'
    apply_translation(table, parse_translation("abbc"))
    assert table[2] == 'c'


def test_translate_does_not_chain_backwards():
    table = new_table(4)
    table[2] = 'a'
    apply_translation(table, parse_translation("bcab"))
    assert table[2] == 'b'


def test_translate_directory(layout: MaskLayout, assignments):
    plain = build_ftype_table(layout, assignments)
    table = build_ftype_table(layout, assignments, parse_translation("dD"))
    assert table[4] == 'D'
    assert [c for i, c in enumerate(table) if i != 4] == [c for i, c in enumerate(plain) if i != 4]


def test_file_types_order():
    assert [t.mnemonic for t in FILE_TYPES] == list("pcdb-lsDEwn")


def test_host_table_decodes_real_files(tmp_path):
    layout = analyze_mask(host_type_mask())
    table = build_ftype_table(layout, host_type_assignments())
    inspect(table)
    assert table.collisions == []

    def mode_to_ftype(mode: int) -> str:
        return table[(mode & layout.mask) >> layout.shift]

    regular = tmp_path / "regular"
    regular.write_text("x")
    assert mode_to_ftype(os.stat(tmp_path).st_mode) == 'd'
    assert mode_to_ftype(os.stat(regular).st_mode) == '-'


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="Linux S_IF* values")
def test_linux_table():
    layout = analyze_mask(host_type_mask())
    assert layout.mask == stat.S_IFMT(0o177777) == 0o170000
    table = build_ftype_table(layout, host_type_assignments())
    assert str(table) == "?pc?d?b?-?l?s???"


def main():
    test_linux_table()

if __name__ == "__main__":
    main()
