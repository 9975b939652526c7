from __future__ import annotations

import re

import pytest

from vim_helpers.buffer import (
    SEARCH_REGISTER,
    Buffer,
    BufferDocument,
    BufferValidationError,
    RegisterBank,
    RegisterValue,
)


def test_document_from_text_drops_final_newline() -> None:
    document = BufferDocument.from_text("a\nb\n")

    assert document.snapshot() == ("a", "b")
    assert BufferDocument.from_text("").snapshot() == ("",)


def test_deleting_every_line_leaves_one_empty_line() -> None:
    buffer = Buffer.from_lines(["a", "b"])

    buffer.delete_lines(0, 2)

    assert buffer.lines == [""]
    assert buffer.state.cursor == (0, 0)


def test_replace_lines_rejects_out_of_range() -> None:
    buffer = Buffer.from_lines(["a"])

    with pytest.raises(BufferValidationError):
        buffer.replace_lines(0, 3, [], label="bad")
    with pytest.raises(BufferValidationError):
        buffer.replace_lines(2, 2, ["x"], label="bad")


def test_move_cursor_validates_but_set_cursor_clamps() -> None:
    buffer = Buffer.from_lines(["abc", "d"])

    buffer.set_cursor((9, 9))
    assert buffer.state.cursor == (1, 1)

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.move_cursor((0, 4))
    assert excinfo.value.cursor == (0, 4)


def test_substitute_sets_search_register_and_cursor() -> None:
    buffer = Buffer.from_lines(["foo", "bar", "foo bar"])

    changed = buffer.substitute(re.compile("foo"), "baz")

    assert changed == 2
    assert buffer.lines == ["baz", "bar", "baz bar"]
    assert buffer.registers.last_search == "foo"
    assert buffer.state.cursor == (2, 0)


def test_substitute_without_match_keeps_history_clean() -> None:
    buffer = Buffer.from_lines(["foo"])

    assert buffer.substitute(re.compile("zzz"), "") == 0
    assert len(buffer.undo) == 0
    assert buffer.registers.last_search == "zzz"


def test_undo_and_redo_round_trip() -> None:
    buffer = Buffer.from_lines(["one", "two", ""])

    buffer.replace_lines(1, 2, ["TWO", "2"], label="edit")
    assert buffer.lines == ["one", "TWO", "2", ""]

    entry = buffer.undo_last()
    assert entry is not None and entry.label == "edit"
    assert buffer.lines == ["one", "two", ""]
    assert buffer.undo_last() is None

    buffer.redo_last()
    assert buffer.lines == ["one", "TWO", "2", ""]


def test_nested_transactions_record_one_entry() -> None:
    buffer = Buffer.from_lines(["", "x", ""])

    with buffer.transaction("trim"):
        buffer.delete_lines(2, 3)
        with buffer.transaction("inner"):
            buffer.delete_lines(0, 1)

    assert buffer.lines == ["x"]
    assert len(buffer.undo) == 1
    entry = buffer.undo_last()
    assert entry is not None and entry.label == "trim"
    assert buffer.lines == ["", "x", ""]
    assert buffer.undo_last() is None


def test_mirror_reports_name_and_version() -> None:
    buffer = Buffer.from_lines(["x"], name="x.txt")
    buffer.replace_lines(0, 1, ["y"], label="edit")

    mirror = buffer.mirror()

    assert mirror.name == "x.txt"
    assert mirror.text == "y"
    assert mirror.version == 1


def test_named_registers_mirror_into_unnamed_but_search_does_not() -> None:
    registers = RegisterBank()

    registers.set("a", RegisterValue(text="yanked"))
    registers.set_search("pattern")

    assert registers.get('"').text == "yanked"
    assert registers.get(SEARCH_REGISTER).text == "pattern"
    assert registers.get("z").text == ""
