from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from vim_helpers.actions import ActionContext, submit_command_line
from vim_helpers.autocmds import AutocmdRegistry, load_default_autocmds
from vim_helpers.config import EditorOptions
from vim_helpers.host import MemoryHost


def fixed_clock() -> datetime:
    return datetime(2024, 1, 5)


def make_context(
    *lines: str,
    name: str = "notes.txt",
    options: Optional[EditorOptions] = None,
) -> ActionContext:
    return ActionContext(
        host=MemoryHost.from_lines(lines, name=name),
        options=options or EditorOptions(),
        clock=fixed_clock,
    )


def record_events(context: ActionContext, *names: str) -> List[Tuple[str, object]]:
    events: List[Tuple[str, object]] = []
    for name in names:
        context.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )
    return events


def test_trim_blank_lines_command() -> None:
    context = make_context("", "", "", "x", "")

    result = submit_command_line(context, ":TrimBlankLines")

    assert result.status == "trim_blank_lines"
    assert result.message == "4 fewer lines"
    assert context.host.lines == ["x"]


def test_trim_blank_lines_honours_report_option() -> None:
    context = make_context("", "x", "", options=EditorOptions(report=1))

    result = submit_command_line(context, "TrimBlankLines")

    assert result.message == "2 fewer lines"


def test_update_last_change_command_joins_format_words() -> None:
    context = make_context("Last change: old")

    result = submit_command_line(context, "UpdateLastChange %d %B %Y")

    assert result.status == "update_last_change"
    assert context.host.lines == ["Last change: 05 January 2024"]


def test_update_last_change_command_miss() -> None:
    context = make_context("no marker")

    result = submit_command_line(context, "UpdateLastChange")

    assert result.status == "update_last_change_miss"
    assert context.host.lines == ["no marker"]


def test_unknown_command_reports_error() -> None:
    context = make_context("x")
    events = record_events(context, "command.submit", "command.error")

    result = submit_command_line(context, "Frobnicate now")

    assert result.status == "command_error"
    assert result.failed
    assert ("command.submit", "Frobnicate now") in events
    assert ("command.error", "Frobnicate") in events
    assert context.host.messages[-1] == "E492: Not an editor command: Frobnicate"


def test_empty_command_line() -> None:
    context = make_context("x")

    assert submit_command_line(context, "   ").status == "command_empty"


def test_template_command(tmp_path: Path) -> None:
    (tmp_path / "template.mk").write_text("all:\n\ttrue\n", encoding="utf-8")
    context = make_context(
        "", name="Makefile", options=EditorOptions(template_path=tmp_path)
    )

    result = submit_command_line(context, "Template .mk 2 1")

    assert result.status == "template"
    assert context.host.lines == ["all:", "\ttrue"]
    assert context.host.get_cursor() == (1, 1)


def test_template_command_errors(tmp_path: Path) -> None:
    context = make_context("", options=EditorOptions(template_path=tmp_path))

    missing = submit_command_line(context, "Template .zig")
    no_args = submit_command_line(context, "Template")
    bad_pos = submit_command_line(context, "Template .c x y")

    assert missing.status == "command_error"
    assert missing.message is not None and missing.message.startswith("E484")
    assert no_args.message == "E471: Argument required"
    assert bad_pos.message == "E474: Invalid argument: x y"
    assert context.host.lines == [""]


def test_header_macros_command() -> None:
    context = make_context("#ifndef", "#define", "#endif", name="io.h")

    result = submit_command_line(context, "HeaderMacros")

    assert result.message == "IO_20240105_H"
    assert context.host.lines[-1] == "#endif // IO_20240105_H"


def test_echo_command() -> None:
    context = make_context("x")
    events = record_events(context, "command.echo")

    result = submit_command_line(context, "echo hello  there")

    assert result.message == "hello there"
    assert events == [("command.echo", "hello there")]
    assert context.host.messages == ["hello there"]


def test_write_fires_buf_write_pre() -> None:
    context = make_context("Last change: x  ", "body \t", "")
    context.extras["autocmds"] = load_default_autocmds(AutocmdRegistry())
    events = record_events(context, "command.write")

    result = submit_command_line(context, "w")

    assert result.status == "command_write"
    assert context.host.lines == ["Last change: 2024 Jan 05", "body", ""]
    assert events == [("command.write", {"args": [], "buffer": "notes.txt"})]


def test_write_without_autocmds_only_emits() -> None:
    context = make_context("trailing  ")

    submit_command_line(context, "write")

    assert context.host.lines == ["trailing  "]


def test_undo_restores_previous_text() -> None:
    context = make_context("", "", "", "x")

    submit_command_line(context, "TrimBlankLines")
    result = submit_command_line(context, "undo")

    assert result.status == "undo"
    assert context.host.lines == ["", "", "", "x"]
    assert submit_command_line(context, "u").status == "undo_miss"


def test_undo_trim_blank_lines_is_one_step() -> None:
    context = make_context("", "x", "")

    submit_command_line(context, "TrimBlankLines")
    assert context.host.lines == ["x"]

    assert submit_command_line(context, "u").status == "undo"
    assert context.host.lines == ["", "x", ""]
    assert submit_command_line(context, "u").status == "undo_miss"


def test_undo_header_macros_is_one_step() -> None:
    context = make_context("#ifndef", "#define", "#endif", name="a.h")

    submit_command_line(context, "HeaderMacros")
    result = submit_command_line(context, "u")

    assert result.status == "undo"
    assert result.message == "HeaderMacros"
    assert context.host.lines == ["#ifndef", "#define", "#endif"]
    assert submit_command_line(context, "u").status == "undo_miss"


def test_undo_template_is_one_step(tmp_path: Path) -> None:
    (tmp_path / "template.c").write_text("int main(void)\n{\n}\n", encoding="utf-8")
    context = make_context(
        "", name="main.c", options=EditorOptions(template_path=tmp_path)
    )

    submit_command_line(context, "Template .c")
    assert context.host.lines == ["int main(void)", "{", "}"]

    assert submit_command_line(context, "u").status == "undo"
    assert context.host.lines == [""]
    assert submit_command_line(context, "u").status == "undo_miss"


def test_undo_write_reverts_all_autocmd_edits() -> None:
    context = make_context("Last change: x  ", "body \t", "")
    context.extras["autocmds"] = load_default_autocmds(AutocmdRegistry())

    submit_command_line(context, "w")
    submit_command_line(context, "u")

    assert context.host.lines == ["Last change: x  ", "body \t", ""]
    assert submit_command_line(context, "u").status == "undo_miss"


def test_template_command_rejects_cursor_past_template(tmp_path: Path) -> None:
    (tmp_path / "template.c").write_text("int main(void)\n{\n}\n", encoding="utf-8")
    context = make_context(
        "", name="main.c", options=EditorOptions(template_path=tmp_path)
    )

    result = submit_command_line(context, "Template .c 9 0")

    assert result.status == "command_error"
    assert context.host.lines == [""]
    assert submit_command_line(context, "u").status == "undo_miss"
