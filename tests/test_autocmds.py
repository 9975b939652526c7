from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List

import pytest

from vim_helpers.actions import ActionContext
from vim_helpers.autocmds import (
    DEFAULT_AUTOCMDS,
    DEFAULT_GROUP,
    Autocmd,
    AutocmdRegistry,
    load_default_autocmds,
)
from vim_helpers.config import EditorOptions
from vim_helpers.host import MemoryHost


def fixed_clock() -> datetime:
    return datetime(2024, 1, 5)


def make_context(name: str, *lines: str, template_dir: Path | None = None) -> ActionContext:
    return ActionContext(
        host=MemoryHost.from_lines(lines or [""], name=name),
        options=EditorOptions(template_path=template_dir),
        clock=fixed_clock,
    )


def make_autocmd(autocmd_id: str, calls: List[str], **kwargs: object) -> Autocmd:
    return Autocmd(
        id=autocmd_id,
        event=str(kwargs.pop("event", "BufWritePre")),
        handler=lambda context: calls.append(autocmd_id) or autocmd_id,
        **kwargs,  # type: ignore[arg-type]
    )


def test_register_duplicate_id_rejected() -> None:
    registry = AutocmdRegistry()
    calls: List[str] = []
    registry.register(make_autocmd("a", calls))

    with pytest.raises(ValueError):
        registry.register(make_autocmd("a", calls))

    registry.register(make_autocmd("a", calls, pattern="*.c"), replace=True)
    assert len(registry) == 1


def test_autocmd_validation() -> None:
    with pytest.raises(ValueError):
        Autocmd(id="", event="BufWritePre", handler=print)
    with pytest.raises(TypeError):
        Autocmd(id="x", event="BufWritePre", handler="not callable")  # type: ignore[arg-type]


def test_pattern_matches_tail_and_full_name() -> None:
    calls: List[str] = []
    c_files = make_autocmd("c", calls, pattern="*.c")
    makefile = make_autocmd("mk", calls, pattern="Makefile")
    src_only = make_autocmd("src", calls, pattern="src/*")

    assert c_files.matches("src/main.c")
    assert not c_files.matches("main.h")
    assert makefile.matches("/work/Makefile")
    assert src_only.matches("src/io.c")
    assert not src_only.matches("lib/io.c")


def test_fire_runs_matching_handlers_in_order() -> None:
    registry = AutocmdRegistry()
    calls: List[str] = []
    registry.register(make_autocmd("first", calls))
    registry.register(make_autocmd("c-only", calls, pattern="*.c"))
    registry.register(make_autocmd("other-event", calls, event="BufNewFile"))
    registry.register(make_autocmd("last", calls))

    results = registry.fire("BufWritePre", make_context("notes.txt"))

    assert calls == ["first", "last"]
    assert results == ["first", "last"]


def test_clear_group_and_unregister() -> None:
    registry = AutocmdRegistry()
    calls: List[str] = []
    registry.register(make_autocmd("mine", calls, group="user"))
    registry.register(make_autocmd("kept", calls))

    assert registry.clear_group("user") == 1
    assert registry.unregister("kept").id == "kept"
    with pytest.raises(KeyError):
        registry.unregister("kept")
    assert len(registry) == 0


def test_load_defaults_is_repeatable() -> None:
    registry = load_default_autocmds(AutocmdRegistry())
    load_default_autocmds(registry)

    assert len(registry) == len(DEFAULT_AUTOCMDS)
    assert registry.clear_group(DEFAULT_GROUP) == len(DEFAULT_AUTOCMDS)


def test_new_header_reads_template_and_sets_guard(tmp_path: Path) -> None:
    (tmp_path / "template.h").write_text(
        "#ifndef\n#define\n\n#endif\n", encoding="utf-8"
    )
    registry = load_default_autocmds(AutocmdRegistry())
    context = make_context("include/ring.h", template_dir=tmp_path)

    registry.fire("BufNewFile", context)

    assert context.host.lines == [
        "#ifndef RING_20240105_H",
        "#define RING_20240105_H",
        "",
        "#endif // RING_20240105_H",
    ]
    assert context.host.get_cursor() == (2, 0)


def test_new_file_without_template_reports_instead_of_raising(tmp_path: Path) -> None:
    registry = load_default_autocmds(AutocmdRegistry())
    context = make_context("main.c", template_dir=tmp_path)

    registry.fire("BufNewFile", context)

    assert context.host.lines == [""]
    assert context.host.messages[-1].startswith("E484: Can't open file")


def test_new_file_with_unmatched_name_is_untouched(tmp_path: Path) -> None:
    registry = load_default_autocmds(AutocmdRegistry())
    context = make_context("README.md", template_dir=tmp_path)

    assert registry.fire("BufNewFile", context) == []
    assert context.host.messages == []
