#!/usr/bin/env python3
"""Rendering of the header, task rows and footer."""

import random
from types import SimpleNamespace

import pytest

from core import AppData, Effect, SortMode, Task
from application.session import TodoSession
from application.task_list import TaskList
from interface.tui_display import DisplayMixin
from interface.tui_footer import build_footer_text, help_line
from interface.tui_render import (
    due_fragments,
    render_header_text,
    render_task_list_text,
    title_fragments,
    title_width,
)
from interface.tui_themes import THEMES

PALETTE = THEMES[0]


class DummyTUI(DisplayMixin, SimpleNamespace):
    def get_terminal_width(self):
        return 100


def _tui(*tasks, buffer="", sort_mode=SortMode.OFF):
    store = TaskList(None, AppData(sort_mode=sort_mode, tasks=list(tasks)))
    session = TodoSession(store, theme_count=len(THEMES), rng=random.Random(1))
    return DummyTUI(session=session, palette=PALETTE, edit_buffer=SimpleNamespace(text=buffer))


def _plain(formatted):
    return "".join(text for _, text in formatted)


def _lines(formatted):
    return _plain(formatted).split("\n")


class TestTitleWidth:
    def test_caps_and_floors(self):
        assert title_width(200) == 60
        assert title_width(80) == 36
        assert title_width(20) == 10


class TestRows:
    def test_numbers_icons_and_selection_bar(self):
        tui = _tui(Task(1, "first"), Task(2, "second", done=True))
        lines = _lines(render_task_list_text(tui, now=0.0))
        assert lines[0].startswith("┃   1. [ ] first")
        assert lines[1].startswith("    2. [✔] second")

    def test_selected_open_title_uses_selected_class(self):
        tui = _tui(Task(1, "first"))
        result = render_task_list_text(tui, now=0.0)
        assert ("class:selected", "first") in list(result)

    def test_empty_store(self):
        assert "No tasks." in _plain(render_task_list_text(_tui(), now=0.0))

    def test_title_is_fitted(self):
        tui = _tui(Task(1, "x" * 200))
        first = _lines(render_task_list_text(tui, now=0.0))[0]
        assert "x" * 57 not in first
        assert "x" * 56 in first

    def test_creating_row_shows_buffer(self):
        tui = _tui(Task(1, "first"), buffer="draft")
        tui.session.begin_create()
        lines = _lines(render_task_list_text(tui, now=0.0))
        assert not lines[0].startswith("┃")
        assert lines[1].startswith("┃   2.  >  draft")

    def test_creating_on_empty_store(self):
        tui = _tui(buffer="hello")
        tui.session.begin_create()
        assert "hello" in _plain(render_task_list_text(tui, now=0.0))

    def test_editing_previews_buffer(self):
        tui = _tui(Task(1, "old"), buffer="new")
        tui.session.begin_edit()
        first = _lines(render_task_list_text(tui, now=0.0))[0]
        assert " >  new" in first
        assert "old" not in first

    def test_deadline_column_shows_input(self):
        tui = _tui(Task(1, "call"), buffer="10m")
        tui.session.begin_deadline()
        assert "@ 10m" in _plain(render_task_list_text(tui, now=0.0))


class TestFragments:
    def test_remaining_and_overdue(self):
        assert due_fragments(Task(1, "a", due_at=245.0), now=0.0) == [("class:due", "4m5s")]
        assert due_fragments(Task(1, "a", due_at=10.0), now=11.0) == [("class:overdue", "[OVERDUE]")]
        assert due_fragments(Task(1, "a", done=True, due_at=10.0), now=11.0) == []
        assert due_fragments(Task(1, "a"), now=11.0) == []

    def test_animation_states(self):
        deleting = Task(1, "gone")
        deleting.start_delete_animation(0.0)
        assert set(_plain(title_fragments(deleting, PALETTE, 0.1))) <= {"0", "1"}

        checking = Task(2, "abcd", done=True)
        checking.start_check_animation(Effect.LOADING, 0.0)
        assert _plain(title_fragments(checking, PALETTE, 10.0)) == "████"

        done = Task(3, "old", done=True)
        assert title_fragments(done, PALETTE, 0.0) == [(f"{PALETTE.dim} strike", "old")]
        assert title_fragments(Task(4, "open"), PALETTE, 0.0) == [(PALETTE.fg, "open")]


class TestHeaderFooter:
    def test_header(self):
        assert "// TODO LIST" in _plain(render_header_text(_tui()))

    def test_help_line(self):
        tui = _tui(sort_mode=SortMode.TODO_FIRST)
        text = _plain(build_footer_text(tui))
        assert "Theme: Catppuccin (t)" in text
        assert "Sort: Todo (s)" in text
        assert "Del (d)" in text

    def test_help_line_text(self):
        assert help_line("Nord", "Off") == (
            "Theme: Nord (t) • Sort: Off (s) • New (n) • Edit (e) • Check (Space) • Notify (@) • Del (d)"
        )

    @pytest.mark.parametrize("begin", ["begin_create", "begin_edit", "begin_deadline"])
    def test_entry_hint_replaces_help(self, begin):
        tui = _tui(Task(1, "a"))
        getattr(tui.session, begin)()
        text = _plain(build_footer_text(tui))
        assert "Esc to cancel" in text
        assert "Theme:" not in text

    def test_save_error_is_shown(self):
        tui = _tui()
        tui.session.store.last_save_error = "read-only file system"
        assert "Save failed: read-only file system" in _plain(build_footer_text(tui))
