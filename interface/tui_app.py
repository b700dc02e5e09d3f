#!/usr/bin/env python3
"""TUI application - TodoTUI class and cmd_tui command."""

import asyncio
import logging
import os
import time
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.containers import ConditionalContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import TextArea

from application.session import Mode, TodoSession
from core import Palette, TICK_INTERVAL

from .tui_display import DisplayMixin
from .tui_editing import EditingMixin
from .tui_footer import build_footer_text
from .tui_render import render_header_text, render_task_list_text
from .tui_themes import THEMES, build_style, get_palette

logger = logging.getLogger("tick_todo.tui")


class TodoTUI(EditingMixin, DisplayMixin):
    @classmethod
    def build_style(cls, palette: Palette) -> Style:
        return build_style(palette)

    def __init__(self, session: TodoSession):
        self.session = session
        self._tick_handle: Optional[asyncio.TimerHandle] = None

        self.edit_field = TextArea(multiline=False, focusable=True, wrap_lines=False)
        self.edit_field.buffer.on_text_changed += lambda _: self.force_render()
        self.edit_buffer = self.edit_field.buffer

        self.style = self.build_style(self.palette)

        kb = KeyBindings()
        browsing = Condition(lambda: self.session.mode is Mode.BROWSE)
        entering = Condition(lambda: self.session.mode.is_text_entry)

        @kb.add("up", filter=browsing)
        @kb.add("k", filter=browsing)
        def _(event):
            self.session.move(-1)
            self.force_render()

        @kb.add("down", filter=browsing)
        @kb.add("j", filter=browsing)
        def _(event):
            self.session.move(1)
            self.force_render()

        @kb.add("n", filter=browsing)
        def _(event):
            """n - new task."""
            if self.session.begin_create():
                self.start_editing("")

        @kb.add("e", filter=browsing)
        def _(event):
            """e - edit the selected title."""
            title = self.session.begin_edit()
            if title is not None:
                self.start_editing(title)

        @kb.add("@", filter=browsing)
        def _(event):
            """@ - set a deadline on the selected task."""
            if self.session.begin_deadline():
                self.start_editing("")

        @kb.add("d", filter=browsing)
        def _(event):
            if self.session.delete_selected(time.time()):
                self.request_tick()
            self.force_render()

        @kb.add("space", filter=browsing)
        @kb.add("enter", filter=browsing)
        def _(event):
            """Space/Enter - toggle completion."""
            if self.session.toggle_selected(time.time()):
                self.request_tick()
            self.force_render()

        @kb.add("s", filter=browsing)
        def _(event):
            self.session.cycle_sort()
            self.force_render()

        @kb.add("t", filter=browsing)
        def _(event):
            self.session.cycle_theme()
            self.style = self.build_style(self.palette)
            if self.app:
                self.app.style = self.style
            self.force_render()

        @kb.add("q", filter=browsing)
        @kb.add("c-c")
        def _(event):
            self.quit()

        @kb.add("enter", filter=entering)
        def _(event):
            """Enter - commit the input line."""
            self.save_edit()

        @kb.add("escape", eager=True, filter=entering)
        def _(event):
            self.cancel_edit()

        self.main_window = Window(
            content=FormattedTextControl(self.get_task_list_text, focusable=True, show_cursor=False),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        header = Window(
            content=FormattedTextControl(self.get_header_text),
            height=1,
            always_hide_cursor=True,
        )
        input_bar = ConditionalContainer(
            VSplit(
                [
                    Window(
                        content=FormattedTextControl(lambda: [("class:input.label", self.entry_label())]),
                        dont_extend_width=True,
                        height=1,
                    ),
                    self.edit_field,
                ]
            ),
            filter=entering,
        )
        self.footer = Window(
            content=FormattedTextControl(self.get_footer_text),
            dont_extend_height=True,
            always_hide_cursor=True,
            wrap_lines=True,
        )
        root = HSplit([header, self.main_window, input_bar, self.footer])

        self.app = Application(
            layout=Layout(root, focused_element=self.main_window),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
        )
        # Escape must not wait the default half second for a key sequence.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("TICK_TODO_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    @property
    def palette(self) -> Palette:
        return get_palette(self.session.store.theme_index)

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 100 if unavailable."""
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    def get_header_text(self) -> FormattedText:
        return render_header_text(self)

    def get_task_list_text(self) -> FormattedText:
        return render_task_list_text(self)

    def get_footer_text(self) -> FormattedText:
        return build_footer_text(self)

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    # --- tick timer ---------------------------------------------------------

    def _event_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        loop = getattr(self.app, "loop", None)
        if loop is not None:
            return loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def request_tick(self) -> None:
        """Schedule the next tick unless one is already pending."""
        if self._tick_handle is not None:
            return
        loop = self._event_loop()
        if loop is None:
            return
        self._tick_handle = loop.call_later(TICK_INTERVAL, self._on_tick)

    def cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _on_tick(self) -> None:
        self._tick_handle = None
        if self.session.tick(time.time()):
            self.request_tick()
        self.force_render()

    def _on_start(self) -> None:
        if self.session.has_pending_work():
            self.request_tick()

    # --- lifecycle ----------------------------------------------------------

    def quit(self) -> None:
        self.session.quit()
        self.cancel_tick()
        if self.app and self.app.is_running:
            self.app.exit()

    def run(self):
        self.app.run(pre_run=self._on_start)


def cmd_tui(args, session: TodoSession) -> int:
    tui = TodoTUI(session)
    tui.run()
    if session.store.last_save_error:
        logger.warning("Exited with unsaved changes: %s", session.store.last_save_error)
        return 1
    return 0


__all__ = ["TodoTUI", "cmd_tui", "THEMES"]
