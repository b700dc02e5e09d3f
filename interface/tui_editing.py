"""Inline text-entry mixin for TUI."""

import time
from typing import TYPE_CHECKING, Optional

from application.session import Mode

if TYPE_CHECKING:
    from prompt_toolkit.application import Application
    from prompt_toolkit.buffer import Buffer
    from prompt_toolkit.layout import Container

    from application.session import TodoSession


ENTRY_LABELS = {
    Mode.CREATING: " New: ",
    Mode.EDITING: " Edit: ",
    Mode.SETTING_DEADLINE: " Due in: ",
}


class EditingMixin:
    """Mixin wiring the session's text-entry modes to the shared edit field."""

    session: "TodoSession"
    edit_buffer: "Buffer"
    edit_field: "Container"
    main_window: "Container"
    app: Optional["Application"]

    @property
    def editing_mode(self) -> bool:
        return self.session.mode.is_text_entry

    def entry_label(self) -> str:
        return ENTRY_LABELS.get(self.session.mode, "")

    def start_editing(self, current_value: str = "") -> None:
        """Fill the edit buffer and move focus into it.

        The session must already be in a text-entry mode.
        """
        self.edit_buffer.text = current_value
        self.edit_buffer.cursor_position = len(current_value)
        if getattr(self, "app", None):
            self.app.layout.focus(self.edit_field)
        self.force_render()

    def save_edit(self) -> None:
        if not self.editing_mode:
            return
        wants_tick = self.session.commit_input(self.edit_buffer.text, time.time())
        self._leave_editing()
        if wants_tick:
            self.request_tick()

    def cancel_edit(self) -> None:
        self.session.cancel_input()
        self._leave_editing()

    def _leave_editing(self) -> None:
        self.edit_buffer.text = ""
        if getattr(self, "app", None):
            self.app.layout.focus(self.main_window)
        self.force_render()


__all__ = ["EditingMixin", "ENTRY_LABELS"]
