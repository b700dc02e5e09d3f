"""Footer renderer for TodoTUI."""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from application.session import Mode

ENTRY_HINTS = {
    Mode.CREATING: "New task: Enter to add • Esc to cancel",
    Mode.EDITING: "Edit title: Enter to save • Esc to cancel",
    Mode.SETTING_DEADLINE: "Deadline (e.g. 10m, 1h30m): Enter to set • empty clears • Esc to cancel",
}


def help_line(theme_name: str, sort_label: str) -> str:
    return (
        f"Theme: {theme_name} (t) • Sort: {sort_label} (s) • New (n) • Edit (e) • "
        "Check (Space) • Notify (@) • Del (d)"
    )


def build_footer_text(tui) -> FormattedText:
    session = tui.session
    parts: List[Tuple[str, str]] = [("class:border", "─" * max(10, min(tui.get_terminal_width(), 100)) + "\n")]
    hint = ENTRY_HINTS.get(session.mode)
    if hint:
        parts.append(("class:input.label", f" {hint}"))
        return FormattedText(parts)
    parts.append(("class:help", " " + help_line(tui.palette.name, session.store.sort_mode.label)))
    error = getattr(session.store, "last_save_error", None)
    if error:
        parts.append(("class:overdue", f"\n Save failed: {error}"))
    return FormattedText(parts)


__all__ = ["build_footer_text", "help_line"]
