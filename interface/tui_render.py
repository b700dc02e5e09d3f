"""Task list renderer for TodoTUI."""

import time
from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

from application.session import Mode
from core import Palette, Task, render_delete, render_done, render_effect, render_open
from util.durations import short_duration

HEADER_TEXT = "// TODO LIST"
MAX_LIST_WIDTH = 100
# number(4) + icon(3) + spacers + timer column
RESERVED_COLUMNS = 40
MIN_TITLE_WIDTH = 10


def title_width(term_width: int) -> int:
    available = min(term_width - 4, MAX_LIST_WIDTH)
    return max(MIN_TITLE_WIDTH, available - RESERVED_COLUMNS)


def title_fragments(task: Task, palette: Palette, now: float, selected: bool = False) -> List[Tuple[str, str]]:
    if task.is_deleting:
        return render_delete(task.title, palette)
    if task.is_check_animating:
        return render_effect(task.title, task.animation_elapsed(now), task.effect, palette)
    if task.done:
        return render_done(task.title, palette)
    if selected:
        return [("class:selected", task.title)] if task.title else []
    return render_open(task.title, palette)


def due_fragments(task: Task, now: float) -> List[Tuple[str, str]]:
    if task.done or task.due_at is None:
        return []
    remaining = task.due_at - now
    if remaining < 0:
        return [("class:overdue", "[OVERDUE]")]
    return [("class:due", short_duration(remaining))]


def _row_prefix(idx: int, selected: bool, icon: Tuple[str, str]) -> List[Tuple[str, str]]:
    bar = ("class:selected.bar", "┃ ") if selected else ("", "  ")
    return [
        bar,
        ("class:number", f"{idx + 1}.".rjust(4)),
        ("", " "),
        icon,
        ("", " "),
    ]


def _check_icon(task: Task) -> Tuple[str, str]:
    if task.done:
        return ("class:check.done", "[✔]")
    return ("class:check.open", "[ ]")


def render_task_list_text(tui, now: Optional[float] = None) -> FormattedText:
    session = tui.session
    palette: Palette = tui.palette
    now = time.time() if now is None else now
    tasks = session.tasks
    mode = session.mode
    if not tasks and mode is not Mode.CREATING:
        return FormattedText([("class:help", "\n  No tasks.")])

    width = title_width(tui.get_terminal_width())
    buffer_text = tui.edit_buffer.text if mode.is_text_entry else ""
    target_id = session.target_id
    result: List[Tuple[str, str]] = []

    for idx, task in enumerate(tasks):
        selected = mode is not Mode.CREATING and idx == session.cursor
        editing_this = mode is Mode.EDITING and task.id == target_id
        if editing_this:
            icon = ("class:input", " > ")
            title = [("class:input", buffer_text)]
        else:
            icon = _check_icon(task)
            title = title_fragments(task, palette, now, selected=selected)
        result.extend(_row_prefix(idx, selected, icon))
        result.extend(tui._fit_fragments(title, width))
        result.append(("", "   "))
        if mode is Mode.SETTING_DEADLINE and task.id == target_id:
            result.append(("class:input", f"@ {buffer_text}"))
        else:
            result.extend(due_fragments(task, now))
        result.append(("", "\n"))

    if mode is Mode.CREATING:
        result.extend(_row_prefix(len(tasks), True, ("class:input", " > ")))
        result.extend(tui._fit_fragments([("class:input", buffer_text)], width))
        result.append(("", "\n"))
    return FormattedText(result)


def render_header_text(tui) -> FormattedText:
    return FormattedText([("class:header", f" {HEADER_TEXT} ")])


__all__ = [
    "render_task_list_text",
    "render_header_text",
    "title_fragments",
    "due_fragments",
    "title_width",
]
