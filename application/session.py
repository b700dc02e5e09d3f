"""Interaction state machine: which input mode is active and what each command does.

The session owns the selection cursor and the short-lived memory of the last
check effect. Mutators that start time-driven work return ``True`` so the
caller can (re)start the tick stream; ``tick`` reports whether another tick
is needed.
"""

import random
import time
from enum import Enum
from typing import Callable, Optional

from core import Effect, SortMode, Task, choose_effect
from util.durations import parse_duration
from application.scheduler import AnimationScheduler, TickResult
from application.task_list import TaskList


class Mode(Enum):
    BROWSE = "browse"
    CREATING = "creating"
    EDITING = "editing"
    SETTING_DEADLINE = "setting_deadline"

    @property
    def is_text_entry(self) -> bool:
        return self is not Mode.BROWSE


class TodoSession:
    def __init__(
        self,
        store: TaskList,
        scheduler: Optional[AnimationScheduler] = None,
        *,
        theme_count: int = 1,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.scheduler = scheduler or AnimationScheduler()
        self.theme_count = max(1, theme_count)
        self.rng = rng or random.Random()
        self.clock = clock
        self.mode = Mode.BROWSE
        self.cursor = 0
        self.last_effect: Optional[Effect] = None
        self.target_id: Optional[int] = None
        self.quit_requested = False
        self._cursor_before_create = 0
        if not 0 <= self.store.theme_index < self.theme_count:
            self.store.theme_index = 0
        self.store.apply_sort()

    # --- queries ------------------------------------------------------------

    @property
    def tasks(self):
        return self.store.tasks

    @property
    def selected_task(self) -> Optional[Task]:
        if self.mode is Mode.CREATING or not self.store.tasks:
            return None
        if 0 <= self.cursor < len(self.store.tasks):
            return self.store.tasks[self.cursor]
        return None

    @property
    def target_task(self) -> Optional[Task]:
        if self.target_id is None:
            return None
        return self.store.find(self.target_id)

    def has_pending_work(self) -> bool:
        return self.store.has_pending_work()

    def _now(self, now: Optional[float]) -> float:
        return self.clock() if now is None else now

    def _clamp_cursor(self) -> None:
        upper = len(self.store.tasks) if self.mode is Mode.CREATING else len(self.store.tasks) - 1
        self.cursor = max(0, min(self.cursor, upper))

    def _return_to_browse(self) -> None:
        self.mode = Mode.BROWSE
        self.target_id = None
        self._clamp_cursor()

    # --- browse commands ----------------------------------------------------

    def move(self, delta: int) -> None:
        if self.mode is not Mode.BROWSE:
            return
        total = len(self.store.tasks)
        if total <= 0:
            self.cursor = 0
            return
        self.cursor = max(0, min(self.cursor + delta, total - 1))

    def begin_create(self) -> bool:
        if self.mode is not Mode.BROWSE:
            return False
        self._cursor_before_create = self.cursor
        self.mode = Mode.CREATING
        self.target_id = None
        self.cursor = len(self.store.tasks)
        return True

    def begin_edit(self) -> Optional[str]:
        """Enter Editing; returns the text to pre-fill, or None when nothing is selected."""
        task = self.selected_task if self.mode is Mode.BROWSE else None
        if task is None or task.is_deleting:
            return None
        self.mode = Mode.EDITING
        self.target_id = task.id
        return task.title

    def begin_deadline(self) -> bool:
        task = self.selected_task if self.mode is Mode.BROWSE else None
        if task is None or task.is_deleting:
            return False
        self.mode = Mode.SETTING_DEADLINE
        self.target_id = task.id
        return True

    def toggle_selected(self, now: Optional[float] = None) -> bool:
        task = self.selected_task if self.mode is Mode.BROWSE else None
        if task is None or task.is_deleting:
            return False
        task.done = not task.done
        started = False
        if task.done:
            effect = choose_effect(self.last_effect, self.rng)
            self.last_effect = effect
            task.start_check_animation(effect, self._now(now))
            started = True
        else:
            task.stop_animation()
        self.store.apply_sort()
        self._clamp_cursor()
        self.store.save()
        return started

    def delete_selected(self, now: Optional[float] = None) -> bool:
        task = self.selected_task if self.mode is Mode.BROWSE else None
        if task is None or task.is_deleting:
            return False
        task.start_delete_animation(self._now(now))
        return True

    def cycle_sort(self) -> None:
        if self.mode is not Mode.BROWSE:
            return
        self.store.cycle_sort()
        self._clamp_cursor()
        self.store.save()

    def cycle_theme(self) -> int:
        if self.mode is Mode.BROWSE:
            self.store.cycle_theme(self.theme_count)
            self.store.save()
        return self.store.theme_index

    def quit(self) -> None:
        self.store.save()
        self.quit_requested = True

    # --- text entry ---------------------------------------------------------

    def cancel_input(self) -> None:
        if self.mode is Mode.CREATING:
            self.cursor = self._cursor_before_create
        self._return_to_browse()

    def commit_input(self, text: str, now: Optional[float] = None) -> bool:
        """Apply the buffer for the active text-entry mode and return to Browse."""
        mode = self.mode
        value = (text or "").strip()
        if mode is Mode.CREATING:
            if not value:
                self.cancel_input()
                return False
            task = self.store.add(value)
            if self.store.sort_mode is not SortMode.OFF:
                self.store.apply_sort()
            self.store.save()
            self.cursor = self.store.index_of(task.id) or 0
            self._return_to_browse()
            return False
        if mode is Mode.EDITING:
            task = self.target_task
            if value and task is not None:
                task.title = value
                self.store.save()
            self._return_to_browse()
            return False
        if mode is Mode.SETTING_DEADLINE:
            task = self.target_task
            requested = False
            if task is not None:
                try:
                    seconds = parse_duration(value)
                except ValueError:
                    task.clear_deadline()
                else:
                    task.set_deadline(self._now(now) + seconds)
                    requested = task.has_pending_deadline
                self.store.save()
            self._return_to_browse()
            return requested
        return False

    # --- time ---------------------------------------------------------------

    def tick(self, now: Optional[float] = None) -> bool:
        result: TickResult = self.scheduler.advance(self.store, self._now(now))
        if result.removed_indexes:
            self.cursor -= sum(1 for idx in result.removed_indexes if idx < self.cursor)
            self._cursor_before_create -= sum(1 for idx in result.removed_indexes if idx < self._cursor_before_create)
            self._clamp_cursor()
        return result.needs_tick


__all__ = ["Mode", "TodoSession"]
