"""Tick evaluation: retires finished animations, fires due notifications,
and decides whether another tick is needed."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from core import CHECK_ANIM_DURATION, DELETE_ANIM_DURATION, Task
from application.ports import Notifier
from application.task_list import TaskList

logger = logging.getLogger("tick_todo.scheduler")

NOTIFY_TITLE = "Todo Alert!"


@dataclass
class TickResult:
    needs_tick: bool = False
    removed: List[Task] = field(default_factory=list)
    removed_indexes: List[int] = field(default_factory=list)
    finished_checks: List[Task] = field(default_factory=list)
    notified: List[Task] = field(default_factory=list)

    @property
    def dirty(self) -> bool:
        return bool(self.removed or self.notified)


class AnimationScheduler:
    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        check_duration: float = CHECK_ANIM_DURATION,
        delete_duration: float = DELETE_ANIM_DURATION,
    ):
        self.notifier = notifier
        self.check_duration = check_duration
        self.delete_duration = delete_duration

    def advance(self, store: TaskList, now: float) -> TickResult:
        """Evaluate every task once for the tick at ``now``.

        Finished deletions are dropped from the store before returning, so the
        next render never sees them. The store is saved once when anything
        persistent changed.
        """
        result = TickResult()
        survivors: List[Task] = []
        for idx, task in enumerate(store.tasks):
            if task.is_deleting:
                if task.animation_elapsed(now) >= self.delete_duration:
                    result.removed.append(task)
                    result.removed_indexes.append(idx)
                    continue
                result.needs_tick = True
                survivors.append(task)
                continue
            if task.is_check_animating:
                if task.animation_elapsed(now) >= self.check_duration:
                    task.stop_animation()
                    result.finished_checks.append(task)
                else:
                    result.needs_tick = True
            survivors.append(task)

            if task.has_pending_deadline:
                result.needs_tick = True
                if task.is_overdue(now) and not task.notified:
                    self._notify(task)
                    task.notified = True
                    result.notified.append(task)

        if result.removed:
            store.tasks[:] = survivors
        if result.dirty:
            store.save()
        return result

    def _notify(self, task: Task) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.deliver(NOTIFY_TITLE, task.title)
        except Exception as exc:
            # Delivery is not retried; notified is still set by the caller.
            logger.warning("Notification for task %s failed: %s", task.id, exc)


__all__ = ["AnimationScheduler", "TickResult", "NOTIFY_TITLE"]
