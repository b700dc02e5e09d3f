"""Task store: ordered task records plus sort/theme preferences, persisted write-through."""

import logging
import time
from typing import Iterator, List, Optional, Tuple

from core import AppData, SortMode, Task
from application.ports import TaskRepository

logger = logging.getLogger("tick_todo.store")


def sort_key(task: Task, mode: SortMode) -> Tuple[int, int]:
    if mode is SortMode.TODO_FIRST:
        return (1 if task.done else 0, task.id)
    if mode is SortMode.DONE_FIRST:
        return (0 if task.done else 1, task.id)
    return (0, task.id)


class TaskList:
    def __init__(self, repository: Optional[TaskRepository] = None, data: Optional[AppData] = None):
        data = data if data is not None else AppData.default()
        self.repository = repository
        self.tasks: List[Task] = list(data.tasks)
        self.sort_mode: SortMode = SortMode.parse(data.sort_mode)
        self.theme_index: int = data.theme_index
        self.last_save_error: str = ""

    @classmethod
    def load(cls, repository: TaskRepository) -> "TaskList":
        return cls(repository, repository.load())

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __getitem__(self, index: int) -> Task:
        return self.tasks[index]

    def snapshot(self) -> AppData:
        """Persistable view; tasks mid-deletion are left out."""
        return AppData(
            theme_index=self.theme_index,
            sort_mode=self.sort_mode,
            tasks=[t for t in self.tasks if not t.is_deleting],
        )

    def save(self) -> bool:
        if self.repository is None:
            return True
        try:
            self.repository.save(self.snapshot())
        except (OSError, OverflowError, TypeError, ValueError) as exc:
            self.last_save_error = str(exc)
            logger.warning("Saving tasks failed: %s", exc)
            return False
        self.last_save_error = ""
        return True

    def next_id(self, now_ns: Optional[int] = None) -> int:
        candidate = now_ns if now_ns is not None else time.time_ns()
        highest = max((t.id for t in self.tasks), default=0)
        return max(candidate, highest + 1)

    def add(self, title: str, now_ns: Optional[int] = None) -> Task:
        task = Task(id=self.next_id(now_ns), title=title)
        self.tasks.append(task)
        return task

    def find(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def index_of(self, task_id: int) -> Optional[int]:
        for idx, task in enumerate(self.tasks):
            if task.id == task_id:
                return idx
        return None

    def remove(self, task: Task) -> Optional[int]:
        idx = self.index_of(task.id)
        if idx is not None:
            del self.tasks[idx]
        return idx

    def apply_sort(self) -> None:
        mode = self.sort_mode
        self.tasks.sort(key=lambda t: sort_key(t, mode))

    def cycle_sort(self) -> SortMode:
        self.sort_mode = self.sort_mode.next()
        self.apply_sort()
        return self.sort_mode

    def cycle_theme(self, theme_count: int) -> int:
        self.theme_index = (self.theme_index + 1) % max(1, theme_count)
        return self.theme_index

    def has_pending_work(self) -> bool:
        return any(t.is_deleting or t.is_check_animating or t.has_pending_deadline for t in self.tasks)


__all__ = ["TaskList", "sort_key"]
