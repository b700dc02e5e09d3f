"""Task records, per-task animation state and the persisted app document."""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional

CHECK_ANIM_DURATION = 0.29
DELETE_ANIM_DURATION = 0.20
FPS = 60
TICK_INTERVAL = 1.0 / FPS

# Older data files store an unset deadline as the zero timestamp.
_ZERO_TIMESTAMPS = ("0001-01-01T00:00:00Z", "0001-01-01T00:00:00+00:00")


class AnimationState(Enum):
    IDLE = "idle"
    CHECKING = "checking"
    DELETING = "deleting"


class SortMode(IntEnum):
    OFF = 0
    TODO_FIRST = 1
    DONE_FIRST = 2

    @property
    def label(self) -> str:
        return {SortMode.OFF: "Off", SortMode.TODO_FIRST: "Todo", SortMode.DONE_FIRST: "Done"}[self]

    def next(self) -> "SortMode":
        return SortMode((self.value + 1) % len(SortMode))

    @classmethod
    def parse(cls, value: Any) -> "SortMode":
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.OFF


def format_timestamp(ts: Optional[float]) -> Optional[str]:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


def parse_timestamp(value: Any) -> Optional[float]:
    """Parse a persisted deadline; ``None`` for unset or unreadable values."""
    if value is None or value == "" or value in _ZERO_TIMESTAMPS:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # fromisoformat accepts at most microseconds; Go writes nanoseconds.
    if "." in text:
        head, _, rest = text.partition(".")
        digits = ""
        while rest and rest[0].isdigit():
            digits += rest[0]
            rest = rest[1:]
        text = f"{head}.{digits[:6].ljust(6, '0')}{rest}"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    if parsed.year <= 1:
        return None
    return parsed.timestamp()


@dataclass
class Task:
    """One to-do item.

    The animation fields are transient: they are never written by
    ``to_dict`` and always start out idle after ``from_dict``.
    """

    id: int
    title: str
    done: bool = False
    due_at: Optional[float] = None
    notified: bool = False
    animation: AnimationState = AnimationState.IDLE
    effect: Optional[int] = None
    animation_started_at: Optional[float] = None

    @property
    def is_check_animating(self) -> bool:
        return self.animation is AnimationState.CHECKING

    @property
    def is_deleting(self) -> bool:
        return self.animation is AnimationState.DELETING

    @property
    def has_pending_deadline(self) -> bool:
        return not self.done and self.due_at is not None

    def start_check_animation(self, effect: int, now: float) -> None:
        self.animation = AnimationState.CHECKING
        self.effect = effect
        self.animation_started_at = now

    def start_delete_animation(self, now: float) -> None:
        self.animation = AnimationState.DELETING
        self.effect = None
        self.animation_started_at = now

    def stop_animation(self) -> None:
        self.animation = AnimationState.IDLE
        self.effect = None
        self.animation_started_at = None

    def animation_elapsed(self, now: float) -> float:
        if self.animation_started_at is None:
            return 0.0
        return max(0.0, now - self.animation_started_at)

    def set_deadline(self, due_at: float) -> None:
        self.due_at = due_at
        self.notified = False

    def clear_deadline(self) -> None:
        # notified is left alone; it is only meaningful while a deadline is set.
        self.due_at = None

    def is_overdue(self, now: float) -> bool:
        return self.due_at is not None and now > self.due_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "done": self.done,
            "dueAt": format_timestamp(self.due_at),
            "notified": self.notified,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        try:
            task_id = int(data.get("id") or 0)
        except (TypeError, ValueError):
            task_id = 0
        return cls(
            id=task_id,
            title=str(data.get("title") or ""),
            done=bool(data.get("done", False)),
            due_at=parse_timestamp(data.get("dueAt")),
            notified=bool(data.get("notified", False)),
        )


ONBOARDING_HINTS = (
    ("Press 'n' to add a new task", False),
    ("Press 'e' to edit the selected task", False),
    ("Press 'd' to delete a task", False),
    ("Press 'space' to check/uncheck", True),
    ("Press '@' to set a timer notification", False),
    ("Press 's' to cycle sort modes", False),
    ("Press 't' to change the color theme", False),
)


def onboarding_tasks() -> List[Task]:
    return [Task(id=idx, title=title, done=done) for idx, (title, done) in enumerate(ONBOARDING_HINTS, 1)]


@dataclass
class AppData:
    """Persisted document: preferences plus the ordered task records."""

    theme_index: int = 0
    sort_mode: SortMode = SortMode.OFF
    tasks: List[Task] = field(default_factory=list)

    @classmethod
    def default(cls) -> "AppData":
        return cls(theme_index=0, sort_mode=SortMode.OFF, tasks=onboarding_tasks())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "themeIndex": self.theme_index,
            "sortMode": int(self.sort_mode),
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppData":
        if not isinstance(data, dict):
            raise ValueError("app data must be a JSON object")
        raw_tasks = data.get("tasks") or []
        if not isinstance(raw_tasks, list):
            raise ValueError("'tasks' must be a list")
        tasks = [Task.from_dict(item) for item in raw_tasks if isinstance(item, dict)]
        base = time.time_ns()
        for idx, task in enumerate(tasks):
            if task.id == 0:
                task.id = base + idx
        try:
            theme_index = int(data.get("themeIndex") or 0)
        except (TypeError, ValueError):
            theme_index = 0
        return cls(theme_index=theme_index, sort_mode=SortMode.parse(data.get("sortMode")), tasks=tasks)
