import json
import logging
import os
from pathlib import Path

from core import AppData

logger = logging.getLogger("tick_todo.store")

DEFAULT_DATA_FILE = Path("todos.json")


class JsonTaskRepository:
    """Whole-document JSON storage for the task list and preferences."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path).expanduser() if path else DEFAULT_DATA_FILE

    def load(self) -> AppData:
        """Read the stored document; onboarding defaults when it is absent or unreadable."""
        if not self.path.exists():
            return AppData.default()
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return AppData.from_dict(payload)
        except (OSError, ValueError) as exc:
            logger.warning("Could not load %s, using defaults: %s", self.path, exc)
            return AppData.default()

    def save(self, data: AppData) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(data.to_dict(), indent=2, ensure_ascii=False)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, self.path)


__all__ = ["JsonTaskRepository", "DEFAULT_DATA_FILE"]
