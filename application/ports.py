from typing import Protocol

from core import AppData


class TaskRepository(Protocol):
    def load(self) -> AppData:
        ...

    def save(self, data: AppData) -> None:
        ...


class Notifier(Protocol):
    def deliver(self, title: str, body: str) -> None:
        ...
