#!/usr/bin/env python3
"""Tick evaluation: animation retirement, deadline notification, self-termination."""

from types import SimpleNamespace

import pytest

from core import AppData, Effect, Task
from application.scheduler import NOTIFY_TITLE, AnimationScheduler
from application.task_list import TaskList


class FakeNotifier:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def deliver(self, title, body):
        self.calls.append((title, body))
        if self.error:
            raise self.error


class CountingRepo:
    def __init__(self):
        self.saves = 0

    def load(self):
        return AppData(tasks=[])

    def save(self, data):
        self.saves += 1


def _store(*tasks):
    repo = CountingRepo()
    return TaskList(repo, AppData(tasks=list(tasks))), repo


class TestDeletion:
    def test_removed_only_after_full_duration(self):
        task = Task(1, "bye")
        task.start_delete_animation(now=100.0)
        store, repo = _store(task, Task(2, "stay"))
        sched = AnimationScheduler(delete_duration=0.2)

        early = sched.advance(store, 100.19)
        assert early.needs_tick
        assert [t.id for t in store] == [1, 2]
        assert repo.saves == 0

        done = sched.advance(store, 100.25)
        assert [t.id for t in store] == [2]
        assert done.removed_indexes == [0]
        assert not done.needs_tick
        assert repo.saves == 1

    def test_deleting_task_does_not_notify(self):
        notifier = FakeNotifier()
        task = Task(1, "late", due_at=10.0)
        task.start_delete_animation(now=50.0)
        store, _ = _store(task)
        AnimationScheduler(notifier).advance(store, 50.05)
        assert notifier.calls == []


class TestCheckAnimation:
    def test_returns_to_idle_after_duration(self):
        task = Task(1, "done", done=True)
        task.start_check_animation(Effect.SPARKLE, now=0.0)
        store, repo = _store(task)
        sched = AnimationScheduler(check_duration=0.29)

        assert sched.advance(store, 0.28).needs_tick
        assert task.is_check_animating

        result = sched.advance(store, 0.29)
        assert not task.is_check_animating
        assert result.finished_checks == [task]
        assert not result.needs_tick
        assert repo.saves == 0


class TestSelfTermination:
    def test_idle_store_needs_no_tick(self):
        store, repo = _store(Task(1, "a"), Task(2, "b", done=True), Task(3, "c", done=True, due_at=5.0))
        result = AnimationScheduler().advance(store, 1000.0)
        assert not result.needs_tick
        assert not result.dirty
        assert repo.saves == 0

    def test_future_deadline_keeps_ticking(self):
        store, _ = _store(Task(1, "a", due_at=2000.0))
        assert AnimationScheduler().advance(store, 1000.0).needs_tick

    def test_empty_store(self):
        store, _ = _store()
        assert not AnimationScheduler().advance(store, 0.0).needs_tick


class TestDeadlineNotification:
    def test_overdue_task_notified_exactly_once(self):
        notifier = FakeNotifier()
        task = Task(1, "Call mom", due_at=99.0)
        store, repo = _store(task)
        sched = AnimationScheduler(notifier)

        first = sched.advance(store, 100.0)
        assert notifier.calls == [(NOTIFY_TITLE, "Call mom")]
        assert task.notified is True
        assert first.notified == [task]
        assert repo.saves == 1

        sched.advance(store, 100.1)
        assert len(notifier.calls) == 1
        assert repo.saves == 1

    def test_not_yet_due(self):
        notifier = FakeNotifier()
        store, _ = _store(Task(1, "soon", due_at=100.0))
        AnimationScheduler(notifier).advance(store, 100.0)
        assert notifier.calls == []

    def test_failed_delivery_still_marks_notified(self, caplog):
        notifier = FakeNotifier(error=OSError("no display"))
        task = Task(7, "ping", due_at=1.0)
        store, _ = _store(task)
        with caplog.at_level("WARNING", logger="tick_todo.scheduler"):
            AnimationScheduler(notifier).advance(store, 2.0)
        assert task.notified is True
        assert "no display" in caplog.text

    def test_without_notifier(self):
        task = Task(1, "quiet", due_at=1.0)
        store, _ = _store(task)
        AnimationScheduler(None).advance(store, 2.0)
        assert task.notified is True

    @pytest.mark.parametrize("done", [True, False])
    def test_done_tasks_are_never_notified(self, done):
        notifier = FakeNotifier()
        task = Task(1, "x", done=done, due_at=1.0)
        store, _ = _store(task)
        AnimationScheduler(notifier).advance(store, 2.0)
        assert (notifier.calls == []) is done


def test_duck_typed_notifier():
    seen = []
    notifier = SimpleNamespace(deliver=lambda title, body: seen.append(body))
    store, _ = _store(Task(1, "duck", due_at=0.5))
    AnimationScheduler(notifier).advance(store, 1.0)
    assert seen == ["duck"]
