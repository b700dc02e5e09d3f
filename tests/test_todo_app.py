import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

import config
from infrastructure.notifiers import DesktopNotifier, NullNotifier
from interface import todo_app


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "USER_CONFIG_PATH", tmp_path / "cfg.yaml")
    monkeypatch.delenv("TICK_TODO_DATA_FILE", raising=False)
    return tmp_path


@pytest.fixture
def restore_logging():
    root = logging.getLogger("tick_todo")
    saved = (list(root.handlers), root.level, root.propagate)
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved[0]:
        root.addHandler(handler)
    root.setLevel(saved[1])
    root.propagate = saved[2]


class TestParser:
    def test_flags(self):
        args = todo_app.build_parser().parse_args(
            ["--data-file", "x.json", "--theme", "nord", "--notifier", "none", "--log-file", "l.log", "-v"]
        )
        assert args.data_file == "x.json"
        assert args.theme == "nord"
        assert args.notifier == "none"
        assert args.log_file == "l.log"
        assert args.verbose is True
        assert args.func is todo_app.cmd_tui

    def test_defaults(self):
        args = todo_app.build_parser().parse_args([])
        assert args.data_file is None
        assert args.theme is None
        assert args.version is False

    def test_rejects_unknown_notifier(self):
        with pytest.raises(SystemExit):
            todo_app.build_parser().parse_args(["--notifier", "pigeon"])


class TestBuildSession:
    def test_uses_cli_data_file_and_theme(self, isolated):
        data_file = isolated / "mine.json"
        args = SimpleNamespace(data_file=str(data_file), theme="Gruvbox", notifier="none")
        session = todo_app.build_session(args)
        assert session.store.repository.path == data_file
        assert len(session.tasks) == 7
        assert session.store.theme_index == 2
        assert isinstance(session.scheduler.notifier, NullNotifier)

    def test_unknown_theme_keeps_saved(self, isolated):
        args = SimpleNamespace(data_file=str(isolated / "d.json"), theme="nope", notifier=None)
        session = todo_app.build_session(args)
        assert session.store.theme_index == 0
        assert isinstance(session.scheduler.notifier, DesktopNotifier)

    def test_env_data_file(self, isolated, monkeypatch):
        monkeypatch.setenv("TICK_TODO_DATA_FILE", str(isolated / "env.json"))
        session = todo_app.build_session(SimpleNamespace(data_file=None, theme=None, notifier="none"))
        assert session.store.repository.path == isolated / "env.json"


class TestMain:
    def test_version(self, capsys):
        assert todo_app.main(["--version"]) == 0
        assert capsys.readouterr().out.strip()

    def test_runs_tui_command(self, isolated, monkeypatch, restore_logging):
        seen = {}

        def fake_cmd_tui(args, session):
            seen["session"] = session
            return 0

        monkeypatch.setattr(todo_app, "cmd_tui", fake_cmd_tui)
        log_file = isolated / "logs" / "todo.log"
        rc = todo_app.main(["--data-file", str(isolated / "t.json"), "--log-file", str(log_file), "--notifier", "none"])
        assert rc == 0
        assert len(seen["session"].tasks) == 7
        assert log_file.exists()


class TestLogging:
    def test_file_handler_only(self, tmp_path, restore_logging):
        log_file = tmp_path / "todo.log"
        todo_app.configure_logging(log_file, "INFO")
        root = restore_logging
        assert root.level == logging.INFO
        assert root.propagate is False
        assert [type(h) for h in root.handlers] == [logging.FileHandler]
        logging.getLogger("tick_todo.store").info("hello file")
        for handler in root.handlers:
            handler.flush()
        assert "hello file" in Path(log_file).read_text(encoding="utf-8")

    def test_unknown_level_defaults_to_warning(self, tmp_path, restore_logging):
        todo_app.configure_logging(tmp_path / "todo.log", "LOUD")
        assert restore_logging.level == logging.WARNING
