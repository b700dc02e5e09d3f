#!/usr/bin/env python3
"""
todo_app: process entry point. Parses flags, wires collaborators and runs the TUI.
"""

import argparse
import logging
import sys
from importlib.metadata import version as pkg_version, PackageNotFoundError
from pathlib import Path
from typing import Optional, Sequence

from application.scheduler import AnimationScheduler
from application.session import TodoSession
from application.task_list import TaskList
from config import get_data_file, get_log_file, get_log_level, get_notifier_kind, get_webhook_url
from infrastructure.file_repository import JsonTaskRepository
from infrastructure.notifiers import build_notifier

from .cli_parser import build_parser as build_cli_parser
from .tui_app import TodoTUI, cmd_tui
from .tui_themes import DEFAULT_THEME, THEMES, theme_index, theme_names

logger = logging.getLogger("tick_todo")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

__all__ = [
    "cmd_tui",
    "TodoTUI",
    "THEMES",
    "DEFAULT_THEME",
    "build_parser",
    "build_session",
    "configure_logging",
    "main",
]


def configure_logging(log_file: Path, level: str = "WARNING") -> None:
    """Send ``tick_todo.*`` records to a file; the terminal belongs to the UI."""
    root = logging.getLogger("tick_todo")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    numeric = getattr(logging, level.upper(), None)
    root.setLevel(numeric if isinstance(numeric, int) else logging.WARNING)
    root.propagate = False


def build_session(args: argparse.Namespace) -> TodoSession:
    data_file = Path(args.data_file).expanduser() if getattr(args, "data_file", None) else get_data_file()
    store = TaskList.load(JsonTaskRepository(data_file))
    kind = getattr(args, "notifier", None) or get_notifier_kind()
    scheduler = AnimationScheduler(notifier=build_notifier(kind, get_webhook_url()))
    session = TodoSession(store, scheduler, theme_count=len(THEMES))
    requested = getattr(args, "theme", None)
    if requested:
        idx = theme_index(requested)
        if idx is None:
            logger.warning("Unknown theme %r; keeping %s", requested, THEMES[store.theme_index].name)
        else:
            store.theme_index = idx
    logger.info("Loaded %d tasks from %s", len(store), data_file)
    return session


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    return build_cli_parser(commands=sys.modules[__name__], theme_names=theme_names(), default_theme=DEFAULT_THEME)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version("tick-todo"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    log_file = Path(args.log_file).expanduser() if args.log_file else get_log_file()
    configure_logging(log_file, "DEBUG" if args.verbose else get_log_level())
    session = build_session(args)
    return args.func(args, session)


if __name__ == "__main__":
    sys.exit(main())
