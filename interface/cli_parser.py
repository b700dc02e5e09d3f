"""CLI parser construction for the todo TUI."""

import argparse
from typing import Any, Sequence


def build_parser(commands: Any, theme_names: Sequence[str], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tick-todo",
        description="tick-todo: animated terminal todo list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Themes: " + ", ".join(theme_names),
    )
    parser.add_argument(
        "--data-file",
        dest="data_file",
        help="JSON store (default: $TICK_TODO_DATA_FILE, config data_file, or ./todos.json)",
    )
    parser.add_argument(
        "--theme",
        metavar="NAME",
        help=f"start with this theme instead of the saved one (e.g. {default_theme!r})",
    )
    parser.add_argument(
        "--notifier",
        choices=["desktop", "webhook", "none"],
        help="how deadline alerts are delivered (default from config, else desktop)",
    )
    parser.add_argument("--log-file", dest="log_file", help="log destination (default ~/.tick_todo.log)")
    parser.add_argument("--verbose", "-v", action="store_true", help="log at DEBUG level")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.set_defaults(func=commands.cmd_tui)
    return parser


__all__ = ["build_parser"]
