from __future__ import annotations

import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any

USER_CONFIG_PATH = Path.home() / ".tick_todo_config.yaml"
DEFAULT_LOG_FILE = Path.home() / ".tick_todo.log"

logger = logging.getLogger("tick_todo.config")


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text()) or {}
    except Exception as exc:
        logger.warning("Ignoring unreadable config %s: %s", USER_CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def get_data_file() -> Path:
    env = os.getenv("TICK_TODO_DATA_FILE", "").strip()
    if env:
        return Path(env).expanduser()
    value = str(_load_config().get("data_file", "") or "").strip()
    return Path(value).expanduser() if value else Path("todos.json")


def get_notifier_kind() -> str:
    return str(_load_config().get("notifier", "") or "desktop").strip().lower()


def get_webhook_url() -> str:
    return str(_load_config().get("webhook_url", "") or "").strip()


def get_log_file() -> Path:
    value = str(_load_config().get("log_file", "") or "").strip()
    return Path(value).expanduser() if value else DEFAULT_LOG_FILE


def get_log_level() -> str:
    return str(_load_config().get("log_level", "") or "WARNING").strip().upper()
