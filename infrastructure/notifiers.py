"""Notification delivery for passed deadlines."""

import logging
import shutil
import subprocess
import sys
from typing import Optional

import requests

logger = logging.getLogger("tick_todo.notify")

NOTIFY_TIMEOUT = 5.0


def _applescript_quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


class DesktopNotifier:
    """Desktop notification via ``notify-send`` (Linux) or ``osascript`` (macOS)."""

    def __init__(self, platform: Optional[str] = None, timeout: float = NOTIFY_TIMEOUT):
        self.platform = platform or sys.platform
        self.timeout = timeout

    def command(self, title: str, body: str) -> list:
        if self.platform == "darwin":
            script = f"display notification {_applescript_quote(body)} with title {_applescript_quote(title)}"
            return ["osascript", "-e", script]
        return ["notify-send", title, body]

    def deliver(self, title: str, body: str) -> None:
        cmd = self.command(title, body)
        if shutil.which(cmd[0]) is None:
            raise FileNotFoundError(f"{cmd[0]} not found on PATH")
        subprocess.run(cmd, check=True, capture_output=True, timeout=self.timeout)


class WebhookNotifier:
    """POST ``{"title", "body"}`` as JSON to a configured URL (ntfy, Slack relays, ...)."""

    def __init__(self, url: str, timeout: float = NOTIFY_TIMEOUT, session: Optional[requests.Session] = None):
        if not url:
            raise ValueError("webhook notifier requires a URL")
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def deliver(self, title: str, body: str) -> None:
        resp = self.session.post(self.url, json={"title": title, "body": body}, timeout=self.timeout)
        resp.raise_for_status()


class NullNotifier:
    def deliver(self, title: str, body: str) -> None:
        logger.info("%s: %s", title, body)


def build_notifier(kind: str = "desktop", webhook_url: str = ""):
    kind = (kind or "desktop").strip().lower()
    if kind == "none":
        return NullNotifier()
    if kind == "webhook":
        if not webhook_url:
            logger.warning("Webhook notifier selected without webhook_url; notifications disabled")
            return NullNotifier()
        return WebhookNotifier(webhook_url)
    if kind != "desktop":
        logger.warning("Unknown notifier %r, falling back to desktop", kind)
    return DesktopNotifier()


__all__ = ["DesktopNotifier", "WebhookNotifier", "NullNotifier", "build_notifier"]
