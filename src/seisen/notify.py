"""
Notification backends for Seisen.

Each backend takes a (title, body) pair and either delivers it or raises
NotificationError. Retrying is not their job.
"""

import logging
import os
import shutil
import subprocess
from typing import Any, Protocol

import httpx

from seisen.config import Settings
from seisen.errors import NotificationError

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"


class Notifier(Protocol):
    def send(self, title: str, body: str) -> None: ...


class DesktopNotifier:
    """Desktop notification via notify-send."""

    def __init__(self, command: str = "notify-send"):
        self.command = command

    def available(self) -> bool:
        return shutil.which(self.command) is not None

    def send(self, title: str, body: str) -> None:
        cmd = [self.command, title]
        if body:
            cmd.append(body)
        try:
            result = subprocess.run(cmd, check=False, capture_output=True, text=True, timeout=10)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise NotificationError(f"{self.command} failed: {e}") from e
        if result.returncode != 0:
            raise NotificationError(
                f"{self.command} exited with {result.returncode}: {result.stderr.strip()}"
            )


class TelegramNotifier:
    """Push the note to a Telegram chat through the Bot API."""

    def __init__(
        self,
        token: str,
        chat_id: str,
        client: httpx.Client | None = None,
        base_url: str = TELEGRAM_API_URL,
    ):
        self.token = token
        self.chat_id = chat_id
        self.base_url = base_url
        self._client = client

    def send(self, title: str, body: str) -> None:
        text = f"{title}\n\n{body}" if body else title
        try:
            if self._client is not None:
                self._post(self._client, text)
            else:
                with httpx.Client(timeout=10.0) as client:
                    self._post(client, text)
        except (httpx.HTTPError, ValueError) as e:
            # Never echo the URL: it carries the bot token
            detail = type(e).__name__
            if isinstance(e, httpx.HTTPStatusError):
                detail = f"HTTP {e.response.status_code}"
            raise NotificationError(f"Telegram delivery failed: {detail}") from e

    def _post(self, client: httpx.Client, text: str) -> None:
        response = client.post(
            f"{self.base_url}/bot{self.token}/sendMessage",
            json={"chat_id": self.chat_id, "text": text},
        )
        response.raise_for_status()
        payload: dict[str, Any] = response.json()
        if not payload.get("ok", False):
            raise NotificationError(
                f"Telegram rejected message: {payload.get('description', 'unknown error')}"
            )


class LogNotifier:
    """Writes notes to the log instead of delivering them."""

    def send(self, title: str, body: str) -> None:
        logger.info("%s: %s", title, body)


def build_notifier(settings: Settings) -> Notifier:
    """Create the notifier selected in [notifications] backend."""
    backend = settings.notifications.backend

    if backend == "telegram":
        token = settings.telegram.token or os.environ.get("SEISEN_TELEGRAM_TOKEN")
        chat_id = settings.telegram.chat_id or os.environ.get("SEISEN_TELEGRAM_CHAT_ID")
        if not token or not chat_id:
            raise ValueError(
                "Telegram notifications need a bot token and chat id. "
                "Set SEISEN_TELEGRAM_TOKEN and SEISEN_TELEGRAM_CHAT_ID or add them to config.toml"
            )
        return TelegramNotifier(token, chat_id)

    if backend == "log":
        return LogNotifier()

    return DesktopNotifier()
