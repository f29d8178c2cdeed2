"""
Health check module for Seisen.

Reports status of the notes folder, each category file and notifications.
"""

import os

from seisen.categories import CATEGORIES, display_name
from seisen.config import Settings, get_config_path
from seisen.errors import StorageUnavailable
from seisen.notify import DesktopNotifier
from seisen.store import NoteStore


def check_config() -> tuple[str, str]:
    """Check config file status."""
    path = get_config_path()
    if not path.exists():
        return "-", "Defaults (no config.toml)"
    return "✓", f"OK ({path})"


def check_notes_dir(store: NoteStore) -> tuple[str, str]:
    """Check the notes folder."""
    if not store.home.exists():
        return "✗", f"Not found: {store.home}"
    if not os.access(store.home, os.W_OK):
        return "!", f"Read-only: {store.home}"
    return "✓", f"OK ({store.home})"


def check_category(store: NoteStore, category: str) -> tuple[str, str]:
    """Check one category file."""
    try:
        count = store.count(category)
    except StorageUnavailable as e:
        return "✗", f"Error: {e.reason}"
    if count == 0:
        return "!", "Empty"
    return "✓", f"OK ({count} notes)"


def check_notifications(settings: Settings) -> tuple[str, str]:
    """Check the configured notification backend."""
    backend = settings.notifications.backend
    every = f"every {settings.notifications.interval_seconds:.0f}s"

    if backend == "desktop":
        if not DesktopNotifier().available():
            return "✗", "notify-send not found"
        return "✓", f"OK (desktop, {every})"

    if backend == "telegram":
        token = settings.telegram.token or os.environ.get("SEISEN_TELEGRAM_TOKEN")
        chat_id = settings.telegram.chat_id or os.environ.get("SEISEN_TELEGRAM_CHAT_ID")
        if not token:
            return "✗", "No bot token"
        if not chat_id:
            return "✗", "No chat id"
        return "✓", f"OK (telegram, {every})"

    return "-", f"Log only ({every})"


def run_health_check(store: NoteStore, settings: Settings) -> dict[str, tuple[str, str]]:
    """Run all health checks."""
    checks = {
        "Config": check_config(),
        "Notes folder": check_notes_dir(store),
    }
    for category in CATEGORIES:
        checks[f"Category {display_name(category)}"] = check_category(store, category)
    checks["Notifications"] = check_notifications(settings)
    return checks


def format_health_report(checks: dict[str, tuple[str, str]]) -> str:
    """Format health check results."""
    lines = ["Seisen Health Check", "-" * 40]

    for name, (status, message) in checks.items():
        lines.append(f"{status} {name}: {message}")

    return "\n".join(lines)
