"""
Shared pytest fixtures for the Seisen test suite.

Every test runs against a temporary notes folder and config directory, so
nothing touches the real ~/seisen or ~/.config/seisen.
"""

import random
import threading
from pathlib import Path

import pytest

from seisen.errors import NotificationError
from seisen.selector import LocalNoteProvider, NoteSelector
from seisen.session import SessionController
from seisen.store import NoteStore


class LastIndexRandom(random.Random):
    """Random source that always picks the last element."""

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            start, stop = 0, start
        return stop - 1


class RecordingNotifier:
    """Notifier double: records deliveries, optionally failing the first ones."""

    def __init__(self, fail_times: int = 0):
        self.sent: list[tuple[str, str]] = []
        self.fail_times = fail_times
        self.attempts = 0
        self.delivered = threading.Event()

    def send(self, title: str, body: str) -> None:
        self.attempts += 1
        if self.attempts <= self.fail_times:
            raise NotificationError("rejected")
        self.sent.append((title, body))
        self.delivered.set()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point Seisen at temporary folders and a clean environment."""
    monkeypatch.setenv("SEISEN_HOME", str(tmp_path / "notes"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("SEISEN_TELEGRAM_TOKEN", raising=False)
    monkeypatch.delenv("SEISEN_TELEGRAM_CHAT_ID", raising=False)
    return tmp_path


@pytest.fixture
def notes_dir(tmp_path) -> Path:
    return tmp_path / "notes"


@pytest.fixture
def config_file(tmp_path) -> Path:
    """Path of config.toml inside the temporary XDG_CONFIG_HOME."""
    path = tmp_path / "config" / "seisen" / "config.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def store(notes_dir) -> NoteStore:
    return NoteStore(notes_dir)


@pytest.fixture
def selector() -> NoteSelector:
    return NoteSelector(seed=42)


@pytest.fixture
def provider(store, selector) -> LocalNoteProvider:
    return LocalNoteProvider(store, selector)


@pytest.fixture
def controller(provider) -> SessionController:
    return SessionController(provider)


@pytest.fixture
def ready_controller(controller) -> SessionController:
    controller.initialize()
    return controller


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
