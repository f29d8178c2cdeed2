"""
Session state for Seisen.

State is an immutable SessionState value. Transitions go through the pure
reduce(state, action) function; SessionController performs the side effects
(file I/O, randomness), dispatches actions and notifies subscribers.

All controller operations run under one lock, so category switches, note
additions and scheduler reads never interleave.
"""

import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable

from seisen.categories import DEFAULT_CATEGORY, is_category
from seisen.errors import EmptySet, SessionNotReady, StorageUnavailable, UnknownCategory
from seisen.selector import NoteProvider

logger = logging.getLogger(__name__)

LOADING_NOTE = "Chargement…"
FALLBACK_NOTE = "Aucune note disponible"

UNINITIALIZED = "uninitialized"
READY = "ready"


@dataclass(frozen=True)
class SessionState:
    phase: str = UNINITIALIZED
    category: str = DEFAULT_CATEGORY
    notes: tuple[str, ...] = ()
    current_note: str = LOADING_NOTE
    dark_mode: bool = False
    draft: str = ""

    @property
    def ready(self) -> bool:
        return self.phase == READY


# Actions


@dataclass(frozen=True)
class Initialized:
    pass


@dataclass(frozen=True)
class CategoryLoaded:
    category: str
    notes: tuple[str, ...]
    note: str


@dataclass(frozen=True)
class NoteSelected:
    note: str


@dataclass(frozen=True)
class DraftChanged:
    text: str


@dataclass(frozen=True)
class ThemeToggled:
    pass


Action = Initialized | CategoryLoaded | NoteSelected | DraftChanged | ThemeToggled


def reduce(state: SessionState, action: Action) -> SessionState:
    """Return the state that follows action. Never mutates state."""
    if isinstance(action, Initialized):
        return replace(state, phase=READY)
    if isinstance(action, CategoryLoaded):
        return replace(
            state,
            category=action.category,
            notes=tuple(action.notes),
            current_note=action.note,
        )
    if isinstance(action, NoteSelected):
        return replace(state, current_note=action.note)
    if isinstance(action, DraftChanged):
        return replace(state, draft=action.text)
    if isinstance(action, ThemeToggled):
        return replace(state, dark_mode=not state.dark_mode)
    raise TypeError(f"Unknown action: {action!r}")


class SessionController:
    """Owns the session state: active category, displayed note, theme, draft."""

    def __init__(self, provider: NoteProvider, default_category: str = DEFAULT_CATEGORY):
        if not is_category(default_category):
            raise UnknownCategory(default_category)
        self.provider = provider
        self._state = SessionState(category=default_category)
        self._lock = threading.RLock()
        self._subscribers: list[Callable[[SessionState], None]] = []

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def current_note(self) -> str:
        """Currently displayed note. Safe to call from the scheduler thread."""
        with self._lock:
            return self._state.current_note

    def subscribe(self, callback: Callable[[SessionState], None]) -> Callable[[], None]:
        """
        Call callback with every new state.

        Returns:
            A function that removes the subscription.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def initialize(self) -> SessionState:
        """
        Create missing category files, load the default category, pick a note.

        Calling it on a ready session does nothing.
        """
        with self._lock:
            if self._state.ready:
                return self._state

            try:
                self.provider.ensure_defaults()
            except StorageUnavailable as e:
                logger.warning("Could not create default notes: %s", e)

            category = self._state.category
            notes, note = self._load_and_pick(category)
            self._dispatch(CategoryLoaded(category, notes, note))
            self._dispatch(Initialized())
            return self._state

    def change_category(self, category: str) -> str:
        """
        Switch to another category and pick a note from it.

        Raises:
            UnknownCategory: category is not in the fixed set (state unchanged).
        """
        with self._lock:
            self._require_ready()
            if not is_category(category):
                raise UnknownCategory(category)

            logger.debug("Switching category to %s", category)
            notes, note = self._load_and_pick(category)
            self._dispatch(CategoryLoaded(category, notes, note))
            return note

    def request_new_note(self) -> str:
        """Pick another note from the loaded notes (no file I/O)."""
        with self._lock:
            self._require_ready()
            note = self._pick(self._state.notes)
            self._dispatch(NoteSelected(note))
            return note

    def set_draft(self, text: str) -> None:
        with self._lock:
            self._require_ready()
            self._dispatch(DraftChanged(text))

    def add_note(self, text: str | None = None) -> bool:
        """
        Append a note (text, or the current draft) to the active category.

        The category is reloaded so the new note can be picked, and the
        draft is cleared.

        Returns:
            True if the note was stored.
        """
        with self._lock:
            self._require_ready()
            if text is None:
                text = self._state.draft
            if not text.strip():
                return False

            category = self._state.category
            try:
                if not self.provider.append(category, text):
                    return False
            except StorageUnavailable as e:
                logger.warning("Could not save note: %s", e)
                return False

            notes, note = self._load_and_pick(category)
            self._dispatch(CategoryLoaded(category, notes, note))
            self._dispatch(DraftChanged(""))
            return True

    def toggle_theme(self) -> bool:
        """Flip between light and dark. Returns the new dark_mode flag."""
        with self._lock:
            self._require_ready()
            self._dispatch(ThemeToggled())
            return self._state.dark_mode

    def _require_ready(self) -> None:
        if not self._state.ready:
            raise SessionNotReady("Call initialize() first")

    def _pick(self, notes: tuple[str, ...]) -> str:
        try:
            return self.provider.select(notes)
        except EmptySet:
            return FALLBACK_NOTE

    def _load_and_pick(self, category: str) -> tuple[tuple[str, ...], str]:
        try:
            notes = tuple(self.provider.load(category))
        except StorageUnavailable as e:
            logger.warning("%s", e)
            notes = ()
        return notes, self._pick(notes)

    def _dispatch(self, action: Action) -> None:
        self._state = reduce(self._state, action)
        for callback in list(self._subscribers):
            try:
                callback(self._state)
            except Exception:
                logger.exception("State subscriber failed")
