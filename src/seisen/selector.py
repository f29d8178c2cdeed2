"""
Random note selection for Seisen.
"""

import random
from typing import Protocol, Sequence

from seisen.errors import EmptySet
from seisen.store import NoteStore


class NoteSelector:
    """Uniform random pick over a loaded NoteSet."""

    def __init__(self, rng: random.Random | None = None, seed: int | None = None):
        if rng is None:
            rng = random.Random(seed)
        self.rng = rng

    def select(self, notes: Sequence[str]) -> str:
        """
        Pick one note.

        Raises:
            EmptySet: notes is empty.
        """
        if not notes:
            raise EmptySet("No notes to choose from")
        return notes[self.rng.randrange(len(notes))]


class NoteProvider(Protocol):
    """What the session needs from storage and selection."""

    def load(self, category: str) -> tuple[str, ...]: ...

    def select(self, notes: Sequence[str]) -> str: ...

    def append(self, category: str, text: str) -> bool: ...

    def ensure_defaults(self) -> list[str]: ...


class LocalNoteProvider:
    """NoteProvider backed by the local notes folder."""

    def __init__(self, store: NoteStore, selector: NoteSelector | None = None):
        self.store = store
        self.selector = selector or NoteSelector()

    def load(self, category: str) -> tuple[str, ...]:
        return self.store.load(category)

    def select(self, notes: Sequence[str]) -> str:
        return self.selector.select(notes)

    def append(self, category: str, text: str) -> bool:
        return self.store.append(category, text)

    def ensure_defaults(self) -> list[str]:
        return self.store.ensure_defaults()
