"""
Note storage for Seisen.

One plain UTF-8 text file per category, one note per line.
Files are append-only: no edit, no delete.

Line convention: every note line is newline terminated. Appends repair a
missing trailing newline before writing, so older files written as
"\\n" + text keep working.
"""

import fcntl
import logging
import os
from pathlib import Path

from seisen.categories import CATEGORIES, is_category, sample_text
from seisen.errors import StorageUnavailable, UnknownCategory

logger = logging.getLogger(__name__)


def normalize_note(text: str) -> str:
    """Trim a note and collapse internal line breaks so it fits on one line."""
    return " ".join(part.strip() for part in text.strip().splitlines() if part.strip())


def parse_notes(content: str) -> tuple[str, ...]:
    """Split file content into notes, dropping blank lines."""
    return tuple(line.strip() for line in content.splitlines() if line.strip())


def _fsync_write(f, data: str) -> None:
    """Write, flush and fsync. Data is on disk when this returns."""
    f.write(data)
    f.flush()
    os.fsync(f.fileno())


class NoteStore:
    """Category-to-file mapping over a single notes folder."""

    def __init__(self, home: Path):
        self.home = Path(home)

    def path_for(self, category: str) -> Path:
        """Get the backing file for a category."""
        if not is_category(category):
            raise UnknownCategory(category)
        return self.home / f"{category}.txt"

    def ensure_defaults(self) -> list[str]:
        """
        Create missing category files with their built-in samples.

        Idempotent: existing files are never touched.

        Returns:
            The categories whose file was created.
        """
        try:
            self.home.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable("*", e) from e

        created = []
        for category in CATEGORIES:
            path = self.path_for(category)
            try:
                # Exclusive create: never clobber a file that appeared meanwhile
                with open(path, "x", encoding="utf-8") as f:
                    _fsync_write(f, sample_text(category))
            except FileExistsError:
                continue
            except OSError as e:
                raise StorageUnavailable(category, e) from e
            created.append(category)

        if created:
            logger.info("Created default notes for: %s", ", ".join(created))
        return created

    def load(self, category: str) -> tuple[str, ...]:
        """
        Read all notes of a category, in file order.

        Raises:
            StorageUnavailable: file missing, unreadable or not UTF-8.
        """
        path = self.path_for(category)
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailable(category, e) from e
        return parse_notes(content)

    def append(self, category: str, text: str) -> bool:
        """
        Append one note to a category.

        Empty or whitespace-only text is a no-op: nothing is written and
        False is returned. Otherwise the note is written under an exclusive
        file lock and fsync'd before returning; I/O failures raise.

        Returns:
            False if text was empty (nothing written), True otherwise.
        """
        path = self.path_for(category)
        note = normalize_note(text)
        if not note:
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # a+ so we can peek at the last byte while holding the lock
            with open(path, "a+b") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                try:
                    f.seek(0, os.SEEK_END)
                    separator = b""
                    if f.tell() > 0:
                        f.seek(-1, os.SEEK_END)
                        if f.read(1) != b"\n":
                            separator = b"\n"
                    f.write(separator + note.encode("utf-8") + b"\n")
                    f.flush()
                    os.fsync(f.fileno())
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except OSError as e:
            raise StorageUnavailable(category, e) from e

        logger.debug("Appended note to %s", category)
        return True

    def count(self, category: str) -> int:
        """Number of notes in a category."""
        return len(self.load(category))
