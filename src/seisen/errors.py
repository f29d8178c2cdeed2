"""
Error types for Seisen.

None of these are fatal: every one degrades to a visible fallback.
"""


class SeisenError(Exception):
    """Base class for Seisen errors."""


class StorageUnavailable(SeisenError):
    """A category file could not be read or written."""

    def __init__(self, category: str, reason: Exception | str):
        self.category = category
        self.reason = reason
        super().__init__(f"Notes for '{category}' unavailable: {reason}")


class EmptySet(SeisenError):
    """No notes to pick from."""


class UnknownCategory(SeisenError, ValueError):
    """Category is outside the fixed set."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown category: {category!r}")


class SessionNotReady(SeisenError):
    """Session operation attempted before initialize()."""


class NotificationError(SeisenError):
    """The notification backend rejected a delivery."""
