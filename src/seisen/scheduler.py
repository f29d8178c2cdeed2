"""
Periodic note notifications for Seisen.

The scheduler holds no reference to the session: it asks a supplier
function for the note text each time it fires. Delivery is best-effort.
"""

import logging
import threading
from typing import Callable

from seisen.config import DEFAULT_INTERVAL_SECONDS, DEFAULT_NOTIFICATION_TITLE
from seisen.notify import Notifier

logger = logging.getLogger(__name__)


class NotificationScheduler:
    """Fires supplier() through a notifier every interval seconds until stopped."""

    def __init__(self, notifier: Notifier, title: str = DEFAULT_NOTIFICATION_TITLE):
        self.notifier = notifier
        self.title = title
        self.interval = DEFAULT_INTERVAL_SECONDS
        self._supplier: Callable[[], str] | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self, interval: float, supplier: Callable[[], str]) -> None:
        """
        Begin firing every interval seconds.

        The first notification goes out after one full interval.
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")

        with self._lock:
            if self.running:
                raise RuntimeError("Scheduler already running")
            self.interval = interval
            self._supplier = supplier
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="seisen-notifier",
                daemon=True,
            )
            self._thread.start()

        logger.info("Notifications every %.0fs", interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        """Cancel future firings. Safe to call any number of times."""
        with self._lock:
            thread = self._thread
            self._stop_event.set()
            self._thread = None

        if thread is None:
            return
        if thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("Notifications stopped")

    def fire(self, supplier: Callable[[], str] | None = None) -> bool:
        """
        Deliver one notification now.

        Returns:
            True if the notifier accepted it. Failures are logged, never raised.
        """
        supplier = supplier or self._supplier
        if supplier is None:
            raise RuntimeError("No note supplier")

        try:
            body = supplier()
            self.notifier.send(self.title, body)
        except Exception as e:
            logger.warning("Notification not delivered: %s", e)
            return False
        return True

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            self.fire()

    def __enter__(self) -> "NotificationScheduler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
