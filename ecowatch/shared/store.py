"""In-memory storage for the most recent reading."""

import logging
import threading
from typing import Optional

from .models import Reading

logger = logging.getLogger(__name__)


class LatestReadingStore:
    """Single-slot repository holding the last reading written.

    Every write replaces the whole reading; there is no history. The swap
    happens under a lock so readers never observe a partial update, even
    when the store is shared across threads.
    """

    def __init__(self, initial: Optional[Reading] = None):
        self._reading = initial if initial is not None else Reading()
        self._version = 0
        self._lock = threading.Lock()

    def set(self, reading: Reading) -> None:
        """Replace the stored reading."""
        with self._lock:
            self._reading = reading
            self._version += 1
            version = self._version
        logger.debug(f"Stored reading #{version}: {reading.to_dict()}")

    def get(self) -> Reading:
        """Return the stored reading verbatim."""
        with self._lock:
            return self._reading

    @property
    def version(self) -> int:
        """Number of writes accepted so far."""
        with self._lock:
            return self._version
