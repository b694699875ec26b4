"""Session statistics.

Tracks in-memory counters of the events the session has processed.
No framework dependencies.
"""

from __future__ import annotations

import threading
import time


class SessionStats:
    """Thread-safe counters for samples, fixes and alert side effects."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._started_at = time.time()

        # Counters
        self.samples_received: int = 0
        self.fixes_received: int = 0
        self.fixes_ignored: int = 0
        self.fix_errors: int = 0
        self.base_resets: int = 0
        self.sound_requests: int = 0
        self.sound_failures: int = 0
        self.last_sample_ms: int = 0
        self.last_fix_ms: int = 0

    def record_sample(self, received_ms: int) -> None:
        with self._lock:
            self.samples_received += 1
            self.last_sample_ms = received_ms

    def record_fix(self, received_ms: int) -> None:
        with self._lock:
            self.fixes_received += 1
            self.last_fix_ms = received_ms

    def record_fix_ignored(self) -> None:
        """A fix arrived after geolocation was reported unavailable."""
        with self._lock:
            self.fixes_ignored += 1

    def record_fix_error(self) -> None:
        with self._lock:
            self.fix_errors += 1

    def record_base_reset(self) -> None:
        with self._lock:
            self.base_resets += 1

    def record_sound(self, *, failed: bool = False) -> None:
        with self._lock:
            self.sound_requests += 1
            if failed:
                self.sound_failures += 1

    def snapshot(self) -> dict:
        """Return a JSON-serializable snapshot of all stats."""
        with self._lock:
            return {
                "uptime_seconds": round(time.time() - self._started_at, 1),
                "samples_received": self.samples_received,
                "fixes_received": self.fixes_received,
                "fixes_ignored": self.fixes_ignored,
                "fix_errors": self.fix_errors,
                "base_resets": self.base_resets,
                "sound_requests": self.sound_requests,
                "sound_failures": self.sound_failures,
                "last_sample_ms": self.last_sample_ms,
                "last_fix_ms": self.last_fix_ms,
            }
