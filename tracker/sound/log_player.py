"""Default SoundPlayer that only records requests in the log.

Actual audio lives with the renderer, which reads the requested sound from
the boundary state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from tracker.core.models import AlertSeverity

log = structlog.get_logger()


class LogSoundPlayer:
    """SoundPlayer that logs each request. Zero dependencies beyond logging."""

    def __init__(self) -> None:
        self.requests = 0

    def play(self, severity: AlertSeverity) -> None:
        self.requests += 1
        log.info("alert_sound_requested", severity=severity.value)
