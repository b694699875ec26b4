"""Sound playback interface (port) for boundary alerts."""

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from tracker.core.models import AlertSeverity


class SoundPlayer(Protocol):
    """Port: plays an alert sound of the given severity."""

    def play(self, severity: AlertSeverity) -> None: ...
