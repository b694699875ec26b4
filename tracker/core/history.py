"""Bounded recent-history window used for trend charts."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tracker.core.models import HistoryPoint

# Number of points kept for charting.
MAX_HISTORY_POINTS = 20


class HistoryBuffer:
    """Count-bounded FIFO of history points, oldest first.

    No deduplication and no time-based eviction: once ``max_points`` is
    reached, each append drops the oldest entry.
    """

    def __init__(self, max_points: int = MAX_HISTORY_POINTS) -> None:
        if max_points <= 0:
            raise ValueError("max_points must be positive")
        self._points: deque[HistoryPoint] = deque(maxlen=max_points)

    @property
    def max_points(self) -> int:
        return self._points.maxlen or 0

    def append(self, point: HistoryPoint) -> tuple[HistoryPoint, ...]:
        """Append a point and return the resulting sequence."""
        self._points.append(point)
        return self.points()

    def points(self) -> tuple[HistoryPoint, ...]:
        return tuple(self._points)

    def clear(self) -> None:
        self._points.clear()

    def __len__(self) -> int:
        return len(self._points)
