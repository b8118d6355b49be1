"""Progress reporting seam between steps and whatever draws the UI.

Steps open a gauge, push ``(percent, message)`` events into it and show
one-off notices. They never talk to ``dialog`` or the terminal directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressEvent:
    percent: int
    message: Optional[str] = None


class Gauge:
    """Monotonic 0..100 progress for a single long-running step."""

    def __init__(self, title: str, sink: Callable[[ProgressEvent], None]) -> None:
        self.title = title
        self.percent = 0
        self._sink = sink

    def update(self, percent: int, message: Optional[str] = None) -> ProgressEvent:
        pct = max(self.percent, min(100, max(0, int(percent))))
        self.percent = pct
        ev = ProgressEvent(percent=pct, message=message)
        if message:
            logger.info("[%s] %d%% %s", self.title, pct, message)
        self._sink(ev)
        return ev


class ProgressReporter(Protocol):
    def gauge(self, title: str, text: str) -> ContextManager[Gauge]:
        ...

    def notice(self, title: str, text: str) -> None:
        ...

    def error(self, title: str, text: str) -> None:
        ...
