"""Query screen state machine, independent of any widget toolkit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .focus import FocusRing

logger = logging.getLogger(__name__)


class Overlay(Enum):
    NONE = "none"
    TIME_RANGE = "time_range"


class Focus(Enum):
    QUERY = "query"
    TIME = "time"
    TABLE = "table"


def _base_ring() -> FocusRing[Focus]:
    return FocusRing([Focus.QUERY, Focus.TIME, Focus.TABLE])


@dataclass
class QueryState:
    """Overlay mode, base-layout focus and fetch sequencing.

    Every fetch gets a sequence number from ``issue_fetch``. Only the
    completion carrying the latest number is applied; earlier fetches that
    finish late are dropped.
    """

    overlay: Overlay = Overlay.NONE
    focus: FocusRing[Focus] = field(default_factory=_base_ring)
    latest_seq: int = 0
    in_flight: int = 0

    @property
    def current(self) -> Focus:
        return self.focus.current

    def cycle(self, forward: bool = True) -> Focus:
        if self.overlay is not Overlay.NONE:
            return self.focus.current
        return self.focus.next() if forward else self.focus.prev()

    def set_focus(self, target: Focus) -> None:
        self.focus.set(target)

    def open_overlay(self) -> bool:
        if self.overlay is Overlay.NONE and self.focus.current is Focus.TIME:
            self.overlay = Overlay.TIME_RANGE
            return True
        return False

    def confirm_overlay(self) -> bool:
        if self.overlay is Overlay.TIME_RANGE:
            self.overlay = Overlay.NONE
            self.focus.set(Focus.TIME)
            return True
        return False

    def issue_fetch(self) -> int:
        self.latest_seq += 1
        self.in_flight += 1
        return self.latest_seq

    def accept(self, seq: int) -> bool:
        """Record a completion; True when it is the newest fetch issued."""
        self.in_flight = max(self.in_flight - 1, 0)
        if seq != self.latest_seq:
            logger.info(
                "discarding stale fetch result %d (latest is %d)", seq, self.latest_seq
            )
            return False
        return True
