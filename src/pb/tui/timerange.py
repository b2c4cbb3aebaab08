"""Time-range state: two editable date-time fields and a preset list.

All stored instants are timezone-aware local times truncated to whole
seconds, so the on-screen text and the UTC wire value always agree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, List, Optional

from .focus import FocusRing

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
UTC_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
TEXT_WIDTH = len("0000-00-00 00:00:00")
TIME_START = len("0000-00-00 ")
DEFAULT_DURATION_MINUTES = 10

Clock = Callable[[], datetime]


def local_now() -> datetime:
    return datetime.now().astimezone().replace(microsecond=0)


def to_utc_string(value: datetime) -> str:
    """RFC3339 in UTC, e.g. ``2024-01-02T03:04:05Z``."""
    return value.astimezone(timezone.utc).strftime(UTC_FORMAT)


def parse_local(text: str) -> Optional[datetime]:
    """Parse display text in the local zone; None when it is not a valid time."""
    try:
        return datetime.strptime(text, DISPLAY_FORMAT).astimezone()
    except ValueError:
        return None


@dataclass(frozen=True)
class Preset:
    label: str
    offset: timedelta


PRESETS: List[Preset] = [
    Preset("10 Minutes", -timedelta(minutes=10)),
    Preset("20 Minutes", -timedelta(minutes=20)),
    Preset("30 Minutes", -timedelta(minutes=30)),
    Preset("1 Hour", -timedelta(hours=1)),
    Preset("3 Hours", -timedelta(hours=3)),
    Preset("1 Day", -timedelta(days=1)),
    Preset("3 Days", -timedelta(days=3)),
    Preset("1 Week", -timedelta(weeks=1)),
]

TEN_MINUTES, TWENTY_MINUTES, THIRTY_MINUTES, ONE_HOUR = PRESETS[:4]
THREE_HOURS, ONE_DAY, THREE_DAYS, ONE_WEEK = PRESETS[4:]


@dataclass
class DateTimeField:
    """A fixed-format ``YYYY-MM-DD HH:MM:SS`` buffer with a cursor.

    Typing a digit overwrites the character under the cursor. The edit is
    kept only if the result still parses; otherwise nothing changes.
    """

    time: datetime
    cursor: int = 0

    @property
    def text(self) -> str:
        return self.time.strftime(DISPLAY_FORMAT)

    def set_time(self, value: datetime) -> None:
        self.time = value.replace(microsecond=0)

    def edit_digit(self, position: int, digit: str) -> bool:
        if len(digit) != 1 or not digit.isdigit():
            return False
        text = self.text
        if not 0 <= position < len(text):
            return False
        parsed = parse_local(text[:position] + digit + text[position + 1 :])
        if parsed is None:
            return False
        self.time = parsed
        return True

    def type_digit(self, digit: str) -> bool:
        """Edit at the cursor, then step to the next digit slot."""
        accepted = self.edit_digit(self.cursor, digit)
        if accepted:
            self.cursor = self._next_digit_slot(self.cursor)
        return accepted

    def _next_digit_slot(self, position: int) -> int:
        text = self.text
        nxt = position + 1
        while nxt < len(text) and not text[nxt].isdigit():
            nxt += 1
        return min(nxt, len(text) - 1)

    def move_left(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    def move_right(self) -> None:
        self.cursor = min(self.cursor + 1, TEXT_WIDTH - 1)

    def move_word_left(self) -> None:
        """Jump to the start of the time half, then of the date half."""
        self.cursor = TIME_START if self.cursor > TIME_START else 0

    def move_word_right(self) -> None:
        self.cursor = TIME_START if self.cursor < TIME_START else TEXT_WIDTH - 1

    def move_home(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = TEXT_WIDTH - 1


class RangeFocus(Enum):
    START = "start"
    LIST = "list"
    END = "end"


@dataclass
class TimeRange:
    start: DateTimeField
    end: DateTimeField
    preset_index: int = 0
    clock: Clock = local_now
    focus: FocusRing[RangeFocus] = field(
        default_factory=lambda: FocusRing(
            [RangeFocus.START, RangeFocus.LIST, RangeFocus.END]
        )
    )

    @classmethod
    def initialize(
        cls, duration_minutes: int = DEFAULT_DURATION_MINUTES, clock: Clock = local_now
    ) -> "TimeRange":
        """``end = now``, ``start = end - duration`` (10 minutes when 0)."""
        if duration_minutes <= 0:
            duration_minutes = DEFAULT_DURATION_MINUTES
        end = clock().replace(microsecond=0)
        start = end - timedelta(minutes=duration_minutes)
        return cls(start=DateTimeField(start), end=DateTimeField(end), clock=clock)

    @property
    def preset(self) -> Preset:
        return PRESETS[self.preset_index]

    def select_preset(self, preset: Preset | int) -> None:
        """Anchor to now: ``end = now``, ``start = end + preset.offset``."""
        if isinstance(preset, int):
            self.preset_index = preset
        else:
            self.preset_index = PRESETS.index(preset)
        end = self.clock().replace(microsecond=0)
        self.end.set_time(end)
        self.start.set_time(end + self.preset.offset)

    def reset_end_to_now(self) -> None:
        self.end.set_time(self.clock())

    def start_utc(self) -> str:
        return to_utc_string(self.start.time)

    def end_utc(self) -> str:
        return to_utc_string(self.end.time)

    def summary(self) -> str:
        return f"{self.start.text} -> {self.end.text}"
