"""Focusable date-time field with overwrite-only digit entry."""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual import events
from textual.binding import Binding
from textual.widget import Widget

from .timerange import DateTimeField


class DateTimeInput(Widget, can_focus=True):
    BINDINGS = [
        Binding("left", "cursor_left", "Left", show=False),
        Binding("right", "cursor_right", "Right", show=False),
        Binding("ctrl+left", "word_left", "Word left", show=False),
        Binding("ctrl+right", "word_right", "Word right", show=False),
        Binding("home", "cursor_home", "Start", show=False),
        Binding("end", "cursor_end", "End", show=False),
    ]

    DEFAULT_CSS = """
    DateTimeInput {
        height: 3;
        width: 32;
        border: round $primary-background;
        padding: 0 1;
    }
    DateTimeInput:focus {
        border: round $accent;
    }
    """

    def __init__(self, label: str, field: DateTimeField, *, id: Optional[str] = None):
        super().__init__(id=id)
        self.label = label
        self.field = field

    def render(self) -> Text:
        text = Text()
        text.append(f"{self.label:>5} ", style="bold")
        for pos, char in enumerate(self.field.text):
            if self.has_focus and pos == self.field.cursor:
                text.append(char, style="reverse")
            else:
                text.append(char)
        return text

    def on_focus(self) -> None:
        self.refresh()

    def on_blur(self) -> None:
        self.refresh()

    def on_key(self, event: events.Key) -> None:
        if event.character is None or not event.character.isdigit():
            return
        event.stop()
        event.prevent_default()
        self.field.type_digit(event.character)
        self.refresh()

    def action_cursor_left(self) -> None:
        self.field.move_left()
        self.refresh()

    def action_cursor_right(self) -> None:
        self.field.move_right()
        self.refresh()

    def action_word_left(self) -> None:
        self.field.move_word_left()
        self.refresh()

    def action_word_right(self) -> None:
        self.field.move_word_right()
        self.refresh()

    def action_cursor_home(self) -> None:
        self.field.move_home()
        self.refresh()

    def action_cursor_end(self) -> None:
        self.field.move_end()
        self.refresh()
