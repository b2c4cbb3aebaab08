"""Time-range widgets: the compact summary and the full-screen editor."""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widget import Widget
from textual.widgets import OptionList, Static

from .datetime_input import DateTimeInput
from .timerange import PRESETS, RangeFocus, TimeRange


class TimeRangeSummary(Static, can_focus=True):
    """Base-layout slot for the time range; enter opens the editor."""

    DEFAULT_CSS = """
    TimeRangeSummary {
        height: 3;
        border: round $primary-background;
        padding: 0 1;
    }
    TimeRangeSummary:focus {
        border: round $accent;
    }
    """

    def __init__(self, time_range: TimeRange, *, id: Optional[str] = None):
        super().__init__(id=id)
        self.time_range = time_range
        self.border_title = "Time range"

    def on_mount(self) -> None:
        self.refresh_range()

    def refresh_range(self) -> None:
        text = Text()
        text.append(self.time_range.start.text)
        text.append("  ->  ", style="dim")
        text.append(self.time_range.end.text)
        self.update(text)


class TimeRangeScreen(ModalScreen[None]):
    """Full-screen time-range editor.

    Focus cycles start, presets, end. Picking a preset re-anchors the range
    to the current time.
    """

    BINDINGS = [
        Binding("ctrl+n", "reset_end", "End = now", show=True),
        Binding("escape", "close", "Done", show=True),
    ]

    DEFAULT_CSS = """
    TimeRangeScreen {
        align: center middle;
    }
    #range-container {
        width: 72;
        height: 16;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }
    #range-title {
        dock: top;
        width: 100%;
        content-align: center middle;
        text-style: bold;
    }
    #preset-list {
        width: 24;
        height: 10;
    }
    #range-fields {
        padding-left: 2;
    }
    #range-help {
        dock: bottom;
        color: $text-muted;
    }
    """

    def __init__(self, time_range: TimeRange) -> None:
        super().__init__()
        self.time_range = time_range

    def compose(self) -> ComposeResult:
        with Container(id="range-container"):
            yield Static("Time range", id="range-title")
            with Horizontal():
                yield OptionList(*[p.label for p in PRESETS], id="preset-list")
                with Vertical(id="range-fields"):
                    yield DateTimeInput("start", self.time_range.start, id="start-input")
                    yield DateTimeInput("end", self.time_range.end, id="end-input")
            yield Static(
                "tab: next  enter: save and go back  ctrl+n: end to now",
                id="range-help",
            )

    def on_mount(self) -> None:
        self.preset_list.highlighted = self.time_range.preset_index
        self._focus_current()

    @property
    def preset_list(self) -> OptionList:
        return self.query_one("#preset-list", OptionList)

    def _widget_for(self, target: RangeFocus) -> Widget:
        if target is RangeFocus.START:
            return self.query_one("#start-input", DateTimeInput)
        if target is RangeFocus.END:
            return self.query_one("#end-input", DateTimeInput)
        return self.preset_list

    def _focus_current(self) -> None:
        self._widget_for(self.time_range.focus.current).focus()

    def cycle(self, forward: bool = True) -> RangeFocus:
        ring = self.time_range.focus
        target = ring.next() if forward else ring.prev()
        self._focus_current()
        return target

    def _refresh_fields(self) -> None:
        for widget in self.query(DateTimeInput):
            widget.refresh()

    def on_option_list_option_highlighted(
        self, event: OptionList.OptionHighlighted
    ) -> None:
        # ignore the highlight set on mount
        if not self.preset_list.has_focus or event.option_index is None:
            return
        self.time_range.select_preset(event.option_index)
        self._refresh_fields()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.time_range.select_preset(event.option_index)
        self._refresh_fields()

    def action_reset_end(self) -> None:
        self.time_range.reset_end_to_now()
        self._refresh_fields()

    def action_close(self) -> None:
        self.dismiss(None)
