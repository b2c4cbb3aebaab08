"""Result table: column layout, row filter and the textual grid view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import DataTable, Input

from pb.models import QueryResult

from .cells import Cell, render_cell
from .columns import Column, build_columns, placeholder_columns

CELL_PADDING = 1


@dataclass
class TableModel:
    """Rows and columns for one result set plus the active filter."""

    columns: List[Column] = field(default_factory=placeholder_columns)
    records: List[Dict[str, Any]] = field(default_factory=list)
    filter_text: str = ""
    column_offset: int = 0
    _visible: List[int] = field(default_factory=list)

    def load_result(self, result: QueryResult) -> None:
        """Replace the contents; column widths are fixed from here on."""
        self.records = list(result.records)
        self.columns = build_columns(result.fields, self.records)
        if not self.columns:
            self.columns = placeholder_columns()
        self.column_offset = 0
        self._apply_filter()

    def set_filter(self, text: str) -> None:
        self.filter_text = text
        self._apply_filter()

    def clear_filter(self) -> None:
        self.set_filter("")

    def _apply_filter(self) -> None:
        needle = self.filter_text.casefold()
        if not needle:
            self._visible = list(range(len(self.records)))
            return
        names = [col.name for col in self.columns if col.filterable]
        self._visible = [
            idx
            for idx, record in enumerate(self.records)
            if any(
                needle in Cell.of(record[name]).text.casefold()
                for name in names
                if name in record
            )
        ]

    @property
    def visible_indices(self) -> List[int]:
        return list(self._visible)

    @property
    def visible_count(self) -> int:
        return len(self._visible)

    def visible_records(self) -> List[Dict[str, Any]]:
        return [self.records[idx] for idx in self._visible]

    def render_row(self, record: Dict[str, Any]) -> List[Text]:
        return [render_cell(record, col.name) for col in self.columns]

    def scroll_left(self) -> bool:
        if self.column_offset > 0:
            self.column_offset -= 1
            return True
        return False

    def scroll_right(self) -> bool:
        if self.column_offset < len(self.columns) - 1:
            self.column_offset += 1
            return True
        return False

    def column_x(self, index: Optional[int] = None) -> int:
        """Horizontal cell offset at which column ``index`` starts."""
        if index is None:
            index = self.column_offset
        return sum(col.width + 2 * CELL_PADDING for col in self.columns[:index])


class RecordGrid(DataTable):
    """Row-cursor grid; navigation keys mirror the arrow/WASD scheme."""

    BINDINGS = [
        Binding("up,w", "cursor_up", "Up", show=False),
        Binding("down,s", "cursor_down", "Down", show=False),
        Binding("shift+up,W,pageup", "page_up", "Page up", show=False),
        Binding("shift+down,S,pagedown", "page_down", "Page down", show=False),
        Binding("home,ctrl+y", "first_page", "First", show=False),
        Binding("end,ctrl+v", "last_page", "Last", show=False),
        Binding("left,a", "column_left", "Column left", show=False),
        Binding("right,d", "column_right", "Column right", show=False),
    ]

    DEFAULT_CSS = """
    RecordGrid {
        height: 1fr;
    }
    """

    def __init__(self, model: TableModel, *, id: Optional[str] = None):
        super().__init__(
            id=id, cursor_type="row", zebra_stripes=True, cell_padding=CELL_PADDING
        )
        self.model = model

    def rebuild(self) -> None:
        self.clear(columns=True)
        for col in self.model.columns:
            self.add_column(col.name, width=col.width, key=col.name)
        for idx in self.model.visible_indices:
            self.add_row(*self.model.render_row(self.model.records[idx]), key=str(idx))

    def action_first_page(self) -> None:
        self.move_cursor(row=0)

    def action_last_page(self) -> None:
        if self.row_count:
            self.move_cursor(row=self.row_count - 1)

    def action_column_left(self) -> None:
        if self.model.scroll_left():
            self.scroll_to(x=self.model.column_x(), animate=False)

    def action_column_right(self) -> None:
        if self.model.scroll_right():
            self.scroll_to(x=self.model.column_x(), animate=False)


class ResultTable(Vertical):
    """Grid plus a hidden filter input that ``/`` reveals."""

    BINDINGS = [
        Binding("slash", "start_filter", "Filter", show=True, key_display="/"),
        Binding("escape", "clear_filter", "Clear filter", show=False),
    ]

    DEFAULT_CSS = """
    ResultTable {
        height: 1fr;
        border: round $primary-background;
    }
    ResultTable:focus-within {
        border: round $accent;
    }
    ResultTable #filter-input {
        height: 3;
    }
    .hidden {
        display: none;
    }
    """

    def __init__(self, model: Optional[TableModel] = None, *, id: Optional[str] = None):
        super().__init__(id=id)
        self.model = model if model is not None else TableModel()
        self.border_title = "Results"

    def compose(self) -> ComposeResult:
        yield Input(placeholder="filter rows", id="filter-input", classes="hidden")
        yield RecordGrid(self.model, id="record-grid")

    def on_mount(self) -> None:
        self.grid.rebuild()

    @property
    def grid(self) -> RecordGrid:
        return self.query_one("#record-grid", RecordGrid)

    @property
    def filter_input(self) -> Input:
        return self.query_one("#filter-input", Input)

    @property
    def filtering(self) -> bool:
        return self.filter_input.has_focus

    def load_result(self, result: QueryResult) -> None:
        self.model.load_result(result)
        self._refresh_grid()

    def _refresh_grid(self) -> None:
        self.grid.rebuild()
        self.border_subtitle = self._subtitle()

    def _subtitle(self) -> str:
        total = len(self.model.records)
        if self.model.filter_text:
            return f"{self.model.visible_count}/{total} rows matching {self.model.filter_text!r}"
        return f"{total} rows"

    def action_start_filter(self) -> None:
        self.filter_input.remove_class("hidden")
        self.filter_input.focus()

    def action_clear_filter(self) -> None:
        self.filter_input.value = ""
        self.filter_input.add_class("hidden")
        self.model.clear_filter()
        self._refresh_grid()
        self.grid.focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.model.set_filter(event.value)
        self._refresh_grid()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        # keep the filter, go back to browsing
        event.stop()
        if not event.value:
            self.filter_input.add_class("hidden")
        self.grid.focus()
