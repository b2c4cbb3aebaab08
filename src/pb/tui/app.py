"""Interactive query screen.

Layout: query editor and time range on top, result table below, status bar
and key footer at the bottom. The app owns the focus ring, the time-range
overlay and the fetch lifecycle; widgets only render and edit their own
state.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from textual import events
from textual.actions import SkipAction
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Footer

from pb.client import DEFAULT_TIMEOUT
from pb.models import Profile, QueryRequest, QueryResult

from .editor import QueryEditor
from .fetch import FetchCompleted, Fetcher, fetch
from .overlay import TimeRangeScreen, TimeRangeSummary
from .state import Focus, Overlay, QueryState
from .status import QUERY_FAILED, StatusBar, StatusModel
from .table import ResultTable, TableModel
from .timerange import DEFAULT_DURATION_MINUTES, TimeRange

logger = logging.getLogger(__name__)


class QueryApp(App[None]):
    """Query a stream and browse the records."""

    TITLE = "pb query"

    CSS = """
    Screen {
        layout: vertical;
    }
    #top {
        height: 8;
    }
    #query-editor {
        width: 2fr;
    }
    #time-summary {
        width: 1fr;
    }
    #results {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=True, priority=True),
        Binding("ctrl+r", "rerun", "Run", show=True, priority=True),
        Binding("tab", "cycle_forward", "Next", show=True, priority=True),
        Binding("shift+tab", "cycle_backward", "Prev", show=False, priority=True),
        Binding("enter", "enter", "Edit time", show=False, priority=True),
    ]

    def __init__(
        self,
        profile: Profile,
        stream: Optional[str] = None,
        *,
        duration: int = DEFAULT_DURATION_MINUTES,
        timeout: float = DEFAULT_TIMEOUT,
        fetcher: Fetcher = fetch,
        time_range: Optional[TimeRange] = None,
    ):
        super().__init__()
        self.profile = profile
        self.stream = stream
        self.timeout = timeout
        self.fetcher = fetcher
        self.state = QueryState()
        self.time_range = (
            time_range if time_range is not None else TimeRange.initialize(duration)
        )
        self.table_model = TableModel()
        self.status_model = StatusModel(host=profile.url, username=profile.username)

    def compose(self) -> ComposeResult:
        with Horizontal(id="top"):
            yield QueryEditor(self.stream, id="query-editor")
            yield TimeRangeSummary(self.time_range, id="time-summary")
        yield ResultTable(self.table_model, id="results")
        yield StatusBar(self.status_model, id="status")
        yield Footer()

    def on_mount(self) -> None:
        self._focus_current()
        self.run_fetch()

    @property
    def base_screen(self) -> Screen:
        """The composed layout, even while the overlay is on top."""
        return self.screen_stack[0]

    @property
    def editor(self) -> QueryEditor:
        return self.base_screen.query_one("#query-editor", QueryEditor)

    @property
    def time_summary(self) -> TimeRangeSummary:
        return self.base_screen.query_one("#time-summary", TimeRangeSummary)

    @property
    def results(self) -> ResultTable:
        return self.base_screen.query_one("#results", ResultTable)

    @property
    def status(self) -> StatusBar:
        return self.base_screen.query_one("#status", StatusBar)

    # ------------------------------------------------------------------
    # Focus and overlay
    # ------------------------------------------------------------------

    def _widget_for(self, target: Focus) -> Widget:
        if target is Focus.QUERY:
            return self.editor
        if target is Focus.TIME:
            return self.time_summary
        return self.results.grid

    def _focus_current(self) -> None:
        self._widget_for(self.state.current).focus()

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        # keep the ring in step with mouse focus changes
        if self.state.overlay is not Overlay.NONE:
            return
        ancestors = event.widget.ancestors_with_self
        if self.editor in ancestors:
            self.state.set_focus(Focus.QUERY)
        elif self.time_summary in ancestors:
            self.state.set_focus(Focus.TIME)
        elif self.results in ancestors:
            self.state.set_focus(Focus.TABLE)

    def _cycle(self, forward: bool) -> None:
        if self.state.overlay is Overlay.TIME_RANGE:
            if isinstance(self.screen, TimeRangeScreen):
                self.screen.cycle(forward)
            return
        self.state.cycle(forward)
        self._focus_current()

    def action_cycle_forward(self) -> None:
        self._cycle(True)

    def action_cycle_backward(self) -> None:
        self._cycle(False)

    def action_enter(self) -> None:
        if self.state.overlay is Overlay.TIME_RANGE:
            if isinstance(self.screen, TimeRangeScreen):
                self.screen.action_close()
            return
        if self.state.open_overlay():
            self.push_screen(TimeRangeScreen(self.time_range), self._on_overlay_closed)
            return
        raise SkipAction()

    def _on_overlay_closed(self, _: None = None) -> None:
        self.state.confirm_overlay()
        self.time_summary.refresh_range()
        self._focus_current()

    # ------------------------------------------------------------------
    # Fetch lifecycle
    # ------------------------------------------------------------------

    def build_request(self) -> QueryRequest:
        return QueryRequest(
            query=self.editor.query_text,
            start_time=self.time_range.start_utc(),
            end_time=self.time_range.end_utc(),
        )

    def run_fetch(self) -> int:
        """Start a fetch on a worker thread; returns its sequence number."""
        request = self.build_request()
        seq = self.state.issue_fetch()
        logger.info(
            "fetch %d: %s [%s, %s)",
            seq,
            request.query,
            request.start_time,
            request.end_time,
        )
        self.status.set_info(f"running query ({self.time_range.summary()})")
        self.run_worker(
            partial(self._fetch_in_thread, seq, request),
            name=f"fetch-{seq}",
            group="fetch",
            thread=True,
            exit_on_error=False,
        )
        return seq

    def _fetch_in_thread(self, seq: int, request: QueryRequest) -> None:
        try:
            result = self.fetcher(self.profile, request, self.timeout)
        except Exception as e:
            logger.exception("fetch %d raised", seq)
            result = QueryResult.failed(f"{type(e).__name__}: {e}")
        self.post_message(FetchCompleted(seq, result))

    def on_fetch_completed(self, message: FetchCompleted) -> None:
        if not self.state.accept(message.seq):
            return
        self.apply_result(message.result)

    def apply_result(self, result: QueryResult) -> None:
        """Show a result; failures keep the previous rows on screen."""
        if result.ok:
            self.results.load_result(result)
            info = f"fetched {len(result.records)} records"
            if self.state.in_flight:
                info += f" ({self.state.in_flight} older still running)"
            self.status.set_info(info)
        else:
            self.status.set_error(QUERY_FAILED, result.error)

    def action_rerun(self) -> None:
        self.run_fetch()

    def on_resize(self, event: events.Resize) -> None:
        logger.debug("resized to %sx%s", event.size.width, event.size.height)
        self.refresh(layout=True)
