"""Pilot tests for the query screen with a fake fetcher."""

import threading

import pytest

from pb.models import FetchStatus, Profile, QueryResult
from pb.tui import Focus, Overlay, QueryApp
from pb.tui.overlay import TimeRangeScreen
from pb.tui.status import QUERY_FAILED

PROFILE = Profile(url="http://parseable.local:8000", username="admin", password="pw")

OK_RESULT = QueryResult(
    status=FetchStatus.OK,
    fields=["p_timestamp", "msg", "p_tags"],
    records=[
        {"p_timestamp": "2024-01-02T03:04:05", "msg": "hello", "p_tags": "a=b"},
        {"p_timestamp": "2024-01-02T03:04:06", "msg": "world"},
    ],
)


class FakeFetcher:
    def __init__(self, *results):
        self.results = list(results)
        self.requests = []

    def __call__(self, profile, request, timeout):
        self.requests.append(request)
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]


async def test_first_fetch_runs_on_mount():
    fetcher = FakeFetcher(OK_RESULT)
    app = QueryApp(PROFILE, "backend", fetcher=fetcher)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert len(fetcher.requests) == 1
        request = fetcher.requests[0]
        assert request.query == "select * from backend"
        assert request.start_time.endswith("Z")
        assert app.state.current is Focus.QUERY
        assert app.results.grid.row_count == 2
        assert [c.name for c in app.table_model.columns] == ["p_timestamp", "msg", "p_tags"]
        assert "fetched 2 records" in app.status_model.info


async def test_failed_fetch_keeps_previous_rows():
    err = QueryResult.failed("HTTP 500: Internal Server Error")
    fetcher = FakeFetcher(OK_RESULT, err)
    app = QueryApp(PROFILE, "backend", fetcher=fetcher)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.results.grid.row_count == 2

        await pilot.press("ctrl+r")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert len(fetcher.requests) == 2
        assert app.status_model.error == QUERY_FAILED
        assert app.results.grid.row_count == 2


async def test_tab_cycles_focus():
    app = QueryApp(PROFILE, "backend", fetcher=FakeFetcher(OK_RESULT))
    async with app.run_test() as pilot:
        await pilot.press("tab")
        assert app.state.current is Focus.TIME
        assert app.focused is app.time_summary
        await pilot.press("tab")
        assert app.state.current is Focus.TABLE
        assert app.focused is app.results.grid
        await pilot.press("tab")
        assert app.focused is app.editor
        await pilot.press("shift+tab")
        assert app.state.current is Focus.TABLE


async def test_overlay_opens_from_time_and_restores_focus():
    app = QueryApp(PROFILE, "backend", fetcher=FakeFetcher(OK_RESULT))
    async with app.run_test() as pilot:
        await pilot.press("tab", "enter")
        assert app.state.overlay is Overlay.TIME_RANGE
        assert isinstance(app.screen, TimeRangeScreen)

        await pilot.press("enter")
        await pilot.pause()
        assert app.state.overlay is Overlay.NONE
        assert app.state.current is Focus.TIME
        assert app.focused is app.time_summary


async def test_enter_in_editor_is_typed():
    app = QueryApp(PROFILE, "backend", fetcher=FakeFetcher(OK_RESULT))
    async with app.run_test() as pilot:
        await pilot.press("enter")
        assert app.state.overlay is Overlay.NONE
        assert "\n" in app.editor.text


async def test_preset_in_overlay_updates_range():
    app = QueryApp(PROFILE, "backend", duration=10, fetcher=FakeFetcher(OK_RESULT))
    async with app.run_test() as pilot:
        await pilot.press("tab", "enter")
        # start -> presets
        await pilot.press("tab")
        await pilot.press("down", "down", "down")
        await pilot.pause()
        assert app.time_range.preset.label == "1 Hour"
        span = app.time_range.end.time - app.time_range.start.time
        assert span.total_seconds() == 3600
        await pilot.press("enter")


async def test_rerun_uses_edited_query():
    fetcher = FakeFetcher(OK_RESULT)
    app = QueryApp(PROFILE, "backend", fetcher=fetcher)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        app.editor.text = "select count(*) from backend"
        await pilot.press("ctrl+r")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert fetcher.requests[-1].query == "select count(*) from backend"


async def test_late_result_from_older_fetch_is_ignored():
    release = threading.Event()
    fresh = QueryResult(status=FetchStatus.OK, fields=["n"], records=[{"n": 2}])
    stale = QueryResult(status=FetchStatus.OK, fields=["n"], records=[{"n": 1}, {"n": 1}])

    def fetcher(profile, request, timeout):
        if request.query == "slow":
            release.wait(5)
            return stale
        return fresh

    app = QueryApp(PROFILE, fetcher=fetcher)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        app.editor.text = "slow"
        app.run_fetch()
        app.editor.text = "fast"
        app.run_fetch()
        await pilot.pause(0.2)
        release.set()
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.table_model.records == [{"n": 2}]


async def test_table_filter_mode():
    app = QueryApp(PROFILE, "backend", fetcher=FakeFetcher(OK_RESULT))
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()
        await pilot.press("tab", "tab")
        await pilot.press("slash")
        assert app.results.filtering
        await pilot.press("w", "o", "r")
        await pilot.pause()
        assert app.results.grid.row_count == 1
        await pilot.press("enter")
        assert app.focused is app.results.grid
        assert app.table_model.filter_text == "wor"
        await pilot.press("escape")
        await pilot.pause()
        assert app.table_model.filter_text == ""
        assert app.results.grid.row_count == 2


@pytest.mark.parametrize("key", ["right", "d"])
async def test_column_scroll_keys(key):
    app = QueryApp(PROFILE, "backend", fetcher=FakeFetcher(OK_RESULT))
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()
        await pilot.press("tab", "tab", key)
        assert app.table_model.column_offset == 1


async def test_fetcher_exception_becomes_failed_query():
    def fetcher(profile, request, timeout):
        raise UnicodeEncodeError("latin-1", "用户", 0, 2, "ordinal not in range(256)")

    app = QueryApp(PROFILE, "backend", fetcher=fetcher)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.status_model.error == QUERY_FAILED
        assert app.status_model.detail.startswith("UnicodeEncodeError")
        assert app.results.grid.row_count == 0


async def test_resize_keeps_state_and_relayouts():
    app = QueryApp(PROFILE, "backend", fetcher=FakeFetcher(OK_RESULT))
    async with app.run_test(size=(80, 24)) as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()
        await pilot.press("tab")
        assert app.results.region.width == 80

        await pilot.resize_terminal(120, 40)
        await pilot.pause()
        assert app.size.width == 120 and app.size.height == 40
        assert app.results.region.width == 120
        assert app.state.current is Focus.TIME
        assert app.state.overlay is Overlay.NONE
        assert app.focused is app.time_summary
        assert app.results.grid.row_count == 2


async def test_status_mentions_older_fetches_still_running():
    release = threading.Event()

    def fetcher(profile, request, timeout):
        if request.query == "slow":
            release.wait(5)
        return OK_RESULT

    app = QueryApp(PROFILE, fetcher=fetcher)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        app.editor.text = "slow"
        app.run_fetch()
        app.editor.text = "fast"
        app.run_fetch()
        await pilot.pause(0.2)
        assert "1 older still running" in app.status_model.info
        release.set()
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.state.in_flight == 0
