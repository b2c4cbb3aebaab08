from pb.models import FetchStatus, QueryResult
from pb.tui.focus import FocusRing
from pb.tui.state import Focus, Overlay, QueryState
from pb.tui.status import QUERY_FAILED, StatusModel
from pb.tui.table import TableModel


def test_initial_state():
    state = QueryState()
    assert state.overlay is Overlay.NONE
    assert state.current is Focus.QUERY


def test_cycle_visits_each_widget_once():
    state = QueryState()
    seen = [state.current]
    for _ in range(2):
        seen.append(state.cycle())
    assert sorted(f.value for f in seen) == sorted(f.value for f in Focus)
    assert state.cycle() is Focus.QUERY
    assert state.cycle(forward=False) is Focus.TABLE


def test_overlay_only_opens_from_time():
    state = QueryState()
    assert not state.open_overlay()
    state.set_focus(Focus.TIME)
    assert state.open_overlay()
    assert state.overlay is Overlay.TIME_RANGE
    # base focus does not move while the overlay is up
    assert state.cycle() is Focus.TIME


def test_confirm_restores_time_focus():
    state = QueryState()
    state.set_focus(Focus.TIME)
    state.open_overlay()
    assert state.confirm_overlay()
    assert state.overlay is Overlay.NONE
    assert state.current is Focus.TIME
    assert not state.confirm_overlay()


def test_stale_fetch_is_discarded():
    state = QueryState()
    first = state.issue_fetch()
    second = state.issue_fetch()
    assert state.in_flight == 2
    assert state.accept(second)
    assert not state.accept(first)
    assert state.in_flight == 0


def test_focus_ring_wraps():
    ring = FocusRing([Focus.QUERY, Focus.TIME])
    assert ring.prev() is Focus.TIME
    assert ring.next() is Focus.QUERY


def test_status_error_then_info():
    status = StatusModel(host="http://localhost:8000", username="admin")
    status.set_error(QUERY_FAILED, "HTTP 500: Internal Server Error")
    text = status.render().plain
    assert "Parseable" in text
    assert "admin@http://localhost:8000" in text
    assert "failed to query: HTTP 500" in text

    status.set_info("fetched 3 records")
    assert status.error == "" and status.detail == ""
    assert "fetched 3 records" in status.render().plain


def _loaded(records):
    model = TableModel()
    model.load_result(
        QueryResult(status=FetchStatus.OK, fields=["p_timestamp", "level", "status"], records=records)
    )
    return model


def test_filter_is_case_insensitive_substring(sample_records):
    model = _loaded(sample_records)
    model.set_filter("ERR")
    assert model.visible_indices == [1]
    model.set_filter("50")
    assert model.visible_indices == [1]
    model.clear_filter()
    assert model.visible_count == 3


def test_filter_skips_timestamp(sample_records):
    model = _loaded(sample_records)
    model.set_filter("2024-01-02")
    assert model.visible_count == 0


def test_filter_survives_reload(sample_records):
    model = _loaded(sample_records)
    model.set_filter("info")
    model.load_result(
        QueryResult(status=FetchStatus.OK, fields=["level"], records=[{"level": "info"}, {"level": "warn"}])
    )
    assert model.visible_indices == [0]


def test_horizontal_scroll_bounds(sample_records):
    model = _loaded(sample_records)
    assert not model.scroll_left()
    assert model.scroll_right()
    assert model.column_x() == 26 + 2
    assert model.scroll_right()
    assert not model.scroll_right()
    assert model.column_offset == 2
