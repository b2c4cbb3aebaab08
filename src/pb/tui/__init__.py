"""Interactive query TUI."""

from .app import QueryApp
from .state import Focus, Overlay, QueryState
from .timerange import PRESETS, TimeRange

__all__ = ["Focus", "Overlay", "PRESETS", "QueryApp", "QueryState", "TimeRange"]
