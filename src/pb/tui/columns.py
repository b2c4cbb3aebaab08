"""Column layout for query results.

Reserved fields are pinned: ``p_timestamp`` first with a fixed width,
``p_tags`` and ``p_metadata`` last. Everything else keeps the order the
server reported. Widths are computed once per result set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from .cells import Cell

TIMESTAMP_FIELD = "p_timestamp"
TAGS_FIELD = "p_tags"
METADATA_FIELD = "p_metadata"
TRAILING_FIELDS = (TAGS_FIELD, METADATA_FIELD)

TIMESTAMP_WIDTH = 26
DEFAULT_MAX_WIDTH = 100
TRAILING_MAX_WIDTH = 80
MIN_WIDTH = 2
SAMPLE_SIZE = 100

PLACEHOLDER_COLUMN = "Id"
PLACEHOLDER_WIDTH = 5


@dataclass(frozen=True)
class Column:
    name: str
    width: int
    filterable: bool = True


def order_fields(fields: Sequence[str]) -> List[str]:
    """Timestamp first, tags/metadata last, the rest in schema order."""
    middle = [
        name
        for name in fields
        if name != TIMESTAMP_FIELD and name not in TRAILING_FIELDS
    ]
    head = [TIMESTAMP_FIELD] if TIMESTAMP_FIELD in fields else []
    tail = [name for name in TRAILING_FIELDS if name in fields]
    return head + middle + tail


def infer_width(
    name: str,
    records: Sequence[Dict[str, Any]],
    max_width: int = DEFAULT_MAX_WIDTH,
    sample_size: int = SAMPLE_SIZE,
) -> int:
    """Display width for ``name`` from the first ``sample_size`` records.

    The observed maximum is clamped to ``max_width`` but never drops below
    the column name's own length or ``MIN_WIDTH``.
    """
    observed = 0
    for record in records[:sample_size]:
        if name not in record:
            continue
        observed = max(observed, Cell.of(record[name]).measured_width)
    return max(min(observed, max_width), len(name), MIN_WIDTH)


def build_columns(
    fields: Sequence[str], records: Sequence[Dict[str, Any]]
) -> List[Column]:
    columns: List[Column] = []
    for name in order_fields(fields):
        if name == TIMESTAMP_FIELD:
            columns.append(Column(name, TIMESTAMP_WIDTH, filterable=False))
        elif name in TRAILING_FIELDS:
            width = infer_width(name, records, max_width=TRAILING_MAX_WIDTH)
            columns.append(Column(name, width))
        else:
            columns.append(Column(name, infer_width(name, records)))
    return columns


def placeholder_columns() -> List[Column]:
    """Shown when a result set has no fields at all."""
    return [Column(PLACEHOLDER_COLUMN, PLACEHOLDER_WIDTH, filterable=False)]
