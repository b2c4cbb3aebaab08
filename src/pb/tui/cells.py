"""Tagged cell values for heterogeneous JSON records."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from rich.text import Text

MISSING_GLYPH = "╌"


class CellKind(Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOL = "bool"
    NULL = "null"


def count_digits(num: int) -> int:
    """Number of decimal digits in ``num``, ignoring sign (0 has one digit)."""
    if num == 0:
        return 1
    return len(str(abs(num)))


@dataclass(frozen=True)
class Cell:
    """One record value, classified once by its JSON type."""

    kind: CellKind
    value: Any

    @classmethod
    def of(cls, value: Any) -> "Cell":
        # bool before int: True is an int in Python
        if value is None:
            return cls(CellKind.NULL, None)
        if isinstance(value, bool):
            return cls(CellKind.BOOL, value)
        if isinstance(value, int):
            return cls(CellKind.INTEGER, value)
        if isinstance(value, float):
            return cls(CellKind.FLOAT, value)
        if isinstance(value, str):
            return cls(CellKind.STRING, value)
        # nested objects/arrays (e.g. p_metadata) are shown as compact JSON
        return cls(CellKind.STRING, json.dumps(value, separators=(",", ":")))

    @property
    def text(self) -> str:
        if self.kind is CellKind.NULL:
            return "null"
        if self.kind is CellKind.BOOL:
            return "true" if self.value else "false"
        if self.kind is CellKind.STRING:
            return self.value.replace("\n", " ").replace("\r", "")
        return str(self.value)

    @property
    def measured_width(self) -> int:
        """Width this value asks for during column inference."""
        if self.kind is CellKind.STRING:
            return len(self.text)
        if self.kind is CellKind.INTEGER:
            return count_digits(self.value)
        if self.kind in (CellKind.FLOAT, CellKind.BOOL):
            return len(self.text)
        return 0

    def render(self) -> Text:
        if self.kind is CellKind.NULL:
            return Text("null", style="dim italic")
        if self.kind is CellKind.BOOL:
            return Text(self.text, style="bold yellow")
        if self.kind in (CellKind.INTEGER, CellKind.FLOAT):
            return Text(self.text, style="cyan")
        return Text(self.text)


def missing_cell() -> Text:
    return Text(MISSING_GLYPH, style="dim")


def render_cell(record: Mapping[str, Any], column: str) -> Text:
    """Render ``record[column]``, or the missing-data glyph if absent."""
    if column not in record:
        return missing_cell()
    return Cell.of(record[column]).render()
