"""Multi-line query editor."""

from __future__ import annotations

from typing import Optional

from textual.widgets import TextArea


def default_query(stream: Optional[str]) -> str:
    return f"select * from {stream}" if stream else ""


class QueryEditor(TextArea):
    """TextArea seeded with a select over the stream; the text is sent as-is."""

    DEFAULT_CSS = """
    QueryEditor {
        height: 1fr;
        border: round $primary-background;
    }
    QueryEditor:focus {
        border: round $accent;
    }
    """

    def __init__(
        self,
        stream: Optional[str] = None,
        *,
        text: Optional[str] = None,
        id: Optional[str] = None,
    ):
        super().__init__(
            text if text is not None else default_query(stream),
            id=id,
            soft_wrap=True,
            tab_behavior="focus",
        )
        self.border_title = "Query"

    @property
    def query_text(self) -> str:
        return self.text
