"""Single-line status bar: target host plus the last info or error."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rich.text import Text
from textual.widgets import Static

TITLE = "Parseable"
QUERY_FAILED = "failed to query"


@dataclass
class StatusModel:
    host: str = ""
    username: str = ""
    info: str = ""
    error: str = ""
    detail: str = ""

    def set_info(self, message: str) -> None:
        self.info = message
        self.error = ""
        self.detail = ""

    def set_error(self, message: str, detail: Optional[str] = None) -> None:
        self.error = message
        self.detail = detail or ""

    def render(self) -> Text:
        text = Text()
        text.append(f" {TITLE} ", style="bold reverse")
        target = f"{self.username}@{self.host}" if self.username else self.host
        text.append(f" {target} ", style="bold")
        if self.error:
            text.append(f" {self.error}", style="bold red")
            if self.detail:
                text.append(f": {self.detail}", style="red")
        elif self.info:
            text.append(f" {self.info}", style="green")
        return text


class StatusBar(Static):
    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $primary-background;
    }
    """

    def __init__(self, model: StatusModel, *, id: Optional[str] = None):
        super().__init__(model.render(), id=id)
        self.model = model

    def set_info(self, message: str) -> None:
        self.model.set_info(message)
        self.update(self.model.render())

    def set_error(self, message: str, detail: Optional[str] = None) -> None:
        self.model.set_error(message, detail)
        self.update(self.model.render())
