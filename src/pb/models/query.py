"""Query request/response models shared by the client and the TUI."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FetchStatus(str, Enum):
    OK = "ok"
    ERR = "err"


class QueryRequest(BaseModel):
    """One query execution; times are RFC3339 strings in UTC."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    query: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    def to_body(self) -> dict:
        return self.model_dump(by_alias=True)


class QueryResponse(BaseModel):
    """Shape of a successful ``/api/v1/query?fields=true`` response."""

    fields: List[str]
    records: List[Dict[str, Any]]


class QueryResult(BaseModel):
    """Outcome of a fetch, consumed once by the query screen.

    Every failure cause collapses into ``FetchStatus.ERR``; ``error`` only
    carries a readable cause for logs and the status bar detail.
    """

    status: FetchStatus
    fields: List[str] = Field(default_factory=list)
    records: List[Dict[str, Any]] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK

    @classmethod
    def failed(cls, error: str | None = None) -> "QueryResult":
        return cls(status=FetchStatus.ERR, error=error)

    @classmethod
    def from_response(cls, response: QueryResponse) -> "QueryResult":
        return cls(
            status=FetchStatus.OK,
            fields=list(response.fields),
            records=list(response.records),
        )


__all__ = ["FetchStatus", "QueryRequest", "QueryResponse", "QueryResult"]
