"""Pydantic models for the config store and the query API."""

from .config import Config, Profile
from .errors import Error
from .query import FetchStatus, QueryRequest, QueryResponse, QueryResult

__all__ = [
    "Config",
    "Error",
    "FetchStatus",
    "Profile",
    "QueryRequest",
    "QueryResponse",
    "QueryResult",
]
