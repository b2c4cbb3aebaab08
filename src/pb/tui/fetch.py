"""Fetch task: one query round trip delivered back as a message."""

from __future__ import annotations

import logging
from typing import Callable

from textual.message import Message

from pb.client import DEFAULT_TIMEOUT, run_query
from pb.models import Profile, QueryRequest, QueryResult

logger = logging.getLogger(__name__)

Fetcher = Callable[[Profile, QueryRequest, float], QueryResult]


def fetch(
    profile: Profile, request: QueryRequest, timeout: float = DEFAULT_TIMEOUT
) -> QueryResult:
    """Run ``request`` against ``profile``; every failure becomes an ERR result."""
    result = run_query(profile, request, timeout=timeout)
    if result.ok:
        logger.info("fetched %d records", len(result.records))
    else:
        logger.info("fetch failed: %s", result.error)
    return result


class FetchCompleted(Message):
    """Posted to the app when a fetch worker finishes."""

    def __init__(self, seq: int, result: QueryResult) -> None:
        super().__init__()
        self.seq = seq
        self.result = result
