"""HTTP client for the Parseable query API.

Every request uses basic auth from the active profile and a fixed timeout.
``run_query`` never raises: transport errors, non-2xx statuses and bodies
that do not match the expected shape all come back as a failed
``QueryResult``.
"""

import logging

import requests
from pydantic import ValidationError

from .models import Profile, QueryRequest, QueryResponse, QueryResult

logger = logging.getLogger(__name__)

QUERY_PATH = "api/v1/query"
DEFAULT_TIMEOUT = 50.0


def query_url(profile: Profile) -> str:
    return f"{profile.url}/{QUERY_PATH}"


def run_query(
    profile: Profile,
    request: QueryRequest,
    timeout: float = DEFAULT_TIMEOUT,
) -> QueryResult:
    """POST a query with ``fields=true`` and decode the records.

    Args:
        profile: Server URL and credentials
        request: Query text and UTC time bounds
        timeout: Wall-clock timeout in seconds

    Returns:
        QueryResult with OK status and the server's fields/records, or ERR
        status with a readable cause in ``error``
    """
    url = query_url(profile)
    logger.debug(
        "POST %s query=%r start=%s end=%s",
        url,
        request.query,
        request.start_time,
        request.end_time,
    )

    try:
        response = requests.post(
            url,
            params={"fields": "true"},
            json=request.to_body(),
            auth=(profile.username, profile.password),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except (requests.RequestException, UnicodeError) as e:
        # basic auth credentials must be latin-1 encodable
        logger.warning("query request to %s failed: %s", url, e)
        return QueryResult.failed(f"request failed: {e}")

    if not response.ok:
        logger.warning(
            "query request to %s returned HTTP %s", url, response.status_code
        )
        return QueryResult.failed(
            f"HTTP {response.status_code}: {response.reason}"
        )

    try:
        payload = QueryResponse.model_validate(response.json())
    except ValidationError as e:
        logger.warning("query response from %s has unexpected shape: %s", url, e)
        return QueryResult.failed(
            f"unexpected response shape ({e.error_count()} errors)"
        )
    except ValueError as e:
        logger.warning("query response from %s is not JSON: %s", url, e)
        return QueryResult.failed(f"invalid JSON response: {e}")

    logger.debug(
        "query returned %d fields, %d records",
        len(payload.fields),
        len(payload.records),
    )
    return QueryResult.from_response(payload)


__all__ = ["DEFAULT_TIMEOUT", "QUERY_PATH", "query_url", "run_query"]
