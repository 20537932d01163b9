"""
USGS Event API Client - Pure I/O Operations

This module handles the single GET against the USGS FDSN event service.
Returns raw response text that is parsed by the transform layer.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import requests
import logging

from quakereport.coreutils.errors import FetchError
from quakereport.coreutils.request import (
    CONNECT_TIMEOUT_MS,
    READ_TIMEOUT_MS,
    get_text,
    new_session,
)

logger = logging.getLogger(__name__)

# API Endpoints
USGS_QUERY_ENDPOINT = "https://earthquake.usgs.gov/fdsnws/event/1/query"

# Default query: the ten most recent events of magnitude 6 or more
DEFAULT_MIN_MAGNITUDE = 6
DEFAULT_LIMIT = 10
DEFAULT_ORDER_BY = "time"
DEFAULT_FORMAT = "geojson"


def build_query_url(
    min_magnitude: float = DEFAULT_MIN_MAGNITUDE,
    limit: int = DEFAULT_LIMIT,
    order_by: str = DEFAULT_ORDER_BY,
    fmt: str = DEFAULT_FORMAT,
    base_url: str = USGS_QUERY_ENDPOINT,
) -> str:
    """
    Build an event query URL

    Args:
        min_magnitude: Smallest magnitude to include
        limit: Maximum number of events
        order_by: Result ordering, e.g. "time" or "magnitude"
        fmt: Response format
        base_url: Query endpoint

    Returns:
        str: Absolute URL with the query string
    """
    params = {
        "format": fmt,
        "orderby": order_by,
        "minmag": _format_number(min_magnitude),
        "limit": int(limit),
    }
    return f"{base_url}?{urlencode(params)}"


def _format_number(value: float) -> str:
    # 6.0 -> "6", 4.5 -> "4.5"
    return f"{value:g}"


DEFAULT_REQUEST_URL = build_query_url()


@dataclass(frozen=True)
class FetchResult:
    """Raw response text, or the failure that left it empty"""

    text: str
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class USGSAPIClient:
    """Pure API client for the USGS event query endpoint"""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        connect_timeout_ms: int = CONNECT_TIMEOUT_MS,
        read_timeout_ms: int = READ_TIMEOUT_MS,
    ):
        self.session = session if session is not None else new_session()
        self.connect_timeout_ms = connect_timeout_ms
        self.read_timeout_ms = read_timeout_ms

    def __enter__(self) -> "USGSAPIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def fetch_result(self, url: str) -> FetchResult:
        """
        Fetch the raw feed text at url

        Failures are logged and reported in the result, never raised.

        Args:
            url: Absolute query URL

        Returns:
            FetchResult: Body text on HTTP 200, otherwise empty text and the error
        """
        logger.info(f"Fetching from {url}")

        try:
            text = get_text(
                self.session,
                url,
                connect_timeout_ms=self.connect_timeout_ms,
                read_timeout_ms=self.read_timeout_ms,
            )
            return FetchResult(text=text)

        except FetchError as e:
            logger.error(f"Error fetching earthquake data: {e}")
            return FetchResult(text="", error=e)

    def fetch(self, url: str) -> str:
        """
        Fetch the raw feed text at url

        Args:
            url: Absolute query URL

        Returns:
            str: Body text, or "" on any failure
        """
        return self.fetch_result(url).text


# Convenience functions for direct use
def fetch(url: str) -> str:
    """Convenience function to fetch feed text with a one-off client"""
    with USGSAPIClient() as client:
        return client.fetch(url)


def fetch_result(url: str) -> FetchResult:
    """Convenience function to fetch feed text as a typed result"""
    with USGSAPIClient() as client:
        return client.fetch_result(url)
