import time
from typing import Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url
from urllib3.util.retry import Retry

from quakereport import __version__
from quakereport.coreutils.errors import (
    MalformedInput,
    NetworkFailure,
    UnexpectedStatus,
)

import logging

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT_MS = 15000
READ_TIMEOUT_MS = 10000

# A load is a single GET: no retries on connect, read or status
NO_RETRY_STRATEGY = Retry(total=0, read=False)

ALLOWED_SCHEMES = ("http", "https")


def new_session() -> requests.Session:
    """Create a new requests session without a retry policy"""
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=NO_RETRY_STRATEGY)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    # Set default headers
    session.headers.update(
        {"User-Agent": f"quakereport/{__version__}", "Accept": "application/json"}
    )

    return session


def timeouts_in_seconds(
    connect_timeout_ms: int = CONNECT_TIMEOUT_MS,
    read_timeout_ms: int = READ_TIMEOUT_MS,
) -> Tuple[float, float]:
    """Convert millisecond timeouts into the (connect, read) tuple requests expects"""
    return connect_timeout_ms / 1000, read_timeout_ms / 1000


def validate_url(url: Optional[str]) -> str:
    """Check that url is an absolute http(s) URL.

    Args:
        url: Candidate URL string

    Returns:
        The URL, unchanged

    Raises:
        MalformedInput: If the URL is empty, unparseable, or not absolute
    """
    if not url or not isinstance(url, str):
        raise MalformedInput(str(url), "empty URL")

    try:
        parsed = parse_url(url.strip())
    except LocationParseError as e:
        raise MalformedInput(url, str(e)) from e

    if parsed.scheme is None or parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise MalformedInput(url, "missing or unsupported scheme")
    if not parsed.host:
        raise MalformedInput(url, "missing host")

    return url


def get_text(
    session: requests.Session,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    connect_timeout_ms: int = CONNECT_TIMEOUT_MS,
    read_timeout_ms: int = READ_TIMEOUT_MS,
) -> str:
    """Perform a single GET and return the body decoded as UTF-8.

    The response is streamed and always closed, including when the body
    read fails partway. Undecodable bytes become U+FFFD.

    Args:
        session: HTTP session to use
        url: Absolute URL to fetch
        headers: Optional extra headers
        connect_timeout_ms: Connect timeout in milliseconds
        read_timeout_ms: Read timeout in milliseconds

    Returns:
        Response body text

    Raises:
        MalformedInput: On an invalid URL, before any network call
        UnexpectedStatus: On any status other than 200
        NetworkFailure: On connection, timeout or stream errors
    """
    validate_url(url)
    timeout = timeouts_in_seconds(connect_timeout_ms, read_timeout_ms)

    start = time.time()
    try:
        with session.get(url, headers=headers, timeout=timeout, stream=True) as response:
            if response.status_code != 200:
                raise UnexpectedStatus(response.status_code, url)
            body = response.content.decode("utf-8", errors="replace")
    except (
        requests.exceptions.InvalidURL,
        requests.exceptions.InvalidSchema,
        requests.exceptions.MissingSchema,
    ) as e:
        raise MalformedInput(url, str(e)) from e
    except requests.RequestException as e:
        raise NetworkFailure(url, e) from e

    logger.info(f"Fetched from {url}: {time.time() - start:.2f} seconds")
    return body
