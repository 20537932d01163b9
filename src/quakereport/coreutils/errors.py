"""
Error Taxonomy

Typed failures for the fetch-and-parse pipeline. None of these escape a load:
each is caught where it occurs, logged, and turned into an empty result.
"""

from typing import Optional


class QuakeReportError(Exception):
    """Base class for all pipeline errors"""


class FetchError(QuakeReportError):
    """Base class for failures while retrieving the raw feed"""


class MalformedInput(FetchError):
    """The request URL is not a valid absolute http(s) URL"""

    def __init__(self, url: str, reason: str = "invalid URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Malformed URL {url!r}: {reason}")


class NetworkFailure(FetchError):
    """Connection refused, timed out, or the body read failed"""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        super().__init__(f"Network failure for {url}: {cause}")


class UnexpectedStatus(FetchError):
    """The server answered with something other than HTTP 200"""

    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"UnexpectedStatus({status_code}) for {url}")


class MalformedResponse(QuakeReportError):
    """The feed text could not be turned into earthquake records"""

    def __init__(self, reason: str, index: Optional[int] = None):
        self.reason = reason
        self.index = index
        if index is None:
            message = f"Malformed response: {reason}"
        else:
            message = f"Malformed response at feature {index}: {reason}"
        super().__init__(message)
