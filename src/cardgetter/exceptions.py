"""Custom exceptions for cardgetter.

Every failure surfaced by `fetch_card` is a `CardGetterError` carrying a
`kind` and, where it applies, an upstream `status_code`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    UNKNOWN = "unknown"
    INVALID_URL = "invalid_url"
    FORBIDDEN_BY_ROBOTS = "forbidden_by_robots"
    TRANSPORT = "transport"
    UPSTREAM_STATUS = "upstream_status"
    PARSE = "parse"
    DECODE = "decode"


class CardGetterError(Exception):
    """Base exception for cardgetter."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    status_code: Optional[int] = None

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidURLError(CardGetterError):
    """Raised when the requested URL is not an absolute http(s) URL."""

    kind = ErrorKind.INVALID_URL


class RobotsDisallowedError(CardGetterError):
    """Raised when robots.txt forbids fetching the URL for our user agent."""

    kind = ErrorKind.FORBIDDEN_BY_ROBOTS
    status_code = 403

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Not permitted to fetch {url}: forbidden by robots.txt")


class TransportError(CardGetterError):
    """Raised when the request failed after the transport exhausted its retries."""

    kind = ErrorKind.TRANSPORT


class UpstreamStatusError(CardGetterError):
    """Raised when the fetched origin answers with a non-2xx status."""

    kind = ErrorKind.UPSTREAM_STATUS

    def __init__(self, url: str, status_code: int, body: str = ""):
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"Could not fetch {url} (status {status_code}): {body}")


class MarkupParseError(CardGetterError):
    """Raised when the HTML parser rejects the markup."""

    kind = ErrorKind.PARSE


class DecodeError(CardGetterError):
    """Raised for malformed field mappings. This is a configuration bug."""

    kind = ErrorKind.DECODE
