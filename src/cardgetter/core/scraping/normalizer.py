"""URL helpers: input validation and robots.txt location."""

from __future__ import annotations

from urllib.parse import ParseResult, urlparse, urlunparse

from cardgetter.exceptions import InvalidURLError

ALLOWED_SCHEMES = {"http", "https"}


def validate_url(url: str) -> ParseResult:
    """Return the parsed URL, or raise `InvalidURLError` unless it is an
    absolute http(s) URL with a host."""
    try:
        p: ParseResult = urlparse((url or "").strip())
    except ValueError as exc:
        raise InvalidURLError(f"Invalid URL {url!r}: {exc}") from exc
    if p.scheme.lower() not in ALLOWED_SCHEMES or not p.netloc:
        raise InvalidURLError(f"Invalid URL {url!r}: expected an absolute http(s) URL")
    return p


def robots_txt_url(url: str) -> str:
    """Return the robots.txt URL for the origin of `url`.

    Same scheme and host; path replaced, query and fragment dropped.
    """
    p = validate_url(url)
    return urlunparse((p.scheme, p.netloc, "/robots.txt", "", "", ""))
