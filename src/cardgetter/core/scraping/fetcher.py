"""HTTP fetcher with retries, per-attempt timeout and a fixed user agent.

Provides a small `Fetcher` object exposing `get`. One
`Fetcher` owns one `requests.Session`, i.e. one connection pool and one
cookie jar, and may be shared by concurrent requests.
"""

from __future__ import annotations

from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from cardgetter.core.config import DEFAULT_USER_AGENT, ScraperConfig
from cardgetter.core.interfaces import BaseFetcher

RETRY_STATUSES = (429, 500, 502, 503, 504)


class Fetcher(BaseFetcher):
    """Small HTTP client with sensible defaults for metadata scraping.

    Usage:
        f = Fetcher(timeout=10, retries=2)
        resp = f.get(url)
    """

    def __init__(
        self,
        timeout: float = 10,
        retries: int = 2,
        backoff_factor: float = 0.3,
        user_agent: Optional[str] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.session = requests.Session()
        retry = Retry(
            total=retries,
            status_forcelist=RETRY_STATUSES,
            allowed_methods=frozenset(["GET", "HEAD"]),
            backoff_factor=backoff_factor,
            # hand the last response back instead of raising so callers see
            # the upstream status code
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    @classmethod
    def from_config(cls, config: ScraperConfig) -> "Fetcher":
        return cls(
            timeout=config.timeout,
            retries=config.retries,
            backoff_factor=config.backoff_factor,
            user_agent=config.user_agent,
        )

    def _headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        base = {"User-Agent": self.user_agent, "Accept": "*/*"}
        if headers:
            base.update(headers)
        return base

    def get(self, url: str, headers: Optional[Dict[str, str]] = None, **kwargs):
        return self.session.get(
            url, headers=self._headers(headers), timeout=self.timeout, **kwargs
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
