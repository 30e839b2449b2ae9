"""Shared test helpers: canned `requests.Response` objects and a fake transport.

Nothing here touches the network.
"""

from typing import Dict, List, Optional, Union

import pytest
import requests

from cardgetter.core.config import ScraperConfig
from cardgetter.core.interfaces import BaseFetcher

TEST_UA = "TestBot"


def make_response(
    status: int = 200,
    body: Union[bytes, str] = b"",
    content_type: Optional[str] = None,
) -> requests.Response:
    """Build a fully-read `requests.Response` with the given status and body."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    resp._content_consumed = True
    resp.encoding = "utf-8"
    if content_type is not None:
        resp.headers["Content-Type"] = content_type
    return resp


class FakeFetcher(BaseFetcher):
    """Answers GETs from a url -> response (or exception) table and records calls."""

    def __init__(self, routes: Dict[str, object], user_agent: str = TEST_UA):
        self.routes = routes
        self.user_agent = user_agent
        self.calls: List[str] = []

    def get(self, url, headers=None, **kwargs):
        self.calls.append(url)
        result = self.routes.get(url)
        if result is None:
            return make_response(404, b"not found", "text/plain")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def config() -> ScraperConfig:
    return ScraperConfig(user_agent=TEST_UA)


@pytest.fixture
def no_robots_config() -> ScraperConfig:
    return ScraperConfig(user_agent=TEST_UA, check_robots_txt=False)
