"""robots.txt permission check.

A robots.txt outage never blocks a fetch: when the file cannot be retrieved
or parsed we assume we are allowed.
"""

from __future__ import annotations

import logging

import requests
from robotexclusionrulesparser import RobotExclusionRulesParser

from cardgetter.core.interfaces import BaseFetcher
from cardgetter.core.scraping.normalizer import robots_txt_url

logger = logging.getLogger(__name__)


class RobotsChecker:
    """Answers whether the fetcher's user agent may fetch a URL."""

    def __init__(self, fetcher: BaseFetcher, user_agent: str | None = None):
        self.fetcher = fetcher
        self.user_agent = user_agent or fetcher.user_agent

    def _load(self, url: str) -> RobotExclusionRulesParser | None:
        robots_url = robots_txt_url(url)
        try:
            resp = self.fetcher.get(robots_url)
        except requests.RequestException as exc:
            logger.warning("Could not fetch %s, assuming allowed: %s", robots_url, exc)
            return None
        if resp.status_code != 200:
            logger.debug(
                "No usable robots.txt at %s (status=%s)", robots_url, resp.status_code
            )
            return None

        parser = RobotExclusionRulesParser()
        try:
            parser.parse(resp.text)
        except Exception as exc:
            logger.warning("Could not parse %s, assuming allowed: %s", robots_url, exc)
            return None
        return parser

    def is_allowed(self, url: str) -> bool:
        parser = self._load(url)
        if parser is None:
            return True
        allowed = parser.is_allowed(self.user_agent, url)
        logger.debug("robots.txt %s %s for %s", "allows" if allowed else "forbids", url, self.user_agent)
        return allowed
