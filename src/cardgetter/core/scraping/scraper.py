"""Fetch a URL politely and turn it into a card.

Per request the scraper walks through:

    CHECKING_ROBOTS -> FETCHING -> EXTRACTING_TAGS | SNIFFING_MEDIA -> DONE

Markup goes through tag extraction, alias resolution and decoding. Images
and videos become media cards carrying only their content type. Any error
ends the walk; no partial card is ever returned.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from typing import Iterator, Mapping, Optional, Sequence, Union

import requests

from cardgetter.cards.mappings import FIELD_MAPPINGS
from cardgetter.cards.wildcard import (
    Card,
    new_image_card,
    new_link_card,
    new_video_card,
)
from cardgetter.core.config import ScraperConfig
from cardgetter.core.decoding.aliases import DEFAULT_TAG_ALIASES
from cardgetter.core.decoding.decoder import FieldMappings
from cardgetter.core.decoding.dispatcher import convert_tags_to_card
from cardgetter.core.interfaces import BaseFetcher
from cardgetter.core.scraping.detector import (
    SNIFF_LENGTH,
    detect_content_type,
    is_html,
    should_trust_declared,
)
from cardgetter.core.scraping.fetcher import Fetcher
from cardgetter.core.scraping.normalizer import validate_url
from cardgetter.core.scraping.parser import extract_tags
from cardgetter.core.scraping.robots import RobotsChecker
from cardgetter.exceptions import (
    RobotsDisallowedError,
    TransportError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)


class FetchState(str, Enum):
    CHECKING_ROBOTS = "checking_robots"
    FETCHING = "fetching"
    EXTRACTING_TAGS = "extracting_tags"
    SNIFFING_MEDIA = "sniffing_media"
    DONE = "done"


class Scraper:
    """Fetches single pages and builds cards from their metadata.

    A scraper holds no per-request state, so one instance (and its
    connection pool) can serve concurrent callers.
    """

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        fetcher: Optional[BaseFetcher] = None,
        aliases: Mapping[str, Sequence[str]] = DEFAULT_TAG_ALIASES,
        mappings: FieldMappings = FIELD_MAPPINGS,
    ) -> None:
        self.config = config or ScraperConfig()
        self.fetcher = fetcher or Fetcher.from_config(self.config)
        self.robots = RobotsChecker(self.fetcher, self.config.user_agent)
        self.aliases = aliases
        self.mappings = mappings

    def close(self) -> None:
        self.fetcher.close()

    def __enter__(self) -> "Scraper":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _enter(self, state: FetchState, url: str) -> None:
        logger.debug("%s: %s", url, state.value)

    def check_robots_txt(self, url: str) -> bool:
        if not self.config.check_robots_txt:
            return True
        return self.robots.is_allowed(url)

    def parse_tags(self, markup: Union[str, bytes], url: str) -> Card:
        """Build a card from already-fetched markup."""
        tags = extract_tags(
            markup,
            url,
            prefixes=self.config.tag_prefixes,
            raw_names=self.config.raw_meta_names,
        )
        return convert_tags_to_card(tags, url, self.aliases, self.mappings)

    def _get(self, url: str) -> requests.Response:
        try:
            return self.fetcher.get(url, stream=True)
        except requests.RequestException as exc:
            raise TransportError(f"Could not fetch {url}: {exc}") from exc

    def _markup_card(self, url: str, body: bytes) -> Card:
        self._enter(FetchState.EXTRACTING_TAGS, url)
        card = self.parse_tags(body, url)
        self._enter(FetchState.DONE, url)
        return card

    def _card_from_response(self, url: str, resp: requests.Response) -> Card:
        if not 200 <= resp.status_code < 300:
            raise UpstreamStatusError(url, resp.status_code, resp.text)

        declared = resp.headers.get("Content-Type", "")
        if should_trust_declared(declared):
            return self._markup_card(url, resp.content)

        # Content-Type headers lie; look at what actually came back
        self._enter(FetchState.SNIFFING_MEDIA, url)
        chunks = resp.iter_content(chunk_size=SNIFF_LENGTH)
        head = _read_head(chunks)
        content_type = detect_content_type(declared, head)
        if is_html(content_type):
            return self._markup_card(url, head + b"".join(chunks))

        logger.debug("%s sniffed as %s (declared %s)", url, content_type, declared)
        card = media_card(url, content_type)
        self._enter(FetchState.DONE, url)
        return card

    def fetch_card(self, url: str) -> Card:
        """Fetch `url` and return its card.

        Raises a `CardGetterError` subclass on failure.
        """
        validate_url(url)

        self._enter(FetchState.CHECKING_ROBOTS, url)
        if not self.check_robots_txt(url):
            raise RobotsDisallowedError(url)

        self._enter(FetchState.FETCHING, url)
        resp = self._get(url)
        with resp:
            try:
                return self._card_from_response(url, resp)
            except requests.RequestException as exc:
                raise TransportError(f"Could not read {url}: {exc}") from exc


def _read_head(chunks: Iterator[bytes]) -> bytes:
    """Read from `chunks` until SNIFF_LENGTH bytes are buffered or the body ends.

    Chunked responses may hand back shorter pieces than asked for; whatever
    is read past SNIFF_LENGTH stays in the returned head.
    """
    head = b""
    for chunk in chunks:
        head += chunk
        if len(head) >= SNIFF_LENGTH:
            break
    return head


def media_card(url: str, content_type: str) -> Card:
    """Card for a non-markup resource, built from its content type alone."""
    if content_type.startswith("image"):
        card = new_image_card(url, url)
        card.media.image_details.image_content_type = content_type
        return card
    if content_type.startswith("video"):
        card = new_video_card(url)
        card.media.stream_url = url
        card.media.stream_content_type = content_type
        return card
    return new_link_card(url, url)


@lru_cache()
def default_scraper(config: ScraperConfig) -> Scraper:
    """Shared scraper per configuration.

    Callers passing equal configs get the same scraper, and with it one
    connection pool and cookie jar for the life of the process.
    """
    logger.debug("Creating shared scraper (user_agent=%s)", config.user_agent)
    return Scraper(config)


def fetch_card(url: str, config: Optional[ScraperConfig] = None) -> Card:
    """Fetch a single URL and return its card, using the shared scraper."""
    return default_scraper(config or ScraperConfig()).fetch_card(url)
