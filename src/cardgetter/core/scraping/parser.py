"""HTML parsing helpers: metadata tag extraction.

Turns a page into a flat tag map: the `<title>`, the favicon and every
`<meta>` element of the vocabularies we understand.
"""

from __future__ import annotations

import html
import logging
from typing import Dict, Iterable, Optional, Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from cardgetter.core.config import DEFAULT_RAW_META_NAMES, DEFAULT_TAG_PREFIXES
from cardgetter.exceptions import MarkupParseError

logger = logging.getLogger(__name__)

Markup = Union[str, bytes]


def parse_document(markup: Markup) -> BeautifulSoup:
    try:
        return BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as exc:
        raise MarkupParseError(f"Could not parse markup: {exc}") from exc


def _matches(value: Optional[str], prefixes: Iterable[str], raw_names: Iterable[str]) -> bool:
    if not value:
        return False
    if value == "description" or value in raw_names:
        return True
    return any(value.startswith(f"{p}:") for p in prefixes)


def extract_tags(
    document: Union[Markup, BeautifulSoup],
    url: str = "",
    prefixes: Iterable[str] = DEFAULT_TAG_PREFIXES,
    raw_names: Iterable[str] = DEFAULT_RAW_META_NAMES,
) -> Dict[str, str]:
    """Extract metadata tags from a page and return them as a flat dict.

    - `<title>` text goes under `title`, the `rel~=icon` link under `favicon`.
    - `<meta>` elements are keyed by `name` (or `property` when only that
      attribute matched) and valued by `content`.
    - The first element for a key wins, as OpenGraph defers to the first
      tag it understands.

    `url` is the page's own URL; it is only used for logging.
    """
    soup = document if isinstance(document, BeautifulSoup) else parse_document(document)
    prefixes = tuple(prefixes)
    raw_names = tuple(raw_names)
    results: Dict[str, str] = {}

    title = soup.find("title")
    if title is not None:
        text = title.get_text().strip()
        if text:
            results["title"] = html.unescape(text)

    icon = soup.find("link", rel="icon")
    if icon is not None and icon.get("href") is not None:
        results["favicon"] = html.unescape(icon["href"])

    for meta in soup.find_all("meta"):
        name = meta.get("name")
        prop = meta.get("property")
        if _matches(name, prefixes, raw_names):
            key = name
        elif _matches(prop, prefixes, raw_names):
            key = prop
        else:
            continue
        if key in results:
            continue
        results[key] = html.unescape(meta.get("content") or "")

    logger.debug("Extracted %d tags from %s", len(results), url or "<markup>")
    return results
