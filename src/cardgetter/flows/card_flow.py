"""
Card flow

Prefect flow that turns one URL into a JSON-shaped card:

1. Validates the scraper configuration (robots.txt policy, timeout, retries,
   user agent).
2. Runs `fetch_card_task`, which checks robots.txt, fetches the page and
   decodes its metadata (or sniffs the media type for images and videos).
3. Returns the card as a plain dict, ready to be serialized.

Failures are raised as `CardGetterError` subclasses so the caller can map
them to its own protocol (an HTTP status, an exit code...).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from prefect import flow, get_run_logger
from pydantic import ValidationError

from cardgetter.cards.wildcard import card_to_dict
from cardgetter.core.config import ScraperConfig
from cardgetter.core.scraping.prefect_tasks import fetch_card_task


@flow(name="fetch_card")
def fetch_card_flow(url: str, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    logger = get_run_logger()

    try:
        scraper_config = ScraperConfig(**(config or {}))
    except ValidationError as e:
        logger.error("Invalid config: %s", e)
        raise

    logger.info(
        "Fetching %s (check_robots_txt=%s, timeout=%ss, retries=%s)",
        url,
        scraper_config.check_robots_txt,
        scraper_config.timeout,
        scraper_config.retries,
    )
    card = fetch_card_task(url, scraper_config)
    return card_to_dict(card)
