"""Prefect tasks wrapping the scraper.

A Prefect "task" is a unit of work with its own state and run logs; flows
compose tasks. Retries happen inside the Fetcher; these tasks run once.
"""

from __future__ import annotations

from typing import Optional

from prefect import get_run_logger, task

from cardgetter.cards.wildcard import Card
from cardgetter.core.config import ScraperConfig
from cardgetter.core.scraping.scraper import default_scraper
from cardgetter.exceptions import CardGetterError


@task(name="fetch_card", retries=0)
def fetch_card_task(url: str, config: Optional[ScraperConfig] = None) -> Card:
    logger = get_run_logger()
    logger.info("Fetching card for URL: %s", url)
    try:
        card = default_scraper(config or ScraperConfig()).fetch_card(url)
    except CardGetterError as exc:
        logger.error(
            "Could not build card for %s (kind=%s, status=%s): %s",
            url,
            exc.kind.value,
            exc.status_code,
            exc.message,
        )
        raise
    logger.info("Built %s card for %s", card.card_type.value, url)
    return card


@task(name="parse_tags", retries=0)
def parse_tags_task(
    markup: str, url: str, config: Optional[ScraperConfig] = None
) -> Card:
    logger = get_run_logger()
    card = default_scraper(config or ScraperConfig()).parse_tags(markup, url)
    logger.info("Parsed %s card from markup of %s", card.card_type.value, url)
    return card
