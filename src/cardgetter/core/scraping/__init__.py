"""Core scraping primitives exported for reuse across the scraper and flows.

This package contains small, well-tested building blocks: Fetcher, robots.txt
checker, content-type Detector, tag Parser and URL helpers, the Scraper that
chains them, plus Prefect task wrappers.
"""

from .detector import detect_content_type, sniff_content_type
from .fetcher import Fetcher
from .normalizer import robots_txt_url, validate_url
from .parser import extract_tags, parse_document
from .prefect_tasks import fetch_card_task, parse_tags_task
from .robots import RobotsChecker
from .scraper import FetchState, Scraper, default_scraper, fetch_card, media_card

__all__ = [
    "Fetcher",
    "RobotsChecker",
    "detect_content_type",
    "sniff_content_type",
    "extract_tags",
    "parse_document",
    "robots_txt_url",
    "validate_url",
    "FetchState",
    "Scraper",
    "default_scraper",
    "fetch_card",
    "media_card",
    "fetch_card_task",
    "parse_tags_task",
]
