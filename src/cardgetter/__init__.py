"""cardgetter: fetch a web page and describe it as a typed card.

Usage:
    card = fetch_card("https://example.org/")
    payload = card_to_dict(card)
"""

from cardgetter.cards.wildcard import Card, CardType, card_to_dict
from cardgetter.core.config import ScraperConfig
from cardgetter.core.scraping.scraper import Scraper, fetch_card
from cardgetter.exceptions import (
    CardGetterError,
    DecodeError,
    ErrorKind,
    InvalidURLError,
    MarkupParseError,
    RobotsDisallowedError,
    TransportError,
    UpstreamStatusError,
)

__all__ = [
    "Card",
    "CardType",
    "card_to_dict",
    "ScraperConfig",
    "Scraper",
    "fetch_card",
    "CardGetterError",
    "DecodeError",
    "ErrorKind",
    "InvalidURLError",
    "MarkupParseError",
    "RobotsDisallowedError",
    "TransportError",
    "UpstreamStatusError",
]
