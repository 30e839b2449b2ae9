"""Pick the card variant for a resolved tag map and decode it."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Mapping, Sequence

from cardgetter.cards.mappings import FIELD_MAPPINGS
from cardgetter.cards.wildcard import Card, CardType, new_article_card, new_link_card
from cardgetter.core.decoding.aliases import DEFAULT_TAG_ALIASES, resolve_aliases
from cardgetter.core.decoding.decoder import FieldMappings, decode
from cardgetter.exceptions import DecodeError

logger = logging.getLogger(__name__)

DEFAULT_OG_TYPE = "website"

# Place, product and review cards have no constructor yet: no page metadata
# vocabulary we read maps onto them.
CARD_CONSTRUCTORS: Dict[CardType, Callable[[str, str], Card]] = {
    CardType.ARTICLE: new_article_card,
    CardType.LINK: new_link_card,
}


def card_type_for(og_type: str) -> CardType:
    if og_type == "article":
        return CardType.ARTICLE
    return CardType.LINK


def convert_tags_to_card(
    tags: Dict[str, str],
    web_url: str,
    aliases: Mapping[str, Sequence[str]] = DEFAULT_TAG_ALIASES,
    mappings: FieldMappings = FIELD_MAPPINGS,
) -> Card:
    """Resolve aliases in `tags`, build the matching card and decode into it.

    `web_url` is the URL that was requested; the card's own URL prefers
    `og:url` and falls back to it.
    """
    resolve_aliases(tags, aliases)
    og_type = tags.get("og:type", DEFAULT_OG_TYPE)
    url = tags.get("og:url", web_url)

    card_type = card_type_for(og_type)
    constructor = CARD_CONSTRUCTORS.get(card_type)
    if constructor is None:
        raise DecodeError(f"No card constructor registered for {card_type.value}")

    logger.debug("Decoding %s card for %s (og:type=%s)", card_type.value, web_url, og_type)
    card = constructor(web_url, url)
    decode(tags, card, mappings)
    return card
