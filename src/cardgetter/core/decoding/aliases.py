"""Alias resolution between competing metadata vocabularies.

Pages often describe themselves with Twitter cards or plain HTML tags
instead of OpenGraph/App Links. `resolve_aliases` copies the first
available alternative under the canonical key we decode from.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Sequence

# canonical key -> aliases, in order of preference
DEFAULT_TAG_ALIASES: Mapping[str, Sequence[str]] = MappingProxyType(
    {
        "al:android:url": ("twitter:app:url:googleplay",),
        "al:android:package": ("twitter:app:id:googleplay",),
        "al:android:app_name": ("twitter:app:name:googleplay",),
        "al:ipad:url": ("twitter:app:url:ipad",),
        "al:ipad:app_store_id": ("twitter:app:id:ipad",),
        "al:ipad:app_name": ("twitter:app:name:ipad",),
        "al:iphone:url": ("twitter:app:url:iphone",),
        "al:iphone:app_store_id": ("twitter:app:id:iphone",),
        "al:iphone:app_name": ("twitter:app:name:iphone",),
        "article:published_time": ("article:published",),
        "og:description": ("twitter:description", "description"),
        "og:image": ("twitter:image",),
        "og:site_name": ("cre",),
        "og:title": ("twitter:title", "title"),
    }
)


def resolve_aliases(
    tags: Dict[str, str],
    aliases: Mapping[str, Sequence[str]] = DEFAULT_TAG_ALIASES,
) -> Dict[str, str]:
    """Fill missing canonical keys of `tags` from their aliases, in place.

    Existing canonical values are never overwritten. This is a single pass:
    values copied during the pass are not themselves used as aliases.
    """
    original = dict(tags)
    for canonical, candidates in aliases.items():
        if canonical in original:
            continue
        for alias in candidates:
            if alias in original:
                tags[canonical] = original[alias]
                break
    return tags
