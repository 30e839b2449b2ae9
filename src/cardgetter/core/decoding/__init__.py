"""Tag-map decoding: alias resolution and the generic mapping-driven decoder.

The card dispatcher, which imports the card schema, is imported directly from
`cardgetter.core.decoding.dispatcher`.
"""

from .aliases import DEFAULT_TAG_ALIASES, resolve_aliases
from .decoder import Directive, coerce_value, decode

__all__ = [
    "DEFAULT_TAG_ALIASES",
    "resolve_aliases",
    "Directive",
    "coerce_value",
    "decode",
]
