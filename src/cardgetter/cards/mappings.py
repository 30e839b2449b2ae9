"""Field-mapping table used to decode tag maps into cards.

One entry per decodable model. A field maps to the tag key it is read from,
to `Directive.SQUASH` (embedded metadata sharing the parent's namespace) or
to `Directive.FILL` (always-allocated sub-model). Fields absent from an
entry are never touched by the decoder.

The image and video entries are not reached when fetching: the dispatcher
only builds link and article cards from markup, and media responses become
cards straight from their content type. They let callers decode an image or
video card from OpenGraph media tags themselves.
"""

from __future__ import annotations

from types import MappingProxyType

from cardgetter.cards.applink import Android, AppLink, Ios, Ipad, Iphone
from cardgetter.cards.wildcard import (
    Article,
    ArticleCard,
    GenericMetadata,
    ImageCard,
    ImageDetails,
    ImageMedia,
    LinkCard,
    LinkTarget,
    VideoCard,
    VideoMedia,
)
from cardgetter.core.decoding.decoder import Directive

SQUASH = Directive.SQUASH
FILL = Directive.FILL


def _ios_family(platform: str) -> MappingProxyType:
    return MappingProxyType(
        {
            "url": f"al:{platform}:url",
            "app_store_id": f"al:{platform}:app_store_id",
            "app_name": f"al:{platform}:app_name",
        }
    )


FIELD_MAPPINGS = MappingProxyType(
    {
        Ios: _ios_family("ios"),
        Iphone: _ios_family("iphone"),
        Ipad: _ios_family("ipad"),
        Android: MappingProxyType(
            {
                "url": "al:android:url",
                "package": "al:android:package",
                "class_name": "al:android:class",
                "app_name": "al:android:app_name",
            }
        ),
        AppLink: MappingProxyType(
            {"ios": FILL, "iphone": FILL, "ipad": FILL, "android": FILL}
        ),
        ImageDetails: MappingProxyType(
            {
                "image_url": "og:image",
                "width": "og:image:width",
                "height": "og:image:height",
            }
        ),
        GenericMetadata: MappingProxyType(
            {
                "title": "og:title",
                "publication_date": "article:published_time",
                "source": "og:site_name",
                "app_link": FILL,
                "source_icon": "favicon",
                "image": FILL,
            }
        ),
        LinkTarget: MappingProxyType(
            {"description": "og:description", "generic_metadata": SQUASH}
        ),
        LinkCard: MappingProxyType({"target": FILL}),
        Article: MappingProxyType(
            {"abstract_content": "og:description", "generic_metadata": SQUASH}
        ),
        ArticleCard: MappingProxyType({"article": FILL}),
        VideoMedia: MappingProxyType(
            {
                "embedded_url_width": "og:video:width",
                "embedded_url_height": "og:video:height",
                "stream_url": "og:video:url",
                "stream_content_type": "og:video:type",
                "poster_image_url": "og:image:url",
                "generic_metadata": SQUASH,
            }
        ),
        VideoCard: MappingProxyType({"media": FILL}),
        ImageMedia: MappingProxyType(
            {"image_details": FILL, "generic_metadata": SQUASH}
        ),
        ImageCard: MappingProxyType({"media": FILL}),
    }
)
