"""Card schema: wildcard cards and the App Links descriptors they embed."""

from .applink import Android, AppLink, Ios, Ipad, Iphone, Web, Windows
from .wildcard import (
    Article,
    ArticleCard,
    Card,
    CardType,
    GenericMetadata,
    ImageCard,
    ImageDetails,
    ImageMedia,
    LinkCard,
    LinkTarget,
    MediaType,
    PlaceCard,
    VideoCard,
    VideoMedia,
    Wildcard,
    card_to_dict,
    new_article_card,
    new_image_card,
    new_link_card,
    new_place_card,
    new_video_card,
)

__all__ = [
    "Android",
    "AppLink",
    "Ios",
    "Ipad",
    "Iphone",
    "Web",
    "Windows",
    "Article",
    "ArticleCard",
    "Card",
    "CardType",
    "GenericMetadata",
    "ImageCard",
    "ImageDetails",
    "ImageMedia",
    "LinkCard",
    "LinkTarget",
    "MediaType",
    "PlaceCard",
    "VideoCard",
    "VideoMedia",
    "Wildcard",
    "card_to_dict",
    "new_article_card",
    "new_image_card",
    "new_link_card",
    "new_place_card",
    "new_video_card",
]
