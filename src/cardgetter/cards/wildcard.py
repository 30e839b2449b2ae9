"""Card schema, modeled on the wildcard schema (http://www.trywildcard.com/docs/schema/).

A card is a small header (`card_type`, `web_url`) plus one payload. Every
payload embeds `GenericMetadata`; in Python it lives under the
`generic_metadata` attribute, while the serialized shape flattens its fields
into the payload object.
"""

from __future__ import annotations

from datetime import datetime, time
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_serializer, model_serializer

from cardgetter.cards.applink import AppLink


class CardType(str, Enum):
    ARTICLE = "article"
    IMAGE = "image"
    LINK = "link"
    PLACE = "place"
    PRODUCT_SEARCH = "product_search"
    PRODUCT = "product"
    REVIEW = "review"
    VIDEO = "video"


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class ImageDetails(BaseModel):
    image_url: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    image_content_type: Optional[str] = None


class GenericMetadata(BaseModel):
    """Metadata that pretty much every card has."""

    title: Optional[str] = None
    publication_date: Optional[datetime] = None
    source: Optional[str] = None
    keywords: Optional[List[str]] = None
    app_link: Optional[AppLink] = None
    # usually the favicon
    source_icon: Optional[str] = None
    image: Optional[ImageDetails] = None


class _Payload(BaseModel):
    generic_metadata: GenericMetadata = Field(default_factory=GenericMetadata)

    @model_serializer(mode="wrap")
    def _flatten_generic_metadata(self, handler) -> Dict[str, Any]:
        data = handler(self)
        data.update(data.pop("generic_metadata", None) or {})
        return data


class Card(BaseModel):
    card_type: CardType
    web_url: str = ""


class LinkTarget(_Payload):
    url: str = ""
    description: Optional[str] = None


class LinkCard(Card):
    card_type: Literal[CardType.LINK] = CardType.LINK
    target: Optional[LinkTarget] = None


class Article(_Payload):
    url: str = ""
    abstract_content: str = ""
    is_breaking: Optional[bool] = None
    contributors: Optional[List[str]] = None


class ArticleCard(Card):
    card_type: Literal[CardType.ARTICLE] = CardType.ARTICLE
    article: Optional[Article] = None


class ImageMedia(_Payload):
    type: MediaType = MediaType.IMAGE
    image_details: Optional[ImageDetails] = None
    image_caption: Optional[str] = None
    author: Optional[str] = None


class ImageCard(Card):
    card_type: Literal[CardType.IMAGE] = CardType.IMAGE
    media: Optional[ImageMedia] = None


class VideoMedia(_Payload):
    type: MediaType = MediaType.VIDEO
    embedded_url: str = ""
    embedded_url_width: str = ""
    embedded_url_height: str = ""
    stream_url: Optional[str] = None
    stream_content_type: Optional[str] = None
    poster_image_url: Optional[str] = None
    creator: Optional[str] = None


class VideoCard(Card):
    card_type: Literal[CardType.VIDEO] = CardType.VIDEO
    media: Optional[VideoMedia] = None


class PostalAddress(BaseModel):
    """Where to send snail mail. Quite possibly a physical address."""

    street_address: str = ""
    post_office_box_number: Optional[str] = None
    # in the US, the city
    locality: Optional[str] = None
    # in the US, the state
    region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None

    def _first_line(self) -> str:
        return self.street_address or (self.post_office_box_number or "")

    def _rest(self) -> List[str]:
        return [
            self.locality or "",
            self.region or "",
            self.postal_code or "",
            self.country or "",
        ]

    def formatted(self) -> str:
        """Return the address on a single line."""
        first = self.street_address.replace("\n", ", ") or (
            self.post_office_box_number or ""
        )
        return ", ".join([first] + self._rest())

    def multi_line_formatted(self) -> str:
        return "\n".join([self._first_line()] + self._rest())


class GeoCoordinates(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    elevation: Optional[float] = None


class Rating(BaseModel):
    # what this is actually rated
    value: str = ""
    # what a perfect score would be
    best_rating: Optional[str] = None
    # almost always 1, and should be assumed to be 1 when missing
    worst_rating: Optional[str] = None
    rating_count: Optional[int] = None
    review_count: Optional[int] = None
    image_url: Optional[str] = None


TimeRange = Tuple[time, time]


class Hours(BaseModel):
    """Opening hours. `open[i]` holds the time range for `days[i]` (0 is Sunday)."""

    days: List[int] = Field(default_factory=list)
    open: List[TimeRange] = Field(default_factory=list)

    @field_serializer("open")
    def _serialize_open(self, value: List[TimeRange]) -> List[List[str]]:
        return [[start.strftime("%H:%M"), end.strftime("%H:%M")] for start, end in value]


class Place(_Payload):
    url: Optional[str] = None
    description: Optional[str] = None
    # a physical address despite the type name
    address: Optional[PostalAddress] = None
    location: Optional[GeoCoordinates] = None
    rating: Optional[Rating] = None
    hours: Optional[Hours] = None
    phone_number: Optional[str] = None
    formatted_phone_number: Optional[str] = None

    def has_location(self) -> bool:
        return (
            self.location is not None
            and self.location.latitude is not None
            and self.location.longitude is not None
        )


class PlaceCard(Card):
    card_type: Literal[CardType.PLACE] = CardType.PLACE
    place: Optional[Place] = None


Wildcard = Annotated[
    Union[LinkCard, ArticleCard, ImageCard, VideoCard, PlaceCard],
    Field(discriminator="card_type"),
]


def new_article_card(web_url: str, article_url: str) -> ArticleCard:
    return ArticleCard(web_url=web_url, article=Article(url=article_url))


def new_link_card(original_url: str, link_url: str) -> LinkCard:
    return LinkCard(web_url=original_url, target=LinkTarget(url=link_url))


def new_image_card(original_url: str, src: str) -> ImageCard:
    return ImageCard(
        web_url=original_url,
        media=ImageMedia(image_details=ImageDetails(image_url=src)),
    )


def new_video_card(original_url: str) -> VideoCard:
    return VideoCard(web_url=original_url, media=VideoMedia())


def new_place_card(web_url: str) -> PlaceCard:
    return PlaceCard(web_url=web_url, place=Place())


def card_to_dict(card: Card) -> Dict[str, Any]:
    """JSON-shaped representation of a card, with unset optional fields dropped."""
    return card.model_dump(mode="json", by_alias=True, exclude_none=True)
