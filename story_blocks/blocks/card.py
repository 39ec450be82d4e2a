"""
Bloc Card — encart (titre + corps rich text + lien) avec média optionnel :
vidéo YouTube ou grille de 1 à 3 images.
"""
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from .base import BaseBlock

CardVariant = Literal["default", "compact", "featured"]
CardMediaType = Literal["none", "video", "imageGrid"]
CardLayout = Literal["mediaTop", "mediaBottom", "mediaLeft", "mediaRight"]
CardImageLayout = Literal["row", "grid"]
CardWidth = Literal["narrow", "full"]

MAX_CARD_IMAGES = 3


class CardBlock(BaseBlock):
    type: Literal["card"] = "card"
    title: str = ""
    body: str = ""  # rich text
    link_url: str = ""
    link_label: str = "Learn more"
    variant: CardVariant = "default"
    media_type: CardMediaType = "none"
    layout: CardLayout = "mediaTop"
    video_url: Optional[str] = ""
    image_urls: List[str] = Field(default_factory=list)
    image_layout: CardImageLayout = "row"
    width: CardWidth = Field(default="narrow", alias="cardWidth")

    @field_validator("image_urls", mode="before")
    @classmethod
    def _at_most_three(cls, v):
        if isinstance(v, list):
            return v[:MAX_CARD_IMAGES]
        return v
