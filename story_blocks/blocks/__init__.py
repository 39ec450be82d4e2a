"""
Blocs — exports publics + union `Block` discriminée par `type`.
"""
from typing import Annotated, Dict, Literal, Type, Union

from pydantic import Field, TypeAdapter

from .base import BaseBlock, new_block_id
from .text import ParagraphBlock, HeadingBlock, QuoteBlock, HeadingLevel
from .image import ImageBlock
from .marker import DividerBlock, MediaBlock
from .embed import EmbedBlock, EmbedSize
from .gallery import GalleryBlock, GalleryImage
from .card import (
    CardBlock, CardVariant, CardMediaType, CardLayout, CardImageLayout, CardWidth,
    MAX_CARD_IMAGES,
)

# Union discriminée par type ; ajout d'un variant : factory, normalizer,
# serializer et renderer à mettre à jour ensemble.
Block = Annotated[
    Union[
        ParagraphBlock,
        HeadingBlock,
        ImageBlock,
        QuoteBlock,
        DividerBlock,
        CardBlock,
        GalleryBlock,
        EmbedBlock,
        MediaBlock,
    ],
    Field(discriminator="type"),
]

BlockType = Literal[
    "paragraph", "heading", "image", "quote", "divider",
    "card", "gallery", "embed", "media",
]

BLOCK_REGISTRY: Dict[str, Type[BaseBlock]] = {
    "paragraph": ParagraphBlock,
    "heading":   HeadingBlock,
    "image":     ImageBlock,
    "quote":     QuoteBlock,
    "divider":   DividerBlock,
    "card":      CardBlock,
    "gallery":   GalleryBlock,
    "embed":     EmbedBlock,
    "media":     MediaBlock,
}

block_adapter: TypeAdapter = TypeAdapter(Block)

__all__ = [
    "BaseBlock", "new_block_id",
    "ParagraphBlock", "HeadingBlock", "QuoteBlock", "HeadingLevel",
    "ImageBlock",
    "DividerBlock", "MediaBlock",
    "EmbedBlock", "EmbedSize",
    "GalleryBlock", "GalleryImage",
    "CardBlock", "CardVariant", "CardMediaType", "CardLayout", "CardImageLayout", "CardWidth",
    "MAX_CARD_IMAGES",
    "Block", "BlockType", "BLOCK_REGISTRY", "block_adapter",
]
