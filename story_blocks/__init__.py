"""
story_blocks — modèle de document par blocs des éditeurs d'articles / reviews.

Usage:
    >>> from story_blocks import BlockStore, to_plain_text, render_document
    >>> store = BlockStore.new()
    >>> store.insert_after(store.blocks[0].id, "heading")
    >>> html = render_document(store.blocks, surface="preview")

Chargement depuis la base (auto-réparation) :
    >>> store = BlockStore.from_storage(row.body)
"""

# ── Blocs ──────────────────────────────────────────────────────────────────────
from .blocks import (
    BaseBlock, Block, BlockType, BLOCK_REGISTRY, new_block_id,
    ParagraphBlock, HeadingBlock, ImageBlock, QuoteBlock, DividerBlock,
    CardBlock, GalleryBlock, GalleryImage, EmbedBlock, MediaBlock,
)

# ── Moteur ─────────────────────────────────────────────────────────────────────
from .core import (
    BlockStore, NormalizePolicy, normalize, is_canonical,
    create_block, clone_block,
    StoryError, StoryValidationError, StoryNotFound,
)

# ── Sérialisation ──────────────────────────────────────────────────────────────
from .serializer import (
    to_plain_text, to_storage_form, from_storage_form, to_json, from_json, strip_tags,
)

# ── Rendu ──────────────────────────────────────────────────────────────────────
from .renderer import (
    MediaContent, MediaImage, present, render_block, render_document,
    split_by_media, HtmlRenderer, Renderer,
)

__version__ = "0.1.0"

__all__ = [
    # blocs
    "BaseBlock", "Block", "BlockType", "BLOCK_REGISTRY", "new_block_id",
    "ParagraphBlock", "HeadingBlock", "ImageBlock", "QuoteBlock", "DividerBlock",
    "CardBlock", "GalleryBlock", "GalleryImage", "EmbedBlock", "MediaBlock",
    # moteur
    "BlockStore", "NormalizePolicy", "normalize", "is_canonical",
    "create_block", "clone_block",
    "StoryError", "StoryValidationError", "StoryNotFound",
    # sérialisation
    "to_plain_text", "to_storage_form", "from_storage_form", "to_json", "from_json", "strip_tags",
    # rendu
    "MediaContent", "MediaImage", "present", "render_block", "render_document",
    "split_by_media", "HtmlRenderer", "Renderer",
]
