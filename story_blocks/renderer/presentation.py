"""
Projection bloc → modèle de présentation.

`present()` est l'unique point de lecture des blocs pour l'affichage :
l'aperçu de l'éditeur et l'article publié l'appellent tous les deux.
Retourne None quand le bloc n'a rien à afficher.
"""
from typing import List, Literal, Optional, Union
from urllib.parse import quote, urlsplit

from pydantic import BaseModel, Field

from ..blocks import (
    BaseBlock,
    ParagraphBlock, HeadingBlock, ImageBlock, QuoteBlock, DividerBlock,
    CardBlock, GalleryBlock, EmbedBlock, MediaBlock,
    CardVariant, CardLayout, CardWidth, CardImageLayout, EmbedSize,
)
from ..core.urls import host_of, normalize_url, tweet_id, youtube_embed_url

EmbedProvider = Literal["twitter", "facebook", "youtube", "player"]

_ASPECT = {"default": "16/9", "wide": "21/9", "compact": "4/3"}


# ── Contenu média (collaborateur externe) ───────────────────────────────────

class MediaImage(BaseModel):
    url: str
    caption: Optional[str] = None


class MediaContent(BaseModel):
    """Trailer + galerie édités hors du flux de blocs (formulaire séparé)."""
    trailer_url: Optional[str] = None
    gallery: List[MediaImage] = Field(default_factory=list)


# ── Modèles de présentation ─────────────────────────────────────────────────

class HeadingView(BaseModel):
    kind: Literal["heading"] = "heading"
    id: str
    level: int
    text: str


class ParagraphView(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    id: str
    html: str


class QuoteView(BaseModel):
    kind: Literal["quote"] = "quote"
    id: str
    html: str


class ImageView(BaseModel):
    kind: Literal["image"] = "image"
    id: str
    url: str
    alt: str
    caption: Optional[str] = None


class DividerView(BaseModel):
    kind: Literal["divider"] = "divider"
    id: str


class EmbedView(BaseModel):
    kind: Literal["embed"] = "embed"
    id: str
    provider: EmbedProvider
    src: str
    tweet_id: Optional[str] = None
    title: Optional[str] = None
    size: EmbedSize = "default"
    aspect_ratio: str = "16/9"
    narrow: bool = False


class GalleryImageView(BaseModel):
    id: str
    url: str
    caption: Optional[str] = None


class GalleryView(BaseModel):
    kind: Literal["gallery"] = "gallery"
    id: str
    title: Optional[str] = None
    images: List[GalleryImageView]
    with_background: bool = False


class CardVideo(BaseModel):
    kind: Literal["video"] = "video"
    embed_url: str


class CardImages(BaseModel):
    kind: Literal["images"] = "images"
    urls: List[str]
    layout: CardImageLayout = "row"


class CardView(BaseModel):
    kind: Literal["card"] = "card"
    id: str
    title: str = ""
    body_html: str = ""
    link_url: str = ""
    link_label: str = "Learn more"
    variant: CardVariant = "default"
    layout: CardLayout = "mediaTop"
    width: CardWidth = "narrow"
    media: Optional[Union[CardVideo, CardImages]] = None


class MediaSlotView(BaseModel):
    """Position du trailer / galerie dans le flux — contenu fourni par l'hôte."""
    kind: Literal["media"] = "media"
    id: str


PresentationModel = Union[
    HeadingView, ParagraphView, QuoteView, ImageView, DividerView,
    EmbedView, GalleryView, CardView, MediaSlotView,
]


# ── Projection ──────────────────────────────────────────────────────────────

def present_embed(block: EmbedBlock) -> Optional[EmbedView]:
    url = block.url or ""
    host = host_of(url) if url else None
    if host is None:
        return None
    common = dict(
        id=block.id, title=block.title or None, size=block.size,
        aspect_ratio=_ASPECT[block.size], narrow=block.size == "compact",
    )

    if host in ("twitter.com", "x.com", "platform.twitter.com"):
        tid = tweet_id(url)
        if not tid:
            return None
        return EmbedView(provider="twitter", src=url, tweet_id=tid, **common)

    if "facebook.com" in host or host == "fb.watch":
        src = url
        if not urlsplit(url).path.startswith("/plugins/post.php"):
            src = f"https://www.facebook.com/plugins/post.php?href={quote(url, safe='')}&show_text=true"
        return EmbedView(provider="facebook", src=src, **common)

    yt = youtube_embed_url(url)
    if yt:
        return EmbedView(provider="youtube", src=yt, **common)
    return EmbedView(provider="player", src=url, **common)


def present_card(block: CardBlock) -> Optional[CardView]:
    link_url = normalize_url(block.link_url) if block.link_url else ""
    embed_url = youtube_embed_url(block.video_url) if block.media_type == "video" else None
    image_urls = [u for u in block.image_urls if u]

    if not (block.title or block.body or link_url or embed_url or image_urls):
        return None

    media: Optional[Union[CardVideo, CardImages]] = None
    if embed_url:
        media = CardVideo(embed_url=embed_url)
    elif block.media_type == "imageGrid" and image_urls:
        media = CardImages(urls=image_urls, layout=block.image_layout)

    return CardView(
        id=block.id,
        title=block.title,
        body_html=block.body,
        link_url=link_url,
        link_label=block.link_label or "Learn more",
        variant=block.variant,
        layout=block.layout,
        width=block.width,
        media=media,
    )


def present(block: BaseBlock) -> Optional[PresentationModel]:
    """Bloc → modèle de présentation (None = rien à afficher)."""
    if isinstance(block, MediaBlock):
        return MediaSlotView(id=block.id)
    if isinstance(block, HeadingBlock):
        return HeadingView(id=block.id, level=block.level, text=block.text) if block.text else None
    if isinstance(block, ParagraphBlock):
        return ParagraphView(id=block.id, html=block.text) if block.text else None
    if isinstance(block, QuoteBlock):
        return QuoteView(id=block.id, html=block.text) if block.text else None
    if isinstance(block, ImageBlock):
        if not block.url:
            return None
        return ImageView(id=block.id, url=block.url, alt=block.caption or "Screenshot",
                         caption=block.caption or None)
    if isinstance(block, DividerBlock):
        return DividerView(id=block.id)
    if isinstance(block, EmbedBlock):
        return present_embed(block)
    if isinstance(block, GalleryBlock):
        images = [
            GalleryImageView(id=img.id, url=img.url, caption=img.caption or None)
            for img in block.images if img.url
        ]
        if not images:
            return None
        return GalleryView(id=block.id, title=block.title or None, images=images,
                           with_background=block.with_background)
    if isinstance(block, CardBlock):
        return present_card(block)
    return None
