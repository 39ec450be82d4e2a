"""
Renderer HTML — même rendu pour l'aperçu éditeur et l'article publié.

Dispatch sur le modèle de présentation (cf. presentation.present) ; les deux
surfaces ne diffèrent que par la classe du conteneur racine.
Le trailer / la galerie de l'hôte sont insérés à la position du MediaBlock.
"""
from html import escape
from typing import List, Literal, Optional, Sequence

from ..blocks import BaseBlock, MediaBlock
from ..core.urls import youtube_embed_url
from .presentation import (
    CardImages, CardVideo, CardView, DividerView, EmbedView, GalleryImageView, GalleryView,
    HeadingView, ImageView, MediaContent, MediaSlotView, ParagraphView,
    PresentationModel, QuoteView, present,
)

Surface = Literal["preview", "article"]

_IFRAME_ALLOW = ("accelerometer; autoplay; clipboard-write; encrypted-media; "
                 "gyroscope; picture-in-picture; web-share")


# ── Point d'entrée public ───────────────────────────────────────────────────

def split_by_media(blocks: Sequence[BaseBlock]) -> tuple[List[BaseBlock], List[BaseBlock]]:
    """(blocs avant le marqueur, blocs après) — marqueur exclu."""
    idx = next((i for i, b in enumerate(blocks) if isinstance(b, MediaBlock)), -1)
    if idx == -1:
        return [], [b for b in blocks if not isinstance(b, MediaBlock)]
    before = [b for b in blocks[:idx] if not isinstance(b, MediaBlock)]
    after = [b for b in blocks[idx + 1:] if not isinstance(b, MediaBlock)]
    return before, after


def render_document(
    blocks: Sequence[BaseBlock],
    media: Optional[MediaContent] = None,
    surface: Surface = "article",
) -> str:
    """Rend le document dans l'ordre, média inséré à la position du marqueur."""
    parts = [render_block(b, media) for b in blocks]
    inner = "\n".join(p for p in parts if p)
    return f'<div class="story story--{surface}">\n{inner}\n</div>'


class HtmlRenderer:
    """Renderer HTML lié à une surface ("preview" ou "article")."""

    def __init__(self, surface: Surface = "article"):
        self.surface = surface

    def render_document(self, blocks: Sequence[BaseBlock], media: Optional[MediaContent] = None) -> str:
        return render_document(blocks, media, self.surface)

    def render_block(self, block: BaseBlock, media: Optional[MediaContent] = None) -> str:
        return render_block(block, media)


# ── Dispatch ────────────────────────────────────────────────────────────────

def render_block(block: BaseBlock, media: Optional[MediaContent] = None) -> str:
    """Bloc → HTML ("" si rien à afficher)."""
    view = present(block)
    if view is None:
        return ""
    return render_view(view, media)


def render_view(view: PresentationModel, media: Optional[MediaContent] = None) -> str:
    if isinstance(view, MediaSlotView):  return render_media_slot(view, media)
    if isinstance(view, HeadingView):    return render_heading(view)
    if isinstance(view, ParagraphView):  return f'<div class="story__paragraph">{view.html}</div>'
    if isinstance(view, QuoteView):      return f'<blockquote class="story__quote"><div>{view.html}</div></blockquote>'
    if isinstance(view, ImageView):      return render_image(view)
    if isinstance(view, DividerView):    return '<hr class="story__divider">'
    if isinstance(view, EmbedView):      return render_embed(view)
    if isinstance(view, GalleryView):    return render_gallery(view)
    if isinstance(view, CardView):       return render_card(view)
    return ""


# ── Renderers ───────────────────────────────────────────────────────────────

def render_heading(v: HeadingView) -> str:
    tag = "h3" if v.level == 3 else "h2"
    return f'<{tag} class="story__heading story__heading--{tag}">{escape(v.text)}</{tag}>'


def render_image(v: ImageView) -> str:
    caption = f'\n  <figcaption class="story__caption">{v.caption}</figcaption>' if v.caption else ""
    return f"""<figure class="story__image">
  <img src="{escape(v.url)}" alt="{escape(v.alt)}">{caption}
</figure>"""


def _iframe(src: str, title: str) -> str:
    return (f'<iframe src="{escape(src)}" title="{escape(title)}" allow="{_IFRAME_ALLOW}" '
            f'allowfullscreen></iframe>')


def render_embed(v: EmbedView) -> str:
    classes = ["story__embed", f"story__embed--{v.provider}", f"story__embed--{v.size}"]
    caption = f'\n  <figcaption class="story__caption">{escape(v.title)}</figcaption>' if v.title else ""

    if v.provider == "twitter":
        inner = f'<div class="story__tweet" data-tweet-id="{escape(v.tweet_id or "")}"></div>'
    elif v.provider == "player":
        inner = f'<div class="story__player" data-src="{escape(v.src)}"></div>'
    else:
        default_title = "Facebook post" if v.provider == "facebook" else "YouTube video"
        inner = _iframe(v.src, v.title or default_title)

    return f"""<figure class="{" ".join(classes)}" style="aspect-ratio:{v.aspect_ratio}">
  {inner}{caption}
</figure>"""


def _render_gallery_images(images, with_background: bool) -> str:
    items = "".join(
        f'<figure class="story__gallery-item"><img src="{escape(img.url)}" alt="{escape(img.caption or "")}">'
        + (f'<figcaption>{escape(img.caption)}</figcaption>' if img.caption else "")
        + "</figure>"
        for img in images
    )
    bg = " story__gallery--bg" if with_background else ""
    return f'<div class="story__gallery{bg}">{items}</div>'


def render_gallery(v: GalleryView) -> str:
    title = f'<h3 class="story__gallery-title">{escape(v.title)}</h3>\n  ' if v.title else ""
    return f"""<div class="story__gallery-block">
  {title}{_render_gallery_images(v.images, v.with_background)}
</div>"""


def render_card(v: CardView) -> str:
    media_html = ""
    if isinstance(v.media, CardVideo):
        media_html = _iframe(v.media.embed_url, v.title or "YouTube video")
    elif isinstance(v.media, CardImages):
        imgs = "".join(
            f'<img src="{escape(u)}" alt="{escape(v.title or f"Gallery image {i}")}">'
            for i, u in enumerate(v.media.urls, 1)
        )
        media_html = f'<div class="card__images card__images--{v.media.layout}">{imgs}</div>'

    title = f'<h3 class="card__title">{escape(v.title)}</h3>' if v.title else ""
    body = f'<div class="card__body">{v.body_html}</div>' if v.body_html else ""
    link = (f'<a class="card__link" href="{escape(v.link_url)}" target="_blank" rel="noopener">'
            f'{v.link_label} ↗</a>') if v.link_url else ""
    text = f'<div class="card__text">{title}{body}{link}</div>'
    media = f'<div class="card__media">{media_html}</div>' if media_html else ""

    # mediaBottom / mediaRight : média après le texte
    inner = text + media if v.layout in ("mediaBottom", "mediaRight") else media + text

    classes = ["card", f"card--{v.variant}", f"card--{v.layout}", f"card--{v.width}"]
    return f'<div class="{" ".join(classes)}">{inner}</div>'


def render_media_slot(v: MediaSlotView, media: Optional[MediaContent]) -> str:
    """Trailer + galerie fournis par l'hôte ; rien si les deux sont vides."""
    if media is None:
        return ""
    trailer = youtube_embed_url(media.trailer_url)
    images = [img for img in media.gallery if img.url.strip()]
    if not trailer and not images:
        return ""

    parts = []
    if trailer:
        parts.append(f'<div class="story__trailer">{_iframe(trailer, "Trailer")}</div>')
    if images:
        views = [GalleryImageView(id=f"g-{i}", url=img.url.strip(), caption=img.caption)
                 for i, img in enumerate(images)]
        parts.append(_render_gallery_images(views, with_background=False))
    inner = "\n  ".join(parts)
    return f'<section class="story__media" data-block-id="{escape(v.id)}">\n  {inner}\n</section>'
