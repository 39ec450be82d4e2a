"""Renderer — projection de présentation + rendu HTML."""
from .presentation import (
    MediaContent, MediaImage, PresentationModel, present,
    HeadingView, ParagraphView, QuoteView, ImageView, DividerView,
    EmbedView, GalleryView, GalleryImageView, CardView, CardVideo, CardImages, MediaSlotView,
)
from .html import HtmlRenderer, render_block, render_document, render_view, split_by_media
from .base import Renderer

__all__ = [
    "MediaContent", "MediaImage", "PresentationModel", "present",
    "HeadingView", "ParagraphView", "QuoteView", "ImageView", "DividerView",
    "EmbedView", "GalleryView", "GalleryImageView", "CardView", "CardVideo", "CardImages", "MediaSlotView",
    "HtmlRenderer", "render_block", "render_document", "render_view", "split_by_media",
    "Renderer",
]
