"""
Protocol Renderer — interface pluggable pour les renderers (HTML, JSON…).
"""
from typing import Optional, Protocol, Sequence, runtime_checkable

from ..blocks import BaseBlock
from .presentation import MediaContent


@runtime_checkable
class Renderer(Protocol):
    def render_document(self, blocks: Sequence[BaseBlock], media: Optional[MediaContent] = None) -> str: ...
    def render_block(self, block: BaseBlock, media: Optional[MediaContent] = None) -> str: ...
