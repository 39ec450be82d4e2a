"""Bloc Embed — post social / vidéo intégrée (Twitter/X, Facebook, YouTube…)."""
from typing import Literal, Optional

from .base import BaseBlock

EmbedSize = Literal["default", "wide", "compact"]


class EmbedBlock(BaseBlock):
    type: Literal["embed"] = "embed"
    url: str = ""
    title: Optional[str] = ""
    size: EmbedSize = "default"
