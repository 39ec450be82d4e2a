"""Blocs texte — paragraphe, titre, citation."""
from typing import Literal

from .base import BaseBlock

HeadingLevel = Literal[2, 3]


class ParagraphBlock(BaseBlock):
    type: Literal["paragraph"] = "paragraph"
    text: str = ""  # rich text (HTML inline)


class HeadingBlock(BaseBlock):
    type: Literal["heading"] = "heading"
    level: HeadingLevel = 2
    text: str = ""  # texte brut


class QuoteBlock(BaseBlock):
    type: Literal["quote"] = "quote"
    text: str = ""  # rich text
