"""Bloc Image — image seule avec légende optionnelle."""
from typing import Literal

from .base import BaseBlock


class ImageBlock(BaseBlock):
    type: Literal["image"] = "image"
    url: str = ""
    caption: str = ""
