"""
Blocs sans contenu éditable : séparateur + marqueur média.

MediaBlock n'a aucun payload : il indique seulement où le trailer et la
galerie (fournis hors du flux de blocs) s'insèrent dans l'article.
Au plus un MediaBlock par document (cf. core.normalizer).
"""
from typing import Literal

from .base import BaseBlock


class DividerBlock(BaseBlock):
    type: Literal["divider"] = "divider"


class MediaBlock(BaseBlock):
    type: Literal["media"] = "media"
