"""Bloc Gallery — galerie photo inline (titre optionnel + images légendées)."""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import BaseBlock, new_block_id


class GalleryImage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_block_id)
    url: str = ""
    caption: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _fresh_id_if_blank(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return new_block_id()
        return str(v)


class GalleryBlock(BaseBlock):
    type: Literal["gallery"] = "gallery"
    title: Optional[str] = ""
    images: List[GalleryImage] = Field(default_factory=list)
    with_background: bool = False
