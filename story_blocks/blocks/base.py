"""
Bloc de base pour les articles / reviews.
Chaque bloc porte un `type` (discriminant) + un `id` stable.
"""
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def new_block_id() -> str:
    """Identifiant frais pour un bloc (ou une image de galerie)."""
    return str(uuid.uuid4())


class BaseBlock(BaseModel):
    """Bloc de base (classe parente de tous les variants)."""
    # Noms JSON camelCase (format stocké par l'éditeur), attributs snake_case.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: str
    id: str = Field(default_factory=new_block_id)

    @field_validator("id", mode="before")
    @classmethod
    def _fresh_id_if_blank(cls, v):
        # Enregistrements persistés sans id (ou id vide) → id frais
        if v is None or (isinstance(v, str) and not v.strip()):
            return new_block_id()
        return str(v)

    @property
    def is_media(self) -> bool:
        return self.type == "media"
