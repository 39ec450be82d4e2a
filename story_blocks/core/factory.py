"""
Factory — crée un bloc neuf (id frais + valeurs par défaut du variant).
"""
from ..blocks import BLOCK_REGISTRY, BaseBlock, BlockType


def create_block(block_type: BlockType) -> BaseBlock:
    """
    Crée un bloc du variant demandé.

    Les valeurs par défaut sont portées par les modèles eux-mêmes
    (ex : CardBlock → variant="default", layout="mediaTop", link_label="Learn more").

    Raises:
        KeyError: variant inconnu
    """
    return BLOCK_REGISTRY[block_type]()


def clone_block(block: BaseBlock) -> BaseBlock:
    """Copie profonde du payload sous un nouvel id."""
    data = block.model_dump()
    data.pop("id", None)
    return type(block)(**data)
