"""
Opérations d'édition pures : séquence en entrée → nouvelle séquence en sortie.

Aucune ne normalise ni ne lève : id introuvable, déplacement hors bornes ou
tentative de casser le singleton média → séquence retournée telle quelle
(même objet liste). BlockStore normalise le résultat avant publication.
"""
import logging
from typing import Any, Dict, List, Literal, Optional, Sequence

from pydantic.alias_generators import to_camel

from ..blocks import BaseBlock, EmbedBlock, MediaBlock, BlockType
from .factory import clone_block, create_block
from .urls import normalize_embed_input

log = logging.getLogger(__name__)

Direction = Literal["up", "down"]

# Champs non modifiables via update_fields
_FROZEN_FIELDS = {"id", "type"}


def index_of(blocks: Sequence[BaseBlock], block_id: str) -> int:
    for i, b in enumerate(blocks):
        if b.id == block_id:
            return i
    return -1


def _field_names(block: BaseBlock, patch: Dict[str, Any]) -> Dict[str, Any]:
    """Convertit les clés camelCase (alias) du patch en noms d'attributs."""
    by_alias: Dict[str, str] = {}
    for name, info in type(block).model_fields.items():
        by_alias[to_camel(name)] = name
        if info.alias:
            by_alias[info.alias] = name
    out: Dict[str, Any] = {}
    for key, value in patch.items():
        name = by_alias.get(key, key)
        if name in _FROZEN_FIELDS:
            continue
        out[name] = value
    return out


def insert_after(blocks: Sequence[BaseBlock], anchor_id: str, block_type: BlockType) -> Sequence[BaseBlock]:
    if block_type == "media":
        log.debug("insert_after: marqueur média déjà présent, ignoré")
        return blocks
    idx = index_of(blocks, anchor_id)
    if idx == -1:
        log.debug("insert_after: ancre %s introuvable", anchor_id)
        return blocks
    out = list(blocks)
    out.insert(idx + 1, create_block(block_type))
    return out


def update_fields(blocks: Sequence[BaseBlock], block_id: str, patch: Dict[str, Any]) -> Sequence[BaseBlock]:
    """
    Fusionne `patch` dans le payload du bloc.

    Raises:
        pydantic.ValidationError: valeur invalide pour le variant
    """
    idx = index_of(blocks, block_id)
    if idx == -1:
        log.debug("update_fields: bloc %s introuvable", block_id)
        return blocks
    block = blocks[idx]
    if isinstance(block, MediaBlock):
        log.debug("update_fields: le marqueur média n'a pas de payload")
        return blocks

    changes = _field_names(block, patch)
    if isinstance(block, EmbedBlock) and isinstance(changes.get("url"), str):
        changes["url"] = normalize_embed_input(changes["url"])

    data = block.model_dump()
    data.update(changes)
    out = list(blocks)
    out[idx] = type(block).model_validate(data)
    return out


def move_block(blocks: Sequence[BaseBlock], block_id: str, direction: Direction) -> Sequence[BaseBlock]:
    idx = index_of(blocks, block_id)
    if idx == -1:
        log.debug("move_block: bloc %s introuvable", block_id)
        return blocks
    target = idx - 1 if direction == "up" else idx + 1
    if target < 0 or target >= len(blocks):
        return blocks
    out = list(blocks)
    out[idx], out[target] = out[target], out[idx]
    return out


def duplicate_block(blocks: Sequence[BaseBlock], block_id: str) -> Sequence[BaseBlock]:
    idx = index_of(blocks, block_id)
    if idx == -1:
        log.debug("duplicate_block: bloc %s introuvable", block_id)
        return blocks
    if isinstance(blocks[idx], MediaBlock):
        log.debug("duplicate_block: marqueur média non duplicable")
        return blocks
    out = list(blocks)
    out.insert(idx + 1, clone_block(blocks[idx]))
    return out


def remove_block(blocks: Sequence[BaseBlock], block_id: str) -> Sequence[BaseBlock]:
    idx = index_of(blocks, block_id)
    if idx == -1:
        log.debug("remove_block: bloc %s introuvable", block_id)
        return blocks
    if isinstance(blocks[idx], MediaBlock):
        log.debug("remove_block: marqueur média non supprimable")
        return blocks
    if sum(1 for b in blocks if not isinstance(b, MediaBlock)) <= 1:
        log.debug("remove_block: dernier bloc de contenu conservé")
        return blocks
    out: List[BaseBlock] = list(blocks)
    del out[idx]
    return out


def find(blocks: Sequence[BaseBlock], block_id: str) -> Optional[BaseBlock]:
    idx = index_of(blocks, block_id)
    return blocks[idx] if idx != -1 else None
