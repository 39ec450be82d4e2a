"""
BlockStore — document éditable d'une session d'édition.

Chaque opération calcule une séquence candidate (core.operations) puis
publie `normalize(candidate)` : aucun appelant n'observe un document invalide.
Les cas limites attendus (id inconnu, déplacement en bord, singleton média,
dernier bloc de contenu) sont des no-op silencieux.
"""
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from ..blocks import BaseBlock, BlockType, MediaBlock, ParagraphBlock
from . import operations as ops
from .normalizer import NormalizePolicy, normalize

log = logging.getLogger(__name__)


class BlockStore:
    """
    Handle d'un document (séquence ordonnée de blocs).

    Usage:
        >>> store = BlockStore.new()
        >>> first = store.blocks[0]
        >>> store.insert_after(first.id, "heading")
        >>> store.update_fields(store.blocks[1].id, {"text": "Verdict"})
    """

    def __init__(self, blocks: Iterable[BaseBlock] = (), policy: Optional[NormalizePolicy] = None):
        """
        Args:
            blocks: séquence initiale (normalisée à la construction)
            policy: politique média (défaut : config)
        """
        self.policy = policy
        self._blocks: List[BaseBlock] = normalize(blocks, policy)

    # ── Construction ─────────────────────────────────────────────────────────

    @classmethod
    def new(cls, policy: Optional[NormalizePolicy] = None) -> "BlockStore":
        """Document vierge : un paragraphe vide puis le marqueur média."""
        return cls([ParagraphBlock()], policy)

    @classmethod
    def from_storage(cls, raw: Any, policy: Optional[NormalizePolicy] = None) -> "BlockStore":
        """Charge un document depuis sa forme stockée (liste de records ou JSON)."""
        from ..serializer import from_json, from_storage_form
        blocks = from_json(raw, policy) if isinstance(raw, str) else from_storage_form(raw, policy)
        return cls(blocks, policy)

    # ── Lecture ──────────────────────────────────────────────────────────────

    @property
    def blocks(self) -> List[BaseBlock]:
        """Copie de l'état courant (toujours canonique)."""
        return list(self._blocks)

    @property
    def media_index(self) -> int:
        return next(i for i, b in enumerate(self._blocks) if isinstance(b, MediaBlock))

    def find(self, block_id: str) -> Optional[BaseBlock]:
        return ops.find(self._blocks, block_id)

    def index_of(self, block_id: str) -> int:
        return ops.index_of(self._blocks, block_id)

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[BaseBlock]:
        return iter(list(self._blocks))

    # ── Édition ──────────────────────────────────────────────────────────────

    def _publish(self, candidate: Sequence[BaseBlock]) -> List[BaseBlock]:
        if candidate is not self._blocks:
            self._blocks = normalize(candidate, self.policy)
        return self.blocks

    def insert_after(self, anchor_id: str, block_type: BlockType) -> List[BaseBlock]:
        """Insère un bloc neuf juste après `anchor_id`."""
        return self._publish(ops.insert_after(self._blocks, anchor_id, block_type))

    def update_fields(self, block_id: str, patch: Dict[str, Any]) -> List[BaseBlock]:
        """
        Fusionne `patch` dans le payload du bloc (clés snake_case ou camelCase).

        `id` et `type` sont ignorés. Le marqueur média n'a pas de payload.

        Raises:
            pydantic.ValidationError: valeur invalide pour le variant
        """
        return self._publish(ops.update_fields(self._blocks, block_id, patch))

    def move_block(self, block_id: str, direction: ops.Direction) -> List[BaseBlock]:
        """Échange le bloc avec son voisin ("up" / "down")."""
        return self._publish(ops.move_block(self._blocks, block_id, direction))

    def duplicate_block(self, block_id: str) -> List[BaseBlock]:
        """Clone le bloc (nouvel id) juste après l'original."""
        return self._publish(ops.duplicate_block(self._blocks, block_id))

    def remove_block(self, block_id: str) -> List[BaseBlock]:
        """Supprime le bloc (sauf marqueur média et dernier bloc de contenu)."""
        return self._publish(ops.remove_block(self._blocks, block_id))

    # ── Export ───────────────────────────────────────────────────────────────

    def to_storage_form(self) -> List[Dict[str, Any]]:
        from ..serializer import to_storage_form
        return to_storage_form(self._blocks)

    def to_plain_text(self) -> str:
        from ..serializer import to_plain_text
        return to_plain_text(self._blocks)
