"""
Normalizer — répare n'importe quelle séquence de blocs en document canonique.

Invariants garantis sur la sortie :
  - ids deux à deux distincts
  - exactement un MediaBlock, jamais en tête
  - au moins un bloc de contenu avant le MediaBlock
  - au moins un bloc de contenu dans le document

`normalize` est totale (ne lève jamais) et idempotente.
"""
import logging
from typing import Iterable, List, Literal, Optional, Sequence

from pydantic import BaseModel

from ..blocks import BaseBlock, MediaBlock, ParagraphBlock, new_block_id
from .. import config

log = logging.getLogger(__name__)

MissingMediaPolicy = Literal["end", "after_first"]
LeadingMediaPolicy = Literal["move_to_end", "insert_placeholder"]


class NormalizePolicy(BaseModel):
    """
    Politique produit du marqueur média.

    missing_media : où ajouter le marqueur s'il est absent
        "end"          → en fin de document (texte d'abord, média ensuite)
        "after_first"  → juste après le premier bloc de contenu
    leading_media : réparation si le marqueur se retrouve en tête
        "move_to_end"        → déplacé en fin de document
        "insert_placeholder" → paragraphe vide inséré devant lui
    """
    missing_media: MissingMediaPolicy = "end"
    leading_media: LeadingMediaPolicy = "move_to_end"


def default_policy() -> NormalizePolicy:
    """Politique issue de la config (STORY_MEDIA_MISSING / STORY_MEDIA_LEADING)."""
    try:
        return NormalizePolicy(missing_media=config.MEDIA_MISSING, leading_media=config.MEDIA_LEADING)
    except ValueError:
        log.warning("Politique média invalide (%s, %s), défaut utilisé",
                    config.MEDIA_MISSING, config.MEDIA_LEADING)
        return NormalizePolicy()


def _media_index(blocks: Sequence[BaseBlock]) -> int:
    for i, b in enumerate(blocks):
        if isinstance(b, MediaBlock):
            return i
    return -1


def _collapse(blocks: Iterable[BaseBlock]) -> tuple[List[BaseBlock], bool]:
    """Étape 1 : copie ordonnée, premier marqueur seul conservé, ids dédoublonnés."""
    out: List[BaseBlock] = []
    seen_ids: set = set()
    seen_media = False
    for b in blocks:
        if not isinstance(b, BaseBlock):
            log.warning("normalize: élément ignoré (%r)", type(b).__name__)
            continue
        if isinstance(b, MediaBlock):
            if seen_media:
                continue
            seen_media = True
        if b.id in seen_ids:
            b = b.model_copy(update={"id": new_block_id()})
        seen_ids.add(b.id)
        out.append(b)
    return out, seen_media


def normalize(blocks: Iterable[BaseBlock], policy: Optional[NormalizePolicy] = None) -> List[BaseBlock]:
    """
    Retourne la séquence canonique correspondant à `blocks`.

    1. Copie dans l'ordre ; MediaBlock en double → supprimé
    2. Aucun bloc de contenu → paragraphe vide ajouté
    3. Pas de MediaBlock → ajouté selon `policy.missing_media`
    4. MediaBlock en tête → réparé selon `policy.leading_media`
    5. Aucun bloc de contenu avant le MediaBlock → paragraphe vide en tête

    Args:
        blocks: séquence quelconque (éditée, chargée, corrompue…)
        policy: politique média (défaut : config)

    Returns:
        Nouvelle liste ; l'entrée n'est jamais modifiée.
    """
    policy = policy or default_policy()
    out, has_media = _collapse(blocks)

    if not any(not isinstance(b, MediaBlock) for b in out):
        out.append(ParagraphBlock())

    if not has_media:
        if policy.missing_media == "after_first":
            first = next(i for i, b in enumerate(out) if not isinstance(b, MediaBlock))
            out.insert(first + 1, MediaBlock())
        else:
            out.append(MediaBlock())

    if _media_index(out) == 0:
        if policy.leading_media == "insert_placeholder":
            out.insert(0, ParagraphBlock())
        else:
            out.append(out.pop(0))

    idx = _media_index(out)
    if not any(not isinstance(b, MediaBlock) for b in out[:idx]):
        out.insert(0, ParagraphBlock())

    return out


def is_canonical(blocks: Sequence[BaseBlock]) -> bool:
    """Vrai si `blocks` respecte tous les invariants du document."""
    ids = [b.id for b in blocks]
    if len(ids) != len(set(ids)):
        return False
    media = [i for i, b in enumerate(blocks) if isinstance(b, MediaBlock)]
    if len(media) != 1 or media[0] == 0:
        return False
    return any(not isinstance(b, MediaBlock) for b in blocks[:media[0]])
