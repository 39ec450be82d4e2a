"""
Serializer — projections d'un document canonique.

  to_plain_text      → texte brut (résumé / recherche), avec perte
  to_storage_form    → liste ordonnée de records typés (JSON), sans perte
  from_storage_form  → records → document normalisé (auto-réparation)
  to_json / from_json → corps stocké en base (chaîne JSON ou texte legacy)
"""
import json
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from .blocks import (
    BLOCK_REGISTRY, BaseBlock,
    ParagraphBlock, HeadingBlock, ImageBlock, QuoteBlock, DividerBlock,
    CardBlock, GalleryBlock, EmbedBlock, MediaBlock,
)
from .core.normalizer import NormalizePolicy, normalize

log = logging.getLogger(__name__)

_TAG = re.compile(r"<[^>]+>")


def strip_tags(html: str) -> str:
    """Retire le balisage rich text (HTML inline)."""
    return _TAG.sub("", html or "")


# ── Texte brut ──────────────────────────────────────────────────────────────

def _fragment(block: BaseBlock) -> str:
    if isinstance(block, HeadingBlock):
        return block.text
    if isinstance(block, (ParagraphBlock, QuoteBlock)):
        return strip_tags(block.text)
    if isinstance(block, ImageBlock):
        return block.caption or ""
    if isinstance(block, CardBlock):
        return ". ".join(p for p in (block.title, strip_tags(block.body)) if p)
    if isinstance(block, GalleryBlock):
        return " ".join(img.caption for img in block.images if img.caption)
    if isinstance(block, (DividerBlock, EmbedBlock, MediaBlock)):
        return ""
    return ""


def to_plain_text(blocks: Iterable[BaseBlock]) -> str:
    """Fragments non vides séparés par une ligne blanche."""
    return "\n\n".join(f for f in (_fragment(b) for b in blocks) if f)


# ── Forme stockée ───────────────────────────────────────────────────────────

def to_storage_form(blocks: Iterable[BaseBlock]) -> List[Dict[str, Any]]:
    """Records JSON (clés camelCase), ordre conservé."""
    return [b.model_dump(mode="json", by_alias=True) for b in blocks]


def _parse_record(record: Any) -> Optional[BaseBlock]:
    """
    Record → bloc, sans jamais lever.

    Type inconnu / record non-dict → None.
    Champ invalide → retiré (valeur par défaut du variant), le reste est gardé.
    """
    if not isinstance(record, dict):
        log.warning("from_storage_form: record ignoré (%s)", type(record).__name__)
        return None
    block_type = record.get("type")
    block_cls = BLOCK_REGISTRY.get(block_type) if isinstance(block_type, str) else None
    if block_cls is None:
        log.warning("from_storage_form: type inconnu %r ignoré", block_type)
        return None

    data = dict(record)
    # Une passe par champ au plus : chaque échec retire au moins une clé
    for _ in range(len(data) + 1):
        try:
            return block_cls.model_validate(data)
        except ValidationError as e:
            bad = {err["loc"][0] for err in e.errors() if err["loc"]} - {"type"}
            bad &= set(data)
            if not bad:
                break
            log.warning("from_storage_form: %s, champs invalides réinitialisés : %s",
                        record.get("type"), sorted(bad))
            for key in bad:
                data.pop(key)
    return block_cls(id=data.get("id"))


def from_storage_form(raw: Any, policy: Optional[NormalizePolicy] = None) -> List[BaseBlock]:
    """
    Records → document canonique.

    Tolère records sans id (id frais), records corrompus, marqueurs média
    en double ou mal placés : le résultat passe toujours par `normalize`.
    """
    records: Sequence[Any] = raw if isinstance(raw, (list, tuple)) else []
    if raw is not None and not isinstance(raw, (list, tuple)):
        log.warning("from_storage_form: liste attendue, reçu %s", type(raw).__name__)
    blocks = [b for b in (_parse_record(r) for r in records) if b is not None]
    return normalize(blocks, policy)


# ── Corps JSON ──────────────────────────────────────────────────────────────

def to_json(blocks: Iterable[BaseBlock]) -> str:
    return json.dumps(to_storage_form(blocks), ensure_ascii=False)


def from_json(raw: Optional[str], policy: Optional[NormalizePolicy] = None) -> List[BaseBlock]:
    """
    Corps stocké → document canonique.

    - chaîne vide / None → document neuf
    - tableau JSON → from_storage_form
    - texte legacy (non JSON) → un paragraphe (\\n → <br />) + un paragraphe vide
    """
    if not raw or not raw.strip():
        return normalize([ParagraphBlock()], policy)
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return from_storage_form(parsed, policy)
    log.info("from_json: corps legacy (texte brut) converti en paragraphe")
    return normalize([ParagraphBlock(text=raw.replace("\n", "<br />")), ParagraphBlock()], policy)
