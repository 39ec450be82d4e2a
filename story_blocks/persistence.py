"""
Persistance — sauvegarde / chargement d'un article (titre + blocs + média).

save_story(db, ...) → SavedStory(id, slug)   | StoryValidationError | StoryNotFound
load_story(db, id)  → LoadedStory(...)       | StoryNotFound

Le chargement passe par serializer.from_json : un corps corrompu en base
est réparé à la lecture.
"""
import json
import logging
import re
from typing import List, Optional, Sequence

from pydantic import BaseModel
from sqlalchemy.orm import Session

from .blocks import BaseBlock, Block
from .core.exceptions import StoryNotFound, StoryValidationError
from .core.normalizer import NormalizePolicy
from .database import (
    db_create_story, db_delete_story, db_get_story, db_list_stories,
    db_slug_taken, db_update_story,
)
from .models import StoryDB
from .renderer.presentation import MediaContent, MediaImage
from .serializer import from_json, to_json, to_plain_text

log = logging.getLogger(__name__)


class SavedStory(BaseModel):
    id: str
    slug: Optional[str] = None


class LoadedStory(BaseModel):
    id: str
    slug: Optional[str] = None
    title: str
    blocks: List[Block]
    media: MediaContent


class StorySummary(BaseModel):
    id: str
    slug: Optional[str] = None
    title: str


# ── Slugs ──────────────────────────────────────────────────────────────────────

def slugify(text: str) -> str:
    """Slug URL : "Mon Jeu : le Test !" → "mon-jeu-le-test"."""
    s = re.sub(r"[^\w\s-]", "", text.lower(), flags=re.ASCII).strip()
    s = re.sub(r"\s+", "-", s, flags=re.ASCII)
    return re.sub(r"-+", "-", s)


def unique_slug(db: Session, base: Optional[str], exclude_id: Optional[str] = None) -> Optional[str]:
    """base, base-2, base-3… premier slug libre (hors article `exclude_id`)."""
    if not base:
        return None
    candidate, suffix = base, 1
    while db_slug_taken(db, candidate, exclude_id):
        suffix += 1
        candidate = f"{base}-{suffix}"
    return candidate


# ── Média ──────────────────────────────────────────────────────────────────────

def _gallery_json(media: Optional[MediaContent]) -> Optional[str]:
    if media is None:
        return None
    images = [{"url": g.url.strip(), "caption": (g.caption or "").strip() or None}
              for g in media.gallery if g.url.strip()]
    return json.dumps(images, ensure_ascii=False) if images else None


def _media_from_row(row: StoryDB) -> MediaContent:
    try:
        raw = json.loads(row.gallery_images or "[]")
    except ValueError:
        log.warning("Story %s : gallery_images illisible", row.id)
        raw = []
    gallery = [MediaImage(url=g["url"], caption=g.get("caption"))
               for g in raw if isinstance(g, dict) and g.get("url")]
    return MediaContent(trailer_url=row.trailer_url, gallery=gallery)


# ── API ────────────────────────────────────────────────────────────────────────

def save_story(
    db: Session,
    title: str,
    blocks: Sequence[BaseBlock],
    media: Optional[MediaContent] = None,
    slug: Optional[str] = None,
    story_id: Optional[str] = None,
) -> SavedStory:
    """
    Crée ou met à jour un article.

    Args:
        title: titre (obligatoire)
        blocks: document canonique (ex : BlockStore.blocks)
        media: trailer + galerie
        slug: slug explicite, sinon dérivé du titre
        story_id: id existant → mise à jour

    Raises:
        StoryValidationError: titre vide
        StoryNotFound: story_id inconnu
    """
    clean_title = (title or "").strip()
    if not clean_title:
        raise StoryValidationError("Title is required.")

    base_slug = (slug or "").strip() or slugify(clean_title) or None
    fields = dict(
        title=clean_title,
        body=to_json(blocks),
        plain_text=to_plain_text(blocks),
        trailer_url=((media.trailer_url or "").strip() or None) if media else None,
        gallery_images=_gallery_json(media),
    )

    if story_id is not None:
        row = db_get_story(db, story_id)
        if row is None:
            raise StoryNotFound(f"Story {story_id} introuvable")
        fields["slug"] = unique_slug(db, base_slug, exclude_id=story_id)
        row = db_update_story(db, row, **fields)
        log.info("Story mise à jour : %s (%s)", row.id, row.slug)
    else:
        fields["slug"] = unique_slug(db, base_slug)
        row = db_create_story(db, StoryDB(**fields))
        log.info("Story créée : %s (%s)", row.id, row.slug)

    return SavedStory(id=row.id, slug=row.slug)


def load_story(db: Session, story_id: str, policy: Optional[NormalizePolicy] = None) -> LoadedStory:
    """Charge et normalise un article. Raises StoryNotFound."""
    row = db_get_story(db, story_id)
    if row is None:
        raise StoryNotFound(f"Story {story_id} introuvable")
    return LoadedStory(
        id=row.id,
        slug=row.slug,
        title=row.title,
        blocks=from_json(row.body, policy),
        media=_media_from_row(row),
    )


def delete_story(db: Session, story_id: str) -> None:
    row = db_get_story(db, story_id)
    if row is None:
        raise StoryNotFound(f"Story {story_id} introuvable")
    db_delete_story(db, row)


def list_stories(db: Session) -> List[StorySummary]:
    return [StorySummary(id=r.id, slug=r.slug, title=r.title) for r in db_list_stories(db)]
