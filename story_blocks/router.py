"""
Router FastAPI — endpoints story_blocks.

GET    /story-blocks/catalog          → variants disponibles + JSON schemas
POST   /story-blocks/normalize        → records → document canonique (records)
POST   /story-blocks/plain-text       → records → {"text": ...}
POST   /story-blocks/render           → records + média → HTMLResponse
POST   /story-blocks/stories          → sauvegarde → {"id", "slug"}
GET    /story-blocks/stories/{id}     → article normalisé
DELETE /story-blocks/stories/{id}
"""
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from .blocks import BLOCK_REGISTRY
from .core.exceptions import StoryNotFound, StoryValidationError
from .database import get_db
from .persistence import delete_story, load_story, save_story
from .renderer.html import Surface, render_document
from .renderer.presentation import MediaContent
from .serializer import from_storage_form, to_plain_text, to_storage_form

log = logging.getLogger(__name__)
router = APIRouter(prefix="/story-blocks", tags=["story_blocks"])


# ── Schémas ────────────────────────────────────────────────────────────────────

class BlocksRequest(BaseModel):
    blocks: List[Any] = Field(default_factory=list)


class RenderRequest(BlocksRequest):
    media: Optional[MediaContent] = None
    surface: Surface = "article"


class SaveRequest(BlocksRequest):
    title: str = ""
    slug: Optional[str] = None
    id: Optional[str] = None
    media: Optional[MediaContent] = None


# ── Endpoints moteur ───────────────────────────────────────────────────────────

@router.get("/catalog", summary="Liste les variants de blocs et leurs schemas")
def catalog() -> JSONResponse:
    return JSONResponse({"blocks": [
        {"type": name, "schema": cls.model_json_schema(by_alias=True)}
        for name, cls in BLOCK_REGISTRY.items()
    ]})


@router.post("/normalize", summary="Répare un document")
def normalize_blocks(req: BlocksRequest) -> dict:
    return {"blocks": to_storage_form(from_storage_form(req.blocks))}


@router.post("/plain-text", summary="Projection texte brut")
def plain_text(req: BlocksRequest) -> dict:
    return {"text": to_plain_text(from_storage_form(req.blocks))}


@router.post("/render", response_class=HTMLResponse, summary="Rend un document en HTML")
def render(req: RenderRequest) -> HTMLResponse:
    blocks = from_storage_form(req.blocks)
    return HTMLResponse(content=render_document(blocks, req.media, req.surface))


# ── Endpoints persistance ──────────────────────────────────────────────────────

@router.post("/stories", summary="Crée ou met à jour un article")
def save(req: SaveRequest, db: Session = Depends(get_db)) -> dict:
    blocks = from_storage_form(req.blocks)
    try:
        saved = save_story(db, req.title, blocks, media=req.media, slug=req.slug, story_id=req.id)
    except StoryValidationError as e:
        raise HTTPException(422, str(e))
    except StoryNotFound as e:
        raise HTTPException(404, str(e))
    return saved.model_dump()


@router.get("/stories/{story_id}", summary="Charge un article (normalisé)")
def load(story_id: str, db: Session = Depends(get_db)) -> dict:
    try:
        story = load_story(db, story_id)
    except StoryNotFound as e:
        raise HTTPException(404, str(e))
    return {
        "id": story.id,
        "slug": story.slug,
        "title": story.title,
        "blocks": to_storage_form(story.blocks),
        "media": story.media.model_dump(),
    }


@router.delete("/stories/{story_id}", summary="Supprime un article")
def delete(story_id: str, db: Session = Depends(get_db)) -> dict:
    try:
        delete_story(db, story_id)
    except StoryNotFound as e:
        raise HTTPException(404, str(e))
    log.info("Story supprimée : %s", story_id)
    return {"deleted": True}
