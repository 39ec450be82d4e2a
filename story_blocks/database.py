"""SQLite — init + session + CRUD helpers"""
import logging
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from . import config
from .models import Base, StoryDB

log = logging.getLogger(__name__)

ENGINE       = create_engine(f"sqlite:///{config.DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db(engine=None):
    """Crée les tables (et le dossier data/ pour la base par défaut)."""
    if engine is None:
        Path(config.DB_PATH).parent.mkdir(parents=True, exist_ok=True)
        engine = ENGINE
    Base.metadata.create_all(bind=engine)
    log.info("DB initialisée (%s)", engine.url)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── Stories ──
def db_create_story(db: Session, obj: StoryDB) -> StoryDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_story(db: Session, sid: str) -> Optional[StoryDB]:
    return db.query(StoryDB).filter_by(id=sid).first()

def db_list_stories(db: Session) -> List[StoryDB]:
    return db.query(StoryDB).order_by(StoryDB.created_at.desc()).all()

def db_update_story(db: Session, story: StoryDB, **kwargs) -> StoryDB:
    for k, v in kwargs.items():
        setattr(story, k, v)
    db.commit(); db.refresh(story); return story

def db_delete_story(db: Session, story: StoryDB):
    db.delete(story); db.commit()

def db_slug_taken(db: Session, slug: str, exclude_id: Optional[str] = None) -> bool:
    q = db.query(StoryDB.id).filter(StoryDB.slug == slug)
    if exclude_id is not None:
        q = q.filter(StoryDB.id != exclude_id)
    return q.first() is not None
