"""
Tests persistance — save/load SQLite en mémoire, slugs, validation.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from story_blocks.blocks import HeadingBlock, MediaBlock, ParagraphBlock
from story_blocks.core.exceptions import StoryNotFound, StoryValidationError
from story_blocks.core.normalizer import normalize
from story_blocks.core.store import BlockStore
from story_blocks.database import db_create_story, db_get_story, init_db
from story_blocks.models import StoryDB
from story_blocks.persistence import (
    delete_story, list_stories, load_story, save_story, slugify, unique_slug,
)
from story_blocks.renderer import MediaContent, MediaImage


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def db():
    """Session sur une base SQLite en mémoire."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()


def _doc():
    return normalize([HeadingBlock(text="Verdict"), ParagraphBlock(text="<b>Great</b> game")])


# ── Slugs ─────────────────────────────────────────────────────────────────

class TestSlugs:
    def test_slugify(self):
        assert slugify("Mon Jeu : le Test !") == "mon-jeu-le-test"
        assert slugify("  Elden   Ring -- DLC ") == "elden-ring-dlc"
        assert slugify("Été Pokémon") == "t-pokmon"

    def test_unique_slug_suffixes(self, db):
        assert save_story(db, "Zelda", _doc()).slug == "zelda"
        assert save_story(db, "Zelda", _doc()).slug == "zelda-2"
        assert save_story(db, "Zelda", _doc()).slug == "zelda-3"

    def test_unique_slug_none(self, db):
        assert unique_slug(db, None) is None
        assert unique_slug(db, "") is None

    def test_explicit_slug(self, db):
        assert save_story(db, "Zelda", _doc(), slug="custom").slug == "custom"

    def test_update_keeps_own_slug(self, db):
        saved = save_story(db, "Zelda", _doc())
        again = save_story(db, "Zelda", _doc(), story_id=saved.id)
        assert again.id == saved.id
        assert again.slug == "zelda"


# ── Save / load ───────────────────────────────────────────────────────────

class TestSaveLoad:
    def test_blank_title_rejected(self, db):
        with pytest.raises(StoryValidationError, match="Title is required"):
            save_story(db, "   ", _doc())

    def test_round_trip(self, db):
        doc = _doc()
        media = MediaContent(trailer_url=" https://youtu.be/t ",
                             gallery=[MediaImage(url="/g.jpg", caption=" shot "), MediaImage(url=" ")])
        saved = save_story(db, "  Game  ", doc, media=media)
        story = load_story(db, saved.id)
        assert story.title == "Game"
        assert story.blocks == doc
        assert story.media.trailer_url == "https://youtu.be/t"
        assert [(g.url, g.caption) for g in story.media.gallery] == [("/g.jpg", "shot")]

    def test_plain_text_stored(self, db):
        saved = save_story(db, "Game", _doc())
        assert db_get_story(db, saved.id).plain_text == "Verdict\n\nGreat game"

    def test_update_replaces_body(self, db):
        saved = save_story(db, "Game", _doc())
        store = BlockStore(load_story(db, saved.id).blocks)
        store.remove_block(store.blocks[0].id)
        save_story(db, "Game", store.blocks, story_id=saved.id)
        assert [b.type for b in load_story(db, saved.id).blocks] == ["paragraph", "media"]

    def test_update_unknown_id(self, db):
        with pytest.raises(StoryNotFound):
            save_story(db, "Game", _doc(), story_id="missing")

    def test_load_unknown_id(self, db):
        with pytest.raises(StoryNotFound):
            load_story(db, "missing")

    def test_corrupted_body_self_heals(self, db):
        row = db_create_story(db, StoryDB(title="Old", body='[{"type": "media"}, {"type": "media"}]',
                                          gallery_images="not json"))
        story = load_story(db, row.id)
        assert [b.type for b in story.blocks] == ["paragraph", "media"]
        assert story.media.gallery == []

    def test_legacy_text_body(self, db):
        row = db_create_story(db, StoryDB(title="Old", body="first\nsecond"))
        blocks = load_story(db, row.id).blocks
        assert blocks[0].text == "first<br />second"
        assert isinstance(blocks[-1], MediaBlock)


class TestListDelete:
    def test_list_and_delete(self, db):
        a = save_story(db, "A", _doc())
        save_story(db, "B", _doc())
        assert {s.title for s in list_stories(db)} == {"A", "B"}
        delete_story(db, a.id)
        assert [s.title for s in list_stories(db)] == ["B"]
        with pytest.raises(StoryNotFound):
            delete_story(db, a.id)
