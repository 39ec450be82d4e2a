"""
Tests router — POST /story-blocks/* (TestClient, SQLite en mémoire).
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from story_blocks.database import get_db, init_db
from story_blocks.router import router


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def client():
    """App minimale + DB SQLite en mémoire."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    TestSession = sessionmaker(bind=engine)

    def _get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c


# ── Moteur ────────────────────────────────────────────────────────────────

class TestEngineEndpoints:
    def test_catalog(self, client):
        r = client.get("/story-blocks/catalog")
        assert r.status_code == 200
        types = [b["type"] for b in r.json()["blocks"]]
        assert "card" in types and "media" in types
        card = next(b for b in r.json()["blocks"] if b["type"] == "card")
        assert "cardWidth" in card["schema"]["properties"]

    def test_normalize_empty(self, client):
        r = client.post("/story-blocks/normalize", json={"blocks": []})
        assert r.status_code == 200
        assert [b["type"] for b in r.json()["blocks"]] == ["paragraph", "media"]

    def test_normalize_repairs(self, client):
        r = client.post("/story-blocks/normalize", json={"blocks": [
            {"type": "media", "id": "m"}, {"type": "paragraph", "id": "p", "text": "x"},
        ]})
        assert [b["id"] for b in r.json()["blocks"]] == ["p", "m"]

    def test_plain_text(self, client):
        r = client.post("/story-blocks/plain-text", json={"blocks": [
            {"type": "heading", "level": 2, "text": "Title"},
            {"type": "paragraph", "text": "<b>Hi</b> there"},
            {"type": "divider"},
        ]})
        assert r.json() == {"text": "Title\n\nHi there"}

    def test_render(self, client):
        r = client.post("/story-blocks/render", json={
            "blocks": [{"type": "paragraph", "text": "Hello"}, {"type": "media"}],
            "media": {"trailer_url": "https://youtu.be/abc"},
            "surface": "preview",
        })
        assert r.status_code == 200
        assert "text/html" in r.headers["content-type"]
        assert "story--preview" in r.text
        assert "https://www.youtube.com/embed/abc" in r.text


# ── Persistance ───────────────────────────────────────────────────────────

class TestStoryEndpoints:
    def test_save_requires_title(self, client):
        r = client.post("/story-blocks/stories", json={"title": " ", "blocks": []})
        assert r.status_code == 422

    def test_save_and_load(self, client):
        r = client.post("/story-blocks/stories", json={
            "title": "Hollow Knight",
            "blocks": [{"type": "paragraph", "text": "Great"}],
            "media": {"gallery": [{"url": "/a.jpg"}]},
        })
        assert r.status_code == 200
        saved = r.json()
        assert saved["slug"] == "hollow-knight"

        r = client.get(f"/story-blocks/stories/{saved['id']}")
        assert r.status_code == 200
        body = r.json()
        assert body["title"] == "Hollow Knight"
        assert [b["type"] for b in body["blocks"]] == ["paragraph", "media"]
        assert body["media"]["gallery"][0]["url"] == "/a.jpg"

    def test_update_unknown_story(self, client):
        r = client.post("/story-blocks/stories", json={"title": "X", "id": "missing"})
        assert r.status_code == 404

    def test_load_unknown_story(self, client):
        assert client.get("/story-blocks/stories/missing").status_code == 404

    def test_delete(self, client):
        sid = client.post("/story-blocks/stories", json={"title": "X"}).json()["id"]
        assert client.delete(f"/story-blocks/stories/{sid}").json() == {"deleted": True}
        assert client.delete(f"/story-blocks/stories/{sid}").status_code == 404
