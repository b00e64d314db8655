"""Integration tests for the knowledge document web API."""

import pytest
from fastapi.testclient import TestClient

from knowledgedoc.config import ENV_DOCUMENT, ENV_SECTION_LEVEL
from knowledgedoc.core import DocumentStore
from knowledgedoc.markdown import load
from knowledgedoc.web import create_app, create_app_from_settings

SAMPLE = "## SOLID Principles\nFive principles.\n\n## curl\nHTTP client.\n"


@pytest.fixture
def doc(tmp_path):
    path = tmp_path / "knowledge.md"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


@pytest.fixture
def client(doc):
    """Client for an app that writes changes back to a temporary file."""
    app = create_app(load(doc), path=doc)
    return TestClient(app)


class TestReadEndpoints:
    """Tests for endpoints that only read."""

    def test_health(self, client):
        """Health reports the section count."""
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["total_sections"] == 2

    def test_list_sections(self, client):
        """Titles come back in order."""
        response = client.get("/api/sections")
        assert response.json() == {"titles": ["SOLID Principles", "curl"]}

    def test_get_section_with_space_in_title(self, client):
        """URL-encoded titles are decoded."""
        response = client.get("/api/sections/SOLID%20Principles")
        assert response.status_code == 200
        assert response.json() == {
            "title": "SOLID Principles",
            "body": "Five principles.\n",
            "position": 0,
        }

    def test_get_missing_section(self, client):
        """Unknown titles are 404."""
        response = client.get("/api/sections/vim")
        assert response.status_code == 404
        assert "vim" in response.json()["detail"]

    def test_search(self, client):
        """Search returns matching sections."""
        response = client.get("/api/search", params={"q": "principles"})
        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["title"] for r in results] == ["SOLID Principles"]

    def test_search_requires_query(self, client):
        """An empty query is a validation error."""
        assert client.get("/api/search").status_code == 422

    def test_document(self, client):
        """The whole document is returned as markdown."""
        response = client.get("/api/document")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/markdown")
        assert response.text == SAMPLE


class TestWriteEndpoints:
    """Tests for endpoints that change the document."""

    def test_add_section(self, client, doc):
        """New sections are appended and saved."""
        response = client.post("/api/sections", json={"title": "importlib", "body": "Imports.\n"})
        assert response.status_code == 201
        assert response.json()["position"] == 2
        assert list(load(doc).list_titles()) == ["SOLID Principles", "curl", "importlib"]

    def test_add_duplicate(self, client, doc):
        """Duplicate titles are 409 and nothing is saved."""
        response = client.post("/api/sections", json={"title": "curl", "body": "x"})
        assert response.status_code == 409
        assert doc.read_text(encoding="utf-8") == SAMPLE

    def test_add_invalid_title(self, client):
        """Titles that cannot be headings are 422."""
        response = client.post("/api/sections", json={"title": " padded", "body": ""})
        assert response.status_code == 422

    def test_add_unwritable_body(self, client, doc):
        """Bodies that would split the file are 422 and the store is unchanged."""
        response = client.post("/api/sections", json={"title": "bad", "body": "## nested"})
        assert response.status_code == 422
        assert client.get("/api/sections/bad").status_code == 404
        assert doc.read_text(encoding="utf-8") == SAMPLE

    def test_failed_write_leaves_store_unchanged(self, doc, monkeypatch):
        """If the file cannot be written the served store is not changed."""
        store = load(doc)

        def failing_dump(*args, **kwargs):
            raise OSError("No space left on device")

        monkeypatch.setattr("knowledgedoc.web.app.dump", failing_dump)
        client = TestClient(create_app(store, path=doc))
        with pytest.raises(OSError):
            client.post("/api/sections", json={"title": "importlib", "body": "x"})
        with pytest.raises(OSError):
            client.delete("/api/sections/curl")
        assert list(store.list_titles()) == ["SOLID Principles", "curl"]
        assert doc.read_text(encoding="utf-8") == SAMPLE

    def test_update_section(self, client, doc):
        """Updates keep the position and are saved."""
        response = client.put("/api/sections/curl", json={"body": "revised text"})
        assert response.status_code == 200
        assert response.json() == {"title": "curl", "body": "revised text", "position": 1}
        assert load(doc).get_section("curl").body == "revised text"

    def test_update_missing_section(self, client):
        """Updating an unknown title is 404."""
        assert client.put("/api/sections/vim", json={"body": "x"}).status_code == 404

    def test_remove_section(self, client, doc):
        """Removed sections disappear from the store and file."""
        response = client.delete("/api/sections/SOLID%20Principles")
        assert response.status_code == 200
        assert response.json()["position"] == 0
        assert client.get("/api/sections").json() == {"titles": ["curl"]}
        assert doc.read_text(encoding="utf-8") == "## curl\nHTTP client.\n"

    def test_remove_missing_section(self, client):
        """Removing an unknown title is 404."""
        assert client.delete("/api/sections/vim").status_code == 404


class TestInMemoryApp:
    """Tests for an app without a backing file."""

    def test_changes_stay_in_memory(self):
        """Without a path the store is edited but nothing is written."""
        store = DocumentStore()
        client = TestClient(create_app(store))
        assert client.post("/api/sections", json={"title": "A", "body": "a"}).status_code == 201
        assert store.get_section("A").body == "a"


class TestAppFactory:
    """Tests for create_app_from_settings()."""

    def test_loads_document_from_environment(self, doc, monkeypatch):
        """The factory serves the file named in the environment."""
        monkeypatch.setenv(ENV_DOCUMENT, str(doc))
        monkeypatch.delenv(ENV_SECTION_LEVEL, raising=False)
        client = TestClient(create_app_from_settings())
        assert client.get("/api/sections").json() == {"titles": ["SOLID Principles", "curl"]}

    def test_missing_document_starts_empty(self, tmp_path, monkeypatch):
        """A missing file gives an empty store that is created on first write."""
        path = tmp_path / "new.md"
        monkeypatch.setenv(ENV_DOCUMENT, str(path))
        monkeypatch.delenv(ENV_SECTION_LEVEL, raising=False)
        client = TestClient(create_app_from_settings())
        assert client.get("/api/health").json()["total_sections"] == 0
        client.post("/api/sections", json={"title": "A", "body": "a"})
        assert path.read_text(encoding="utf-8") == "## A\na"
