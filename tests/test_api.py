# tests/test_api.py
# JSON API behaviour through FastAPI's TestClient.

from fastapi.testclient import TestClient

from tilbrowser.catalog.cache import CatalogCache
from tilbrowser.catalog.router import get_catalog_cache, get_store
from tilbrowser.main import app

from conftest import ALL_PATHS


def _use_cache(loader):
    cache = CatalogCache(loader, ttl=3600)
    app.dependency_overrides[get_catalog_cache] = lambda: cache
    return cache


def _failing_loader():
    raise RuntimeError("disk on fire")


def test_random_til(client):
    r = client.get("/api/til")
    assert r.status_code == 200
    body = r.json()
    assert set(body) == {"title", "category", "content", "path"}
    assert body["path"] in ALL_PATHS


def test_random_til_empty_catalog(client):
    _use_cache(lambda: [])
    r = client.get("/api/til")
    assert r.status_code == 404
    assert r.json() == {"error": "No TIL entries found"}


def test_all(client):
    r = client.get("/api/til/all")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 4
    assert {e["path"] for e in body["entries"]} == ALL_PATHS
    assert body["categories"] == ["Go", "Python", "Rust"]


def test_all_filtered_keeps_full_category_list(client):
    body = client.get("/api/til/all", params={"categories": "Go,Rust"}).json()
    assert body["total"] == 3
    assert {e["category"] for e in body["entries"]} == {"Go", "Rust"}
    assert body["categories"] == ["Go", "Python", "Rust"]


def test_all_empty_catalog(client):
    _use_cache(lambda: [])
    body = client.get("/api/til/all").json()
    assert body == {"entries": [], "categories": [], "total": 0}


def test_all_internal_error(client):
    _use_cache(_failing_loader)
    r = client.get("/api/til/all")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch TIL data"}


def test_random_with_categories(client):
    for _ in range(10):
        r = client.get("/api/til/random", params={"categories": "Go"})
        assert r.status_code == 200
        assert r.json()["path"] == "go/defer-order.md"


def test_random_without_categories(client):
    r = client.get("/api/til/random")
    assert r.status_code == 200
    assert r.json()["path"] in ALL_PATHS


def test_random_no_match(client):
    r = client.get("/api/til/random", params={"categories": "Haskell,Elm"})
    assert r.status_code == 404
    assert r.json() == {"error": "No TIL entries found for selected categories"}


def test_random_internal_error(client):
    _use_cache(_failing_loader)
    r = client.get("/api/til/random")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch random TIL"}


def test_get_by_path(client):
    r = client.get("/api/til/rust/my-cool-fact")
    assert r.status_code == 200
    assert r.json() == {
        "title": "",
        "category": "Rust",
        "content": "Borrowing is not moving.\n",
        "path": "rust/my-cool-fact.md",
    }


def test_get_by_path_with_suffix(client):
    r = client.get("/api/til/go/defer-order.md")
    assert r.status_code == 200
    assert r.json()["title"] == "Defer runs LIFO"


def test_get_by_path_not_found(client):
    r = client.get("/api/til/rust/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "TIL not found"}


def test_get_by_path_parse_failure(client, til_root):
    (til_root / "rust" / "broken.md").write_text("---\ntitle: [oops\n---\nx\n", encoding="utf-8")
    r = client.get("/api/til/rust/broken")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch TIL"}


def test_healthz(client):
    client.get("/api/til")
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "entries": 4}


def test_get_by_path_with_nul_byte(client):
    r = client.get("/api/til/rust/foo%00bar")
    assert r.status_code == 404
    assert r.json() == {"error": "TIL not found"}


class ExplodingStore:
    def list_all(self):
        return []

    def get_by_path(self, path):
        raise RuntimeError("unexpected")


def test_unexpected_error_is_json(client):
    app.dependency_overrides[get_store] = lambda: ExplodingStore()
    with TestClient(app, raise_server_exceptions=False) as quiet_client:
        r = quiet_client.get("/api/til/rust/my-cool-fact")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
