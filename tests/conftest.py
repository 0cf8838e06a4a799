# tests/conftest.py
# Shared fixtures: a small note tree on disk, a fake clock and an API client.

import random

import pytest
from fastapi.testclient import TestClient

from tilbrowser.catalog.cache import CatalogCache
from tilbrowser.catalog.router import get_catalog_cache, get_rng, get_store
from tilbrowser.catalog.store import FileContentStore
from tilbrowser.main import app


NOTES = {
    "rust/my-cool-fact.md": "Borrowing is not moving.\n",
    "rust/lifetimes.md": (
        "---\n"
        "title: Lifetime elision\n"
        "---\n"
        "# Elided lifetimes\n"
        "\n"
        "The compiler fills them in.\n"
    ),
    "go/defer-order.md": (
        "# Defer runs LIFO\n"
        "\n"
        "```go\n"
        "defer fmt.Println(1)\n"
        "defer fmt.Println(2)\n"
        "```\n"
    ),
    "go/README.md": "# Go notes\n",
    "python/walrus.md": "# Assignment expressions\n\n`if (n := len(a)) > 10:`\n",
    "rust/notes.txt": "not a note\n",
    ".git/config.md": "hidden\n",
    "README.md": "# Today I Learned\n",
    "top-level.md": "# Top level\n\nA note at the root.\n",
}

ALL_PATHS = {
    "go/defer-order.md",
    "python/walrus.md",
    "rust/lifetimes.md",
    "rust/my-cool-fact.md",
}


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def write_tree(root, files):
    for rel, text in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def til_root(tmp_path):
    return write_tree(tmp_path / "til", NOTES)


@pytest.fixture
def store(til_root):
    return FileContentStore(til_root)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(store, clock):
    return CatalogCache(store.list_all, ttl=3600, clock=clock)


@pytest.fixture
def client(store, cache):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_catalog_cache] = lambda: cache
    app.dependency_overrides[get_rng] = lambda: random.Random(1234)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
