"""
Route definitions for the TIL JSON API.

Endpoints under /api/til:
- GET  /                : one random note from the whole catalog
- GET  /all             : every note, optionally filtered by categories
- GET  /random          : one random note, optionally filtered by categories
- GET  /{path}          : one note by its path (``.md`` optional)

``categories`` is a comma-separated list of category names
(``?categories=Go,Rust``). Errors are reported as ``{"error": message}``
by the ``HTTPException`` handler installed in ``tilbrowser.main``.
"""

from __future__ import annotations

import logging
import random
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import DATA_DIR
from .cache import CatalogCache
from .schemas import TilEntry, TilListing
from .selection import RandomSource, list_filtered, parse_categories, pick_random
from .store import ContentStore, ContentStoreError, FileContentStore


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/til", tags=["til"])

CATEGORIES_HELP = "Comma-separated category names, e.g. 'Go,Rust'"

# ---------------------------------------------------------------------------
# Dependencies
#
# The store, the catalog cache and the random source are created once per
# process. Tests swap them through ``app.dependency_overrides``.

_rng = random.Random()


@lru_cache(maxsize=1)
def get_store() -> ContentStore:
    return FileContentStore(DATA_DIR)


@lru_cache(maxsize=1)
def get_catalog_cache() -> CatalogCache:
    return CatalogCache(get_store().list_all)


def get_rng() -> RandomSource:
    return _rng


# ---------------------------------------------------------------------------
# Endpoints


@router.get("", response_model=TilEntry)
def random_til(
    cache: CatalogCache = Depends(get_catalog_cache),
    rng: RandomSource = Depends(get_rng),
) -> TilEntry:
    try:
        entry = pick_random(cache.get_catalog(), rng=rng)
    except Exception:
        logger.exception("Failed to pick a random TIL")
        raise HTTPException(status_code=500, detail="Failed to fetch TIL")
    if entry is None:
        raise HTTPException(status_code=404, detail="No TIL entries found")
    return entry


@router.get("/all", response_model=TilListing)
def list_tils(
    categories: Optional[str] = Query(default=None, description=CATEGORIES_HELP),
    cache: CatalogCache = Depends(get_catalog_cache),
) -> TilListing:
    """Return every note, or only those in the requested categories.

    The ``categories`` field of the response is always the catalog's
    full category list so the front-end can render the filter picker.
    """
    try:
        return list_filtered(cache.get_catalog(), parse_categories(categories))
    except Exception:
        logger.exception("Failed to list TIL entries")
        raise HTTPException(status_code=500, detail="Failed to fetch TIL data")


@router.get("/random", response_model=TilEntry)
def random_til_in_categories(
    categories: Optional[str] = Query(default=None, description=CATEGORIES_HELP),
    cache: CatalogCache = Depends(get_catalog_cache),
    rng: RandomSource = Depends(get_rng),
) -> TilEntry:
    selected = parse_categories(categories)
    try:
        entry = pick_random(cache.get_catalog(), selected, rng=rng)
    except Exception:
        logger.exception("Failed to pick a random TIL for %s", selected)
        raise HTTPException(status_code=500, detail="Failed to fetch random TIL")
    if entry is None:
        detail = (
            "No TIL entries found for selected categories"
            if selected
            else "No TIL entries found"
        )
        raise HTTPException(status_code=404, detail=detail)
    return entry


@router.get("/{til_path:path}", response_model=TilEntry)
def get_til(til_path: str, store: ContentStore = Depends(get_store)) -> TilEntry:
    """Return one note by path, read straight from the store."""
    try:
        entry = store.get_by_path(til_path)
    except ContentStoreError:
        logger.exception("Failed to fetch TIL %s", til_path)
        raise HTTPException(status_code=500, detail="Failed to fetch TIL")
    if entry is None:
        raise HTTPException(status_code=404, detail="TIL not found")
    return entry
