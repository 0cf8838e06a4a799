"""
HTML pages for reading notes in a browser.

``/`` picks a random note and redirects to its own URL so every note is
bookmarkable; ``/<category>/<slug>`` renders one note. The theme toggle
is handled client side: the choice is kept in ``localStorage`` and
defaults to the system colour scheme. ``?categories=`` is carried over
to the "Random TIL" button so that filtered browsing sticks.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from jinja2 import Environment, PackageLoader, select_autoescape

from .catalog.cache import CatalogCache
from .catalog.loader import NOTE_SUFFIX
from .catalog.router import get_catalog_cache, get_rng, get_store
from .catalog.schemas import TilEntry
from .catalog.selection import RandomSource, parse_categories, pick_random
from .catalog.store import ContentStore, ContentStoreError
from .config import SOURCE_URL
from .render import highlight_css, render_markdown


logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

templates = Environment(
    loader=PackageLoader("tilbrowser", "templates"),
    autoescape=select_autoescape(["html"]),
)


def random_url(categories: Optional[List[str]] = None) -> str:
    if not categories:
        return "/"
    return "/?" + urlencode({"categories": ",".join(categories)})


def note_url(entry: TilEntry) -> str:
    path = entry.path
    if path.endswith(NOTE_SUFFIX):
        path = path[: -len(NOTE_SUFFIX)]
    return "/" + quote(path)


def _page_context(categories: Optional[List[str]]) -> Dict[str, Any]:
    return {
        "highlight_css": highlight_css(),
        "random_url": random_url(categories),
        "source_url": None,
    }


def render_entry(entry: TilEntry, categories: Optional[List[str]] = None) -> str:
    context = _page_context(categories)
    context.update(
        title=entry.title,
        entry=entry,
        content_html=render_markdown(entry.content),
        source_url=f"{SOURCE_URL}/{quote(entry.path)}",
    )
    return templates.get_template("note.html").render(**context)


def render_message(message: str, categories: Optional[List[str]] = None) -> str:
    context = _page_context(categories)
    context.update(title=message, message=message)
    return templates.get_template("message.html").render(**context)


@router.get("/", response_class=HTMLResponse)
def random_page(
    categories: Optional[str] = Query(default=None),
    cache: CatalogCache = Depends(get_catalog_cache),
    rng: RandomSource = Depends(get_rng),
) -> Response:
    """Redirect to a random note, keeping the category filter in the URL."""
    selected = parse_categories(categories)
    entry = pick_random(cache.get_catalog(), selected, rng=rng)
    if entry is None:
        return HTMLResponse(render_message("No TIL entries found", selected), status_code=404)
    target = note_url(entry)
    if selected:
        target += "?" + urlencode({"categories": ",".join(selected)})
    return RedirectResponse(url=target, status_code=307)


@router.get("/{note_path:path}", response_class=HTMLResponse)
def note_page(
    note_path: str,
    categories: Optional[str] = Query(default=None),
    store: ContentStore = Depends(get_store),
) -> HTMLResponse:
    selected = parse_categories(categories)
    try:
        entry = store.get_by_path(note_path)
    except ContentStoreError:
        logger.exception("Failed to render TIL %s", note_path)
        return HTMLResponse(render_message("Failed to load TIL", selected), status_code=500)
    if entry is None:
        return HTMLResponse(render_message("TIL not found", selected), status_code=404)
    return HTMLResponse(render_entry(entry, selected))
