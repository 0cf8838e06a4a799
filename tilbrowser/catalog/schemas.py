"""
Pydantic schema definitions for the TIL catalog.

The ``TilEntry`` model is the single note shape served by every JSON
endpoint and rendered by the HTML pages. The ``TilListing`` model
bundles a (possibly filtered) list of entries with the full category
list so that clients can build a category picker from one response.
"""

from typing import List

from pydantic import BaseModel, Field


class TilEntry(BaseModel):
    """A single TIL note.

    ``path`` is the note's identifier: the path relative to the content
    root, always ending in ``.md`` (e.g. ``"rust/my-cool-fact.md"``).
    ``category`` is derived from the directory part of ``path`` and
    ``content`` is the markdown body with any front-matter removed.
    ``title`` may be empty when a looked-up note has neither a
    front-matter title nor an H1 heading.
    """

    title: str
    category: str
    content: str
    path: str


class TilListing(BaseModel):
    """Response of ``/api/til/all``.

    ``categories`` is always the full, sorted category list of the
    catalog, even when ``entries`` has been filtered.
    """

    entries: List[TilEntry] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    total: int = 0
