"""Random pick and category filtering over a ``Catalog``."""

from __future__ import annotations

import random
from typing import Iterable, List, Optional

from typing_extensions import Protocol

from .cache import Catalog
from .schemas import TilEntry, TilListing


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        ...


def parse_categories(raw: Optional[str]) -> Optional[List[str]]:
    """Parse a ``categories`` query value such as ``"Go, Rust"``.

    Returns ``None`` (no filter) when the value is missing or holds
    nothing but commas and whitespace.
    """
    if not raw:
        return None
    categories = [c.strip() for c in raw.split(",")]
    categories = [c for c in categories if c]
    return categories or None


def filter_entries(
    entries: Iterable[TilEntry], categories: Optional[Iterable[str]] = None
) -> List[TilEntry]:
    wanted = set(categories or ())
    if not wanted:
        return list(entries)
    return [entry for entry in entries if entry.category in wanted]


def pick_random(
    catalog: Catalog,
    categories: Optional[Iterable[str]] = None,
    rng: Optional[RandomSource] = None,
) -> Optional[TilEntry]:
    """Pick one entry uniformly at random, optionally within ``categories``.

    Returns ``None`` when the catalog is empty or the filter excludes
    every entry.
    """
    candidates = filter_entries(catalog.entries, categories)
    if not candidates:
        return None
    source = rng if rng is not None else random
    return candidates[source.randrange(len(candidates))]


def list_filtered(
    catalog: Catalog, categories: Optional[Iterable[str]] = None
) -> TilListing:
    entries = filter_entries(catalog.entries, categories)
    return TilListing(
        entries=entries,
        categories=list(catalog.categories),
        total=len(entries),
    )
