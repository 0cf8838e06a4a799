"""
Time-based in-memory cache of the TIL catalog.

The catalog is the full list of entries plus the sorted set of their
categories. It is rebuilt wholesale by calling the injected loader when
it is older than the TTL or when it holds no entries at all; an empty
scan (missing data directory, transient read failure) therefore keeps
triggering a reload until a scan finds notes again.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple

from ..config import CACHE_TTL_SECONDS
from .schemas import TilEntry


logger = logging.getLogger(__name__)

Loader = Callable[[], Sequence[TilEntry]]
Clock = Callable[[], float]


@dataclass(frozen=True)
class Catalog:
    entries: Tuple[TilEntry, ...] = ()
    categories: Tuple[str, ...] = ()
    last_refreshed: float = 0.0

    @classmethod
    def build(cls, entries: Sequence[TilEntry], now: float) -> "Catalog":
        categories = tuple(sorted({entry.category for entry in entries}))
        return cls(entries=tuple(entries), categories=categories, last_refreshed=now)


class CatalogCache:
    """Owns the process-wide ``Catalog`` and refreshes it when stale.

    Parameters
    ----------
    loader : Callable[[], Sequence[TilEntry]]
        Produces a fresh entry list, typically ``store.list_all``.
    ttl : float
        Maximum catalog age in seconds.
    clock : Callable[[], float]
        Monotonic time source in seconds; tests pass a fake one.
    """

    def __init__(
        self,
        loader: Loader,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Clock = time.monotonic,
    ) -> None:
        self._loader = loader
        self._ttl = ttl
        self._clock = clock
        self._catalog = Catalog()
        # Held across "check, maybe refresh, read"; endpoints run on a thread pool.
        self._lock = threading.Lock()

    def is_stale(self, now: float) -> bool:
        if not self._catalog.entries:
            return True
        return now - self._catalog.last_refreshed > self._ttl

    def get_catalog(self) -> Catalog:
        """Return the current catalog, reloading it first if it is stale."""
        with self._lock:
            if self.is_stale(self._clock()):
                self._refresh_locked()
            return self._catalog

    def refresh(self) -> Catalog:
        """Reload unconditionally and return the new catalog."""
        with self._lock:
            return self._refresh_locked()

    def peek(self) -> Catalog:
        """Return the catalog as it is, without triggering a reload."""
        return self._catalog

    def _refresh_locked(self) -> Catalog:
        entries = list(self._loader())
        self._catalog = Catalog.build(entries, self._clock())
        if entries:
            logger.info(
                "TIL catalog refreshed: %d entries in %d categories",
                len(entries),
                len(self._catalog.categories),
            )
        else:
            logger.warning("TIL catalog refresh found no entries")
        return self._catalog
