"""
Content stores for the TIL catalog.

A ``ContentStore`` exposes the two read operations the service needs:
``list_all()`` for a full scan (fed into the catalog cache) and
``get_by_path()`` for a direct lookup of one note. ``FileContentStore``
reads the ``data/til`` tree on disk; ``InMemoryContentStore`` serves the
same shapes from a ``{relative path: raw text}`` mapping, which keeps
fixtures and tests off the filesystem.

Lookups always go to the source (they never consult the cache) so a
note edited on disk is visible immediately at its own URL.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml
from typing_extensions import Protocol

from .loader import (
    NOTE_SUFFIX,
    build_entry,
    capitalize_first,
    front_matter_title,
    is_note_file,
    load_entries,
    split_front_matter,
)
from .schemas import TilEntry


logger = logging.getLogger(__name__)

ROOT_CATEGORY = "General"


class ContentStoreError(RuntimeError):
    """Raised when a note exists but cannot be read or parsed."""


class ContentStore(Protocol):
    def list_all(self) -> List[TilEntry]:
        ...

    def get_by_path(self, path: str) -> Optional[TilEntry]:
        ...


def normalize_note_path(path: str) -> str:
    """Return ``path`` relative to the content root with a ``.md`` suffix.

    >>> normalize_note_path("/rust/my-cool-fact")
    'rust/my-cool-fact.md'
    """
    cleaned = path.strip().strip("/")
    if not cleaned.endswith(NOTE_SUFFIX):
        cleaned = f"{cleaned}{NOTE_SUFFIX}"
    return cleaned


def _heading_title(body: str) -> str:
    for line in body.split("\n"):
        if line.startswith("# "):
            return line[2:].strip()
    return ""


def _lookup_category(path: str) -> str:
    parent = posixpath.dirname(path)
    return capitalize_first(parent) if parent else ROOT_CATEGORY


def build_lookup_entry(path: str, text: str) -> TilEntry:
    """Build the entry returned by a direct lookup of ``path``.

    Unlike a catalog scan, the title falls back to the first H1 heading
    of the body and then to an empty string; the file name is not used.
    """
    metadata, body = split_front_matter(text)
    title = front_matter_title(metadata) or _heading_title(body)
    return TilEntry(
        title=title,
        category=_lookup_category(path),
        content=body,
        path=path,
    )


class FileContentStore:
    """Notes read from a directory tree on disk."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def list_all(self) -> List[TilEntry]:
        return load_entries(self.root)

    def _resolve(self, relative: str) -> Optional[Path]:
        try:
            root = self.root.resolve()
            candidate = (root / relative).resolve()
        except (OSError, ValueError):
            # e.g. an embedded NUL byte; no such note can exist.
            return None
        # Reject "../" tricks and absolute paths escaping the content root.
        if root not in candidate.parents:
            return None
        return candidate

    def get_by_path(self, path: str) -> Optional[TilEntry]:
        """Return the note stored at ``path`` or ``None`` when it does not exist.

        Raises
        ------
        ContentStoreError
            If the file exists but cannot be read or its front-matter
            cannot be parsed.
        """
        relative = normalize_note_path(path)
        full_path = self._resolve(relative)
        if full_path is None or not full_path.is_file():
            return None
        try:
            text = full_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.error("Error reading TIL %s: %s", full_path, exc)
            raise ContentStoreError(f"Cannot read {relative}") from exc
        try:
            return build_lookup_entry(relative, text)
        except (ValueError, TypeError, yaml.YAMLError) as exc:
            logger.error("Error parsing TIL %s: %s", full_path, exc)
            raise ContentStoreError(f"Cannot parse {relative}") from exc


class InMemoryContentStore:
    """Notes held in a ``{relative path: raw text}`` mapping.

    Paths follow the on-disk layout (``"rust/my-cool-fact.md"``). Only
    paths one directory deep are part of ``list_all()``, mirroring the
    filesystem scan, while ``get_by_path()`` can reach any key.
    """

    def __init__(self, files: Optional[Mapping[str, str]] = None) -> None:
        self.files: Dict[str, str] = dict(files or {})

    def list_all(self) -> List[TilEntry]:
        entries: List[TilEntry] = []
        for path in sorted(self.files):
            dirname, _, filename = path.partition("/")
            if not filename or "/" in filename or dirname.startswith("."):
                continue
            if not is_note_file(filename):
                continue
            try:
                entries.append(build_entry(dirname, filename, self.files[path]))
            except (ValueError, TypeError, yaml.YAMLError) as exc:
                logger.warning("Skipping unreadable note %s: %s", path, exc)
        return entries

    def get_by_path(self, path: str) -> Optional[TilEntry]:
        relative = normalize_note_path(path)
        text = self.files.get(relative)
        if text is None:
            return None
        try:
            return build_lookup_entry(relative, text)
        except (ValueError, TypeError, yaml.YAMLError) as exc:
            raise ContentStoreError(f"Cannot parse {relative}") from exc
