"""
Filesystem loader for the TIL catalog.

Notes live one directory deep under the content root::

    data/til/
        rust/
            my-cool-fact.md
        go/
            another-fact.md

Each file may start with a YAML front-matter block delimited by ``---``
lines. ``load_entries()`` walks the tree and returns one ``TilEntry``
per qualifying file. The directory name becomes the category and the
file name becomes the title unless the front-matter supplies one.

The loader never raises for an unreadable root: it logs the problem and
returns an empty list so that the catalog cache simply tries again on
the next request. A single unreadable or malformed note is logged and
skipped; the rest of the scan goes on.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

import frontmatter
import yaml

from .schemas import TilEntry


logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"

YAML_HANDLER = frontmatter.YAMLHandler()


def split_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split raw note text into ``(metadata, body)``.

    Text without a front-matter block yields an empty mapping and the
    text unchanged. The body keeps its whitespace, apart from the line
    break that closes the block. Malformed YAML propagates as
    ``yaml.YAMLError``.
    """
    if not YAML_HANDLER.detect(text):
        return {}, text
    try:
        raw, body = YAML_HANDLER.split(text)
    except ValueError:
        # An opening "---" with no closing one is a horizontal rule.
        return {}, text
    metadata = YAML_HANDLER.load(raw)
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]
    return (dict(metadata) if isinstance(metadata, dict) else {}), body


def front_matter_title(metadata: Dict[str, Any]) -> str:
    value = metadata.get("title")
    if value is None:
        return ""
    return str(value).strip()


def capitalize_first(value: str) -> str:
    # Only the first character changes: "my API" -> "My API".
    return value[:1].upper() + value[1:]


def title_from_filename(filename: str) -> str:
    """Derive a display title from a note's file name.

    >>> title_from_filename("my-cool-fact.md")
    'My cool fact'
    """
    stem = filename[: -len(NOTE_SUFFIX)] if filename.endswith(NOTE_SUFFIX) else filename
    return capitalize_first(stem.replace("-", " "))


def category_from_dirname(dirname: str) -> str:
    return capitalize_first(dirname)


def is_note_file(filename: str) -> bool:
    """Return True for ``*.md`` files other than ``README.md`` (any case)."""
    if not filename.endswith(NOTE_SUFFIX):
        return False
    return filename[: -len(NOTE_SUFFIX)].lower() != "readme"


def build_entry(dirname: str, filename: str, text: str) -> TilEntry:
    """Turn the raw text of ``<dirname>/<filename>`` into a ``TilEntry``."""
    metadata, body = split_front_matter(text)
    title = front_matter_title(metadata) or title_from_filename(filename)
    return TilEntry(
        title=title,
        category=category_from_dirname(dirname),
        content=body,
        path=f"{dirname}/{filename}",
    )


def _category_dirs(root: Path) -> List[Path]:
    return [
        child
        for child in sorted(root.iterdir())
        if not child.name.startswith(".") and child.is_dir()
    ]


def load_entries(root: Path) -> List[TilEntry]:
    """Scan ``root`` and return every note found, in traversal order.

    Parameters
    ----------
    root : Path
        The content root (``data/til``).

    Returns
    -------
    List[TilEntry]
        One entry per qualifying file. Empty when ``root`` is missing
        or cannot be listed.
    """
    root = Path(root)
    entries: List[TilEntry] = []
    try:
        dirs = _category_dirs(root)
    except OSError as exc:
        logger.error("Error reading TIL data from %s: %s", root, exc)
        return entries

    for category_dir in dirs:
        try:
            files = sorted(
                p for p in category_dir.iterdir() if is_note_file(p.name) and p.is_file()
            )
        except OSError as exc:
            logger.warning("Skipping unreadable category %s: %s", category_dir, exc)
            continue
        for note_file in files:
            try:
                text = note_file.read_text(encoding="utf-8")
                entries.append(build_entry(category_dir.name, note_file.name, text))
            except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
                logger.warning("Skipping unreadable note %s: %s", note_file, exc)

    logger.debug("Loaded %d TIL entries from %s", len(entries), root)
    return entries
