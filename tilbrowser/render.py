"""Markdown to HTML conversion with Pygments code highlighting."""

from __future__ import annotations

import markdown
from markdown.extensions.codehilite import CodeHiliteExtension
from markdown.extensions.fenced_code import FencedCodeExtension
from markdown.extensions.tables import TableExtension
from pygments.formatters import HtmlFormatter
from pygments.styles import get_all_styles


HIGHLIGHT_CLASS = "highlight"
DARK_STYLE = "github-dark"
LIGHT_STYLE = "default"


def _extensions():
    return [
        FencedCodeExtension(),
        CodeHiliteExtension(css_class=HIGHLIGHT_CLASS, guess_lang=False),
        TableExtension(),
        "sane_lists",
    ]


def render_markdown(text: str) -> str:
    """Convert a note body to HTML. Fenced code blocks are highlighted."""
    md = markdown.Markdown(extensions=_extensions())
    return md.convert(text)


def _style(name: str, fallback: str) -> str:
    return name if name in set(get_all_styles()) else fallback


def highlight_css() -> str:
    """Pygments CSS for both themes.

    The page root carries a ``dark`` class in dark mode; light rules are
    scoped to its absence so the two palettes never mix.
    """
    light = HtmlFormatter(style=_style(LIGHT_STYLE, "default"))
    dark = HtmlFormatter(style=_style(DARK_STYLE, "monokai"))
    return "\n".join(
        [
            light.get_style_defs(f"html:not(.dark) .{HIGHLIGHT_CLASS}"),
            dark.get_style_defs(f"html.dark .{HIGHLIGHT_CLASS}"),
        ]
    )
