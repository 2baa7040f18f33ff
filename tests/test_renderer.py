"""Unit tests for markdown rendering of material notes and docs."""

from __future__ import annotations

from bs4 import BeautifulSoup
from markupsafe import Markup

from toolkit_pages.assembly.renderer import NotesRenderer


def test_missing_notes_render_empty() -> None:
    """Absent or blank notes become an empty safe string."""
    renderer = NotesRenderer()
    assert renderer.markdown(None) == ""
    assert renderer.markdown("   \n") == ""
    assert isinstance(renderer.markdown(None), Markup)


def test_fenced_block_renders_codehilite() -> None:
    """Fenced code is highlighted inside a ``codehilite`` block."""
    source = "Usage:\n\n```html\n<button>Go</button>\n```\n"
    html = NotesRenderer().markdown(source)
    soup = BeautifulSoup(html, "html.parser")
    block = soup.select_one("div.codehilite")
    assert block is not None, "expected a highlighted code block"
    assert "<button>Go</button>" in block.get_text()
    assert soup.p is not None
    assert soup.p.get_text() == "Usage:"
