"""Render material notes and toolkit docs from markdown to HTML."""

from __future__ import annotations

from markdown import Markdown
from markupsafe import Markup


class NotesRenderer:
    """Render markdown with highlighted code blocks into safe HTML markup."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with the Pygments style for code blocks.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style

    def markdown(self, text: str | None) -> Markup:
        """Render markdown into HTML; empty or missing text renders as ``""``.

        The result is :class:`~markupsafe.Markup` so autoescaping templates
        print it verbatim.
        """
        source = str(text or "")
        if not source.strip():
            return Markup("")
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return Markup(md.convert(source))


__all__ = ["NotesRenderer"]
