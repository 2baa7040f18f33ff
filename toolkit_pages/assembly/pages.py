"""Merge views into layouts and write the rendered pages.

Each view's body replaces the ``{% body %}`` placeholder of its layout
textually, before compilation, so the view and the layout share one template
and one context.
"""

from __future__ import annotations

import logging
import re
import typing as typ
from pathlib import Path

from toolkit_pages._constants import (
    BODY_PLACEHOLDER,
    DEST_COPY_FIELD,
    DEST_FIELD,
    LAYOUT_FIELD,
    PAGE_EXTENSION,
)
from toolkit_pages.errors import AssemblyError
from toolkit_pages.sources import expand_globs, read_matter

from .collectors import view_collection
from .context import build_context

if typ.TYPE_CHECKING:
    from .state import AssemblyState

logger = logging.getLogger(__name__)

_BODY_RE = re.compile(BODY_PLACEHOLDER)
_WHITESPACE_RE = re.compile(r"\s+")


def wrap_page(page: str, layout: str) -> str:
    """Replace the first ``{% body %}`` placeholder in ``layout`` with ``page``.

    Examples
    --------
    >>> wrap_page("<p>hi</p>", "<main>{% body %}</main>")
    '<main><p>hi</p></main>'
    """
    return _BODY_RE.sub(lambda _match: page, layout, count=1)


def page_path(path: Path | str) -> Path:
    """Return ``path`` with an ``.html`` suffix and no whitespace in its name."""
    candidate = Path(path)
    name = _WHITESPACE_RE.sub("-", candidate.name.strip())
    return candidate.with_name(name).with_suffix(f".{PAGE_EXTENSION}")


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def assemble_view(state: AssemblyState, path: Path) -> list[Path]:
    """Render one view into its layout and write it.

    Parameters
    ----------
    state : AssemblyState
        State with layouts, fragments, and data already collected.
    path : Path
        View source file.

    Returns
    -------
    list[Path]
        The page written, followed by its ``dest-copy`` when one is set.

    Raises
    ------
    AssemblyError
        If the view names a layout that was not collected.
    ParseError
        If the view's front matter is malformed.
    """
    options = state.options
    collection = view_collection(state, path.parent.name)
    matter = read_matter(path)
    page_data = dict(matter.data)
    if collection:
        page_data["baseurl"] = "../"

    layout_id = str(page_data.get(LAYOUT_FIELD) or options.layout)
    layout = state.layouts.get(layout_id)
    if layout is None:
        msg = f"Layout '{layout_id}' used by '{path}' was not found."
        raise AssemblyError(msg)

    html = state.engine.render(
        wrap_page(matter.content, layout), build_context(state, page_data)
    )

    target = options.output_dir / collection / path.name
    if page_data.get(DEST_FIELD):
        target = options.resolve(str(page_data[DEST_FIELD]))
    written = [page_path(target)]
    if page_data.get(DEST_COPY_FIELD):
        copy_target = options.resolve(str(page_data[DEST_COPY_FIELD]))
        written.append(copy_target.with_name(_WHITESPACE_RE.sub("-", copy_target.name)))
    for output in written:
        _write(output, html)
    return written


def assemble_views(state: AssemblyState) -> list[Path]:
    """Render every view matched by the view globs.

    Returns
    -------
    list[Path]
        Every page file written, in glob order.
    """
    options = state.options
    written: list[Path] = []
    for path in expand_globs(options.root, options.views):
        written.extend(assemble_view(state, path))
    logger.debug("assembled %d pages", len(written))
    return written


__all__ = ["assemble_view", "assemble_views", "page_path", "wrap_page"]
