"""Collect layouts, layout includes, data files, views, and docs.

Each collector resets its slice of :class:`AssemblyState` and repopulates it
from the configured globs, so a run never sees leftovers from a previous one.
"""

from __future__ import annotations

import logging
import typing as typ

from toolkit_pages._constants import NOTES_FIELD, UPDATED_FIELD
from toolkit_pages.naming import identifier, is_hidden, title_case
from toolkit_pages.sources import (
    expand_globs,
    load_data_file,
    read_matter,
    read_source,
)

from .models import CollectionNode, DocNode, ViewNode
from .registry import wrap_fragment

if typ.TYPE_CHECKING:
    from .state import AssemblyState

logger = logging.getLogger(__name__)


def parse_layouts(state: AssemblyState) -> None:
    """Store the raw text of every layout keyed by layout id."""
    options = state.options
    state.layouts = {
        identifier(path): read_source(path)
        for path in expand_globs(options.root, options.layouts)
    }


def parse_layout_includes(state: AssemblyState) -> None:
    """Register every layout include as a fragment under its id."""
    options = state.options
    for path in expand_globs(options.root, options.layout_includes):
        fragment_id = identifier(path)
        content = wrap_fragment(
            read_source(path),
            fragment_id,
            hard_reset=False,
            comments=options.enclose_in_comments,
        )
        state.engine.register(fragment_id, content, source=path)


def parse_data(state: AssemblyState) -> None:
    """Load every data file keyed by file id.

    Raises
    ------
    ParseError
        If a data file is not valid JSON or YAML.
    """
    options = state.options
    state.data = {
        identifier(path): load_data_file(path)
        for path in expand_globs(options.root, options.data)
    }


def view_collection(state: AssemblyState, path_name: str) -> str:
    """Return the view collection for a view's directory name, or ``""``."""
    return path_name if path_name != state.options.keys.views else ""


def parse_views(state: AssemblyState) -> None:
    """Record metadata for views that live in a view collection directory."""
    options = state.options
    state.views = {}
    for path in expand_globs(options.root, options.views):
        collection = view_collection(state, path.parent.name)
        if not collection:
            continue
        matter = read_matter(path)
        view_id = identifier(path, preserve_numbers=True)
        node = state.views.setdefault(
            collection, CollectionNode(name=title_case(collection))
        )
        node.items[view_id] = ViewNode(
            name=title_case(view_id),
            data={key: value for key, value in matter.data.items() if key != NOTES_FIELD},
            exclude=is_hidden(path),
            updated=matter.data.get(UPDATED_FIELD),
        )


def parse_docs(state: AssemblyState) -> None:
    """Render every markdown doc keyed by doc id."""
    options = state.options
    state.docs = {}
    for path in expand_globs(options.root, options.docs):
        doc_id = identifier(path)
        state.docs[doc_id] = DocNode(
            name=title_case(doc_id),
            content=state.renderer.markdown(read_source(path)),
            exclude=is_hidden(path),
        )
    logger.debug("rendered %d docs", len(state.docs))


__all__ = [
    "parse_data",
    "parse_docs",
    "parse_layout_includes",
    "parse_layouts",
    "parse_views",
    "view_collection",
]
