"""Build the material tree and register every material as a fragment.

Materials are processed in three passes over the sorted file list:

1. stub a :class:`CollectionNode` for every top-level collection;
2. read each file, record its :class:`ItemNode` (creating the sub-collection
   node when needed), store its namespaced data, rewrite its own field
   references, and register the fragment;
3. bundle the items flagged ``bundle: true``. Bundling runs last because a
   bundled material may include any other registered fragment.

Example
-------
>>> from pathlib import Path
>>> from toolkit_pages.assembly.state import AssemblyState
>>> from toolkit_pages.config import AssemblyOptions
>>> state = AssemblyState.fresh(AssemblyOptions(root=Path("toolkit")))  # doctest: +SKIP
>>> parse_materials(state)  # doctest: +SKIP
[PosixPath('toolkit/dist/bundles/primary/primary.html')]
>>> state.engine.fragment("primary")  # doctest: +SKIP
'<button>{{ primary["label"] }}</button>'
"""

from __future__ import annotations

import copy
import logging
import typing as typ

from toolkit_pages._constants import (
    BUNDLE_FIELD,
    COMMENT_END,
    COMMENT_START,
    HARD_RESET_CLOSE,
    HARD_RESET_OPEN,
    NOTES_FIELD,
    UPDATED_FIELD,
)
from toolkit_pages.errors import FragmentCollisionError
from toolkit_pages.naming import is_hidden, namespace_key, title_case
from toolkit_pages.sources import read_matter, trim_blank_lines

from .bundler import bundle_materials
from .classifier import Classification, classify_materials
from .models import CollectionNode, ItemNode
from .namespacer import namespace_fields

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .state import AssemblyState

logger = logging.getLogger(__name__)


def _base_directory(classification: Classification) -> Path:
    directory = classification.directory
    return directory.parent if classification.is_sub_collection else directory


def _stub_collections(
    state: AssemblyState, classifications: list[Classification]
) -> None:
    """Ensure a top-level collection node exists for every material."""
    for classification in classifications:
        base = classification.base
        if base not in state.materials:
            state.materials[base] = CollectionNode(
                name=title_case(base),
                exclude=is_hidden(_base_directory(classification)),
            )


def _check_collisions(state: AssemblyState, classification: Classification) -> None:
    """Raise before anything is recorded when the material's ids are taken."""
    qualified_id = classification.qualified_id
    if qualified_id in state.engine:
        raise FragmentCollisionError(
            qualified_id, state.engine.source_of(qualified_id), classification.path
        )
    key = namespace_key(qualified_id)
    if key in state.material_data:
        owner = next(
            (
                source
                for fragment_id, source in state.material_sources.items()
                if namespace_key(fragment_id) == key
            ),
            "unknown",
        )
        raise FragmentCollisionError(key, owner, classification.path)


def _item_container(
    state: AssemblyState, classification: Classification
) -> dict[str, typ.Any]:
    """Return the ``items`` map the material belongs in."""
    items = state.materials[classification.base].items
    if not classification.is_sub_collection:
        return items
    sub_collection = items.get(classification.collection)
    if isinstance(sub_collection, ItemNode):
        raise FragmentCollisionError(
            classification.collection,
            state.material_sources.get(
                classification.collection, classification.collection
            ),
            classification.path,
        )
    if sub_collection is None:
        sub_collection = CollectionNode(
            name=title_case(classification.collection),
            exclude=is_hidden(classification.directory),
        )
        items[classification.collection] = sub_collection
    return sub_collection.items


def wrap_fragment(
    text: str, fragment_id: str, *, hard_reset: bool, comments: bool
) -> str:
    """Apply the optional hard-reset container and START/END comments."""
    if hard_reset:
        text = f"{HARD_RESET_OPEN}{text}{HARD_RESET_CLOSE}"
    if comments:
        text = (
            f"{COMMENT_START.format(id=fragment_id)}{text}"
            f"{COMMENT_END.format(id=fragment_id)}"
        )
    return text


def register_material(state: AssemblyState, classification: Classification) -> ItemNode:
    """Record one material in the tree and register its fragment.

    Raises
    ------
    ParseError
        If the material's front matter is malformed. Nothing is recorded for
        the file in that case.
    FragmentCollisionError
        If the material's id was already registered by another source, or
        if an item and a sub-collection share one name.
    """
    path = classification.path
    matter = read_matter(path)
    _check_collisions(state, classification)

    local_data = {key: value for key, value in matter.data.items() if key != NOTES_FIELD}
    content = trim_blank_lines(matter.content)
    qualified_id = classification.qualified_id
    container = _item_container(state, classification)
    if isinstance(container.get(qualified_id), CollectionNode):
        owner = next(
            (
                source
                for fragment_id, source in state.material_sources.items()
                if fragment_id.startswith(f"{qualified_id}.")
            ),
            "unknown",
        )
        raise FragmentCollisionError(qualified_id, owner, path)

    item = ItemNode(
        name=title_case(classification.file_id),
        notes=state.renderer.markdown(matter.data.get(NOTES_FIELD)),
        data=local_data,
        exclude=is_hidden(path),
        bundle=matter.data.get(BUNDLE_FIELD) is True,
        updated=matter.data.get(UPDATED_FIELD),
    )
    container[qualified_id] = item
    state.material_data[namespace_key(qualified_id)] = copy.deepcopy(local_data)

    content = namespace_fields(content, local_data, qualified_id)
    content = wrap_fragment(
        content,
        qualified_id,
        hard_reset=state.options.wrap_and_hard_reset_materials,
        comments=state.options.enclose_in_comments,
    )
    state.engine.register(qualified_id, content, source=path)
    state.material_sources[qualified_id] = path
    return item


def parse_materials(state: AssemblyState) -> list[Path]:
    """Rebuild the material tree, register fragments, and write bundles.

    Returns
    -------
    list[Path]
        Bundle files written for materials flagged ``bundle: true``.
    """
    options = state.options
    state.materials = {}
    state.material_data = {}
    state.material_sources = {}
    classifications = classify_materials(options.root, options.materials)
    _stub_collections(state, classifications)
    for classification in classifications:
        register_material(state, classification)
    logger.debug("registered %d materials", len(classifications))
    return bundle_materials(state, classifications)


__all__ = [
    "parse_materials",
    "register_material",
    "wrap_fragment",
]
