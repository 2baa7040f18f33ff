"""Decide whether each material belongs to a collection or a sub-collection.

Classification is purely structural. The set of known material directories is
every directory matched by ``<dirname(pattern)>/*`` for the material globs. A
file is in a sub-collection when the name of its *grandparent* directory is in
that set, that is, when its parent directory itself sits inside a known
material directory. Only one level of sub-collection is modelled: a file
three directories deep is classified from its two nearest directories and any
deeper structure collapses.

Example
-------
With ``materials: ["src/materials/**/*"]``::

    src/materials/buttons/primary.html             -> buttons / primary
    src/materials/components/cards/basic.html      -> components / cards / basic
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from toolkit_pages.naming import filter_name, identifier
from toolkit_pages.sources import expand_globs, expand_parent_dirs

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class Classification:
    """Classification facts for a single material file.

    Attributes
    ----------
    path : Path
        Material source file.
    collection : str
        Filtered name of the file's directory.
    parent : str
        Filtered name of the directory above ``collection``.
    is_sub_collection : bool
        True when ``collection`` is a sub-collection of ``parent``.
    """

    path: Path
    collection: str
    parent: str
    is_sub_collection: bool

    @property
    def file_id(self) -> str:
        """Return the filtered identifier of the file."""
        return identifier(self.path)

    @property
    def base(self) -> str:
        """Return the key of the top-level collection holding the file."""
        return self.parent if self.is_sub_collection else self.collection

    @property
    def qualified_id(self) -> str:
        """Return ``collection.fileId`` for nested files, else ``fileId``."""
        if self.is_sub_collection:
            return f"{self.collection}.{self.file_id}"
        return self.file_id

    @property
    def directory(self) -> Path:
        """Return the directory holding the file."""
        return self.path.parent


def material_directories(root: Path, patterns: cabc.Sequence[str]) -> set[str]:
    """Return the filtered names of every known material directory."""
    return {filter_name(path.name) for path in expand_parent_dirs(root, patterns)}


def classify(path: Path, directories: cabc.Collection[str]) -> Classification:
    """Classify ``path`` against the known material ``directories``."""
    collection = filter_name(path.parent.name)
    parent = filter_name(path.parent.parent.name)
    return Classification(
        path=path,
        collection=collection,
        parent=parent,
        is_sub_collection=parent in directories,
    )


def classify_materials(
    root: Path, patterns: cabc.Sequence[str]
) -> list[Classification]:
    """Classify every material file matched by ``patterns`` in listing order."""
    directories = material_directories(root, patterns)
    return [classify(path, directories) for path in expand_globs(root, patterns)]


__all__ = [
    "Classification",
    "classify",
    "classify_materials",
    "material_directories",
]
