"""Shared dataclasses for the collection trees built during assembly."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(slots=True)
class ItemNode:
    """Metadata for a single material.

    Attributes
    ----------
    name : str
        Display name derived from the file identifier.
    notes : str
        Rendered HTML for the ``notes`` front-matter field, or ``""``.
    data : dict[str, Any]
        Front matter without ``notes``.
    exclude : bool
        True when the file carries the hidden marker.
    bundle : bool
        True only when front matter sets ``bundle: true``.
    updated : Any
        Passthrough of the ``updated`` front-matter field.
    """

    name: str
    notes: str
    data: dict[str, typ.Any]
    exclude: bool
    bundle: bool = False
    updated: typ.Any = None

    def as_context(self) -> dict[str, typ.Any]:
        """Return the node's fields as a flat mapping for render contexts."""
        return {field.name: getattr(self, field.name) for field in dc.fields(self)}


@dc.dataclass(slots=True)
class CollectionNode:
    """A collection or sub-collection; ``items`` keeps file-listing order."""

    name: str
    items: dict[str, typ.Any] = dc.field(default_factory=dict)
    exclude: bool = False


@dc.dataclass(slots=True)
class ViewNode:
    """Metadata for a view that lives in a view collection."""

    name: str
    data: dict[str, typ.Any]
    exclude: bool
    updated: typ.Any = None


@dc.dataclass(slots=True)
class DocNode:
    """A rendered markdown document."""

    name: str
    content: str
    exclude: bool


__all__ = ["CollectionNode", "DocNode", "ItemNode", "ViewNode"]
