"""Per-run assembly state threaded through every stage."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .engine import FragmentEngine
from .helpers import install_helpers
from .renderer import NotesRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from toolkit_pages.config import AssemblyOptions

    from .models import CollectionNode, DocNode


@dc.dataclass(slots=True)
class AssemblyState:
    """Everything collected during one run.

    A new state is created for every run, so two runs (or two tests) never
    share registered fragments or collected data.

    Attributes
    ----------
    options : AssemblyOptions
        Options the run was started with.
    engine : FragmentEngine
        Template collaborator holding registered fragments.
    renderer : NotesRenderer
        Markdown renderer for notes and docs.
    layouts : dict[str, str]
        Raw layout text keyed by layout id.
    data : dict[str, Any]
        Parsed data files keyed by file id.
    materials : dict[str, CollectionNode]
        Material tree: collection, optional sub-collection, item.
    material_data : dict[str, dict[str, Any]]
        Each material's front matter keyed by its namespace key.
    material_sources : dict[str, Path]
        Source file of each registered material, keyed by qualified id.
    views : dict[str, CollectionNode]
        View metadata grouped by view collection.
    docs : dict[str, DocNode]
        Rendered docs keyed by doc id.
    """

    options: AssemblyOptions
    engine: FragmentEngine = dc.field(default_factory=FragmentEngine)
    renderer: NotesRenderer = dc.field(default_factory=NotesRenderer)
    layouts: dict[str, str] = dc.field(default_factory=dict)
    data: dict[str, typ.Any] = dc.field(default_factory=dict)
    materials: dict[str, CollectionNode] = dc.field(default_factory=dict)
    material_data: dict[str, dict[str, typ.Any]] = dc.field(default_factory=dict)
    material_sources: dict[str, Path] = dc.field(default_factory=dict)
    views: dict[str, CollectionNode] = dc.field(default_factory=dict)
    docs: dict[str, DocNode] = dc.field(default_factory=dict)

    @classmethod
    def fresh(cls, options: AssemblyOptions) -> AssemblyState:
        """Return an empty state for ``options`` with template helpers installed."""
        state = cls(options=options, renderer=NotesRenderer(options.pygments_style))
        install_helpers(state)
        return state


__all__ = ["AssemblyState"]
