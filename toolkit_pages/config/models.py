"""Typed dataclasses describing toolkit assembly options."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from toolkit_pages.assembly.legacy import LegacyWidgetExporter


def _default_views() -> list[str]:
    return ["src/views/**/*", "!src/views/layouts/**"]


def _default_data() -> list[str]:
    return ["src/data/**/*.json", "src/data/**/*.yml", "src/data/**/*.yaml"]


@dc.dataclass(slots=True)
class ContextKeys:
    """Names of the three tree buckets exposed to every render context."""

    materials: str = "materials"
    views: str = "views"
    docs: str = "docs"


@dc.dataclass(slots=True)
class AssemblyOptions:
    """Resolved options for one assembly run.

    Attributes
    ----------
    root : Path
        Directory that relative globs and output paths are resolved against.
    layout : str
        Identifier of the layout used when a view names none.
    layouts, layout_includes, views, materials, data, docs : list[str]
        Glob lists for each source set; ``!`` entries exclude matches.
    keys : ContextKeys
        Context keys for the materials, views, and docs trees.
    dest : Path
        Output directory.
    on_error : Callable, optional
        Receives the exception that aborted a run.
    log_errors : bool
        Log failures instead of exiting the process.
    enclose_in_comments : bool
        Wrap registered fragments in ``START``/``END`` HTML comments.
    wrap_and_hard_reset_materials : bool
        Wrap materials in the hard-reset container.
    helpers : dict[str, Callable]
        Extra template globals installed next to the built-in helpers.
    pygments_style : str
        Pygments style used for code blocks in notes and docs.
    legacy_exporter : LegacyWidgetExporter, optional
        Exporter for legacy widget bundles; the WebSphere exporter when unset.
    """

    root: Path = Path()
    layout: str = "default"
    layouts: list[str] = dc.field(default_factory=lambda: ["src/views/layouts/*"])
    layout_includes: list[str] = dc.field(
        default_factory=lambda: ["src/views/layouts/includes/*"]
    )
    views: list[str] = dc.field(default_factory=_default_views)
    materials: list[str] = dc.field(default_factory=lambda: ["src/materials/**/*"])
    data: list[str] = dc.field(default_factory=_default_data)
    docs: list[str] = dc.field(default_factory=lambda: ["src/docs/**/*.md"])
    keys: ContextKeys = dc.field(default_factory=ContextKeys)
    dest: Path = Path("dist")
    on_error: cabc.Callable[[BaseException], object] | None = None
    log_errors: bool = False
    enclose_in_comments: bool = False
    wrap_and_hard_reset_materials: bool = False
    helpers: dict[str, cabc.Callable[..., typ.Any]] = dc.field(default_factory=dict)
    pygments_style: str = "monokai"
    legacy_exporter: LegacyWidgetExporter | None = None

    @property
    def output_dir(self) -> Path:
        """Return ``dest`` resolved against ``root``."""
        return self.resolve(self.dest)

    def resolve(self, path: Path | str) -> Path:
        """Return ``path`` resolved against ``root`` unless already absolute."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.root / candidate


__all__ = ["AssemblyOptions", "ContextKeys"]
