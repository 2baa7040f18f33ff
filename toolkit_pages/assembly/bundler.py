"""Render materials flagged ``bundle: true`` into standalone output folders.

Each bundled material is rendered on its own (an include of its fragment,
with a context built from that item alone) and written to
``<dest>/bundles/<name>/<name>.<extension>``. The compiled item, toolkit, and
vendor assets are copied next to it when they exist. Items that also set the
legacy export flag are handed to the configured
:class:`~toolkit_pages.assembly.legacy.LegacyWidgetExporter`; its failures are
logged and never stop the remaining bundles.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from toolkit_pages._constants import (
    BUNDLES_DIR,
    EXTENSION_FIELD,
    LEGACY_EXPORT_FIELD,
    PAGE_EXTENSION,
)
from toolkit_pages.naming import identifier

from .assets import bundle_assets, copy_optional, toolkit_asset
from .context import build_context
from .legacy import WebSphereWidgetExporter
from .models import CollectionNode, ItemNode

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .classifier import Classification
    from .state import AssemblyState

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class BundleTarget:
    """A material selected for bundling and where its output goes.

    Attributes
    ----------
    fragment_id : str
        Qualified id of the registered fragment.
    base_name : str
        Filtered source file name; names the bundle folder and its assets.
    source : Path
        Material source file.
    item : ItemNode
        The material's metadata.
    output_root : Path
        Assembly output directory.
    settings : Mapping[str, Any]
        The ``globals`` data file, consulted by legacy exporters.
    """

    fragment_id: str
    base_name: str
    source: Path
    item: ItemNode
    output_root: Path
    settings: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)

    @property
    def directory(self) -> Path:
        """Return ``<output_root>/bundles/<base_name>``."""
        return self.output_root / BUNDLES_DIR / self.base_name

    @property
    def extension(self) -> str:
        """Return the output extension from the item's ``extension`` field."""
        return str(self.item.data.get(EXTENSION_FIELD) or PAGE_EXTENSION)


def _lookup_item(state: AssemblyState, classification: Classification) -> ItemNode | None:
    collection = state.materials.get(classification.base)
    if collection is None:
        return None
    container = collection.items
    if classification.is_sub_collection:
        sub_collection = container.get(classification.collection)
        if not isinstance(sub_collection, CollectionNode):
            return None
        container = sub_collection.items
    item = container.get(classification.qualified_id)
    return item if isinstance(item, ItemNode) else None


def render_bundle(state: AssemblyState, target: BundleTarget) -> str:
    """Render the bundled fragment with a context built from its item only."""
    source = f'{{% include "{target.fragment_id}" %}}'
    return state.engine.render(source, build_context(state, target.item.as_context()))


def write_bundle(state: AssemblyState, target: BundleTarget) -> tuple[Path, str]:
    """Write the rendered bundle and copy its optional assets.

    Returns
    -------
    tuple[Path, str]
        The written file and the rendered HTML.
    """
    html = render_bundle(state, target)
    output_path = target.directory / f"{target.base_name}.{target.extension}"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    for parts, file_name in bundle_assets(target.base_name):
        copy_optional(
            toolkit_asset(target.output_root, *parts), target.directory / file_name
        )
    return output_path, html


def bundle_materials(
    state: AssemblyState, classifications: cabc.Sequence[Classification]
) -> list[Path]:
    """Bundle every material whose ``bundle`` flag is set.

    Parameters
    ----------
    state : AssemblyState
        State with every material already registered.
    classifications : Sequence[Classification]
        Materials in processing order.

    Returns
    -------
    list[Path]
        The bundle files written, in processing order.
    """
    exporter = state.options.legacy_exporter or WebSphereWidgetExporter()
    settings = state.data.get("globals")
    written: list[Path] = []
    for classification in classifications:
        item = _lookup_item(state, classification)
        if item is None or not item.bundle:
            continue
        target = BundleTarget(
            fragment_id=classification.qualified_id,
            base_name=identifier(classification.path),
            source=classification.path,
            item=item,
            output_root=state.options.output_dir,
            settings=settings if isinstance(settings, dict) else {},
        )
        output_path, html = write_bundle(state, target)
        written.append(output_path)
        if item.data.get(LEGACY_EXPORT_FIELD) and settings is not None:
            try:
                exporter.export(target, html)
            except Exception as exc:  # noqa: BLE001
                logger.exception(
                    "Error (legacy export) for %s: %s", target.source, exc
                )
    return written


__all__ = ["BundleTarget", "bundle_materials", "render_bundle", "write_bundle"]
