"""Run a complete toolkit assembly.

:func:`assemble` is the library entry point used by the CLI. It builds a fresh
:class:`AssemblyState`, collects every source set in dependency order
(layouts, layout includes, data, materials and their bundles, views, docs),
renders the views, and removes the per-item asset folders the bundler copied
from. Any failure is routed through :func:`toolkit_pages.errors.handle_error`.
"""

from __future__ import annotations

import logging
import shutil
import typing as typ

from toolkit_pages.errors import handle_error

from .assets import toolkit_asset
from .collectors import (
    parse_data,
    parse_docs,
    parse_layout_includes,
    parse_layouts,
    parse_views,
)
from .pages import assemble_views
from .registry import parse_materials
from .state import AssemblyState

if typ.TYPE_CHECKING:
    from pathlib import Path

    from toolkit_pages.config import AssemblyOptions

logger = logging.getLogger(__name__)


def setup(state: AssemblyState) -> list[Path]:
    """Collect every source set into ``state``.

    Returns
    -------
    list[Path]
        Bundle files written while the materials were registered.
    """
    parse_layouts(state)
    parse_layout_includes(state)
    parse_data(state)
    bundles = parse_materials(state)
    parse_views(state)
    parse_docs(state)
    return bundles


def remove_bundle_assets(options: AssemblyOptions) -> None:
    """Delete ``assets/toolkit/{styles,scripts}/bundles`` under the output."""
    for kind in ("styles", "scripts"):
        shutil.rmtree(
            toolkit_asset(options.output_dir, kind, "bundles"), ignore_errors=True
        )


def run(options: AssemblyOptions) -> tuple[AssemblyState, list[Path]]:
    """Assemble the toolkit without the top-level error handler.

    Returns
    -------
    tuple[AssemblyState, list[Path]]
        The populated state and every file written (bundles, then pages).
    """
    state = AssemblyState.fresh(options)
    written = setup(state)
    options.output_dir.mkdir(parents=True, exist_ok=True)
    written.extend(assemble_views(state))
    remove_bundle_assets(options)
    return state, written


def assemble(options: AssemblyOptions) -> list[Path]:
    """Assemble the toolkit described by ``options``.

    Parameters
    ----------
    options : AssemblyOptions
        Source globs, output location, and error-reporting settings.

    Returns
    -------
    list[Path]
        Every file written. Empty when the run failed and the failure was
        handled by ``on_error`` or ``log_errors``.

    Raises
    ------
    SystemExit
        When the run fails and neither ``on_error`` nor ``log_errors`` is
        configured.
    """
    try:
        _state, written = run(options)
    except Exception as exc:  # noqa: BLE001
        handle_error(exc, options)
        return []
    logger.info("assembled %d files into %s", len(written), options.output_dir)
    return written


__all__ = ["assemble", "remove_bundle_assets", "run", "setup"]
