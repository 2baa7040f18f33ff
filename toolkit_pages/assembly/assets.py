"""Locate and copy the compiled toolkit assets that accompany bundles."""

from __future__ import annotations

import logging
import shutil
import typing as typ

from toolkit_pages._constants import TOOLKIT_ASSETS

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def toolkit_asset(output_root: Path, *parts: str) -> Path:
    """Return ``<output_root>/assets/toolkit/<parts...>``."""
    return output_root.joinpath(*TOOLKIT_ASSETS, *parts)


def bundle_assets(base_name: str) -> list[tuple[tuple[str, ...], str]]:
    """Return ``(source parts, target file name)`` pairs copied into a bundle."""
    return [
        (("styles", "bundles", f"{base_name}.css"), f"{base_name}.css"),
        (("scripts", "bundles", f"{base_name}.js"), f"{base_name}.js"),
        (("styles", "toolkit.css"), "toolkit.css"),
        (("scripts", "toolkit.js"), "toolkit.js"),
        (("styles", "vendor", "vendor.css"), "vendor.css"),
        (("scripts", "vendor", "vendor.js"), "vendor.js"),
    ]


def copy_optional(source: Path, target: Path) -> bool:
    """Copy ``source`` to ``target``; a missing source is skipped, not an error.

    Returns
    -------
    bool
        True when the file was copied.
    """
    try:
        shutil.copyfile(source, target)
    except FileNotFoundError:
        logger.debug("skipped missing asset %s", source)
        return False
    return True


__all__ = ["bundle_assets", "copy_optional", "toolkit_asset"]
