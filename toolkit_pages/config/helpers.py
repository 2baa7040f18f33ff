"""Utility helpers shared by the options loader."""

from __future__ import annotations

import typing as typ

from toolkit_pages.errors import AssemblyConfigError

from .models import ContextKeys

GLOB_FIELDS = ("layouts", "layout_includes", "views", "materials", "data", "docs")
FLAG_FIELDS = ("log_errors", "enclose_in_comments", "wrap_and_hard_reset_materials")


def _glob_list(name: str, value: object) -> list[str]:
    """Normalize a single pattern or a list of patterns into a list of strings."""
    match value:
        case str() as pattern:
            return [pattern]
        case list() as patterns if all(isinstance(item, str) for item in patterns):
            return list(patterns)
        case _:
            msg = f"Option '{name}' must be a glob string or a list of glob strings."
            raise AssemblyConfigError(msg)


def _flag(name: str, value: object) -> bool:
    """Return ``value`` when it is a boolean, raising otherwise."""
    if not isinstance(value, bool):
        msg = f"Option '{name}' must be true or false."
        raise AssemblyConfigError(msg)
    return value


def _build_keys(payload: typ.Mapping[str, typ.Any] | None) -> ContextKeys:
    """Build ContextKeys from the ``keys`` mapping, keeping defaults for gaps."""
    base = ContextKeys()
    if not payload:
        return base
    if not isinstance(payload, dict):
        msg = "Option 'keys' must be a mapping."
        raise AssemblyConfigError(msg)
    return ContextKeys(
        materials=str(payload.get("materials", base.materials)),
        views=str(payload.get("views", base.views)),
        docs=str(payload.get("docs", base.docs)),
    )


__all__ = ["FLAG_FIELDS", "GLOB_FIELDS", "_build_keys", "_flag", "_glob_list"]
