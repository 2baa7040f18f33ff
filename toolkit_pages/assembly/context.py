"""Merge page data with globally collected data into one render context."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .state import AssemblyState


def build_context(
    state: AssemblyState,
    page_data: cabc.Mapping[str, typ.Any] | None = None,
    extra: cabc.Mapping[str, typ.Any] | None = None,
) -> dict[str, typ.Any]:
    """Return the render context for a single render call.

    Later sources win on key collisions, in this order: ``page_data``, data
    files, namespaced material data, the materials tree, the views tree, the
    docs tree, then ``extra``. Call-site values therefore always override
    globally collected data.

    Parameters
    ----------
    state : AssemblyState
        State of the current run.
    page_data : Mapping, optional
        Page-local values such as a view's front matter.
    extra : Mapping, optional
        Call-site overrides with the highest precedence.

    Returns
    -------
    dict[str, Any]
        A new flat mapping; the inputs are not modified.
    """
    keys = state.options.keys
    context: dict[str, typ.Any] = {}
    context.update(page_data or {})
    context.update(state.data)
    context.update(state.material_data)
    context[keys.materials] = state.materials
    context[keys.views] = state.views
    context[keys.docs] = state.docs
    context.update(extra or {})
    return context


__all__ = ["build_context"]
