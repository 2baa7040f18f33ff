"""Template helpers available in every layout, view, and material.

``material`` renders a registered fragment with its own context (it is named
after the singular form of the materials key, so ``keys.materials: patterns``
exposes ``pattern``). ``lang`` picks a localized value using
``globals.language``, ``data`` returns the loaded data files, and ``tot``
returns its first argument unless it is empty.
"""

from __future__ import annotations

import typing as typ

from markupsafe import Markup

from toolkit_pages.naming import filter_name

from .context import build_context

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .state import AssemblyState


def singularize(word: str) -> str:
    """Return a simple English singular: ``materials`` to ``material``."""
    if word.endswith("ies") and len(word) > 3:
        return f"{word[:-3]}y"
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def _material_helper(state: AssemblyState) -> cabc.Callable[..., Markup]:
    def material(
        name: str,
        context: cabc.Mapping[str, typ.Any] | None = None,
        **overrides: typ.Any,
    ) -> Markup:
        """Render the fragment ``name`` with ``context`` and keyword overrides."""
        fragment_id = filter_name(name)
        html = state.engine.render_fragment(
            fragment_id, build_context(state, context, overrides)
        )
        return Markup(html.lstrip())

    return material


def _lang_helper(state: AssemblyState) -> cabc.Callable[[typ.Any], typ.Any]:
    def lang(value: typ.Any) -> typ.Any:
        """Return ``value[globals.language]`` when that translation exists."""
        settings = state.data.get("globals")
        if not isinstance(settings, dict) or "language" not in settings:
            return value
        language = settings["language"]
        if isinstance(value, dict) and language in value:
            return value[language]
        return value

    return lang


def tot(value: typ.Any, default: typ.Any) -> typ.Any:
    """Return ``value`` ("this") unless it is empty, otherwise ``default`` ("that")."""
    return value or default


def install_helpers(state: AssemblyState) -> None:
    """Install built-in and user helpers as template globals."""
    helpers: dict[str, typ.Any] = {
        singularize(state.options.keys.materials): _material_helper(state),
        "lang": _lang_helper(state),
        "data": lambda: state.data,
        "tot": tot,
    }
    helpers.update(state.options.helpers)
    state.engine.install_globals(helpers)


__all__ = ["install_helpers", "singularize", "tot"]
