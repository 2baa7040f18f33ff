"""Jinja2 wrapper that stores named fragments and renders template text.

The assembly core needs three things from its template collaborator:
register a fragment under an id, compile arbitrary template text, and let any
template include a registered fragment by id. :class:`FragmentEngine` keeps
registered fragments in a :class:`jinja2.DictLoader` mapping so
``{% include "buttons.primary" %}`` resolves them, and it refuses to register
the same id twice.

Example
-------
>>> engine = FragmentEngine()
>>> engine.register("greeting", "Hello {{ name }}", source="inline")
>>> engine.render('{% include "greeting" %}!', {"name": "toolkit"})
'Hello toolkit!'
"""

from __future__ import annotations

import logging
import typing as typ

from jinja2 import DictLoader, Environment, Template

from toolkit_pages.errors import FragmentCollisionError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)


class FragmentEngine:
    """Register named template fragments and render template text."""

    def __init__(self) -> None:
        self._fragments: dict[str, str] = {}
        self._sources: dict[str, str] = {}
        self.env = Environment(
            loader=DictLoader(self._fragments),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def register(self, fragment_id: str, text: str, *, source: Path | str) -> None:
        """Register ``text`` under ``fragment_id``.

        Parameters
        ----------
        fragment_id : str
            Globally unique fragment id.
        text : str
            Template text to register.
        source : Path or str
            Where the fragment came from; reported on collisions.

        Raises
        ------
        FragmentCollisionError
            If another source already registered ``fragment_id``.
        """
        if fragment_id in self._sources:
            raise FragmentCollisionError(
                fragment_id, self._sources[fragment_id], str(source)
            )
        self._sources[fragment_id] = str(source)
        self._fragments[fragment_id] = text
        logger.debug("registered fragment %r from %s", fragment_id, source)

    def __contains__(self, fragment_id: object) -> bool:
        return fragment_id in self._fragments

    def source_of(self, fragment_id: str) -> str:
        """Return the source recorded when ``fragment_id`` was registered."""
        return self._sources[fragment_id]

    def fragment(self, fragment_id: str) -> str:
        """Return the registered text for ``fragment_id``."""
        return self._fragments[fragment_id]

    def compile(self, text: str) -> Template:
        """Compile template text against the registered fragments."""
        return self.env.from_string(text)

    def render(self, text: str, context: cabc.Mapping[str, typ.Any]) -> str:
        """Compile ``text`` and render it with ``context``."""
        return self.compile(text).render(context)

    def render_fragment(
        self, fragment_id: str, context: cabc.Mapping[str, typ.Any]
    ) -> str:
        """Render a registered fragment with ``context``."""
        return self.env.get_template(fragment_id).render(context)

    def install_globals(self, values: cabc.Mapping[str, typ.Any]) -> None:
        """Expose ``values`` to every template as globals."""
        self.env.globals.update(values)


__all__ = ["FragmentEngine"]
