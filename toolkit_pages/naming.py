r"""Turn source paths into fragment identifiers and display names.

All helpers here are pure string transforms. Ordering prefixes such as
``02-`` keep files sorted on disk but never leak into identifiers, and a
``__`` marker after the prefix flags an item as hidden from navigation.

Example
-------
>>> from toolkit_pages.naming import identifier, is_hidden, title_case
>>> identifier("src/materials/buttons/02-primary button.html")
'primary-button'
>>> identifier("src/views/02-home.html", preserve_numbers=True)
'02-home'
>>> is_hidden("src/materials/buttons/02__ghost.html")
True
>>> title_case("primary-button")
'Primary Button'
"""

from __future__ import annotations

import re
from pathlib import PurePath

ORDER_PREFIX_PATTERN = re.compile(r"^[0-9|.\-]*(?:__)?")
HIDDEN_PATTERN = re.compile(r"^[0-9.]*__")
WHITESPACE_PATTERN = re.compile(r"\s+")
WORD_PATTERN = re.compile(r"\w\S*")
NON_WORD_PATTERN = re.compile(r"\W")


def filter_name(name: str, *, preserve_numbers: bool = False) -> str:
    """Normalize a bare file or directory name into an identifier.

    Parameters
    ----------
    name : str
        Name without any directory component.
    preserve_numbers : bool, optional
        Keep the leading ordering prefix (used for view identifiers).

    Returns
    -------
    str
        The trimmed name with whitespace runs replaced by ``-``. May be empty
        when the name consisted only of an ordering prefix and marker.
    """
    if not preserve_numbers:
        name = ORDER_PREFIX_PATTERN.sub("", name, count=1)
    return WHITESPACE_PATTERN.sub("-", name.strip())


def identifier(path: str | PurePath, *, preserve_numbers: bool = False) -> str:
    """Return the identifier for ``path``: its filtered stem."""
    return filter_name(PurePath(path).stem, preserve_numbers=preserve_numbers)


def is_hidden(path: str | PurePath) -> bool:
    """Return True when the raw basename carries the ``__`` hidden marker."""
    return HIDDEN_PATTERN.match(PurePath(path).name) is not None


def title_case(text: str) -> str:
    """Convert an identifier such as ``primary-button`` into ``Primary Button``."""
    spaced = text.replace("-", " ").replace("_", " ")
    return WORD_PATTERN.sub(lambda match: match[0][0].upper() + match[0][1:].lower(), spaced)


def namespace_key(qualified_id: str) -> str:
    """Return the template-addressable context key for a fragment id.

    Template names cannot contain ``.`` or ``-``, so every non-word character
    becomes ``_``: ``buttons.primary-large`` maps to ``buttons_primary_large``.
    This deliberately differs from the dashed ``buttons-primary-large`` form,
    which Jinja would parse as a subtraction.
    """
    return NON_WORD_PATTERN.sub("_", qualified_id)


__all__ = ["filter_name", "identifier", "is_hidden", "namespace_key", "title_case"]
