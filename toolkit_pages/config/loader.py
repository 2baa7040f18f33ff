"""Load toolkit assembly options from YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from toolkit_pages.errors import AssemblyConfigError

from .helpers import FLAG_FIELDS, GLOB_FIELDS, _build_keys, _flag, _glob_list
from .models import AssemblyOptions


def load_options(path: Path, **overrides: typ.Any) -> AssemblyOptions:
    """Load the YAML file describing source globs, keys, and output settings.

    Parameters
    ----------
    path : Path
        Filesystem path to the options file (for example, ``toolkit.yaml``).
    **overrides : Any
        Field values applied on top of the file, such as ``dest`` from the
        command line. ``None`` values are ignored.

    Returns
    -------
    AssemblyOptions
        Options with ``root`` defaulting to the directory holding ``path``.

    Raises
    ------
    FileNotFoundError
        If the options file does not exist at ``path``.
    AssemblyConfigError
        If the top-level structure is not a mapping or a field has the wrong
        type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from toolkit_pages.config import load_options
    >>> options = load_options(Path("toolkit.yaml"))  # doctest: +SKIP
    >>> options.keys.materials  # doctest: +SKIP
    'materials'
    """
    if not path.exists():
        msg = f"Options file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise AssemblyConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base = AssemblyOptions()
    root = Path(raw.get("root", "."))
    if not root.is_absolute():
        root = path.parent / root

    fields: dict[str, typ.Any] = {
        "root": root,
        "layout": str(raw.get("layout", base.layout)),
        "keys": _build_keys(raw.get("keys")),
        "dest": Path(raw.get("dest", base.dest)),
        "pygments_style": str(raw.get("pygments_style", base.pygments_style)),
    }
    for name in GLOB_FIELDS:
        if name in raw:
            fields[name] = _glob_list(name, raw[name])
    for name in FLAG_FIELDS:
        if name in raw:
            fields[name] = _flag(name, raw[name])

    for name, value in overrides.items():
        if value is not None:
            fields[name] = value
    return AssemblyOptions(**fields)


__all__ = ["load_options"]
