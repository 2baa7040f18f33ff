"""Discover source files and read their front matter and data payloads.

Glob lists follow the toolkit convention: plain entries add matches, entries
prefixed with ``!`` remove them. Patterns are resolved relative to the
configured root unless they are absolute. Front matter is split with the
python-frontmatter YAML boundaries and parsed with ruamel.yaml so data files,
front matter, and the options file share one YAML dialect.

Example
-------
>>> from pathlib import Path
>>> from toolkit_pages.sources import expand_globs, read_matter
>>> files = expand_globs(Path("."), ["src/materials/**/*"])  # doctest: +SKIP
>>> matter = read_matter(files[0])  # doctest: +SKIP
>>> matter.data, matter.content  # doctest: +SKIP
({'title': 'Primary'}, '<button>{{ title }}</button>')
"""

from __future__ import annotations

import dataclasses as dc
import fnmatch
import posixpath
import re
import typing as typ
from pathlib import Path, PurePath

from frontmatter.default_handlers import YAMLHandler
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ParseError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

BLANK_EDGE_PATTERN = re.compile(
    r"\A(?:[^\S\r\n]*(?:\r?\n|\r))+|(?:\s*(?:\r?\n|\r))+\Z"
)


@dc.dataclass(slots=True)
class Matter:
    """Front-matter mapping and body text of a single source file."""

    data: dict[str, typ.Any]
    content: str


def _yaml_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


class RuamelYAMLHandler(YAMLHandler):
    """python-frontmatter handler that parses the block with ruamel.yaml."""

    def load(self, fm: str, **kwargs: object) -> typ.Any:  # noqa: ARG002
        """Parse the raw front-matter block."""
        return _yaml_loader().load(fm)


def _split_anchor(pattern: str, root: Path) -> tuple[Path, str]:
    """Return the directory to glob from and the pattern relative to it."""
    pure = PurePath(pattern)
    if pure.is_absolute():
        anchor = Path(pure.anchor)
        return anchor, pure.relative_to(anchor).as_posix()
    return root, pattern


def _is_negated(path: Path, base: Path, negations: cabc.Sequence[str]) -> bool:
    candidates = {path.as_posix()}
    try:
        candidates.add(path.relative_to(base).as_posix())
    except ValueError:  # pragma: no cover - path outside base
        pass
    return any(
        fnmatch.fnmatchcase(candidate, negation)
        for candidate in candidates
        for negation in negations
    )


def _expand(
    root: Path, patterns: cabc.Sequence[str], *, want_dirs: bool
) -> list[Path]:
    positives = [pattern for pattern in patterns if not pattern.startswith("!")]
    negations = [pattern[1:] for pattern in patterns if pattern.startswith("!")]
    found: dict[str, Path] = {}
    for pattern in positives:
        base, relative = _split_anchor(pattern, root)
        for path in base.glob(relative):
            if path.name.startswith(".") or path.is_dir() != want_dirs:
                continue
            if _is_negated(path, base, negations):
                continue
            found.setdefault(path.as_posix(), path)
    return [found[key] for key in sorted(found)]


def expand_globs(root: Path, patterns: cabc.Sequence[str]) -> list[Path]:
    """Return the files matched by ``patterns``, sorted lexicographically.

    Parameters
    ----------
    root : Path
        Directory that relative patterns are resolved against.
    patterns : Sequence[str]
        Glob patterns; entries starting with ``!`` exclude matches.

    Returns
    -------
    list[Path]
        Matched regular files, de-duplicated and ordered by their POSIX path.
    """
    return _expand(root, patterns, want_dirs=False)


def expand_parent_dirs(root: Path, patterns: cabc.Sequence[str]) -> list[Path]:
    """Return every directory matched by ``<dirname(pattern)>/*`` for each pattern."""
    dir_patterns = [
        posixpath.join(posixpath.dirname(pattern), "*")
        for pattern in patterns
        if not pattern.startswith("!")
    ]
    return _expand(root, dir_patterns, want_dirs=True)


def trim_blank_lines(text: str) -> str:
    """Remove blank lines before and after the body, keeping inner indentation."""
    return BLANK_EDGE_PATTERN.sub("", text)


def read_source(path: Path) -> str:
    """Return the UTF-8 text of ``path``.

    Raises
    ------
    ParseError
        If the file is not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8: {exc}") from exc


def read_matter(path: Path) -> Matter:
    """Read ``path`` and split it into front matter and body.

    Raises
    ------
    ParseError
        If the file is not UTF-8, or the front-matter block is malformed or
        is not a mapping.
    OSError
        If the file cannot be read.
    """
    text = read_source(path)
    handler = RuamelYAMLHandler()
    if not handler.detect(text):
        return Matter(data={}, content=text)
    try:
        block, content = handler.split(text)
        loaded = handler.load(block)
    except (YAMLError, ValueError) as exc:
        raise ParseError(path, str(exc)) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ParseError(path, "front matter must be a mapping")
    return Matter(data=dict(loaded), content=content)


def load_data_file(path: Path) -> typ.Any:
    """Parse a JSON or YAML data file.

    Raises
    ------
    ParseError
        If the file is not valid UTF-8 or not valid YAML 1.2 (JSON documents
        are valid YAML).
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            return _yaml_loader().load(handle)
    except (YAMLError, UnicodeDecodeError) as exc:
        raise ParseError(path, str(exc)) from exc


__all__ = [
    "Matter",
    "RuamelYAMLHandler",
    "expand_globs",
    "expand_parent_dirs",
    "load_data_file",
    "read_matter",
    "read_source",
    "trim_blank_lines",
]
