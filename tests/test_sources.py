"""Unit tests for source discovery, front matter, and data files."""

from __future__ import annotations

import typing as typ

import pytest

from toolkit_pages.errors import ParseError
from toolkit_pages.sources import (
    expand_globs,
    load_data_file,
    read_matter,
    trim_blank_lines,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_negated_patterns_remove_matches(tmp_path: Path) -> None:
    """Entries prefixed with ``!`` drop files matched by earlier patterns."""
    for name in ("a.html", "b.html", "skip.html"):
        (tmp_path / name).write_text("", encoding="utf-8")
    found = expand_globs(tmp_path, ["*.html", "!skip.html"])
    assert [path.name for path in found] == ["a.html", "b.html"]


def test_front_matter_is_split_from_the_body(tmp_path: Path) -> None:
    """The YAML block becomes ``data`` and the rest stays as ``content``."""
    path = tmp_path / "primary.html"
    path.write_text("---\ntitle: Go\n---\n<button>{{ title }}</button>\n")
    matter = read_matter(path)
    assert matter.data == {"title": "Go"}
    assert trim_blank_lines(matter.content) == "<button>{{ title }}</button>"


def test_file_without_front_matter_has_empty_data(tmp_path: Path) -> None:
    """Plain files are returned verbatim with no data."""
    path = tmp_path / "plain.html"
    path.write_text("<hr>", encoding="utf-8")
    matter = read_matter(path)
    assert matter.data == {}
    assert matter.content == "<hr>"


def test_non_mapping_front_matter_is_a_parse_error(tmp_path: Path) -> None:
    """A list in the front-matter block is rejected."""
    path = tmp_path / "list.html"
    path.write_text("---\n- a\n- b\n---\n<p></p>\n", encoding="utf-8")
    with pytest.raises(ParseError, match="mapping"):
        read_matter(path)


def test_undecodable_file_is_a_parse_error(tmp_path: Path) -> None:
    """Bytes that are not UTF-8 raise ``ParseError`` naming the file."""
    path = tmp_path / "bad.html"
    path.write_bytes(b"\xff\xfe<p></p>")
    with pytest.raises(ParseError) as excinfo:
        read_matter(path)
    assert excinfo.value.path == path


def test_undecodable_data_file_is_a_parse_error(tmp_path: Path) -> None:
    """Data files that are not UTF-8 raise ``ParseError`` naming the file."""
    path = tmp_path / "bad.json"
    path.write_bytes(b'{"x": "\xff"}')
    with pytest.raises(ParseError) as excinfo:
        load_data_file(path)
    assert excinfo.value.path == path
