"""Shared fixtures for toolkit assembly tests.

The ``toolkit_root`` fixture writes a small but complete toolkit into
``tmp_path``: one layout with an include, a data file, a top-level material
(flagged for bundling), a material in a sub-collection, a plain view, a view
in a view collection, and one markdown doc.
"""

from __future__ import annotations

import textwrap
import typing as typ
from pathlib import Path

import pytest

from toolkit_pages.assembly.state import AssemblyState
from toolkit_pages.config import AssemblyOptions

TOOLKIT_FILES: dict[str, str] = {
    "src/views/layouts/default.html": """
        <!doctype html>
        <html>
        <head><title>{{ title }}</title></head>
        <body>
        {% include "header" %}
        {% body %}
        </body>
        </html>
        """,
    "src/views/layouts/includes/header.html": """
        <header>{{ site.name }}</header>
        """,
    "src/data/site.yml": """
        name: Pattern Toolkit
        """,
    "src/materials/buttons/primary.html": """
        ---
        title: Click me
        bundle: true
        notes: Use for **main** actions.
        ---

        <button class="primary">{{ title }}</button>

        """,
    "src/materials/components/cards/01-basic.html": """
        ---
        heading: Card heading
        ---
        <div class="card">{{ heading }}</div>
        """,
    "src/views/index.html": """
        ---
        title: Home
        ---
        <h1>{{ title }}</h1>
        {{ material("primary") }}
        {{ material("cards.basic") }}
        """,
    "src/views/pages/01-about.html": """
        ---
        title: About
        ---
        <a class="home" href="{{ baseurl }}index.html">Home</a>
        """,
    "src/docs/getting-started.md": """
        # Getting started

        Install the toolkit.
        """,
}


def write_file(root: Path, relative: str, text: str) -> Path:
    """Write dedented ``text`` to ``root / relative`` and return the path."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
    return path


@pytest.fixture
def toolkit_root(tmp_path: Path) -> Path:
    """Return a directory holding the sample toolkit sources."""
    root = tmp_path / "toolkit"
    for relative, text in TOOLKIT_FILES.items():
        write_file(root, relative, text)
    return root


@pytest.fixture
def options(toolkit_root: Path) -> AssemblyOptions:
    """Return default options rooted at the sample toolkit."""
    return AssemblyOptions(root=toolkit_root)


@pytest.fixture
def state(options: AssemblyOptions) -> AssemblyState:
    """Return a fresh assembly state for the sample toolkit."""
    return AssemblyState.fresh(options)


@pytest.fixture
def write() -> typ.Callable[[Path, str, str], Path]:
    """Return the helper that writes dedented source files."""
    return write_file
