"""Behaviour tests for merging views into layouts.

The scenarios write a toolkit with a card material nested in a
sub-collection, add a view that renders the card through the ``material``
helper, and assert on the assembled HTML. A second scenario checks that a
hidden view in a view collection is still written while being flagged as
excluded in the views tree.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_page_assembly.py -v

Prerequisites:
    - The test extra (pytest-bdd and BeautifulSoup) installed.
    - Access to the feature file at ``features/page_assembly.feature`` within
      this repository.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from toolkit_pages.assembly.pipeline import run
from toolkit_pages.config import AssemblyOptions

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "page_assembly.feature"
)
scenarios(FEATURE_FILE)


def _write(root: Path, relative: str, text: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a toolkit with a card material in a sub-collection")
def given_card_material(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write a layout and a card nested under ``components/cards``.

    Parameters
    ----------
    tmp_path : Path
        Temporary directory provided by pytest for the toolkit sources.
    scenario_state : dict[str, object]
        Mutable state shared across steps; receives the toolkit ``root``.
    """
    root = tmp_path / "toolkit"
    _write(
        root,
        "src/views/layouts/default.html",
        """\
        <html>
        <head><title>{{ title }}</title></head>
        <body>{% body %}</body>
        </html>
        """,
    )
    _write(
        root,
        "src/materials/components/cards/feature.html",
        """\
        ---
        heading: Default heading
        ---
        <article class="card"><h2>{{ heading }}</h2></article>
        """,
    )
    scenario_state["root"] = root


@given("a view that includes the card with its own heading")
def given_view_with_card(scenario_state: dict[str, object]) -> None:
    """Write a view that overrides the card's namespaced data."""
    root: Path = scenario_state["root"]  # type: ignore[assignment]
    _write(
        root,
        "src/views/index.html",
        """\
        ---
        title: Gallery
        ---
        {{ material("cards.feature", cards_feature={"heading": "Spotlight"}) }}
        """,
    )
    scenario_state["page"] = Path("index.html")


@given("a hidden view in a view collection")
def given_hidden_view(scenario_state: dict[str, object]) -> None:
    """Write a hidden view under the ``patterns`` view collection."""
    root: Path = scenario_state["root"]  # type: ignore[assignment]
    _write(
        root,
        "src/views/patterns/__draft.html",
        """\
        ---
        title: Draft
        ---
        {{ material("cards.feature") }}
        """,
    )
    scenario_state["page"] = Path("patterns") / "__draft.html"


@when("I assemble the toolkit")
def when_assemble(scenario_state: dict[str, object]) -> None:
    """Run the assembly and keep the resulting state."""
    root: Path = scenario_state["root"]  # type: ignore[assignment]
    options = AssemblyOptions(root=root)
    state, written = run(options)
    scenario_state["state"] = state
    scenario_state["written"] = written
    page: Path = scenario_state["page"]  # type: ignore[assignment]
    scenario_state["page_path"] = options.output_dir / page


@then("the page shows the card with the overridden heading")
def then_card_overridden(scenario_state: dict[str, object]) -> None:
    """Verify the helper override replaced the card's own heading."""
    page_path: Path = scenario_state["page_path"]  # type: ignore[assignment]
    soup = BeautifulSoup(page_path.read_text(encoding="utf-8"), "html.parser")
    heading = soup.select_one("article.card h2")
    assert heading is not None, "expected the card heading on the page"
    assert heading.get_text() == "Spotlight", (
        f"expected the overridden heading 'Spotlight', got {heading.get_text()!r}"
    )


@then("the page keeps the layout title")
def then_layout_title(scenario_state: dict[str, object]) -> None:
    """Verify the view's front matter reached the layout."""
    page_path: Path = scenario_state["page_path"]  # type: ignore[assignment]
    soup = BeautifulSoup(page_path.read_text(encoding="utf-8"), "html.parser")
    assert soup.title is not None, "expected a <title> element"
    assert soup.title.get_text() == "Gallery"


@then("the hidden view is written to its collection folder")
def then_hidden_view_written(scenario_state: dict[str, object]) -> None:
    """Verify hidden views are assembled like any other view."""
    page_path: Path = scenario_state["page_path"]  # type: ignore[assignment]
    assert page_path in scenario_state["written"], (  # type: ignore[operator]
        f"expected {page_path} to be written"
    )
    soup = BeautifulSoup(page_path.read_text(encoding="utf-8"), "html.parser")
    heading = soup.select_one("article.card h2")
    assert heading is not None
    assert heading.get_text() == "Default heading"


@then("the hidden view is flagged as excluded")
def then_hidden_view_flagged(scenario_state: dict[str, object]) -> None:
    """Verify the views tree marks the hidden view as excluded."""
    state = scenario_state["state"]
    collection = state.views["patterns"]  # type: ignore[attr-defined]
    view = collection.items["__draft"]
    assert view.exclude is True, "expected the hidden view to be excluded"
    assert collection.name == "Patterns"
