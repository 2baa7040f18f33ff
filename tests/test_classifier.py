"""Unit tests for material collection and sub-collection classification."""

from __future__ import annotations

import typing as typ

from toolkit_pages.assembly.classifier import (
    classify,
    classify_materials,
    material_directories,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

MATERIALS = ["src/materials/**/*"]


def test_material_directories_cover_every_level(toolkit_root: Path) -> None:
    """Directories at every depth under the material root are known."""
    directories = material_directories(toolkit_root, MATERIALS)
    assert directories == {"buttons", "components", "cards"}, (
        f"unexpected material directories {directories!r}"
    )


def test_top_level_material_is_never_a_sub_collection(toolkit_root: Path) -> None:
    """``materials/buttons/primary.html`` belongs to ``buttons`` directly."""
    classification = classify(
        toolkit_root / "src/materials/buttons/primary.html",
        {"buttons", "components", "cards"},
    )
    assert not classification.is_sub_collection
    assert classification.base == "buttons"
    assert classification.qualified_id == "primary"


def test_nested_material_is_a_sub_collection_when_parent_is_known(
    toolkit_root: Path,
) -> None:
    """A file whose grandparent is a material directory is nested."""
    path = toolkit_root / "src/materials/components/buttons/primary.html"
    nested = classify(path, {"components", "buttons"})
    assert nested.is_sub_collection
    assert nested.base == "components"
    assert nested.collection == "buttons"
    assert nested.qualified_id == "buttons.primary"

    flat = classify(path, {"buttons"})
    assert not flat.is_sub_collection, (
        "classification must follow the known directories, not the depth"
    )


def test_classify_materials_lists_files_in_sorted_order(
    toolkit_root: Path, write: typ.Callable[..., Path]
) -> None:
    """Materials are classified in lexicographic path order."""
    write(toolkit_root, "src/materials/buttons/02-secondary.html", "<button/>")
    write(toolkit_root, "src/materials/buttons/.draft.html", "<button/>")
    ids = [
        (item.base, item.qualified_id)
        for item in classify_materials(toolkit_root, MATERIALS)
    ]
    assert ids == [
        ("buttons", "secondary"),
        ("buttons", "primary"),
        ("components", "cards.basic"),
    ], f"unexpected classification order {ids!r}"


def test_deeper_nesting_collapses_to_the_immediate_parent(
    toolkit_root: Path, write: typ.Callable[..., Path]
) -> None:
    """Only the two nearest directories take part in classification."""
    write(toolkit_root, "src/materials/components/cards/wide/hero.html", "<div/>")
    deep = [
        item
        for item in classify_materials(toolkit_root, MATERIALS)
        if item.path.name == "hero.html"
    ]
    assert len(deep) == 1
    assert deep[0].base == "cards"
    assert deep[0].qualified_id == "wide.hero"
