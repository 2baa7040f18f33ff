"""Unit tests for the WebSphere widget exporter."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from toolkit_pages.assembly.bundler import BundleTarget
from toolkit_pages.assembly.legacy import WebSphereWidgetExporter
from toolkit_pages.assembly.models import ItemNode
from toolkit_pages.errors import LegacyExportError

if typ.TYPE_CHECKING:
    from pathlib import Path

SETTINGS = {
    "websphere_config": {
        "webcontent_folder": "Toolkit",
        "widgets_namespace": "com.example",
        "widget_prefix": "TK",
    }
}


def _target(output_root: Path, settings: dict[str, typ.Any]) -> BundleTarget:
    return BundleTarget(
        fragment_id="cta-banner",
        base_name="cta-banner",
        source=output_root / "src" / "cta-banner.html",
        item=ItemNode(name="Cta Banner", notes="", data={}, exclude=False, bundle=True),
        output_root=output_root,
        settings=settings,
    )


def test_export_writes_widget_skeleton(tmp_path: Path) -> None:
    """The JSP, JSPF, and properties files land under the widget folder."""
    scripts = tmp_path / "assets" / "toolkit" / "scripts" / "bundles"
    scripts.mkdir(parents=True)
    (scripts / "cta-banner.js").write_text("init();", encoding="utf-8")

    WebSphereWidgetExporter().export(
        _target(tmp_path, SETTINGS), '<section class="cta">Go</section>'
    )

    web_content = (
        tmp_path / "bundles" / "websphere" / "Stores" / "WebContent" / "Widgets-Toolkit"
    )
    widget = web_content / "com.example.TKCtaBannerWidget"
    jsp = (widget / "TKCtaBannerWidget.jsp").read_text(encoding="utf-8")
    assert "${TKCtaBannerWidget_text}" in jsp
    assert "/Widgets-Toolkit/Common/styles/cta-banner.css" in jsp

    ui = (widget / "TKCtaBannerWidget_UI.jspf").read_text(encoding="utf-8")
    soup = BeautifulSoup(ui, "html.parser")
    container = soup.select_one("#widgetExample section.cta")
    assert container is not None, "expected the rendered bundle inside the widget UI"
    assert container.get_text() == "Go"

    assert (widget / "TKCtaBannerWidget_Data.jspf").exists()
    assert (widget / "javascript" / "cta-banner.js").read_text(encoding="utf-8") == (
        "init();"
    )
    assert (web_content / "images").is_dir()
    for suffix in ("_text", "_text_en_US"):
        properties = web_content / "Properties" / f"TKCtaBannerWidget{suffix}.properties"
        assert "WidgetTypeDisplayText_TKCtaBannerWidget=Cta Banner widget" in (
            properties.read_text(encoding="utf-8")
        )


def test_export_requires_websphere_config(tmp_path: Path) -> None:
    """Missing configuration is reported as a LegacyExportError."""
    with pytest.raises(LegacyExportError, match="websphere_config"):
        WebSphereWidgetExporter().export(_target(tmp_path, {}), "<p></p>")


def test_export_reports_missing_keys(tmp_path: Path) -> None:
    """Every missing setting is named in the error."""
    settings = {"websphere_config": {"webcontent_folder": "Toolkit"}}
    with pytest.raises(LegacyExportError) as excinfo:
        WebSphereWidgetExporter().export(_target(tmp_path, settings), "<p></p>")
    assert "widgets_namespace" in str(excinfo.value)
    assert "widget_prefix" in str(excinfo.value)
