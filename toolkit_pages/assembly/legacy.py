"""Optional exporters that repackage bundles for legacy CMS platforms.

Exporters are plugins: the bundler calls ``export(target, html)`` only for
items whose front matter sets the legacy export flag, and treats every
failure as non-fatal. :class:`WebSphereWidgetExporter` is the default
implementation; it emits a WebSphere Commerce widget skeleton (JSP, JSPF, and
properties files plus copied assets) under
``<dest>/bundles/websphere/Stores/WebContent``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from toolkit_pages._constants import BUNDLES_DIR
from toolkit_pages.errors import LegacyExportError
from toolkit_pages.naming import title_case

from .assets import copy_optional, toolkit_asset

if typ.TYPE_CHECKING:
    from .bundler import BundleTarget

REQUIRED_SETTINGS = ("webcontent_folder", "widgets_namespace", "widget_prefix")


class LegacyWidgetExporter(typ.Protocol):
    """Plugin interface for legacy bundle exports."""

    def export(self, target: BundleTarget, html: str) -> None:
        """Write the legacy representation of ``target``."""
        ...


class WebSphereWidgetExporter:
    """Write WebSphere Commerce widget files for a bundled material."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the exporter and its Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory holding the ``websphere/*.jinja`` templates. Defaults to
            the package templates.
        """
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            keep_trailing_newline=True,
        )

    @staticmethod
    def _settings(target: BundleTarget) -> dict[str, typ.Any]:
        config = target.settings.get("websphere_config")
        if not isinstance(config, dict):
            msg = "globals.websphere_config doesn't exist!"
            raise LegacyExportError(msg)
        missing = [key for key in REQUIRED_SETTINGS if key not in config]
        if missing:
            msg = f"globals.websphere_config is missing {', '.join(missing)}"
            raise LegacyExportError(msg)
        return config

    def _write(self, path: Path, template: str, **context: typ.Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        text = self.env.get_template(f"websphere/{template}").render(**context)
        path.write_text(text, encoding="utf-8")

    def export(self, target: BundleTarget, html: str) -> None:
        """Write the widget skeleton for ``target``.

        Raises
        ------
        LegacyExportError
            If ``globals.websphere_config`` is absent or incomplete.
        OSError
            If a widget file cannot be written.
        """
        config = self._settings(target)
        base_name = target.base_name
        widget_name = (
            f"{config['widget_prefix']}{title_case(base_name).replace(' ', '')}Widget"
        )
        widgets_folder = f"Widgets-{config['webcontent_folder']}"
        web_content = (
            target.output_root / BUNDLES_DIR / "websphere" / "Stores" / "WebContent"
            / widgets_folder
        )
        widget_path = web_content / f"{config['widgets_namespace']}.{widget_name}"
        context = {
            "widget_name": widget_name,
            "widgets_folder": widgets_folder,
            "base_name": base_name,
            "display_name": title_case(base_name),
            "html": html,
        }

        self._write(widget_path / f"{widget_name}.jsp", "widget.jsp.jinja", **context)
        self._write(widget_path / f"{widget_name}_UI.jspf", "ui.jspf.jinja", **context)
        self._write(widget_path / f"{widget_name}_Data.jspf", "data.jspf.jinja", **context)

        javascript_path = widget_path / "javascript"
        javascript_path.mkdir(parents=True, exist_ok=True)
        copy_optional(
            toolkit_asset(target.output_root, "scripts", "bundles", f"{base_name}.js"),
            javascript_path / f"{base_name}.js",
        )

        styles_path = web_content / "Common" / "styles"
        scripts_path = web_content / "Common" / "scripts"
        styles_path.mkdir(parents=True, exist_ok=True)
        scripts_path.mkdir(parents=True, exist_ok=True)
        for parts, destination in (
            (("styles", "bundles", f"{base_name}.css"), styles_path / f"{base_name}.css"),
            (("styles", "toolkit.css"), styles_path / "toolkit.css"),
            (("styles", "vendor", "vendor.css"), styles_path / "vendor.css"),
            (("scripts", "toolkit.js"), scripts_path / "toolkit.js"),
            (("scripts", "vendor", "vendor.js"), scripts_path / "vendor.js"),
        ):
            copy_optional(toolkit_asset(target.output_root, *parts), destination)

        (web_content / "images").mkdir(parents=True, exist_ok=True)
        properties = web_content / "Properties"
        for suffix in ("_text", "_text_en_US"):
            self._write(
                properties / f"{widget_name}{suffix}.properties",
                "text.properties.jinja",
                **context,
            )


__all__ = ["LegacyWidgetExporter", "WebSphereWidgetExporter"]
