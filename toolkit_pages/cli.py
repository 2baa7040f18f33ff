"""Cyclopts CLI entrypoint for assembling a pattern-library toolkit.

The ``toolkit-pages`` console script reads an options file (``toolkit.yaml``
by default), assembles layouts, materials, views, and docs into the output
directory, and prints every page and bundle it wrote.

Examples
--------
Assemble with the default options file:

>>> from toolkit_pages.cli import main
>>> main()  # doctest: +SKIP

Assemble into a custom directory and log failures instead of exiting:

>>> from toolkit_pages.cli import app
>>> app.run(["assemble", "--dest", "build", "--log-errors"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .assembly.pipeline import assemble as assemble_toolkit
from .config import load_options

DEFAULT_CONFIG = Path("toolkit.yaml")

app = App(name="toolkit-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Assemble views, materials, and bundles into the output folder.")
def assemble(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the toolkit options file", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    dest: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_DEST"),
    ] = None,
    log_errors: typ.Annotated[
        bool,
        Parameter(help="Log failures instead of exiting", env_var="INPUT_LOG_ERRORS"),
    ] = False,
) -> None:
    """Assemble the toolkit described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the options file (overridable via ``INPUT_CONFIG``).
    dest : Path or None, optional
        Output directory overriding the file's ``dest``.
    log_errors : bool, optional
        Log failures and return instead of exiting with status 1. Only
        overrides the file when set.

    Returns
    -------
    None
        Writes the assembled files and prints each path.
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    options = load_options(config, dest=dest, log_errors=log_errors or None)
    for path in assemble_toolkit(options):
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `toolkit-pages` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
