"""Exception types and the top-level failure handler for toolkit assembly.

Every error raised by the engine derives from :class:`AssemblyError` so
callers can catch one type. :func:`handle_error` is the single place where a
failed run is reported: it forwards the exception to the caller-supplied
``on_error`` callback, logs it when ``log_errors`` is enabled, and only exits
the process when neither of those fired.

Examples
--------
>>> from pathlib import Path
>>> err = ParseError(Path("src/materials/buttons/primary.html"), "bad indent")
>>> str(err)
"Unable to parse 'src/materials/buttons/primary.html': bad indent"
"""

from __future__ import annotations

import logging
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import AssemblyOptions

logger = logging.getLogger("toolkit_pages")


class AssemblyError(RuntimeError):
    """Base class for failures raised while assembling a toolkit."""


class ParseError(AssemblyError):
    """Raised when front matter or a data file cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to parse '{path}': {reason}")


class FragmentCollisionError(AssemblyError):
    """Raised when two sources normalize to the same fragment id."""

    def __init__(self, fragment_id: str, first: Path | str, second: Path | str) -> None:
        self.fragment_id = fragment_id
        self.first = first
        self.second = second
        super().__init__(
            f"Fragment id '{fragment_id}' is produced by both '{first}' and '{second}'."
        )


class LegacyExportError(AssemblyError):
    """Raised when a legacy widget export is misconfigured or fails."""


class AssemblyConfigError(AssemblyError, ValueError):
    """Raised when assembly options are invalid or incomplete."""


def handle_error(exc: BaseException, options: AssemblyOptions) -> None:
    """Report a failed run through the configured channels.

    Parameters
    ----------
    exc : BaseException
        The error that aborted the run. It is passed through unchanged so the
        original message and traceback are preserved.
    options : AssemblyOptions
        Options providing ``on_error`` and ``log_errors``.

    Raises
    ------
    SystemExit
        With status ``1`` when no callback was supplied and logging is
        disabled.
    """
    handled = False
    if callable(options.on_error):
        options.on_error(exc)
        handled = True
    if options.log_errors:
        logger.error("Error (toolkit-pages): %s", exc, exc_info=exc)
        handled = True
    if not handled:
        logger.error("Error (toolkit-pages): %s", exc, exc_info=exc)
        raise SystemExit(1) from exc


__all__ = [
    "AssemblyConfigError",
    "AssemblyError",
    "FragmentCollisionError",
    "LegacyExportError",
    "ParseError",
    "handle_error",
]
