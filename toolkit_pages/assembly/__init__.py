"""Material registry, context assembly, bundling, and page rendering."""

from __future__ import annotations

from .context import build_context
from .pipeline import assemble, run
from .state import AssemblyState

__all__ = ["AssemblyState", "assemble", "build_context", "run"]
