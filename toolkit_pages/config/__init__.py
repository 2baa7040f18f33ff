"""Load and validate assembly options for toolkit builds.

This subpackage parses the project's options YAML file, applies defaults for
every source glob, and produces the :class:`AssemblyOptions` dataclass that
the assembly pipeline consumes. The primary entry point is
:func:`load_options`; programmatic callers can also construct
:class:`AssemblyOptions` directly.

Examples
--------
>>> from pathlib import Path
>>> from toolkit_pages.config import AssemblyOptions, load_options
>>> AssemblyOptions().keys.views
'views'
>>> options = load_options(Path("toolkit.yaml"))  # doctest: +SKIP
>>> options.output_dir  # doctest: +SKIP
PosixPath('dist')
"""

from toolkit_pages.errors import AssemblyConfigError

from .loader import load_options
from .models import AssemblyOptions, ContextKeys

__all__ = ["AssemblyConfigError", "AssemblyOptions", "ContextKeys", "load_options"]
