r"""Common literal values used across toolkit_pages.

These constants keep reserved front-matter keys, output folder names, and the
fragment wrappers centralized so the registry, bundler, and tests can import
the same values without drifting. Intended for internal use within the
toolkit_pages package.

Examples
--------
>>> from toolkit_pages import _constants
>>> _constants.COMMENT_START.format(id="buttons.primary")
"<!-- START 'buttons.primary' -->\n"
>>> _constants.BUNDLES_DIR
'bundles'
"""

NOTES_FIELD = "notes"
BUNDLE_FIELD = "bundle"
UPDATED_FIELD = "updated"
EXTENSION_FIELD = "extension"
LAYOUT_FIELD = "layout"
DEST_FIELD = "dest"
DEST_COPY_FIELD = "dest-copy"
LEGACY_EXPORT_FIELD = "websphere"

PAGE_EXTENSION = "html"
BODY_PLACEHOLDER = r"\{\%\s?body\s?\%\}"

HARD_RESET_OPEN = '<div class="hard-reset" data-toolkit>\n'
HARD_RESET_CLOSE = "\n</div>\n"
COMMENT_START = "<!-- START '{id}' -->\n"
COMMENT_END = "\n<!-- END '{id}' -->\n"

BUNDLES_DIR = "bundles"
TOOLKIT_ASSETS = ("assets", "toolkit")
