"""Common literal values used across wiki_pages.

These constants keep directive names, search limits and markup identifiers
centralized so the renderer, the Markdown extensions and the tests import the
same values without drifting.

Examples
--------
>>> from wiki_pages import _constants
>>> _constants.SEARCH_RESULTS_MAX
10
>>> _constants.TOC_CONTAINER_ID
'_toc'
"""

SEARCH_RESULTS_MAX = 10
SEARCH_EXTRACT_LENGTH = 400
SEARCH_EXTRACT_ELLIPSIS = " [...]"

TOC_CONTAINER_ID = "_toc"
MERMAID_LANGUAGE = "mermaid"
NO_HIGHLIGHT_LANGUAGE = "no-highlight"
IMAGE_LINK_TARGET = "_new"
EXPORT_EXTENSION = ".html"
MARKDOWN_PATTERNS = ("**/*.md",)
