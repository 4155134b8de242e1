"""Build and render the site navigation tree.

The indexer hands over a flat list of file paths; this module folds them into
a :class:`DirEntry` tree and renders that tree as a nested Markdown bullet
list with files listed before sub-directories at every level.

Example
-------
>>> root = build_navigation_tree(["a.md", "b/c.md"])
>>> print(render_navigation(root), end="")
- [A](/a.md)
- B
  - [C](/b/c.md)
"""

from __future__ import annotations

import posixpath
import re
import typing as typ
import unicodedata
from urllib.parse import quote

from wiki_pages.text import humanize

from .link_rewriter import replace_extension
from .models import DirEntry, FileEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import NavNode

DUPLICATE_SLASHES = re.compile(r"/{2,}")
URI_COMPONENT_SAFE = "-_.!~*'()"


def normalize_path(path: str) -> str:
    """Return ``path`` with forward slashes, no duplicates and no trailing slash."""
    normalized = DUPLICATE_SLASHES.sub("/", path.replace("\\", "/"))
    if len(normalized) > 1:
        normalized = normalized.rstrip("/")
    return normalized


def build_navigation_tree(
    files: cabc.Iterable[str],
    base_path: str = "",
    *,
    leaf_extension: str | None = None,
) -> DirEntry:
    """Fold ``files`` into a navigation tree.

    Parameters
    ----------
    files : Iterable[str]
        Paths relative to the wiki root, in any separator style.
    base_path : str, optional
        Prefix joined with each path to build the leaf URL.
    leaf_extension : str, optional
        Replacement extension for each leaf URL, such as ``".html"`` when the
        index links to exported pages. URLs keep their source extension when
        omitted.

    Returns
    -------
    DirEntry
        Unnamed root directory holding the whole tree.
    """
    root = DirEntry("")
    for file in files:
        path = normalize_path(file)
        directory = posixpath.dirname(path)
        components = [part for part in directory.split("/") if part]
        if components and components[0] == ".":
            components = components[1:]
        parent = root
        for component in components:
            parent = parent.child_dir(component)
        url = posixpath.normpath(posixpath.join(base_path, path))
        if leaf_extension is not None:
            url = replace_extension(url, leaf_extension)
        parent.children.append(FileEntry(posixpath.basename(path), url))
    return root


def _collation_key(name: str) -> str:
    """Return ``name`` case-folded with accents removed for alphabetical sorting."""
    decomposed = unicodedata.normalize("NFKD", name.casefold())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def _sort_key(node: NavNode) -> tuple[bool, str, str, str]:
    return (
        isinstance(node, DirEntry),
        _collation_key(node.name),
        node.name.casefold(),
        node.name,
    )


def _encode_url(url: str) -> str:
    parts = url.lstrip("/").split("/")
    return "/" + "/".join(quote(part, safe=URI_COMPONENT_SAFE) for part in parts)


def render_navigation(directory: DirEntry, level: int = 0) -> str:
    """Render the children of ``directory`` as a nested Markdown list.

    Each nesting level adds two spaces of indentation.
    """
    indent = "  " * level
    lines: list[str] = []
    for node in sorted(directory.children, key=_sort_key):
        match node:
            case FileEntry(name=name, url=url):
                label = humanize(posixpath.splitext(name)[0])
                lines.append(f"{indent}- [{label}]({_encode_url(url)})\n")
            case DirEntry():
                lines.append(f"{indent}- {humanize(node.name)}\n")
                lines.append(render_navigation(node, level + 1))
    return "".join(lines)


__all__ = ["build_navigation_tree", "normalize_path", "render_navigation"]
