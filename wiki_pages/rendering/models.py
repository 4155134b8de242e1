"""Shared dataclasses used by the rendering pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class RendererOptions:
    """Options controlling how a :class:`Renderer` emits links.

    Attributes
    ----------
    base_path : str
        Prefix joined with every file path listed in the generated index.
    is_export : bool
        When ``True`` internal links are rewritten to ``.html`` targets for
        static-site output.
    index_extension : str or None
        Extension swapped into every generated index link, for example
        ``".html"`` when the index points at exported pages. ``None`` keeps
        the source file names.
    """

    base_path: str = ""
    is_export: bool = False
    index_extension: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SearchResult:
    """A single ranked hit returned by an indexer."""

    ref: str
    score: float = 0.0


@dc.dataclass(slots=True)
class FileEntry:
    """Leaf of the navigation tree pointing at a rendered page."""

    name: str
    url: str


@dc.dataclass(slots=True)
class DirEntry:
    """Directory node of the navigation tree.

    ``children`` keeps insertion order; sorting happens at render time.
    """

    name: str
    children: list[NavNode] = dc.field(default_factory=list)

    def child_dir(self, name: str) -> DirEntry:
        """Return the sub-directory called ``name``, creating it when missing."""
        for child in self.children:
            if isinstance(child, DirEntry) and child.name == name:
                return child
        created = DirEntry(name)
        self.children.append(created)
        return created


NavNode = FileEntry | DirEntry


__all__ = [
    "DirEntry",
    "FileEntry",
    "NavNode",
    "RendererOptions",
    "SearchResult",
]
