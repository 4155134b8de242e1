"""Shared fixtures for the wiki_pages test suite.

``StubIndexer`` stands in for the search indexer so renderer tests control
the file list, the document contents and the ranked hits without touching the
filesystem. ``make_renderer`` builds a :class:`Renderer` around one.
"""

from __future__ import annotations

import typing as typ

import pytest

from wiki_pages.rendering import Renderer, RendererOptions, SearchResult

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class StubIndexer:
    """In-memory indexer returning canned files, contents and hits."""

    def __init__(
        self,
        files: cabc.Sequence[str] = (),
        contents: cabc.Mapping[str, str] | None = None,
        hits: cabc.Sequence[SearchResult] = (),
    ) -> None:
        self.files = list(files)
        self.contents = dict(contents or {})
        self.hits = list(hits)
        self.queries: list[str] = []

    def search(self, query: str) -> list[SearchResult]:
        self.queries.append(query)
        return list(self.hits)

    def get_content(self, ref: str) -> str:
        return self.contents[ref]

    def get_files(self) -> list[str]:
        return list(self.files)


@pytest.fixture
def make_renderer() -> cabc.Callable[..., Renderer]:
    """Return a factory building renderers over a ``StubIndexer``."""

    def _factory(
        *,
        files: cabc.Sequence[str] = (),
        contents: cabc.Mapping[str, str] | None = None,
        hits: cabc.Sequence[SearchResult] = (),
        base_path: str = "",
        is_export: bool = False,
    ) -> Renderer:
        indexer = StubIndexer(files, contents, hits)
        options = RendererOptions(base_path=base_path, is_export=is_export)
        return Renderer(indexer, options)

    return _factory
