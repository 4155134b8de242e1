"""Index wiki files on disk and answer full-text queries.

:class:`Renderer` only relies on the :class:`Indexer` protocol. The
:class:`FileIndexer` shipped here satisfies it by globbing Markdown files
under a root directory and scoring documents by term frequency, with a boost
for matches in the document title.

Example
-------
>>> from wiki_pages.indexer import FileIndexer
>>> indexer = FileIndexer("docs")  # doctest: +SKIP
>>> [hit.ref for hit in indexer.search("install")]  # doctest: +SKIP
['getting-started.md', 'faq.md']
"""

from __future__ import annotations

import collections
import dataclasses as dc
import logging
import re
import typing as typ
from pathlib import Path

from ._constants import MARKDOWN_PATTERNS
from .rendering.models import SearchResult
from .text import humanize, strip_markdown

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import os

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\w+")
TITLE_PATTERN = re.compile(r"^#{1,6}[ \t]+(.+?)[ \t#]*$", re.MULTILINE)
TITLE_BOOST = 10


class Indexer(typ.Protocol):
    """Collaborator the renderer queries for files, contents and search hits."""

    def search(self, query: str) -> cabc.Sequence[SearchResult]:
        """Return hits for ``query`` ordered by decreasing relevance."""
        ...

    def get_content(self, ref: str) -> str:
        """Return the Markdown source of the document ``ref``."""
        ...

    def get_files(self) -> cabc.Sequence[str]:
        """Return the paths of every indexed document."""
        ...


@dc.dataclass(slots=True)
class _IndexedDocument:
    """Token counts kept for a single document."""

    title_terms: collections.Counter[str]
    body_terms: collections.Counter[str]


def tokenize(text: str) -> list[str]:
    """Split ``text`` into lower-cased word tokens."""
    return TOKEN_PATTERN.findall(text.lower())


class FileIndexer:
    """Serve Markdown files below ``root`` and search them in memory."""

    def __init__(
        self,
        root: str | os.PathLike[str],
        *,
        patterns: cabc.Sequence[str] = MARKDOWN_PATTERNS,
    ) -> None:
        self.root = Path(root)
        self.patterns = tuple(patterns)
        self._documents: dict[str, _IndexedDocument] | None = None

    def get_files(self) -> list[str]:
        """Return sorted POSIX paths of the matching files, relative to ``root``."""
        found: set[str] = set()
        for pattern in self.patterns:
            for path in self.root.glob(pattern):
                if path.is_file():
                    found.add(path.relative_to(self.root).as_posix())
        return sorted(found)

    def get_content(self, ref: str) -> str:
        """Return the text of ``ref``.

        Raises
        ------
        FileNotFoundError
            If ``ref`` does not exist below ``root``.
        """
        return (self.root / ref).read_text(encoding="utf-8")

    def search(self, query: str) -> list[SearchResult]:
        """Score every document against the terms of ``query``.

        Documents that match no term are dropped. Ties are ordered by ref so
        results are stable.
        """
        terms = tokenize(query)
        if not terms:
            return []
        results: list[SearchResult] = []
        for ref, document in self._index().items():
            score = sum(
                document.body_terms[term] + TITLE_BOOST * document.title_terms[term]
                for term in terms
            )
            if score:
                results.append(SearchResult(ref=ref, score=float(score)))
        results.sort(key=lambda result: (-result.score, result.ref))
        return results

    def refresh(self) -> None:
        """Drop the in-memory index so the next search rebuilds it."""
        self._documents = None

    def _index(self) -> dict[str, _IndexedDocument]:
        if self._documents is None:
            self._documents = {
                ref: self._build_document(ref) for ref in self.get_files()
            }
            logger.debug("Indexed %d documents under %s", len(self._documents), self.root)
        return self._documents

    def _build_document(self, ref: str) -> _IndexedDocument:
        content = self.get_content(ref)
        match = TITLE_PATTERN.search(content)
        title = match.group(1) if match else humanize(Path(ref).stem)
        return _IndexedDocument(
            title_terms=collections.Counter(tokenize(title)),
            body_terms=collections.Counter(tokenize(strip_markdown(content))),
        )


__all__ = ["FileIndexer", "Indexer", "tokenize"]
