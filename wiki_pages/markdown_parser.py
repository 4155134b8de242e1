r"""Scan Markdown documents for heading events.

The table-of-contents builder needs every heading of a document, in order,
with its raw source text. Rather than matching ``#`` lines with regular
expressions, this module runs Python-Markdown's preprocessors and block
parser so setext headings are recognised and ``#`` lines inside fenced code
are not. No inline processing or serialization happens.

Example
-------
>>> from wiki_pages.markdown_parser import scan_headings
>>> [h.raw for h in scan_headings("# Title\n\nBody\n\nDetails\n-------")]
['Title', 'Details']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markdown import Markdown

if typ.TYPE_CHECKING:
    import collections.abc as cabc

HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """Heading event emitted while scanning a document.

    Attributes
    ----------
    level : int
        Heading depth, ``1`` for ``<h1>``.
    raw : str
        Heading source text before inline Markdown is applied.
    """

    level: int
    raw: str


def scan_headings(markdown_text: str, md: Markdown | None = None) -> list[Heading]:
    """Return the headings of ``markdown_text`` in document order.

    Parameters
    ----------
    markdown_text : str
        Markdown source to scan.
    md : Markdown, optional
        Pre-configured instance whose preprocessors and block processors
        define what counts as a heading. A bare ``Markdown()`` is used when
        omitted.

    Returns
    -------
    list[Heading]
        One entry per heading element produced by the block parser.
    """
    parser = md or Markdown()
    lines = markdown_text.split("\n")
    for preprocessor in parser.preprocessors:
        lines = preprocessor.run(lines)
    root = parser.parser.parseDocument(lines).getroot()
    return list(_iter_headings(root))


def _iter_headings(root: typ.Any) -> cabc.Iterator[Heading]:
    for element in root.iter():
        level = HEADING_LEVELS.get(element.tag)
        if level is not None:
            yield Heading(level=level, raw=(element.text or "").strip())


__all__ = ["Heading", "scan_headings"]
