"""Heading slug generation and anchor assignment.

``SlugRegistry`` turns heading text into URL-safe anchors that stay unique
within one registry. A registry is created per table-of-contents pass and per
Markdown conversion; running both over the same document yields the same
slug sequence, which is what lets TOC links resolve against heading ids.

Example
-------
>>> registry = SlugRegistry()
>>> registry.slug("Hello, World!")
'hello-world'
>>> registry.slug("Hello World")
'hello-world-1'
"""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

UNICODE_PUNCTUATION = f"{chr(0x2000)}-{chr(0x206F)}{chr(0x2E00)}-{chr(0x2E7F)}"
SLUG_STRIP_PATTERN = re.compile(
    rf"[{UNICODE_PUNCTUATION}\\'!\"#$%&()*+,./:;<=>?@\[\]^`{{|}}~]"
)
WHITESPACE_PATTERN = re.compile(r"\s+")
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})


class SlugRegistry:
    """Generate collision-free slugs for a single rendering pass."""

    def __init__(self) -> None:
        self._seen: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, slug: object) -> bool:
        return slug in self._seen

    def slug(self, value: str) -> str:
        """Return a unique slug for ``value`` and register it.

        Parameters
        ----------
        value : str
            Raw heading text.

        Returns
        -------
        str
            Lower-cased, punctuation-free, hyphenated slug. Repeats of an
            already registered slug receive ``-1``, ``-2``... suffixes.
        """
        slug = SLUG_STRIP_PATTERN.sub("", value.lower().strip())
        slug = WHITESPACE_PATTERN.sub("-", slug)
        if slug in self._seen:
            base = slug
            while slug in self._seen:
                self._seen[base] += 1
                slug = f"{base}-{self._seen[base]}"
        self._seen[slug] = 0
        return slug


class HeadingAnchorExtension(Extension):
    """Assign registry-generated ``id`` attributes to every heading."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading anchor treeprocessor ahead of inline parsing."""
        md.treeprocessors.register(
            HeadingAnchorTreeprocessor(md), "wiki_heading_anchors", 30
        )


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Set heading ids from the raw heading text before inline rendering."""

    def run(self, root: Element) -> Element:
        """Walk headings in document order and slug their source text."""
        registry = SlugRegistry()
        for element in root.iter():
            if element.tag in HEADING_TAGS and "id" not in element.attrib:
                element.set("id", registry.slug(element.text or ""))
        return root


__all__ = ["HeadingAnchorExtension", "SlugRegistry"]
