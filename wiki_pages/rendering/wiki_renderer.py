"""High-level orchestration for rendering wiki pages.

This module exposes :class:`Renderer`, which turns wiki files, source code
files, search results and the generated site index into HTML. Every entry
point builds or reads Markdown and funnels it through
:meth:`Renderer.render_markdown`, where ``HtmlContentRenderer`` applies code
highlighting and the wiki extensions expand directives, assign heading anchors
and rewrite links.

Example
-------
>>> import asyncio
>>> from wiki_pages.indexer import FileIndexer
>>> from wiki_pages.rendering import Renderer, RendererOptions
>>> renderer = Renderer(FileIndexer("docs"), RendererOptions())  # doctest: +SKIP
>>> asyncio.run(renderer.render_file("docs/index.md"))  # doctest: +SKIP
'<h1 id="welcome">Welcome</h1>...'
"""

from __future__ import annotations

import asyncio
import functools
import logging
import re
import textwrap
import typing as typ
from html import escape
from pathlib import Path

from wiki_pages._constants import (
    SEARCH_EXTRACT_ELLIPSIS,
    SEARCH_EXTRACT_LENGTH,
    SEARCH_RESULTS_MAX,
    TOC_CONTAINER_ID,
)
from wiki_pages.text import strip_markdown

from .directives import DirectiveExtension
from .link_rewriter import WikiLinkExtension, strip_link_markup
from .models import RendererOptions
from .navigation import build_navigation_tree, render_navigation
from .renderer import HtmlContentRenderer
from .slugs import HeadingAnchorExtension, SlugRegistry

if typ.TYPE_CHECKING:
    import os

    from wiki_pages.indexer import Indexer

logger = logging.getLogger(__name__)

INDEX_TOKEN_PATTERN = re.compile(r"\[\[(index)\]\]", re.IGNORECASE)
NAV_TAB_LENGTH = 2


class Renderer:
    """Render wiki documents, code files, search results and the site index."""

    def __init__(
        self,
        indexer: Indexer,
        options: RendererOptions | None = None,
        *,
        pygments_style: str = "monokai",
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        indexer : Indexer
            Source of the file list, document contents and search hits.
        options : RendererOptions, optional
            Link options; defaults to a non-export renderer with no base path.
        pygments_style : str, optional
            Pygments style used for highlighted code blocks.
        """
        self.indexer = indexer
        self.options = options or RendererOptions()
        self.search_results: str | None = None
        self.content_renderer = HtmlContentRenderer(pygments_style)

    async def render_raw(self, path: str | os.PathLike[str]) -> str:
        """Return the text of ``path`` untouched.

        Raises
        ------
        OSError
            If the file cannot be read.
        """
        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")

    async def render_file(self, path: str | os.PathLike[str]) -> str:
        """Render a wiki page with an inline table of contents appended."""
        logger.debug("Rendering page %s", path)
        content = await self.render_raw(path)
        return self.render_markdown(f"{content}\n\n[[itoc]]")

    async def render_code(self, path: str | os.PathLike[str]) -> str:
        """Render a source file as a highlighted code block.

        The fence language is the file extension without its dot.
        """
        logger.debug("Rendering code file %s", path)
        language = Path(path).suffix[1:]
        content = await self.render_raw(path)
        return self.render_markdown(f"```{language}\n{content}\n```")

    async def render_search(self, query: str) -> str:
        """Render the top search hits for ``query`` as linked excerpts.

        Side effect: ``search_results`` holds a summary such as
        ``"Search results (3)"`` or ``"Search results (first 10 of 15)"``.
        """
        results = list(self.indexer.search(query))
        total = len(results)
        summary = "Search results ("
        if total > SEARCH_RESULTS_MAX:
            results = results[:SEARCH_RESULTS_MAX]
            summary += f"first {SEARCH_RESULTS_MAX} of "
        self.search_results = f"{summary}{total})"
        logger.debug("Search %r matched %d documents", query, total)

        if not total:
            return self.render_markdown("No results.")
        content = "".join(
            f"[{result.ref}]({result.ref})\n> {self._excerpt(result.ref)}\n\n"
            for result in results
        )
        return self.render_markdown(content)

    def render_index(self) -> str:
        """Render every indexed file as a nested navigation list."""
        tree = build_navigation_tree(
            self.indexer.get_files(),
            self.options.base_path,
            leaf_extension=self.options.index_extension,
        )
        return self.render_markdown(
            render_navigation(tree), tab_length=NAV_TAB_LENGTH
        )

    def toc_markdown(
        self, content: str, skip_first: bool
    ) -> tuple[str, SlugRegistry]:
        """Build the Markdown list behind a table of contents.

        Parameters
        ----------
        content : str
            Full Markdown source of the document.
        skip_first : bool
            Omit the first heading of the document when it is a level-1
            title.

        Returns
        -------
        tuple[str, SlugRegistry]
            One list line per retained heading, indented two spaces per level
            below ``h1``, and the registry holding every slug generated,
            skipped headings included.
        """
        registry = SlugRegistry()
        lines: list[str] = []
        for heading in self.content_renderer.scan_headings(content):
            text = strip_link_markup(heading.raw)
            slug = registry.slug(heading.raw)
            if skip_first:
                skip_first = False
                if heading.level == 1:
                    continue
            lines.append(f"{'  ' * (heading.level - 1)}- [{text}](#{slug})\n")
        return "".join(lines), registry

    def render_table_of_contents(self, content: str, skip_first: bool) -> str:
        """Render the table of contents of ``content``.

        Returns ``""`` when the document has fewer than two headings.
        """
        toc, registry = self.toc_markdown(content, skip_first)
        if len(registry) <= 1:
            return ""
        toc = _clamp_indents(textwrap.dedent(toc))
        return self.render_markdown(toc, tab_length=NAV_TAB_LENGTH)

    def render_markdown(self, content: str, *, tab_length: int = 4) -> str:
        """Convert ``content`` to HTML with directives, anchors and link rewriting."""
        extensions = [
            DirectiveExtension(functools.partial(self._expand_directive, content)),
            HeadingAnchorExtension(),
            WikiLinkExtension(self.options.is_export),
        ]
        return self.content_renderer.markdown(
            content, extensions=extensions, tab_length=tab_length
        )

    def _expand_directive(self, source: str, directive: str) -> str:
        """Return the HTML standing in for ``directive`` within ``source``."""
        match directive:
            case "toc":
                return self.render_table_of_contents(source, skip_first=True)
            case "itoc":
                toc = self.render_table_of_contents(source, skip_first=False)
                return f'<div id="{TOC_CONTAINER_ID}">{toc}</div>' if toc else ""
            case "index":
                return self.render_index()
            case _:
                msg = f"Unknown directive: {directive}"
                raise ValueError(msg)

    def _excerpt(self, ref: str) -> str:
        """Return a one-line plain-text excerpt of the document ``ref``."""
        extract = strip_markdown(self.indexer.get_content(ref))
        extract = " ".join(extract.split()).replace("`", "")
        extract = escape(extract, quote=False)
        extract = INDEX_TOKEN_PATTERN.sub(r"&#91;&#91;\1]]", extract)
        if len(extract) > SEARCH_EXTRACT_LENGTH:
            extract = extract[:SEARCH_EXTRACT_LENGTH] + SEARCH_EXTRACT_ELLIPSIS
        return extract


def _clamp_indents(markdown: str) -> str:
    """Limit each list line to one nesting level below the line before it.

    A first heading deeper than later ones, or a skipped heading level, would
    otherwise leave lines indented far enough to parse as code blocks.
    """
    lines: list[str] = []
    previous = -NAV_TAB_LENGTH
    for line in markdown.splitlines(keepends=True):
        stripped = line.lstrip(" ")
        indent = min(len(line) - len(stripped), previous + NAV_TAB_LENGTH)
        lines.append(" " * indent + stripped)
        previous = indent
    return "".join(lines)


__all__ = ["Renderer"]
