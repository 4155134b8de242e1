"""Utilities for rendering markdown and syntax-highlighted code snippets."""

from __future__ import annotations

import logging
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from wiki_pages._constants import MERMAID_LANGUAGE, NO_HIGHLIGHT_LANGUAGE
from wiki_pages.markdown_parser import Heading, scan_headings

from .code_blocks import FencedBlockExtension

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

logger = logging.getLogger(__name__)

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
BASE_EXTENSIONS = ("tables", "sane_lists", "smarty")


class HtmlContentRenderer:
    """Render markdown and code snippets with consistent styling."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with the pygments style used for code blocks.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(
        self,
        text: str,
        *,
        extensions: cabc.Sequence[Extension] = (),
        tab_length: int = 4,
    ) -> str:
        """Render markdown into HTML using the base and supplied extensions.

        Parameters
        ----------
        text : str
            Markdown source.
        extensions : Sequence[Extension], optional
            Extra Python-Markdown extensions appended after the base set.
        tab_length : int, optional
            Indentation width of one nesting level; generated navigation lists
            use ``2``.

        Returns
        -------
        str
            Rendered HTML, or ``""`` for blank input.
        """
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        md = self.build_markdown(extensions, tab_length=tab_length)
        return md.convert(normalized)

    def scan_headings(self, text: str) -> list[Heading]:
        """Return the headings of ``text`` as the converter would see them."""
        normalized = self._normalize_fenced_blocks(text)
        return scan_headings(normalized, self.build_markdown(highlight_code=False))

    def build_markdown(
        self,
        extensions: cabc.Sequence[Extension] = (),
        *,
        tab_length: int = 4,
        highlight_code: bool = True,
    ) -> Markdown:
        """Return a configured ``Markdown`` instance.

        With ``highlight_code`` disabled fenced blocks are dropped instead of
        rendered, which is what heading scans want.
        """
        render_block = self.code_block if highlight_code else _discard_block
        return Markdown(
            extensions=[
                FencedBlockExtension(render_block),
                *BASE_EXTENSIONS,
                *extensions,
            ],
            output_format="html",
            tab_length=tab_length,
        )

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` into HTML according to its fence language.

        Parameters
        ----------
        code : str
            Source snippet.
        language : str, optional
            Fence language tag. ``mermaid`` emits the snippet verbatim in a
            ``<p class="mermaid">`` wrapper; a tag unknown to Pygments emits
            the escaped snippet without highlighting.

        Returns
        -------
        str
            HTML for the block. Highlighted blocks carry ``data-language``
            metadata.
        """
        if language == MERMAID_LANGUAGE:
            return f'<p class="mermaid">{code}</p>'
        if not language or language == NO_HIGHLIGHT_LANGUAGE:
            return _plain_block(code, language)
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            logger.warning("Unsupported language for highlighting: %s", language)
            return _plain_block(code, language)
        html = highlight(code, lexer, self._formatter).rstrip("\n")
        return self._attach_language_attribute(html, language)

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        """Add a single language attribute to an already highlighted block."""
        safe_lang = escape(language or "text", quote=True)

        def _repl(match: re.Match[str]) -> str:
            return f'<div class="codehilite" data-language="{safe_lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, 1)

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _plain_block(code: str, language: str | None) -> str:
    """Return an unhighlighted ``<pre><code>`` block."""
    if language:
        css_class = escape(f"language-{language}", quote=True)
        return f'<pre><code class="{css_class}">{escape(code)}</code></pre>'
    return f"<pre><code>{escape(code)}</code></pre>"


def _discard_block(_code: str, _language: str | None) -> str:
    return ""


__all__ = ["HtmlContentRenderer"]
