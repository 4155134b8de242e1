"""Fenced code block handling for the wiki Markdown pipeline.

Fenced blocks are pulled out of the source before Python-Markdown parses
blocks, rendered through a caller-supplied callback and stashed as raw HTML.
Stashing keeps the rendered markup (Mermaid diagrams in particular) out of
reach of the inline processors.
"""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

if typ.TYPE_CHECKING:
    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any

FENCED_BLOCK_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[ ]*(?P<lang>[\w#.+-]*)[^\n]*\n"
    r"(?P<code>.*?)(?<=\n)(?P=fence)[ ]*$",
    re.MULTILINE | re.DOTALL,
)

BlockRenderer = typ.Callable[[str, str | None], str]


class FencedBlockExtension(Extension):
    """Replace fenced code blocks with HTML produced by ``render_block``."""

    def __init__(self, render_block: BlockRenderer) -> None:
        super().__init__()
        self.render_block = render_block

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the fenced block preprocessor ahead of HTML block detection."""
        md.registerExtension(self)
        md.preprocessors.register(
            FencedBlockPreprocessor(md, self.render_block), "wiki_fenced_code", 25
        )


class FencedBlockPreprocessor(Preprocessor):
    """Swap each fenced block for a raw-HTML placeholder."""

    def __init__(self, md: Markdown, render_block: BlockRenderer) -> None:
        super().__init__(md)
        self.render_block = render_block

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with every fenced block rendered and stashed."""
        text = "\n".join(lines)
        while match := FENCED_BLOCK_PATTERN.search(text):
            code = match.group("code").removesuffix("\n")
            html = self.render_block(code, match.group("lang") or None)
            replacement = self.md.htmlStash.store(html) if html else ""
            text = f"{text[: match.start()]}\n\n{replacement}\n\n{text[match.end() :]}"
        return text.split("\n")


__all__ = [
    "FENCED_BLOCK_PATTERN",
    "FencedBlockExtension",
    "FencedBlockPreprocessor",
]
