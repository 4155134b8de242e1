"""Expand ``[[toc]]``, ``[[itoc]]`` and ``[[index]]`` paragraph directives.

The block processor sits just ahead of the paragraph processor. When a
paragraph block holds a line starting with a directive token, the block is
split: surrounding text goes back to the parser as ordinary paragraphs and the
directive is replaced by the HTML returned from the expansion callback.
"""

from __future__ import annotations

import re
import typing as typ

from markdown.blockprocessors import BlockProcessor
from markdown.extensions import Extension

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
    from markdown.blockparser import BlockParser
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    BlockParser = typ.Any
    Element = typ.Any

DIRECTIVE_PATTERN = re.compile(r"^\[\[(toc|itoc|index)\]\]", re.IGNORECASE)

DirectiveExpander = typ.Callable[[str], str]


class DirectiveExtension(Extension):
    """Register the directive block processor with an expansion callback."""

    def __init__(self, expand: DirectiveExpander) -> None:
        super().__init__()
        self.expand = expand

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the processor one step above the paragraph processor."""
        md.parser.blockprocessors.register(
            DirectiveBlockProcessor(md.parser, self.expand), "wiki_directives", 11
        )


class DirectiveBlockProcessor(BlockProcessor):
    """Replace directive lines with generated HTML."""

    def __init__(self, parser: BlockParser, expand: DirectiveExpander) -> None:
        super().__init__(parser)
        self.expand = expand

    def test(self, parent: Element, block: str) -> bool:
        return any(DIRECTIVE_PATTERN.match(line) for line in block.split("\n"))

    def run(self, parent: Element, blocks: list[str]) -> None:
        block = blocks.pop(0)
        pieces: list[str] = []
        pending: list[str] = []
        for line in block.split("\n"):
            match = DIRECTIVE_PATTERN.match(line)
            if match is None:
                pending.append(line)
                continue
            if pending:
                pieces.append("\n".join(pending))
                pending = []
            html = self.expand(match.group(1).lower())
            if html:
                pieces.append(self.parser.md.htmlStash.store(html))
            remainder = line[match.end() :].strip()
            if remainder:
                pending.append(remainder)
        if pending:
            pieces.append("\n".join(pending))
        blocks[0:0] = pieces


__all__ = ["DIRECTIVE_PATTERN", "DirectiveBlockProcessor", "DirectiveExtension"]
