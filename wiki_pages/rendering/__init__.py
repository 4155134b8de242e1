"""Markdown rendering pipeline for wiki pages, code files, search and index."""

from .link_rewriter import format_href, remove_links
from .models import DirEntry, FileEntry, RendererOptions, SearchResult
from .renderer import HtmlContentRenderer
from .slugs import SlugRegistry
from .wiki_renderer import Renderer

__all__ = [
    "DirEntry",
    "FileEntry",
    "HtmlContentRenderer",
    "Renderer",
    "RendererOptions",
    "SearchResult",
    "SlugRegistry",
    "format_href",
    "remove_links",
]
