"""Helpers for rewriting wiki links and images in rendered markdown."""

from __future__ import annotations

import posixpath
import re
import typing as typ
from xml.etree.ElementTree import Element

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import HTML_PLACEHOLDER_RE

from wiki_pages._constants import EXPORT_EXTENSION, IMAGE_LINK_TARGET

if typ.TYPE_CHECKING:
    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any

ANCHOR_OPEN_PATTERN = re.compile(r"<a\b[^>]*>", re.IGNORECASE)
ANCHOR_CLOSE_PATTERN = re.compile(r"</a>", re.IGNORECASE)
MARKDOWN_LINK_PATTERN = re.compile(r"(?<!!)\[([^\]]*)\](?:\([^)]*\)|\[[^\]]*\])")


def remove_links(text: str) -> str:
    """Return ``text`` with ``<a>`` opening and closing tags removed."""
    return ANCHOR_CLOSE_PATTERN.sub("", ANCHOR_OPEN_PATTERN.sub("", text))


def strip_link_markup(text: str) -> str:
    """Return ``text`` with Markdown links and ``<a>`` tags reduced to their labels."""
    return remove_links(MARKDOWN_LINK_PATTERN.sub(r"\1", text))


def _dirname(path: str) -> str:
    """Return the directory part of ``path``, ``"."`` for bare names."""
    trimmed = path.rstrip("/") or path
    return posixpath.dirname(trimmed) or "."


def format_href(href: str, is_export: bool) -> str:
    """Rewrite a link target for static export.

    Parameters
    ----------
    href : str
        Link target as written in the markdown source.
    is_export : bool
        Only export mode rewrites anything.

    Returns
    -------
    str
        ``href`` unchanged when export mode is off, or when the target is
        absolute-rooted, a same-page fragment, or external (no leading ``/``
        and a directory part other than ``.``). Otherwise the target with its
        extension replaced by ``.html``.

    Examples
    --------
    >>> format_href("guide.md", True)
    'guide.html'
    >>> format_href("https://example.com/a.md", True)
    'https://example.com/a.md'
    >>> format_href("guide.md", False)
    'guide.md'
    """
    is_rooted = href.startswith("/")
    is_external = not is_rooted and _dirname(href) != "."
    is_hash = href.startswith("#")
    if not is_export or is_rooted or is_external or is_hash:
        return href
    return replace_extension(href)


def replace_extension(path: str, extension: str = EXPORT_EXTENSION) -> str:
    """Return ``path`` normalized with its extension swapped for ``extension``."""
    directory = _dirname(path)
    base, _ext = posixpath.splitext(posixpath.basename(path.rstrip("/")))
    return posixpath.normpath(posixpath.join(directory, f"{base}{extension}"))


class WikiLinkExtension(Extension):
    """Rewrite anchors and wrap images once inline markdown is rendered."""

    def __init__(self, is_export: bool = False) -> None:
        super().__init__()
        self.is_export = is_export

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the link treeprocessor after inline parsing."""
        processor = WikiLinkTreeprocessor(md, self.is_export)
        md.treeprocessors.register(processor, "wiki_links", 15)


class WikiLinkTreeprocessor(Treeprocessor):
    """Flatten nested anchors, format hrefs and make images click-to-enlarge."""

    def __init__(self, md: Markdown, is_export: bool) -> None:
        super().__init__(md)
        self.is_export = is_export

    def run(self, root: Element) -> Element:
        """Rewrite anchors first, then wrap bare images in new-window links."""
        for element in list(root.iter("a")):
            for nested in [child for child in element.iter("a") if child is not element]:
                _unwrap(element, nested)
            self._strip_stashed_links(element)
            href = element.get("href")
            if href is not None:
                element.set("href", format_href(href, self.is_export))

        parents = {child: parent for parent in root.iter() for child in parent}
        for image in list(root.iter("img")):
            parent = parents.get(image)
            if parent is None or parent.tag == "a":
                continue
            _wrap_image(parent, image)
        return root

    def _strip_stashed_links(self, anchor: Element) -> None:
        """Remove ``<a>`` tags from raw inline HTML stashed inside ``anchor``."""
        for match in HTML_PLACEHOLDER_RE.finditer("".join(anchor.itertext())):
            stash = self.md.htmlStash.rawHtmlBlocks
            index = int(match.group(1))
            if index < len(stash) and isinstance(stash[index], str):
                stash[index] = remove_links(stash[index])


def _unwrap(ancestor: Element, nested: Element) -> None:
    """Replace ``nested`` inside ``ancestor`` by its own text and children."""
    parent = next(el for el in ancestor.iter() if nested in list(el))
    index = list(parent).index(nested)
    children = list(nested)
    leading = nested.text or ""
    if index == 0:
        parent.text = (parent.text or "") + leading
    else:
        previous = parent[index - 1]
        previous.tail = (previous.tail or "") + leading
    parent.remove(nested)
    for offset, child in enumerate(children):
        parent.insert(index + offset, child)
    trailing = nested.tail or ""
    if children:
        children[-1].tail = (children[-1].tail or "") + trailing
    elif index == 0:
        parent.text = (parent.text or "") + trailing
    else:
        previous = parent[index - 1]
        previous.tail = (previous.tail or "") + trailing


def _wrap_image(parent: Element, image: Element) -> None:
    """Wrap ``image`` in an anchor pointing at its own source."""
    index = list(parent).index(image)
    link = Element("a", {"href": image.get("src", ""), "target": IMAGE_LINK_TARGET})
    link.tail = image.tail
    image.tail = None
    parent[index] = link
    link.append(image)


__all__ = [
    "WikiLinkExtension",
    "WikiLinkTreeprocessor",
    "format_href",
    "remove_links",
    "replace_extension",
    "strip_link_markup",
]
