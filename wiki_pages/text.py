"""Text helpers shared by the renderer and the indexer."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from markdown import markdown

CAMEL_BOUNDARY_PATTERN = re.compile(r"([a-z\d])([A-Z]+)")
SEPARATOR_PATTERN = re.compile(r"[-_\s]+")
ID_SUFFIX_PATTERN = re.compile(r" id$")


def humanize(value: str) -> str:
    """Turn a machine-style identifier into a reader-friendly label.

    CamelCase boundaries, dashes, underscores and whitespace runs become
    single spaces, a trailing ``_id`` is dropped and every word is
    capitalised.

    Examples
    --------
    >>> humanize("getting-started")
    'Getting Started'
    >>> humanize("apiReference_v2")
    'Api Reference V2'
    """
    spaced = CAMEL_BOUNDARY_PATTERN.sub(r"\1 \2", value.strip())
    words = ID_SUFFIX_PATTERN.sub("", SEPARATOR_PATTERN.sub(" ", spaced).strip())
    return " ".join(word[:1].upper() + word[1:] for word in words.split(" ") if word)


def strip_markdown(text: str) -> str:
    """Return the plain text carried by a markdown document."""
    html = markdown(text, extensions=["fenced_code", "tables"])
    return BeautifulSoup(html, "html.parser").get_text(" ")


__all__ = ["humanize", "strip_markdown"]
