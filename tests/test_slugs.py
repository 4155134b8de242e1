"""Unit tests for heading slug generation.

``SlugRegistry`` must produce the same anchors for the table of contents and
for the heading ids emitted during conversion, so these tests pin down the
punctuation stripping, whitespace handling and collision suffixes.
"""

from __future__ import annotations

import pytest

from wiki_pages.rendering import SlugRegistry


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello, World!", "hello-world"),
        ("  Multiple   spaces  ", "multiple-spaces"),
        ("C++ & Rust (2024)", "c-rust-2024"),
        ("Wait… what", "wait-what"),
        ("Already-hyphenated_name", "already-hyphenated_name"),
        ("Ünïcode Wörds", "ünïcode-wörds"),
    ],
)
def test_slug_strips_punctuation(text: str, expected: str) -> None:
    """Punctuation is removed and whitespace runs collapse into hyphens."""
    assert SlugRegistry().slug(text) == expected, f"unexpected slug for {text!r}"


def test_duplicate_slugs_receive_counters() -> None:
    """Repeated headings are suffixed -1, -2 in order of appearance."""
    registry = SlugRegistry()
    slugs = [registry.slug("Setup") for _ in range(3)]
    assert slugs == ["setup", "setup-1", "setup-2"]
    assert len(registry) == 3


def test_collision_skips_existing_suffixed_slug() -> None:
    """A suffix already taken by another heading is skipped."""
    registry = SlugRegistry()
    assert registry.slug("a-1") == "a-1"
    assert registry.slug("a") == "a"
    assert registry.slug("a") == "a-2", "expected the taken 'a-1' slug to be skipped"


def test_registries_are_independent() -> None:
    """Slugs registered in one registry never leak into another."""
    first = SlugRegistry()
    first.slug("Intro")
    second = SlugRegistry()
    assert second.slug("Intro") == "intro"
    assert "intro" in first
    assert "intro-1" not in second
