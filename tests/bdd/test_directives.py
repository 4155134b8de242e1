"""Behaviour tests for wiki page directives.

These pytest-bdd scenarios render small wiki pages from a temporary directory
and check that ``[[itoc]]``, ``[[toc]]`` and ``[[index]]`` expand into the
expected navigation markup. The feature file ``directives.feature`` drives the
scenarios; pages are read through :class:`FileIndexer` so no stubbing is
required.

Usage
-----
Run ``pytest tests/bdd/test_directives.py -v`` after installing the test extra
(``pip install -e .[test]``).
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from wiki_pages.indexer import FileIndexer
from wiki_pages.rendering import Renderer

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "directives.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write_page(
    root: Path, name: str, text: str, scenario_state: dict[str, object]
) -> None:
    page = root / name
    page.parent.mkdir(parents=True, exist_ok=True)
    page.write_text(text, encoding="utf-8")
    scenario_state["root"] = root
    scenario_state["page"] = page


@given("a wiki page with three sections")
def given_sectioned_page(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write a page with a title and repeated section names."""
    _write_page(
        tmp_path,
        "guide.md",
        "# Guide\n\n## Setup\n\nOne.\n\n## Usage\n\nTwo.\n\n## Setup\n\nThree.\n",
        scenario_state,
    )


@given("a wiki page with a toc directive")
def given_toc_page(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write a page whose body starts with ``[[toc]]``."""
    _write_page(
        tmp_path,
        "manual.md",
        "# Manual\n\n[[toc]]\n\n## Install\n\n### Linux\n\n## Configure\n",
        scenario_state,
    )


@given("a wiki with nested pages and an index directive")
def given_index_page(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Create nested pages plus a home page embedding the site index."""
    (tmp_path / "guides").mkdir()
    (tmp_path / "guides" / "setup.md").write_text("# Setup\n", encoding="utf-8")
    (tmp_path / "zebra.md").write_text("# Zebra\n", encoding="utf-8")
    _write_page(tmp_path, "home.md", "# Home\n\n[[index]]\n", scenario_state)


@when("I render the page")
def when_render_page(scenario_state: dict[str, object]) -> None:
    """Render the page written by the given step."""
    root: Path = scenario_state["root"]  # type: ignore[assignment]
    page: Path = scenario_state["page"]  # type: ignore[assignment]
    renderer = Renderer(FileIndexer(root))
    html = asyncio.run(renderer.render_file(page))
    scenario_state["soup"] = BeautifulSoup(html, "html.parser")


@then("the inline table of contents links to every heading id")
def then_toc_matches_ids(scenario_state: dict[str, object]) -> None:
    """Every TOC entry resolves against a heading on the page."""
    soup: BeautifulSoup = scenario_state["soup"]  # type: ignore[assignment]
    ids = [h["id"] for h in soup.find_all(["h1", "h2"])]
    assert ids == ["guide", "setup", "usage", "setup-1"]
    toc = soup.find(id="_toc")
    assert toc is not None, "expected the inline table of contents"
    assert [a["href"] for a in toc.find_all("a")] == [f"#{i}" for i in ids]


@then("the table of contents skips the title heading")
def then_toc_skips_title(scenario_state: dict[str, object]) -> None:
    """The directive lists sections only, nested by level."""
    soup: BeautifulSoup = scenario_state["soup"]  # type: ignore[assignment]
    toc_list = soup.find("ul")
    assert toc_list is not None
    assert [a["href"] for a in toc_list.find_all("a")] == [
        "#install",
        "#linux",
        "#configure",
    ]
    assert toc_list.find("ul").find("a").get_text() == "Linux"


@then("the page lists files before directories")
def then_index_order(scenario_state: dict[str, object]) -> None:
    """Files at a level precede sub-directories."""
    soup: BeautifulSoup = scenario_state["soup"]  # type: ignore[assignment]
    index_list = soup.find("ul")
    assert index_list is not None
    entries = []
    for item in index_list.find_all("li", recursive=False):
        link = item.find("a", recursive=False)
        entries.append(link.get_text() if link else item.contents[0].strip())
    assert entries == ["Home", "Zebra", "Guides"]
    assert index_list.find("ul").find("a")["href"] == "/guides/setup.md"

