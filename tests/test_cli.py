from __future__ import annotations

from pathlib import Path

import pytest

from wiki_pages import cli


@pytest.fixture
def wiki(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    docs = tmp_path / "docs"
    (docs / "guides").mkdir(parents=True)
    (docs / "home.md").write_text(
        "# Home\n\n## Start\n\nSee [Setup](guides/setup.md).\n\n## More\n",
        encoding="utf-8",
    )
    (docs / "guides" / "setup.md").write_text(
        "# Setup\n\nInstall everything.\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    return docs


def test_raw_prints_source(wiki: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.raw(wiki / "home.md")
    assert capsys.readouterr().out.startswith("# Home\n\n## Start")


def test_render_prints_page_with_toc(
    wiki: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.render(wiki / "home.md")
    out = capsys.readouterr().out
    assert '<h1 id="home">Home</h1>' in out
    assert '<div id="_toc">' in out


def test_code_prints_highlighted_source(
    tmp_path: Path, wiki: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    script = tmp_path / "tool.py"
    script.write_text("import os\n", encoding="utf-8")
    cli.code(script)
    assert 'data-language="py"' in capsys.readouterr().out


def test_index_uses_default_root(wiki: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.index()
    out = capsys.readouterr().out
    assert 'href="/home.md"' in out
    assert 'href="/guides/setup.md"' in out


def test_search_prints_summary_then_results(
    wiki: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.search("install")
    summary, _, html = capsys.readouterr().out.partition("\n")
    assert summary == "Search results (1)"
    assert 'href="guides/setup.md"' in html


def test_config_file_in_cwd_is_used(
    tmp_path: Path, wiki: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "wiki.yaml").write_text("base_path: /kb\n", encoding="utf-8")
    cli.index()
    assert 'href="/kb/home.md"' in capsys.readouterr().out


def test_root_override(wiki: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.index(root=wiki / "guides")
    out = capsys.readouterr().out
    assert 'href="/setup.md"' in out
    assert "home.md" not in out


def test_export_writes_site(
    tmp_path: Path, wiki: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.export(output_dir=Path("site"))
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "wrote site/guides/setup.html",
        "wrote site/home.html",
        "wrote site/index.html",
    ]
    assert (tmp_path / "site" / "home.html").is_file()


def test_missing_config_raises(wiki: Path) -> None:
    with pytest.raises(FileNotFoundError):
        cli.index(config=Path("missing.yaml"))
