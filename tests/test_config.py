"""Tests for loading ``wiki.yaml`` site configuration."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from wiki_pages.config import SiteConfig, SiteConfigError, load_site_config
from wiki_pages.rendering import RendererOptions

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@pytest.fixture
def write_config(tmp_path: Path) -> cabc.Callable[[str], Path]:
    """Return a helper writing YAML text to ``wiki.yaml`` under ``tmp_path``."""

    def _write(text: str) -> Path:
        path = tmp_path / "wiki.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


def test_load_full_config(
    write_config: cabc.Callable[[str], Path], tmp_path: Path
) -> None:
    """Every key is read, with directories resolved next to the file."""
    path = write_config(
        "root: pages\n"
        "output_dir: build/site\n"
        "base_path: /wiki\n"
        "pygments_style: friendly\n"
        "site_name: Team Wiki\n"
    )
    config = load_site_config(path)
    assert config == SiteConfig(
        root_dir=tmp_path / "pages",
        output_dir=tmp_path / "build" / "site",
        base_path="/wiki",
        pygments_style="friendly",
        site_name="Team Wiki",
    )


def test_empty_config_uses_defaults(
    write_config: cabc.Callable[[str], Path], tmp_path: Path
) -> None:
    """Omitted keys fall back to the dataclass defaults."""
    config = load_site_config(write_config(""))
    assert config.root_dir == tmp_path / "docs"
    assert config.output_dir == tmp_path / "public"
    assert config.base_path == ""
    assert config.pygments_style == "monokai"
    assert config.site_name == "Wiki"


def test_absolute_root_is_kept(
    write_config: cabc.Callable[[str], Path], tmp_path: Path
) -> None:
    """Absolute paths are not re-rooted under the config directory."""
    target = tmp_path / "elsewhere"
    config = load_site_config(write_config(f"root: {target}\n"))
    assert config.root_dir == target


def test_unknown_key_is_rejected(write_config: cabc.Callable[[str], Path]) -> None:
    """Typos in key names are reported rather than ignored."""
    with pytest.raises(SiteConfigError, match="Unknown configuration keys: sitename"):
        load_site_config(write_config("sitename: Oops\n"))


def test_non_string_value_is_rejected(write_config: cabc.Callable[[str], Path]) -> None:
    """Values must be strings."""
    with pytest.raises(SiteConfigError, match="'base_path' must be a string"):
        load_site_config(write_config("base_path: [a, b]\n"))


def test_unknown_pygments_style(write_config: cabc.Callable[[str], Path]) -> None:
    """Style names are validated against the installed Pygments styles."""
    with pytest.raises(SiteConfigError, match="Unknown pygments style"):
        load_site_config(write_config("pygments_style: not-a-style\n"))


def test_top_level_must_be_mapping(write_config: cabc.Callable[[str], Path]) -> None:
    """A YAML list at the top level is a type error."""
    with pytest.raises(TypeError, match="must be a mapping"):
        load_site_config(write_config("- root\n- docs\n"))


def test_missing_config_file(tmp_path: Path) -> None:
    """A missing file raises FileNotFoundError naming the path."""
    with pytest.raises(FileNotFoundError, match="not found"):
        load_site_config(tmp_path / "absent.yaml")


def test_renderer_options_follow_config() -> None:
    """The base path is passed through and export mode is opt-in."""
    config = SiteConfig(base_path="/wiki")
    assert config.renderer_options() == RendererOptions(base_path="/wiki")
    assert config.renderer_options(is_export=True).is_export is True


def test_default_paths_are_relative() -> None:
    """A bare SiteConfig points at ./docs and ./public."""
    config = SiteConfig()
    assert config.root_dir == Path("docs")
    assert config.output_dir == Path("public")
