"""Typed dataclasses describing wiki site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from wiki_pages.rendering.models import RendererOptions


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Locations and presentation settings for one wiki.

    Attributes
    ----------
    root_dir : Path
        Directory holding the wiki's Markdown sources.
    output_dir : Path
        Destination of static exports.
    base_path : str
        URL prefix used for links in the generated site index.
    pygments_style : str
        Pygments style applied to highlighted code blocks.
    site_name : str
        Name shown in exported page titles.
    """

    root_dir: Path = dc.field(default_factory=lambda: Path("docs"))
    output_dir: Path = dc.field(default_factory=lambda: Path("public"))
    base_path: str = ""
    pygments_style: str = "monokai"
    site_name: str = "Wiki"

    def renderer_options(self, *, is_export: bool = False) -> RendererOptions:
        """Return renderer options derived from this configuration."""
        return RendererOptions(base_path=self.base_path, is_export=is_export)


__all__ = ["SiteConfig", "SiteConfigError"]
