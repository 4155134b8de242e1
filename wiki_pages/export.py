"""Export a whole wiki as static HTML.

:class:`SiteExporter` walks every Markdown file known to the indexer, renders
it in export mode (internal links point at ``.html`` siblings) and writes the
result through the ``page.jinja`` template into the configured output
directory. When the wiki has no ``index.md`` the generated site index becomes
``index.html``.

Typical usage pairs the loader with a site config:

>>> from pathlib import Path
>>> from wiki_pages.config import load_site_config
>>> from wiki_pages.export import SiteExporter
>>> site = load_site_config(Path("wiki.yaml"))  # doctest: +SKIP
>>> SiteExporter(site).run()  # doctest: +SKIP
[PosixPath('public/getting-started.html'), PosixPath('public/index.html')]
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import datetime as dt
import logging
import posixpath
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import EXPORT_EXTENSION
from .indexer import FileIndexer
from .rendering import Renderer
from .rendering.link_rewriter import replace_extension, strip_link_markup
from .text import humanize

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .indexer import Indexer

logger = logging.getLogger(__name__)

INDEX_SOURCE = "index.md"
INDEX_OUTPUT = "index.html"


class SiteExporter:
    """Render every wiki page into themed static HTML files."""

    def __init__(
        self,
        site_config: SiteConfig,
        *,
        templates_dir: Path | None = None,
        indexer: Indexer | None = None,
    ) -> None:
        """Initialize the exporter.

        Parameters
        ----------
        site_config : SiteConfig
            Source, destination and presentation settings.
        templates_dir : Path, optional
            Directory containing ``page.jinja``. Defaults to the package
            ``templates`` directory.
        indexer : Indexer, optional
            Document source; defaults to a :class:`FileIndexer` over
            ``site_config.root_dir``.
        """
        self.site_config = site_config
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("page.jinja")
        self.indexer = indexer or FileIndexer(site_config.root_dir)
        self.renderer = Renderer(
            self.indexer,
            dc.replace(
                site_config.renderer_options(is_export=True),
                index_extension=EXPORT_EXTENSION,
            ),
            pygments_style=site_config.pygments_style,
        )

    def run(self) -> list[Path]:
        """Export the wiki and return the written paths in rendering order."""
        return asyncio.run(self.export())

    async def export(self) -> list[Path]:
        """Coroutine behind :meth:`run`.

        Raises
        ------
        OSError
            If a page cannot be read or the output cannot be written.
        """
        output_dir = self.site_config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        generated_at = dt.datetime.now(dt.UTC)
        refs = list(self.indexer.get_files())
        written: list[Path] = []
        for ref in refs:
            body = await self.renderer.render_file(self.site_config.root_dir / ref)
            target = output_dir / replace_extension(ref)
            self._write(target, self._page_title(ref), body, generated_at)
            written.append(target)
        if INDEX_SOURCE not in refs:
            target = output_dir / INDEX_OUTPUT
            self._write(
                target, "Index", self.renderer.render_index(), generated_at
            )
            written.append(target)
        return written

    def _page_title(self, ref: str) -> str:
        """Return the first heading of ``ref`` or its humanized file name."""
        content = self.indexer.get_content(ref)
        headings = self.renderer.content_renderer.scan_headings(content)
        if headings:
            return strip_link_markup(headings[0].raw)
        return humanize(Path(ref).stem)

    def _write(
        self, target: Path, title: str, body: str, generated_at: dt.datetime
    ) -> None:
        base = self.site_config.base_path.strip("/")
        context = {
            "site_name": self.site_config.site_name,
            "title": title,
            "stylesheet": self.renderer.content_renderer.stylesheet,
            "body": body,
            "home_href": posixpath.join("/", base, INDEX_OUTPUT),
            "generated_at": generated_at,
        }
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.template.render(**context), encoding="utf-8")
        logger.info("Exported %s", target)


__all__ = ["SiteExporter"]
