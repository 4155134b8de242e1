"""Cyclopts CLI entrypoint for rendering and exporting Markdown wikis.

The ``wiki-pages`` console script defined here renders a single page, a source
file, the generated site index or a search results page to stdout, and can
export the whole wiki as static HTML. Every command reads ``wiki.yaml`` from
the working directory when present; ``--config`` points elsewhere and
``--root`` overrides the wiki source directory.

Examples
--------
Render a page with its inline table of contents:

>>> from wiki_pages.cli import app
>>> app(["render", "docs/getting-started.md"])  # doctest: +SKIP

Export the wiki described by a config file:

>>> app(["export", "--config", "site/wiki.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SiteConfig, load_site_config
from .export import SiteExporter
from .indexer import FileIndexer
from .rendering import Renderer

DEFAULT_CONFIG = Path("wiki.yaml")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

app = App(name="wiki-pages", config=cyclopts.config.Env("WIKI_PAGES_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path | None, Parameter(help="Path to site config", env_var="WIKI_PAGES_CONFIG")
]
RootOption = typ.Annotated[
    Path | None,
    Parameter(help="Override the wiki source directory", env_var="WIKI_PAGES_ROOT"),
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_site(config: Path | None, root: Path | None) -> SiteConfig:
    """Load the requested (or default) config and apply the root override."""
    if config is not None:
        site = load_site_config(config)
    elif DEFAULT_CONFIG.exists():
        site = load_site_config(DEFAULT_CONFIG)
    else:
        site = SiteConfig()
    if root is not None:
        site.root_dir = root
    return site


def _build_renderer(site: SiteConfig) -> Renderer:
    return Renderer(
        FileIndexer(site.root_dir),
        site.renderer_options(),
        pygments_style=site.pygments_style,
    )


@app.command(help="Print the raw contents of a wiki file.")
def raw(
    path: typ.Annotated[Path, Parameter(help="File to print")],
    *,
    config: ConfigOption = None,
    root: RootOption = None,
) -> None:
    """Print ``path`` without any transformation."""
    renderer = _build_renderer(_resolve_site(config, root))
    print(asyncio.run(renderer.render_raw(path)))


@app.command(help="Render a Markdown page with its table of contents.")
def render(
    path: typ.Annotated[Path, Parameter(help="Markdown page to render")],
    *,
    config: ConfigOption = None,
    root: RootOption = None,
) -> None:
    """Render a wiki page to HTML on stdout.

    Parameters
    ----------
    path : Path
        Markdown file to render.
    config : Path or None, optional
        Site configuration file; defaults to ``wiki.yaml`` when present.
    root : Path or None, optional
        Wiki source directory used for ``[[index]]`` directives.

    Raises
    ------
    OSError
        If ``path`` cannot be read.
    """
    renderer = _build_renderer(_resolve_site(config, root))
    print(asyncio.run(renderer.render_file(path)))


@app.command(help="Render a source file as a highlighted code block.")
def code(
    path: typ.Annotated[Path, Parameter(help="Source file to highlight")],
    *,
    config: ConfigOption = None,
    root: RootOption = None,
) -> None:
    """Render ``path`` as a fenced block tagged with its extension."""
    renderer = _build_renderer(_resolve_site(config, root))
    print(asyncio.run(renderer.render_code(path)))


@app.command(help="Render the navigation index of every wiki page.")
def index(
    *,
    config: ConfigOption = None,
    root: RootOption = None,
) -> None:
    """Print the generated site index as HTML."""
    renderer = _build_renderer(_resolve_site(config, root))
    print(renderer.render_index())


@app.command(help="Search the wiki and render the matching pages.")
def search(
    query: typ.Annotated[str, Parameter(help="Free-text query")],
    *,
    config: ConfigOption = None,
    root: RootOption = None,
) -> None:
    """Print the search summary line followed by the rendered results."""
    renderer = _build_renderer(_resolve_site(config, root))
    html = asyncio.run(renderer.render_search(query))
    print(renderer.search_results)
    print(html)


@app.command(help="Export every wiki page as static HTML.")
def export(
    *,
    config: ConfigOption = None,
    root: RootOption = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="WIKI_PAGES_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Write the static site and log the generated paths.

    Parameters
    ----------
    config : Path or None, optional
        Site configuration file; defaults to ``wiki.yaml`` when present.
    root : Path or None, optional
        Override for the wiki source directory.
    output_dir : Path or None, optional
        Override for the export destination.
    """
    site = _resolve_site(config, root)
    if output_dir is not None:
        site.output_dir = output_dir
    for path in SiteExporter(site).run():
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Configure logging and invoke the Cyclopts application.

    The log level comes from ``WIKI_PAGES_LOG_LEVEL`` (default ``WARNING``).

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    level = os.getenv("WIKI_PAGES_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
