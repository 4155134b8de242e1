"""Load and validate the wiki site configuration.

This subpackage parses a ``wiki.yaml`` file into a :class:`SiteConfig`
describing where the Markdown sources live, where exports go, the URL prefix
of index links and the presentation settings. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from wiki_pages.config import load_site_config
>>> site = load_site_config(Path("wiki.yaml"))  # doctest: +SKIP
>>> site.root_dir  # doctest: +SKIP
PosixPath('docs')
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = ["SiteConfig", "SiteConfigError", "load_site_config"]
