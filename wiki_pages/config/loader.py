"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from pygments.styles import get_all_styles
from ruamel.yaml import YAML

from .models import SiteConfig, SiteConfigError

KNOWN_KEYS = frozenset({"root", "output_dir", "base_path", "pygments_style", "site_name"})


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing a wiki.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``wiki.yaml``). Relative ``root`` and ``output_dir`` values are
        resolved against the file's directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied for omitted keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a key is unknown or a value has the wrong type or names an unknown
        Pygments style.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from wiki_pages.config import load_site_config
    >>> config = load_site_config(Path("wiki.yaml"))  # doctest: +SKIP
    >>> config.site_name  # doctest: +SKIP
    'Wiki'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    unknown = sorted(set(raw) - KNOWN_KEYS)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(unknown)}."
        raise SiteConfigError(msg)

    defaults = SiteConfig()
    config_dir = path.parent
    pygments_style = _string(raw, "pygments_style", defaults.pygments_style)
    if pygments_style not in set(get_all_styles()):
        msg = f"Unknown pygments style '{pygments_style}'."
        raise SiteConfigError(msg)

    return SiteConfig(
        root_dir=config_dir / _string(raw, "root", str(defaults.root_dir)),
        output_dir=config_dir / _string(raw, "output_dir", str(defaults.output_dir)),
        base_path=_string(raw, "base_path", defaults.base_path),
        pygments_style=pygments_style,
        site_name=_string(raw, "site_name", defaults.site_name),
    )


def _string(raw: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    """Return ``raw[key]`` as a string, ``default`` when absent or null."""
    value = raw.get(key)
    match value:
        case None:
            return default
        case str():
            return value
        case _:
            msg = f"Configuration key '{key}' must be a string."
            raise SiteConfigError(msg)


__all__ = ["load_site_config"]
