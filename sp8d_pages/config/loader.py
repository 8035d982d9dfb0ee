"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_sanitizer_config,
    _build_sitemap_config,
    _normalize_site_url,
    _optional_str,
    _require_bool,
)
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the documentation build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied for every omitted key.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a value is present but invalid (for example, a relative
        ``site_url`` or an unknown sitemap change frequency).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sp8d_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.site_url  # doctest: +SKIP
    'https://sp8d.github.io'
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
    defaults = SiteConfig()

    sitemap_raw = raw.get("sitemap")
    sanitizer_raw = raw.get("sanitizer")
    for name, section in (("sitemap", sitemap_raw), ("sanitizer", sanitizer_raw)):
        if section is not None and not isinstance(section, dict):
            msg = f"'{name}' must be a mapping."
            raise SiteConfigError(msg)

    return SiteConfig(
        site_url=_normalize_site_url(raw.get("site_url", defaults.site_url)),
        content_dir=Path(raw.get("content_dir", defaults.content_dir)),
        output_dir=Path(raw.get("output_dir", defaults.output_dir)),
        route_map=Path(raw.get("route_map", defaults.route_map)),
        trailing_slash=_require_bool(
            raw.get("trailing_slash", defaults.trailing_slash), field="trailing_slash"
        ),
        strict_routes=_require_bool(
            raw.get("strict_routes", defaults.strict_routes), field="strict_routes"
        ),
        site_title=_optional_str(raw.get("site_title")) or defaults.site_title,
        sitemap=_build_sitemap_config(sitemap_raw),
        sanitizer=_build_sanitizer_config(sanitizer_raw),
    )


__all__ = ["load_site_config"]
