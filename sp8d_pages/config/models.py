"""Typed dataclasses describing SP8D site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import HTML_SUFFIX
from ..sanitizer import DEFAULT_RULES, ReplacementRule


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SitemapConfig:
    """Crawler hints written into ``sitemap.xml`` and ``robots.txt``."""

    changefreq: str = "weekly"
    priority: float = 0.7
    generate_robots_txt: bool = True


@dc.dataclass(slots=True)
class SanitizerConfig:
    """Post-render rewrite rules applied to the export directory."""

    suffix: str = HTML_SUFFIX
    rules: tuple[ReplacementRule, ...] = DEFAULT_RULES


@dc.dataclass(slots=True)
class SiteConfig:
    """Explicit build configuration, loaded once and passed by parameter."""

    site_url: str = "https://sp8d.github.io"
    content_dir: Path = Path("pages")
    output_dir: Path = Path("out")
    route_map: Path = Path("build/page-map.json")
    trailing_slash: bool = True
    strict_routes: bool = True
    site_title: str = "SP8D Docs"
    sitemap: SitemapConfig = dc.field(default_factory=SitemapConfig)
    sanitizer: SanitizerConfig = dc.field(default_factory=SanitizerConfig)


__all__ = ["SanitizerConfig", "SiteConfig", "SiteConfigError", "SitemapConfig"]
