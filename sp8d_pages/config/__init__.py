"""Load and validate the SP8D docs build configuration.

This subpackage parses ``config/site.yaml`` into a single
:class:`SiteConfig` value (site URL, content and output directories, route
strictness, sitemap hints, and sanitizer rules). The CLI constructs it once at
start-up and passes it to whichever component needs it; nothing reads
configuration from module globals.

Examples
--------
>>> from pathlib import Path
>>> from sp8d_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.output_dir  # doctest: +SKIP
PosixPath('out')
"""

from .loader import load_site_config
from .models import SanitizerConfig, SiteConfig, SiteConfigError, SitemapConfig

__all__ = [
    "SanitizerConfig",
    "SiteConfig",
    "SiteConfigError",
    "SitemapConfig",
    "load_site_config",
]
