"""Build the site navigation tree from the configured content directory."""

from __future__ import annotations

import typing as typ

from .routes import ContentDirectoryResolver, RouteTreeBuilder

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .routes import RouteNode


def build_site_tree(site_config: SiteConfig, *, strict: bool | None = None) -> RouteNode:
    """Return the route tree for ``site_config.content_dir``.

    ``strict`` overrides ``site_config.strict_routes`` when given.
    """
    resolver = ContentDirectoryResolver(site_config.content_dir)
    builder = RouteTreeBuilder(
        resolver, strict=site_config.strict_routes if strict is None else strict
    )
    return builder.build(resolver.root_ordering(), title=site_config.site_title)


__all__ = ["build_site_tree"]
