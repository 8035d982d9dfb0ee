"""Resolvers that map routes to section ordering or page metadata.

A resolver answers one question for :class:`~sp8d_pages.routes.RouteTreeBuilder`:
what lives at this route? The answer is a nested
:class:`~sp8d_pages.routes.models.OrderingDescriptor` for a section, a
:class:`~sp8d_pages.routes.models.PageDescriptor` for a page that declares
metadata, or ``None`` for a page that exists without metadata. Routes with
nothing behind them raise :class:`KeyError`.

Two implementations are provided: :class:`MappingResolver` for in-memory data
and :class:`ContentDirectoryResolver`, which reads the ``pages/`` content tree
(``_meta.yaml`` ordering files plus Markdown front matter).

Examples
--------
>>> from sp8d_pages.routes.models import PageDescriptor
>>> resolver = MappingResolver({"/intro": PageDescriptor(title="Intro")})
>>> resolver.resolve("/intro").title
'Intro'
"""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import DescriptorError, OrderingDescriptor, PageDescriptor

META_FILENAME = "_meta.yaml"
PAGE_SUFFIXES = (".md", ".mdx")
FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$", re.DOTALL | re.MULTILINE
)

Resolution = OrderingDescriptor | PageDescriptor | None


class RouteResolver(typ.Protocol):
    """Callable boundary between the tree builder and the authoring layer."""

    def resolve(self, route: str) -> Resolution:
        """Return what lives at ``route`` or raise ``KeyError``."""
        ...


class AmbiguousRouteError(DescriptorError):
    """Raised when a slug is backed by both a directory and a page file."""


class MappingResolver:
    """Resolve routes from an in-memory mapping keyed by full route."""

    def __init__(self, entries: cabc.Mapping[str, Resolution]) -> None:
        self._entries = dict(entries)

    def resolve(self, route: str) -> Resolution:
        return self._entries[route]


def _safe_yaml() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def parse_front_matter(text: str) -> dict[str, typ.Any] | None:
    """Return the YAML front matter mapping of a Markdown document, if any.

    Parameters
    ----------
    text : str
        Full document text.

    Returns
    -------
    dict[str, Any] | None
        Parsed front matter, or ``None`` when the document has no front
        matter block or the block is empty.

    Raises
    ------
    DescriptorError
        If the block is not valid YAML or is not a mapping.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return None
    try:
        loaded = _safe_yaml().load(match.group(1))
    except YAMLError as exc:
        msg = f"Invalid front matter: {exc}"
        raise DescriptorError(msg) from exc
    if loaded is None:
        return None
    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping."
        raise DescriptorError(msg)
    return loaded


def load_ordering(path: Path) -> OrderingDescriptor:
    """Load a ``_meta.yaml`` file into an :class:`OrderingDescriptor`."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = _safe_yaml().load(handle)
    except YAMLError as exc:
        msg = f"Invalid ordering file '{path}': {exc}"
        raise DescriptorError(msg) from exc
    if loaded is None:
        return OrderingDescriptor()
    if not isinstance(loaded, dict):
        msg = f"Ordering file '{path}' must contain a mapping."
        raise DescriptorError(msg)
    return OrderingDescriptor.from_mapping(loaded)


class ContentDirectoryResolver:
    """Resolve routes against a content directory on disk.

    A route ``/quickstart/installation`` maps to either the directory
    ``<root>/quickstart/installation/`` (a section, which must carry a
    ``_meta.yaml``) or a page file ``<root>/quickstart/installation.md`` /
    ``.mdx``. Only the exact paths named by the route are probed, so
    directory listing order never leaks into the tree.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def root_ordering(self) -> OrderingDescriptor:
        """Return the ordering descriptor of the content root."""
        meta_path = self.root / META_FILENAME
        if not meta_path.is_file():
            msg = f"Content root '{self.root}' has no {META_FILENAME}."
            raise FileNotFoundError(msg)
        return load_ordering(meta_path)

    def resolve(self, route: str) -> Resolution:
        base = self.root.joinpath(*route.strip("/").split("/"))
        page_path = self._page_file(base)
        if base.is_dir():
            if page_path is not None:
                msg = f"Route '{route}' is both a directory and a page ({page_path.name})."
                raise AmbiguousRouteError(msg)
            meta_path = base / META_FILENAME
            if not meta_path.is_file():
                msg = f"Section '{route}' has no {META_FILENAME}."
                raise DescriptorError(msg)
            return load_ordering(meta_path)
        if page_path is None:
            raise KeyError(route)
        front_matter = parse_front_matter(page_path.read_text(encoding="utf-8"))
        if front_matter is None:
            return None
        return PageDescriptor.from_mapping(front_matter)

    @staticmethod
    def _page_file(base: Path) -> Path | None:
        for suffix in PAGE_SUFFIXES:
            candidate = base.with_name(base.name + suffix)
            if candidate.is_file():
                return candidate
        return None


__all__ = [
    "META_FILENAME",
    "AmbiguousRouteError",
    "ContentDirectoryResolver",
    "MappingResolver",
    "Resolution",
    "RouteResolver",
    "load_ordering",
    "parse_front_matter",
]
