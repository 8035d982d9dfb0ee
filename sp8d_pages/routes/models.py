"""Typed descriptors and navigation nodes for the SP8D docs route tree.

Authoring data arrives in two shapes: per-directory ordering descriptors that
declare which slugs appear and in what order, and per-page descriptors that
carry the page title and search metadata. Both are parsed once into the
immutable dataclasses defined here so downstream consumers never inspect raw
YAML again.

Examples
--------
>>> ordering = OrderingDescriptor.from_mapping(
...     {"installation": "Installation", "faq": {"title": "FAQ", "type": "page"}}
... )
>>> ordering.slugs
('installation', 'faq')
>>> PageDescriptor.from_mapping({"title": "Install SP8D"}).title
'Install SP8D'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ
from urllib.parse import urlsplit


class DescriptorError(ValueError):
    """Raised when ordering or page metadata is malformed."""


class NodeKind(enum.StrEnum):
    """Role of a :class:`RouteNode` within the navigation tree."""

    SECTION = "section"
    PAGE = "page"
    LINK = "link"


@dc.dataclass(frozen=True, slots=True)
class LabelEntry:
    """Ordering entry for an ordinary page or section with a display label."""

    title: str


@dc.dataclass(frozen=True, slots=True)
class LinkEntry:
    """Ordering entry pointing outside the local route tree.

    Attributes
    ----------
    title : str
        Label rendered in navigation.
    target : str
        Destination URL (``https://`` or ``mailto:`` for example).
    open_in_new_context : bool
        Whether the renderer should open the link in a new window or tab.
    """

    title: str
    target: str
    open_in_new_context: bool = False


OrderingEntry = LabelEntry | LinkEntry


def _require_text(value: object, *, field: str, context: str) -> str:
    if not isinstance(value, str) or not value.strip():
        msg = f"{context}: '{field}' must be a non-empty string."
        raise DescriptorError(msg)
    return value


def _require_flag(value: object, *, field: str, context: str) -> bool:
    if not isinstance(value, bool):
        msg = f"{context}: '{field}' must be true or false, got {value!r}."
        raise DescriptorError(msg)
    return value


def _validate_slug(slug: object) -> str:
    if not isinstance(slug, str) or not slug:
        msg = f"Slug {slug!r} must be a non-empty string."
        raise DescriptorError(msg)
    if "/" in slug or "\\" in slug or slug in {".", ".."}:
        msg = f"Slug '{slug}' must be a single path segment."
        raise DescriptorError(msg)
    return slug


def _parse_entry(slug: str, value: object) -> OrderingEntry:
    """Resolve one raw ordering value into its tagged entry type."""
    context = f"Ordering entry '{slug}'"
    match value:
        case str():
            return LabelEntry(title=_require_text(value, field="title", context=context))
        case cabc.Mapping():
            title = _require_text(value.get("title"), field="title", context=context)
            kind = value.get("type", "page")
            if kind != "page":
                msg = f"{context}: unsupported type {kind!r}."
                raise DescriptorError(msg)
            href = value.get("href")
            if href is None:
                return LabelEntry(title=title)
            return LinkEntry(
                title=title,
                target=_require_text(href, field="href", context=context),
                open_in_new_context=_require_flag(
                    value.get("newWindow", False), field="newWindow", context=context
                ),
            )
        case _:
            msg = f"{context}: expected a label or a mapping, got {type(value).__name__}."
            raise DescriptorError(msg)


@dc.dataclass(frozen=True, slots=True)
class OrderingDescriptor:
    """Ordered declaration of a section's children.

    The entries tuple is the single source of sibling order; nothing else
    (filesystem listing, alphabetical order) influences navigation order.
    """

    entries: tuple[tuple[str, OrderingEntry], ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for slug, _entry in self.entries:
            _validate_slug(slug)
            if slug in seen:
                msg = f"Duplicate slug '{slug}' in ordering descriptor."
                raise DescriptorError(msg)
            seen.add(slug)

    @classmethod
    def from_mapping(cls, data: cabc.Mapping[str, typ.Any]) -> OrderingDescriptor:
        """Parse a raw ``_meta`` mapping, keeping its key order."""
        if not isinstance(data, cabc.Mapping):
            msg = "Ordering descriptor must be a mapping of slug to entry."
            raise DescriptorError(msg)
        return cls(
            entries=tuple(
                (_validate_slug(slug), _parse_entry(slug, value))
                for slug, value in data.items()
            )
        )

    @property
    def slugs(self) -> tuple[str, ...]:
        """Return the declared slugs in display order."""
        return tuple(slug for slug, _entry in self.entries)

    def get(self, slug: str) -> OrderingEntry | None:
        """Return the entry declared for ``slug``, if any."""
        for candidate, entry in self.entries:
            if candidate == slug:
                return entry
        return None


def _parse_keywords(value: object) -> tuple[str, ...]:
    match value:
        case None:
            return ()
        case str():
            return tuple(part.strip() for part in value.split(",") if part.strip())
        case cabc.Sequence():
            if not all(isinstance(item, str) for item in value):
                msg = "Page descriptor 'keywords' must be a list of strings."
                raise DescriptorError(msg)
            return tuple(value)
        case _:
            msg = "Page descriptor 'keywords' must be a list of strings."
            raise DescriptorError(msg)


def _parse_canonical(value: object) -> str | None:
    if value is None:
        return None
    text = _require_text(value, field="canonical", context="Page descriptor")
    parts = urlsplit(text)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        msg = f"Page descriptor 'canonical' must be an absolute URL, got {text!r}."
        raise DescriptorError(msg)
    return text


@dc.dataclass(frozen=True, slots=True)
class PageDescriptor:
    """Descriptive metadata declared by a single content page.

    Attributes
    ----------
    title : str
        Page title; required whenever a descriptor is present.
    description : str | None
        Short summary used for meta tags.
    keywords : tuple[str, ...]
        Ordered search keywords.
    canonical : str | None
        Absolute canonical URL for the page.
    """

    title: str
    description: str | None = None
    keywords: tuple[str, ...] = ()
    canonical: str | None = None

    @classmethod
    def from_mapping(cls, data: cabc.Mapping[str, typ.Any]) -> PageDescriptor:
        """Build a descriptor from front matter, ignoring unknown keys."""
        description = data.get("description")
        if description is not None:
            description = str(description)
        return cls(
            title=_require_text(data.get("title"), field="title", context="Page descriptor"),
            description=description,
            keywords=_parse_keywords(data.get("keywords")),
            canonical=_parse_canonical(data.get("canonical")),
        )


@dc.dataclass(frozen=True, slots=True)
class RouteNode:
    """One node of the navigation tree: a section, a page, or an external link.

    ``route`` is ``None`` only for links, which live outside the local tree.
    Sections keep their own ordering descriptor in ``section_data`` so the
    renderer can label them; traversal always goes through ``children``.
    """

    name: str
    route: str | None
    kind: NodeKind
    title: str
    children: tuple[RouteNode, ...] = ()
    descriptor: PageDescriptor | None = None
    section_data: OrderingDescriptor | None = None
    target: str | None = None
    open_in_new_context: bool = False

    @property
    def is_root(self) -> bool:
        return self.route == "/"


__all__ = [
    "DescriptorError",
    "LabelEntry",
    "LinkEntry",
    "NodeKind",
    "OrderingDescriptor",
    "OrderingEntry",
    "PageDescriptor",
    "RouteNode",
]
