"""Assemble the navigation route tree from ordering and page descriptors.

:class:`RouteTreeBuilder` walks ordering descriptors in declared order, asks a
resolver what lives behind each slug, and produces an immutable tree of
:class:`~sp8d_pages.routes.models.RouteNode` objects rooted at ``/``. The
builder performs no I/O itself; only the resolver may touch the filesystem.

Example
-------
>>> from sp8d_pages.routes.models import OrderingDescriptor
>>> from sp8d_pages.routes.resolvers import MappingResolver
>>> root = OrderingDescriptor.from_mapping({"intro": "Introduction"})
>>> tree = RouteTreeBuilder(MappingResolver({"/intro": None})).build(root)
>>> [child.route for child in tree.children]
['/intro']
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .models import (
    LinkEntry,
    NodeKind,
    OrderingDescriptor,
    PageDescriptor,
    RouteNode,
)

if typ.TYPE_CHECKING:
    from .models import OrderingEntry
    from .resolvers import RouteResolver

ROOT_ROUTE = "/"


class RouteTreeError(ValueError):
    """Raised when descriptors cannot be assembled into a consistent tree.

    Attributes
    ----------
    slug : str
        Offending slug.
    parent_route : str
        Route of the section that declared the slug.
    """

    def __init__(self, message: str, *, slug: str, parent_route: str) -> None:
        super().__init__(message)
        self.slug = slug
        self.parent_route = parent_route


def join_route(parent_route: str, name: str) -> str:
    """Append ``name`` as a path segment to ``parent_route``."""
    if parent_route == ROOT_ROUTE:
        return f"/{name}"
    return f"{parent_route}/{name}"


class RouteTreeBuilder:
    """Merge ordering descriptors with page metadata into a route tree."""

    def __init__(self, resolver: RouteResolver, *, strict: bool = True) -> None:
        """Initialize the builder.

        Parameters
        ----------
        resolver : RouteResolver
            Source of nested ordering descriptors and page descriptors.
        strict : bool, optional
            When ``True`` (default) a slug with nothing behind it aborts the
            build with :class:`RouteTreeError`. When ``False`` such slugs are
            omitted from the tree, which tolerates draft entries.
        """
        self.resolver = resolver
        self.strict = strict

    def build(self, root_ordering: OrderingDescriptor, *, title: str = "") -> RouteNode:
        """Return the tree rooted at ``/`` for ``root_ordering``.

        Raises
        ------
        RouteTreeError
            If a declared slug does not resolve (strict mode only), or resolves
            to an unexpected type.
        """
        children = self._build_children(root_ordering, ROOT_ROUTE)
        return RouteNode(
            name="",
            route=ROOT_ROUTE,
            kind=NodeKind.SECTION,
            title=title,
            children=children,
            section_data=root_ordering,
        )

    def _build_children(
        self, ordering: OrderingDescriptor, parent_route: str
    ) -> tuple[RouteNode, ...]:
        children: list[RouteNode] = []
        for slug, entry in ordering.entries:
            node = self._build_node(slug, entry, parent_route)
            if node is not None:
                children.append(node)
        return tuple(children)

    def _build_node(
        self,
        slug: str,
        entry: OrderingEntry,
        parent_route: str,
    ) -> RouteNode | None:
        if isinstance(entry, LinkEntry):
            return RouteNode(
                name=slug,
                route=None,
                kind=NodeKind.LINK,
                title=entry.title,
                target=entry.target,
                open_in_new_context=entry.open_in_new_context,
            )

        route = join_route(parent_route, slug)
        try:
            resolved = self.resolver.resolve(route)
        except KeyError as exc:
            if not self.strict:
                return None
            msg = f"Slug '{slug}' under '{parent_route}' has no page or section."
            raise RouteTreeError(msg, slug=slug, parent_route=parent_route) from exc

        match resolved:
            case OrderingDescriptor():
                return RouteNode(
                    name=slug,
                    route=route,
                    kind=NodeKind.SECTION,
                    title=entry.title,
                    children=self._build_children(resolved, route),
                    section_data=resolved,
                )
            case PageDescriptor() | None:
                return RouteNode(
                    name=slug,
                    route=route,
                    kind=NodeKind.PAGE,
                    title=entry.title,
                    descriptor=resolved,
                )
            case _:
                msg = (
                    f"Slug '{slug}' under '{parent_route}' resolved to unsupported "
                    f"{type(resolved).__name__}."
                )
                raise RouteTreeError(msg, slug=slug, parent_route=parent_route)


def iter_nodes(root: RouteNode) -> cabc.Iterator[RouteNode]:
    """Yield every node of the tree in pre-order, children in declared order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(root: RouteNode, route: str) -> RouteNode | None:
    """Return the node whose route equals ``route``, if any."""
    for node in iter_nodes(root):
        if node.route == route:
            return node
    return None


__all__ = [
    "ROOT_ROUTE",
    "RouteTreeBuilder",
    "RouteTreeError",
    "find_node",
    "iter_nodes",
    "join_route",
]
