"""Navigation route-tree assembly for the SP8D documentation site."""

from .builder import (
    ROOT_ROUTE,
    RouteTreeBuilder,
    RouteTreeError,
    find_node,
    iter_nodes,
    join_route,
)
from .export import route_tree_to_dict, write_route_map
from .models import (
    DescriptorError,
    LabelEntry,
    LinkEntry,
    NodeKind,
    OrderingDescriptor,
    PageDescriptor,
    RouteNode,
)
from .resolvers import (
    AmbiguousRouteError,
    ContentDirectoryResolver,
    MappingResolver,
    RouteResolver,
    load_ordering,
    parse_front_matter,
)

__all__ = [
    "ROOT_ROUTE",
    "AmbiguousRouteError",
    "ContentDirectoryResolver",
    "DescriptorError",
    "LabelEntry",
    "LinkEntry",
    "MappingResolver",
    "NodeKind",
    "OrderingDescriptor",
    "PageDescriptor",
    "RouteNode",
    "RouteResolver",
    "RouteTreeBuilder",
    "RouteTreeError",
    "find_node",
    "iter_nodes",
    "join_route",
    "load_ordering",
    "parse_front_matter",
    "route_tree_to_dict",
    "write_route_map",
]
