"""Serialise a built route tree into the JSON page map read by the renderer."""

from __future__ import annotations

import json
import typing as typ

from .models import NodeKind, RouteNode

if typ.TYPE_CHECKING:
    from pathlib import Path


def route_tree_to_dict(node: RouteNode) -> dict[str, typ.Any]:
    """Return a JSON-ready mapping for ``node`` and its descendants."""
    payload: dict[str, typ.Any] = {
        "name": node.name,
        "kind": str(node.kind),
        "title": node.title,
    }
    if node.kind is NodeKind.LINK:
        payload["target"] = node.target
        payload["openInNewContext"] = node.open_in_new_context
        return payload

    payload["route"] = node.route
    if node.kind is NodeKind.SECTION:
        payload["children"] = [route_tree_to_dict(child) for child in node.children]
    elif node.descriptor is not None:
        descriptor = node.descriptor
        front_matter: dict[str, typ.Any] = {"title": descriptor.title}
        if descriptor.description is not None:
            front_matter["description"] = descriptor.description
        if descriptor.keywords:
            front_matter["keywords"] = list(descriptor.keywords)
        if descriptor.canonical is not None:
            front_matter["canonical"] = descriptor.canonical
        payload["frontMatter"] = front_matter
    return payload


def write_route_map(root: RouteNode, output_path: Path) -> Path:
    """Write the page map JSON for ``root`` to ``output_path``."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(route_tree_to_dict(root), indent=2, ensure_ascii=False)
    output_path.write_text(text + "\n", encoding="utf-8")
    return output_path


__all__ = ["route_tree_to_dict", "write_route_map"]
