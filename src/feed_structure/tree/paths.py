"""Logical paths and node lookup over a DocumentNode tree.

A logical path is the dot-joined sequence of names from the root, with
attribute segments prefixed by ``@``:

    shop.offer.@id
    shop.offer.price

ARRAY_GROUP members contribute no segment of their own, so every member of
``shop.offer`` shares the path ``shop.offer`` and reordering members never
changes a path.  The synthetic ``_text`` leaf shares its element's path.
"""

from __future__ import annotations

from collections.abc import Iterator

from feed_structure.errors import NodeNotFoundError
from feed_structure.tree.nodes import ATTRIBUTE_PREFIX, DocumentNode, NodeKind

__all__ = [
    "NodeLocation",
    "child_path",
    "count_items",
    "find_node",
    "iter_nodes",
    "locate",
    "path_of",
    "split_path",
]

PATH_SEPARATOR = "."


def child_path(parent_path: str, child: DocumentNode) -> str:
    """Return the logical path of *child* given its parent's logical path."""
    if child.kind == NodeKind.TEXT:
        return parent_path
    segment = child.name
    if child.kind == NodeKind.ATTRIBUTE:
        segment = f"{ATTRIBUTE_PREFIX}{child.name}"
    return f"{parent_path}{PATH_SEPARATOR}{segment}" if parent_path else segment


def split_path(path: str) -> list[str]:
    """Split a logical path into its segments.

    Characteristic qualifiers (``param[Colour]``) may contain dots, so the
    split ignores separators inside square brackets.
    """
    segments: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in path:
        if ch == "[":
            depth += 1
        elif ch == "]" and depth:
            depth -= 1
        if ch == PATH_SEPARATOR and depth == 0:
            segments.append("".join(current))
            current = []
        else:
            current.append(ch)
    if current or segments:
        segments.append("".join(current))
    return segments


def iter_nodes(root: DocumentNode) -> Iterator[tuple[str, DocumentNode]]:
    """Yield ``(logical_path, node)`` for every node in document order."""
    stack: list[tuple[str, DocumentNode]] = [(root.name, root)]
    while stack:
        path, node = stack.pop()
        yield path, node
        if node.kind == NodeKind.ARRAY_GROUP:
            pairs = [(path, member) for member in node.children]
        else:
            pairs = [(child_path(path, child), child) for child in node.children]
        stack.extend(reversed(pairs))


class NodeLocation:
    """A node together with its parent and position among the parent's children."""

    __slots__ = ("index", "node", "parent", "path")

    def __init__(
        self,
        node: DocumentNode,
        parent: DocumentNode | None,
        index: int,
        path: str,
    ) -> None:
        self.node = node
        self.parent = parent
        self.index = index
        self.path = path


def locate(root: DocumentNode, node_id: str) -> NodeLocation:
    """Find *node_id* under *root*.

    Raises:
        NodeNotFoundError: When no node carries that identifier.
    """
    if root.node_id == node_id:
        return NodeLocation(root, None, 0, root.name)
    stack: list[tuple[DocumentNode, str]] = [(root, root.name)]
    while stack:
        parent, parent_path = stack.pop()
        for index, child in enumerate(parent.children):
            if parent.kind == NodeKind.ARRAY_GROUP:
                path = parent_path
            else:
                path = child_path(parent_path, child)
            if child.node_id == node_id:
                return NodeLocation(child, parent, index, path)
            if child.children:
                stack.append((child, path))
    raise NodeNotFoundError(node_id)


def find_node(root: DocumentNode, node_id: str) -> DocumentNode:
    """Return the node carrying *node_id*."""
    return locate(root, node_id).node


def path_of(root: DocumentNode, node_id: str) -> str:
    """Return the logical path of the node carrying *node_id*."""
    return locate(root, node_id).path


def count_items(root: DocumentNode) -> int:
    """Return the size of the largest ARRAY_GROUP, i.e. the product count."""
    return max(
        (len(node.children) for node in root.iter_subtree() if node.kind == NodeKind.ARRAY_GROUP),
        default=0,
    )
