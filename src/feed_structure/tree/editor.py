"""TreeEditor: in-place structural edits on an owned DocumentNode tree.

All operations are synchronous mutations addressed by node identifier.
They never serialize or re-parse; the round-trip coordinator does that.
Edits are literal: duplicating a plain element leaves two same-named
siblings, which the next re-parse folds into an ARRAY_GROUP.

Every operation raises ``NodeNotFoundError`` for an unknown identifier and
``InvalidEditError`` when the edit would produce a tree the serializer
cannot express.
"""

from __future__ import annotations

import logging

from feed_structure.errors import InvalidEditError
from feed_structure.tree.nodes import DocumentNode, NodeKind, Scalar, normalize_text
from feed_structure.tree.paths import NodeLocation, locate
from feed_structure.tree.presentation import ExpansionState

__all__ = ["TreeEditor"]

logger = logging.getLogger(__name__)


class TreeEditor:
    """Structural edit API over a single document tree.

    Args:
        root: The tree to edit.  The editor mutates it in place.
        expansion: Presentation flags updated by ``insert_child`` and
            ``toggle_expanded``.  A private instance is created when None.

    Attributes:
        revision: Incremented after every successful mutation.
    """

    def __init__(self, root: DocumentNode, expansion: ExpansionState | None = None) -> None:
        self._root = root
        self._expansion = expansion if expansion is not None else ExpansionState()
        self.revision = 0

    @property
    def root(self) -> DocumentNode:
        return self._root

    @property
    def expansion(self) -> ExpansionState:
        return self._expansion

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def rename(self, node_id: str, new_name: str) -> None:
        """Rename a node.

        Renaming an ARRAY_GROUP, or any of its members, renames the group and
        every member: the group's name is the tag all members serialize with.
        """
        if not new_name or new_name != new_name.strip():
            raise InvalidEditError(f"invalid node name {new_name!r}")
        loc = locate(self._root, node_id)
        node = loc.node
        if node.kind == NodeKind.TEXT:
            raise InvalidEditError("the text node of an element cannot be renamed")
        if node.kind == NodeKind.ATTRIBUTE and loc.parent is not None:
            for sibling in loc.parent.attributes:
                if sibling is not node and sibling.name == new_name:
                    raise InvalidEditError(f"attribute {new_name!r} already exists")
        if loc.parent is not None and loc.parent.kind == NodeKind.ARRAY_GROUP:
            node = loc.parent
        node.name = new_name
        if node.kind == NodeKind.ARRAY_GROUP:
            for member in node.children:
                member.name = new_name
        self._touch("rename", node_id)

    def set_value(self, node_id: str, value: Scalar | None) -> None:
        """Set the scalar payload of a node.

        On an element that has attributes but no child elements the value
        lands in its ``_text`` child.  ``None`` or blank text clears an
        element's text; on a ``_text`` node it removes the node.
        """
        loc = locate(self._root, node_id)
        node = loc.node
        if node.kind == NodeKind.ARRAY_GROUP:
            raise InvalidEditError("an array group has no value of its own")
        if node.kind != NodeKind.ATTRIBUTE:
            value = normalize_text(value)
        if node.kind == NodeKind.TEXT and value is None and loc.parent is not None:
            loc.parent.children.remove(node)
            self._expansion.forget({node.node_id})
        elif node.kind in (NodeKind.ATTRIBUTE, NodeKind.TEXT):
            if value is None:
                raise InvalidEditError(f"{node.kind} value cannot be None; delete it instead")
            node.value = value
        elif not node.children:
            node.value = value
        elif node.content and any(c.kind != NodeKind.TEXT for c in node.content):
            raise InvalidEditError(f"element {node.name!r} has child elements")
        else:
            text = node.text_child()
            if value is None:
                if text is not None:
                    node.children.remove(text)
            elif text is None:
                node.children.append(DocumentNode.text(value))
            else:
                text.value = value
        self._touch("set_value", node_id)

    def delete_subtree(self, node_id: str) -> None:
        """Remove a node and all its descendants.

        The parent is kept even when this was its last child, so an emptied
        container serializes as an empty element.  The exception is an
        ARRAY_GROUP: it has no markup of its own, so deleting its last
        member removes the group too.
        """
        loc, parent = self._locate_child(node_id, "delete")
        removed = parent.children.pop(loc.index)
        forgotten = {n.node_id for n in removed.iter_subtree()}
        if parent.kind == NodeKind.ARRAY_GROUP and not parent.children:
            group = locate(self._root, parent.node_id)
            if group.parent is not None:
                group.parent.children.pop(group.index)
                forgotten.add(parent.node_id)
        self._expansion.forget(forgotten)
        self._touch("delete_subtree", node_id)

    def insert_child(self, parent_id: str, child: DocumentNode) -> str:
        """Append *child* under *parent_id* and mark the parent expanded.

        Attributes are placed after the parent's last attribute.  A leaf
        element receiving children moves its value into a ``_text`` child.
        Members appended to an ARRAY_GROUP take the group's name.

        Returns:
            The identifier of the inserted child.
        """
        parent = locate(self._root, parent_id).node
        if parent.kind in (NodeKind.ATTRIBUTE, NodeKind.TEXT):
            raise InvalidEditError(f"cannot insert under a {parent.kind} node")
        if child.kind == NodeKind.TEXT:
            raise InvalidEditError("element text is edited with set_value")
        if child.kind == NodeKind.ATTRIBUTE and any(
            a.name == child.name for a in parent.attributes
        ):
            raise InvalidEditError(f"attribute {child.name!r} already exists")

        if parent.kind == NodeKind.ARRAY_GROUP:
            if child.kind != NodeKind.ELEMENT:
                raise InvalidEditError("array group members must be elements")
            child.name = parent.name
            parent.children.append(child)
        else:
            if parent.value is not None:
                parent.children.append(DocumentNode.text(parent.value))
                parent.value = None
            if child.kind == NodeKind.ATTRIBUTE:
                parent.children.insert(len(parent.attributes), child)
            else:
                parent.children.append(child)

        self._expansion.expand(parent.node_id)
        self._touch("insert_child", parent_id)
        return child.node_id

    def duplicate_subtree(self, node_id: str) -> str:
        """Insert a deep copy right after the original.

        The copy and all its descendants get fresh identifiers.

        Returns:
            The identifier of the copy.
        """
        loc, parent = self._locate_child(node_id, "duplicate")
        if loc.node.kind in (NodeKind.ATTRIBUTE, NodeKind.TEXT):
            raise InvalidEditError(f"a {loc.node.kind} node cannot be duplicated")
        clone = loc.node.copy()
        parent.children.insert(loc.index + 1, clone)
        self._touch("duplicate_subtree", node_id)
        return clone.node_id

    def reorder_siblings(self, first_id: str, second_id: str) -> bool:
        """Swap two children of the same parent.

        Returns:
            True when swapped.  False (and no change) when the nodes have
            different parents, are the same node, or when the swap would move
            an attribute behind a non-attribute child.
        """
        first = locate(self._root, first_id)
        second = locate(self._root, second_id)
        if first.parent is None or first.parent is not second.parent:
            return False
        if first.index == second.index:
            return False
        if (first.node.kind == NodeKind.ATTRIBUTE) != (second.node.kind == NodeKind.ATTRIBUTE):
            return False
        children = first.parent.children
        children[first.index], children[second.index] = second.node, first.node
        self._touch("reorder_siblings", first_id)
        return True

    def toggle_expanded(self, node_id: str) -> bool:
        """Flip the display flag of an existing node; returns the new state.

        Presentation only: ``revision`` is left untouched.
        """
        locate(self._root, node_id)
        return self._expansion.toggle(node_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _locate_child(self, node_id: str, verb: str) -> tuple[NodeLocation, DocumentNode]:
        loc = locate(self._root, node_id)
        if loc.parent is None:
            raise InvalidEditError(f"cannot {verb} the document root")
        return loc, loc.parent

    def _touch(self, operation: str, node_id: str) -> None:
        self.revision += 1
        logger.debug("%s on %s (revision %d)", operation, node_id, self.revision)
