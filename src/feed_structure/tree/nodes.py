"""DocumentNode dataclass and NodeKind StrEnum for the generic feed tree.

Every parsed feed document, whatever marketplace produced it, becomes a
tree of ``DocumentNode`` objects.  Four node kinds cover all markup:

- ELEMENT:     a tag.  Either a leaf carrying ``value`` or a container.
- ATTRIBUTE:   an attribute of its parent element (always a leaf).
- TEXT:        the synthetic ``_text`` leaf holding an element's text when
               the element also has attributes or child elements.
- ARRAY_GROUP: a run of same-named sibling elements; its children are the
               individual occurrences, all named like the group.

Parents own their children; there are no back-references.  Node identity
(``node_id``) is excluded from equality so two trees compare structurally.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum, auto

__all__ = [
    "ATTRIBUTE_PREFIX",
    "TEXT_NODE_NAME",
    "DocumentNode",
    "NodeKind",
    "Scalar",
    "new_node_id",
    "normalize_text",
]

TEXT_NODE_NAME = "_text"
ATTRIBUTE_PREFIX = "@"

Scalar = str | int | float | bool


def new_node_id() -> str:
    """Return a fresh, process-unique node identifier."""
    return uuid.uuid4().hex


def normalize_text(value: Scalar | None) -> Scalar | None:
    """Map blank element text to None.

    Markup cannot tell an empty element from one without text, so a blank
    string would not survive a round trip.
    """
    if isinstance(value, str) and not value.strip():
        return None
    return value


class NodeKind(StrEnum):
    """The four structural node kinds.

    StrEnum values are the lowercased member names:
    ELEMENT -> "element", ATTRIBUTE -> "attribute", TEXT -> "text",
    ARRAY_GROUP -> "array_group".
    """

    ELEMENT = auto()
    ATTRIBUTE = auto()
    TEXT = auto()
    ARRAY_GROUP = auto()


@dataclass(slots=True)
class DocumentNode:
    """A node in the feed document tree.

    Attributes:
        name:     Tag name for ELEMENT/ARRAY_GROUP, attribute name (without
                  the ``@`` prefix) for ATTRIBUTE, ``"_text"`` for TEXT.
        kind:     Which kind of node this is (see NodeKind).
        value:    Scalar payload of a leaf; None for containers.
        children: Ordered child nodes.  Attributes precede everything else.
        node_id:  Identifier used by the editor.  Not part of equality.
    """

    name: str
    kind: NodeKind
    value: Scalar | None = None
    children: list[DocumentNode] = field(default_factory=list)
    node_id: str = field(default_factory=new_node_id, compare=False)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def element(
        cls,
        name: str,
        value: Scalar | None = None,
        children: Iterable[DocumentNode] = (),
    ) -> DocumentNode:
        return cls(
            name=name,
            kind=NodeKind.ELEMENT,
            value=normalize_text(value),
            children=list(children),
        )

    @classmethod
    def attribute(cls, name: str, value: Scalar) -> DocumentNode:
        return cls(name=name, kind=NodeKind.ATTRIBUTE, value=value)

    @classmethod
    def text(cls, value: Scalar) -> DocumentNode:
        return cls(name=TEXT_NODE_NAME, kind=NodeKind.TEXT, value=value)

    @classmethod
    def array_group(cls, name: str, members: Iterable[DocumentNode]) -> DocumentNode:
        return cls(name=name, kind=NodeKind.ARRAY_GROUP, children=list(members))

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def is_leaf(self) -> bool:
        """True when the node carries a scalar value."""
        return self.value is not None

    @property
    def is_container(self) -> bool:
        return self.value is None and self.kind in (NodeKind.ELEMENT, NodeKind.ARRAY_GROUP)

    @property
    def attributes(self) -> list[DocumentNode]:
        return [c for c in self.children if c.kind == NodeKind.ATTRIBUTE]

    @property
    def content(self) -> list[DocumentNode]:
        """Non-attribute children in order."""
        return [c for c in self.children if c.kind != NodeKind.ATTRIBUTE]

    def text_child(self) -> DocumentNode | None:
        for child in self.children:
            if child.kind == NodeKind.TEXT:
                return child
        return None

    def attribute_value(self, name: str) -> Scalar | None:
        """Value of the first attribute called *name* (case-insensitive)."""
        lowered = name.lower()
        for child in self.children:
            if child.kind == NodeKind.ATTRIBUTE and child.name.lower() == lowered:
                return child.value
        return None

    def iter_subtree(self) -> Iterator[DocumentNode]:
        """Yield this node and every descendant in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def copy(self) -> DocumentNode:
        """Deep copy with fresh identifiers for the copy and all descendants."""
        return DocumentNode(
            name=self.name,
            kind=self.kind,
            value=self.value,
            children=[child.copy() for child in self.children],
        )

    def snapshot(self) -> DocumentNode:
        """Deep copy that keeps every node identifier."""
        return DocumentNode(
            name=self.name,
            kind=self.kind,
            value=self.value,
            children=[child.snapshot() for child in self.children],
            node_id=self.node_id,
        )
