"""DocumentSerializer: renders a DocumentNode tree back into markup text.

The inverse of ``DocumentParser``:

- ATTRIBUTE children become attributes of the enclosing start tag.
- ARRAY_GROUP members become repeated sibling elements named like the group.
- A ``_text`` child becomes the element's direct text content.
- Containers with nothing inside become self-closing tags, never dropped.

Formatting is fixed: one element per line, ``indent`` per nesting level.
An element with text stays on a single line together with any child
elements it has, so the text carries no layout whitespace.  Serializing an
unchanged tree twice yields byte-identical output.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from feed_structure.config import SerializerConfig
from feed_structure.tree.nodes import DocumentNode, NodeKind, Scalar

__all__ = ["DocumentSerializer", "format_scalar"]

_ATTR_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}
_TEXT_ENTITIES = {"\r": "&#13;"}


def format_scalar(value: Scalar) -> str:
    """Render a scalar the way the parser would read it back."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DocumentSerializer:
    """Renders ``DocumentNode`` trees as well-formed markup text.

    Example::

        serializer = DocumentSerializer()
        text = serializer.serialize(root)
    """

    def __init__(self, config: SerializerConfig | None = None) -> None:
        self._config = config if config is not None else SerializerConfig()

    @property
    def config(self) -> SerializerConfig:
        return self._config

    def serialize(self, root: DocumentNode) -> str:
        """Render *root* and its subtree.

        Raises:
            ValueError: If *root* is not an ELEMENT node.
        """
        if root.kind != NodeKind.ELEMENT:
            msg = f"document root must be an element, got {root.kind}"
            raise ValueError(msg)
        lines: list[str] = []
        if self._config.xml_declaration:
            lines.append(
                f'<?xml version="1.0" encoding="{self._config.encoding_label}"?>'
            )
        self._render(root, root.name, 0, lines)
        newline = self._config.newline
        return newline.join(lines) + newline

    def _render(self, node: DocumentNode, name: str, depth: int, lines: list[str]) -> None:
        if node.kind == NodeKind.ARRAY_GROUP:
            for member in node.children:
                self._render(member, node.name, depth, lines)
            return

        pad = self._config.indent * depth
        if node.value is not None or _text(node):
            # no layout whitespace around text, so a non-stripping parser
            # reads back exactly the same value
            lines.append(f"{pad}{self._inline(node, name)}")
            return

        open_tag = f"{name}{_attributes(node)}"
        elements = _elements(node)
        if not elements:
            lines.append(f"{pad}<{open_tag}/>")
            return

        lines.append(f"{pad}<{open_tag}>")
        for child in elements:
            self._render(child, child.name, depth + 1, lines)
        lines.append(f"{pad}</{name}>")

    def _inline(self, node: DocumentNode, name: str) -> str:
        if node.kind == NodeKind.ARRAY_GROUP:
            return "".join(self._inline(member, node.name) for member in node.children)
        open_tag = f"{name}{_attributes(node)}"
        if node.value is not None:
            return f"<{open_tag}>{_escape_text(node.value)}</{name}>"
        inner = _text(node) + "".join(self._inline(c, c.name) for c in _elements(node))
        if not inner:
            return f"<{open_tag}/>"
        return f"<{open_tag}>{inner}</{name}>"


def _attributes(node: DocumentNode) -> str:
    return "".join(
        f' {attr.name}="{_escape_attr(attr.value)}"'
        for attr in node.children
        if attr.kind == NodeKind.ATTRIBUTE
    )


def _text(node: DocumentNode) -> str:
    return " ".join(
        _escape_text(c.value)
        for c in node.children
        if c.kind == NodeKind.TEXT and c.value is not None
    )


def _elements(node: DocumentNode) -> list[DocumentNode]:
    """Child elements and groups; an empty group has no markup."""
    return [
        c for c in node.children
        if c.kind == NodeKind.ELEMENT or (c.kind == NodeKind.ARRAY_GROUP and c.children)
    ]


def _escape_text(value: Scalar) -> str:
    return escape(format_scalar(value), _TEXT_ENTITIES)


def _escape_attr(value: Scalar | None) -> str:
    return escape(format_scalar(value if value is not None else ""), _ATTR_ENTITIES)
