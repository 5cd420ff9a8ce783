"""Exception hierarchy for feed-structure.

Every error raised by the engine derives from ``FeedStructureError`` and
also from the closest built-in exception, so callers may catch either the
library-specific class or the familiar built-in one.

- ``MalformedDocumentError``: raw text could not be parsed.
- ``NodeNotFoundError``: a tree edit referenced an unknown node identifier.
- ``InvalidEditError``: a tree edit is structurally impossible.
- ``UnknownTargetFieldError``: a mapping names a field the schema lacks.
"""

from __future__ import annotations

__all__ = [
    "FeedStructureError",
    "InvalidEditError",
    "MalformedDocumentError",
    "NodeNotFoundError",
    "UnknownTargetFieldError",
]


class FeedStructureError(Exception):
    """Base class for all feed-structure errors."""


class MalformedDocumentError(FeedStructureError, ValueError):
    """Raised when raw feed text is not a well-formed document.

    Attributes:
        reason: The underlying parser message.
        line:   1-based line of the failure when the parser reports one.
        column: 1-based column of the failure when the parser reports one.
    """

    def __init__(
        self, reason: str, line: int | None = None, column: int | None = None
    ) -> None:
        self.reason = reason
        self.line = line
        self.column = column
        where = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"Malformed document{where}: {reason}")


class NodeNotFoundError(FeedStructureError, LookupError):
    """Raised when an edit references a node identifier absent from the tree.

    Usually a stale reference held by a presentation layer; the caller should
    refresh its node index and retry.
    """

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"No node with id {node_id!r}")


class InvalidEditError(FeedStructureError, ValueError):
    """Raised when an edit cannot be applied to the addressed node."""


class UnknownTargetFieldError(FeedStructureError, KeyError):
    """Raised when a mapping rule names a target field unknown to the schema."""

    def __init__(self, target_field: str) -> None:
        self.target_field = target_field
        super().__init__(target_field)

    def __str__(self) -> str:
        return f"Unknown target field {self.target_field!r}"
