"""ExpansionState: per-node expanded/collapsed flags for tree displays.

Presentation metadata lives beside the tree, keyed by node identifier, and
is never part of the canonical tree, so it is never serialized.
"""

from __future__ import annotations

__all__ = ["ExpansionState"]


class ExpansionState:
    """Set of expanded node identifiers owned by a presentation collaborator."""

    def __init__(self, expanded: set[str] | None = None) -> None:
        self._expanded: set[str] = set(expanded) if expanded else set()

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self._expanded

    def expand(self, node_id: str) -> None:
        self._expanded.add(node_id)

    def collapse(self, node_id: str) -> None:
        self._expanded.discard(node_id)

    def toggle(self, node_id: str) -> bool:
        """Flip the flag for *node_id* and return the new state."""
        if node_id in self._expanded:
            self._expanded.remove(node_id)
            return False
        self._expanded.add(node_id)
        return True

    def forget(self, node_ids: set[str]) -> None:
        """Drop flags for nodes that no longer exist."""
        self._expanded -= node_ids

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._expanded

    def __len__(self) -> int:
        return len(self._expanded)
