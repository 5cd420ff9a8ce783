"""Edit commands: tree edits as values, so a batch can be queued and replayed.

Each command wraps one ``TreeEditor`` operation.  ``RoundTripCoordinator.apply``
runs a batch and reports every outcome as an ``EditResult`` instead of
raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from feed_structure.errors import FeedStructureError
from feed_structure.tree.editor import TreeEditor
from feed_structure.tree.nodes import DocumentNode, Scalar

__all__ = [
    "DeleteSubtree",
    "DuplicateSubtree",
    "Edit",
    "EditResult",
    "InsertChild",
    "Rename",
    "ReorderSiblings",
    "SetValue",
    "apply_edit",
]


class Edit(Protocol):
    def apply(self, editor: TreeEditor) -> str | bool | None: ...


@dataclass(frozen=True, slots=True)
class Rename:
    node_id: str
    new_name: str

    def apply(self, editor: TreeEditor) -> None:
        editor.rename(self.node_id, self.new_name)


@dataclass(frozen=True, slots=True)
class SetValue:
    node_id: str
    value: Scalar | None

    def apply(self, editor: TreeEditor) -> None:
        editor.set_value(self.node_id, self.value)


@dataclass(frozen=True, slots=True)
class DeleteSubtree:
    node_id: str

    def apply(self, editor: TreeEditor) -> None:
        editor.delete_subtree(self.node_id)


@dataclass(frozen=True, slots=True)
class InsertChild:
    parent_id: str
    child: DocumentNode

    def apply(self, editor: TreeEditor) -> str:
        return editor.insert_child(self.parent_id, self.child)


@dataclass(frozen=True, slots=True)
class DuplicateSubtree:
    node_id: str

    def apply(self, editor: TreeEditor) -> str:
        return editor.duplicate_subtree(self.node_id)


@dataclass(frozen=True, slots=True)
class ReorderSiblings:
    first_id: str
    second_id: str

    def apply(self, editor: TreeEditor) -> bool:
        return editor.reorder_siblings(self.first_id, self.second_id)


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of one edit.

    Attributes:
        edit: The command that was applied.
        value: What the operation returned (new node id, swap flag, or None).
        error: The error that stopped the edit, None on success.
    """

    edit: Edit
    value: str | bool | None = None
    error: FeedStructureError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def apply_edit(editor: TreeEditor, edit: Edit) -> EditResult:
    """Apply *edit*, capturing engine errors in the result."""
    try:
        return EditResult(edit, value=edit.apply(editor))
    except FeedStructureError as exc:
        return EditResult(edit, error=exc)
