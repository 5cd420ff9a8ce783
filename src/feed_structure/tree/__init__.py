"""Tree subpackage: the document model and its markup codec.

Re-exports the public API for the tree module:
- DocumentNode / NodeKind: the generic element/attribute/text/array-group tree
- DocumentParser / DocumentSerializer: markup text <-> tree
- TreeEditor: identifier-addressed structural edits
- ExpansionState: presentation-only expanded/collapsed flags
- path helpers: iter_nodes, find_node, path_of, count_items
"""

from feed_structure.tree.editor import TreeEditor
from feed_structure.tree.nodes import (
    ATTRIBUTE_PREFIX,
    TEXT_NODE_NAME,
    DocumentNode,
    NodeKind,
    Scalar,
)
from feed_structure.tree.parser import DocumentParser
from feed_structure.tree.paths import count_items, find_node, iter_nodes, path_of
from feed_structure.tree.presentation import ExpansionState
from feed_structure.tree.serializer import DocumentSerializer

__all__ = [
    "ATTRIBUTE_PREFIX",
    "TEXT_NODE_NAME",
    "DocumentNode",
    "DocumentParser",
    "DocumentSerializer",
    "ExpansionState",
    "NodeKind",
    "Scalar",
    "TreeEditor",
    "count_items",
    "find_node",
    "iter_nodes",
    "path_of",
]
