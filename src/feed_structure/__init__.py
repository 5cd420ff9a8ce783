"""Feed structure - parse, classify, edit and map product feed documents."""

from __future__ import annotations

from feed_structure.api import (
    classify_fields,
    detect_format,
    open_document,
    parse_document,
    serialize_document,
)
from feed_structure.classify.fields import Category, FieldDescriptor, FieldType
from feed_structure.config import (
    ClassifierConfig,
    EngineConfig,
    ParserConfig,
    SerializerConfig,
)
from feed_structure.coordinator import (
    PublishedState,
    RoundTripCoordinator,
    RoundTripResult,
    RoundTripStatus,
)
from feed_structure.debounce import EditDebouncer
from feed_structure.detection.profiles import FeedFormat, FormatProfile
from feed_structure.edits import (
    DeleteSubtree,
    DuplicateSubtree,
    EditResult,
    InsertChild,
    Rename,
    ReorderSiblings,
    SetValue,
)
from feed_structure.errors import (
    FeedStructureError,
    InvalidEditError,
    MalformedDocumentError,
    NodeNotFoundError,
    UnknownTargetFieldError,
)
from feed_structure.mapping.layer import FieldMappingLayer
from feed_structure.tree.nodes import DocumentNode, NodeKind

__version__: str = "0.1.0"
__all__: list[str] = [
    "Category",
    "ClassifierConfig",
    "DeleteSubtree",
    "DocumentNode",
    "DuplicateSubtree",
    "EditDebouncer",
    "EditResult",
    "EngineConfig",
    "FeedFormat",
    "FeedStructureError",
    "FieldDescriptor",
    "FieldMappingLayer",
    "FieldType",
    "FormatProfile",
    "InsertChild",
    "InvalidEditError",
    "MalformedDocumentError",
    "NodeKind",
    "NodeNotFoundError",
    "ParserConfig",
    "PublishedState",
    "Rename",
    "ReorderSiblings",
    "RoundTripCoordinator",
    "RoundTripResult",
    "RoundTripStatus",
    "SerializerConfig",
    "SetValue",
    "UnknownTargetFieldError",
    "classify_fields",
    "detect_format",
    "open_document",
    "parse_document",
    "serialize_document",
]
