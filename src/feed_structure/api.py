"""Public API functions for feed-structure.

Each call builds fresh component instances, so calls never share state.
"""

from __future__ import annotations

from feed_structure.classify.classifier import FieldClassifier
from feed_structure.classify.fields import FieldDescriptor
from feed_structure.config import (
    ClassifierConfig,
    EngineConfig,
    ParserConfig,
    SerializerConfig,
)
from feed_structure.coordinator import RoundTripCoordinator
from feed_structure.detection.detector import FormatDetector
from feed_structure.detection.profiles import FormatProfile
from feed_structure.tree.nodes import DocumentNode
from feed_structure.tree.parser import DocumentParser
from feed_structure.tree.serializer import DocumentSerializer

__all__ = [
    "classify_fields",
    "detect_format",
    "open_document",
    "parse_document",
    "serialize_document",
]


def parse_document(text: str | bytes, config: ParserConfig | None = None) -> DocumentNode:
    """Parse feed markup into a document tree.

    Args:
        text:   Markup as ``str`` (always read as Unicode) or ``bytes``
                (decoded per its XML declaration).
        config: Parser options. Defaults to ``ParserConfig()`` when None.

    Raises:
        MalformedDocumentError: If the input is not well-formed.
    """
    return DocumentParser(config).parse(text)


def serialize_document(tree: DocumentNode, config: SerializerConfig | None = None) -> str:
    """Render a document tree as indented markup."""
    return DocumentSerializer(config).serialize(tree)


def detect_format(text: str | bytes) -> FormatProfile:
    """Guess the feed format from its tag vocabulary; CUSTOM when unknown."""
    return FormatDetector().detect(text)


def classify_fields(
    tree: DocumentNode,
    profile: FormatProfile | None = None,
    config: ClassifierConfig | None = None,
) -> list[FieldDescriptor]:
    """Return one descriptor per distinct leaf path of *tree*, in document order.

    Args:
        tree:    Parsed document.
        profile: Structural hints; without one every leaf is categorised by
                 keyword alone.
        config:  Classifier options. Defaults to ``ClassifierConfig()``.
    """
    return FieldClassifier(config).classify(tree, profile)


def open_document(
    text: str | bytes,
    profile: FormatProfile | None = None,
    config: EngineConfig | None = None,
) -> RoundTripCoordinator:
    """Parse, detect and classify *text*, ready for editing.

    Raises:
        MalformedDocumentError: If the input is not well-formed.
    """
    return RoundTripCoordinator.open(text, profile=profile, config=config)
