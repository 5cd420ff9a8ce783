"""Frozen configuration objects for every engine component.

Each config is an immutable dataclass validated at construction time so an
invalid setting fails loudly where it is created rather than deep inside a
parse or round trip.  ``EngineConfig`` bundles the per-component configs
for the round-trip coordinator.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "ClassifierConfig",
    "EngineConfig",
    "ParserConfig",
    "SerializerConfig",
]

_NEWLINES = ("\n", "\r\n")


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Settings for ``DocumentParser``.

    Attributes:
        coerce_scalars: When True, text that is unambiguously an integer,
            a decimal or a lowercase boolean becomes an int/float/bool value.
            Default False keeps every value a string.
        strip_text: Trim surrounding whitespace from text and attribute values.
        huge_tree: Lift lxml's depth and text-size safety limits so very large
            marketplace feeds parse.
    """

    coerce_scalars: bool = False
    strip_text: bool = True
    huge_tree: bool = True


@dataclass(frozen=True, slots=True)
class SerializerConfig:
    """Settings for ``DocumentSerializer``.

    Attributes:
        indent: Whitespace emitted once per nesting level.
        newline: Line terminator, ``"\\n"`` or ``"\\r\\n"``.
        xml_declaration: Emit an ``<?xml ...?>`` header line.
        encoding_label: Encoding named in the header.
    """

    indent: str = "  "
    newline: str = "\n"
    xml_declaration: bool = True
    encoding_label: str = "UTF-8"

    def __post_init__(self) -> None:
        if self.indent.strip():
            msg = f"indent must be whitespace only, got {self.indent!r}"
            raise ValueError(msg)
        if self.newline not in _NEWLINES:
            msg = f"newline must be one of {_NEWLINES!r}, got {self.newline!r}"
            raise ValueError(msg)
        if not self.encoding_label:
            msg = "encoding_label must not be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ClassifierConfig:
    """Settings for ``FieldClassifier``.

    Attributes:
        max_samples: Upper bound on distinct samples kept per field.
        sample_length: Samples longer than this are truncated.
        characteristic_tags: Tag names treated as name/value characteristics
            in addition to the active profile's parameter tag.
        cache_size: Capacity of the per-classifier keyword lookup cache.
    """

    max_samples: int = 20
    sample_length: int = 100
    characteristic_tags: tuple[str, ...] = ("param", "parameter", "characteristic")
    cache_size: int = 1024

    def __post_init__(self) -> None:
        if self.max_samples < 1:
            msg = f"max_samples must be >= 1, got {self.max_samples}"
            raise ValueError(msg)
        if self.sample_length < 1:
            msg = f"sample_length must be >= 1, got {self.sample_length}"
            raise ValueError(msg)
        if self.cache_size < 1:
            msg = f"cache_size must be >= 1, got {self.cache_size}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Bundle of component configs used by the round-trip coordinator.

    Attributes:
        parser: Parser settings.
        serializer: Serializer settings.
        classifier: Classifier settings.
        quiet_window: Seconds of edit silence before a debounced round trip
            runs.  Zero runs on the next loop iteration.
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    serializer: SerializerConfig = field(default_factory=SerializerConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    quiet_window: float = 0.3

    def __post_init__(self) -> None:
        if self.quiet_window < 0.0:
            msg = f"quiet_window must be >= 0.0, got {self.quiet_window}"
            raise ValueError(msg)
