"""Mapping value types: transformations, rules, target fields, coverage.

All types are immutable.  A ``MappingRule`` records intent only: applying
a transformation to live product data happens outside the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

__all__ = [
    "CoverageEntry",
    "CoverageReport",
    "MappingRule",
    "TargetField",
    "Transformation",
    "TransformationKind",
]


class TransformationKind(StrEnum):
    """How a source value is converted before landing in the target field.

    - DIRECT:  copied unchanged
    - NUMBER:  coerced to a number
    - STRING:  coerced to text
    - ARRAY:   wrapped into / kept as a list
    - BOOLEAN: coerced to true/false
    - DATE:    parsed as a date
    - CUSTOM:  operator-defined, described by ``params``
    """

    DIRECT = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    BOOLEAN = auto()
    DATE = auto()
    CUSTOM = auto()


@dataclass(frozen=True, slots=True)
class Transformation:
    """A transformation kind plus free-form parameters."""

    kind: TransformationKind = TransformationKind.DIRECT
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, kind: TransformationKind | str, **params: Any) -> Transformation:
        return cls(kind=TransformationKind(kind), params=dict(params))


@dataclass(frozen=True, slots=True)
class MappingRule:
    """Intent to map one source path onto one target schema field."""

    source_field: str
    target_field: str
    transformation: Transformation = field(default_factory=Transformation)


@dataclass(frozen=True, slots=True)
class TargetField:
    """One field of the target product schema.

    Attributes:
        id: Stable identifier used in mapping rules.
        label: Operator-facing name.
        required: Whether a complete template must map this field.
        category: Display grouping in the schema catalog.
    """

    id: str
    label: str
    required: bool = False
    category: str = ""


@dataclass(frozen=True, slots=True)
class CoverageEntry:
    """Whether a required target field is currently mapped, and from where."""

    target: TargetField
    sources: tuple[str, ...] = ()

    @property
    def mapped(self) -> bool:
        return bool(self.sources)


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """Required-field coverage of a rule set."""

    entries: tuple[CoverageEntry, ...]

    @property
    def required_total(self) -> int:
        return len(self.entries)

    @property
    def required_mapped(self) -> int:
        return sum(1 for entry in self.entries if entry.mapped)

    @property
    def missing(self) -> tuple[TargetField, ...]:
        return tuple(entry.target for entry in self.entries if not entry.mapped)

    @property
    def complete(self) -> bool:
        return self.required_mapped == self.required_total

    @property
    def ratio(self) -> float:
        """Fraction of required fields mapped; 1.0 when nothing is required."""
        if not self.entries:
            return 1.0
        return self.required_mapped / self.required_total
