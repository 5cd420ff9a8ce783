"""Mapping subpackage: source path -> target field rules and coverage.

The layer records intent only; applying transformations to values belongs
to the import pipeline downstream.
"""

from __future__ import annotations

from feed_structure.mapping.catalog import DEFAULT_TARGET_FIELDS, SUGGESTIONS, StaticSchema
from feed_structure.mapping.layer import FieldMappingLayer
from feed_structure.mapping.rules import (
    CoverageEntry,
    CoverageReport,
    MappingRule,
    TargetField,
    Transformation,
    TransformationKind,
)

__all__ = [
    "DEFAULT_TARGET_FIELDS",
    "SUGGESTIONS",
    "CoverageEntry",
    "CoverageReport",
    "FieldMappingLayer",
    "MappingRule",
    "StaticSchema",
    "TargetField",
    "Transformation",
    "TransformationKind",
]
