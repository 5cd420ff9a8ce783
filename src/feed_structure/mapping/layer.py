"""FieldMappingLayer: the table of source-path -> target-field mapping rules.

The layer records intent only.  It keeps at most one rule per source path
(upsert semantics), suggests targets from a keyword table, proposes a
one-to-one automatic mapping, and reports how many required target fields
are covered.  It works from classifier output and never touches the tree.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from feed_structure.classify.fields import FieldDescriptor, FieldType
from feed_structure.errors import UnknownTargetFieldError
from feed_structure.mapping.catalog import SUGGESTIONS, StaticSchema
from feed_structure.mapping.matcher import assign_one_to_one
from feed_structure.mapping.rules import (
    CoverageEntry,
    CoverageReport,
    MappingRule,
    Transformation,
    TransformationKind,
)
from feed_structure.protocols import SchemaCatalog
from feed_structure.tree.paths import split_path

__all__ = ["FieldMappingLayer"]

logger = logging.getLogger(__name__)


class FieldMappingLayer:
    """Mapping rules for one template, keyed by source path.

    Args:
        schema: Target schema collaborator.  Defaults to ``StaticSchema()``.
        suggestions: Ordered ``(keyword, target_id)`` table for ``suggest``.
        rules: Rules to start from, e.g. when resuming a saved template.

    Example::

        layer = FieldMappingLayer()
        layer.upsert_mapping("shop.offer.price", "price", TransformationKind.NUMBER)
        layer.suggest("shop.offer.name")   # "name"
        layer.coverage().complete          # False until every required field is mapped
    """

    def __init__(
        self,
        schema: SchemaCatalog | None = None,
        suggestions: Sequence[tuple[str, str]] = SUGGESTIONS,
        rules: Iterable[MappingRule] = (),
    ) -> None:
        self._schema: SchemaCatalog = schema if schema is not None else StaticSchema()
        self._suggestions = tuple((keyword.lower(), target) for keyword, target in suggestions)
        self._rules: dict[str, MappingRule] = {}
        for rule in rules:
            self.upsert_mapping(rule.source_field, rule.target_field, rule.transformation)

    # ------------------------------------------------------------------
    # Rule table
    # ------------------------------------------------------------------

    @property
    def rules(self) -> tuple[MappingRule, ...]:
        """All rules, in the order their source paths were first mapped."""
        return tuple(self._rules.values())

    def get(self, source_field: str) -> MappingRule | None:
        return self._rules.get(source_field)

    def upsert_mapping(
        self,
        source_field: str,
        target_field: str,
        transformation: Transformation | TransformationKind | str | None = None,
    ) -> MappingRule:
        """Create or replace the rule for *source_field*.

        Raises:
            UnknownTargetFieldError: If *target_field* is not in the schema.
        """
        if target_field not in self._target_ids():
            raise UnknownTargetFieldError(target_field)
        if transformation is None:
            transformation = Transformation()
        elif not isinstance(transformation, Transformation):
            transformation = Transformation.of(transformation)
        rule = MappingRule(source_field, target_field, transformation)
        self._rules[source_field] = rule
        logger.debug("Mapped %s -> %s (%s)", source_field, target_field, transformation.kind)
        return rule

    def remove_mapping(self, source_field: str) -> bool:
        """Delete the rule for *source_field*; False when there was none."""
        return self._rules.pop(source_field, None) is not None

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def suggest(self, source_path: str) -> str | None:
        """Target of the first keyword contained in *source_path* (case-insensitive)."""
        lowered = source_path.lower()
        for keyword, target in self._suggestions:
            if keyword in lowered:
                return target
        return None

    def auto_map(
        self, fields: Iterable[FieldDescriptor], apply: bool = False
    ) -> list[MappingRule]:
        """Propose DIRECT rules for unmapped fields, never two onto one target.

        Sources and targets that already take part in a rule are left out.
        Candidate pairs are those related by a keyword of the suggestion
        table; among them a minimum-cost assignment is chosen, preferring
        earlier keywords, keywords in the last path segment, and shorter,
        earlier fields.

        Args:
            fields: Classifier output.
            apply: Upsert the proposals into the table when True.

        Returns:
            The proposed rules, in field order.
        """
        mapped_targets = {rule.target_field for rule in self._rules.values()}
        sources = [
            f for f in fields
            if f.path not in self._rules and f.type != FieldType.OBJECT
        ]
        targets = [t for t in self._target_ids() if t not in mapped_targets]
        if not sources or not targets:
            return []

        column = {target: j for j, target in enumerate(targets)}
        cost = np.full((len(sources), len(targets)), np.inf)
        for i, descriptor in enumerate(sources):
            lowered = descriptor.path.lower()
            segments = split_path(lowered)
            last = segments[-1] if segments else lowered
            for rank, (keyword, target) in enumerate(self._suggestions):
                j = column.get(target)
                if j is None or keyword not in lowered:
                    continue
                score = (
                    rank
                    + (0.0 if keyword in last else 0.5)
                    + 0.001 * len(last)
                    + 1e-6 * descriptor.order
                )
                cost[i, j] = min(cost[i, j], score)

        proposals = [
            MappingRule(sources[i].path, targets[j])
            for i, j in assign_one_to_one(cost)
        ]
        if apply:
            for rule in proposals:
                self._rules[rule.source_field] = rule
        logger.debug("Auto-mapping proposed %d rule(s)", len(proposals))
        return proposals

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def coverage(self) -> CoverageReport:
        """Mapped/unmapped status of every required target field."""
        sources_by_target: dict[str, list[str]] = {}
        for rule in self._rules.values():
            sources_by_target.setdefault(rule.target_field, []).append(rule.source_field)
        return CoverageReport(
            entries=tuple(
                CoverageEntry(target, tuple(sources_by_target.get(target.id, ())))
                for target in self._schema.target_fields()
                if target.required
            )
        )

    def unmapped(self, fields: Iterable[FieldDescriptor]) -> list[FieldDescriptor]:
        """Fields that no rule maps yet."""
        return [f for f in fields if f.path not in self._rules]

    def stale_rules(self, fields: Iterable[FieldDescriptor]) -> tuple[MappingRule, ...]:
        """Rules whose source path no longer exists in *fields*."""
        present = {f.path for f in fields}
        return tuple(rule for rule in self._rules.values() if rule.source_field not in present)

    def _target_ids(self) -> list[str]:
        return [target.id for target in self._schema.target_fields()]
