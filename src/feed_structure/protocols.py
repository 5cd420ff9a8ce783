"""SchemaCatalog Protocol: the target-schema collaborator of the mapping layer.

The field catalog of the platform's product schema lives outside the
engine (usually in a database).  Anything with a conformant
``target_fields`` method can be handed to ``FieldMappingLayer``; no
inheritance is required.

Example::

    from feed_structure.mapping import TargetField
    from feed_structure.protocols import SchemaCatalog

    class DatabaseSchema:
        def target_fields(self) -> list[TargetField]:
            return [TargetField("price", "Price", required=True, category="pricing")]

    assert isinstance(DatabaseSchema(), SchemaCatalog)  # structural conformance
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from feed_structure.mapping.rules import TargetField


@runtime_checkable
class SchemaCatalog(Protocol):
    """Structural protocol for target schema catalogs.

    ``target_fields`` must return every field of the target schema with a
    unique ``id``.  Order is the order shown to operators.
    """

    def target_fields(self) -> Sequence[TargetField]: ...
