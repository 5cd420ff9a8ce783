"""Default target schema and the keyword-to-target suggestion table.

``SUGGESTIONS`` is scanned in order and the first keyword contained in a
lowercased source path wins, so more specific keywords must precede the
short ones they contain (``category`` before ``id``).  Ukrainian keywords
sit beside their English counterparts.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from feed_structure.mapping.rules import TargetField

__all__ = ["DEFAULT_TARGET_FIELDS", "SUGGESTIONS", "StaticSchema"]

SUGGESTIONS: tuple[tuple[str, str], ...] = (
    ("price", "price"),
    ("ціна", "price"),
    ("name", "name"),
    ("назва", "name"),
    ("title", "name"),
    ("заголовок", "name"),
    ("description", "description"),
    ("опис", "description"),
    ("currency", "currency"),
    ("валюта", "currency"),
    ("category", "category_id"),
    ("категорія", "category_id"),
    ("image", "images"),
    ("зображення", "images"),
    ("picture", "images"),
    ("article", "article"),
    ("артикул", "article"),
    ("id", "external_id"),
    ("stock", "stock_quantity"),
    ("залишок", "stock_quantity"),
    ("quantity", "stock_quantity"),
    ("кількість", "stock_quantity"),
    ("vendor", "vendor"),
    ("виробник", "vendor"),
)

DEFAULT_TARGET_FIELDS: tuple[TargetField, ...] = (
    TargetField("external_id", "External ID", required=True, category="identity"),
    TargetField("name", "Name", required=True, category="identity"),
    TargetField("price", "Price", required=True, category="pricing"),
    TargetField("currency", "Currency", required=True, category="pricing"),
    TargetField("old_price", "Old price", category="pricing"),
    TargetField("category_id", "Category", required=True, category="category"),
    TargetField("description", "Description", category="content"),
    TargetField("images", "Images", category="media"),
    TargetField("article", "Article", category="identity"),
    TargetField("vendor", "Vendor", category="identity"),
    TargetField("stock_quantity", "Stock quantity", category="availability"),
    TargetField("available", "Available", category="availability"),
    TargetField("url", "Product URL", category="content"),
)


class StaticSchema:
    """In-memory SchemaCatalog over a fixed sequence of target fields."""

    def __init__(self, fields: Iterable[TargetField] = DEFAULT_TARGET_FIELDS) -> None:
        self._fields = tuple(fields)
        ids = [f.id for f in self._fields]
        if len(ids) != len(set(ids)):
            msg = "target field ids must be unique"
            raise ValueError(msg)

    def target_fields(self) -> Sequence[TargetField]:
        return self._fields
