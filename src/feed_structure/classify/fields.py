"""FieldDescriptor and the Category / FieldType enumerations.

A FieldDescriptor describes one logical leaf field of a feed: its path,
inferred type, sample values and semantic category.  Descriptors are
immutable; a round trip replaces the whole list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["Category", "FieldDescriptor", "FieldType"]


class FieldType(StrEnum):
    """Inferred value type of a field."""

    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    ARRAY = auto()
    OBJECT = auto()


class Category(StrEnum):
    """Semantic bucket a field is sorted into for tabular display.

    - GENERAL:         shop-level information (shop name, company, date)
    - PRICING:         prices, old prices, costs, discounts
    - CURRENCY:        currency codes and rates
    - IDENTITY:        names, titles and identifiers (id, sku, barcode)
    - MEDIA:           images, pictures, photos, videos
    - AVAILABILITY:    stock, quantity, availability flags
    - CATEGORY:        category trees and category references
    - DESCRIPTION:     long-form descriptions
    - LINK:            URLs
    - CHARACTERISTICS: flattened name/value product characteristics
    - PRODUCT:         other fields inside the product group
    - OTHER:           everything unrecognised
    """

    GENERAL = auto()
    PRICING = auto()
    CURRENCY = auto()
    IDENTITY = auto()
    MEDIA = auto()
    AVAILABILITY = auto()
    CATEGORY = auto()
    DESCRIPTION = auto()
    LINK = auto()
    CHARACTERISTICS = auto()
    PRODUCT = auto()
    OTHER = auto()


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One classified, path-addressed leaf field.

    Attributes:
        path: Index-free logical path, e.g. ``shop.offer.@id``.
        type: Inferred type across every sample seen.
        sample: First sample, truncated for display.
        category: Semantic category.
        order: Position of the field's first occurrence in document order.
        samples: Distinct samples in first-seen order, one per array member
            at most, capped by the classifier's ``max_samples``.
        characteristic: Name of the characteristic for flattened
            characteristic fields; None otherwise.
    """

    path: str
    type: FieldType
    sample: str
    category: Category
    order: int
    samples: tuple[str, ...] = ()
    characteristic: str | None = None
