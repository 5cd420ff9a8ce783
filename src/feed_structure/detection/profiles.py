"""FeedFormat StrEnum and FormatProfile presets for known marketplace feeds.

A profile is a bundle of structural hints: where products, categories and
currencies live, and which tag holds product characteristics.  Hints are
dot-joined tag sequences matched in order against a field's path, so
``offers.offer`` matches ``yml_catalog.shop.offers.offer.price``.

The presets mirror what an operator is offered when picking a format by
hand; ``FormatProfile.user_defined`` covers anything else.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum, auto

__all__ = ["PRESETS", "FeedFormat", "FormatProfile", "preset"]


class FeedFormat(StrEnum):
    """Closed set of recognised feed shapes.

    ROZETKA and EPICENTR are YML catalogues (with and without category and
    currency sections), PROM, PRICE and MMA are item-list price feeds,
    GOOGLE_SHOPPING is an RSS channel of items, CUSTOM is everything else.
    """

    ROZETKA = auto()
    EPICENTR = auto()
    GOOGLE_SHOPPING = auto()
    MMA = auto()
    PRICE = auto()
    PROM = auto()
    CUSTOM = auto()


@dataclass(frozen=True, slots=True)
class FormatProfile:
    """Structural hints for one feed shape.

    Attributes:
        format: Which known shape this is.
        product_path: Tag sequence of the repeated product element.
        category_path: Tag sequence of the repeated category element.
        currency_path: Tag sequence of the currency element(s).
        param_tag: Tag name of product characteristics.
        root_tag: Name of the document element, when known.
    """

    format: FeedFormat
    product_path: str = ""
    category_path: str = ""
    currency_path: str = ""
    param_tag: str = "param"
    root_tag: str = ""

    @classmethod
    def user_defined(
        cls,
        product_path: str = "",
        category_path: str = "",
        currency_path: str = "",
        param_tag: str = "param",
        root_tag: str = "",
    ) -> FormatProfile:
        """Build a CUSTOM profile from operator-entered tags."""
        return cls(
            format=FeedFormat.CUSTOM,
            product_path=product_path.strip(),
            category_path=category_path.strip(),
            currency_path=currency_path.strip(),
            param_tag=param_tag.strip(),
            root_tag=root_tag.strip(),
        )

    @property
    def is_custom(self) -> bool:
        return self.format == FeedFormat.CUSTOM

    def with_root(self, root_tag: str) -> FormatProfile:
        return replace(self, root_tag=root_tag)


PRESETS: dict[FeedFormat, FormatProfile] = {
    FeedFormat.ROZETKA: FormatProfile(
        FeedFormat.ROZETKA, "offers.offer", "categories.category", "currencies.currency"
    ),
    FeedFormat.EPICENTR: FormatProfile(FeedFormat.EPICENTR, "offers.offer"),
    FeedFormat.GOOGLE_SHOPPING: FormatProfile(
        FeedFormat.GOOGLE_SHOPPING, "channel.item", param_tag=""
    ),
    FeedFormat.MMA: FormatProfile(
        FeedFormat.MMA, "items.item", "catalog.category", "currency"
    ),
    FeedFormat.PRICE: FormatProfile(
        FeedFormat.PRICE, "items.item", "categories.category", "currency"
    ),
    FeedFormat.PROM: FormatProfile(FeedFormat.PROM, "items.item", "catalog.category"),
    FeedFormat.CUSTOM: FormatProfile(FeedFormat.CUSTOM),
}


def preset(feed_format: FeedFormat | str) -> FormatProfile:
    """Return the preset profile for *feed_format*."""
    return PRESETS[FeedFormat(feed_format)]
