"""Keyword families and the cached KeywordClassifier.

A node name is tokenised into words and the ordered ``KEYWORD_FAMILIES``
table is scanned; the first family with a matching word decides the
category.  A word matches a family when it equals one of the family's
exact words or contains one of its stems.  Family order is the precedence
policy: ``currencyId`` is a currency before it is an identifier and
``categoryId`` is a category before it is an identifier.

Stems include the Ukrainian spellings common in local marketplace feeds.
"""

from __future__ import annotations

from dataclasses import dataclass

from cachetools import LRUCache

from feed_structure.classify.fields import Category
from feed_structure.classify.tokens import NameTokenizer

__all__ = [
    "GENERAL_NAMES",
    "KEYWORD_FAMILIES",
    "KeywordClassifier",
    "KeywordFamily",
]


@dataclass(frozen=True, slots=True)
class KeywordFamily:
    """One row of the keyword table.

    Attributes:
        category: Category assigned on a match.
        stems: Substrings that match anywhere inside a word.
        exact: Short words that only match as a whole word.
    """

    category: Category
    stems: tuple[str, ...]
    exact: tuple[str, ...] = ()

    def matches(self, word: str) -> bool:
        return word in self.exact or any(stem in word for stem in self.stems)


KEYWORD_FAMILIES: tuple[KeywordFamily, ...] = (
    KeywordFamily(Category.CURRENCY, ("currenc", "валют"), ("cur",)),
    KeywordFamily(Category.PRICING, ("price", "cost", "discount", "ціна", "вартість")),
    KeywordFamily(
        Category.MEDIA,
        ("image", "picture", "photo", "video", "thumbnail", "зображення", "фото"),
        ("img",),
    ),
    KeywordFamily(
        Category.AVAILABILITY,
        ("avail", "stock", "quantity", "наявн", "залишок", "кількість"),
        ("qty",),
    ),
    KeywordFamily(Category.CATEGORY, ("categor", "rubric", "категор")),
    KeywordFamily(Category.DESCRIPTION, ("descr", "опис"), ("desc",)),
    KeywordFamily(Category.LINK, ("url", "href", "link")),
    KeywordFamily(
        Category.IDENTITY,
        ("name", "title", "назва", "identifier", "sku", "article", "barcode", "артикул"),
        ("id", "code", "gtin", "ean", "mpn", "isbn", "upc"),
    ),
)

# Shop-level leaf names that belong to the GENERAL section outside products
GENERAL_NAMES: frozenset[str] = frozenset(
    {"name", "company", "url", "shop_name", "store_name", "date", "version", "encoding", "platform"}
)


class KeywordClassifier:
    """Maps node names to categories through ``KEYWORD_FAMILIES``.

    Lookups are memoised in a per-instance ``LRUCache``: feeds repeat the
    same few dozen tag names across thousands of products.

    Args:
        families: Ordered keyword table.
        cache_size: Capacity of the name -> category cache.
    """

    def __init__(
        self,
        families: tuple[KeywordFamily, ...] = KEYWORD_FAMILIES,
        cache_size: int = 1024,
    ) -> None:
        self._families = families
        self._tokenizer = NameTokenizer()
        self._cache: LRUCache[str, Category | None] = LRUCache(maxsize=cache_size)

    @property
    def curr_size(self) -> int:
        return int(self._cache.currsize)

    def lookup(self, name: str) -> Category | None:
        """Category of the first family matching a word of *name*, else None."""
        try:
            return self._cache[name]
        except KeyError:
            pass
        words = self._tokenizer.tokenize(name)
        result: Category | None = None
        for family in self._families:
            if any(family.matches(word) for word in words):
                result = family.category
                break
        self._cache[name] = result
        return result
