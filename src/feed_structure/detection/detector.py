"""FormatDetector: picks a FormatProfile for raw feed text by tag presence.

Detection never parses the document.  One regex pass collects the set of
tag names and the root tag; an ordered table of ``DetectionRule`` entries
is then evaluated and the first rule whose predicate holds wins.  Order is
the tie-break policy, so it is kept as data where it can be inspected and
tested on its own.  No rule matching yields the CUSTOM profile.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from feed_structure.detection.profiles import PRESETS, FeedFormat, FormatProfile

__all__ = ["DEFAULT_RULES", "DetectionRule", "FormatDetector", "TagInventory"]

logger = logging.getLogger(__name__)

# Start tags only: "</x", "<?x" and "<!x" never match
_START_TAG = re.compile(r"<([A-Za-z_][\w.:\-]*)")


@dataclass(frozen=True, slots=True)
class TagInventory:
    """Cheap summary of a document: its root tag and every tag name seen.

    Attributes:
        root: Lowercased name of the first start tag, "" when none.
        tags: Lowercased names of all start tags.
    """

    root: str
    tags: frozenset[str]

    @classmethod
    def scan(cls, text: str) -> TagInventory:
        names = [m.group(1).lower() for m in _START_TAG.finditer(text)]
        return cls(root=names[0] if names else "", tags=frozenset(names))

    def has(self, *names: str) -> bool:
        """True when every name in *names* occurs as a tag."""
        return all(name in self.tags for name in names)

    def has_prefix(self, prefix: str) -> bool:
        return any(tag.startswith(prefix) for tag in self.tags)


@dataclass(frozen=True, slots=True)
class DetectionRule:
    """One row of the detection table."""

    name: str
    predicate: Callable[[TagInventory], bool]
    format: FeedFormat


DEFAULT_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        "yml catalogue with categories and currencies",
        lambda inv: inv.has("yml_catalog", "categories", "currencies"),
        FeedFormat.ROZETKA,
    ),
    DetectionRule(
        "yml catalogue or bare offers list",
        lambda inv: inv.has("yml_catalog") or inv.has("offers", "offer"),
        FeedFormat.EPICENTR,
    ),
    DetectionRule(
        "rss channel with g: namespaced tags",
        lambda inv: inv.has("channel", "item") and inv.has_prefix("g:"),
        FeedFormat.GOOGLE_SHOPPING,
    ),
    DetectionRule(
        "price root with items and currency",
        lambda inv: inv.root == "price" and inv.has("items", "currency"),
        FeedFormat.MMA,
    ),
    DetectionRule(
        "price root with items",
        lambda inv: inv.root == "price" and inv.has("items"),
        FeedFormat.PRICE,
    ),
    DetectionRule(
        "shop with items",
        lambda inv: inv.has("shop") and (inv.has("items") or inv.has("item")),
        FeedFormat.PROM,
    ),
)


class FormatDetector:
    """Classifies raw feed text into a known FormatProfile.

    The detector holds no mutable state and is safe to share between
    documents and threads.

    Example::

        detector = FormatDetector()
        profile = detector.detect(text)
        profile.format        # FeedFormat.ROZETKA
        profile.product_path  # "offers.offer"
    """

    def __init__(self, rules: Sequence[DetectionRule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[DetectionRule, ...]:
        return self._rules

    def detect(self, text: str | bytes) -> FormatProfile:
        """Return the profile of the first matching rule, else CUSTOM."""
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        inventory = TagInventory.scan(text)
        for rule in self._rules:
            if rule.predicate(inventory):
                logger.debug("Detected %s feed (%s)", rule.format, rule.name)
                return PRESETS[rule.format].with_root(inventory.root)
        logger.debug("No format rule matched; using custom profile")
        return PRESETS[FeedFormat.CUSTOM].with_root(inventory.root)
