"""FieldClassifier: turns a DocumentNode tree into classified FieldDescriptors.

Traversal is a single depth-first walk.  At each container the attribute
children are visited first, then the rest, both in source order.  ARRAY_GROUP
members all share the group's path, so every member contributes samples to
the same logical fields; the first member fixes the field order and any
field first seen in a later member is appended after it.

Categories come from two sources, in precedence order:

1. Profile hints: a path inside the profile's category or currency section
   (and outside products) gets CATEGORY or CURRENCY; shop-level leaves such
   as ``name`` or ``date`` outside every section get GENERAL.
2. Keyword families on the leaf name (see ``keywords``), then PRODUCT for
   anything else inside the product section, then OTHER.

Characteristic nodes (``<param name="Colour">Red</param>``) are flattened
into a name field and a value field addressed by the characteristic name.
Repeated elements that differ by language (``<name lang="ua">``) become one
field per language, addressed as ``name[lang=ua]``.

Classification never raises on a well-formed tree: anything unrecognised
becomes a STRING field in the OTHER category.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field

from feed_structure.classify.fields import Category, FieldDescriptor, FieldType
from feed_structure.classify.keywords import GENERAL_NAMES, KeywordClassifier
from feed_structure.config import ClassifierConfig
from feed_structure.detection.profiles import FeedFormat, FormatProfile, preset
from feed_structure.tree.nodes import ATTRIBUTE_PREFIX, DocumentNode, NodeKind, Scalar
from feed_structure.tree.paths import child_path, split_path
from feed_structure.tree.serializer import format_scalar

__all__ = ["FieldClassifier", "infer_scalar_type"]

_NUMBER = re.compile(r"-?\d+(?:[.,]\d+)?")
_BOOLEAN_WORDS = frozenset({"true", "false"})
_QUALIFIER = re.compile(r"\[.*\]$")
_LANGUAGE_ATTRIBUTES = frozenset({"lang", "xml:lang"})


def infer_scalar_type(value: Scalar) -> FieldType:
    """Infer the type of a single scalar, reading numeric-looking text as a number."""
    # bool before int: bool subclasses int
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, (int, float)):
        return FieldType.NUMBER
    text = value.strip()
    if _NUMBER.fullmatch(text):
        return FieldType.NUMBER
    if text.lower() in _BOOLEAN_WORDS:
        return FieldType.BOOLEAN
    return FieldType.STRING


@dataclass
class _Accumulator:
    """Mutable per-path state collected during one walk."""

    path: str
    order: int
    category: Category
    characteristic: str | None = None
    samples: list[str] = field(default_factory=list)
    value_types: set[FieldType] = field(default_factory=set)
    repeated: bool = False

    def freeze(self) -> FieldDescriptor:
        if self.repeated:
            field_type = FieldType.ARRAY
        elif (
            not self.value_types
            or self.category == Category.IDENTITY
            or len(self.value_types) > 1
        ):
            field_type = FieldType.STRING
        else:
            (field_type,) = self.value_types
        return FieldDescriptor(
            path=self.path,
            type=field_type,
            sample=self.samples[0] if self.samples else "",
            category=self.category,
            order=self.order,
            samples=tuple(self.samples),
            characteristic=self.characteristic,
        )


class _Section:
    """Which profile sections a path falls into."""

    __slots__ = ("category", "currency", "product")

    def __init__(self, product: bool, category: bool, currency: bool) -> None:
        self.product = product
        self.category = category
        self.currency = currency


class FieldClassifier:
    """Walks a document tree and emits one FieldDescriptor per logical leaf.

    A classifier holds only a keyword lookup cache, so one instance can be
    reused across many classifications of the same or different documents.

    Example::

        classifier = FieldClassifier()
        fields = classifier.classify(root, profile)
        [f.path for f in fields]   # ["shop.offer.@id", "shop.offer.name", ...]
    """

    def __init__(
        self,
        config: ClassifierConfig | None = None,
        keywords: KeywordClassifier | None = None,
    ) -> None:
        self._config = config if config is not None else ClassifierConfig()
        self._keywords = (
            keywords if keywords is not None
            else KeywordClassifier(cache_size=self._config.cache_size)
        )

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    def classify(
        self, root: DocumentNode, profile: FormatProfile | None = None
    ) -> list[FieldDescriptor]:
        """Classify every leaf of *root*, in first-seen document order."""
        walk = _Walk(
            config=self._config,
            keywords=self._keywords,
            profile=profile if profile is not None else preset(FeedFormat.CUSTOM),
        )
        walk.visit(root, root.name)
        return [acc.freeze() for acc in walk.fields.values()]


class _Walk:
    """State of one classification pass."""

    def __init__(
        self,
        config: ClassifierConfig,
        keywords: KeywordClassifier,
        profile: FormatProfile,
    ) -> None:
        self.config = config
        self.keywords = keywords
        self.profile = profile
        self.fields: dict[str, _Accumulator] = {}
        self._product = _hint_parts(profile.product_path)
        self._category = _hint_parts(profile.category_path)
        self._currency = _hint_parts(profile.currency_path)
        tags = {t.lower() for t in config.characteristic_tags}
        if profile.param_tag:
            tags.add(profile.param_tag.lower())
        self._characteristic_tags = frozenset(tags)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def visit(
        self,
        node: DocumentNode,
        path: str,
        repeated: bool = False,
        forced: Category | None = None,
        translated: bool = False,
    ) -> None:
        if node.kind == NodeKind.ARRAY_GROUP:
            self.visit_members(node, path, forced)
            return

        if node.value is not None:
            self.record(path, node.name, node.value, repeated=repeated, forced=forced)
            return

        if not node.children:
            self.record(path, node.name, None, forced=forced)
            return

        if self._is_characteristic(node):
            self.flatten_characteristic(node, path, translated)
            return

        for child in self._ordered(node):
            if child.kind == NodeKind.TEXT:
                if child.value is not None:
                    self.record(path, node.name, child.value, repeated=repeated, forced=forced)
            elif child.kind == NodeKind.ATTRIBUTE:
                if child.value is not None and not (translated and _is_language(child)):
                    self.record(
                        child_path(path, child),
                        f"{ATTRIBUTE_PREFIX}{child.name}",
                        child.value,
                        forced=forced,
                    )
            else:
                self.visit(child, child_path(path, child), forced=forced)

    def visit_members(self, group: DocumentNode, path: str, forced: Category | None) -> None:
        """Visit array members under the group's path.

        Members carrying a language attribute (``<name lang="ua">``) are
        translations rather than repeats: each language gets its own
        ``path[lang=<code>]`` field and the attribute itself is not emitted.
        """
        languages = [_language(member) for member in group.children]
        counts = Counter(languages)
        for member, language in zip(group.children, languages):
            if language is None:
                self.visit(member, path, repeated=True, forced=forced)
            else:
                self.visit(
                    member,
                    f"{path}[lang={language}]",
                    repeated=counts[language] > 1,
                    forced=forced,
                    translated=True,
                )

    def flatten_characteristic(
        self, node: DocumentNode, path: str, translated: bool = False
    ) -> None:
        """Emit correlated name and value fields for one characteristic."""
        raw_name = node.attribute_value("name")
        name = format_scalar(raw_name) if raw_name is not None else ""
        base = f"{path}[{name}]"
        forced = Category.CHARACTERISTICS
        self.record(
            f"{base}.{ATTRIBUTE_PREFIX}name", "@name", name, forced=forced, characteristic=name
        )

        value_node = self._characteristic_value(node)
        if value_node is not None and value_node.value is not None:
            self.record(base, node.name, value_node.value, forced=forced, characteristic=name)

        for child in self._ordered(node):
            if child is value_node or child.kind == NodeKind.TEXT:
                continue
            if child.kind == NodeKind.ATTRIBUTE:
                if child.name.lower() == "name" or child.value is None:
                    continue
                if translated and _is_language(child):
                    continue
                self.record(
                    child_path(base, child),
                    f"{ATTRIBUTE_PREFIX}{child.name}",
                    child.value,
                    forced=forced,
                    characteristic=name,
                )
            else:
                self.visit(child, child_path(base, child), forced=forced)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record(
        self,
        path: str,
        name: str,
        value: Scalar | None,
        repeated: bool = False,
        forced: Category | None = None,
        characteristic: str | None = None,
    ) -> None:
        acc = self.fields.get(path)
        if acc is None:
            category = forced if forced is not None else self.categorize(path, name)
            acc = _Accumulator(
                path=path,
                order=len(self.fields),
                category=category,
                characteristic=characteristic,
            )
            self.fields[path] = acc
        if repeated:
            acc.repeated = True
        if value is None:
            return
        acc.value_types.add(infer_scalar_type(value))
        sample = format_scalar(value)[: self.config.sample_length]
        if sample not in acc.samples and len(acc.samples) < self.config.max_samples:
            acc.samples.append(sample)

    def categorize(self, path: str, name: str) -> Category:
        section = self._section(path)
        if section.category and not section.product:
            return Category.CATEGORY
        if section.currency and not section.product:
            return Category.CURRENCY
        bare = name.lstrip(ATTRIBUTE_PREFIX).lower()
        outside = not (section.product or section.category or section.currency)
        if outside and bare in GENERAL_NAMES:
            return Category.GENERAL
        keyword = self.keywords.lookup(name)
        if keyword is not None:
            return keyword
        if section.product:
            return Category.PRODUCT
        return Category.OTHER

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _section(self, path: str) -> _Section:
        segments = [_QUALIFIER.sub("", s).lower() for s in split_path(path)]
        return _Section(
            product=_contains_in_order(segments, self._product),
            category=_contains_in_order(segments, self._category),
            currency=_contains_in_order(segments, self._currency),
        )

    def _is_characteristic(self, node: DocumentNode) -> bool:
        if node.kind != NodeKind.ELEMENT or node.name.lower() not in self._characteristic_tags:
            return False
        name = node.attribute_value("name")
        if name is None or format_scalar(name) == "":
            return False
        return self._characteristic_value(node) is not None

    @staticmethod
    def _characteristic_value(node: DocumentNode) -> DocumentNode | None:
        """The node holding a characteristic's value: text, @value or <value>."""
        text = node.text_child()
        if text is not None:
            return text
        for child in node.children:
            if child.name.lower() != "value" or child.value is None:
                continue
            if child.kind in (NodeKind.ATTRIBUTE, NodeKind.ELEMENT):
                return child
        return None

    @staticmethod
    def _ordered(node: DocumentNode) -> list[DocumentNode]:
        return node.attributes + node.content


def _is_language(attribute: DocumentNode) -> bool:
    return attribute.name.lower() in _LANGUAGE_ATTRIBUTES


def _language(node: DocumentNode) -> str | None:
    """Language code of an element, or None when it has none."""
    if node.kind != NodeKind.ELEMENT:
        return None
    for attribute in node.attributes:
        if _is_language(attribute) and attribute.value is not None:
            code = format_scalar(attribute.value).strip()
            if code:
                return code
    return None


def _hint_parts(hint: str) -> list[str]:
    return [part.lower() for part in hint.split(".") if part] if hint else []


def _contains_in_order(segments: list[str], parts: list[str]) -> bool:
    """True when every hint part occurs in *segments*, in order."""
    if not parts:
        return False
    position = 0
    for part in parts:
        try:
            position = segments.index(part, position) + 1
        except ValueError:
            return False
    return True
