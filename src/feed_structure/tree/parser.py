"""DocumentParser: converts raw feed markup into a DocumentNode tree.

lxml does the tokenising; this module maps its element tree onto the
generic node model in a single pass:

- Every attribute becomes an ATTRIBUTE child, ordered before all other
  children.  Namespace declarations introduced on an element are kept as
  ``xmlns``/``xmlns:p`` attributes so they survive a round trip.
- An element with no attributes and no child elements takes its text as
  its own ``value``; otherwise non-empty text becomes a ``_text`` child
  placed right after the attributes.
- Same-named sibling elements are collected into one ARRAY_GROUP at the
  position of the first occurrence.  A tag that occurs once stays a plain
  ELEMENT: repetition in the source is the only signal.
"""

from __future__ import annotations

import logging
import re
import time

from lxml import etree

from feed_structure.config import ParserConfig
from feed_structure.errors import MalformedDocumentError
from feed_structure.tree.nodes import DocumentNode, NodeKind, Scalar

__all__ = ["DocumentParser", "coerce_scalar"]

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"-?(?:0|[1-9]\d{0,17})")
_DECIMAL = re.compile(r"-?(?:0|[1-9]\d*)\.\d+")
_BOOLEANS = {"true": True, "false": False}
_XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def coerce_scalar(text: str) -> Scalar:
    """Return *text* as int, float or bool when unambiguous, else unchanged.

    Leading zeros, exponents, thousands separators and capitalised booleans
    are all ambiguous (barcodes, article numbers, labels) and stay strings.
    """
    if text in _BOOLEANS:
        return _BOOLEANS[text]
    if _INTEGER.fullmatch(text):
        return int(text)
    if _DECIMAL.fullmatch(text):
        return float(text)
    return text


class DocumentParser:
    """Parses feed markup text into a ``DocumentNode`` tree.

    Parsing is O(document size): lxml builds its tree once and the
    conversion visits each element once, grouping repeated siblings with
    a name-to-index table rather than by rescanning.

    Example::

        parser = DocumentParser()
        root = parser.parse("<shop><offer id='1'/><offer id='2'/></shop>")
        # root: ELEMENT shop -> ARRAY_GROUP offer -> [ELEMENT offer, ELEMENT offer]
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config = config if config is not None else ParserConfig()

    @property
    def config(self) -> ParserConfig:
        return self._config

    def parse(self, text: str | bytes) -> DocumentNode:
        """Parse *text* into a tree rooted at the document element.

        ``str`` input is read as Unicode whatever encoding its declaration
        names; ``bytes`` input honours the declaration.

        Raises:
            MalformedDocumentError: On unbalanced tags, invalid characters,
                undecodable bytes, or an empty document.
        """
        t0 = time.perf_counter()
        if isinstance(text, str):
            payload = text.encode("utf-8")
            encoding: str | None = "utf-8"
        else:
            payload = text
            encoding = None

        lxml_parser = etree.XMLParser(
            encoding=encoding,
            remove_comments=True,
            remove_pis=True,
            resolve_entities=False,
            no_network=True,
            huge_tree=self._config.huge_tree,
        )
        try:
            element = etree.fromstring(payload, parser=lxml_parser)
        except etree.XMLSyntaxError as exc:
            line, column = exc.position if exc.position else (None, None)
            raise MalformedDocumentError(str(exc.msg or exc), line, column) from exc
        except (ValueError, LookupError) as exc:
            raise MalformedDocumentError(str(exc)) from exc
        if element is None:
            raise MalformedDocumentError("document has no root element")

        root = self._convert(element, {})
        logger.debug(
            "Parsed %d bytes into <%s> in %.2f ms",
            len(payload),
            root.name,
            (time.perf_counter() - t0) * 1000.0,
        )
        return root

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def _convert(self, element: etree._Element, parent_nsmap: dict[str | None, str]) -> DocumentNode:
        nsmap: dict[str | None, str] = dict(element.nsmap)
        name = self._qualify(element.tag, nsmap)

        attributes: list[DocumentNode] = []
        for prefix, uri in nsmap.items():
            if parent_nsmap.get(prefix) != uri:
                attr_name = f"xmlns:{prefix}" if prefix else "xmlns"
                attributes.append(DocumentNode.attribute(attr_name, uri))
        for key, raw in element.attrib.items():
            attributes.append(
                DocumentNode.attribute(self._qualify(key, nsmap), self._scalar(raw))
            )

        elements: list[DocumentNode] = []
        positions: dict[str, int] = {}
        text_parts = [element.text] if element.text else []
        for child in element:
            if child.tail:
                text_parts.append(child.tail)
            if not isinstance(child.tag, str):
                continue
            node = self._convert(child, nsmap)
            slot = positions.get(node.name)
            if slot is None:
                positions[node.name] = len(elements)
                elements.append(node)
                continue
            existing = elements[slot]
            if existing.kind == NodeKind.ARRAY_GROUP:
                existing.children.append(node)
            else:
                elements[slot] = DocumentNode.array_group(node.name, [existing, node])

        text = self._text(text_parts)
        if not attributes and not elements:
            return DocumentNode.element(name, value=text)

        children = attributes
        if text is not None:
            children.append(DocumentNode.text(text))
        children.extend(elements)
        return DocumentNode.element(name, children=children)

    def _text(self, parts: list[str]) -> Scalar | None:
        if self._config.strip_text:
            pieces = [p.strip() for p in parts if p and p.strip()]
            joined = " ".join(pieces)
        else:
            joined = "".join(parts)
            if not joined.strip():
                joined = ""
        if not joined:
            return None
        return self._scalar(joined)

    def _scalar(self, raw: str) -> Scalar:
        value = raw.strip() if self._config.strip_text else raw
        if self._config.coerce_scalars:
            return coerce_scalar(value)
        return value

    @staticmethod
    def _qualify(tag: str, nsmap: dict[str | None, str]) -> str:
        """Turn lxml's ``{uri}local`` notation back into ``prefix:local``."""
        if not tag.startswith("{"):
            return tag
        uri, _, local = tag[1:].partition("}")
        if uri == _XML_NAMESPACE:
            return f"xml:{local}"
        for prefix, candidate in nsmap.items():
            if candidate == uri and prefix:
                return f"{prefix}:{local}"
        return local
