"""Shared feed documents and fresh component fixtures."""

from __future__ import annotations

import pytest

from feed_structure.classify.classifier import FieldClassifier
from feed_structure.tree.parser import DocumentParser
from feed_structure.tree.serializer import DocumentSerializer

SHOP_FEED = (
    '<shop><offer id="1"><name>Widget</name><price>9.99</price></offer>'
    '<offer id="2"><name>Gizmo</name><price>4.50</price></offer></shop>'
)

YML_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<yml_catalog date="2024-01-01 10:00">
  <shop>
    <name>Demo Shop</name>
    <company>Demo LLC</company>
    <url>https://shop.example</url>
    <currencies>
      <currency id="UAH" rate="1"/>
    </currencies>
    <categories>
      <category id="10">Phones</category>
      <category id="11" parentId="10">Smartphones</category>
    </categories>
    <offers>
      <offer id="101" available="true">
        <name>Phone X</name>
        <price>12999</price>
        <currencyId>UAH</currencyId>
        <categoryId>11</categoryId>
        <picture>https://shop.example/x1.jpg</picture>
        <picture>https://shop.example/x2.jpg</picture>
        <vendor>Acme</vendor>
        <description>Fast &amp; light</description>
        <param name="Колір">Чорний</param>
        <param name="Memory">128 GB</param>
      </offer>
      <offer id="102" available="false">
        <name>Phone Y</name>
        <price>9999.50</price>
        <currencyId>UAH</currencyId>
        <categoryId>11</categoryId>
        <picture>https://shop.example/y1.jpg</picture>
        <vendor>Acme</vendor>
        <description>Compact</description>
        <param name="Колір">Білий</param>
      </offer>
    </offers>
  </shop>
</yml_catalog>
"""

GOOGLE_FEED = """<?xml version="1.0"?>
<rss version="2.0" xmlns:g="http://base.google.com/ns/1.0">
  <channel>
    <title>Demo store</title>
    <item>
      <g:id>SKU-1</g:id>
      <g:title>Red shoe</g:title>
      <g:price>15.00 USD</g:price>
      <g:image_link>https://shop.example/shoe.jpg</g:image_link>
      <g:availability>in stock</g:availability>
    </item>
    <item>
      <g:id>SKU-2</g:id>
      <g:title>Blue shoe</g:title>
      <g:price>17.00 USD</g:price>
      <g:image_link>https://shop.example/blue.jpg</g:image_link>
      <g:availability>out of stock</g:availability>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def shop_feed() -> str:
    """The two-offer feed used throughout the examples."""
    return SHOP_FEED


@pytest.fixture
def yml_feed() -> str:
    """A YML catalogue with currencies, categories, pictures and params."""
    return YML_FEED


@pytest.fixture
def google_feed() -> str:
    """A Google Shopping RSS feed with g: namespaced tags."""
    return GOOGLE_FEED


@pytest.fixture
def parser() -> DocumentParser:
    return DocumentParser()


@pytest.fixture
def serializer() -> DocumentSerializer:
    return DocumentSerializer()


@pytest.fixture
def classifier() -> FieldClassifier:
    return FieldClassifier()
