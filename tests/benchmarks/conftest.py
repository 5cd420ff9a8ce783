"""Deterministic feed generators for performance benchmarks.

All generators produce fixed, reproducible documents. No random values.
Three tiers: 100, 1,000 and 10,000 offers, each offer carrying attributes,
repeated pictures and name/value characteristics so every classifier
branch is exercised.
"""

from __future__ import annotations

import pytest

from feed_structure.tree.nodes import DocumentNode
from feed_structure.tree.parser import DocumentParser


def generate_yml_feed(num_offers: int) -> str:
    """Build a YML catalogue with *num_offers* offers across ten categories."""
    categories = "".join(
        f'<category id="{c}">Category {c}</category>' for c in range(10)
    )
    offers = []
    for i in range(num_offers):
        pictures = "".join(
            f"<picture>https://shop.example/{i}/{p}.jpg</picture>" for p in range(1 + i % 3)
        )
        offers.append(
            f'<offer id="{i}" available="{"true" if i % 2 else "false"}">'
            f"<name>Product {i}</name>"
            f"<price>{100 + i}.{i % 100:02d}</price>"
            "<currencyId>UAH</currencyId>"
            f"<categoryId>{i % 10}</categoryId>"
            f"{pictures}"
            f"<vendor>Vendor {i % 7}</vendor>"
            f"<description>Description of product {i} &amp; more</description>"
            f'<param name="Colour">Colour {i % 5}</param>'
            f'<param name="Weight" unit="kg">{i % 9}.5</param>'
            "</offer>"
        )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<yml_catalog date="2024-01-01 10:00"><shop>'
        "<name>Bench</name><company>Bench LLC</company>"
        '<currencies><currency id="UAH" rate="1"/></currencies>'
        f"<categories>{categories}</categories>"
        f"<offers>{''.join(offers)}</offers>"
        "</shop></yml_catalog>"
    )


@pytest.fixture(scope="session")
def feed_100() -> str:
    """100-offer catalogue."""
    return generate_yml_feed(100)


@pytest.fixture(scope="session")
def feed_1k() -> str:
    """1,000-offer catalogue."""
    return generate_yml_feed(1_000)


@pytest.fixture(scope="session")
def feed_10k() -> str:
    """10,000-offer catalogue."""
    return generate_yml_feed(10_000)


@pytest.fixture(scope="session")
def tree_1k(feed_1k: str) -> DocumentNode:
    """Parsed 1,000-offer catalogue."""
    return DocumentParser().parse(feed_1k)
