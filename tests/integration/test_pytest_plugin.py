"""Integration tests for the feed-structure pytest plugin.

These tests verify that the assert_round_trip fixture is auto-discovered
via the pytest11 entry point and behaves correctly.

NOTE: These tests require feed-structure to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixture.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

from feed_structure import EngineConfig, MalformedDocumentError, SerializerConfig
from feed_structure.detection.profiles import FeedFormat, preset


def test_fixture_returns_canonical_text(assert_round_trip: Any, shop_feed: str) -> None:
    """A stable feed passes and its canonical serialization is returned."""
    text = assert_round_trip(shop_feed)
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert assert_round_trip(text) == text


def test_fixture_with_profile(assert_round_trip: Any, yml_feed: str) -> None:
    """Structural hints are forwarded to classification."""
    assert_round_trip(yml_feed, profile=preset(FeedFormat.ROZETKA))


def test_fixture_custom_config(assert_round_trip: Any, google_feed: str) -> None:
    """A custom EngineConfig is forwarded to parse and serialize."""
    config = EngineConfig(serializer=SerializerConfig(indent="\t", xml_declaration=False))
    text = assert_round_trip(google_feed, config=config)
    assert text.startswith("<rss")
    assert "\n\t<channel>" in text


def test_fixture_rejects_malformed(assert_round_trip: Any) -> None:
    """Malformed input surfaces the parser error, not an assertion."""
    with pytest.raises(MalformedDocumentError):
        assert_round_trip("<offer><name>x</offer>")


def test_fixture_returns_callable(assert_round_trip: Any) -> None:
    """The fixture should return a callable, not None or a direct assertion result."""
    assert callable(assert_round_trip)


def test_plugin_discovery() -> None:
    """Verify assert_round_trip appears in pytest --fixtures output."""
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "--fixtures", "-q"],
        capture_output=True,
        text=True,
        cwd=str(Path(__file__).resolve().parents[2]),
    )
    assert "assert_round_trip" in result.stdout, (
        f"assert_round_trip not found in pytest --fixtures output.\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )
