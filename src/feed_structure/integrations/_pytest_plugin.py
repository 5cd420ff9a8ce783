"""pytest plugin for feed-structure.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.
"""

from __future__ import annotations

from typing import Any

import pytest

from feed_structure import EngineConfig, classify_fields, parse_document, serialize_document
from feed_structure.detection.profiles import FormatProfile


@pytest.fixture(scope="session")
def assert_round_trip() -> Any:
    """Fixture that returns a callable feed round-trip asserter.

    Usage in tests::

        def test_export_is_stable(assert_round_trip):
            assert_round_trip(render_feed(products))

    Returns:
        A callable ``_assert(text, profile=None, config=None) -> str`` that
        parses *text*, serializes it, parses the output again and checks that
        a second serialization and the classified field paths are unchanged.
        Returns the canonical serialized text.
    """

    def _assert(
        text: str | bytes,
        profile: FormatProfile | None = None,
        config: EngineConfig | None = None,
    ) -> str:
        """Assert that *text* survives parse/serialize without drift.

        Raises:
            MalformedDocumentError: When *text* does not parse.
            AssertionError: When the canonical form or the field paths drift.
        """
        config = config if config is not None else EngineConfig()
        first = serialize_document(parse_document(text, config.parser), config.serializer)
        reparsed = parse_document(first, config.parser)
        second = serialize_document(reparsed, config.serializer)
        if first != second:
            raise AssertionError(
                "Feed serialization is not stable across a round trip:\n"
                f"  first:  {first!r}\n"
                f"  second: {second!r}"
            )
        before = [f.path for f in classify_fields(parse_document(text, config.parser),
                                                  profile, config.classifier)]
        after = [f.path for f in classify_fields(reparsed, profile, config.classifier)]
        if before != after:
            raise AssertionError(
                "Field paths changed across a round trip:\n"
                f"  before: {before}\n"
                f"  after:  {after}"
            )
        return first

    return _assert
