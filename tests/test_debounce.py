"""Tests for EditDebouncer.

Verifies:
- a burst of notifications inside the quiet window runs one round trip
- flush runs immediately and cancel drops the scheduled run
- the quiet window defaults to the engine config and rejects negatives
- a scheduled run that raises is logged instead of left unretrieved
"""

import asyncio
import logging

import pytest

from feed_structure.config import EngineConfig
from feed_structure.coordinator import RoundTripCoordinator, RoundTripState, RoundTripStatus
from feed_structure.debounce import EditDebouncer
from feed_structure.edits import SetValue
from feed_structure.tree.nodes import DocumentNode, NodeKind
from feed_structure.tree.paths import iter_nodes


def price_node(coordinator: RoundTripCoordinator) -> DocumentNode:
    return next(
        node for path, node in iter_nodes(coordinator.tree)
        if path == "shop.offer.price" and node.kind == NodeKind.ELEMENT
    )


@pytest.fixture
def coordinator(shop_feed: str) -> RoundTripCoordinator:
    return RoundTripCoordinator.open(shop_feed)


class TestConstruction:
    def test_window_from_engine_config(self, shop_feed: str) -> None:
        coordinator = RoundTripCoordinator.open(shop_feed, config=EngineConfig(quiet_window=0.75))
        assert EditDebouncer(coordinator).quiet_window == 0.75

    def test_explicit_window(self, coordinator: RoundTripCoordinator) -> None:
        assert EditDebouncer(coordinator, quiet_window=0.0).quiet_window == 0.0

    def test_negative_window_rejected(self, coordinator: RoundTripCoordinator) -> None:
        with pytest.raises(ValueError, match="quiet_window"):
            EditDebouncer(coordinator, quiet_window=-0.1)

    def test_nothing_scheduled_initially(self, coordinator: RoundTripCoordinator) -> None:
        debouncer = EditDebouncer(coordinator)
        assert not debouncer.pending
        assert debouncer.task is None


class TestDebouncing:
    async def test_burst_runs_one_round_trip(self, coordinator: RoundTripCoordinator) -> None:
        debouncer = EditDebouncer(coordinator, quiet_window=0.01)
        price = price_node(coordinator)
        for value in ("1", "12", "12.", "12.5", "12.50"):
            coordinator.apply([SetValue(price.node_id, value)])
            debouncer.notify()
        assert debouncer.pending
        assert coordinator.stats.serializations == 0

        await asyncio.sleep(0.05)
        assert debouncer.task is not None
        result = await debouncer.task

        assert result.status == RoundTripStatus.PUBLISHED
        assert "<price>12.50</price>" in result.published.text
        assert coordinator.stats.serializations == 1
        assert coordinator.stats.reparses == 1
        assert not debouncer.pending

    async def test_flush_skips_the_window(self, coordinator: RoundTripCoordinator) -> None:
        debouncer = EditDebouncer(coordinator, quiet_window=10.0)
        coordinator.apply([SetValue(price_node(coordinator).node_id, "3.00")])
        debouncer.notify()

        result = await debouncer.flush()

        assert result.status == RoundTripStatus.PUBLISHED
        assert not debouncer.pending

    async def test_flush_without_edits(self, coordinator: RoundTripCoordinator) -> None:
        result = await EditDebouncer(coordinator, quiet_window=10.0).flush()
        assert result.status == RoundTripStatus.UNCHANGED

    async def test_cancel_drops_scheduled_run(self, coordinator: RoundTripCoordinator) -> None:
        debouncer = EditDebouncer(coordinator, quiet_window=0.01)
        coordinator.apply([SetValue(price_node(coordinator).node_id, "3.00")])
        debouncer.notify()
        debouncer.cancel()

        await asyncio.sleep(0.03)

        assert not debouncer.pending
        assert debouncer.task is None
        assert coordinator.state == RoundTripState.DIRTY
        assert coordinator.published.version == 0

    async def test_failed_scheduled_run_is_logged(
        self, coordinator: RoundTripCoordinator, caplog: pytest.LogCaptureFixture
    ) -> None:
        def broken(state: object) -> None:
            raise RuntimeError("listener failed")

        coordinator.subscribe(broken)
        debouncer = EditDebouncer(coordinator, quiet_window=0.0)
        coordinator.apply([SetValue(price_node(coordinator).node_id, "3.00")])

        with caplog.at_level(logging.WARNING, logger="feed_structure.debounce"):
            debouncer.notify()
            for _ in range(200):
                await asyncio.sleep(0.01)
                if debouncer.task is not None and debouncer.task.done():
                    break
            await asyncio.sleep(0)

        assert debouncer.task is not None
        assert isinstance(debouncer.task.exception(), RuntimeError)
        assert [
            r.getMessage() for r in caplog.records if r.name == "feed_structure.debounce"
        ] == [
            "Scheduled round trip failed: listener failed"
        ]
