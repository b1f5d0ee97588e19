"""Verification Test: Load Test - Collect stats from many containers.

A host with hundreds of containers must still refresh within a tick, and a
few stuck stats requests must cost at most one fetch timeout, not one
timeout per container.
"""

import time

import pytest

from contop.collector import SnapshotCollector
from contop.config import FetchErrorPolicy

from fakes import FakeRuntime, make_entity


class SlowRuntime(FakeRuntime):
    """Runtime whose every stats request takes a fixed latency."""

    def __init__(self, entities, latency):
        super().__init__(entities)
        self.latency = latency

    def get_stats_snapshot(self, container_id):
        time.sleep(self.latency)
        return super().get_stats_snapshot(container_id)


@pytest.fixture
def many_containers():
    return [make_entity(f"c{i:04d}", f"svc-{i}") for i in range(300)]


class TestLoadTest:
    """Load test verification suite tests."""

    @pytest.mark.asyncio
    async def test_collector_handles_many_containers(self, many_containers):
        runtime = FakeRuntime(many_containers)

        result = await SnapshotCollector().collect(runtime)

        assert len(result) == len(many_containers)
        assert [stats.id for stats in result] == [e.id for e in many_containers]

    @pytest.mark.asyncio
    async def test_fetches_run_concurrently(self):
        """
        Twenty fetches of 0.2s each must finish well under their serial sum.
        """
        runtime = SlowRuntime([make_entity(f"c{i}", f"n{i}") for i in range(20)], 0.2)

        start = time.perf_counter()
        result = await SnapshotCollector().collect(runtime)
        elapsed = time.perf_counter() - start

        assert len(result) == 20
        assert elapsed < 2.0, f"Collection took {elapsed:.2f}s"

    @pytest.mark.asyncio
    async def test_stuck_fetches_are_bounded(self, many_containers):
        runtime = FakeRuntime(many_containers[:50])
        runtime.stuck.update({"c0003", "c0017", "c0042"})
        collector = SnapshotCollector(fetch_timeout=0.3, policy=FetchErrorPolicy.SKIP)

        start = time.perf_counter()
        try:
            result = await collector.collect(runtime)
        finally:
            runtime.release.set()
        elapsed = time.perf_counter() - start

        assert len(result) == 47
        assert elapsed < 2.0, f"Collection took {elapsed:.2f}s"
