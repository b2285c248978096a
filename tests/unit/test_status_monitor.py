"""
Unit tests for textbatch/performance/status_monitor.py - StatusMonitor component
"""
import asyncio
import pytest

from textbatch.performance.status_monitor import StatusMonitor


class TestStatusMonitor:
    """Test periodic status sampling."""

    @pytest.mark.asyncio
    async def test_sample_notifies_callbacks(self, queue):
        """Test sync and async callbacks both receive the snapshot."""
        monitor = StatusMonitor(queue, interval_sec=0.01)
        seen = []

        async def async_callback(status):
            seen.append(("async", status.ceiling))

        monitor.add_callback(lambda status: seen.append(("sync", status.ceiling)))
        monitor.add_callback(async_callback)

        status = await monitor.sample()

        assert seen == [("sync", status.ceiling), ("async", status.ceiling)]
        assert monitor.last_status is status

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_stop_others(self, queue):
        """Test a raising callback is logged and skipped."""
        monitor = StatusMonitor(queue)
        seen = []

        def broken(status):
            raise RuntimeError("display gone")

        monitor.add_callback(broken)
        monitor.add_callback(seen.append)

        await monitor.sample()
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_remove_callback(self, queue):
        """Test removed callbacks are no longer called."""
        monitor = StatusMonitor(queue)
        seen = []
        monitor.add_callback(seen.append)
        monitor.remove_callback(seen.append)
        monitor.remove_callback(seen.append)

        await monitor.sample()
        assert seen == []

    @pytest.mark.asyncio
    async def test_start_and_stop(self, queue):
        """Test the polling loop samples until stopped."""
        monitor = StatusMonitor(queue, interval_sec=0.01)
        seen = []
        monitor.add_callback(seen.append)

        monitor.start()
        assert monitor.is_running
        await asyncio.sleep(0.05)
        await monitor.stop()

        assert not monitor.is_running
        assert len(seen) >= 2
        count = len(seen)
        await asyncio.sleep(0.03)
        assert len(seen) == count

    @pytest.mark.asyncio
    async def test_stop_when_not_running(self, queue):
        """Test stop() on an idle monitor is a no-op."""
        monitor = StatusMonitor(queue)
        await monitor.stop()
        assert monitor.last_status is None
