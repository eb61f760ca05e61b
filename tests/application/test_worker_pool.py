"""Tests for the order-preserving worker pool."""

import asyncio
from unittest.mock import Mock

import pytest

from trackbridge.application.utilities import OrderedWorkerPool


@pytest.fixture
def pool_factory(mock_logger):
    def _make(concurrency):
        return OrderedWorkerPool(concurrency=concurrency, logger_instance=mock_logger)

    return _make


class TestOrderedWorkerPool:
    """Test cases for fan-out and ordered collection."""

    async def test_results_follow_input_order(self, pool_factory):
        """Test that slots are filled by input index, not completion order."""
        delays = [0.04, 0.0, 0.02, 0.01]

        async def job(index, delay):
            await asyncio.sleep(delay)
            return index * 10

        result = await pool_factory(4).run(delays, job)

        assert result.results == [0, 10, 20, 30]
        assert result.completed_results == [0, 10, 20, 30]
        assert result.cancelled is False

    async def test_concurrency_bound(self, pool_factory):
        """Test that no more than ``concurrency`` jobs run at once."""
        in_flight = 0
        peak = 0

        async def job(index, item):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return item

        await pool_factory(2).run(list(range(6)), job)

        assert peak == 2

    async def test_sequential_by_default(self, mock_logger):
        """Test that the default pool processes one item at a time, in order."""
        seen = []

        async def job(index, item):
            seen.append(index)
            return item

        pool = OrderedWorkerPool(logger_instance=mock_logger)
        await pool.run(["a", "b", "c"], job)

        assert pool.concurrency == 1
        assert seen == [0, 1, 2]

    async def test_on_result_called_once_per_item(self, pool_factory):
        """Test the completion hook."""
        on_result = Mock()

        async def job(index, item):
            return item.upper()

        await pool_factory(2).run(["a", "b"], job, on_result=on_result)

        assert sorted(c.args for c in on_result.call_args_list) == [
            (0, "a", "A"),
            (1, "b", "B"),
        ]

    async def test_stop_event_halts_dispatch(self, pool_factory):
        """Test that a set stop event prevents new jobs from starting."""
        stop = asyncio.Event()

        async def job(index, item):
            if index == 1:
                stop.set()
            return item

        result = await pool_factory(1).run(list("abcd"), job, stop_event=stop)

        assert result.completed_results == ["a", "b"]
        assert result.pending_indices == [2, 3]
        assert result.cancelled is True

    async def test_job_exception_propagates(self, pool_factory):
        """Test that an unhandled job failure cancels the run and re-raises."""

        async def job(index, item):
            if index == 0:
                raise RuntimeError("boom")
            await asyncio.sleep(1)
            return item

        with pytest.raises(RuntimeError, match="boom"):
            await pool_factory(3).run(list("abc"), job)

    async def test_empty_input(self, pool_factory):
        """Test that no items means no work."""
        job = Mock()

        result = await pool_factory(3).run([], job)

        assert result.results == []
        job.assert_not_called()

    @pytest.mark.parametrize("concurrency", [0, -1])
    def test_invalid_concurrency(self, concurrency):
        """Test that the pool needs at least one worker."""
        with pytest.raises(ValueError):
            OrderedWorkerPool(concurrency=concurrency)
