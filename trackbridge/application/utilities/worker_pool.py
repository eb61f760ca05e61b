"""Bounded worker pool with order-preserving result collection.

A fixed number of asyncio workers pull index-tagged jobs from a shared queue
and write each result into the slot matching its input position, so the
collected results always follow input order no matter which job finishes
first. ``concurrency=1`` degrades to plain sequential processing.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, TypeVar

from attrs import define, field

from trackbridge.config import get_logger

T = TypeVar("T")
R = TypeVar("R")


@define(frozen=True, slots=True)
class PoolResult(Generic[R]):
    """Results of a pool run, slot-aligned with the input items."""

    results: list[R | None]
    completed: list[bool]
    cancelled: bool = False

    @property
    def completed_results(self) -> list[R]:
        """Results of finished jobs, in input order."""
        return [
            result
            for result, done in zip(self.results, self.completed, strict=True)
            if done
        ]

    @property
    def pending_indices(self) -> list[int]:
        """Input positions that were never dispatched."""
        return [i for i, done in enumerate(self.completed) if not done]


@define(slots=True)
class OrderedWorkerPool(Generic[T, R]):
    """Fan out async jobs over a fixed number of workers.

    Attributes:
        concurrency: Maximum number of jobs in flight
        logger_instance: Logger for dispatch diagnostics
    """

    concurrency: int = 1
    logger_instance: Any = field(factory=lambda: get_logger(__name__))

    def __attrs_post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")

    async def run(
        self,
        items: Sequence[T],
        job: Callable[[int, T], Awaitable[R]],
        *,
        stop_event: asyncio.Event | None = None,
        on_result: Callable[[int, T, R], None] | None = None,
    ) -> PoolResult[R]:
        """Run ``job(index, item)`` for every item.

        Args:
            items: Items to process
            job: Coroutine function receiving the item's input index and the item
            stop_event: Checked before every dispatch; once set, no new jobs start
                but in-flight jobs finish and keep their results
            on_result: Called synchronously as each job completes

        Returns:
            PoolResult with one slot per input item

        Raises:
            Exception: Whatever ``job`` raises; remaining workers are cancelled.
        """
        total = len(items)
        results: list[R | None] = [None] * total
        completed = [False] * total
        if not total:
            return PoolResult(results=results, completed=completed)

        queue: asyncio.Queue[tuple[int, T]] = asyncio.Queue()
        for index, item in enumerate(items):
            queue.put_nowait((index, item))

        def stop_requested() -> bool:
            return stop_event is not None and stop_event.is_set()

        async def worker() -> None:
            while not stop_requested():
                try:
                    index, item = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                result = await job(index, item)
                results[index] = result
                completed[index] = True
                if on_result is not None:
                    on_result(index, item, result)

        worker_count = min(self.concurrency, total)
        self.logger_instance.debug(
            f"Dispatching {total} jobs over {worker_count} workers"
        )
        tasks = [asyncio.create_task(worker()) for _ in range(worker_count)]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        cancelled = stop_requested() and not all(completed)
        if cancelled:
            self.logger_instance.info(
                f"Stop requested: {completed.count(False)} of {total} jobs not dispatched"
            )
        return PoolResult(results=results, completed=completed, cancelled=cancelled)
