"""Bounded worker pool: feeder, workers, completion tracker."""
from __future__ import annotations

import logging
import threading
from typing import Iterable, Iterator, Optional

from ..core.config import MAX_WORKERS, clamp_workers
from ..core.models import FileResult
from ..core.protocols import FileOperation
from .channels import ChannelClosed, HandoffQueue, ResultChannel

logger = logging.getLogger(__name__)


class WorkerPool:
    """Fans filenames out to N workers and fans their results back in.

    Data flow per run:
    1. Feeder thread: sends every name into an unbuffered HandoffQueue, then closes it
    2. Worker threads: take a name, apply the operation, put the result on a
       ResultChannel whose capacity is the worker count
    3. Tracker thread: joins every worker, then closes the ResultChannel

    The caller collects by iterating run(). The first error raised by the
    feeder or any worker aborts the hand-off queue so no further work is dispatched;
    results still in flight are dropped and the error is re-raised to the
    caller once the result channel closes.
    """

    def __init__(
        self,
        operation: FileOperation,
        workers: int,
        max_workers: int = MAX_WORKERS,
    ):
        """Initialize the pool.

        Args:
            operation: Per-file operation applied by every worker.
            workers: Requested worker count.
            max_workers: Hard cap; larger requests are clamped to it.
        """
        self._operation = operation
        self._size = clamp_workers(workers, max_workers)
        self._error: Optional[BaseException] = None
        self._error_lock = threading.Lock()
        self._dispatched = 0

    @property
    def size(self) -> int:
        return self._size

    @property
    def dispatched(self) -> int:
        """Number of names the feeder has handed to a worker so far."""
        return self._dispatched

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    def run(self, names: Iterable[str]) -> Iterator[FileResult]:
        """Process every name and yield results in completion order.

        Raises:
            Exception: The first error the feeder or any worker hit.
        """
        work: HandoffQueue[str] = HandoffQueue()
        results: ResultChannel[FileResult] = ResultChannel(self._size)
        self._error = None
        self._dispatched = 0

        feeder = threading.Thread(
            target=self._feed, args=(names, work), name="dirsum-feeder", daemon=True
        )
        workers = [
            threading.Thread(
                target=self._work,
                args=(worker_id, work, results),
                name=f"dirsum-worker-{worker_id}",
                daemon=True,
            )
            for worker_id in range(1, self._size + 1)
        ]
        tracker = threading.Thread(
            target=self._track, args=(workers, results), name="dirsum-tracker", daemon=True
        )

        feeder.start()
        for thread in workers:
            thread.start()
        tracker.start()

        finished = False
        try:
            for result in results:
                if self._error is None:
                    yield result
            finished = True
        finally:
            if not finished:
                # Collector stopped early: stop dispatch and let workers drain
                work.abort()
                for _ in results:
                    pass

        if self._error is not None:
            raise self._error

    def _feed(self, names: Iterable[str], work: HandoffQueue[str]) -> None:
        try:
            for name in names:
                work.put(name)
                self._dispatched += 1
        except ChannelClosed:
            logger.debug("Feeder stopped after %d names", self._dispatched)
            return
        except Exception as e:
            self._fail(e, work)
            return
        work.close()

    def _work(
        self,
        worker_id: int,
        work: HandoffQueue[str],
        results: ResultChannel[FileResult],
    ) -> None:
        logger.debug("Worker %d started", worker_id)
        for name in work:
            try:
                result = self._operation(name)
            except Exception as e:
                self._fail(e, work)
                break
            results.put(result)
        logger.debug("Worker %d done", worker_id)

    def _fail(self, error: Exception, work: HandoffQueue[str]) -> None:
        with self._error_lock:
            if self._error is None:
                self._error = error
                logger.debug("Aborting run: %s", error)
        work.abort()

    @staticmethod
    def _track(workers: list[threading.Thread], results: ResultChannel[FileResult]) -> None:
        for thread in workers:
            thread.join()
        results.close()
