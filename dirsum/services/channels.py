"""Thread channels for the worker pool.

HandoffQueue: unbuffered, put() returns only once a consumer has taken the item.
ResultChannel: bounded FIFO that is closed exactly once by its owner.
"""
from __future__ import annotations

import queue
import threading
from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")

# Marks the end of a ResultChannel
_CLOSED = object()


class ChannelClosed(Exception):
    """Raised by get() on a closed, drained channel and by put() on a closed one."""

    pass


class HandoffQueue(Generic[T]):
    """Rendezvous channel from one producer to many consumers.

    There is no buffer: a put blocks until some consumer's get has taken the
    item, so the producer is never more than one item ahead of consumption.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._item: Any = None
        self._has_item = False
        self._offered = 0
        self._taken = 0
        self._closed = False
        self._aborted = False

    @property
    def closed(self) -> bool:
        return self._closed or self._aborted

    def put(self, item: T) -> None:
        """Hand an item to a consumer, blocking until one takes it.

        Raises:
            ChannelClosed: The queue was closed or aborted.
        """
        with self._cond:
            while self._has_item and not self._aborted:
                self._cond.wait()
            if self._closed or self._aborted:
                raise ChannelClosed("put on closed queue")

            self._item = item
            self._has_item = True
            self._offered += 1
            ticket = self._offered
            self._cond.notify_all()

            while self._taken < ticket and not self._aborted:
                self._cond.wait()
            if self._taken < ticket:
                raise ChannelClosed("queue aborted before item was taken")

    def get(self) -> T:
        """Receive the next item, blocking until one is offered.

        Raises:
            ChannelClosed: The queue is closed and empty, or was aborted.
        """
        with self._cond:
            while not self._has_item and not self._closed and not self._aborted:
                self._cond.wait()
            if self._aborted or not self._has_item:
                raise ChannelClosed("queue closed")

            item = self._item
            self._item = None
            self._has_item = False
            self._taken += 1
            self._cond.notify_all()
            return item

    def close(self) -> None:
        """No more items will be offered. Consumers stop once drained."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def abort(self) -> None:
        """Stop the queue now, dropping any item not yet taken."""
        with self._cond:
            self._aborted = True
            self._item = None
            self._has_item = False
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return


class ResultChannel(Generic[T]):
    """Bounded channel from workers to a single collector."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("Capacity must be at least 1")
        self._capacity = capacity
        self._queue: queue.Queue = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def put(self, item: T) -> None:
        """Send a result, blocking while the channel is full."""
        if self._closed.is_set():
            raise ChannelClosed("put on closed channel")
        self._queue.put(item)

    def get(self) -> T:
        """Receive the next result.

        Raises:
            ChannelClosed: The channel is closed and every result was received.
        """
        item = self._queue.get()
        if item is _CLOSED:
            # Leave the marker for any later get
            self._queue.put(_CLOSED)
            raise ChannelClosed("channel closed")
        return item

    def close(self) -> None:
        """Close the channel. Must be called once, after the last put."""
        if self._closed.is_set():
            raise ChannelClosed("channel already closed")
        self._closed.set()
        # Blocks while full; the collector frees a slot
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return
