"""
Bounded multi-producer/multi-consumer channel with end-of-stream detection.
"""

import logging
import threading
from collections import deque
from typing import Any, Deque, Iterator

from pipeline_errors import ChannelClosedError, ConfigurationError

logger = logging.getLogger(__name__)


class _EndOfStream:
    """Marker returned by receive() once every sender is closed and the queue is drained"""

    def __repr__(self) -> str:
        return 'END_OF_STREAM'


END_OF_STREAM = _EndOfStream()


class BoundedChannel:
    """
    Fixed-capacity queue connecting two pipeline stages.

    send() blocks while the channel is full and receive() blocks while it is
    empty, which gives the pipeline its backpressure. Producers obtain a
    ChannelSender through open_sender(); when the last sender is closed,
    receivers drain the remaining items and then get END_OF_STREAM.

    abort() is used when a stage fails: every blocked or future call raises
    ChannelClosedError instead of waiting on a peer that is gone.
    """

    def __init__(self, capacity: int, name: str = "channel"):
        if capacity <= 0:
            raise ConfigurationError("Channel capacity must be positive",
                                     details={'capacity': capacity})
        self.capacity = capacity
        self.name = name
        self._items: Deque[Any] = deque()
        self._condition = threading.Condition()
        self._open_senders = 0
        self._aborted = False

    def __len__(self) -> int:
        with self._condition:
            return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        while True:
            item = self.receive()
            if item is END_OF_STREAM:
                return
            yield item

    @property
    def aborted(self) -> bool:
        return self._aborted

    def open_sender(self) -> 'ChannelSender':
        """Register a new producer; must happen before receivers start."""
        with self._condition:
            self._open_senders += 1
        return ChannelSender(self)

    def send(self, item: Any) -> None:
        with self._condition:
            while len(self._items) >= self.capacity and not self._aborted:
                self._condition.wait()
            if self._aborted:
                raise ChannelClosedError(f"Cannot send on aborted channel '{self.name}'")
            self._items.append(item)
            self._condition.notify_all()

    def receive(self) -> Any:
        """Take the next item, or END_OF_STREAM once all senders are closed."""
        with self._condition:
            while not self._items and self._open_senders > 0 and not self._aborted:
                self._condition.wait()
            if self._aborted:
                raise ChannelClosedError(f"Cannot receive on aborted channel '{self.name}'")
            if self._items:
                item = self._items.popleft()
                self._condition.notify_all()
                return item
            return END_OF_STREAM

    def abort(self) -> None:
        """Wake every waiting caller and fail all further operations."""
        with self._condition:
            if not self._aborted:
                logger.debug(f"Aborting channel '{self.name}' with {len(self._items)} pending items")
            self._aborted = True
            self._items.clear()
            self._condition.notify_all()

    def _close_sender(self) -> None:
        with self._condition:
            self._open_senders -= 1
            if self._open_senders == 0:
                logger.debug(f"All senders of channel '{self.name}' closed")
            self._condition.notify_all()


class ChannelSender:
    """Producer handle for a BoundedChannel"""

    def __init__(self, channel: BoundedChannel):
        self.channel = channel
        self._closed = False
        self._lock = threading.Lock()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item: Any) -> None:
        if self._closed:
            raise ChannelClosedError(f"Sender of channel '{self.channel.name}' is already closed")
        self.channel.send(item)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self.channel._close_sender()
