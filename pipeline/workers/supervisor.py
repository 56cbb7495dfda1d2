"""
Stage supervisor: runs pipeline stages on threads and propagates the first fatal error.
"""

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from pipeline_errors import ChannelClosedError
from pipeline.workers.channel import BoundedChannel, ChannelSender

logger = logging.getLogger(__name__)


class StageSupervisor:
    """
    Starts one thread per stage and joins them as a group.

    The first exception raised by any stage is kept, every channel is aborted
    so that no sibling blocks forever on a peer that is gone, and join()
    re-raises that first exception. ChannelClosedErrors raised afterwards are
    consequences of the abort and are discarded.
    """

    def __init__(self, channels: Sequence[BoundedChannel] = ()):
        self.channels: List[BoundedChannel] = list(channels)
        self.results: Dict[str, Any] = {}
        self._threads: List[threading.Thread] = []
        self._failure: Optional[BaseException] = None
        self._failed_stage: Optional[str] = None
        self._lock = threading.Lock()
        self._started = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.abort()
        return False

    @property
    def failure(self) -> Optional[BaseException]:
        return self._failure

    @property
    def failed_stage(self) -> Optional[str]:
        return self._failed_stage

    def spawn(self,
              name: str,
              target: Callable[[], Any],
              senders: Iterable[ChannelSender] = ()) -> threading.Thread:
        """
        Register a stage to run on its own thread.

        Args:
            name: Thread name, also the key of the stage result
            target: Callable running the stage to completion
            senders: Channel senders owned by the stage, closed when it exits

        Returns:
            The (not yet started) thread
        """
        if self._started:
            raise RuntimeError("Cannot spawn stages after the supervisor has started")

        thread = threading.Thread(
            target=self._run_stage,
            name=name,
            args=(name, target, list(senders)),
            daemon=True
        )
        self._threads.append(thread)
        return thread

    def start(self) -> None:
        self._started = True
        for thread in self._threads:
            thread.start()
        logger.debug(f"Started {len(self._threads)} stage threads")

    def join(self) -> Dict[str, Any]:
        """Wait for every stage; re-raise the first failure if there was one."""
        if not self._started:
            self.start()
        for thread in self._threads:
            thread.join()

        if self._failure is not None:
            raise self._failure
        return self.results

    def run(self) -> Dict[str, Any]:
        self.start()
        return self.join()

    def abort(self) -> None:
        for channel in self.channels:
            channel.abort()

    def _run_stage(self, name: str, target: Callable[[], Any],
                   senders: List[ChannelSender]) -> None:
        logger.debug(f"Stage {name} started")
        try:
            result = target()
        except Exception as e:
            self._record_failure(name, e)
        else:
            with self._lock:
                self.results[name] = result
            logger.debug(f"Stage {name} finished")
        finally:
            for sender in senders:
                sender.close()

    def _record_failure(self, name: str, error: Exception) -> None:
        with self._lock:
            first = self._failure is None
            if first:
                self._failure = error
                self._failed_stage = name

        if first:
            logger.error(f"Stage {name} failed: {error}")
            self.abort()
        elif isinstance(error, ChannelClosedError):
            logger.debug(f"Stage {name} stopped after abort: {error}")
        else:
            logger.error(f"Stage {name} also failed: {error}")
