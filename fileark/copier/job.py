"""Background execution of a copy run."""

import logging
import queue
from collections.abc import Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from fileark.copier.cancellation import CancellationToken
from fileark.copier.copier import Copier
from fileark.models import CopyOptions, CopyProgress, CopyResult, FileRecord

logger = logging.getLogger(__name__)

_DONE = object()


class CopyJob:
    """Runs a Copier on a worker thread.

    Progress events are queued by the worker and consumed on the caller's
    thread through ``events()``. Each job owns a fresh CancellationToken, so
    a new job always starts un-cancelled.
    """

    def __init__(
        self,
        copier: Copier,
        records: Sequence[FileRecord],
        destination_root: Path,
        options: CopyOptions | None = None,
    ) -> None:
        self.copier = copier
        self.records = list(records)
        self.destination_root = Path(destination_root)
        self.options = options or CopyOptions()
        self.token = CancellationToken()
        self._events: queue.Queue = queue.Queue()
        self._executor: ThreadPoolExecutor | None = None
        self._future: Future | None = None

    def start(self) -> "CopyJob":
        if self._future is not None:
            raise RuntimeError("Copy job already started")

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="fileark-copy")
        self._future = self._executor.submit(
            self.copier.copy,
            self.records,
            self.destination_root,
            self.options,
            self.token,
            self._events.put,
        )
        self._future.add_done_callback(lambda _: self._events.put(_DONE))
        self._executor.shutdown(wait=False)
        return self

    def cancel(self) -> None:
        """Request cancellation; takes effect before the next file."""
        logger.info("Cancellation requested")
        self.token.cancel()

    def events(self, poll_interval: float = 0.1) -> Iterator[CopyProgress]:
        """Yield progress events until the run finishes."""
        if self._future is None:
            raise RuntimeError("Copy job not started")

        while True:
            try:
                item = self._events.get(timeout=poll_interval)
            except queue.Empty:
                continue
            if item is _DONE:
                return
            yield item

    def result(self, timeout: float | None = None) -> CopyResult:
        """Block until the run finishes; re-raises fatal copier errors."""
        if self._future is None:
            raise RuntimeError("Copy job not started")
        return self._future.result(timeout=timeout)

    @property
    def done(self) -> bool:
        return self._future is not None and self._future.done()
