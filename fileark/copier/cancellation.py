"""Per-run cancellation token."""

import threading


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and one copy run.

    A token starts un-cancelled. ``cancel()`` may be called any number of
    times from any thread; the copier only observes it between files.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"
