"""Signal flags the shell reacts to."""

from __future__ import annotations

import signal
import threading
from types import FrameType
from typing import Any


class Signals:
    """Records SIGINT in an event instead of raising KeyboardInterrupt.

    Must be created on the main thread.
    """

    def __init__(self) -> None:
        self.interrupted = threading.Event()
        self._previous: Any = signal.signal(signal.SIGINT, self._on_interrupt)
        self._active = True

    def _on_interrupt(self, signum: int, frame: FrameType | None) -> None:
        self.interrupted.set()

    def restore(self) -> None:
        """Reinstall the SIGINT handler that was active before."""
        if not self._active:
            return
        previous = self._previous if self._previous is not None else signal.SIG_DFL
        signal.signal(signal.SIGINT, previous)
        self._active = False

    def __enter__(self) -> Signals:
        return self

    def __exit__(self, *exc: object) -> None:
        self.restore()