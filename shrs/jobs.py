"""Tracking of spawned child processes."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any


class JobsError(Exception):
    """Raised for invalid foreground process operations."""


@dataclass
class JobInfo:
    """A tracked child process and the command that started it."""

    child: Any
    cmd: str


class Jobs:
    """Keeps track of running jobs and the foreground process.

    Children are objects with ``poll()`` and ``wait()``, such as ``subprocess.Popen``.
    """

    def __init__(self) -> None:
        self._next_id = 0
        self._jobs: dict[int, JobInfo] = {}
        self._foreground: Any = None

    def push(self, child: Any, cmd: str) -> int:
        """Track a new job and return its id."""
        self._next_id += 1
        self._jobs[self._next_id] = JobInfo(child, cmd)
        return self._next_id

    def __iter__(self) -> Iterator[tuple[int, JobInfo]]:
        return iter(list(self._jobs.items()))

    def __len__(self) -> int:
        return len(self._jobs)

    def retain(self, exit_handler: Callable[[int], None]) -> None:
        """Drop finished jobs, passing each exit status to ``exit_handler``.

        Jobs whose status cannot be queried are dropped silently.
        """
        for job_id, info in list(self._jobs.items()):
            try:
                status = info.child.poll()
            except OSError:
                del self._jobs[job_id]
                continue
            if status is not None:
                exit_handler(status)
                del self._jobs[job_id]

    def set_foreground(self, child: Any) -> None:
        """Make ``child`` the foreground process."""
        if self._foreground is not None:
            raise JobsError("There is already a foreground process")
        self._foreground = child

    def wait_foreground(self) -> int:
        """Wait for the foreground process to end and return its exit status."""
        fg, self._foreground = self._foreground, None
        if fg is None:
            raise JobsError("No running foreground process")
        try:
            return fg.wait()
        except OSError as e:
            raise JobsError(str(e)) from e