"""Descriptions of where a process's standard streams come from or go to."""

from __future__ import annotations

import enum
import subprocess
from dataclasses import dataclass
from typing import Any

from shrs.jobcontrol import STDIN_FILENO


class _Kind(enum.Enum):
    INHERIT = "inherit"
    FILE = "file"
    FD = "fd"
    CHILD = "child"
    PIPE = "pipe"


@dataclass(frozen=True)
class Stdin:
    """Source of a process's standard input."""

    kind: _Kind
    target: Any = None

    @classmethod
    def inherit(cls) -> Stdin:
        return cls(_Kind.INHERIT)

    @classmethod
    def from_file(cls, file: Any) -> Stdin:
        return cls(_Kind.FILE, file)

    @classmethod
    def from_fd(cls, fd: int) -> Stdin:
        return cls(_Kind.FD, fd)

    @classmethod
    def from_child(cls, stream: Any) -> Stdin:
        """Read from the output stream of another process."""
        return cls(_Kind.CHILD, stream)

    def fileno(self) -> int:
        """The raw file descriptor of this source."""
        if self.kind is _Kind.INHERIT:
            return STDIN_FILENO
        if self.kind is _Kind.FD:
            return self.target
        return self.target.fileno()

    def to_popen(self) -> Any:
        """Value suitable for the ``stdin`` argument of ``subprocess.Popen``."""
        if self.kind is _Kind.INHERIT:
            return None
        return self.target


@dataclass(frozen=True)
class Output:
    """Destination of a process's standard output or error."""

    kind: _Kind
    target: Any = None

    @classmethod
    def inherit(cls) -> Output:
        return cls(_Kind.INHERIT)

    @classmethod
    def from_file(cls, file: Any) -> Output:
        return cls(_Kind.FILE, file)

    @classmethod
    def from_fd(cls, fd: int) -> Output:
        return cls(_Kind.FD, fd)

    @classmethod
    def pipe(cls) -> Output:
        """Create a new pipe the parent can read from."""
        return cls(_Kind.PIPE)

    def to_popen(self) -> Any:
        """Value suitable for ``stdout``/``stderr`` of ``subprocess.Popen``."""
        if self.kind is _Kind.INHERIT:
            return None
        if self.kind is _Kind.PIPE:
            return subprocess.PIPE
        return self.target