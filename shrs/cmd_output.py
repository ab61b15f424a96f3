"""Result of running a single command."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CmdOutput:
    """Exit status and captured output of a command."""

    status: int = 0
    stdout: str = ""
    stderr: str = ""

    @classmethod
    def success(cls) -> CmdOutput:
        """An output with a successful exit status."""
        return cls(0)

    @classmethod
    def error(cls) -> CmdOutput:
        """An output with a failing exit status."""
        return cls(1)

    def set_output(self, out: str, err: str) -> None:
        """Replace the captured stdout and stderr."""
        self.stdout = out
        self.stderr = err