"""Output streams that can optionally record what is written."""

from __future__ import annotations

import sys
from typing import TextIO


class OutputWriter:
    """Writes to stdout and stderr, recording output while collecting."""

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None) -> None:
        self._stdout = stdout
        self._stderr = stderr
        self._collecting = False
        self._out: list[str] = []
        self._err: list[str] = []

    @property
    def _out_stream(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def _err_stream(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def begin_collecting(self) -> None:
        """Start recording everything written."""
        self._collecting = True

    def end_collecting(self) -> tuple[str, str]:
        """Stop recording and return the recorded (stdout, stderr)."""
        self._collecting = False
        out, err = "".join(self._out), "".join(self._err)
        self._out.clear()
        self._err.clear()
        return out, err

    def print(self, s: object) -> None:
        """Write to stdout."""
        text = str(s)
        if self._collecting:
            self._out.append(text)
        self._out_stream.write(text)
        self._out_stream.flush()

    def println(self, s: object) -> None:
        """Write to stdout followed by a line break."""
        self.print(s)
        self.print("\r\n")

    def eprint(self, s: object) -> None:
        """Write to stderr."""
        text = str(s)
        if self._collecting:
            self._err.append(text)
        self._err_stream.write(text)
        self._err_stream.flush()

    def eprintln(self, s: object) -> None:
        """Write to stderr followed by a line break."""
        self.eprint(s)
        self.eprint("\r\n")