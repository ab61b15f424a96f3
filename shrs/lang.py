"""Interface for a shell command language."""

from __future__ import annotations

import abc
from typing import Any

from shrs.cmd_output import CmdOutput


class Lang(abc.ABC):
    """A command language that evaluates lines entered into the shell."""

    @abc.abstractmethod
    def eval(self, sh: Any, ctx: Any, rt: Any, cmd: str) -> CmdOutput:
        """Evaluate a command line."""

    @abc.abstractmethod
    def name(self) -> str:
        """Name of the language."""

    @abc.abstractmethod
    def needs_line_check(self, cmd: str) -> bool:
        """Whether the line is incomplete and more input should be read."""