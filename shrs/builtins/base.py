"""Interface for builtin shell commands.

Builtin commands differ from external commands in that they run inside the
shell and have access to its context, so they can query or change the shell's
state: the working directory, aliases, environment, hooks and so on.
"""

from __future__ import annotations

import abc
from typing import Any

from shrs.cmd_output import CmdOutput


class BuiltinError(Exception):
    """Raised when a builtin command is given invalid arguments."""


class BuiltinCmd(abc.ABC):
    """A command executed by the shell itself."""

    @abc.abstractmethod
    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        """Run the command; ``args[0]`` is the name it was called by."""