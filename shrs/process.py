"""Processes started by the shell, builtin or external."""

from __future__ import annotations

import abc
import enum
import logging
import os
import signal
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from shrs.jobcontrol import STDIN_FILENO, get_terminal
from shrs.stdio import Output, Stdin, _Kind

logger = logging.getLogger(__name__)

_RESET_SIGNALS = (
    signal.SIGINT,
    signal.SIGQUIT,
    signal.SIGTSTP,
    signal.SIGTTIN,
    signal.SIGTTOU,
    signal.SIGCHLD,
)


def _job_control_enabled() -> bool:
    """Job control is active when the shell owns a terminal and ignores SIGTTOU.

    Both hold once ``initialize_job_control`` has run in an interactive shell.
    """
    try:
        return os.isatty(get_terminal()) and (
            signal.getsignal(signal.SIGTTOU) == signal.SIG_IGN
        )
    except (OSError, ValueError):
        return False


class ProcessStatus(enum.Enum):
    RUNNING = "Running"
    STOPPED = "Stopped"
    COMPLETED = "Completed"


class Process(abc.ABC):
    """A process that is part of a job."""

    @property
    @abc.abstractmethod
    def id(self) -> int | None:
        """Operating-system process id, or None for builtins."""

    @property
    @abc.abstractmethod
    def argv(self) -> str:
        """The command line, joined by spaces."""

    @property
    @abc.abstractmethod
    def status(self) -> ProcessStatus:
        """Current run state."""

    @property
    @abc.abstractmethod
    def status_code(self) -> int | None:
        """Exit status, if the process has finished."""

    @abc.abstractmethod
    def take_stdout(self) -> Stdin | None:
        """Hand over the process's output stream, once."""

    @abc.abstractmethod
    def kill(self) -> None:
        """Terminate the process."""

    @abc.abstractmethod
    def wait(self) -> int:
        """Block until the process ends and return its exit status."""

    @abc.abstractmethod
    def try_wait(self) -> int | None:
        """Return the exit status if the process has ended, else None."""

    def __repr__(self) -> str:
        pid = self.id
        return f"Process(id={'(builtin)' if pid is None else pid})"


@dataclass
class ProcessGroup:
    """Processes sharing a process group, and whether they run in the foreground."""

    id: int | None
    processes: list[Process] = field(default_factory=list)
    foreground: bool = True


def _join_argv(program: object, args: Sequence[object]) -> list[str]:
    return [str(program), *(str(arg) for arg in args)]


class BuiltinProcess(Process):
    """A command that ran inside the shell and has already completed."""

    def __init__(
        self,
        program: object,
        args: Sequence[object],
        status_code: int,
        stdout: Stdin | None = None,
    ) -> None:
        self._argv = _join_argv(program, args)
        self._status_code = status_code
        self._stdout = stdout

    @property
    def id(self) -> int | None:
        return None

    @property
    def argv(self) -> str:
        return " ".join(self._argv)

    @property
    def status(self) -> ProcessStatus:
        return ProcessStatus.COMPLETED

    @property
    def status_code(self) -> int | None:
        return self._status_code

    def take_stdout(self) -> Stdin | None:
        stdout, self._stdout = self._stdout, None
        return stdout

    def kill(self) -> None:
        return None

    def wait(self) -> int:
        return self._status_code

    def try_wait(self) -> int | None:
        return self._status_code


class ExternalProcess(Process):
    """A child process wrapped around a ``subprocess.Popen``."""

    def __init__(self, program: object, args: Sequence[object], child: Any) -> None:
        self._argv = _join_argv(program, args)
        self.child = child
        self._status = ProcessStatus.RUNNING
        self._status_code: int | None = None

    @property
    def id(self) -> int | None:
        return self.child.pid

    @property
    def argv(self) -> str:
        return " ".join(self._argv)

    @property
    def status(self) -> ProcessStatus:
        return self._status

    @property
    def status_code(self) -> int | None:
        return self._status_code

    def take_stdout(self) -> Stdin | None:
        stream, self.child.stdout = self.child.stdout, None
        return None if stream is None else Stdin.from_child(stream)

    def kill(self) -> None:
        self.child.kill()

    def _finish(self, code: int) -> int:
        self._status = ProcessStatus.COMPLETED
        self._status_code = code
        return code

    def wait(self) -> int:
        return self._finish(self.child.wait())

    def try_wait(self) -> int | None:
        code = self.child.poll()
        if code is None:
            return None
        return self._finish(code)


def run_external_command(
    program: object,
    args: Sequence[object],
    stdin: Stdin | None = None,
    stdout: Output | None = None,
    stderr: Output | None = None,
    pgid: int | None = None,
) -> tuple[Process, int]:
    """Start an external program and return it with its process group id.

    With job control active the child joins process group ``pgid`` (its own
    when None), takes the terminal and restores default signal handling.
    Standard input is attached only after the terminal has been taken.
    """
    stdin = stdin if stdin is not None else Stdin.inherit()
    stdout = stdout if stdout is not None else Output.inherit()
    stderr = stderr if stderr is not None else Output.inherit()

    job_control = _job_control_enabled()
    terminal = get_terminal()
    stdin_fd = stdin.fileno()

    def prepare_child() -> None:
        if job_control:
            pid = os.getpid()
            group = pgid if pgid is not None else pid
            os.setpgid(pid, group)
            os.tcsetpgrp(terminal, group)
            for sig in _RESET_SIGNALS:
                signal.signal(sig, signal.SIG_DFL)
        if stdin_fd != STDIN_FILENO:
            os.dup2(stdin_fd, STDIN_FILENO)
            os.close(stdin_fd)

    try:
        child = subprocess.Popen(
            _join_argv(program, args),
            stdout=stdout.to_popen(),
            stderr=stderr.to_popen(),
            preexec_fn=prepare_child,
        )
    except (OSError, subprocess.SubprocessError):
        if job_control:
            logger.warning("failed to spawn child, resetting terminal's pgrp")
            try:
                os.tcsetpgrp(terminal, os.getpgrp())
            except OSError as e:
                logger.error("failed to reset terminal's pgrp: %s", e)
        raise
    finally:
        if stdin.kind is _Kind.CHILD:
            stdin.target.close()

    group = pgid if pgid is not None else child.pid
    if job_control:
        try:
            os.setpgid(child.pid, group)
        except OSError as e:
            logger.error("failed to set pgid (%s) for pid (%s): %s", group, child.pid, e)

    return ExternalProcess(program, args, child), group