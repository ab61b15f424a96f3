"""Terminal and process-group setup for job control."""

from __future__ import annotations

import logging
import os
import signal

logger = logging.getLogger(__name__)

STDIN_FILENO = 0

_IGNORED_SIGNALS = (
    signal.SIGINT,
    signal.SIGQUIT,
    signal.SIGTSTP,
    signal.SIGTTIN,
    signal.SIGTTOU,
)


def get_terminal() -> int:
    """File descriptor of the controlling terminal."""
    return STDIN_FILENO


def initialize_job_control() -> None:
    """Make the shell the foreground process group of its terminal.

    Waits until the shell is in the foreground, ignores interactive and
    job-control signals, and places the shell in its own process group.
    """
    terminal = get_terminal()

    while True:
        shell_pgid = os.getpgrp()
        if os.tcgetpgrp(terminal) == shell_pgid:
            break
        os.killpg(shell_pgid, signal.SIGTTIN)

    for sig in _IGNORED_SIGNALS:
        signal.signal(sig, signal.SIG_IGN)

    pid = os.getpid()
    os.setpgid(pid, pid)

    try:
        os.tcsetpgrp(terminal, pid)
    except OSError as e:
        logger.error("failed to grab control of terminal: %s", e)