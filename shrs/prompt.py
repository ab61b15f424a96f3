"""Helpers for building a prompt."""

from __future__ import annotations

import getpass
import os
import socket
from pathlib import Path


def full_pwd() -> str:
    """The full current working directory."""
    return os.getcwd()


def top_pwd() -> str:
    """The last component of the working directory, ``~`` for home, ``/`` for root."""
    cur = Path.cwd()
    if cur == Path.home():
        return "~"
    if cur == Path("/"):
        return "/"
    return cur.name


def username() -> str:
    """Name of the current user."""
    return getpass.getuser()


def hostname() -> str:
    """Name of this host."""
    return socket.gethostname()