"""Syntax tree of the POSIX shell command language."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union


class RedirectMode(enum.Enum):
    """File redirection modes."""

    READ = enum.auto()
    WRITE = enum.auto()
    READ_APPEND = enum.auto()
    WRITE_APPEND = enum.auto()
    READ_DUP = enum.auto()
    WRITE_DUP = enum.auto()
    READ_WRITE = enum.auto()


@dataclass
class Redirect:
    """File redirection, optionally of a specific descriptor ``n``."""

    file: str
    mode: RedirectMode
    n: int | None = None


@dataclass
class Assign:
    """Variable assignment."""

    var: str
    val: str


class SeparatorOp(enum.Enum):
    """Separator between commands."""

    AMP = "&"
    SEMI = ";"


@dataclass
class SimpleCommand:
    """A basic command such as ``ls -al``."""

    args: list[str] = field(default_factory=list)
    assigns: list[Assign] = field(default_factory=list)
    redirects: list[Redirect] = field(default_factory=list)


@dataclass
class Pipeline:
    """Two commands joined by a pipe."""

    left: Command
    right: Command


@dataclass
class And:
    """Run ``right`` only if ``left`` succeeds."""

    left: Command
    right: Command


@dataclass
class Or:
    """Run ``right`` only if ``left`` fails."""

    left: Command
    right: Command


@dataclass
class Not:
    """Negate the exit status of a command."""

    cmd: Command


@dataclass
class AsyncList:
    """``first & rest``: do not wait for ``first`` before running ``rest``."""

    first: Command
    rest: Command | None = None


@dataclass
class SeqList:
    """``first ; rest``: wait for ``first`` before running ``rest``."""

    first: Command
    rest: Command | None = None


@dataclass
class Subshell:
    """A command run in a subshell, such as ``(cd src && ls)``."""

    cmd: Command


@dataclass
class Condition:
    """A condition and the body to run if it holds, in ``if`` or ``elif``."""

    cond: Command
    body: Command


@dataclass
class If:
    """If statement with its ``elif`` branches and optional ``else``."""

    conds: list[Condition]
    else_part: Command | None = None


@dataclass
class While:
    cond: Command
    body: Command


@dataclass
class Until:
    cond: Command
    body: Command


@dataclass
class For:
    name: str
    wordlist: list[str]
    body: Command


@dataclass
class CaseArm:
    """One arm of a case statement."""

    pattern: list[str]
    body: Command


@dataclass
class Case:
    word: str
    arms: list[CaseArm] = field(default_factory=list)


@dataclass
class Fn:
    """Function definition."""

    fname: str
    body: Command


@dataclass
class NoOp:
    """A command that does nothing."""


Command = Union[
    SimpleCommand,
    Pipeline,
    And,
    Or,
    Not,
    AsyncList,
    SeqList,
    Subshell,
    If,
    While,
    Until,
    For,
    Case,
    Fn,
    NoOp,
]