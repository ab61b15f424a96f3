"""Shell runtime hooks.

Hooks are user-supplied callables run on events that occur in the shell.
Each event carries a context object, and hooks are registered per context type.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from shrs.cmd_output import CmdOutput

HookFn = Callable[[Any, Any, Any, Any], None]


@dataclass
class StartupCtx:
    """Runs when the shell starts up."""

    startup_time: float
    """Seconds the shell took to start."""


@dataclass
class BeforeCommandCtx:
    """Runs before a command is executed."""

    raw_command: str
    command: str
    run_ctx: Any


@dataclass
class AfterCommandCtx:
    """Runs after a command is executed."""

    command: str
    cmd_output: CmdOutput


@dataclass
class ChangeDirCtx:
    """Runs when the working directory changes."""

    old_dir: Path
    new_dir: Path


@dataclass
class JobExitCtx:
    """Runs when a background job completes."""

    status: int | None


def _require(ctx: object, kind: type) -> None:
    if not isinstance(ctx, kind):
        raise TypeError(f"expected {kind.__name__}, got {type(ctx).__name__}")


def startup_hook(sh: Any, sh_ctx: Any, sh_rt: Any, ctx: StartupCtx) -> None:
    """Default startup hook: greet the user."""
    _require(ctx, StartupCtx)
    sys.stdout.write("welcome to shrs!\n")


def before_command_hook(sh: Any, sh_ctx: Any, sh_rt: Any, ctx: BeforeCommandCtx) -> None:
    """Default before-command hook: accepts only its own context."""
    _require(ctx, BeforeCommandCtx)


def after_command_hook(sh: Any, sh_ctx: Any, sh_rt: Any, ctx: AfterCommandCtx) -> None:
    """Default after-command hook: accepts only its own context."""
    _require(ctx, AfterCommandCtx)


def change_dir_hook(sh: Any, sh_ctx: Any, sh_rt: Any, ctx: ChangeDirCtx) -> None:
    """Default change-directory hook: accepts only its own context."""
    _require(ctx, ChangeDirCtx)


def job_exit_hook(sh: Any, sh_ctx: Any, sh_rt: Any, ctx: JobExitCtx) -> None:
    """Default job-exit hook: report the exit status."""
    _require(ctx, JobExitCtx)
    print(f"[exit +{ctx.status}]")


class Hooks:
    """Registered hooks, grouped by the type of context they receive."""

    def __init__(self) -> None:
        self._hooks: dict[type, list[HookFn]] = {}

    @classmethod
    def default(cls) -> Hooks:
        """A collection holding the default hook for every event."""
        hooks = cls()
        hooks.insert(StartupCtx, startup_hook)
        hooks.insert(BeforeCommandCtx, before_command_hook)
        hooks.insert(AfterCommandCtx, after_command_hook)
        hooks.insert(ChangeDirCtx, change_dir_hook)
        hooks.insert(JobExitCtx, job_exit_hook)
        return hooks

    def insert(self, ctx_type: type, hook: HookFn) -> None:
        """Register ``hook`` for events whose context is of ``ctx_type``."""
        self._hooks.setdefault(ctx_type, []).append(hook)

    def run(self, sh: Any, sh_ctx: Any, sh_rt: Any, ctx: object) -> None:
        """Run every hook registered for the type of ``ctx``, in order.

        The first hook that raises stops the run and the error propagates.
        """
        for hook in list(self._hooks.get(type(ctx), ())):
            hook(sh, sh_ctx, sh_rt, ctx)