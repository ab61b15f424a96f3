"""Shell data shared while the shell runs."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from shrs.alias import Alias
from shrs.env import Env
from shrs.history import DefaultHistory, History
from shrs.hooks import ChangeDirCtx, Hooks
from shrs.jobs import Jobs
from shrs.keybinding import DefaultKeybinding, Keybinding
from shrs.output_writer import OutputWriter
from shrs.state import State
from shrs.theme import Theme

logger = logging.getLogger(__name__)


@dataclass
class Shell:
    """Shell data that is generally not changed while running."""

    job_manager: Any = None
    hooks: Hooks = field(default_factory=Hooks.default)
    builtins: Any = None
    theme: Theme = field(default_factory=Theme)
    lang: Any = None
    signals: Any = None
    keybinding: Keybinding = field(default_factory=DefaultKeybinding)


@dataclass
class Context:
    """Global context shared by every subshell."""

    out: OutputWriter = field(default_factory=OutputWriter)
    state: State = field(default_factory=State)
    jobs: Jobs = field(default_factory=Jobs)
    startup_time: float = field(default_factory=time.monotonic)
    alias: Alias = field(default_factory=Alias)
    history: History = field(default_factory=DefaultHistory)


@dataclass
class Runtime:
    """Per-subshell data, which can be copied."""

    working_dir: Path = field(default_factory=Path.cwd)
    env: Env = field(default_factory=Env)
    name: str = "shrs"
    args: list[str] = field(default_factory=list)
    exit_status: int = 0

    def copy(self) -> Runtime:
        """An independent copy of this runtime."""
        return Runtime(
            working_dir=self.working_dir,
            env=self.env.copy(),
            name=self.name,
            args=list(self.args),
            exit_status=self.exit_status,
        )


def get_working_dir(rt: Runtime) -> Path:
    """The runtime's current working directory."""
    return rt.working_dir


def set_working_dir(
    sh: Shell,
    ctx: Context,
    rt: Runtime,
    wd: str | os.PathLike[str],
    run_hook: bool = True,
) -> None:
    """Change the working directory of the runtime and the process.

    Sets OLDPWD and PWD, and runs change-directory hooks when ``run_hook`` is true;
    hook errors are logged. Raises NotADirectoryError for an invalid path.
    """
    try:
        path = Path(wd).resolve(strict=True)
    except (OSError, RuntimeError):
        raise NotADirectoryError("Invalid path") from None
    if not path.is_dir():
        raise NotADirectoryError("Invalid path")

    old_path = get_working_dir(rt)
    rt.env.set("OLDPWD", str(old_path))
    rt.env.set("PWD", str(path))
    rt.working_dir = path
    os.chdir(path)

    if run_hook:
        try:
            sh.hooks.run(sh, ctx, rt, ChangeDirCtx(old_dir=old_path, new_dir=path))
        except Exception:
            logger.exception("Error running change dir hook")