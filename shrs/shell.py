"""Shell configuration and the main read-evaluate loop."""

from __future__ import annotations

import abc
import argparse
import logging
import os
import sys
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NoReturn

from shrs.alias import Alias, AliasRuleCtx
from shrs.builtins.registry import Builtins
from shrs.cmd_output import CmdOutput
from shrs.context import Context, Runtime, Shell
from shrs.env import Env
from shrs.evaluate import eval_command, run_job
from shrs.history import DefaultHistory, History
from shrs.hooks import AfterCommandCtx, BeforeCommandCtx, Hooks, JobExitCtx, StartupCtx
from shrs.job import JobManager
from shrs.jobcontrol import get_terminal, initialize_job_control
from shrs.jobs import Jobs
from shrs.keybinding import DefaultKeybinding, Keybinding
from shrs.lang import Lang
from shrs.lexer import LexError, Lexer, Token, TokenKind
from shrs.linecheck import needs_line_check
from shrs.output_writer import OutputWriter
from shrs.plugin import FailMode, Plugin
from shrs.signals import Signals
from shrs.state import State
from shrs.syntax import AsyncList, Command, NoOp, Pipeline, SimpleCommand
from shrs.theme import Theme

logger = logging.getLogger(__name__)


class Readline(abc.ABC):
    """Source of command lines."""

    @abc.abstractmethod
    def read_line(self, sh: Shell, ctx: Context, rt: Runtime) -> str:
        """Read one command line; raise EOFError when input is exhausted."""


class PromptReadline(Readline):
    """Reads lines with a prompt, continuing while the language needs more input."""

    def __init__(
        self,
        prompt: str = "> ",
        continuation: str = ". ",
        input_fn: Callable[[str], str] = input,
    ) -> None:
        self.prompt = prompt
        self.continuation = continuation
        self._input = input_fn

    def read_line(self, sh: Shell, ctx: Context, rt: Runtime) -> str:
        line = self._input(self.prompt)
        while sh.lang is not None and sh.lang.needs_line_check(line):
            line += "\n" + self._input(self.continuation)
        if line.strip():
            ctx.history.add(line)
        return line


_PARSE_ERROR = "unsuccessful parse"

_KEYWORD_KINDS = frozenset(
    {
        TokenKind.IF, TokenKind.THEN, TokenKind.ELSE, TokenKind.ELIF, TokenKind.FI,
        TokenKind.DO, TokenKind.DONE, TokenKind.CASE, TokenKind.ESAC,
        TokenKind.WHILE, TokenKind.UNTIL, TokenKind.FOR, TokenKind.IN,
    }
)


def _tokens(line: str) -> Iterator[tuple[int, Token, int]]:
    try:
        yield from Lexer(line)
    except LexError as e:
        raise ValueError(f"{_PARSE_ERROR}: {e}") from e


def _unquote(word: str) -> str:
    if len(word) > 1 and word[0] in "'\"" and word[-1] == word[0]:
        return word[1:-1]
    return word


def _pipeline(stages: list[list[str]]) -> Command:
    if any(not words for words in stages):
        raise ValueError(_PARSE_ERROR)
    cmd: Command = SimpleCommand(stages[0])
    for words in stages[1:]:
        cmd = Pipeline(cmd, SimpleCommand(words))
    return cmd


def _parse(line: str) -> Command:
    """Parse pipelines separated by ``&`` into a command tree."""
    lists: list[list[list[str]]] = [[[]]]
    for start, token, end in _tokens(line):
        stages = lists[-1]
        words = stages[-1]
        kind = token.kind
        if kind is TokenKind.AMP:
            if not words:
                raise ValueError(_PARSE_ERROR)
            lists.append([[]])
        elif kind is TokenKind.PIPE:
            if not words:
                raise ValueError(_PARSE_ERROR)
            stages.append([])
        elif kind in (TokenKind.NEWLINE, TokenKind.BACKSLASH):
            continue
        elif kind is TokenKind.WORD and token.value is not None:
            words.append(_unquote(token.value))
        elif kind in _KEYWORD_KINDS and words:
            words.append(line[start:end])
        else:
            raise ValueError(_PARSE_ERROR)

    *background, last = lists
    cmd: Command | None = None if last == [[]] else _pipeline(last)
    if not background:
        return cmd if cmd is not None else NoOp()
    for stages in reversed(background):
        cmd = AsyncList(_pipeline(stages), cmd)
    return cmd


class _PosixLang(Lang):
    """POSIX command language: pipelines run as foreground jobs, ``&`` backgrounds."""

    def eval(self, sh: Any, ctx: Any, rt: Any, cmd: str) -> CmdOutput:
        try:
            parsed = _parse(cmd)
        except ValueError as e:
            print(e, file=sys.stderr)
            raise
        procs, pgid = eval_command(sh.job_manager, parsed, None, None)
        run_job(sh.job_manager, procs, pgid, True)
        return CmdOutput.success()

    def name(self) -> str:
        return "posix"

    def needs_line_check(self, cmd: str) -> bool:
        return needs_line_check(cmd)


@dataclass
class ShellConfig:
    """Complete configuration of a shell."""

    hooks: Hooks = field(default_factory=Hooks.default)
    builtins: Builtins = field(default_factory=Builtins.default)
    readline: Readline = field(default_factory=PromptReadline)
    alias: Alias = field(default_factory=Alias)
    env: Env = field(default_factory=Env)
    theme: Theme = field(default_factory=Theme)
    lang: Lang = field(default_factory=_PosixLang)
    plugins: list[Plugin] = field(default_factory=list)
    state: State = field(default_factory=State)
    history: History = field(default_factory=DefaultHistory)
    keybinding: Keybinding = field(default_factory=DefaultKeybinding)

    def run(self) -> NoReturn:
        """Initialize plugins and run the shell loop; blocks until input ends.

        A plugin that fails with FailMode.ABORT raises RuntimeError.
        """
        plugins, self.plugins = self.plugins, []
        for plugin in plugins:
            meta = plugin.meta()
            logger.info("Initializing plugin '%s'...", meta.name)
            try:
                plugin.init(self)
            except Exception as e:
                message = f"Plugin '{meta.name}' failed to initialize with {e}"
                if plugin.fail_mode() is FailMode.WARN:
                    logger.warning(message)
                else:
                    raise RuntimeError(message) from e

        ctx = Context(
            out=OutputWriter(),
            state=self.state,
            jobs=Jobs(),
            startup_time=time.monotonic(),
            alias=self.alias,
            history=self.history,
        )
        rt = Runtime(working_dir=Path.cwd(), env=self.env, name="shrs", args=[], exit_status=0)
        with Signals() as signals:
            sh = Shell(
                job_manager=JobManager(),
                hooks=self.hooks,
                builtins=self.builtins,
                theme=self.theme,
                lang=self.lang,
                signals=signals,
                keybinding=self.keybinding,
            )
            run_shell(sh, ctx, rt, self.readline)


class ShellBuilder:
    """Builds a ShellConfig, using defaults for anything not given."""

    def __init__(self) -> None:
        self._hooks: Hooks | None = None
        self._builtins: Builtins | None = None
        self._readline: Readline | None = None
        self._alias: Alias | None = None
        self._env: Env | None = None
        self._theme: Theme | None = None
        self._lang: Lang | None = None
        self._plugins: list[Plugin] = []
        self._state: State | None = None
        self._history: History | None = None
        self._keybinding: Keybinding | None = None

    def with_hooks(self, hooks: Hooks) -> ShellBuilder:
        self._hooks = hooks
        return self

    def with_builtins(self, builtins: Builtins) -> ShellBuilder:
        self._builtins = builtins
        return self

    def with_readline(self, readline: Readline) -> ShellBuilder:
        self._readline = readline
        return self

    def with_alias(self, alias: Alias) -> ShellBuilder:
        self._alias = alias
        return self

    def with_env(self, env: Env) -> ShellBuilder:
        self._env = env
        return self

    def with_theme(self, theme: Theme) -> ShellBuilder:
        self._theme = theme
        return self

    def with_lang(self, lang: Lang) -> ShellBuilder:
        self._lang = lang
        return self

    def with_plugin(self, plugin: Plugin) -> ShellBuilder:
        """Add a plugin; plugins are initialized in the order added."""
        self._plugins.append(plugin)
        return self

    def with_state(self, state: object) -> ShellBuilder:
        """Add a value to the state store, indexed by its type."""
        if self._state is None:
            self._state = State()
        self._state.insert(state)
        return self

    def with_history(self, history: History) -> ShellBuilder:
        self._history = history
        return self

    def with_keybinding(self, keybinding: Keybinding) -> ShellBuilder:
        self._keybinding = keybinding
        return self

    def build(self) -> ShellConfig:
        """Create the configuration."""
        return ShellConfig(
            hooks=self._hooks if self._hooks is not None else Hooks.default(),
            builtins=self._builtins if self._builtins is not None else Builtins.default(),
            readline=self._readline if self._readline is not None else PromptReadline(),
            alias=self._alias if self._alias is not None else Alias(),
            env=self._env if self._env is not None else Env(),
            theme=self._theme if self._theme is not None else Theme(),
            lang=self._lang if self._lang is not None else _PosixLang(),
            plugins=list(self._plugins),
            state=self._state if self._state is not None else State(),
            history=self._history if self._history is not None else DefaultHistory(),
            keybinding=self._keybinding if self._keybinding is not None else DefaultKeybinding(),
        )


def _clean_word(word: str) -> str:
    while word.startswith("\\\n"):
        word = word[2:]
    return word.strip()


def run_shell(sh: Shell, ctx: Context, rt: Runtime, readline: Readline) -> NoReturn:
    """The read-evaluate loop; ends only when the readline raises."""
    try:
        sh.hooks.run(
            sh, ctx, rt, StartupCtx(startup_time=time.monotonic() - ctx.startup_time)
        )
    except Exception as e:
        logger.warning("startup hook failed: %s", e)

    while True:
        line = readline.read_line(sh, ctx, rt)

        words = [w for w in (_clean_word(part) for part in line.split(" ")) if w]
        if words:
            expanded = ctx.alias.get(AliasRuleCtx(words[0], sh, ctx, rt))
            if expanded:
                words[0] = expanded[-1]
        line = " ".join(words)

        sh.hooks.run(
            sh, ctx, rt, BeforeCommandCtx(raw_command=line, command=line, run_ctx=rt.copy())
        )

        if not words:
            continue

        builtin = sh.builtins.get(words[0])
        cmd_output = CmdOutput.error()
        ctx.out.begin_collecting()
        try:
            if builtin is not None:
                cmd_output = builtin.run(sh, ctx, rt, words)
            else:
                cmd_output = sh.lang.eval(sh, ctx, rt, line)
        except Exception as e:
            print(f"error: {e}", file=sys.stderr)
        out, err = ctx.out.end_collecting()
        cmd_output.set_output(out, err)
        try:
            sh.hooks.run(sh, ctx, rt, AfterCommandCtx(command=line, cmd_output=cmd_output))
        except Exception as e:
            logger.warning("after command hook failed: %s", e)

        statuses: list[int] = []
        ctx.jobs.retain(statuses.append)
        for status in statuses:
            sh.hooks.run(sh, ctx, rt, JobExitCtx(status=status))


def main(argv: list[str] | None = None) -> int:
    """Start an interactive shell with the default configuration."""
    parser = argparse.ArgumentParser(prog="shrs", description="An interactive shell.")
    parser.parse_args(argv)
    if os.isatty(get_terminal()):
        initialize_job_control()
    config = ShellBuilder().build()
    try:
        config.run()
    except EOFError:
        pass
    return 0