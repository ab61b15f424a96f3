"""The builtin commands shipped with the shell."""

from __future__ import annotations

import argparse
import json
import re
import subprocess
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any, NoReturn

from shrs.alias import AliasInfo, AliasRuleCtx
from shrs.builtins.base import BuiltinCmd, BuiltinError
from shrs.cmd_output import CmdOutput
from shrs.context import set_working_dir
from shrs.env import EnvNotFoundError

_SHEBANG = re.compile(r"#!(?P<interp>.+)")


class _Parser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting the process."""

    def error(self, message: str) -> NoReturn:
        raise BuiltinError(f"{self.prog}: {message}")

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        raise BuiltinError((message or "").strip() or f"{self.prog}: exited")


def _parser(args: Sequence[str], default_prog: str, **kwargs: Any) -> _Parser:
    prog = args[0] if args else default_prog
    return _Parser(prog=prog, **kwargs)


def _rest(args: Sequence[str]) -> list[str]:
    return list(args[1:])


def _quote(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


def _non_negative(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid index: {value}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"invalid index: {value}")
    return number


def _history_entries(history: Any) -> Iterator[tuple[int, str]]:
    for index in range(len(history)):
        entry = history.get(index)
        if entry is not None:
            yield index, entry


class AliasBuiltin(BuiltinCmd):
    """``alias NAME=VALUE`` sets an alias; ``alias NAME`` shows it."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        parser = _parser(args, "alias")
        parser.add_argument("alias")
        cli = parser.parse_args(_rest(args))

        name, sep, body = cli.alias.partition("=")
        if sep:
            ctx.alias.set(name, AliasInfo.always(body))
            return CmdOutput.success()

        substs = ctx.alias.get(AliasRuleCtx(name, sh, ctx, rt))
        if not substs:
            ctx.out.eprintln(f"{name} not defined")
        for subst in substs:
            ctx.out.println(f"alias {name}={subst}")
        return CmdOutput.success()


class CdBuiltin(BuiltinCmd):
    """Change the working directory; ``cd -`` returns to the previous one."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        parser = _parser(args, "cd")
        parser.add_argument("path", nargs="?")
        cli = parser.parse_args(_rest(args))

        if cli.path is None:
            path = Path(rt.env.get("HOME"))
        elif cli.path == "-":
            try:
                path = Path(rt.env.get("OLDPWD"))
            except EnvNotFoundError:
                ctx.out.eprintln("no OLDPWD")
                return CmdOutput.error()
        else:
            path = Path(rt.working_dir) / cli.path

        try:
            set_working_dir(sh, ctx, rt, path, True)
        except OSError as e:
            ctx.out.eprintln(e)
            return CmdOutput.error()
        return CmdOutput.success()


class DebugBuiltin(BuiltinCmd):
    """Inspect shell internals; ``debug env`` lists the environment."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        parser = _parser(args, "debug")
        sub = parser.add_subparsers(dest="command")
        sub.add_parser("env")
        cli = parser.parse_args(_rest(args))

        if cli.command is None:
            ctx.out.println("debug utility")
        else:
            for var, val in rt.env:
                ctx.out.println(f"{_quote(var)} = {_quote(val)}")
        return CmdOutput.success()


class ExitBuiltin(BuiltinCmd):
    """Leave the shell."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        sys.exit(0)


class ExportBuiltin(BuiltinCmd):
    """Set (``VAR=VAL``), remove (``-n``) or print (``-p``) environment variables."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        parser = _parser(args, "export")
        parser.add_argument("vars", nargs="*")
        parser.add_argument("-p", action="store_true")
        parser.add_argument("-n", action="store_true")
        cli = parser.parse_args(_rest(args))

        if cli.n:
            for var in cli.vars:
                rt.env.remove(var)
            return CmdOutput.success()

        if cli.p:
            for var, val in rt.env:
                ctx.out.println(f"export {_quote(var)}={_quote(val)}")
            return CmdOutput.success()

        for item in cli.vars:
            var, _, val = item.partition("=")
            rt.env.set(var, val)
        return CmdOutput.success()


class HelpBuiltin(BuiltinCmd):
    """``help builtin`` lists builtins; ``help bindings`` lists keybindings."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        parser = _parser(args, "help", add_help=False)
        sub = parser.add_subparsers(dest="command", required=True)
        sub.add_parser("builtin", add_help=False)
        sub.add_parser("bindings", add_help=False)
        cli = parser.parse_args(_rest(args))

        if cli.command == "builtin":
            ctx.out.println("Builtin Commands")
            for name in sh.builtins.names():
                ctx.out.println(name)
        else:
            ctx.out.println("Key Bindings")
            for binding, desc in sh.keybinding.get_info().items():
                ctx.out.println(f"{binding}: {desc}")
        return CmdOutput.success()


class HistoryBuiltin(BuiltinCmd):
    """Show, clear, search or rerun history entries."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        parser = _parser(args, "history")
        sub = parser.add_subparsers(dest="command")
        sub.add_parser("clear")
        run_cmd = sub.add_parser("run")
        run_cmd.add_argument("index", type=_non_negative)
        search_cmd = sub.add_parser("search")
        search_cmd.add_argument("query")
        cli = parser.parse_args(_rest(args))

        if cli.command is None:
            for index, entry in _history_entries(ctx.history):
                ctx.out.println(f"{index} {entry}")
        elif cli.command == "clear":
            ctx.history.clear()
        elif cli.command == "run":
            entry = ctx.history.get(cli.index)
            if entry is None:
                ctx.out.eprintln(f"no history entry {cli.index}")
                return CmdOutput.error()
            return sh.lang.eval(sh, ctx, rt, entry)
        else:
            for index, entry in _history_entries(ctx.history):
                if cli.query in entry:
                    ctx.out.println(f"{index} {entry}")
        return CmdOutput.success()


class JobsBuiltin(BuiltinCmd):
    """List the ids of tracked jobs."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        for job_id, _ in ctx.jobs:
            ctx.out.println(str(job_id))
        return CmdOutput.success()


class SourceBuiltin(BuiltinCmd):
    """Run a script, with its shebang interpreter if it has one."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        parser = _parser(args, "source")
        parser.add_argument("source_file")
        cli = parser.parse_args(_rest(args))

        contents = Path(cli.source_file).read_text(encoding="utf-8")
        lines = contents.splitlines()
        match = _SHEBANG.search(lines[0]) if lines else None

        if match is not None:
            interp = match.group("interp")
            ctx.out.println(f"using interp {interp} at {cli.source_file}")
            completed = subprocess.run([interp, cli.source_file], check=False)
            return CmdOutput(status=completed.returncode)

        output = CmdOutput.success()
        for line in lines:
            if line.strip():
                output = sh.lang.eval(sh, ctx, rt, line)
        return output


class UnaliasBuiltin(BuiltinCmd):
    """Remove aliases by name, or all of them with ``-a``."""

    def run(self, sh: Any, ctx: Any, rt: Any, args: list[str]) -> CmdOutput:
        parser = _parser(args, "unalias")
        parser.add_argument("aliases", nargs="*")
        parser.add_argument("-a", action="store_true")
        cli = parser.parse_args(_rest(args))

        if cli.a:
            ctx.alias.clear()
            return CmdOutput.success()
        for alias in cli.aliases:
            ctx.alias.unset(alias)
        return CmdOutput.success()