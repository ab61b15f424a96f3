import io
import os
import sys
from types import SimpleNamespace

import pytest

from shrs.alias import AliasInfo, AliasRuleCtx
from shrs.builtins.base import BuiltinError
from shrs.builtins.commands import (
    AliasBuiltin,
    CdBuiltin,
    DebugBuiltin,
    ExitBuiltin,
    ExportBuiltin,
    HelpBuiltin,
    HistoryBuiltin,
    JobsBuiltin,
    SourceBuiltin,
    UnaliasBuiltin,
)
from shrs.builtins.registry import Builtins
from shrs.cmd_output import CmdOutput
from shrs.context import Context, Runtime, Shell
from shrs.env import EnvNotFoundError
from shrs.keybinding import DefaultKeybinding
from shrs.lang import Lang
from shrs.output_writer import OutputWriter


class RecordingLang(Lang):
    def __init__(self):
        self.lines = []

    def eval(self, sh, ctx, rt, cmd):
        self.lines.append(cmd)
        return CmdOutput(status=7)

    def name(self):
        return "recording"

    def needs_line_check(self, cmd):
        return False


class FakeChild:
    def poll(self):
        return None

    def wait(self):
        return 0


@pytest.fixture(autouse=True)
def _restore_environ():
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def shell(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out, err = io.StringIO(), io.StringIO()
    lang = RecordingLang()
    sh = Shell(builtins=Builtins.default(), lang=lang)
    ctx = Context(out=OutputWriter(out, err))
    rt = Runtime(working_dir=tmp_path)
    return SimpleNamespace(sh=sh, ctx=ctx, rt=rt, out=out, err=err, lang=lang, path=tmp_path)


def run(shell, builtin, *args):
    return builtin.run(shell.sh, shell.ctx, shell.rt, list(args))


def test_alias_sets_value(shell):
    result = run(shell, AliasBuiltin(), "alias", "ll=ls")
    assert result.status == 0
    assert shell.ctx.alias.get(AliasRuleCtx("ll")) == ["ls"]


def test_alias_value_keeps_later_equals(shell):
    run(shell, AliasBuiltin(), "alias", "a=b=c")
    assert shell.ctx.alias.get(AliasRuleCtx("a")) == ["b=c"]


def test_alias_shows_definition(shell):
    shell.ctx.alias.set("g", AliasInfo.always("git"))
    run(shell, AliasBuiltin(), "alias", "g")
    assert "alias g=git" in shell.out.getvalue()


def test_alias_undefined_reports(shell):
    run(shell, AliasBuiltin(), "alias", "nothing")
    assert "nothing not defined" in shell.err.getvalue()


def test_alias_requires_argument(shell):
    with pytest.raises(BuiltinError):
        run(shell, AliasBuiltin(), "alias")


def test_cd_into_subdirectory(shell):
    sub = shell.path / "sub"
    sub.mkdir()
    result = run(shell, CdBuiltin(), "cd", "sub")
    assert result.status == 0
    assert shell.rt.working_dir == sub.resolve()
    assert shell.rt.env.get("OLDPWD") == str(shell.path)
    assert os.getcwd() == str(sub.resolve())


def test_cd_dash_returns_to_previous(shell):
    (shell.path / "sub").mkdir()
    run(shell, CdBuiltin(), "cd", "sub")
    run(shell, CdBuiltin(), "cd", "-")
    assert shell.rt.working_dir == shell.path.resolve()


def test_cd_dash_without_oldpwd(shell):
    result = run(shell, CdBuiltin(), "cd", "-")
    assert result.status == 1
    assert "no OLDPWD" in shell.err.getvalue()


def test_cd_invalid_path(shell):
    result = run(shell, CdBuiltin(), "cd", "missing")
    assert result.status == 1
    assert shell.rt.working_dir == shell.path


def test_cd_without_argument_goes_home(shell):
    home = shell.path / "home"
    home.mkdir()
    shell.rt.env.set("HOME", str(home))
    run(shell, CdBuiltin(), "cd")
    assert shell.rt.working_dir == home.resolve()


def test_cd_without_home_raises(shell):
    with pytest.raises(EnvNotFoundError):
        run(shell, CdBuiltin(), "cd")


def test_debug_without_command(shell):
    run(shell, DebugBuiltin(), "debug")
    assert shell.out.getvalue() == "debug utility\r\n"


def test_debug_env_lists_variables(shell):
    shell.rt.env.set("SHRS_DEBUG_VAR", "bar")
    run(shell, DebugBuiltin(), "debug", "env")
    assert '"SHRS_DEBUG_VAR" = "bar"' in shell.out.getvalue()


def test_debug_unknown_command(shell):
    with pytest.raises(BuiltinError):
        run(shell, DebugBuiltin(), "debug", "nope")


def test_exit_exits_with_zero(shell):
    with pytest.raises(SystemExit) as info:
        run(shell, ExitBuiltin(), "exit")
    assert info.value.code == 0


def test_export_sets_variables(shell):
    run(shell, ExportBuiltin(), "export", "SHRS_A=1", "SHRS_B")
    assert shell.rt.env.get("SHRS_A") == "1"
    assert shell.rt.env.get("SHRS_B") == ""
    assert os.environ["SHRS_A"] == "1"


def test_export_n_removes(shell):
    shell.rt.env.set("SHRS_GONE", "x")
    run(shell, ExportBuiltin(), "export", "-n", "SHRS_GONE")
    with pytest.raises(EnvNotFoundError):
        shell.rt.env.get("SHRS_GONE")
    assert "SHRS_GONE" not in os.environ


def test_export_p_prints(shell):
    shell.rt.env.set("SHRS_P", "v")
    run(shell, ExportBuiltin(), "export", "-p")
    assert 'export "SHRS_P"="v"\r\n' in shell.out.getvalue()


def test_help_builtin_lists_names(shell):
    run(shell, HelpBuiltin(), "help", "builtin")
    lines = shell.out.getvalue().split("\r\n")
    assert lines[0] == "Builtin Commands"
    assert set(shell.sh.builtins.names()) <= set(lines)


def test_help_bindings_lists_info(shell):
    shell.sh.keybinding = DefaultKeybinding([("C-l", lambda sh, ctx, rt: None, "clear")])
    run(shell, HelpBuiltin(), "help", "bindings")
    assert shell.out.getvalue() == "Key Bindings\r\nC-l: clear\r\n"


def test_help_requires_subcommand(shell):
    with pytest.raises(BuiltinError):
        run(shell, HelpBuiltin(), "help")


def test_history_lists_entries(shell):
    shell.ctx.history.add("first")
    shell.ctx.history.add("second")
    run(shell, HistoryBuiltin(), "history")
    assert shell.out.getvalue() == "0 second\r\n1 first\r\n"


def test_history_clear(shell):
    shell.ctx.history.add("first")
    run(shell, HistoryBuiltin(), "history", "clear")
    assert len(shell.ctx.history) == 0


def test_history_run_evaluates_entry(shell):
    shell.ctx.history.add("echo a")
    shell.ctx.history.add("echo b")
    result = run(shell, HistoryBuiltin(), "history", "run", "1")
    assert shell.lang.lines == ["echo a"]
    assert result.status == 7


def test_history_run_missing_entry(shell):
    result = run(shell, HistoryBuiltin(), "history", "run", "5")
    assert result.status == 1
    assert shell.lang.lines == []


def test_history_search(shell):
    shell.ctx.history.add("ls -a")
    shell.ctx.history.add("git status")
    run(shell, HistoryBuiltin(), "history", "search", "git")
    assert shell.out.getvalue() == "0 git status\r\n"


def test_jobs_lists_ids(shell):
    first = shell.ctx.jobs.push(FakeChild(), "a")
    second = shell.ctx.jobs.push(FakeChild(), "b")
    run(shell, JobsBuiltin(), "jobs")
    assert shell.out.getvalue() == f"{first}\r\n{second}\r\n"


def test_source_with_shebang_runs_interpreter(shell):
    script = shell.path / "script.py"
    script.write_text(f"#!{sys.executable}\nimport sys\nsys.exit(3)\n")
    result = run(shell, SourceBuiltin(), "source", str(script))
    assert result.status == 3
    assert f"using interp {sys.executable} at {script}" in shell.out.getvalue()


def test_source_without_shebang_evaluates_lines(shell):
    script = shell.path / "script.sh"
    script.write_text("echo one\n\necho two\n")
    result = run(shell, SourceBuiltin(), "source", str(script))
    assert shell.lang.lines == ["echo one", "echo two"]
    assert result.status == 7


def test_source_missing_file(shell):
    with pytest.raises(FileNotFoundError):
        run(shell, SourceBuiltin(), "source", str(shell.path / "absent"))


def test_unalias_removes_named(shell):
    shell.ctx.alias.set("x", AliasInfo.always("y"))
    shell.ctx.alias.set("k", AliasInfo.always("v"))
    run(shell, UnaliasBuiltin(), "unalias", "x")
    assert shell.ctx.alias.get(AliasRuleCtx("x")) == []
    assert shell.ctx.alias.get(AliasRuleCtx("k")) == ["v"]


def test_unalias_a_clears_all(shell):
    shell.ctx.alias.set("x", AliasInfo.always("y"))
    shell.ctx.alias.set("k", AliasInfo.always("v"))
    run(shell, UnaliasBuiltin(), "unalias", "-a")
    assert shell.ctx.alias.get(AliasRuleCtx("x")) == []
    assert shell.ctx.alias.get(AliasRuleCtx("k")) == []