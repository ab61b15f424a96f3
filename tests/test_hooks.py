from pathlib import Path

import pytest

from shrs.cmd_output import CmdOutput
from shrs.hooks import (
    AfterCommandCtx,
    BeforeCommandCtx,
    ChangeDirCtx,
    Hooks,
    JobExitCtx,
    StartupCtx,
)


def test_hooks_run_in_insertion_order_for_matching_type():
    calls = []
    hooks = Hooks()
    hooks.insert(StartupCtx, lambda sh, c, rt, ctx: calls.append("a"))
    hooks.insert(StartupCtx, lambda sh, c, rt, ctx: calls.append("b"))
    hooks.run(None, None, None, StartupCtx(0.5))
    assert calls == ["a", "b"]


def test_hooks_receive_context():
    seen = []
    hooks = Hooks()
    hooks.insert(ChangeDirCtx, lambda sh, c, rt, ctx: seen.append(ctx.new_dir))
    hooks.run(None, None, None, ChangeDirCtx(Path("/a"), Path("/b")))
    assert seen == [Path("/b")]


def test_hooks_for_other_types_are_not_run():
    calls = []
    hooks = Hooks()
    hooks.insert(StartupCtx, lambda sh, c, rt, ctx: calls.append(ctx))
    hooks.run(None, None, None, JobExitCtx(0))
    assert calls == []


def test_hook_error_propagates_and_stops_run():
    calls = []

    def failing(sh, c, rt, ctx):
        raise RuntimeError("boom")

    hooks = Hooks()
    hooks.insert(StartupCtx, failing)
    hooks.insert(StartupCtx, lambda sh, c, rt, ctx: calls.append(1))
    with pytest.raises(RuntimeError):
        hooks.run(None, None, None, StartupCtx(0.0))
    assert calls == []


def test_default_startup_hook_greets(capsys):
    Hooks.default().run(None, None, None, StartupCtx(0.1))
    assert capsys.readouterr().out == "welcome to shrs!\n"


def test_default_job_exit_hook_reports_status(capsys):
    Hooks.default().run(None, None, None, JobExitCtx(3))
    assert capsys.readouterr().out == "[exit +3]\n"


def test_default_silent_hooks(capsys):
    hooks = Hooks.default()
    hooks.run(None, None, None, BeforeCommandCtx("ls", "ls", None))
    hooks.run(None, None, None, AfterCommandCtx("ls", CmdOutput.success()))
    hooks.run(None, None, None, ChangeDirCtx(Path("/a"), Path("/b")))
    assert capsys.readouterr().out == ""