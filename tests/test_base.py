import pytest

from shrs.builtins.base import BuiltinCmd, BuiltinError
from shrs.cmd_output import CmdOutput


class EchoArgs(BuiltinCmd):
    def run(self, sh, ctx, rt, args):
        out = CmdOutput.success()
        out.set_output(" ".join(args[1:]), "")
        return out


def test_builtin_cmd_is_abstract():
    with pytest.raises(TypeError):
        BuiltinCmd()


def test_subclass_run_returns_output():
    expected = CmdOutput.success()
    expected.set_output("a b", "")
    result = EchoArgs().run(None, None, None, ["echo", "a", "b"])
    assert (result.stdout, result.stderr, result.status) == (
        expected.stdout,
        expected.stderr,
        expected.status,
    )
    assert result.status == 0


def test_builtin_error_carries_message():
    err = BuiltinError("bad args")
    assert str(err) == "bad args"
    assert isinstance(err, Exception)