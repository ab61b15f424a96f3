import signal
import sys

import pytest

from shrs.process import (
    BuiltinProcess,
    ProcessGroup,
    ProcessStatus,
    run_external_command,
)
from shrs.stdio import Output, Stdin


def _python(code, stdin=None, stdout=None, pgid=None):
    return run_external_command(
        sys.executable,
        ["-c", code],
        stdin or Stdin.inherit(),
        stdout or Output.pipe(),
        Output.inherit(),
        pgid,
    )


def test_builtin_process_reports_completed_status():
    proc = BuiltinProcess("echo", ["a", "b"], 4)
    assert proc.id is None
    assert proc.argv == "echo a b"
    assert proc.status is ProcessStatus.COMPLETED
    assert proc.status_code == 4
    assert proc.wait() == 4
    assert proc.try_wait() == 4


def test_builtin_process_kill_leaves_status():
    proc = BuiltinProcess("true", [], 0)
    proc.kill()
    assert proc.try_wait() == 0


def test_builtin_process_stdout_taken_once():
    stream = Stdin.from_fd(5)
    proc = BuiltinProcess("cat", [], 0, stream)
    assert proc.take_stdout() == stream
    assert proc.take_stdout() is None


def test_process_group_holds_processes():
    proc = BuiltinProcess("ls", [], 0)
    group = ProcessGroup(7, [proc])
    assert group.processes == [proc]
    assert group.foreground is True


def test_external_process_output_and_exit():
    proc, pgid = _python("import sys; sys.stdout.write('hi')")
    assert pgid == proc.id
    out = proc.take_stdout()
    try:
        assert out.target.read() == b"hi"
    finally:
        out.target.close()
    assert proc.take_stdout() is None
    assert proc.wait() == 0
    assert proc.status is ProcessStatus.COMPLETED
    assert proc.status_code == 0


def test_external_process_argv():
    proc, _ = _python("pass")
    proc.wait()
    assert proc.argv == f"{sys.executable} -c pass"


def test_external_exit_code_reported():
    proc, _ = _python("import sys; sys.exit(3)")
    assert proc.wait() == 3
    assert proc.try_wait() == 3


def test_pipeline_between_processes():
    first, pgid = _python("import sys; sys.stdout.write('hello')")
    second, second_pgid = _python(
        "import sys; sys.stdout.write(sys.stdin.read().upper())",
        stdin=first.take_stdout(),
        pgid=pgid,
    )
    assert second_pgid == pgid
    out = second.take_stdout()
    try:
        assert out.target.read() == b"HELLO"
    finally:
        out.target.close()
    assert first.wait() == 0
    assert second.wait() == 0


def test_stdin_from_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_bytes(b"from file")
    with path.open("rb") as fh:
        proc, _ = _python(
            "import sys; sys.stdout.write(sys.stdin.read())",
            stdin=Stdin.from_file(fh),
        )
        out = proc.take_stdout()
        try:
            assert out.target.read() == b"from file"
        finally:
            out.target.close()
    assert proc.wait() == 0


def test_kill_running_process():
    proc, _ = _python("import time; time.sleep(30)", stdout=Output.inherit())
    assert proc.try_wait() is None
    assert proc.status is ProcessStatus.RUNNING
    proc.kill()
    assert proc.wait() == -signal.SIGKILL
    assert proc.status is ProcessStatus.COMPLETED


def test_missing_program_raises():
    with pytest.raises(FileNotFoundError):
        run_external_command(
            "no-such-program-for-shrs-tests",
            [],
            Stdin.inherit(),
            Output.inherit(),
            Output.inherit(),
            None,
        )