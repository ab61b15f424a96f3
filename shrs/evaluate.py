"""Evaluation of parsed commands into running jobs."""

from __future__ import annotations

from shrs.job import JobManager
from shrs.process import Process, ProcessGroup, run_external_command
from shrs.stdio import Output, Stdin
from shrs.syntax import AsyncList, Command, NoOp, Pipeline, SimpleCommand


def run_job(
    job_manager: JobManager,
    procs: list[Process],
    pgid: int | None,
    foreground: bool,
) -> int:
    """Register the processes as a job and run it in the foreground or background.

    A foreground job is waited for. Returns the id of the new job.
    """
    group = ProcessGroup(id=pgid, processes=list(procs), foreground=foreground)
    job_id = job_manager.create_job("", group)
    if group.foreground:
        job_manager.put_job_in_foreground(job_id, False)
    else:
        job_manager.put_job_in_background(job_id, False)
    return job_id


def eval_command(
    job_manager: JobManager,
    cmd: Command,
    stdin: Stdin | None = None,
    stdout: Output | None = None,
) -> tuple[list[Process], int | None]:
    """Start the processes of a command; return them and their process group id.

    Supports simple commands, pipelines, asynchronous lists and no-ops;
    any other command raises ValueError.
    """
    match cmd:
        case SimpleCommand(args=args):
            if not args:
                raise ValueError("empty command")
            program, *rest = args
            proc, pgid = run_external_command(
                program,
                rest,
                stdin if stdin is not None else Stdin.inherit(),
                stdout if stdout is not None else Output.inherit(),
                Output.inherit(),
                None,
            )
            return [proc], pgid
        case Pipeline(left=left, right=right):
            a_procs, _ = eval_command(job_manager, left, stdin, Output.pipe())
            if not a_procs:
                raise ValueError("left side of pipeline started no process")
            b_procs, b_pgid = eval_command(
                job_manager, right, a_procs[-1].take_stdout(), stdout
            )
            return a_procs + b_procs, b_pgid
        case AsyncList(first=first, rest=rest):
            procs, pgid = eval_command(job_manager, first, None, None)
            run_job(job_manager, procs, pgid, False)
            if rest is not None:
                return eval_command(job_manager, rest, None, None)
            return [], None
        case NoOp():
            return [], None
        case _:
            raise ValueError(f"unsupported command: {type(cmd).__name__}")