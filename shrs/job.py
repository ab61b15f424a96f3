"""Jobs: groups of processes started from one command line."""

from __future__ import annotations

import contextlib
import enum
import logging
import os
import signal
import termios
import time
from collections.abc import Iterator
from typing import Any

from shrs.jobcontrol import get_terminal
from shrs.process import Process, ProcessGroup, ProcessStatus, _job_control_enabled

logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.005


class JobError(LookupError):
    """Raised when a job cannot be found."""

    def __init__(self, job: object) -> None:
        super().__init__(f"no such job {job}")
        self.job = job


class JobStatus(enum.Enum):
    RUNNING = "Running"
    STOPPED = "Stopped"
    COMPLETED = "Completed"

    def __str__(self) -> str:
        return self.value


def _terminal_modes() -> Any:
    try:
        return termios.tcgetattr(get_terminal())
    except (termios.error, OSError):
        return None


class Job:
    """A job made of one or more processes."""

    def __init__(
        self,
        id: int,
        input: str,
        pgid: int | None,
        processes: list[Process],
    ) -> None:
        self.id = id
        self.input = input
        self.pgid = pgid
        self.processes = processes
        # A job whose processes all finished already still has a status.
        self.last_status_code: int | None = next(
            (p.status_code for p in reversed(processes) if p.status_code is not None),
            None,
        )
        self.last_running_in_foreground = True
        self.notified_stopped_job = False
        self.tmodes = _terminal_modes()

    def is_stopped(self) -> bool:
        return all(p.status is ProcessStatus.STOPPED for p in self.processes)

    def is_completed(self) -> bool:
        return all(p.status is ProcessStatus.COMPLETED for p in self.processes)

    @property
    def status(self) -> JobStatus:
        if self.is_stopped():
            return JobStatus.STOPPED
        if self.is_completed():
            return JobStatus.COMPLETED
        return JobStatus.RUNNING

    def kill(self) -> None:
        for process in self.processes:
            process.kill()

    def try_wait(self) -> int | None:
        """Poll every process and return the latest known exit status."""
        for process in self.processes:
            code = process.try_wait()
            if code is not None:
                self.last_status_code = code
        return self.last_status_code

    def display(self) -> str:
        return f"[{self.id}] {self.status}\t{self.input}"

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        return f"id: {self.id}\tinput: {self.input}"


@contextlib.contextmanager
def _terminal_given_to(pgid: int) -> Iterator[None]:
    """Give the terminal to ``pgid``, then hand it back with the shell's modes."""
    if not _job_control_enabled():
        yield
        return
    terminal = get_terminal()
    logger.debug("setting terminal process group to job's process group")
    os.tcsetpgrp(terminal, pgid)
    prev_pgid = os.getpgrp()
    prev_tmodes = _terminal_modes()
    try:
        yield
    finally:
        logger.debug("putting shell back into foreground and restoring terminal modes")
        os.tcsetpgrp(terminal, prev_pgid)
        if prev_tmodes is not None:
            try:
                termios.tcsetattr(terminal, termios.TCSADRAIN, prev_tmodes)
            except termios.error as e:
                logger.error("error restoring terminal configuration for shell: %s", e)


class JobManager:
    """Creates jobs and moves them between foreground and background."""

    def __init__(self) -> None:
        self._jobs: list[Job] = []
        self._job_count = 0
        self.current_job: int | None = None

    def create_job(self, input: str, process_group: ProcessGroup) -> int:
        """Register a job for the process group and return its id."""
        self._job_count += 1
        job_id = self._job_count
        self._jobs.append(
            Job(job_id, input, process_group.id, list(process_group.processes))
        )
        return job_id

    def has_jobs(self) -> bool:
        return bool(self._jobs)

    def get_jobs(self) -> list[Job]:
        return list(self._jobs)

    def _find(self, job_id: int) -> Job | None:
        return next((job for job in self._jobs if job.id == job_id), None)

    def _require(self, job_id: int) -> Job:
        job = self._find(job_id)
        if job is None:
            raise JobError(job_id)
        return job

    def _job_is_running(self, job_id: int) -> bool:
        job = self._require(job_id)
        return not job.is_stopped() and not job.is_completed()

    def wait_for_job(self, job_id: int) -> int | None:
        """Wait until the job stops or completes and return its last exit status.

        Other jobs are polled meanwhile so their statuses stay current.
        """
        while self._job_is_running(job_id):
            for job in self._jobs:
                job.try_wait()
            if self._job_is_running(job_id):
                time.sleep(_POLL_INTERVAL)
        return self._require(job_id).last_status_code

    def _resolve(self, job_id: int | None) -> int:
        resolved = job_id if job_id is not None else self.current_job
        if resolved is None:
            raise JobError("current")
        return resolved

    def put_job_in_foreground(self, job_id: int | None = None, cont: bool = False) -> int | None:
        """Run a job (the current one by default) in the foreground and wait for it."""
        job_id = self._resolve(job_id)
        logger.debug("putting job [%s] in foreground", job_id)
        job = self._require(job_id)
        job.last_running_in_foreground = True

        terminal = (
            _terminal_given_to(job.pgid) if job.pgid is not None else contextlib.nullcontext()
        )
        with terminal:
            if cont:
                if job.tmodes is not None:
                    try:
                        termios.tcsetattr(get_terminal(), termios.TCSADRAIN, job.tmodes)
                    except termios.error as e:
                        logger.error(
                            "error setting terminal configuration for job (%s): %s", job_id, e
                        )
                if job.pgid is not None:
                    os.killpg(job.pgid, signal.SIGCONT)
            return self.wait_for_job(job_id)

    def put_job_in_background(self, job_id: int | None = None, cont: bool = False) -> None:
        """Leave a job running in the background and make it the current job."""
        job_id = self._resolve(job_id)
        logger.debug("putting job [%s] in background", job_id)
        job = self._require(job_id)
        job.last_running_in_foreground = False
        if cont and job.pgid is not None:
            os.killpg(job.pgid, signal.SIGCONT)
        self.current_job = job_id

    def kill_job(self, job_id: int) -> Job | None:
        """Kill every process of a job; None if there is no such job."""
        job = self._find(job_id)
        if job is None:
            return None
        job.kill()
        return job

    def update_job_statuses(self) -> None:
        """Poll every job's processes without blocking."""
        for job in self._jobs:
            job.try_wait()

    def do_job_notification(self) -> None:
        """Report stopped or finished jobs and forget the finished ones."""
        try:
            self.update_job_statuses()
        except Exception as e:
            logger.error("do_job_notification: %s", e)

        for job in self._jobs:
            if job.is_completed() and not job.last_running_in_foreground:
                print(job)
            elif job.is_stopped() and not job.notified_stopped_job:
                print(job)
                job.notified_stopped_job = True

        self._jobs = [job for job in self._jobs if not job.is_completed()]

    def __repr__(self) -> str:
        header = f"{len(self._jobs)} jobs\tjob_count: {self._job_count}\n"
        return header + "".join(repr(job) for job in self._jobs)