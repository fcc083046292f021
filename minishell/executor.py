"""Run pipelines of commands: redirections, pipes, builtins and programs."""

from __future__ import annotations

import copy
import io
import os
import signal
import subprocess
import sys
import threading
from dataclasses import dataclass
from typing import Optional, Sequence

from minishell.builtins import ShellExit, is_builtin, run_builtin
from minishell.commands import Command, Redirection, RedirectionType
from minishell.environment import Environment
from minishell.utils import error_message, find_executable

_FILE_MODE = 0o600
_MODES = {
    RedirectionType.INPUT: (os.O_CREAT | os.O_RDONLY, 0),
    RedirectionType.OUTPUT: (os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 1),
    RedirectionType.APPEND: (os.O_CREAT | os.O_WRONLY | os.O_APPEND, 1),
}
_STATUS_NOT_FOUND = 127
_STATUS_NOT_EXECUTABLE = 126
_SIGNAL_OFFSET = 128


def open_redirections(
    redirections: Sequence[Redirection],
) -> tuple[Optional[int], Optional[int]]:
    """Open the files of *redirections* in order.

    Returns the descriptors that replace standard input and output; a later
    redirection of the same stream closes the earlier one.  Files that
    cannot be opened are skipped.  The caller owns the returned descriptors.
    """
    streams: list[Optional[int]] = [None, None]
    for redirection in redirections:
        flags, target = _MODES[redirection.type]
        try:
            fd = os.open(redirection.filename, flags, _FILE_MODE)
        except OSError:
            continue
        previous = streams[target]
        if previous is not None:
            os.close(previous)
        streams[target] = fd
    return streams[0], streams[1]


def describe_signal(signum: int) -> Optional[str]:
    """The message printed when a child dies of *signum*, or None."""
    messages = {
        signal.SIGQUIT: f"Quit: {int(signal.SIGQUIT)}",
        signal.SIGINT: "",
        signal.SIGTERM: f"Terminate: {int(signal.SIGTERM)}",
        signal.SIGKILL: f"Kill: {int(signal.SIGKILL)}",
    }
    return messages.get(signum)


def _restore_signals() -> None:
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)
    signal.signal(signal.SIGINT, signal.SIG_DFL)


def _close(fd: Optional[int]) -> None:
    if fd is not None:
        try:
            os.close(fd)
        except OSError:
            pass


@dataclass
class _Finished:
    status: int
    writer: Optional[threading.Thread] = None

    def wait(self) -> int:
        if self.writer is not None:
            self.writer.join()
        return self.status


class _Process:
    def __init__(self, process: subprocess.Popen) -> None:
        self._process = process

    def wait(self) -> int:
        code = self._process.wait()
        if code >= 0:
            return code
        signum = -code
        message = describe_signal(signum)
        if message is not None:
            print(message, flush=True)
        return signum + _SIGNAL_OFFSET


def _write_all(fd: int, data: bytes) -> None:
    try:
        view = memoryview(data)
        while view:
            written = os.write(fd, view)
            view = view[written:]
    except OSError:
        pass
    finally:
        _close(fd)


def _start_builtin(
    argv: Sequence[str], env: Environment, stdout: Optional[int]
) -> _Finished:
    output = io.StringIO()
    try:
        status = run_builtin(argv, copy.deepcopy(env), output)
    except ShellExit as stop:
        status = stop.status
    text = output.getvalue()
    if stdout is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return _Finished(status or 0)
    data = text.encode("utf-8", "surrogateescape")
    writer = threading.Thread(target=_write_all, args=(stdout, data), daemon=True)
    writer.start()
    return _Finished(status or 0, writer)


def _start_program(
    argv: Sequence[str], env: Environment, stdin: Optional[int], stdout: Optional[int]
):
    try:
        path = find_executable(argv[0], env)
        if path is None:
            sys.stderr.write(error_message(argv[0], ": command not found\n"))
            sys.stderr.flush()
            return _Finished(_STATUS_NOT_FOUND)
        if not os.path.exists(path):
            return _Finished(_STATUS_NOT_FOUND)
        if not os.access(path, os.X_OK):
            sys.stderr.write(error_message(argv[0], ": not a exec file\n"))
            sys.stderr.flush()
            return _Finished(_STATUS_NOT_EXECUTABLE)
        sys.stdout.flush()
        try:
            process = subprocess.Popen(
                list(argv),
                executable=path,
                env=env.as_exec(),
                stdin=stdin,
                stdout=stdout,
                preexec_fn=_restore_signals,
            )
        except OSError:
            return _Finished(_STATUS_NOT_FOUND)
        return _Process(process)
    finally:
        _close(stdout)


def _start(
    argv: Sequence[str], env: Environment, stdin: Optional[int], stdout: Optional[int]
):
    try:
        if not argv:
            _close(stdout)
            return _Finished(0)
        if is_builtin(argv[0]):
            return _start_builtin(argv, env, stdout)
        return _start_program(argv, env, stdin, stdout)
    finally:
        _close(stdin)


def run_pipeline(pipeline: Sequence[Command], env: Environment) -> int:
    """Run the commands of one statement and return the exit status.

    A lone builtin without redirections runs in the shell itself and may
    raise ShellExit; every other command runs apart from the shell's
    environment, as a child would.
    """
    if not pipeline:
        return 0
    single = pipeline[0]
    if len(pipeline) == 1 and not single.redirections:
        status = run_builtin(single.argv, env)
        if status is not None:
            return status
    jobs = []
    read_end: Optional[int] = None
    for command in pipeline:
        stdin, read_end = read_end, None
        stdout = None
        if command.pipe_out:
            read_end, stdout = os.pipe()
        red_in, red_out = open_redirections(command.redirections)
        if red_in is not None:
            _close(stdin)
            stdin = red_in
        if red_out is not None:
            _close(stdout)
            stdout = red_out
        jobs.append(_start(command.argv, env, stdin, stdout))
    _close(read_end)
    status = 0
    for job in jobs:
        status = job.wait()
    return status