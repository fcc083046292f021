"""The interactive shell: reading lines and running them."""

from __future__ import annotations

import os
import signal
import sys
from typing import Optional, Sequence

from minishell.builtins import ShellExit
from minishell.commands import build_pipeline, split_statements
from minishell.environment import Environment
from minishell.executor import run_pipeline
from minishell.expansion import expand_tokens
from minishell.history import History
from minishell.terminal import LineEditor, RawMode
from minishell.tokenizer import ShellSyntaxError, parse
from minishell.utils import PROMPT


class Shell:
    """Runs command lines against an environment, keeping ``$?``."""

    def __init__(self, env: Environment) -> None:
        self.env = env
        self.status = 0

    def _report(self, error: ShellSyntaxError) -> None:
        print(f"{PROMPT}: {error}", flush=True)
        if error.status is not None:
            self.status = error.status

    def run_line(self, line: str) -> int:
        """Run every statement of *line*; return the last exit status."""
        try:
            tokens = parse(line)
        except ShellSyntaxError as error:
            self._report(error)
            return self.status
        for statement in split_statements(tokens):
            expanded = expand_tokens(statement, self.env, self.status)
            try:
                pipeline = build_pipeline(expanded)
            except ShellSyntaxError as error:
                self._report(error)
                continue
            if pipeline:
                self.status = run_pipeline(pipeline, self.env)
        return self.status


def _ignore_interrupts() -> None:
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    signal.signal(signal.SIGINT, signal.SIG_IGN)


def _read(editor: LineEditor) -> Optional[str]:
    if sys.stdin.isatty():
        with RawMode(sys.stdin.fileno()):
            return editor.read_line()
    line = sys.stdin.readline()
    return line.rstrip("\n") if line else None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the interactive shell; return its exit status."""
    args = list(sys.argv if argv is None else argv)
    if len(args) > 1:
        print("No args allow")
        return 0
    _ignore_interrupts()
    env = Environment.from_strings(f"{k}={v}" for k, v in os.environ.items())
    history = History.load(args[0] if args else None, env)
    shell = Shell(env)
    editor = LineEditor(history)
    status = 0
    try:
        while True:
            line = _read(editor)
            if line is None:
                break
            if line:
                history.add(line)
            history.reset()
            if line:
                status = shell.run_line(line)
    except ShellExit as stop:
        status = stop.status
    else:
        print("exit")
    return status


if __name__ == "__main__":
    sys.exit(main())