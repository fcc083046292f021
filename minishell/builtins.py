"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from typing import Callable, Optional, Sequence, TextIO

from minishell.environment import Environment, is_valid_name, split_assignment
from minishell.utils import export_listing, parse_long_long


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit {status}")
        self.status = status


def _stream(stdout: Optional[TextIO]) -> TextIO:
    return stdout if stdout is not None else sys.stdout


def echo(args: Sequence[str], stdout: Optional[TextIO] = None) -> int:
    """Print the arguments; leading ``-n`` options suppress the newline."""
    out = _stream(stdout)
    skip = 0
    while skip < len(args) and args[skip] == "-n":
        skip += 1
    out.write(" ".join(args[skip:]))
    if not skip:
        out.write("\n")
    return 0


def pwd(stdout: Optional[TextIO] = None) -> int:
    """Print the current working directory."""
    out = _stream(stdout)
    try:
        cwd = os.getcwd()
    except OSError:
        print("pwd: error", file=out)
        return 1
    print(cwd, file=out)
    return 0


def cd(args: Sequence[str], env: Environment, stdout: Optional[TextIO] = None) -> int:
    """Change directory, to ``HOME`` when no argument is given."""
    out = _stream(stdout)
    target = args[0] if args else env.get("HOME")
    try:
        if target is None:
            raise FileNotFoundError("HOME")
        os.chdir(target)
    except OSError:
        shown = "" if target is None else target
        if target is not None and os.path.exists(target):
            print(f"cd: {shown}: Not a directory", file=out)
        else:
            print(f"cd: {shown}: No such file or directory", file=out)
        return 1
    old = env.get("PWD")
    if old is not None:
        env.replace("OLDPWD", old)
        env.replace("PWD", os.getcwd())
    return 0


def env_command(env: Environment, stdout: Optional[TextIO] = None) -> int:
    """Print every variable that has a value."""
    out = _stream(stdout)
    for variable in env:
        if variable.value is not None:
            print(f"{variable.name}={variable.value}", file=out)
    return 0


def export(args: Sequence[str], env: Environment, stdout: Optional[TextIO] = None) -> int:
    """Set variables from ``NAME=VALUE`` arguments, or list them all."""
    out = _stream(stdout)
    if not args:
        for line in export_listing(env.as_entries()):
            print(line, file=out)
        return 0
    status = 0
    for arg in args:
        if "=" not in arg:
            continue
        name, value = split_assignment(arg)
        if is_valid_name(name):
            env.set(name, value)
        else:
            print(f"export: not an identifier: {name}", file=out)
            status = 1
    return status


def exit_command(args: Sequence[str], stdout: Optional[TextIO] = None) -> int:
    """Raise ShellExit; return 1 when the arguments are unusable."""
    out = _stream(stdout)
    print("exit", file=out)
    if not args:
        raise ShellExit(0)
    if len(args) > 1:
        print("exit: too many arguments", file=out)
        return 1
    try:
        code = parse_long_long(args[0])
    except ValueError:
        print(f"exit: {args[0]}: numeric argument required", file=out)
        return 1
    raise ShellExit(code % 256)


def unset(args: Sequence[str], env: Environment, stdout: Optional[TextIO] = None) -> int:
    """Remove the named variables."""
    out = _stream(stdout)
    status = 0
    if not args:
        print("unset: not enough arguments", file=out)
        status = 1
    for name in args:
        if is_valid_name(name):
            env.remove(name)
        else:
            print(f"unset: {name}: invalid parameter name", file=out)
            status = 1
    return status


_BUILTINS: dict[str, Callable[[Sequence[str], Environment, TextIO], int]] = {
    "cd": cd,
    "echo": lambda args, env, out: echo(args, out),
    "env": lambda args, env, out: env_command(env, out),
    "exit": lambda args, env, out: exit_command(args, out),
    "export": export,
    "pwd": lambda args, env, out: pwd(out),
    "unset": unset,
}


def is_builtin(name: str) -> bool:
    """Return True if *name*, in any letter case, names a builtin."""
    return name.lower() in _BUILTINS


def run_builtin(
    argv: Sequence[str], env: Environment, stdout: Optional[TextIO] = None
) -> Optional[int]:
    """Run *argv* as a builtin; return its status, or None if it is not one."""
    if not argv:
        return None
    handler = _BUILTINS.get(argv[0].lower())
    if handler is None:
        return None
    return handler(list(argv[1:]), env, _stream(stdout))