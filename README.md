# minishell

A small interactive shell for POSIX systems. It reads a line, splits it
into statements and pipelines, and runs each command either as a built-in
or as a program found on `PATH`.

## Installing

```
pip install .
```

## Running

```
minishell
```

The shell takes no arguments; given any, it prints `No args allow` and
stops. On a terminal it shows the prompt `minishell: ` and reads input in
raw mode. Ctrl-D with the cursor at the start of the line leaves the shell,
and Ctrl-C drops the line being typed. When standard input is not a
terminal, it reads one command per line until end of input. SIGINT and
SIGQUIT are ignored by the shell itself and restored to their defaults in
the programs it starts.

## What it understands

- Words separated by spaces or tabs.
- Single quotes (`'...'`), taken literally.
- Double quotes (`"..."`), where `$` expansion still happens and `\"` and
  `\\` are escapes.
- Backslash escapes outside quotes.
- Variables: `$NAME` and `$?` (the status of the last command). An unknown
  variable expands to nothing.
- Wildcards: an unquoted `*` is matched against the names in the current
  directory, leaving out hidden files. A pattern with no match is kept as
  written.
- Pipes `|` and the statement separator `;`.
- Redirections `<`, `>` and `>>`. Files are created if missing (mode 0600);
  a file that cannot be opened is skipped.

Misplaced operators are reported as
`syntax error near unexpected token` and set `$?` to 258; an unclosed
quote is reported too.

A program that is not found gives status 127 and
`minishell: NAME: command not found` on standard error; one that is not
executable gives 126. A program killed by a signal gives 128 plus the
signal number, and `Quit`, `Terminate` and `Kill` are announced.

## Built-in commands

`echo` (with `-n`), `cd`, `pwd`, `env`, `export`, `unset` and `exit`.
Their names are matched case-insensitively.

- `cd` with no argument goes to `$HOME` and updates `PWD` and `OLDPWD`
  when `PWD` is set.
- `export NAME=VALUE` sets variables; `export` alone lists all of them as
  `declare -x` lines, sorted. Arguments without `=` are ignored.
- `exit [N]` ends the shell with `N` modulo 256; a non-numeric argument or
  more than one argument is reported and the shell goes on.

A built-in that is alone in its statement and has no redirections changes
the shell's own state. Inside a pipeline or with redirections it works on a
copy of the environment, so `export`, `unset`, `cd` and `exit` there do not
affect the shell.

## Line editing and history

Left and right arrows move the cursor, Backspace deletes the character
before it, and the up and down arrows step through history. Entries are
read from and saved to `history/history_term<level>` beside the program
(relative to the working directory). The `history/` directory is not
created by the shell; without it history is kept only for the session.
Nested shells keep a file per level, tracked by the `MINISHLVL` variable,
which wraps to 0 after level 9; a shell also shows the history of the
levels below it.

## Using it from Python

```python
import os
from minishell.environment import Environment
from minishell.shell import Shell

shell = Shell(Environment.from_strings(f"{k}={v}" for k, v in os.environ.items()))
status = shell.run_line("echo hello | cat")
```

`run_line` returns the exit status of the last command run, as `$?` would
show it. A lone `exit` raises `minishell.builtins.ShellExit`, whose
`status` holds the code.

The parts can also be used alone: `minishell.tokenizer.parse` turns a line
into tokens, `minishell.expansion.expand_tokens` expands variables and
wildcards, `minishell.commands.split_statements` and `build_pipeline` build
`Command` objects, and `minishell.executor.run_pipeline` runs them.

## What it does not do

There are no here-documents (`<<`), no `&&` or `||`, no subshells or
grouping, no background jobs or job control, and no tab completion. Raw
terminal mode relies on `termios`, so the shell runs on POSIX systems only.