# minishell

The pieces of a small POSIX-style shell, as a Python library. It parses a
command line, expands variables, opens redirections, reads heredocs, and
runs the result as a pipeline of programs found in `$PATH` or of its
built-in commands.

## Installation

```
pip install .
```

## Example

```python
import os

from minishell.errors import ShellError, report_error
from minishell.executor import execute_command
from minishell.parser import parse_command
from minishell.prompt import ask_command, cool_readline
from minishell.state import ShellState
from minishell.variables import Variables

state = ShellState(variables=Variables.from_envp(
    f"{name}={value}" for name, value in os.environ.items()
))

while not state.exit:
    line = ask_command()
    if line is None:
        break
    try:
        command = parse_command(line, state.variables, state.status, cool_readline)
    except ShellError as error:
        report_error(error.message)
        state.status = error.status
        continue
    if not command.empty:
        state.status = execute_command(state, command)
```

## Modules

- `minishell.variables` — `Variables`, an ordered table of `Variable`
  entries (name, value, export flag). An undefined variable reads as the
  empty string. `envp()` gives the exported ones as `NAME=value` strings;
  `Variables.from_envp()` builds a table from such strings, keeping only
  entries with a non-empty name and value. `name_is_valid()` checks that a
  name uses only letters, digits and `_`.
- `minishell.lexer` — `CharStream`, a read cursor over a line, and
  `read_string()`, which reads one word: single quotes keep text literal,
  double quotes and bare text expand `$NAME` and `$?`. Bad syntax raises
  `ParseError`.
- `minishell.parser` — `parse_command(text, variables, status,
  read_heredoc_line)` returns a `Command` holding its `Call` list and its
  input and output descriptors. A line that is only `NAME=value` sets the
  variable and returns an empty command, as does a blank line. A file that
  cannot be opened raises `RedirectionError`. `Command.close()` (or using the
  command as a context manager) closes the descriptors it opened.
- `minishell.executor` — `execute_command(state, command)` runs the calls as
  a pipeline, each program with the default handling of `SIGINT` and
  `SIGQUIT`, waits for them and returns the exit status (127 for a command
  not found).
- `minishell.builtins` — `is_builtin()`, `run_builtin()` and the built-in
  commands themselves.
- `minishell.path` — `search_path()` finds a program in `$PATH`, or checks a
  name containing `/` directly.
- `minishell.prompt` — `cool_readline(prompt)` reads a line without echoing
  control characters such as `^C` and starts over on an interrupt;
  `ask_command()` reads one with the shell prompt. Both return None at end
  of input.
- `minishell.state` — `ShellState`: variables, last status and the exit
  request.
- `minishell.errors` — `ShellError`, `FatalError`, `report_error()` and
  `report_os_error()`.

### Supported syntax

- Pipes: `ls | grep py | wc -l`
- Input redirection: `sort < names.txt`
- Heredoc: `cat << END` reads lines until one equal to `END`
- Output redirection: `echo hi > out.txt`, appending with `>>`
- `$?` expands to the status passed to the parser

Only one input and one output redirection may appear in a command.

### Built-in commands

| Command  | Effect |
|----------|--------|
| `echo [-n] args...` | Print arguments separated by spaces |
| `cd [dir \| -]` | Change directory; no argument goes to `$HOME`, `-` to `$OLDPWD` |
| `pwd` | Print the current directory |
| `env` | Print exported variables |
| `export [NAME[=value]...]` | Export variables; without arguments, list them as `declare -x` lines |
| `unset NAME...` | Remove variables |
| `exit [status]` | Set `state.exit` and return the given status, or the last one |

## What it does not do

The package has no `minishell` command and no ready-made read–run loop: the
caller reads lines and runs them, as in the example above. It does not set
up the shell's own signal handling at the prompt or while a command runs,
and it keeps no command history.

## Running the tests

```
pip install .[test]
pytest
```