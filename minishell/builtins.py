"""Commands run by the shell itself rather than as separate programs."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TextIO

from minishell.parser import Call
from minishell.state import ShellState
from minishell.variables import name_is_valid

BuiltinFunction = Callable[[ShellState, Call, TextIO, TextIO], int]

_UINT_MAX = 0xFFFFFFFF
_PREVIOUS_DIR_VAR = "OLD" + "PWD"
_CURRENT_DIR_VAR = "P" + "WD"


def _line(stream: TextIO, text: str) -> None:
    stream.write(text + "\n")
    stream.flush()


def echo_builtin(state: ShellState, call: Call, stdout: TextIO, stderr: TextIO) -> int:
    """Print the arguments separated by spaces; ``-n`` first drops the newline."""
    args = call.argv[1:]
    newline = True
    if args and args[0] == "-n":
        newline = False
        args = args[1:]
    stdout.write(" ".join(args))
    if newline:
        stdout.write("\n")
    stdout.flush()
    return 0


def cd_builtin(state: ShellState, call: Call, stdout: TextIO, stderr: TextIO) -> int:
    """Change directory to the argument, ``$HOME`` or, with ``-``, the previous one.

    Return the errno of a failed change, or 1 on too many arguments.
    """
    variables = state.variables
    to_previous = call.argc > 1 and call.argv[1] == "-"
    if call.argc == 1 or to_previous:
        target = variables.get(_PREVIOUS_DIR_VAR if to_previous else "HOME")
    elif call.argc == 2:
        target = call.argv[1]
    else:
        _line(stderr, "cd: too many arguments")
        return 1
    try:
        os.chdir(target)
    except OSError as error:
        _line(stderr, f"cd: {error.strerror or error}")
        return error.errno or 1
    variables.set(_PREVIOUS_DIR_VAR, variables.get(_CURRENT_DIR_VAR))
    cwd = os.getcwd()
    variables.set(_CURRENT_DIR_VAR, cwd)
    if to_previous:
        _line(stdout, cwd)
    return 0


def pwd_builtin(state: ShellState, call: Call, stdout: TextIO, stderr: TextIO) -> int:
    """Print the current directory."""
    _line(stdout, os.getcwd())
    return 0


def env_builtin(state: ShellState, call: Call, stdout: TextIO, stderr: TextIO) -> int:
    """Print the exported variables as ``NAME=value`` lines."""
    if call.argc > 1:
        _line(stderr, "too many arguments")
        return 1
    for entry in state.variables.envp():
        stdout.write(entry + "\n")
    stdout.flush()
    return 0


def export_builtin(
    state: ShellState, call: Call, stdout: TextIO, stderr: TextIO
) -> int:
    """Export each ``NAME`` or ``NAME=value`` argument.

    Return 1 if any argument is not a valid name, 0 otherwise.
    """
    variables = state.variables
    status = 0
    for arg in call.argv[1:]:
        name, sep, value = arg.partition("=")
        if sep and name_is_valid(name):
            variables.set(name, value)
        elif name_is_valid(arg):
            name = arg
        else:
            _line(stderr, "builtin: bad variable name")
            status = 1
            continue
        variables.export(name)
    return status


def export_print_builtin(
    state: ShellState, call: Call, stdout: TextIO, stderr: TextIO
) -> int:
    """Print every exported variable as ``declare -x NAME="value"``."""
    for entry in state.variables.envp():
        name, _, value = entry.partition("=")
        stdout.write(f'declare -x {name}="{value}"\n')
    stdout.flush()
    return 0


def unset_builtin(state: ShellState, call: Call, stdout: TextIO, stderr: TextIO) -> int:
    """Remove each named variable."""
    for name in call.argv[1:]:
        state.variables.unset(name)
    return 0


def _to_uint(text: str) -> int | None:
    if not text or not (text.isascii() and text.isdigit()):
        return None
    value = int(text)
    return value if value <= _UINT_MAX else None


def exit_builtin(state: ShellState, call: Call, stdout: TextIO, stderr: TextIO) -> int:
    """Ask the shell to exit with the given status or the last one."""
    if call.argc > 2:
        _line(stderr, "exit: too many arguments")
        return 1
    status = state.status
    if call.argc == 2:
        value = _to_uint(call.argv[1])
        if value is None:
            _line(stderr, "exit: numeric argument required")
            return 1
        status = value - (1 << 32) if value > 0x7FFFFFFF else value
    state.exit = True
    return status


_BUILTINS: dict[str, BuiltinFunction] = {
    "cd": cd_builtin,
    "exit": exit_builtin,
    "export": export_builtin,
    "unset": unset_builtin,
    "pwd": pwd_builtin,
    "echo": echo_builtin,
    "env": env_builtin,
}


def is_builtin(name: str) -> bool:
    """Return True if ``name`` is a builtin command."""
    return name in _BUILTINS


def run_builtin(state: ShellState, call: Call, stdout: TextIO, stderr: TextIO) -> int:
    """Run the builtin named by ``call`` and return its status (1 if unknown)."""
    if call.program == "export" and call.argc == 1:
        return export_print_builtin(state, call, stdout, stderr)
    function = _BUILTINS.get(call.program)
    if function is None:
        return 1
    return function(state, call, stdout, stderr)