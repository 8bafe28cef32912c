"""Running a parsed command: builtins in the shell, programs as children."""

from __future__ import annotations

import os
import signal
import subprocess
import sys

from minishell.builtins import is_builtin, run_builtin
from minishell.errors import report_error, report_os_error
from minishell.parser import Call, Command
from minishell.path import search_path
from minishell.state import ShellState


def _default_signals() -> None:
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)


def _environment(state: ShellState) -> dict[str, str]:
    env: dict[str, str] = {}
    for entry in state.variables.envp():
        name, _, value = entry.partition("=")
        env[name] = value
    return env


def _run_builtin_on(state: ShellState, call: Call, out_fd: int) -> int:
    sys.stdout.flush()
    try:
        with os.fdopen(out_fd, "w", encoding="utf-8", closefd=False) as out:
            return run_builtin(state, call, out, sys.stderr)
    except OSError as error:
        report_os_error(error)
        return error.errno or 1


def _execute_call(
    state: ShellState,
    call: Call,
    in_fd: int,
    out_fd: int,
    processes: list[subprocess.Popen],
) -> int:
    if is_builtin(call.program):
        return _run_builtin_on(state, call, out_fd)
    program_path = search_path(state.variables, call.program)
    if program_path is None:
        report_error(f"command not found: {call.program}")
        return 127
    try:
        process = subprocess.Popen(
            call.argv,
            executable=program_path,
            stdin=in_fd,
            stdout=out_fd,
            env=_environment(state),
            preexec_fn=_default_signals,
        )
    except OSError as error:
        report_os_error(error)
        return error.errno or 1
    processes.append(process)
    return 0


def execute_command(state: ShellState, command: Command) -> int:
    """Run every call of ``command`` as a pipeline and return the exit status.

    Calls run in order and the first one that fails to start stops the rest.
    The command's redirection descriptors are closed afterwards.
    """
    calls = command.calls
    if not calls:
        report_error("no program given")
        return 1
    links: list[tuple[int, int]] = []
    try:
        for _ in range(len(calls) - 1):
            links.append(os.pipe())
    except OSError as error:
        for read_fd, write_fd in links:
            os.close(read_fd)
            os.close(write_fd)
        command.close()
        report_os_error(error)
        return error.errno or 1
    inputs = [command.input_fd, *(read_fd for read_fd, _ in links)]
    outputs = [*(write_fd for _, write_fd in links), command.output_fd]
    processes: list[subprocess.Popen] = []
    status = 0
    try:
        for call, in_fd, out_fd in zip(calls, inputs, outputs):
            status = _execute_call(state, call, in_fd, out_fd, processes)
            if status:
                break
    finally:
        for read_fd, write_fd in links:
            os.close(read_fd)
            os.close(write_fd)
        command.close()
    last_code = 0
    for process in processes:
        last_code = process.wait()
    if last_code > 0:
        status = last_code
    return status