"""Reading lines from the user."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager

try:
    import readline  # noqa: F401  (enables line editing for input())
except ImportError:
    pass

try:
    import termios
except ImportError:
    termios = None  # type: ignore[assignment]

PROMPT = "\x1b[1m\x1b[38;5;45m( ^.^)> \x1b[0m"


@contextmanager
def _no_control_echo() -> Iterator[None]:
    """Stop the terminal from echoing control characters such as ``^C``."""
    echoctl = getattr(termios, "ECHOCTL", 0) if termios is not None else 0
    try:
        fd = sys.stdin.fileno()
        interactive = os.isatty(fd)
    except (OSError, ValueError):
        interactive = False
    if not interactive or not echoctl:
        yield
        return
    try:
        old = termios.tcgetattr(fd)
    except termios.error:
        yield
        return
    new = list(old)
    new[3] &= ~echoctl
    termios.tcsetattr(fd, termios.TCSANOW, new)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, old)


def cool_readline(prompt: str) -> str | None:
    """Read one line after showing ``prompt``; return None at end of input.

    An interrupt abandons the line being typed and asks again.
    """
    with _no_control_echo():
        while True:
            try:
                return input(prompt)
            except EOFError:
                return None
            except KeyboardInterrupt:
                continue


def ask_command() -> str | None:
    """Show the shell prompt and return the command typed, or None on EOF."""
    return cool_readline(PROMPT)