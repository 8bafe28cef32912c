"""Error types and error reporting for the shell."""

from __future__ import annotations

import sys
from typing import TextIO


class ShellError(Exception):
    """An error reported to the user; the shell keeps running."""

    def __init__(self, message: str, status: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class FatalError(ShellError):
    """An error after which the shell must exit with ``status``."""


def report_error(message: str, stream: TextIO | None = None) -> None:
    """Write ``minishell: <message>`` on its own line."""
    out = sys.stderr if stream is None else stream
    out.write(f"minishell: {message}\n")
    out.flush()


def report_os_error(error: OSError, stream: TextIO | None = None) -> None:
    """Write the system description of ``error`` prefixed with ``minishell``."""
    description = error.strerror or str(error)
    report_error(description, stream)