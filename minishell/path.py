"""Locating programs through the PATH variable."""

from __future__ import annotations

import os

from minishell.variables import Variables


def search_path(variables: Variables, program: str) -> str | None:
    """Return the path of ``program`` to run, or None if there is none.

    A program containing ``/`` is used as is if executable. Otherwise the
    directories of ``$PATH`` are tried in order and the first match wins.
    """
    if "/" in program:
        return program if os.access(program, os.X_OK) else None
    for directory in filter(None, variables.get("PATH").split(":")):
        candidate = f"{directory}/{program}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None