"""State shared by the whole shell session."""

from __future__ import annotations

from dataclasses import dataclass, field

from minishell.variables import Variables


@dataclass
class ShellState:
    """Variables, last exit status and the exit request of a session."""

    variables: Variables = field(default_factory=Variables)
    status: int = 0
    exit: bool = False