"""Shell variables: an ordered table of names, values and export flags."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

SYMBOL_CHARS = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_0123456789"
)


def name_is_valid(name: str) -> bool:
    """Return True if every character of ``name`` may appear in a variable name."""
    return all(char in SYMBOL_CHARS for char in name)


@dataclass
class Variable:
    """One shell variable."""

    name: str
    value: str = ""
    exported: bool = False


class Variables:
    """Ordered shell variables; an undefined variable reads as empty."""

    def __init__(self) -> None:
        self._items: list[Variable] = []

    @classmethod
    def from_envp(cls, envp: Iterable[str]) -> Variables:
        """Build exported variables from ``NAME=value`` entries.

        Entries are split on ``=`` with empty pieces dropped; entries with
        fewer than two pieces are ignored and only the second piece is kept
        as the value.
        """
        variables = cls()
        for entry in envp:
            parts = [part for part in entry.split("=") if part]
            if len(parts) < 2:
                continue
            variables._items.append(Variable(parts[0], parts[1], True))
        return variables

    def _find(self, name: str) -> Variable:
        """Return the variable ``name``, creating an empty one if needed.

        While searching, empty variables that are not exported are dropped.
        """
        for variable in list(self._items):
            if variable.name == name:
                return variable
            if variable.value == "" and not variable.exported:
                self.unset(variable.name)
        variable = Variable(name)
        self._items.append(variable)
        return variable

    def set(self, name: str, value: str) -> None:
        """Give ``name`` a new value, keeping its export flag."""
        self._find(name).value = value

    def get(self, name: str) -> str:
        """Return the value of ``name``, or an empty string if undefined."""
        return self._find(name).value

    def export(self, name: str) -> None:
        """Mark ``name`` as exported."""
        self._find(name).exported = True

    def unset(self, name: str) -> None:
        """Remove every variable called ``name``."""
        self._items = [item for item in self._items if item.name != name]

    def envp(self) -> list[str]:
        """Return ``NAME=value`` strings for the exported variables, in order."""
        return [f"{item.name}={item.value}" for item in self._items if item.exported]

    def count_exported(self) -> int:
        """Return the number of exported variables."""
        return sum(1 for item in self._items if item.exported)

    def __iter__(self) -> Iterator[Variable]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)