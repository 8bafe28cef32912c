"""Character stream and word reading for the command parser."""

from __future__ import annotations

from collections.abc import Container

from minishell.errors import ShellError
from minishell.variables import SYMBOL_CHARS, Variables

BLANKS = " \r\n\t"


class ParseError(ShellError):
    """A syntax error in a command line; its status is always 1."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"parse error: {reason}", 1)
        self.reason = reason


class CharStream:
    """A read cursor over a command line.

    The text ends at its first NUL character, if any. At the end of the
    text, :meth:`peek` and :meth:`pop` return an empty string.
    """

    def __init__(self, text: str) -> None:
        self._text = text.split("\0", 1)[0]
        self._pos = 0

    def peek(self) -> str:
        """Return the current character without consuming it."""
        if self._pos < len(self._text):
            return self._text[self._pos]
        return ""

    def pop(self) -> str:
        """Consume and return the current character."""
        char = self.peek()
        if char:
            self._pos += 1
        return char

    def skip_blank(self) -> None:
        """Skip spaces, tabs, carriage returns and newlines."""
        while (char := self.peek()) and char in BLANKS:
            self._pos += 1

    def read_until(self, stop_chars: Container[str]) -> str:
        """Consume and return characters up to one in ``stop_chars`` or the end."""
        start = self._pos
        while (char := self.peek()) and char not in stop_chars:
            self._pos += 1
        return self._text[start:self._pos]

    def read_only(self, charset: Container[str]) -> str:
        """Consume and return characters as long as they are in ``charset``."""
        start = self._pos
        while (char := self.peek()) and char in charset:
            self._pos += 1
        return self._text[start:self._pos]


def _read_variable(stream: CharStream, variables: Variables, status: int) -> str:
    """Read a variable reference after ``$`` and return its value."""
    if stream.peek() == "?":
        stream.pop()
        return str(status)
    name = stream.read_only(SYMBOL_CHARS)
    if not name:
        raise ParseError("variable name expected")
    return variables.get(name)


def _read_single_quoted(stream: CharStream) -> str:
    stream.pop()
    text = stream.read_until("'")
    if not stream.peek():
        raise ParseError("EOF unexpected")
    stream.pop()
    return text


def _read_double_quoted(stream: CharStream, variables: Variables, status: int) -> str:
    stream.pop()
    parts: list[str] = []
    while (char := stream.peek()) and char != '"':
        parts.append(stream.read_until('"$'))
        if stream.peek() == "$":
            stream.pop()
            parts.append(_read_variable(stream, variables, status))
    if not stream.peek():
        raise ParseError("EOF unexpected")
    stream.pop()
    return "".join(parts)


def _read_unquoted(
    stream: CharStream, stop_chars: str, variables: Variables, status: int
) -> str:
    word_stops = stop_chars + "$\"'"
    parts: list[str] = []
    while (char := stream.peek()) and char not in stop_chars and char not in "\"'":
        parts.append(stream.read_until(word_stops))
        if stream.peek() == "$":
            stream.pop()
            parts.append(_read_variable(stream, variables, status))
    return "".join(parts)


def read_string(
    stream: CharStream, stop_chars: str, variables: Variables, status: int
) -> str | None:
    """Read one word, expanding variables outside single quotes.

    The word ends at a blank or a character of ``stop_chars`` outside
    quotes. Return None if the stream is already at its end.
    """
    stops = stop_chars + BLANKS
    if not stream.peek():
        return None
    parts: list[str] = []
    while (char := stream.peek()) and char not in stops:
        if char == "'":
            parts.append(_read_single_quoted(stream))
        elif char == '"':
            parts.append(_read_double_quoted(stream, variables, status))
        else:
            parts.append(_read_unquoted(stream, stops, variables, status))
    return "".join(parts)