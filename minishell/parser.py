"""Turning a command line into program calls and redirections."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field

from minishell.errors import ShellError
from minishell.lexer import CharStream, ParseError, read_string
from minishell.variables import SYMBOL_CHARS, Variables

HEREDOC_PROMPT = "\x1b[38;5;33m( 'o')> \x1b[0m"
OPERATORS = "<>|"

LineReader = Callable[[str], "str | None"]


@dataclass
class Call:
    """A program name with its arguments; ``argv[0]`` is the program."""

    argv: list[str]

    @property
    def program(self) -> str:
        return self.argv[0]

    @property
    def argc(self) -> int:
        return len(self.argv)


@dataclass
class Command:
    """A parsed command line: a pipeline of calls and its redirections."""

    calls: list[Call] = field(default_factory=list)
    empty: bool = False
    input_fd: int = 0
    output_fd: int = 1

    def close(self) -> None:
        """Close redirection descriptors opened by the parser."""
        if self.input_fd != 0:
            os.close(self.input_fd)
            self.input_fd = 0
        if self.output_fd != 1:
            os.close(self.output_fd)
            self.output_fd = 1

    def __enter__(self) -> Command:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class RedirectionError(ShellError):
    """A redirection file could not be opened; the status is its errno."""

    def __init__(self, filename: str, error: OSError) -> None:
        super().__init__(f"{filename}: {error.strerror or error}", error.errno or 1)
        self.filename = filename


def _open(path: str, flags: int) -> int:
    try:
        return os.open(path, flags, 0o666)
    except OSError as error:
        raise RedirectionError(path, error) from error


class _Parser:
    def __init__(self, text: str, variables: Variables, status: int) -> None:
        self.stream = CharStream(text)
        self.variables = variables
        self.status = status
        self.command = Command()
        self.heredoc: str | None = None

    def _word(self) -> str | None:
        return read_string(self.stream, OPERATORS, self.variables, self.status)

    def parse(self) -> None:
        stream = self.stream
        stream.skip_blank()
        while char := stream.peek():
            if char in OPERATORS:
                self._read_operator(char)
            elif not self.command.calls:
                self._read_call()
            else:
                raise ParseError("'|', '>' or '<'' expected")
            stream.skip_blank()

    def _read_operator(self, char: str) -> None:
        self.stream.pop()
        self.stream.skip_blank()
        if char == "|":
            if not self.command.calls:
                raise ParseError("pipe before any call to a program")
            self._read_call()
        elif char == ">":
            self._read_output()
        else:
            self._read_input()

    def _read_call(self) -> None:
        argv: list[str] = []
        while (char := self.stream.peek()) and char not in OPERATORS:
            word = self._word()
            if word is None:
                raise ParseError("EOF unexpected")
            argv.append(word)
            self.stream.skip_blank()
        if not argv:
            raise ParseError("program name expected")
        self.command.calls.append(Call(argv))

    def _read_input(self) -> None:
        if self.command.input_fd != 0:
            raise ParseError("several input files")
        if not self.stream.peek():
            raise ParseError("EOF unexpected")
        heredoc = self.stream.peek() == "<"
        if heredoc:
            self.stream.pop()
        self.stream.skip_blank()
        word = self._word()
        if word is None:
            raise ParseError("EOF unexpected")
        if heredoc:
            self.heredoc = word
        else:
            self.command.input_fd = _open(word, os.O_RDONLY)

    def _read_output(self) -> None:
        if self.command.output_fd != 1:
            raise ParseError("several output files")
        if not self.stream.peek():
            raise ParseError("EOF unexpected")
        mode = os.O_TRUNC
        if self.stream.peek() == ">":
            self.stream.pop()
            mode = os.O_APPEND
        self.stream.skip_blank()
        word = self._word()
        if word is None:
            raise ParseError("EOF unexpected")
        self.command.output_fd = _open(word, os.O_WRONLY | os.O_CREAT | mode)


def _parse_assignment(text: str, variables: Variables, status: int) -> bool:
    """Apply ``NAME=value`` if the whole line is one; return whether it was."""
    stream = CharStream(text)
    stream.skip_blank()
    name = stream.read_only(SYMBOL_CHARS)
    if not name or stream.pop() != "=":
        return False
    value = read_string(stream, OPERATORS, variables, status) or ""
    stream.skip_blank()
    if stream.peek():
        return False
    variables.set(name, value)
    return True


def _fill_heredoc(command: Command, delimiter: str, read_line: LineReader) -> None:
    """Ask for heredoc lines and make them the command's input.

    A None line is ignored; reading stops at the delimiter line.
    """
    read_fd, write_fd = os.pipe()
    if command.input_fd != 0:
        os.close(command.input_fd)
    command.input_fd = read_fd
    terminator = delimiter + "\n"
    try:
        with os.fdopen(write_fd, "w", encoding="utf-8") as pipe:
            while True:
                line = read_line(HEREDOC_PROMPT)
                if line is None:
                    continue
                if line in (delimiter, terminator):
                    break
                pipe.write(line + "\n")
    except OSError as error:
        raise ShellError(error.strerror or str(error), error.errno or 1) from error


def parse_command(
    text: str, variables: Variables, status: int, read_heredoc_line: LineReader
) -> Command:
    """Parse a command line.

    A line that is only ``NAME=value`` sets the variable and, like a blank
    line, gives an empty command. Heredoc lines are asked for with
    ``read_heredoc_line(prompt)``. Raises :class:`ParseError` on bad syntax
    and :class:`RedirectionError` when a file cannot be opened.
    """
    if _parse_assignment(text, variables, status):
        return Command(empty=True)
    probe = CharStream(text)
    probe.skip_blank()
    if not probe.peek():
        return Command(empty=True)
    parser = _Parser(text, variables, status)
    command = parser.command
    try:
        parser.parse()
        if parser.heredoc is not None:
            _fill_heredoc(command, parser.heredoc, read_heredoc_line)
    except BaseException:
        command.close()
        raise
    return command