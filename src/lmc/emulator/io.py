"""
Input/Output for the LMC Emulator
=================================

INP and OUT are the machine's only contact with the outside world. The
CPU talks to an object implementing IOPort:

- ``read_input()`` blocks until one integer is available
- ``write_output(value)`` emits the accumulator as one line

Two implementations are provided:

- ConsoleIO: interactive, prompts with ``lmc> `` and reads whitespace
  separated tokens from a text stream (stdin by default)
- ScriptedIO: feeds a fixed list of inputs and records every output,
  for tests and library use
"""

from collections import deque
from typing import Iterable, Optional, Protocol, TextIO
import re
import sys

import click

from lmc.errors import InputExhaustedError, InputFormatError


DEFAULT_PROMPT = "lmc> "

_INTEGER = re.compile(r"[+-]?[0-9]+")


class IOPort(Protocol):
    """Interface between the CPU and the outside world."""

    def read_input(self) -> int:
        """Block until one integer is available and return it."""
        ...

    def write_output(self, value: int) -> None:
        """Emit one output value."""
        ...


def parse_input_token(text: str) -> int:
    """
    Convert one input token to an integer.

    Raises:
        InputFormatError: If the token is not a base-10 integer
    """
    if _INTEGER.fullmatch(text) is None:
        raise InputFormatError(text)
    return int(text)


class ConsoleIO:
    """
    Interactive console I/O.

    Input is consumed one whitespace-delimited token per INP, so several
    values may be typed on one line.
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        prompt: str = DEFAULT_PROMPT,
    ):
        self._stdin = stdin
        self._prompt = prompt
        self._pending: deque[str] = deque()

    def read_input(self) -> int:
        """
        Prompt and read the next integer token.

        Raises:
            InputFormatError: If the token is not an integer
            InputExhaustedError: If the stream ends first
        """
        click.echo(self._prompt, nl=False)
        stream = self._stdin if self._stdin is not None else sys.stdin
        while not self._pending:
            line = stream.readline()
            if not line:
                raise InputExhaustedError()
            self._pending.extend(line.split())
        return parse_input_token(self._pending.popleft())

    def write_output(self, value: int) -> None:
        """Print value on its own line."""
        click.echo(str(value))


class ScriptedIO:
    """
    Predetermined input, recorded output.

    Example:
        >>> io = ScriptedIO([7])
        >>> io.read_input()
        7
        >>> io.write_output(7)
        >>> io.outputs
        [7]
    """

    def __init__(self, inputs: Iterable[int | str] = ()):
        self._inputs: deque[int | str] = deque(inputs)
        self.outputs: list[int] = []
        self.reads = 0

    def feed(self, *values: int | str) -> None:
        """Queue more input values."""
        self._inputs.extend(values)

    def read_input(self) -> int:
        """
        Return the next queued value.

        Raises:
            InputFormatError: If a queued string is not an integer
            InputExhaustedError: If the queue is empty
        """
        if not self._inputs:
            raise InputExhaustedError()
        self.reads += 1
        value = self._inputs.popleft()
        if isinstance(value, str):
            return parse_input_token(value.strip())
        return value

    def write_output(self, value: int) -> None:
        """Record an output value."""
        self.outputs.append(value)
