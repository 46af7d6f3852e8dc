"""ASCII front-end: drives programs that speak text through IN/OUT.

Output values below 128 are characters. Anything larger is a result value
that cannot be printed (a hull damage report, a dust count), and is kept in
:attr:`AsciiIO.results` instead of the text buffer.
"""

from __future__ import annotations

import collections
import logging
from typing import Any, Deque, Iterable, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from .computer import Computer
from .errors import IntcodeError
from .io import ProgramIO

LOGGER = logging.getLogger("intcode.ascii")

ASCII_LIMIT = 128


class AsciiIO(ProgramIO):
    """Queues typed lines as character codes and collects printed text."""

    def __init__(self) -> None:
        self.pending: Deque[int] = collections.deque()
        self.results: List[int] = []
        self._text: List[str] = []

    def send_line(self, line: str) -> None:
        """Queue ``line`` followed by a newline."""
        text = line.rstrip("\n") + "\n"
        LOGGER.debug("send %r", text)
        self.pending.extend(ord(char) for char in text)

    def send_lines(self, lines: List[str]) -> None:
        for line in lines:
            self.send_line(line)

    def input(self) -> Optional[int]:
        if not self.pending:
            return None
        return self.pending.popleft()

    def output(self, value: int) -> None:
        if 0 <= value < ASCII_LIMIT:
            self._text.append(chr(value))
        else:
            LOGGER.debug("non-ascii output %d", value)
            self.results.append(value)

    def take_text(self) -> str:
        """Return and clear the text printed since the last call."""
        text = "".join(self._text)
        self._text.clear()
        return text

    @property
    def result(self) -> Optional[int]:
        return self.results[-1] if self.results else None


def run_script(
    program: List[int],
    lines: List[str],
    *,
    patches: Iterable[Tuple[int, int]] = (),
    **kwargs: Any,
) -> AsciiIO:
    """Run ``program`` with every line of ``lines`` queued up front.

    Used for scripted drones such as springscript programs, which take their
    whole instruction listing before producing output.
    """
    io = AsciiIO()
    io.send_lines(lines)
    computer = Computer(program, io=io, **kwargs)
    for address, value in patches:
        computer.patch(address, value)
    computer.run()
    if computer.is_waiting():
        LOGGER.warning("%s still waiting for input after script", computer.name)
    return io


class AsciiTerminal:
    """Interactive prompt_toolkit session in front of an ASCII program.

    Each prompt answer is sent as one line. ``session`` only needs a
    ``prompt(message)`` method, so scripted sessions can stand in for a
    terminal.
    """

    def __init__(self, computer: Computer, *, session: Optional[Any] = None, echo=print) -> None:
        if computer.io is None:
            computer.io = AsciiIO()
        if not isinstance(computer.io, AsciiIO):
            raise IntcodeError("AsciiTerminal needs a computer wired to AsciiIO")
        self.computer = computer
        self.io: AsciiIO = computer.io
        self._owns_session = session is None
        self.session = session
        self.echo = echo

    def _prompt(self) -> str:
        if not self._owns_session:
            return self.session.prompt("> ")
        if self.session is None:
            self.session = PromptSession(history=InMemoryHistory())
        with patch_stdout():
            return self.session.prompt("> ")

    def run(self) -> Optional[int]:
        """Alternate between running the program and prompting until it halts.

        Returns the last non-ASCII result, or ``None`` when the program only
        printed text or the user closed the prompt.
        """
        while True:
            self.computer.run()
            text = self.io.take_text()
            if text:
                self.echo(text.rstrip("\n"))
            if self.computer.is_done():
                return self.io.result
            try:
                line = self._prompt()
            except (EOFError, KeyboardInterrupt):
                self.echo("")
                return self.io.result
            self.io.send_line(line)
