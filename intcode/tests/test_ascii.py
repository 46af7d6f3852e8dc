import pytest

from intcode.ascii import AsciiIO, AsciiTerminal, run_script
from intcode.computer import Computer
from intcode.errors import IntcodeError
from intcode.io import ListIO

# Echoes one line, then reports 1000 as a non-ASCII result.
ECHO = [3, 100, 4, 100, 1008, 100, 10, 101, 1006, 101, 0, 104, 1000, 99]

# Prints "?", echoes one line, then reports 1000.
PROMPT_ECHO = [104, 63, 104, 10, 3, 100, 4, 100, 1008, 100, 10, 101, 1006, 101, 4, 104, 1000, 99]


class ScriptedSession:
    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def prompt(self, message):
        self.prompts.append(message)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def test_ascii_io_splits_text_and_results():
    io = AsciiIO()
    for value in [72, 105, 10, 19348375]:
        io.output(value)
    assert io.take_text() == "Hi\n"
    assert io.take_text() == ""
    assert io.results == [19348375]
    assert io.result == 19348375


def test_send_line_appends_newline():
    io = AsciiIO()
    io.send_line("NOT A J")
    assert [io.input() for _ in range(8)] == [ord(c) for c in "NOT A J\n"]
    assert io.input() is None


def test_run_script_echoes_and_reports_result():
    io = run_script(ECHO, ["hi"])
    assert io.take_text() == "hi\n"
    assert io.result == 1000


def test_terminal_prompts_until_halt():
    echoed = []
    session = ScriptedSession(["ok"])
    computer = Computer(PROMPT_ECHO, io=AsciiIO())
    result = AsciiTerminal(computer, session=session, echo=echoed.append).run()
    assert result == 1000
    assert echoed == ["?", "ok"]
    assert session.prompts == ["> "]
    assert computer.is_done()


def test_terminal_stops_on_eof():
    echoed = []
    computer = Computer(PROMPT_ECHO)
    result = AsciiTerminal(computer, session=ScriptedSession([]), echo=echoed.append).run()
    assert result is None
    assert echoed == ["?", ""]
    assert computer.is_waiting()


def test_terminal_requires_ascii_io():
    with pytest.raises(IntcodeError):
        AsciiTerminal(Computer(ECHO, io=ListIO()))
