import pytest

from intcode.amplifiers import chain_output, looped_output, max_chain_output, max_looped_output
from intcode.errors import IntcodeError

SERIES_A = [3, 15, 3, 16, 1002, 16, 10, 16, 1, 16, 15, 15, 4, 15, 99, 0, 0]
SERIES_B = [
    3, 23, 3, 24, 1002, 24, 10, 24, 1002, 23, -1, 23,
    101, 5, 23, 23, 1, 24, 23, 23, 4, 23, 99, 0, 0,
]
SERIES_C = [
    3, 31, 3, 32, 1002, 32, 10, 32, 1001, 31, -2, 31, 1007, 31, 0, 33,
    1002, 33, 7, 33, 1, 33, 31, 31, 1, 32, 31, 31, 4, 31, 99, 0, 0, 0,
]
FEEDBACK_A = [
    3, 26, 1001, 26, -4, 26, 3, 27, 1002, 27, 2, 27, 1, 27, 26,
    27, 4, 27, 1001, 28, -1, 28, 1005, 28, 6, 99, 0, 0, 5,
]
FEEDBACK_B = [
    3, 52, 1001, 52, -5, 52, 3, 53, 1, 52, 56, 54, 1007, 54, 5, 55, 1005, 55, 26, 1001, 54,
    -5, 54, 1105, 1, 12, 1, 53, 54, 53, 1008, 54, 0, 55, 1001, 55, 1, 55, 2, 53, 55, 53, 4,
    53, 1001, 56, -1, 56, 1005, 56, 6, 99, 0, 0, 0, 0, 10,
]


@pytest.mark.parametrize(
    "program, phases, expected",
    [
        (SERIES_A, (4, 3, 2, 1, 0), 43210),
        (SERIES_B, (0, 1, 2, 3, 4), 54321),
        (SERIES_C, (1, 0, 4, 3, 2), 65210),
    ],
)
def test_chain_output(program, phases, expected):
    assert chain_output(program, phases) == expected


def test_max_chain_output_finds_phases():
    assert max_chain_output(SERIES_A) == (43210, (4, 3, 2, 1, 0))


@pytest.mark.parametrize(
    "program, phases, expected",
    [
        (FEEDBACK_A, (9, 8, 7, 6, 5), 139629729),
        (FEEDBACK_B, (9, 7, 8, 5, 6), 18216),
    ],
)
def test_looped_output(program, phases, expected):
    assert looped_output(program, phases) == expected


def test_max_looped_output_finds_phases():
    assert max_looped_output(FEEDBACK_A) == (139629729, (9, 8, 7, 6, 5))


# Echoes its first signal plus one, then swallows the next signal and waits.
STALLS_AFTER_ONE = [3, 100, 3, 101, 101, 1, 101, 101, 4, 101, 3, 101, 3, 102, 99]


def test_looped_amplifier_that_stops_answering_is_an_error():
    with pytest.raises(IntcodeError) as exc:
        looped_output(STALLS_AFTER_ONE, (5,))
    assert "ampA produced no output" in str(exc.value)


def test_silent_amplifier_is_an_error():
    with pytest.raises(IntcodeError):
        chain_output([3, 0, 3, 0, 99], (0,))
