import pytest

from intcode.computer import Computer
from intcode.errors import IntcodeError
from intcode.screen import TILE_BALL, TILE_BLOCK, TILE_PADDLE, ScreenIO

DRAW = [
    104, 1, 104, 2, 104, 3,
    104, 5, 104, 2, 104, 4,
    104, -1, 104, 0, 104, 12345,
    99,
]

# Draws a paddle at x=1 and a ball at x=4, then reports the joystick as the score.
JOYSTICK = [
    104, 1, 104, 0, 104, 3,
    104, 4, 104, 0, 104, 4,
    3, 100,
    104, -1, 104, 0, 4, 100,
    99,
]


def test_triplets_paint_board_and_score():
    screen = ScreenIO()
    Computer(DRAW, io=screen).run()
    assert screen.tiles == {(1, 2): TILE_PADDLE, (5, 2): TILE_BALL}
    assert screen.score == 12345
    assert screen.paddle == (1, 2)
    assert screen.ball == (5, 2)
    assert screen.count(TILE_BLOCK) == 0
    assert screen.render() == "Score: 12345\n-   o"


def test_joystick_follows_ball():
    screen = ScreenIO()
    Computer(JOYSTICK, io=screen).run()
    assert screen.score == 1


def test_custom_joystick_strategy():
    screen = ScreenIO(joystick=lambda _: -1)
    Computer(JOYSTICK, io=screen).run()
    assert screen.score == -1


def test_joystick_neutral_without_ball():
    assert ScreenIO.follow_ball(ScreenIO()) == 0


def test_invalid_tile_rejected():
    with pytest.raises(IntcodeError):
        Computer([104, 0, 104, 0, 104, 9, 99], io=ScreenIO()).run()
