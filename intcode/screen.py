"""Tile screen front-end.

Programs draw by emitting ``(x, y, tile)`` triplets. The special position
``(-1, 0)`` carries the score instead of a tile. Input is the joystick:
``-1`` left, ``0`` neutral, ``1`` right, which by default follows the ball.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .errors import IntcodeError
from .io import ProgramIO

LOGGER = logging.getLogger("intcode.screen")

TILE_EMPTY = 0
TILE_WALL = 1
TILE_BLOCK = 2
TILE_PADDLE = 3
TILE_BALL = 4

TILE_CHARS: Dict[int, str] = {
    TILE_EMPTY: " ",
    TILE_WALL: "#",
    TILE_BLOCK: "=",
    TILE_PADDLE: "-",
    TILE_BALL: "o",
}

SCORE_POSITION = (-1, 0)

Position = Tuple[int, int]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class ScreenIO(ProgramIO):
    """Decodes the triplet stream into a board and answers with joystick moves."""

    def __init__(self, *, joystick: Optional[Callable[["ScreenIO"], int]] = None) -> None:
        self.tiles: Dict[Position, int] = {}
        self.score = 0
        self.ball: Optional[Position] = None
        self.paddle: Optional[Position] = None
        self._joystick = joystick or ScreenIO.follow_ball
        self._pending: List[int] = []

    @staticmethod
    def follow_ball(screen: "ScreenIO") -> int:
        """Move the paddle toward the ball's column."""
        if screen.ball is None or screen.paddle is None:
            return 0
        return _sign(screen.ball[0] - screen.paddle[0])

    def input(self) -> Optional[int]:
        return self._joystick(self)

    def output(self, value: int) -> None:
        self._pending.append(value)
        if len(self._pending) < 3:
            return
        x, y, tile = self._pending
        self._pending = []
        if (x, y) == SCORE_POSITION:
            self.score = tile
            LOGGER.debug("score %d", tile)
            return
        if tile not in TILE_CHARS:
            raise IntcodeError(f"invalid tile id {tile} at ({x}, {y})", value=tile)
        self.tiles[(x, y)] = tile
        if tile == TILE_BALL:
            self.ball = (x, y)
        elif tile == TILE_PADDLE:
            self.paddle = (x, y)

    def count(self, tile: int) -> int:
        return sum(1 for value in self.tiles.values() if value == tile)

    def render(self) -> str:
        if not self.tiles:
            return f"Score: {self.score}"
        xs = [x for x, _ in self.tiles]
        ys = [y for _, y in self.tiles]
        rows = [f"Score: {self.score}"]
        for y in range(min(ys), max(ys) + 1):
            row = "".join(TILE_CHARS[self.tiles.get((x, y), TILE_EMPTY)] for x in range(min(xs), max(xs) + 1))
            rows.append(row.rstrip())
        return "\n".join(rows)
