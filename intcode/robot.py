"""Hull painting robot front-end.

The robot reports the colour of the panel under it as input (0 black,
1 white). The program answers with pairs: the colour to paint, then the turn
(0 left, 1 right), after which the robot moves one panel forward.
"""

from __future__ import annotations

from typing import Dict, Optional, Set, Tuple

from .errors import IntcodeError
from .io import ProgramIO

BLACK = 0
WHITE = 1
TURN_LEFT = 0
TURN_RIGHT = 1

Position = Tuple[int, int]

# Clockwise, y grows downward.
DIRECTIONS = ((0, -1), (1, 0), (0, 1), (-1, 0))


class PaintingRobotIO(ProgramIO):
    def __init__(self, *, start_colour: int = BLACK) -> None:
        self.position: Position = (0, 0)
        self.heading = 0
        self.panels: Dict[Position, int] = {}
        self.painted_panels: Set[Position] = set()
        if start_colour != BLACK:
            self.panels[self.position] = start_colour
        self._paint: Optional[int] = None

    def input(self) -> Optional[int]:
        return self.panels.get(self.position, BLACK)

    def output(self, value: int) -> None:
        if self._paint is None:
            if value not in (BLACK, WHITE):
                raise IntcodeError(f"invalid panel colour {value}", value=value)
            self._paint = value
            return
        if value not in (TURN_LEFT, TURN_RIGHT):
            raise IntcodeError(f"invalid turn direction {value}", value=value)
        self.panels[self.position] = self._paint
        self.painted_panels.add(self.position)
        self._paint = None
        self.heading = (self.heading + (1 if value == TURN_RIGHT else -1)) % len(DIRECTIONS)
        dx, dy = DIRECTIONS[self.heading]
        self.position = (self.position[0] + dx, self.position[1] + dy)

    @property
    def painted(self) -> int:
        """Number of panels painted at least once."""
        return len(self.painted_panels)

    def render(self) -> str:
        white = [pos for pos, colour in self.panels.items() if colour == WHITE]
        if not white:
            return ""
        xs = [x for x, _ in white]
        ys = [y for _, y in white]
        rows = []
        for y in range(min(ys), max(ys) + 1):
            row = "".join("#" if self.panels.get((x, y)) == WHITE else " " for x in range(min(xs), max(xs) + 1))
            rows.append(row.rstrip())
        return "\n".join(rows)
