"""Program text parsing and loading."""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from .errors import ProgramFormatError


def parse_program(text: str) -> List[int]:
    """Parse a comma separated line such as ``1,9,10,3,2,3,11,0,99,30,40,50``.

    Surrounding whitespace and a trailing comma are ignored.
    """
    stripped = text.strip()
    if not stripped:
        raise ProgramFormatError("program text is empty")
    tokens = [token.strip() for token in stripped.split(",")]
    if tokens and tokens[-1] == "":
        tokens.pop()
    program: List[int] = []
    for index, token in enumerate(tokens):
        try:
            program.append(int(token, 10))
        except ValueError as exc:
            raise ProgramFormatError(f"cell {index} is not an integer: {token!r}", value=index) from exc
    return program


def load_program(path: Union[str, Path]) -> List[int]:
    """Read the program on the first non-empty line of ``path``."""
    text = Path(path).read_text(encoding="utf-8")
    for line in text.splitlines():
        if line.strip():
            return parse_program(line)
    raise ProgramFormatError(f"{path}: no program found")
