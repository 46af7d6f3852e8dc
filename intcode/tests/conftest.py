"""
Pytest configuration and fixtures for Intcode tests.
"""
from pathlib import Path
from typing import Callable, List

import pytest

QUINE = [109, 1, 204, -1, 1001, 100, 1, 100, 1008, 100, 16, 101, 1006, 101, 0, 99]

# Outputs 999 if the input is below 8, 1000 if equal to 8, 1001 if above.
COMPARE_TO_8 = [
    3, 21, 1008, 21, 8, 20, 1005, 20, 22, 107, 8, 21, 20, 1006, 20, 31,
    1106, 0, 36, 98, 0, 0, 1002, 21, 125, 20, 4, 20, 1105, 1, 46, 104,
    999, 1105, 1, 46, 1101, 1000, 1, 20, 4, 20, 1105, 1, 46, 98, 99,
]


@pytest.fixture
def quine() -> List[int]:
    return list(QUINE)


@pytest.fixture
def compare_to_8() -> List[int]:
    return list(COMPARE_TO_8)


@pytest.fixture
def program_file(tmp_path: Path) -> Callable[[List[int]], Path]:
    """Write a program to a file the way puzzle inputs are stored."""

    def _write(program: List[int], name: str = "input.txt") -> Path:
        path = tmp_path / name
        path.write_text(",".join(str(value) for value in program) + "\n", encoding="utf-8")
        return path

    return _write
