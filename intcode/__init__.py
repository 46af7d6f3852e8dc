"""
Intcode virtual machine package.

One engine (:class:`Computer`) with sparse memory, a decoder for the
position/immediate/relative parameter modes and a suspend/resume lifecycle,
plus the I/O strategies and schedulers built on it. Use ``python -m intcode``
or the ``intcode`` script to run a program file.
"""

from __future__ import annotations

from .computer import Computer, ExecutionState
from .errors import (
    HaltedError,
    InputStarvedError,
    IntcodeError,
    InvalidAddressError,
    InvalidModeError,
    NetworkError,
    ProgramFormatError,
    StepLimitExceeded,
    UnknownOpcodeError,
)
from .io import CallbackIO, ConstantIO, ListIO, ProgramIO
from .loader import load_program, parse_program
from .memory import Memory

__all__ = [
    "CallbackIO",
    "Computer",
    "ConstantIO",
    "ExecutionState",
    "HaltedError",
    "InputStarvedError",
    "IntcodeError",
    "InvalidAddressError",
    "InvalidModeError",
    "ListIO",
    "Memory",
    "NetworkError",
    "ProgramFormatError",
    "ProgramIO",
    "StepLimitExceeded",
    "UnknownOpcodeError",
    "load_program",
    "parse_program",
]
__version__ = "0.1.0"
