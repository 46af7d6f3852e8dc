"""Exception types raised by the Intcode VM and its drivers."""

from __future__ import annotations

from typing import Optional


class IntcodeError(Exception):
    """Base class for VM failures.

    ``pc`` and ``value`` name the program counter and the offending cell (or
    address) when the failure happened while executing a program.
    """

    def __init__(self, message: str, *, pc: Optional[int] = None, value: Optional[int] = None) -> None:
        super().__init__(message)
        self.pc = pc
        self.value = value


class UnknownOpcodeError(IntcodeError):
    """Raised when the cell at ``pc`` does not hold a known opcode."""


class InvalidModeError(IntcodeError):
    """Raised for a mode digit outside {0, 1, 2} or an immediate write target."""


class InvalidAddressError(IntcodeError):
    """Raised when an instruction resolves to a negative memory address."""


class HaltedError(IntcodeError):
    """Raised when stepping a computer that already executed HALT."""


class StepLimitExceeded(IntcodeError):
    """Raised when ``run(max_steps=...)`` exhausts its step budget."""


class InputStarvedError(IntcodeError):
    """Raised by blocking drivers when a program waits for input that never comes."""


class ProgramFormatError(IntcodeError):
    """Raised when program text is not a comma separated list of integers."""


class NetworkError(IntcodeError):
    """Raised by the packet network for malformed traffic or runaway loops."""


__all__ = [
    "IntcodeError",
    "UnknownOpcodeError",
    "InvalidModeError",
    "InvalidAddressError",
    "HaltedError",
    "StepLimitExceeded",
    "InputStarvedError",
    "ProgramFormatError",
    "NetworkError",
]
