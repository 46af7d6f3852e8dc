"""Instruction decoding for the Intcode VM.

A cell such as ``1002`` carries the opcode in its last two digits (``02``,
multiply) and one addressing mode digit per parameter in the remaining
digits, read right to left. Missing digits mean position mode, so ``1002``
reads parameter 1 by position, parameter 2 as an immediate and writes the
result by position.

Instructions are decoded fresh on every step, so self-modifying programs
always see their latest code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple, Type, Union

from .errors import InvalidAddressError, InvalidModeError, UnknownOpcodeError
from .memory import Memory
from .opcodes import (
    MODE_IMMEDIATE,
    MODE_POSITION,
    MODE_RELATIVE,
    OPCODE_ARITY,
    OPCODE_WRITE_PARAM,
    OPCODES,
)


@dataclass(frozen=True)
class Position:
    """Operand is the address of the value."""

    address: int

    def resolve(self, memory: Memory) -> int:
        return memory.get(self.address)


@dataclass(frozen=True)
class Immediate:
    """Operand is the value itself."""

    value: int

    def resolve(self, memory: Memory) -> int:
        return self.value


@dataclass(frozen=True)
class Relative:
    """Operand plus the relative base is the address of the value."""

    address: int

    def resolve(self, memory: Memory) -> int:
        return memory.get(self.address)


Parameter = Union[Position, Immediate, Relative]


@dataclass(frozen=True)
class Add:
    a: Parameter
    b: Parameter
    out: int


@dataclass(frozen=True)
class Multiply:
    a: Parameter
    b: Parameter
    out: int


@dataclass(frozen=True)
class Input:
    to: int


@dataclass(frozen=True)
class Output:
    source: Parameter


@dataclass(frozen=True)
class JumpIfTrue:
    test: Parameter
    target: Parameter


@dataclass(frozen=True)
class JumpIfFalse:
    test: Parameter
    target: Parameter


@dataclass(frozen=True)
class LessThan:
    a: Parameter
    b: Parameter
    out: int


@dataclass(frozen=True)
class Equals:
    a: Parameter
    b: Parameter
    out: int


@dataclass(frozen=True)
class RelativeBaseOffset:
    by: Parameter


@dataclass(frozen=True)
class Halt:
    pass


Instruction = Union[
    Add,
    Multiply,
    Input,
    Output,
    JumpIfTrue,
    JumpIfFalse,
    LessThan,
    Equals,
    RelativeBaseOffset,
    Halt,
]

INSTRUCTION_TYPES: Dict[int, Type] = {
    OPCODES["ADD"]: Add,
    OPCODES["MUL"]: Multiply,
    OPCODES["IN"]: Input,
    OPCODES["OUT"]: Output,
    OPCODES["JNZ"]: JumpIfTrue,
    OPCODES["JZ"]: JumpIfFalse,
    OPCODES["LT"]: LessThan,
    OPCODES["EQ"]: Equals,
    OPCODES["ARB"]: RelativeBaseOffset,
    OPCODES["HALT"]: Halt,
}


def split_opcode(value: int, *, pc: int = 0) -> Tuple[int, List[int]]:
    """Split a cell into its opcode and its mode digits, least significant first.

    The mode list only holds the digits that are present; callers treat any
    parameter past its end as position mode.
    """
    if value < 0:
        raise UnknownOpcodeError(f"unknown opcode {value} at pc {pc}", pc=pc, value=value)
    opcode = value % 100
    modes: List[int] = []
    rest = value // 100
    while rest > 0:
        modes.append(rest % 10)
        rest //= 10
    return opcode, modes


def parameter_mode(modes: List[int], index: int) -> int:
    return modes[index] if index < len(modes) else MODE_POSITION


def _check_address(address: int, *, pc: int) -> int:
    if address < 0:
        raise InvalidAddressError(f"negative address {address} at pc {pc}", pc=pc, value=address)
    return address


def _read_parameter(mode: int, raw: int, relative_base: int, *, pc: int) -> Parameter:
    if mode == MODE_POSITION:
        return Position(_check_address(raw, pc=pc))
    if mode == MODE_IMMEDIATE:
        return Immediate(raw)
    if mode == MODE_RELATIVE:
        return Relative(_check_address(raw + relative_base, pc=pc))
    raise InvalidModeError(f"invalid parameter mode {mode} at pc {pc}", pc=pc, value=mode)


def _write_target(mode: int, raw: int, relative_base: int, *, pc: int) -> int:
    if mode == MODE_POSITION:
        return _check_address(raw, pc=pc)
    if mode == MODE_RELATIVE:
        return _check_address(raw + relative_base, pc=pc)
    raise InvalidModeError(f"invalid write target mode {mode} at pc {pc}", pc=pc, value=mode)


def decode(memory: Memory, pc: int, relative_base: int = 0) -> Instruction:
    """Decode the instruction stored at ``pc``."""
    cell = memory.get(pc)
    opcode, modes = split_opcode(cell, pc=pc)
    kind = INSTRUCTION_TYPES.get(opcode)
    if kind is None:
        raise UnknownOpcodeError(f"unknown opcode {opcode} at pc {pc}", pc=pc, value=cell)

    write_index = OPCODE_WRITE_PARAM[opcode]
    operands = []
    for index in range(OPCODE_ARITY[opcode]):
        mode = parameter_mode(modes, index)
        raw = memory.get(pc + index + 1)
        if index == write_index:
            operands.append(_write_target(mode, raw, relative_base, pc=pc))
        else:
            operands.append(_read_parameter(mode, raw, relative_base, pc=pc))
    return kind(*operands)
