"""Shared opcode definitions for the Intcode VM.

Keeping the canonical table in a single module prevents drift between the
decoder and the disassembler. Each entry lists the mnemonic, the numeric
opcode, the number of parameters, and the index of the parameter that names
a write target (``None`` when the instruction writes nothing).
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

MODE_POSITION = 0
MODE_IMMEDIATE = 1
MODE_RELATIVE = 2

# Ordered list so docs and tooling can iterate in a stable order.
OPCODE_LIST: Tuple[Tuple[str, int, int, Optional[int]], ...] = (
    ("ADD", 1, 3, 2),
    ("MUL", 2, 3, 2),
    ("IN", 3, 1, 0),
    ("OUT", 4, 1, None),
    ("JNZ", 5, 2, None),
    ("JZ", 6, 2, None),
    ("LT", 7, 3, 2),
    ("EQ", 8, 3, 2),
    ("ARB", 9, 1, None),
    ("HALT", 99, 0, None),
)

OPCODES: Dict[str, int] = {mnemonic: opcode for mnemonic, opcode, _, _ in OPCODE_LIST}
OPCODE_NAMES: Dict[int, str] = {opcode: mnemonic for mnemonic, opcode, _, _ in OPCODE_LIST}
OPCODE_ARITY: Dict[int, int] = {opcode: arity for _, opcode, arity, _ in OPCODE_LIST}
OPCODE_WRITE_PARAM: Dict[int, Optional[int]] = {opcode: write for _, opcode, _, write in OPCODE_LIST}

__all__ = [
    "MODE_POSITION",
    "MODE_IMMEDIATE",
    "MODE_RELATIVE",
    "OPCODE_LIST",
    "OPCODES",
    "OPCODE_NAMES",
    "OPCODE_ARITY",
    "OPCODE_WRITE_PARAM",
    "instruction_size",
]


def instruction_size(opcode: int) -> int:
    """Number of cells an instruction occupies, opcode cell included."""

    return OPCODE_ARITY[opcode] + 1
