"""Text rendering of Intcode instructions for traces and listings."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .decoder import parameter_mode, split_opcode
from .errors import IntcodeError
from .memory import Memory
from .opcodes import (
    MODE_IMMEDIATE,
    MODE_POSITION,
    MODE_RELATIVE,
    OPCODE_ARITY,
    OPCODE_NAMES,
    OPCODE_WRITE_PARAM,
    instruction_size,
)


def format_operand(mode: int, raw: int, *, relative_base: Optional[int] = None) -> str:
    """Render one operand: ``[9]`` by position, ``5`` immediate, ``[rb+3]`` relative.

    With a known ``relative_base`` the effective address is appended.
    """
    if mode == MODE_POSITION:
        return f"[{raw}]"
    if mode == MODE_IMMEDIATE:
        return str(raw)
    if mode == MODE_RELATIVE:
        text = f"[rb{raw:+d}]"
        if relative_base is not None:
            text += f"={relative_base + raw}"
        return text
    return f"?{mode}:{raw}"


def format_operands(
    opcode: int,
    modes: Sequence[int],
    raws: Sequence[int],
    *,
    relative_base: Optional[int] = None,
) -> str:
    """Render the operand string for a decoded opcode, write target last as ``-> x``."""
    write_index = OPCODE_WRITE_PARAM.get(opcode)
    sources: List[str] = []
    target = ""
    for index, raw in enumerate(raws):
        text = format_operand(parameter_mode(list(modes), index), raw, relative_base=relative_base)
        if index == write_index:
            target = f"-> {text}"
        else:
            sources.append(text)
    if target:
        sources.append(target)
    return " ".join(sources)


def format_at(memory: Memory, pc: int, *, relative_base: Optional[int] = None) -> str:
    """Render the instruction stored at ``pc``, or ``DATA n`` when it does not decode."""
    cell = memory.get(pc)
    try:
        opcode, modes = split_opcode(cell, pc=pc)
    except IntcodeError:
        return f"DATA {cell}"
    mnemonic = OPCODE_NAMES.get(opcode)
    if mnemonic is None:
        return f"DATA {cell}"
    raws = [memory.get(pc + index + 1) for index in range(OPCODE_ARITY[opcode])]
    operands = format_operands(opcode, modes, raws, relative_base=relative_base)
    return f"{mnemonic} {operands}" if operands else mnemonic


def disassemble(program: Iterable[int]) -> List[Dict[str, object]]:
    """Walk ``program`` linearly and return one listing entry per instruction.

    Cells that do not decode, or whose operands would run past the end of the
    program, are listed as single ``DATA`` cells.
    """
    cells = list(program)
    memory = Memory(cells)
    listing: List[Dict[str, object]] = []
    pc = 0
    while pc < len(cells):
        cell = cells[pc]
        text = format_at(memory, pc)
        size = 1
        if not text.startswith("DATA"):
            opcode = cell % 100
            size = instruction_size(opcode)
            if pc + size > len(cells):
                text = f"DATA {cell}"
                size = 1
        listing.append({"pc": pc, "cells": cells[pc:pc + size], "text": text})
        pc += size
    return listing


def format_listing(listing: Iterable[Dict[str, object]]) -> str:
    lines = []
    for entry in listing:
        cells = ",".join(str(value) for value in entry["cells"])  # type: ignore[union-attr]
        lines.append(f"{entry['pc']:>5}: {entry['text']:<36} ; {cells}")
    return "\n".join(lines)
