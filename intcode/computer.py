"""The Intcode computer: registers, memory and the fetch/decode/execute loop."""

from __future__ import annotations

import collections
import copy
import enum
import logging
from pathlib import Path
from typing import Deque, Iterable, List, Optional, Tuple, Union

from .decoder import (
    Add,
    Equals,
    Halt,
    Input,
    Instruction,
    JumpIfFalse,
    JumpIfTrue,
    LessThan,
    Multiply,
    Output,
    RelativeBaseOffset,
    decode,
)
from .disassembler import format_at
from .errors import HaltedError, InputStarvedError, IntcodeError, StepLimitExceeded
from .io import ProgramIO
from .loader import load_program, parse_program
from .memory import Memory

LOGGER = logging.getLogger("intcode.computer")


class ExecutionState(enum.Enum):
    RUNNABLE = "runnable"
    WAITING_FOR_INPUT = "waiting_for_input"
    DONE = "done"


class Computer:
    """One Intcode machine.

    Input values are taken from the computer's own FIFO queue first and from
    the attached ``io`` capability second. Output values go to ``io`` when one
    is attached and are queued otherwise. An IN instruction that finds no
    value leaves ``pc`` untouched and suspends the computer in
    ``WAITING_FOR_INPUT``; feeding a value with :meth:`input` makes it
    runnable again.
    """

    def __init__(
        self,
        program: Iterable[int],
        *,
        io: Optional[ProgramIO] = None,
        trace: bool = False,
        name: Optional[str] = None,
    ) -> None:
        self.program: Tuple[int, ...] = tuple(int(value) for value in program)
        self.io = io
        self.trace = trace
        self.name = name or "intcode"
        self.reset()

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "Computer":
        return cls(parse_program(text), **kwargs)

    @classmethod
    def load(cls, path: Union[str, Path], **kwargs) -> "Computer":
        return cls(load_program(path), **kwargs)

    def __repr__(self) -> str:
        return (
            f"Computer(name={self.name!r}, pc={self.pc}, relative_base={self.relative_base}, "
            f"state={self.state.value}, steps={self.steps})"
        )

    # ------------------------------------------------------------------
    # Lifecycle

    def reset(self) -> None:
        """Restore the original program and clear registers and queues."""
        self.memory = Memory(self.program)
        self.pc = 0
        self.relative_base = 0
        self.state = ExecutionState.RUNNABLE
        self.steps = 0
        self.inputs: Deque[int] = collections.deque()
        self.outputs: Deque[int] = collections.deque()
        self._last_output: Optional[int] = None
        self._emitted = 0

    def clone(self) -> "Computer":
        """Return an independent copy. The ``io`` capability is shared, not copied."""
        other = copy.copy(self)
        other.memory = self.memory.copy()
        other.inputs = collections.deque(self.inputs)
        other.outputs = collections.deque(self.outputs)
        return other

    def patch(self, address: int, value: int) -> None:
        self.memory.set(address, value)

    def is_runnable(self) -> bool:
        return self.state is ExecutionState.RUNNABLE

    def is_waiting(self) -> bool:
        return self.state is ExecutionState.WAITING_FOR_INPUT

    def is_done(self) -> bool:
        return self.state is ExecutionState.DONE

    # ------------------------------------------------------------------
    # Queues

    def input(self, value: int) -> None:
        """Queue ``value`` for the next IN instruction."""
        self.inputs.append(int(value))
        if self.state is ExecutionState.WAITING_FOR_INPUT:
            self.state = ExecutionState.RUNNABLE

    def text_input(self, text: str) -> None:
        """Queue every character of ``text`` as its character code."""
        LOGGER.debug("%s text input %r", self.name, text)
        for char in text:
            self.input(ord(char))

    def last_output(self) -> Optional[int]:
        """Last value ever output, kept after :meth:`dump_output`."""
        return self._last_output

    def dump_output(self) -> List[int]:
        """Remove and return all queued output values."""
        values = list(self.outputs)
        self.outputs.clear()
        return values

    def _next_input(self) -> Optional[int]:
        if self.inputs:
            return self.inputs.popleft()
        if self.io is not None:
            return self.io.input()
        return None

    def _emit(self, value: int) -> None:
        self._last_output = value
        self._emitted += 1
        if self.io is not None:
            self.io.output(value)
        else:
            self.outputs.append(value)

    # ------------------------------------------------------------------
    # Execution

    def step(self) -> ExecutionState:
        """Execute the instruction at ``pc`` and return the resulting state."""
        if self.state is ExecutionState.DONE:
            raise HaltedError(f"{self.name}: cannot step past HALT at pc {self.pc}", pc=self.pc)
        instruction = decode(self.memory, self.pc, self.relative_base)
        if self.trace:
            LOGGER.debug(
                "%s pc=%d rb=%d %s",
                self.name,
                self.pc,
                self.relative_base,
                format_at(self.memory, self.pc, relative_base=self.relative_base),
            )
        self.state = self._execute(instruction)
        return self.state

    def _execute(self, ins: Instruction) -> ExecutionState:
        mem = self.memory
        if isinstance(ins, Add):
            mem.set(ins.out, ins.a.resolve(mem) + ins.b.resolve(mem))
            self.pc += 4
        elif isinstance(ins, Multiply):
            mem.set(ins.out, ins.a.resolve(mem) * ins.b.resolve(mem))
            self.pc += 4
        elif isinstance(ins, Input):
            value = self._next_input()
            if value is None:
                return ExecutionState.WAITING_FOR_INPUT
            mem.set(ins.to, value)
            self.pc += 2
        elif isinstance(ins, Output):
            self._emit(ins.source.resolve(mem))
            self.pc += 2
        elif isinstance(ins, JumpIfTrue):
            if ins.test.resolve(mem) != 0:
                self.pc = ins.target.resolve(mem)
            else:
                self.pc += 3
        elif isinstance(ins, JumpIfFalse):
            if ins.test.resolve(mem) == 0:
                self.pc = ins.target.resolve(mem)
            else:
                self.pc += 3
        elif isinstance(ins, LessThan):
            mem.set(ins.out, 1 if ins.a.resolve(mem) < ins.b.resolve(mem) else 0)
            self.pc += 4
        elif isinstance(ins, Equals):
            mem.set(ins.out, 1 if ins.a.resolve(mem) == ins.b.resolve(mem) else 0)
            self.pc += 4
        elif isinstance(ins, RelativeBaseOffset):
            self.relative_base += ins.by.resolve(mem)
            self.pc += 2
        elif isinstance(ins, Halt):
            self.steps += 1
            LOGGER.debug("%s halted after %d steps", self.name, self.steps)
            return ExecutionState.DONE
        else:  # pragma: no cover - decode() only builds the types above
            raise IntcodeError(f"unhandled instruction {ins!r}", pc=self.pc)
        self.steps += 1
        return ExecutionState.RUNNABLE

    def run(self, *, max_steps: Optional[int] = None) -> Optional[int]:
        """Step until the computer halts or waits for input.

        A waiting computer is resumed first when it has queued input or an
        attached ``io`` capability. Returns the last value output during this
        call, or ``None`` when the call produced no output.
        """
        emitted = self._emitted
        if self.state is ExecutionState.WAITING_FOR_INPUT and (self.inputs or self.io is not None):
            self.state = ExecutionState.RUNNABLE
        executed = 0
        while self.state is ExecutionState.RUNNABLE:
            if max_steps is not None and executed >= max_steps:
                raise StepLimitExceeded(
                    f"{self.name}: step limit {max_steps} reached at pc {self.pc}",
                    pc=self.pc,
                    value=max_steps,
                )
            self.step()
            executed += 1
        return self._last_output if self._emitted != emitted else None

    def run_to_completion(self, inputs: Iterable[int] = (), *, max_steps: Optional[int] = None) -> List[int]:
        """Feed ``inputs``, run until HALT and return the queued outputs.

        Unlike :meth:`run`, waiting for input is treated as a failure.
        """
        for value in inputs:
            self.input(value)
        self.run(max_steps=max_steps)
        if self.state is ExecutionState.WAITING_FOR_INPUT:
            raise InputStarvedError(f"{self.name}: waiting for input at pc {self.pc}", pc=self.pc)
        return self.dump_output()
