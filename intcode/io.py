"""I/O capabilities that connect a computer to the outside world.

A computer calls ``input()`` whenever an IN instruction finds its own input
queue empty, and ``output(value)`` once per OUT instruction. Returning
``None`` from ``input()`` means nothing is available yet; the computer then
suspends in ``WAITING_FOR_INPUT`` until it is fed or run again.
"""

from __future__ import annotations

import collections
from typing import Callable, Deque, Iterable, List, Optional


class ProgramIO:
    """Base class for I/O strategies."""

    def input(self) -> Optional[int]:
        raise NotImplementedError("ProgramIO must implement input()")

    def output(self, value: int) -> None:
        raise NotImplementedError("ProgramIO must implement output()")


class ConstantIO(ProgramIO):
    """Answers every input with the same value and records all outputs."""

    def __init__(self, value: int) -> None:
        self.value = value
        self.outputs: List[int] = []

    def input(self) -> Optional[int]:
        return self.value

    def output(self, value: int) -> None:
        self.outputs.append(value)

    @property
    def last(self) -> Optional[int]:
        return self.outputs[-1] if self.outputs else None


class ListIO(ProgramIO):
    """Drains a preloaded list of inputs and records all outputs."""

    def __init__(self, values: Iterable[int] = ()) -> None:
        self.pending: Deque[int] = collections.deque(values)
        self.outputs: List[int] = []

    def feed(self, *values: int) -> None:
        self.pending.extend(values)

    def input(self) -> Optional[int]:
        if not self.pending:
            return None
        return self.pending.popleft()

    def output(self, value: int) -> None:
        self.outputs.append(value)


class CallbackIO(ProgramIO):
    """Adapts a pair of callables to the I/O protocol."""

    def __init__(
        self,
        on_input: Optional[Callable[[], Optional[int]]] = None,
        on_output: Optional[Callable[[int], None]] = None,
    ) -> None:
        self._on_input = on_input
        self._on_output = on_output

    def input(self) -> Optional[int]:
        if self._on_input is None:
            return None
        return self._on_input()

    def output(self, value: int) -> None:
        if self._on_output is not None:
            self._on_output(value)
