"""Sparse memory for the Intcode VM."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidAddressError


class Memory:
    """Address space mapping non-negative addresses to integers.

    Cells that were never written read as 0, and writes grow the space
    without bound. Only written cells are stored.
    """

    def __init__(self, values: Iterable[int] = ()) -> None:
        self._cells: Dict[int, int] = {addr: int(value) for addr, value in enumerate(values)}

    @staticmethod
    def _check(addr: int) -> int:
        if addr < 0:
            raise InvalidAddressError(f"negative memory address {addr}", value=addr)
        return addr

    def get(self, addr: int) -> int:
        return self._cells.get(self._check(addr), 0)

    def set(self, addr: int, value: int) -> None:
        self._cells[self._check(addr)] = int(value)

    def __getitem__(self, addr: int) -> int:
        return self.get(addr)

    def __setitem__(self, addr: int, value: int) -> None:
        self.set(addr, value)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        for addr in sorted(self._cells):
            yield addr, self._cells[addr]

    def __repr__(self) -> str:
        cells = ", ".join(f"({addr}: {value})" for addr, value in self)
        return f"Memory({cells})"

    def copy(self) -> "Memory":
        clone = Memory()
        clone._cells = dict(self._cells)
        return clone

    def highest_address(self) -> Optional[int]:
        if not self._cells:
            return None
        return max(self._cells)

    def dump(self, start: int = 0, end: Optional[int] = None) -> List[int]:
        """Return cells ``start..end`` (exclusive), zero-filled.

        ``end`` defaults to one past the highest written address.
        """
        if end is None:
            highest = self.highest_address()
            end = 0 if highest is None else highest + 1
        return [self.get(addr) for addr in range(self._check(start), end)]
