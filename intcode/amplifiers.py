"""Amplifier chains: several copies of one program wired output-to-input.

Each amplifier first reads its phase setting, then a signal. The first
amplifier's signal is 0. In a feedback loop the last amplifier's output
goes back to the first until every amplifier halts.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .computer import Computer
from .errors import IntcodeError

LOGGER = logging.getLogger("intcode.amplifiers")

SERIES_PHASES = (0, 1, 2, 3, 4)
FEEDBACK_PHASES = (5, 6, 7, 8, 9)


def _boot(program: Sequence[int], phases: Sequence[int]) -> List[Computer]:
    amplifiers = []
    for index, phase in enumerate(phases):
        amp = Computer(program, name=f"amp{chr(ord('A') + index)}")
        amp.input(phase)
        amplifiers.append(amp)
    return amplifiers


def chain_output(program: Sequence[int], phases: Sequence[int], signal: int = 0) -> int:
    """Run the amplifiers once in series and return the last amplifier's output."""
    for amp in _boot(program, phases):
        amp.input(signal)
        value = amp.run()
        if value is None:
            raise IntcodeError(f"{amp.name} produced no output", pc=amp.pc)
        signal = value
    return signal


def looped_output(program: Sequence[int], phases: Sequence[int], signal: int = 0) -> int:
    """Run the amplifiers in a feedback loop until they halt.

    Returns the final output of the last amplifier.
    """
    amplifiers = _boot(program, phases)
    index = 0
    while True:
        amp = amplifiers[index]
        amp.input(signal)
        if not amp.is_runnable():
            break
        value = amp.run()
        if value is None:
            raise IntcodeError(f"{amp.name} produced no output", pc=amp.pc)
        signal = value
        index = (index + 1) % len(amplifiers)
    final = amplifiers[-1].last_output()
    if final is None:
        raise IntcodeError(f"{amplifiers[-1].name} never produced output")
    return final


def _best(program: Sequence[int], phases: Iterable[int], runner) -> Tuple[int, Tuple[int, ...]]:
    best: Optional[Tuple[int, Tuple[int, ...]]] = None
    for permutation in itertools.permutations(phases):
        value = runner(program, permutation)
        if best is None or value > best[0]:
            best = (value, permutation)
    if best is None:
        raise IntcodeError("no phase settings to try")
    LOGGER.debug("best phases %s -> %d", best[1], best[0])
    return best


def max_chain_output(program: Sequence[int], phases: Iterable[int] = SERIES_PHASES) -> Tuple[int, Tuple[int, ...]]:
    """Return the highest series output and the phase order that produced it."""
    return _best(program, phases, chain_output)


def max_looped_output(program: Sequence[int], phases: Iterable[int] = FEEDBACK_PHASES) -> Tuple[int, Tuple[int, ...]]:
    """Return the highest feedback-loop output and the phase order that produced it."""
    return _best(program, phases, looped_output)
