"""Champions and the processes they run inside the arena."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .flags import Flags
from .op import REG_NUMBER
from .utils import DEFAULT_FLAG_NB


def _blank_registers() -> list[int]:
    return [0] * REG_NUMBER


@dataclass
class Process:
    """One thread of execution: program counter, registers and state bits."""

    index: int = 0
    registers: list[int] = field(default_factory=_blank_registers)
    cycles: int = 0
    carry: bool = False
    alive: bool = False
    dead: bool = False

    def spawn(self) -> "Process":
        """Return a fresh process at the same position with copied registers."""
        return Process(index=self.index, registers=list(self.registers))


@dataclass
class Champion:
    """A loaded program with its player number and its processes."""

    nb_player: int
    procs: list[Process] = field(default_factory=lambda: [Process()])
    header: Any = None
    count_dead: float = 0
    alive: bool = False
    dead: bool = False

    @property
    def nb_procs(self) -> int:
        return len(self.procs)

    @property
    def prog_name(self) -> str:
        return getattr(self.header, "prog_name", "") if self.header else ""

    @property
    def comment(self) -> str:
        return getattr(self.header, "comment", "") if self.header else ""


def setup_champions(flags: Flags) -> list[Champion]:
    """Create one champion per parsed program, numbering those without -n."""
    champions: list[Champion] = []
    next_number = 1
    for position, program in enumerate(flags.champions[:flags.champions_amt]):
        if program.prog_number != DEFAULT_FLAG_NB:
            nb_player = program.prog_number
        else:
            nb_player = next_number
            next_number += 1
        process = Process()
        process.registers[0] = position + 1
        champions.append(Champion(nb_player=nb_player, procs=[process]))
    return champions