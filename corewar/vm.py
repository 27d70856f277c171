"""Loading champions into the arena and running the game."""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .champions import Champion, setup_champions
from .dump import print_map, print_map_cycle
from .flags import Flags, ProgramFlag
from .instructions import execute
from .op import (COMMENT_LENGTH, COREWAR_EXEC_MAGIC, CYCLE_DELTA,
                 CYCLE_TO_DIE, MEM_SIZE, NBR_LIVE, PROG_NAME_LENGTH)
from .textutils import mini_printf
from .utils import DEFAULT_FLAG_NB

_HEADER = struct.Struct(f">I{PROG_NAME_LENGTH + 1}s3xI{COMMENT_LENGTH + 1}s3x")
HEADER_SIZE = _HEADER.size


class LoadError(ValueError):
    """Raised when a champion file cannot be loaded into the arena."""


@dataclass
class Header:
    """The fixed-size header at the start of a champion file."""

    magic: int
    prog_name: str
    prog_size: int
    comment: str


def _text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def parse_header(data: bytes) -> Header:
    """Decode a champion header, checking its magic number."""
    if len(data) < HEADER_SIZE:
        raise LoadError("champion file is shorter than its header")
    magic, name, size, comment = _HEADER.unpack_from(data)
    if magic != COREWAR_EXEC_MAGIC:
        raise LoadError("bad magic number")
    return Header(magic=magic, prog_name=_text(name), prog_size=size,
                  comment=_text(comment))


def _program_bytes(flag: ProgramFlag) -> bytes:
    if flag.data is not None:
        return flag.data
    if flag.prog_name is None:
        raise LoadError("no program given")
    try:
        return Path(flag.prog_name).read_bytes()
    except OSError as error:
        raise LoadError(f"cannot read {flag.prog_name}") from error


def load_champion(memory: bytearray, flag: ProgramFlag, index: int,
                  champion: Champion) -> int:
    """Copy a champion's code into memory; return how many bytes were copied."""
    data = _program_bytes(flag)
    champion.header = parse_header(data)
    if flag.load_address != DEFAULT_FLAG_NB:
        start = flag.load_address % MEM_SIZE
    else:
        start = index
    champion.procs[0].index = start
    body = data[HEADER_SIZE:]
    for offset, byte in enumerate(body):
        memory[(start + offset) % MEM_SIZE] = byte
    return len(body)


class Game:
    """The cycle loop: runs every process and kills champions that stop living."""

    def __init__(self, memory: bytearray, flags: Flags,
                 champions: list[Champion], out: TextIO | None = None) -> None:
        self.memory = memory
        self.flags = flags
        self.champions = champions
        self.out = out
        self.cycles = 0
        self.nb_delta = 0
        self.tot_cycles = 0
        self.nb_live = 0
        self._nb_last = 0

    @property
    def cycle_to_die(self) -> int:
        return CYCLE_TO_DIE - self.nb_delta * CYCLE_DELTA

    def champs_alive(self) -> bool:
        """Tell whether more than one champion remains; announce the winner if not."""
        alive = 0
        for champion in self.champions:
            if not champion.dead:
                alive += 1
                self._nb_last = champion.nb_player
        if alive > 1:
            return True
        for champion in self.champions:
            if champion.nb_player == self._nb_last:
                mini_printf("The player %d(%s) has won.\n", champion.nb_player,
                            champion.prog_name, out=self.out)
        return False

    def set_alive(self, player_nb: int) -> None:
        """Record a live for every living champion with this number."""
        for champion in self.champions:
            if not champion.dead and champion.nb_player == player_nb:
                mini_printf("The player %d(%s) is alive.\n", champion.nb_player,
                            champion.prog_name, out=self.out)
                champion.alive = True
                self.nb_live += 1

    def update_champions(self) -> None:
        """End a period: kill whoever did not live and reset the counters."""
        for champion in self.champions:
            if not champion.alive:
                champion.dead = True
            for proc in champion.procs:
                proc.dead = not proc.alive
                proc.alive = False
            champion.alive = False
        self.cycles = 0

    def _run_champion(self, champion: Champion) -> None:
        position = 0
        while position < len(champion.procs):
            if not champion.dead:
                self.set_alive(execute(self.memory, champion, position, self.out))
            position += 1

    def step(self) -> bool:
        """Run one cycle; return False once the game is over."""
        if not self.champs_alive():
            return False
        for champion in self.champions:
            self._run_champion(champion)
        print_map_cycle(self.flags.dump, self.memory, self.cycles, self.out)
        if self.nb_live >= NBR_LIVE:
            self.nb_delta += 1
            self.nb_live = 0
        if self.cycles >= self.cycle_to_die:
            self.update_champions()
        self.tot_cycles += 1
        self.cycles += 1
        return True

    def run(self) -> int:
        """Run until one champion or none is left; return the cycle count."""
        while self.step():
            pass
        mini_printf("Number of cycles: %d\n", self.tot_cycles, out=self.out)
        return self.tot_cycles


def run_vm(flags: Flags, out: TextIO | None = None) -> Game:
    """Load every champion, play the game and dump the final memory."""
    stream = out if out is not None else sys.stdout
    memory = bytearray(MEM_SIZE)
    champions = setup_champions(flags)
    index = 0
    for flag, champion in zip(flags.champions[:flags.champions_amt], champions):
        load_champion(memory, flag, index, champion)
        index += MEM_SIZE // flags.champions_amt
    game = Game(memory, flags, champions, stream)
    game.run()
    print_map(memory, stream)
    return game