"""Memory that remembers who wrote each byte, and the instruction
loop of the visual front end built on it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TextIO

from .champions import Champion, Process
from .colors import RAYWHITE, Color, get_champ_color
from .flags import Flags, ProgramFlag
from .instructions import DO_INST, do_sti, do_st
from .llist import LinkedList
from .op import IDX_MOD, MEM_SIZE, REG_NUMBER, Op, find_op
from .utils import byte_to_args
from .vm import load_champion

_ST_CODE = 3
_STI_CODE = 0x0B


@dataclass
class TrackedMemory:
    """Arena bytes with the colour of their writer and process markers."""

    byte: bytearray = field(default_factory=lambda: bytearray(MEM_SIZE))
    color: list[Color] = field(default_factory=lambda: [RAYWHITE] * MEM_SIZE)
    is_index: list[bool] = field(default_factory=lambda: [False] * MEM_SIZE)


@dataclass
class HistoryEntry:
    """One executed instruction, as shown in the history panel."""

    text: str
    nb_player: int


def _byte(memory: bytearray, index: int) -> int:
    return memory[index % MEM_SIZE]


def _register(proc: Process, number: int) -> int:
    return proc.registers[number - 1] if 1 <= number <= REG_NUMBER else 0


def _paint(tracked: TrackedMemory, where: int, nb_player: int) -> None:
    color = get_champ_color(nb_player)
    for offset in range(4):
        tracked.color[(where + offset) % MEM_SIZE] = color


def get_instruction_ray(memory: bytearray, index: int) -> Op | None:
    """Return the instruction at index, wrapping negative positions."""
    return find_op(_byte(memory, index))


def inst_ray(tracked: TrackedMemory, champion: Champion, proc_index: int,
             history: LinkedList, out: TextIO | None = None) -> int:
    """Advance one process by a cycle, recording what it executes."""
    proc = champion.procs[proc_index]
    op = get_instruction_ray(tracked.byte, proc.index)
    if proc.index >= MEM_SIZE:
        proc.index = 0
    needed = op.nbr_cycles if op is not None else 0
    nb_player = 0
    if proc.cycles < needed:
        proc.cycles += 1
        return nb_player
    if op is None:
        proc.index += 1
        return 0
    if not proc.dead:
        history.push(HistoryEntry(f"{champion.prog_name}: {op.mnemonic}",
                                  champion.nb_player))
        if op.code == _ST_CODE:
            st_ray(tracked, champion, proc_index)
        elif op.code == _STI_CODE:
            sti_ray(tracked, champion, proc_index)
        else:
            nb_player = DO_INST[op.code - 1](tracked.byte, champion,
                                             proc_index, out)
    proc.cycles = 0
    return nb_player


def st_ray(tracked: TrackedMemory, champion: Champion, proc_index: int) -> int:
    """Execute st and colour the bytes it writes to memory."""
    memory = tracked.byte
    proc = champion.procs[proc_index]
    index = proc.index
    types = byte_to_args(_byte(memory, index + 1))
    source = _byte(memory, index + 2)
    if types[1] == 3 and 0 < source <= REG_NUMBER:
        offset = (_byte(memory, index + 3) << 8) + _byte(memory, index + 4)
        _paint(tracked, index + offset % IDX_MOD, champion.nb_player)
    do_st(memory, champion, proc_index)
    return 0


def _sti_target(memory: bytearray, proc: Process) -> int:
    index = proc.index
    params = byte_to_args(_byte(memory, index + 1))
    consumed = 2
    where = index
    for arg_type in params[1:3]:
        if arg_type == 1:
            consumed += 1
            where += _register(proc, _byte(memory, index + consumed))
        elif arg_type == 2:
            consumed += 2
            where += ((_byte(memory, index + consumed - 1) << 8)
                      + _byte(memory, index + consumed))
    return where


def sti_ray(tracked: TrackedMemory, champion: Champion, proc_index: int) -> int:
    """Execute sti and colour the bytes it writes to memory."""
    proc = champion.procs[proc_index]
    _paint(tracked, _sti_target(tracked.byte, proc), champion.nb_player)
    do_sti(tracked.byte, champion, proc_index)
    return 0


def load_tracked_champion(tracked: TrackedMemory, flag: ProgramFlag,
                          index: int, champion: Champion) -> int:
    """Load a champion and colour its code; return the code size."""
    size = load_champion(tracked.byte, flag, index, champion)
    color = get_champ_color(champion.nb_player)
    start = champion.procs[0].index
    for position in range(start, start + size):
        tracked.color[position % MEM_SIZE] = color
        tracked.is_index[position % MEM_SIZE] = False
    return size


def setup_tracked(flags: Flags, champions: list[Champion]) -> TrackedMemory:
    """Build fresh tracked memory holding every champion's code."""
    tracked = TrackedMemory()
    index = 0
    for flag, champion in zip(flags.champions[:flags.champions_amt], champions):
        load_tracked_champion(tracked, flag, index, champion)
        champion.count_dead = 0
        index += MEM_SIZE // flags.champions_amt
    return tracked