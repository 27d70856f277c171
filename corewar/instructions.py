"""Decoding and execution of the machine's instructions."""

from __future__ import annotations

from typing import Callable, TextIO

from .champions import Champion, Process
from .op import IDX_MOD, MEM_SIZE, REG_NUMBER, Op, find_op
from .textutils import mini_printf
from .utils import byte_to_args, get_correct_index, get_inst_size, get_nb_bytes

Instruction = Callable[[bytearray, Champion, int, "TextIO | None"], int]


def _byte(memory: bytearray, index: int) -> int:
    return memory[index % MEM_SIZE]


def _put(memory: bytearray, index: int, value: int) -> None:
    memory[index % MEM_SIZE] = value & 0xFF


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _int16(value: int) -> int:
    value &= 0xFFFF
    return value - (1 << 16) if value & 0x8000 else value


def _c_mod(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend, as integer division truncates."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def _read32(memory: bytearray, index: int) -> int:
    raw = bytes(_byte(memory, index + offset) for offset in range(4))
    return int.from_bytes(raw, "big", signed=True)


def _read16(memory: bytearray, index: int) -> int:
    return (_byte(memory, index) << 8) + _byte(memory, index + 1)


def _reg(proc: Process, number: int) -> int:
    return proc.registers[number - 1] if 1 <= number <= REG_NUMBER else 0


def _set_reg(proc: Process, number: int, value: int) -> None:
    if 1 <= number <= REG_NUMBER:
        proc.registers[number - 1] = _int32(value)


def _store_shifted(memory: bytearray, where: int, value: int) -> None:
    # Each byte is the register shifted left and truncated to 8 bits.
    for offset, shift in enumerate((24, 16, 8, 0)):
        _put(memory, where + offset, value << shift)


def get_instruction(memory: bytearray, index: int) -> Op | None:
    """Return the instruction whose opcode sits at index, or None."""
    return find_op(_byte(memory, index))


def execute(memory: bytearray, champion: Champion, proc_index: int,
            out: TextIO | None = None) -> int:
    """Advance one process by one cycle; return the player number of a live."""
    proc = champion.procs[proc_index]
    if proc.index >= MEM_SIZE:
        proc.index = 0
    op = get_instruction(memory, proc.index)
    needed = op.nbr_cycles if op is not None else 0
    nb_player = 0
    if proc.cycles >= needed:
        if op is None:
            proc.index += 1
            return 0
        if not proc.dead:
            nb_player = DO_INST[op.code - 1](memory, champion, proc_index, out)
        proc.cycles = 0
    else:
        proc.cycles += 1
    return nb_player


def live(memory: bytearray, champion: Champion, proc_index: int,
         out: TextIO | None = None) -> int:
    """Mark the process alive and return the player number it names."""
    proc = champion.procs[proc_index]
    value = _read32(memory, proc.index + 1)
    proc.alive = True
    proc.index += 5
    return value


def _ld_value(memory: bytearray, proc: Process, arg_type: int) -> int:
    index = proc.index
    if arg_type == 2:
        proc.index += 6
        return _read32(memory, index + 2)
    if arg_type == 3:
        proc.index += 4
        return _read16(memory, index + 2)
    return 0


def _ld_indirect(memory: bytearray, index: int) -> int:
    raw = bytes(_byte(memory, index + offset) for offset in (0, 1, 2, 0))
    return int.from_bytes(raw, "big", signed=True)


def _main_ld(memory: bytearray, champion: Champion, proc_index: int,
             long_load: bool) -> None:
    proc = champion.procs[proc_index]
    types = byte_to_args(_byte(memory, get_correct_index(proc.index + 1)))
    value = _ld_value(memory, proc, types[0])
    target = _byte(memory, get_correct_index(proc.index))
    if long_load:
        value = _c_mod(value, IDX_MOD)
    if types[0] != 3:
        _set_reg(proc, target, value)
    else:
        _set_reg(proc, target, _ld_indirect(memory, value))
    proc.carry = value == 0
    proc.index += 1


def do_ld(memory: bytearray, champion: Champion, proc_index: int,
          out: TextIO | None = None) -> int:
    """Load a direct or indirect value into a register."""
    _main_ld(memory, champion, proc_index, False)
    return 0


def do_lld(memory: bytearray, champion: Champion, proc_index: int,
           out: TextIO | None = None) -> int:
    """Load a value, reduced modulo IDX_MOD, into a register."""
    _main_ld(memory, champion, proc_index, True)
    return 0


def do_st(memory: bytearray, champion: Champion, proc_index: int,
          out: TextIO | None = None) -> int:
    """Store a register into another register or into memory."""
    proc = champion.procs[proc_index]
    index = proc.index
    coding = _byte(memory, index + 1)
    types = byte_to_args(coding)
    source = _byte(memory, index + 2)
    source_ok = 0 < source <= REG_NUMBER
    if types[1] == 1 and source_ok:
        target = _byte(memory, index + 3)
        if 0 < target <= REG_NUMBER:
            proc.registers[target - 1] = proc.registers[source - 1]
    if types[1] == 3 and source_ok:
        offset = (_byte(memory, index + 3) << 8) + _byte(memory, index + 4)
        _store_shifted(memory, index + offset % IDX_MOD,
                       proc.registers[source - 1])
    proc.index += get_inst_size(coding)
    return 0


def _add_or_sub(proc: Process, memory: bytearray, index: int,
                subtract: bool) -> None:
    first_number = _byte(memory, index)
    second_number = _byte(memory, index + 1)
    first = _reg(proc, first_number) if first_number < REG_NUMBER else 0
    second = _reg(proc, second_number) if second_number < REG_NUMBER else 0
    target = _byte(memory, index + 2)
    if target >= REG_NUMBER:
        return
    value = _int32(first - second if subtract else first + second)
    _set_reg(proc, target, value)
    proc.carry = value == 0


def do_add(memory: bytearray, champion: Champion, proc_index: int,
           out: TextIO | None = None) -> int:
    """Add two registers into a third."""
    proc = champion.procs[proc_index]
    index = proc.index + 2
    _add_or_sub(proc, memory, index, False)
    proc.index += get_inst_size(_byte(memory, index - 1))
    return 0


def do_sub(memory: bytearray, champion: Champion, proc_index: int,
           out: TextIO | None = None) -> int:
    """Subtract the second register from the first into a third."""
    proc = champion.procs[proc_index]
    index = proc.index + 2
    _add_or_sub(proc, memory, index, True)
    proc.index += get_inst_size(_byte(memory, index - 1))
    return 0


def _value_of_type(proc: Process, arg_type: int, memory: bytearray,
                   index: int) -> int:
    if arg_type == 1:
        return _reg(proc, _byte(memory, index))
    if arg_type == 2:
        return _read32(memory, index)
    if arg_type == 3:
        return _read16(memory, index)
    return 0


def _binary_logic(memory: bytearray, champion: Champion, proc_index: int,
                  operation: Callable[[int, int], int]) -> None:
    proc = champion.procs[proc_index]
    index = proc.index + 1
    types = byte_to_args(_byte(memory, index))
    index += 1
    value = 0
    for arg_type in types[:2]:
        current = _value_of_type(proc, arg_type, memory, index)
        index += get_nb_bytes(arg_type)
        value = current if value == 0 else operation(value, current)
    target = _byte(memory, get_correct_index(index))
    if 0 < target <= REG_NUMBER:
        # The result lands one register past the one named.
        if target < REG_NUMBER:
            proc.registers[target] = _int32(value)
        proc.carry = value == 0
    else:
        proc.carry = False
    proc.index += get_nb_bytes(types[0]) + get_nb_bytes(types[1]) + 3


def do_and(memory: bytearray, champion: Champion, proc_index: int,
           out: TextIO | None = None) -> int:
    """Bitwise and of two arguments into a register."""
    _binary_logic(memory, champion, proc_index, lambda a, b: a & b)
    return 0


def do_or(memory: bytearray, champion: Champion, proc_index: int,
          out: TextIO | None = None) -> int:
    """Bitwise or of two arguments into a register."""
    _binary_logic(memory, champion, proc_index, lambda a, b: a | b)
    return 0


def do_xor(memory: bytearray, champion: Champion, proc_index: int,
           out: TextIO | None = None) -> int:
    """Bitwise exclusive or of two arguments into a register."""
    _binary_logic(memory, champion, proc_index, lambda a, b: a ^ b)
    return 0


def do_zjump(memory: bytearray, champion: Champion, proc_index: int,
             out: TextIO | None = None) -> int:
    """Jump by a relative offset when the carry is set."""
    proc = champion.procs[proc_index]
    offset = _int16(_read16(memory, proc.index + 1))
    if proc.carry:
        proc.index += _c_mod(offset, IDX_MOD)
    else:
        proc.index += 3
    return 0


def _ldi_value(proc: Process, arg_type: int, memory: bytearray,
               index: int) -> int:
    if arg_type == 1:
        return _reg(proc, _byte(memory, index))
    return _read16(memory, index)


def _main_ldi(memory: bytearray, champion: Champion, proc_index: int,
              long_load: bool) -> None:
    proc = champion.procs[proc_index]
    index = proc.index + 1
    types = byte_to_args(_byte(memory, index))
    index += get_nb_bytes(types[0])
    value = _ldi_value(proc, types[1], memory, index)
    index += get_nb_bytes(types[1])
    if not long_load:
        value = _c_mod(value, IDX_MOD)
    target = _byte(memory, index + 3)
    if 0 < target <= REG_NUMBER:
        _set_reg(proc, target, value)
        proc.carry = value == 0
    proc.index += get_nb_bytes(types[0]) + get_nb_bytes(types[1]) + 3


def do_ldi(memory: bytearray, champion: Champion, proc_index: int,
           out: TextIO | None = None) -> int:
    """Indexed load, reduced modulo IDX_MOD."""
    _main_ldi(memory, champion, proc_index, False)
    return 0


def do_lldi(memory: bytearray, champion: Champion, proc_index: int,
            out: TextIO | None = None) -> int:
    """Indexed load without reduction."""
    _main_ldi(memory, champion, proc_index, True)
    return 0


def _sti_argument(memory: bytearray, proc: Process, arg_type: int,
                  consumed: int) -> tuple[int, int]:
    if arg_type == 1:
        consumed += 1
        return _reg(proc, _byte(memory, proc.index + consumed)), consumed
    if arg_type == 2:
        consumed += 2
        return _read16(memory, proc.index + consumed - 1), consumed
    return 0, consumed


def do_sti(memory: bytearray, champion: Champion, proc_index: int,
           out: TextIO | None = None) -> int:
    """Store a register at the sum of two arguments plus the program counter."""
    proc = champion.procs[proc_index]
    index = proc.index
    params = byte_to_args(_byte(memory, index + 1))
    consumed = 2
    first, consumed = _sti_argument(memory, proc, params[1], consumed)
    second, consumed = _sti_argument(memory, proc, params[2], consumed)
    where = first + second + index
    _store_shifted(memory, where, _reg(proc, _byte(memory, index + 2)))
    proc.index += consumed + 1
    return 0


def _create_process(memory: bytearray, champion: Champion,
                    proc_index: int) -> int:
    parent = champion.procs[proc_index]
    offset = _int16(_read16(memory, parent.index + 1))
    champion.procs.append(parent.spawn())
    return offset


def do_fork(memory: bytearray, champion: Champion, proc_index: int,
            out: TextIO | None = None) -> int:
    """Start a copy of the process at an offset reduced modulo IDX_MOD."""
    offset = _create_process(memory, champion, proc_index)
    champion.procs[-1].index += _c_mod(offset, IDX_MOD)
    champion.procs[proc_index].index += 3
    return 0


def do_lfork(memory: bytearray, champion: Champion, proc_index: int,
             out: TextIO | None = None) -> int:
    """Start a copy of the process at an unreduced offset."""
    offset = _create_process(memory, champion, proc_index)
    champion.procs[-1].index += offset
    champion.procs[proc_index].index += 3
    return 0


def do_aff(memory: bytearray, champion: Champion, proc_index: int,
           out: TextIO | None = None) -> int:
    """Print the character held in a register."""
    proc = champion.procs[proc_index]
    number = _byte(memory, proc.index + 2)
    value = _reg(proc, number) if number < REG_NUMBER else 0
    mini_printf("%c\n", _c_mod(value, 256), out=out)
    proc.index += 3
    return 0


DO_INST: tuple[Instruction, ...] = (
    live,
    do_ld,
    do_st,
    do_add,
    do_sub,
    do_and,
    do_or,
    do_xor,
    do_zjump,
    do_ldi,
    do_sti,
    do_fork,
    do_lld,
    do_lldi,
    do_lfork,
    do_aff,
)