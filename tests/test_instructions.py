import io

import pytest

from corewar.champions import Champion, Process
from corewar.instructions import (
    do_add, do_aff, do_and, do_fork, do_ld, do_ldi, do_lfork, do_lld, do_lldi,
    do_or, do_st, do_sti, do_sub, do_xor, do_zjump, execute, get_instruction,
    live,
)
from corewar.op import IDX_MOD, MEM_SIZE, find_op
from corewar.utils import get_inst_size


def _setup(code, start=0):
    memory = bytearray(MEM_SIZE)
    memory[start:start + len(code)] = bytes(code)
    champion = Champion(nb_player=1, procs=[Process(index=start)])
    return memory, champion, champion.procs[0]


def test_get_instruction_finds_opcode():
    memory, _, _ = _setup([11])
    assert get_instruction(memory, 0).mnemonic == "sti"
    assert get_instruction(memory, 1) is None
    assert get_instruction(memory, MEM_SIZE).mnemonic == "sti"


def test_live_returns_player_number():
    memory, champion, proc = _setup([1] + list((-1).to_bytes(4, "big", signed=True)))
    assert live(memory, champion, 0) == -1
    assert proc.alive is True
    assert proc.index == 5


def test_execute_waits_for_cycles_then_runs():
    memory, champion, proc = _setup([1] + list((3).to_bytes(4, "big")))
    wait = find_op(1).nbr_cycles
    results = [execute(memory, champion, 0) for _ in range(wait)]
    assert results == [0] * wait
    assert proc.cycles == wait and proc.index == 0
    assert execute(memory, champion, 0) == 3
    assert proc.cycles == 0


def test_execute_skips_unknown_byte():
    memory, champion, proc = _setup([0])
    assert execute(memory, champion, 0) == 0
    assert proc.index == 1


def test_execute_resets_out_of_range_index():
    memory, champion, proc = _setup([])
    proc.index = MEM_SIZE
    execute(memory, champion, 0)
    assert proc.index == 1


def test_dead_process_does_not_run():
    memory, champion, proc = _setup([1, 0, 0, 0, 2])
    proc.dead = True
    proc.cycles = find_op(1).nbr_cycles
    assert execute(memory, champion, 0) == 0
    assert proc.index == 0 and proc.cycles == 0


def test_add_and_sub():
    memory, champion, proc = _setup([4, 0x54, 1, 2, 3])
    proc.registers[0], proc.registers[1] = 7, 5
    do_add(memory, champion, 0)
    assert proc.registers[2] == 12
    assert proc.carry is False
    assert proc.index == get_inst_size(0x54)

    memory, champion, proc = _setup([5, 0x54, 1, 2, 3])
    proc.registers[0] = proc.registers[1] = 5
    do_sub(memory, champion, 0)
    assert proc.registers[2] == 0
    assert proc.carry is True


def test_add_ignores_high_target_register():
    memory, champion, proc = _setup([4, 0x54, 1, 2, 16])
    proc.registers[0] = 1
    before = list(proc.registers)
    do_add(memory, champion, 0)
    assert proc.registers == before
    assert proc.index == get_inst_size(0x54)


def test_st_register_to_register():
    memory, champion, proc = _setup([3, 0x50, 1, 4])
    proc.registers[0] = 77
    do_st(memory, champion, 0)
    assert proc.registers[3] == 77
    assert proc.index == get_inst_size(0x50)


def test_st_indirect_writes_low_byte_last():
    memory, champion, proc = _setup([3, 0x70, 1, 0, 10])
    proc.registers[0] = 0x1234ABCD
    do_st(memory, champion, 0)
    assert bytes(memory[10:14]) == bytes([0, 0, 0, 0xCD])
    assert proc.index == get_inst_size(0x70)


def test_sti_writes_at_sum_of_arguments():
    memory, champion, proc = _setup([11, 0x64, 1, 0, 20, 2])
    proc.registers[0] = 0x11223344
    proc.registers[1] = 5
    do_sti(memory, champion, 0)
    assert bytes(memory[25:29]) == bytes([0, 0, 0, 0x44])
    assert proc.index == 6


@pytest.mark.parametrize("offset", [-3, 40])
def test_zjump_with_carry(offset):
    memory, champion, proc = _setup([9] + list(offset.to_bytes(2, "big", signed=True)),
                                    start=100)
    proc.carry = True
    do_zjump(memory, champion, 0)
    assert proc.index == 100 + offset


def test_zjump_without_carry_moves_past():
    memory, champion, proc = _setup([9, 0, 40], start=100)
    do_zjump(memory, champion, 0)
    assert proc.index == 103


def test_fork_reduces_offset_and_copies_registers():
    memory, champion, proc = _setup([12] + list((IDX_MOD + 4).to_bytes(2, "big")),
                                    start=50)
    proc.registers[5] = 42
    do_fork(memory, champion, 0)
    assert champion.nb_procs == 2
    child = champion.procs[1]
    assert child.index == 54
    assert child.registers == proc.registers
    assert proc.index == 53


def test_lfork_keeps_full_offset():
    memory, champion, proc = _setup([15] + list((IDX_MOD + 4).to_bytes(2, "big")),
                                    start=50)
    do_lfork(memory, champion, 0)
    assert champion.procs[1].index == 50 + IDX_MOD + 4
    assert proc.index == 53


def test_aff_prints_register_character():
    memory, champion, proc = _setup([16, 0x40, 1])
    proc.registers[0] = ord("A")
    out = io.StringIO()
    do_aff(memory, champion, 0, out)
    assert out.getvalue() == "A\n"
    assert proc.index == 3


def test_and_or_xor_store_one_register_past():
    for func, expected in ((do_and, 0b1000), (do_or, 0b1110), (do_xor, 0b0110)):
        memory, champion, proc = _setup([6, 0x54, 1, 2, 3])
        proc.registers[0], proc.registers[1] = 0b1100, 0b1010
        func(memory, champion, 0)
        assert proc.registers[3] == expected
        assert proc.registers[2] == 0
        assert proc.index == get_inst_size(0x54)


def test_and_with_zero_result_sets_carry():
    memory, champion, proc = _setup([6, 0x54, 1, 2, 3])
    proc.registers[0], proc.registers[1] = 0b1100, 0b0011
    do_and(memory, champion, 0)
    assert proc.carry is True


def test_ld_direct():
    memory, champion, proc = _setup([2, 0x90, 0, 0, 0, 42, 1])
    do_ld(memory, champion, 0)
    assert proc.registers[0] == 42
    assert proc.carry is False
    assert proc.index == get_inst_size(0x90)


def test_ld_zero_sets_carry():
    memory, champion, proc = _setup([2, 0x90, 0, 0, 0, 0, 1])
    proc.registers[0] = 9
    do_ld(memory, champion, 0)
    assert proc.registers[0] == 0
    assert proc.carry is True


def test_lld_reduces_value():
    memory, champion, proc = _setup([13, 0x90] + list((IDX_MOD + 42).to_bytes(4, "big")) + [1])
    do_lld(memory, champion, 0)
    assert proc.registers[0] == 42


def test_ldi_and_lldi():
    payload = (IDX_MOD + 7).to_bytes(2, "big")
    for func, expected in ((do_ldi, 7), (do_lldi, IDX_MOD + 7)):
        memory, champion, proc = _setup([10, 0xA8])
        memory[5:7] = payload
        memory[12] = 3
        func(memory, champion, 0)
        assert proc.registers[2] == expected
        assert proc.carry is False
        assert proc.index == get_inst_size(0xA8)