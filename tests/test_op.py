import pytest

from corewar.op import OP_TAB, T_DIR, T_IND, T_REG, find_op


def test_live_is_first_opcode():
    op = find_op(1)
    assert op.mnemonic == "live"
    assert op.nbr_cycles == 10
    assert op.types == (T_DIR,)


def test_fork_costs():
    assert find_op(12).nbr_cycles == 800
    assert find_op(15).mnemonic == "lfork"


@pytest.mark.parametrize("code", [0, 17, 255, -1])
def test_unknown_codes(code):
    assert find_op(code) is None


def test_every_op_found_by_its_code():
    for op in OP_TAB:
        assert find_op(op.code) is op


@pytest.mark.parametrize("code", range(1, 17))
def test_argument_counts_match_types(code):
    op = find_op(code)
    assert len(op.types) == op.nbr_args


def test_sti_types():
    op = find_op(11)
    assert op.mnemonic == "sti"
    assert op.types == (T_REG, T_REG | T_DIR | T_IND, T_DIR | T_REG)


def test_codes_one_to_sixteen_map_to_mnemonics():
    assert [find_op(code).mnemonic for code in range(1, 17)] == [
        "live", "ld", "st", "add", "sub", "and", "or", "xor", "zjmp",
        "ldi", "sti", "fork", "lld", "lldi", "lfork", "aff",
    ]