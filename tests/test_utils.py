import pytest

from corewar.op import COREWAR_EXEC_MAGIC, DIR_SIZE, IND_SIZE
from corewar.utils import (
    byte_to_args,
    get_correct_index,
    get_inst_size,
    get_nb_bytes,
    ltb_endian,
)


def test_ltb_endian_reads_magic():
    raw = COREWAR_EXEC_MAGIC.to_bytes(4, "big")
    little = int.from_bytes(raw, "little", signed=True)
    assert ltb_endian(little) == COREWAR_EXEC_MAGIC


@pytest.mark.parametrize("value", [0, 1, -1, 255, 0x12345678, -2147483648, 2147483647])
def test_ltb_endian_is_involution(value):
    assert ltb_endian(ltb_endian(value)) == value


def test_ltb_endian_result_in_int32_range():
    for value in (0x7F, 0x80, 0xFF, 0x80000000, 0xFFFFFFFF):
        assert -(2**31) <= ltb_endian(value) < 2**31


def test_byte_to_args_round_trip():
    for byte in range(256):
        a, b, c, d = byte_to_args(byte)
        assert (a << 6) | (b << 4) | (c << 2) | d == byte
        assert all(0 <= part <= 3 for part in (a, b, c, d))


def test_get_nb_bytes():
    assert get_nb_bytes(1) == 1
    assert get_nb_bytes(2) == DIR_SIZE
    assert get_nb_bytes(3) == IND_SIZE
    assert get_nb_bytes(0) == 0


def test_get_inst_size_empty_coding_byte():
    assert get_inst_size(0) == 2


def test_get_inst_size_is_sum_of_args():
    for byte in range(256):
        expected = 2 + sum(get_nb_bytes(arg) for arg in byte_to_args(byte))
        assert get_inst_size(byte) == expected


def test_get_correct_index():
    assert get_correct_index(-5) == 0
    assert get_correct_index(7) == 7
    assert get_correct_index(0) == 0