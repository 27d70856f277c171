"""Opcode table and the fixed parameters of the virtual machine."""

from __future__ import annotations

from dataclasses import dataclass

MEM_SIZE = 6 * 1024
IDX_MOD = 512
MAX_ARGS_NUMBER = 4

COMMENT_CHAR = "#"
LABEL_CHAR = ":"
DIRECT_CHAR = "%"
SEPARATOR_CHAR = ","
LABEL_CHARS = "abcdefghijklmnopqrstuvwxyz_0123456789"

NAME_CMD_STRING = ".name"
COMMENT_CMD_STRING = ".comment"

REG_NUMBER = 16

T_REG = 1
T_DIR = 2
T_IND = 4
T_LAB = 8

IND_SIZE = 2
DIR_SIZE = 4
REG_SIZE = DIR_SIZE

PROG_NAME_LENGTH = 128
COMMENT_LENGTH = 2048
COREWAR_EXEC_MAGIC = 0xEA83F3

CYCLE_TO_DIE = 1536
CYCLE_DELTA = 5
NBR_LIVE = 40


@dataclass(frozen=True)
class Op:
    """One instruction of the machine: its name, argument types and cost."""

    mnemonic: str
    nbr_args: int
    types: tuple[int, ...]
    code: int
    nbr_cycles: int
    comment: str


OP_TAB: tuple[Op, ...] = (
    Op("live", 1, (T_DIR,), 1, 10, "alive"),
    Op("ld", 2, (T_DIR | T_IND, T_REG), 2, 5, "load"),
    Op("st", 2, (T_REG, T_IND | T_REG), 3, 5, "store"),
    Op("add", 3, (T_REG, T_REG, T_REG), 4, 10, "addition"),
    Op("sub", 3, (T_REG, T_REG, T_REG), 5, 10, "soustraction"),
    Op("and", 3, (T_REG | T_DIR | T_IND, T_REG | T_IND | T_DIR, T_REG), 6, 6,
       "et (and  r1, r2, r3   r1&r2 -> r3"),
    Op("or", 3, (T_REG | T_IND | T_DIR, T_REG | T_IND | T_DIR, T_REG), 7, 6,
       "ou  (or   r1, r2, r3   r1 | r2 -> r3"),
    Op("xor", 3, (T_REG | T_IND | T_DIR, T_REG | T_IND | T_DIR, T_REG), 8, 6,
       "ou (xor  r1, r2, r3   r1^r2 -> r3"),
    Op("zjmp", 1, (T_DIR,), 9, 20, "jump if zero"),
    Op("ldi", 3, (T_REG | T_DIR | T_IND, T_DIR | T_REG, T_REG), 10, 25,
       "load index"),
    Op("sti", 3, (T_REG, T_REG | T_DIR | T_IND, T_DIR | T_REG), 11, 25,
       "store index"),
    Op("fork", 1, (T_DIR,), 12, 800, "fork"),
    Op("lld", 2, (T_DIR | T_IND, T_REG), 13, 10, "long load"),
    Op("lldi", 3, (T_REG | T_DIR | T_IND, T_DIR | T_REG, T_REG), 14, 50,
       "long load index"),
    Op("lfork", 1, (T_DIR,), 15, 1000, "long fork"),
    Op("aff", 1, (T_REG,), 16, 2, "aff"),
)

_BY_CODE = {op.code: op for op in OP_TAB}


def find_op(code: int) -> Op | None:
    """Return the instruction with this opcode, or None if there is none."""
    return _BY_CODE.get(code)