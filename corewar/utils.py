"""Byte-order and argument-coding helpers shared by the instructions."""

from __future__ import annotations

from .op import DIR_SIZE, IND_SIZE

DEFAULT_FLAG_NB = -1
MAX_CHAMPIONS_AMT = 4

ANSI_RED = "\033[1;31m"
ANSI_RESET = "\033[0;0m"


def ltb_endian(little: int) -> int:
    """Swap the byte order of a 32-bit signed integer."""
    raw = (little & 0xFFFFFFFF).to_bytes(4, "little")
    return int.from_bytes(raw, "big", signed=True)


def byte_to_args(byte: int) -> tuple[int, int, int, int]:
    """Split a coding byte into its four two-bit argument types."""
    byte &= 0xFF
    return (byte >> 6, (byte >> 4) & 0b11, (byte >> 2) & 0b11, byte & 0b11)


def get_nb_bytes(arg: int) -> int:
    """Return how many bytes an argument of this coded type takes."""
    return {1: 1, 2: DIR_SIZE, 3: IND_SIZE}.get(arg, 0)


def get_inst_size(coding_byte: int) -> int:
    """Return the size of an instruction: opcode, coding byte and arguments."""
    return 2 + sum(get_nb_bytes(arg) for arg in byte_to_args(coding_byte))


def get_correct_index(index: int) -> int:
    """Clamp a negative index to zero."""
    return max(index, 0)