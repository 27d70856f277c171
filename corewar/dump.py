"""Hexadecimal dump of the arena memory."""

from __future__ import annotations

import sys
from typing import TextIO

from .op import MEM_SIZE
from .utils import ANSI_RED, ANSI_RESET

_BYTES_PER_LINE = 32


def _cell(byte: int) -> str:
    text = f"{byte:02X}"
    return f"{ANSI_RED}{text}{ANSI_RESET}" if byte else text


def format_map(memory: bytes | bytearray) -> str:
    """Render memory as 32 hex bytes per line, non-zero bytes highlighted."""
    rows = (
        "".join(_cell(byte) for byte in memory[start:start + _BYTES_PER_LINE])
        + "\n"
        for start in range(0, MEM_SIZE, _BYTES_PER_LINE)
    )
    return "".join(rows) + "\n"


def print_map(memory: bytes | bytearray, out: TextIO | None = None) -> None:
    """Write the memory dump to out (stdout by default)."""
    (out if out is not None else sys.stdout).write(format_map(memory))


def print_map_cycle(dump: int, memory: bytes | bytearray, cycles: int,
                    out: TextIO | None = None) -> None:
    """Dump the memory when the cycle counter reaches the requested cycle."""
    if dump == cycles:
        print_map(memory, out)