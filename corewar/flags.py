"""Command-line parsing for the virtual machine and its visual front end."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .arith import getnbr
from .utils import DEFAULT_FLAG_NB, MAX_CHAMPIONS_AMT


class FlagError(ValueError):
    """Raised when the command line cannot be used to start a game."""


@dataclass
class ProgramFlag:
    """Options given for one champion and the bytes of its program file."""

    active: bool = False
    prog_number: int = DEFAULT_FLAG_NB
    load_address: int = DEFAULT_FLAG_NB
    prog_name: str | None = None
    data: bytes | None = None

    @property
    def has_options(self) -> bool:
        return (self.prog_number != DEFAULT_FLAG_NB
                or self.load_address != DEFAULT_FLAG_NB)


def _empty_champions() -> list[ProgramFlag]:
    return [ProgramFlag() for _ in range(MAX_CHAMPIONS_AMT)]


@dataclass
class Flags:
    """The parsed command line."""

    dump: int = DEFAULT_FLAG_NB
    champions: list[ProgramFlag] = field(default_factory=_empty_champions)
    champions_amt: int = 0


def _positive_value(argv: Sequence[str], position: int) -> int:
    option = argv[position]
    if position + 1 < len(argv):
        value = getnbr(argv[position + 1])
        if value > 0:
            return value
    raise FlagError(f"{option} needs a positive number")


def _parse_dump(argv: Sequence[str]) -> tuple[int, int]:
    if argv and argv[0] == "-dump":
        return _positive_value(argv, 0), 2
    return DEFAULT_FLAG_NB, 0


def _parse_champions(argv: Sequence[str], start: int) -> tuple[list[ProgramFlag], int]:
    champions = _empty_champions()
    amount = 0
    position = start
    while position < len(argv) and amount < MAX_CHAMPIONS_AMT:
        champion = champions[amount]
        if argv[position] == "-n":
            champion.prog_number = _positive_value(argv, position)
            position += 2
        if position < len(argv) and argv[position] == "-a":
            champion.load_address = _positive_value(argv, position)
            position += 2
        if position < len(argv):
            champion.active = True
            champion.prog_name = argv[position]
        amount += 1
        position += 1
    return champions, amount


def _load(champion: ProgramFlag) -> None:
    try:
        champion.data = Path(str(champion.prog_name)).read_bytes()
    except OSError as error:
        raise FlagError(f"cannot open {champion.prog_name}") from error


def _parse_common(argv: Sequence[str]) -> Flags:
    dump, start = _parse_dump(argv)
    champions, amount = _parse_champions(argv, start)
    return Flags(dump=dump, champions=champions, champions_amt=amount)


def parse_flags(argv: Sequence[str]) -> Flags:
    """Parse the arguments (without the program name) and open each champion."""
    flags = _parse_common(list(argv))
    loaded = 0
    for champion in flags.champions:
        if not champion.active:
            if champion.has_options:
                raise FlagError("-n or -a given without a program")
            break
        _load(champion)
        loaded += 1
    if loaded == 1:
        raise FlagError("at least two champions are needed")
    return flags


def parse_visual_flags(argv: Sequence[str]) -> Flags:
    """Parse arguments for the visual front end, which needs two champions."""
    argv = list(argv)
    if not argv:
        raise FlagError("no champions given")
    flags = _parse_common(argv)
    loaded = 0
    for champion in flags.champions:
        if not champion.active:
            if champion.has_options:
                continue
            break
        _load(champion)
        loaded += 1
    if loaded <= 1:
        raise FlagError("at least two champions are needed")
    flags.champions_amt = loaded
    return flags


def get_champions_amount(flags: Flags) -> int:
    """Count the leading champions that were given a program."""
    amount = 0
    for champion in flags.champions:
        if not champion.active:
            break
        amount += 1
    return amount