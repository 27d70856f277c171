"""Command-line entry point of the virtual machine."""

from __future__ import annotations

import sys
from typing import Sequence

from .flags import FlagError, parse_flags
from .vm import LoadError, run_vm

EXIT_ERROR = 84

HELP_TEXT = (
    "USAGE\n"
    "./corewar [-dump nbr_cycle] "
    "[[-n prog_number] [-a load_address] prog_name]...\n"
    "DESCRIPTION\n"
    "-dump nbr_cycle dumps the memory after the nbr_cycle"
    " execution (if the round isn't already over) with the"
    " following format: 32 bytes/line in hexadecimal"
    " (A0BCDEFE1DD3...)\n"
    "-n prog_number sets the next program's number. By default,"
    " the first free number in the parameter order\n"
    "-a load_address sets the next program's loading address. When"
    " no address is specified, optimize the addresses so that the "
    " processes are as far away from each other as possible. "
    "The addresses are MEM_SIZE modulo.\n"
)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the machine on the given arguments; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return EXIT_ERROR
    if args[0] == "-h":
        sys.stdout.write(HELP_TEXT)
        return 0
    try:
        flags = parse_flags(args)
        run_vm(flags)
    except (FlagError, LoadError):
        return EXIT_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())