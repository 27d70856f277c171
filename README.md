# corewar

A Core War virtual machine. Up to four compiled champions (`.cor` files) are
loaded into a shared circular memory of 6144 bytes. Each champion runs as one
or more processes. These processes execute the instructions `live`, `ld`, `st`,
`add`, `sub`, `and`, `or`, `xor`, `zjmp`, `ldi`, `sti`, `fork`, `lld`, `lldi`,
`lfork` and `aff`. A champion that does not report itself alive within the
current cycle-to-die window is eliminated. The window starts at 1536 cycles.
It shrinks by 5 cycles each time 40 lives have been reported. The last champion
standing wins.

## Installation

```
pip install .
```

To run the test suite, install the test extra:

```
pip install .[test]
pytest
```

## Command line

```
corewar [-dump nbr_cycle] [[-n prog_number] [-a load_address] prog_name]...
corewar -h
```

- `-dump nbr_cycle` dumps the memory when the cycle counter reaches
  `nbr_cycle`. The dump shows 32 bytes per line in hexadecimal, and non-zero
  bytes are highlighted in red with ANSI escape codes. `-dump` is only
  recognised as the first argument.
- `-n prog_number` sets the player number of the next program. Without it,
  programs are numbered 1, 2, ... in the order they are given.
- `-a load_address` sets where the next program is loaded, modulo the memory
  size. Without it, the programs are spaced evenly through memory.
- `-h`, as the first argument, prints the usage text.

The values given to `-dump`, `-n` and `-a` must be positive numbers. The
program exits with status 84 in these cases:

- no arguments are given;
- an option is malformed;
- `-n` or `-a` is given without a program after it;
- exactly one champion is given;
- a champion file cannot be read;
- a champion file has a bad header.

Example:

```
corewar -dump 1000 -n 1 first.cor -n 2 second.cor
```

During the run the machine prints a line each time a player reports itself
alive. When at most one champion is left, it prints the winner and the total
number of cycles. It then prints a final dump of the memory.

```
The player 1(first) is alive.
The player 1(first) has won.
Number of cycles: 1537
```

The `aff` instruction prints the character held in a register, followed by a
newline.

## Visual mode

```
corewar-visual [-dump nbr_cycle] [[-n prog_number] [-a load_address] prog_name]...
```

This opens a 1920×1080 pygame window. The window shows:

- the memory as a grid of hex bytes, coloured by the champion that wrote them;
- the cell under every living process;
- for each champion, its live state and process count;
- for each champion, its latest instructions;
- the live and cycle-to-die counters;
- a banner for a few seconds after a champion dies.

Visual mode needs at least two champions.

- Space starts and pauses the game.
- Up shortens the pause between cycles. Down lengthens it.
- H shows or hides the panel of recent instructions from all players.
- When the game ends, a Restart button plays the same champions again.

If a `ressources/` directory in the working directory holds `space.png`,
`intro.mp3` and `win.mp3`, these are used as the background and the music.
Without them the window runs with neither.

When the window closes, the final memory dump is printed to standard output.

### What visual mode does not do

There is no file picker. Champions must be given on the command line, and
`corewar-visual` with no arguments exits with status 84.

## Library use

The parts of the machine can be used on their own:

- `corewar.flags.parse_flags(argv)` parses the arguments into a `Flags` object
  and reads each champion file. `argv` does not include the program name. It
  raises `FlagError` on bad input. `parse_visual_flags(argv)` is the variant
  used by visual mode.
- `corewar.champions.setup_champions(flags)` builds the `Champion` objects.
  Each object starts with one `Process`.
- `corewar.vm.parse_header(data)` decodes a champion header into a `Header`.
  It raises `LoadError` for a short file or a wrong magic number.
- `corewar.vm.load_champion(memory, flag, index, champion)` copies a program
  into memory.
- `corewar.vm.run_vm(flags, out)` loads the champions, plays the whole game
  writing to `out`, and returns the finished `Game`.
- `corewar.vm.Game` runs the game one cycle at a time with `step()`, or to the
  end with `run()`.
- `corewar.instructions.execute(memory, champion, proc_index, out)` advances
  one process by one cycle.
- `corewar.dump.format_map(memory)` renders a memory dump as text.
- `corewar.op.find_op(code)` looks up an instruction by its opcode.
  `corewar.op.OP_TAB` holds the whole instruction table.
- `corewar.tracked` provides `TrackedMemory` and `inst_ray`, which are used by
  visual mode to record who wrote each byte and the instruction history.

The package also includes some small helpers that the machine uses:

- `corewar.textutils`: a minimal `mini_printf` and C-style string comparisons.
- `corewar.arith`: lenient integer parsing with `getnbr`, and prime helpers.
- `corewar.llist.LinkedList`: an ordered collection.