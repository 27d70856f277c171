import struct

from corewar.cli import EXIT_ERROR, HELP_TEXT, main
from corewar.op import COREWAR_EXEC_MAGIC


def write_champion(path, name, body=b"", magic=COREWAR_EXEC_MAGIC):
    path.write_bytes(struct.pack(">I129s3xI2049s3x", magic, name.encode(),
                                 len(body), b"") + body)
    return str(path)


def test_no_arguments_fails():
    assert main([]) == 84


def test_help(capsys):
    assert main(["-h"]) == 0
    output = capsys.readouterr().out
    assert output == HELP_TEXT
    assert output.startswith("USAGE\n")


def test_single_champion_fails(tmp_path):
    first = write_champion(tmp_path / "one.cor", "one")
    assert main([first]) == EXIT_ERROR


def test_bad_dump_value_fails(tmp_path):
    first = write_champion(tmp_path / "one.cor", "one")
    second = write_champion(tmp_path / "two.cor", "two")
    assert main(["-dump", "0", first, second]) == EXIT_ERROR


def test_bad_magic_fails(tmp_path):
    first = write_champion(tmp_path / "one.cor", "one")
    second = write_champion(tmp_path / "two.cor", "two", magic=1)
    assert main([first, second]) == EXIT_ERROR


def test_full_game(tmp_path, capsys):
    first = write_champion(tmp_path / "one.cor", "one")
    second = write_champion(tmp_path / "two.cor", "two")
    assert main([first, second]) == 0
    output = capsys.readouterr().out
    assert "The player 2(two) has won.\n" in output
    assert "Number of cycles: " in output