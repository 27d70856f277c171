import io
import struct

import pytest

from corewar.champions import setup_champions
from corewar.cli import EXIT_ERROR, HELP_TEXT
from corewar.display import SLEEP_MOD, Screen
from corewar.flags import Flags, ProgramFlag
from corewar.op import (COMMENT_LENGTH, COREWAR_EXEC_MAGIC, CYCLE_TO_DIE,
                        PROG_NAME_LENGTH, find_op)
from corewar.tracked import setup_tracked
from corewar.visual import DEFAULT_SLEEP_US, VisualGame, main

_HEADER = struct.Struct(f">I{PROG_NAME_LENGTH + 1}s3xI{COMMENT_LENGTH + 1}s3x")
LIVE_ONE = bytes([1, 0, 0, 0, 1])


def _program(name, code):
    data = _HEADER.pack(COREWAR_EXEC_MAGIC, name.encode(), len(code), b"") + code
    return ProgramFlag(active=True, prog_name=name, data=data)


def _game(code=LIVE_ONE):
    flags = Flags(champions=[_program("alpha", code), _program("beta", code),
                             ProgramFlag(), ProgramFlag()],
                  champions_amt=2)
    champions = setup_champions(flags)
    tracked = setup_tracked(flags, champions)
    out = io.StringIO()
    return VisualGame(tracked, flags, champions, out), out


def test_champs_alive_with_two_players():
    game, _ = _game()
    assert game.champs_alive() is True
    assert game.screen == Screen.LOGO


def test_champs_alive_declares_winner():
    game, out = _game()
    game.champions[0].dead = True
    assert game.champs_alive() is False
    assert game.screen == Screen.ENDING
    assert "The player 2(beta) has won.\n" in out.getvalue()


def test_set_alive_marks_champion():
    game, out = _game()
    game.set_alive(2)
    assert game.champions[1].alive is True
    assert game.champions[0].alive is False
    assert game.nb_live == 1
    assert out.getvalue() == "The player 2(beta) is alive.\n"


def test_update_champions_kills_silent_players():
    game, _ = _game()
    game.champions[0].alive = True
    game.cycles = 12
    game.update_champions()
    assert game.champions[1].dead is True
    assert game.champions[1].count_dead > 0
    assert game.champions[0].dead is False
    assert game.champions[0].alive is False
    assert game.cycles == 0


def test_speed_round_trip():
    game, _ = _game()
    assert game.speed_up() == DEFAULT_SLEEP_US // SLEEP_MOD
    assert game.slow_down() == DEFAULT_SLEEP_US


def test_run_one_cycle_idle_when_not_running():
    game, _ = _game()
    assert game.run_one_cycle() is False
    assert game.tot_cycles == 0
    assert len(game.history) == 0


def test_run_one_cycle_executes_live():
    game, out = _game()
    game.running = True
    game.screen = Screen.GAMEPLAY
    calls = 0
    while len(game.history) == 0 and calls < 100:
        game.run_one_cycle()
        calls += 1
    assert calls == find_op(1).nbr_cycles + 1
    assert game.tot_cycles == calls
    assert {entry.text for entry in game.history} == {"alpha: live",
                                                      "beta: live"}
    assert game.champions[0].alive is True
    assert game.champions[1].alive is False
    assert "The player 1(alpha) is alive." in out.getvalue()


def test_run_one_cycle_reports_end():
    game, _ = _game()
    game.running = True
    game.screen = Screen.GAMEPLAY
    game.champions[1].dead = True
    assert game.run_one_cycle() is True
    assert game.screen == Screen.ENDING


def test_status_lines():
    game, _ = _game()
    assert game.status_lines() == ["Lives: 0 / 40",
                                   f"Cycles to die: 0 / {CYCLE_TO_DIE}"]


def test_main_help(capsys):
    assert main(["-h"]) == 0
    assert capsys.readouterr().out == HELP_TEXT


@pytest.mark.parametrize("argv", [[], ["missing_champion.cor"],
                                  ["-dump", "x", "a.cor", "b.cor"]])
def test_main_rejects_bad_arguments(argv):
    assert main(argv) == EXIT_ERROR