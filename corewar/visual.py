"""The windowed front end: plays the game cycle by cycle on screen."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Any, Sequence, TextIO

import pygame

from .champions import Champion, setup_champions
from .cli import EXIT_ERROR, HELP_TEXT
from .colors import BLACK, RAYWHITE, WHITE, YELLOW, get_champ_color
from .display import (RESTART_BUTTON, SCREEN_HEIGHT, SCREEN_WIDTH, SLEEP_MOD,
                      Screen, display_end, display_history, display_map)
from .dump import print_map, print_map_cycle
from .flags import FlagError, Flags, parse_visual_flags
from .llist import LinkedList
from .op import CYCLE_DELTA, CYCLE_TO_DIE, NBR_LIVE
from .textutils import mini_printf
from .tracked import TrackedMemory, inst_ray, setup_tracked
from .vm import LoadError

DEFAULT_SLEEP_US = 100000
RESOURCES = Path("ressources")


class VisualGame:
    """Game state of the windowed front end, advanced one cycle per frame."""

    def __init__(self, tracked: TrackedMemory, flags: Flags,
                 champions: list[Champion], out: TextIO | None = None) -> None:
        self.tracked = tracked
        self.flags = flags
        self.champions = champions
        self.out = out
        self.history = LinkedList()
        self.screen = Screen.LOGO
        self.running = False
        self.cycles = 0
        self.nb_delta = 0
        self.nb_live = 0
        self.tot_cycles = 0
        self.sleep_us = DEFAULT_SLEEP_US
        self._nb_last = 0

    @property
    def cycle_to_die(self) -> int:
        return CYCLE_TO_DIE - self.nb_delta * CYCLE_DELTA

    def champs_alive(self) -> bool:
        """Tell whether more than one champion remains; end the game if not."""
        alive = 0
        for champion in self.champions:
            if not champion.dead:
                alive += 1
                self._nb_last = champion.nb_player
        if alive > 1:
            return True
        for champion in self.champions:
            if champion.nb_player == self._nb_last:
                mini_printf("The player %d(%s) has won.\n", champion.nb_player,
                            champion.prog_name, out=self.out)
        self.screen = Screen.ENDING
        return False

    def set_alive(self, player_nb: int) -> None:
        """Record a live for every living champion with this number."""
        for champion in self.champions:
            if not champion.dead and champion.nb_player == player_nb:
                mini_printf("The player %d(%s) is alive.\n", champion.nb_player,
                            champion.prog_name, out=self.out)
                champion.alive = True
                self.nb_live += 1

    def update_champions(self) -> None:
        """End a period: kill whoever did not live and note when they died."""
        for champion in self.champions:
            if not champion.alive:
                champion.dead = True
                champion.count_dead = time.monotonic()
            for proc in champion.procs:
                proc.dead = not proc.alive
                proc.alive = False
            champion.alive = False
        self.cycles = 0

    def _run_champion(self, champion: Champion) -> None:
        position = 0
        while position < len(champion.procs):
            if not champion.dead:
                self.set_alive(inst_ray(self.tracked, champion, position,
                                        self.history, self.out))
            position += 1

    def run_one_cycle(self) -> bool:
        """Play one cycle if the game is running; return True once it is over."""
        if not self.running or self.screen == Screen.ENDING:
            return False
        if not self.champs_alive():
            return True
        for champion in self.champions:
            self._run_champion(champion)
        print_map_cycle(self.flags.dump, self.tracked.byte, self.cycles, self.out)
        if self.nb_live >= NBR_LIVE:
            self.nb_delta += 1
            self.nb_live = 0
        if self.cycles >= self.cycle_to_die:
            self.update_champions()
        self.cycles += 1
        self.tot_cycles += 1
        return False

    def speed_up(self) -> int:
        """Shorten the pause between cycles; return the new pause in microseconds."""
        self.sleep_us //= SLEEP_MOD
        return self.sleep_us

    def slow_down(self) -> int:
        """Lengthen the pause between cycles; return the new pause in microseconds."""
        self.sleep_us *= SLEEP_MOD
        return self.sleep_us

    def status_lines(self) -> list[str]:
        """Return the live counter and the cycles-to-die counter."""
        return [f"Lives: {self.nb_live} / {NBR_LIVE}",
                f"Cycles to die: {self.cycles} / {self.cycle_to_die}"]


class _CachedFont:
    def __init__(self, font: Any) -> None:
        self._font = font
        self._rendered: dict[tuple[str, bool, tuple[int, ...]], pygame.Surface] = {}

    def render(self, text: str, antialias: bool, color: Any) -> pygame.Surface:
        key = (text, antialias, tuple(color))
        if key not in self._rendered:
            self._rendered[key] = self._font.render(text, antialias, color)
        return self._rendered[key]


class _FontCache:
    def __init__(self) -> None:
        self._fonts: dict[int, _CachedFont] = {}

    def __call__(self, size: int) -> _CachedFont:
        if size not in self._fonts:
            self._fonts[size] = _CachedFont(pygame.font.Font(None, size))
        return self._fonts[size]


def _load_image(path: Path) -> pygame.Surface | None:
    if not path.is_file():
        return None
    try:
        return pygame.image.load(str(path))
    except pygame.error:
        return None


def _play_music(path: Path) -> None:
    if not path.is_file():
        return
    try:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        pygame.mixer.music.load(str(path))
        pygame.mixer.music.play(-1)
    except pygame.error:
        return


def _text(surface: pygame.Surface, font: _FontCache, text: str, x: int,
          y: int, size: int, color: Any) -> None:
    surface.blit(font(size).render(text, True, color), (int(x), int(y)))


def _display_logo(surface: pygame.Surface, font: _FontCache,
                  champions: Sequence[Champion],
                  background: pygame.Surface | None, scroll: float) -> float:
    scroll -= 0.5
    width = background.get_width() if background is not None else 0
    if scroll <= -width * 2:
        scroll = 0.0
    if background is not None:
        scaled = pygame.transform.scale(
            background, (width * 2, background.get_height() * 2))
        surface.blit(scaled, (int(scroll), 0))
        surface.blit(scaled, (int(width * 2 + scroll), 0))
    _text(surface, font, "The Core War", SCREEN_WIDTH // 3, SCREEN_HEIGHT // 3,
          60, YELLOW)
    for row, champion in enumerate(champions):
        _text(surface, font,
              f"Player:{champion.nb_player} name:{champion.prog_name} "
              f"comment:{champion.comment}",
              SCREEN_WIDTH // 4, SCREEN_HEIGHT // 2 + 40 * row, 30,
              get_champ_color(champion.nb_player))
    _text(surface, font, "Press 'space' to start", 10, 10, 30, WHITE)
    return scroll


def _draw_status(surface: pygame.Surface, font: _FontCache,
                 game: VisualGame) -> None:
    lives, to_die = game.status_lines()
    _text(surface, font, lives, SCREEN_WIDTH // 3, SCREEN_HEIGHT // 3 - 20, 20,
          RAYWHITE)
    _text(surface, font, to_die, int(SCREEN_WIDTH / 1.5),
          SCREEN_HEIGHT // 3 - 20, 20, RAYWHITE)


def _gameloop(game: VisualGame) -> bool:
    pygame.init()
    restart = False
    try:
        surface = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Corewar")
        clock = pygame.time.Clock()
        font = _FontCache()
        background = _load_image(RESOURCES / "space.png")
        _play_music(RESOURCES / "intro.mp3")
        show_history = False
        logo_scroll = end_scroll = 0.0
        ending_music = False
        while not restart:
            click = None
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return restart
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_SPACE:
                        game.running = not game.running
                    elif event.key == pygame.K_h:
                        show_history = not show_history
                    elif event.key == pygame.K_DOWN:
                        game.slow_down()
                    elif event.key == pygame.K_UP:
                        game.speed_up()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    click = event.pos
            if game.running and game.screen != Screen.ENDING:
                game.screen = Screen.GAMEPLAY
            surface.fill(BLACK)
            if game.screen == Screen.LOGO:
                logo_scroll = _display_logo(surface, font, game.champions,
                                            background, logo_scroll)
            if game.screen == Screen.GAMEPLAY:
                display_map(surface, font, game.tracked, game.champions,
                            game.tot_cycles, game.history)
                if show_history:
                    display_history(surface, font, game.history)
                time.sleep(game.sleep_us / 1_000_000)
                game.run_one_cycle()
                if game.screen == Screen.GAMEPLAY:
                    _draw_status(surface, font, game)
            if game.screen == Screen.ENDING:
                if not ending_music:
                    _play_music(RESOURCES / "win.mp3")
                    ending_music = True
                end_scroll = display_end(surface, font, game.champions,
                                         game.tot_cycles, background, end_scroll)
                if click is not None and RESTART_BUTTON.collidepoint(click):
                    restart = True
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()
    return restart


def run_visual(flags: Flags, out: TextIO | None = None) -> bool:
    """Play one game in a window; return True if a restart was asked for."""
    stream = out if out is not None else sys.stdout
    champions = setup_champions(flags)
    tracked = setup_tracked(flags, champions)
    game = VisualGame(tracked, flags, champions, stream)
    restart = _gameloop(game)
    print_map(tracked.byte, stream)
    return restart


def main(argv: Sequence[str] | None = None) -> int:
    """Start the windowed game on the given arguments; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) == 1 and args[0] == "-h":
        sys.stdout.write(HELP_TEXT)
        return 0
    try:
        flags = parse_visual_flags(args)
        while run_visual(flags):
            pass
    except (FlagError, LoadError):
        return EXIT_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())