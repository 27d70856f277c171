"""Drawing of the visual front end: player panels, the memory grid,
the instruction history and the end screen."""

from __future__ import annotations

import time
from enum import IntEnum
from typing import Any, Callable, Iterable, Sequence

import pygame

from .champions import Champion
from .colors import (BLACK, GRAY, GREEN, RAYWHITE, RED, WHITE, YELLOW, Color,
                     get_champ_color)
from .llist import LinkedList
from .op import MEM_SIZE
from .tracked import HistoryEntry, TrackedMemory

FONT_SIZE = 11
INIT_X = 5
INIT_Y = 1080 // 3
SCREEN_HEIGHT = 1080
SCREEN_WIDTH = 1920
SLEEP_MOD = 5

KEYGEN_SCREEN_WIDTH = 600
KEYGEN_SCREEN_HEIGHT = 600
KEYGEN_MAX_WIDTH = KEYGEN_SCREEN_WIDTH
KEYGEN_SCROLLING_OFFSET = 4

PLAYER_HISTORY_LIMIT = 8
HISTORY_LIMIT = 21
DEAD_BANNER_SECONDS = 5

RESTART_BUTTON = pygame.Rect(20, 20, 300, 50)

Font = Callable[[int], Any]


class Screen(IntEnum):
    """The three stages of the visual game."""

    LOGO = 0
    GAMEPLAY = 1
    ENDING = 2


def _draw_text(surface: pygame.Surface, font: Font, text: str, x: int, y: int,
               size: int, color: Color) -> None:
    face = font(size)
    for row, line in enumerate(text.split("\n")):
        surface.blit(face.render(line, True, color), (int(x), int(y) + row * size))


def _rounded(surface: pygame.Surface, color: Color, rect: tuple[int, ...]) -> None:
    pygame.draw.rect(surface, color, pygame.Rect(*map(int, rect)), border_radius=5)


def default_scrolling_text_x(text: str, max_width: int, font_size: int,
                             inverse: bool) -> int:
    """Return where a scrolling text starts: off the left edge, or off the right."""
    span = (len(text) - KEYGEN_SCROLLING_OFFSET) * font_size
    return max_width + span if inverse else -span


def next_scrolling_x(text: str, x: int, speed: int, font_size: int,
                     inverse: bool) -> int:
    """Move a scrolling text one step, wrapping it once it is off screen."""
    limit = default_scrolling_text_x(text, KEYGEN_MAX_WIDTH, font_size, not inverse)
    if x != limit:
        return x - speed if inverse else x + speed
    return default_scrolling_text_x(text, KEYGEN_MAX_WIDTH, font_size, inverse)


def mark_process_positions(champions: Iterable[Champion],
                           tracked: TrackedMemory) -> None:
    """Flag the memory cell under every living process."""
    for champion in champions:
        if champion.dead:
            continue
        for proc in champion.procs:
            if not proc.dead:
                tracked.is_index[proc.index % MEM_SIZE] = True


def history_lines(history: Iterable[HistoryEntry], nb_player: int | None,
                  limit: int) -> list[HistoryEntry]:
    """Return at most limit history entries, only those of nb_player if given."""
    selected: list[HistoryEntry] = []
    for entry in history:
        if len(selected) >= limit:
            break
        if nb_player is None or entry.nb_player == nb_player:
            selected.append(entry)
    return selected


def winner_index(champions: Sequence[Champion]) -> int:
    """Return the position of the last champion still marked alive, else 0."""
    winner = 0
    for position, champion in enumerate(champions):
        if champion.alive:
            winner = position
    return winner


def end_lines(champions: Sequence[Champion], cycles: int) -> list[str]:
    """Return the winner line, the cycle count and one line per loser."""
    winner = champions[winner_index(champions)]
    lines = [
        f"The Winner is player n°{winner.nb_player}({winner.prog_name})\n"
        f"with {winner.nb_procs} procs",
        f"Total cycles: {cycles}",
    ]
    lines.extend(
        f"The player n°{champion.nb_player}({champion.prog_name}) "
        f"loses with {champion.nb_procs} procs"
        for champion in champions if champion.dead
    )
    return lines


def _state_color(champion: Champion) -> Color | None:
    if not champion.dead:
        return GREEN if champion.alive else GRAY
    return None if champion.alive else RED


def display_player(surface: pygame.Surface, font: Font,
                   champions: Sequence[Champion], cycles: int,
                   history: LinkedList) -> None:
    """Draw one panel per champion and the total cycle counter."""
    disp = 10
    for champion in champions:
        color = get_champ_color(champion.nb_player)
        _draw_text(surface, font, champion.prog_name, disp, 20, 40, color)
        _draw_text(surface, font, "Live state:", disp, 80, 20, RAYWHITE)
        state = _state_color(champion)
        if state is not None:
            pygame.draw.rect(surface, state, pygame.Rect(disp + 120, 80, 40, 40))
        _draw_text(surface, font, f"nb of process: {champion.nb_procs}",
                   disp, 120, 20, RAYWHITE)
        _rounded(surface, WHITE, (disp, 150, 200, 180))
        _rounded(surface, BLACK, (disp + 5, 155, 190, 170))
        entries = history_lines(history, champion.nb_player, PLAYER_HISTORY_LIMIT)
        for row, entry in enumerate(entries):
            _draw_text(surface, font, entry.text, disp + 10, 155 + 20 * row, 20,
                       get_champ_color(entry.nb_player))
        disp += SCREEN_WIDTH // 4
    _draw_text(surface, font, f"Total Cycles: {cycles}", 20,
               SCREEN_HEIGHT // 3 - 20, 20, RAYWHITE)


def display_end(surface: pygame.Surface, font: Font,
                champions: Sequence[Champion], cycles: int,
                background: pygame.Surface | None, scroll: float) -> float:
    """Draw the end screen over a scrolling background; return the new scroll."""
    scroll -= 0.5
    width = background.get_width() if background is not None else 0
    if scroll <= -width * 2:
        scroll = 0.0
    if background is not None:
        scaled = pygame.transform.scale(
            background, (width * 2, background.get_height() * 2))
        surface.blit(scaled, (int(scroll), 0))
        surface.blit(scaled, (int(width * 2 + scroll), 0))
    _rounded(surface, WHITE, tuple(RESTART_BUTTON))
    _draw_text(surface, font, "Restart", 22, 22, 50, BLACK)
    winner, total, *losers = end_lines(champions, cycles)
    _draw_text(surface, font, winner, SCREEN_WIDTH // 3 - 140,
               SCREEN_HEIGHT // 2 - 70, 70, YELLOW)
    _draw_text(surface, font, total, SCREEN_WIDTH // 3,
               int(SCREEN_HEIGHT / 1.5) - 30, 20, RAYWHITE)
    for row, line in enumerate(losers):
        _draw_text(surface, font, line, SCREEN_WIDTH // 3,
                   int(SCREEN_HEIGHT / 1.5) + 20 * row, 20, WHITE)
    return scroll


def display_history(surface: pygame.Surface, font: Font,
                    history: LinkedList) -> None:
    """Draw the panel listing the most recent instructions of every player."""
    left = int(SCREEN_WIDTH / 1.25)
    _rounded(surface, WHITE, (left, 80, SCREEN_WIDTH // 6, 900))
    _rounded(surface, BLACK, (left + 5, 85, SCREEN_WIDTH // 6 - 10, 890))
    for row, entry in enumerate(history_lines(history, None, HISTORY_LIMIT)):
        _draw_text(surface, font, entry.text, left + 10, 90 + 42 * row, 40,
                   get_champ_color(entry.nb_player))


def display_dead(surface: pygame.Surface, font: Font,
                 champions: Iterable[Champion], now: float) -> list[str]:
    """Show a banner for champions that died in the last few seconds."""
    shown: list[str] = []
    left = int(SCREEN_WIDTH / 1.20)
    for champion in champions:
        if (champion.count_dead != 0 and champion.dead
                and now - champion.count_dead < DEAD_BANNER_SECONDS):
            message = f"Player n°{champion.nb_player}({champion.prog_name}) has died"
            pygame.draw.rect(surface, WHITE, pygame.Rect(left, 0, 380, 70))
            pygame.draw.rect(surface, BLACK, pygame.Rect(left + 5, 5, 310, 60))
            _draw_text(surface, font, message, left + 7, 15, 20,
                       get_champ_color(champion.nb_player))
            shown.append(message)
    return shown


def display_map(surface: pygame.Surface, font: Font, tracked: TrackedMemory,
                champions: Sequence[Champion], cycles: int,
                history: LinkedList) -> None:
    """Draw the player panels and the whole memory as a grid of hex bytes."""
    display_player(surface, font, champions, cycles, history)
    mark_process_positions(champions, tracked)
    x, y = INIT_X, INIT_Y
    for position, (byte, color) in enumerate(zip(tracked.byte, tracked.color)):
        if x >= SCREEN_WIDTH - INIT_X * 2:
            x = INIT_X
            y += 10
        if tracked.is_index[position]:
            pygame.draw.rect(surface, GRAY, pygame.Rect(x, y, 11, 11))
            tracked.is_index[position] = False
        _draw_text(surface, font, f"{byte:02X}", x, y, FONT_SIZE, color)
        x += 20
    display_dead(surface, font, champions, time.monotonic())