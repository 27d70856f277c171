"""Colours used by the visual front end, as RGBA tuples."""

from __future__ import annotations

from .utils import MAX_CHAMPIONS_AMT

Color = tuple[int, int, int, int]

RED: Color = (230, 41, 55, 255)
BLUE: Color = (0, 121, 241, 255)
GREEN: Color = (0, 228, 48, 255)
ORANGE: Color = (255, 161, 0, 255)
YELLOW: Color = (253, 249, 0, 255)
GRAY: Color = (130, 130, 130, 255)
WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)
RAYWHITE: Color = (245, 245, 245, 255)

COLORS: tuple[Color, ...] = (RED, BLUE, GREEN, ORANGE)


def get_champ_color(nb_player: int) -> Color:
    """Return the colour of a player, cycling through the four team colours."""
    return COLORS[nb_player % MAX_CHAMPIONS_AMT]