# render.py
from typing import Tuple
import math

import pygame  # type: ignore

from .config import CELL_SIZE, BG, GREEN, RED, TEXT, TEXT_ALPHA
from .game import GameState


def body_alpha(index: int) -> float:
    """Body segments fade toward the tail, but never below 0.4."""
    return max(0.4, 1 - index * 0.08)


def food_pulse(now_ms: int) -> float:
    return math.sin(now_ms * 0.015) * 0.3 + 0.7


def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Tuple[int, ...],
              inset: int = 1, cell_size: int = CELL_SIZE) -> None:
    size = cell_size - inset
    rect = pygame.Rect(gx * cell_size, gy * cell_size, size, size)
    if len(color) == 4 and color[3] < 255:
        # draw.rect ignores alpha on an opaque surface; blend through a layer
        layer = pygame.Surface((size, size), pygame.SRCALPHA)
        layer.fill(color)
        screen.blit(layer, rect.topleft)
    else:
        pygame.draw.rect(screen, color[:3], rect)


def draw_game(screen: pygame.Surface, font: pygame.font.Font, state: GameState,
              game_count: int, now_ms: int, cell_size: int = CELL_SIZE) -> None:
    screen.fill(BG)

    # snake: bright head, fading body
    for index, (x, y) in enumerate(state.snake):
        if index == 0:
            draw_cell(screen, x, y, GREEN, inset=1, cell_size=cell_size)
        else:
            alpha = int(round(body_alpha(index) * 255))
            draw_cell(screen, x, y, GREEN + (alpha,), inset=2, cell_size=cell_size)

    # food (none once the board is full)
    if state.food is not None:
        fx, fy = state.food
        draw_cell(screen, fx, fy, RED + (int(round(food_pulse(now_ms) * 255)),),
                  inset=1, cell_size=cell_size)

    # score and game counter
    for row, line in enumerate((f"Score: {state.score}", f"Games: {game_count}")):
        txt = font.render(line, True, TEXT)
        txt.set_alpha(TEXT_ALPHA)
        screen.blit(txt, (8, 4 + row * 16))
