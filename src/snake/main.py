# main.py
from __future__ import annotations
import argparse
import logging
from dataclasses import replace

import pygame  # type: ignore

from .config import WIDTH, HEIGHT, CELL_SIZE, CFG
from .render import draw_game
from .session import Session

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Self-playing snake, as an animated background")
    p.add_argument("--width", type=int, default=WIDTH, help="window width in pixels")
    p.add_argument("--height", type=int, default=HEIGHT, help="window height in pixels")
    p.add_argument("--cell-size", type=int, default=CELL_SIZE, help="grid cell size in pixels")
    p.add_argument("--fps", type=int, default=CFG.fps, help="frame rate cap")
    p.add_argument("--seed", type=int, default=None, help="seed for a repeatable run")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = p.parse_args(argv)
    if args.cell_size <= 0:
        p.error("--cell-size must be positive")
    if args.width < args.cell_size or args.height < args.cell_size:
        p.error("window must be at least one cell wide and tall")
    return args


def handle_events(session: Session, cell_size: int) -> bool:
    """Process window events. Return False to quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False
        if event.type == pygame.VIDEORESIZE:
            gw = max(event.w // cell_size, 1)
            gh = max(event.h // cell_size, 1)
            logger.info("Window resized to %dx%d px (%dx%d cells)", event.w, event.h, gw, gh)
            session.resize(gw, gh)
    return True


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    font = pygame.font.SysFont("arial", 12)
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    pygame.display.set_caption("Snake — background")
    clock = pygame.time.Clock()
    logger.info("Window opened at %dx%d px", args.width, args.height)

    cfg = replace(CFG, seed=args.seed, fps=args.fps)
    session = Session(args.width // args.cell_size, args.height // args.cell_size, cfg=cfg)

    running = True
    while running:
        # 1) input
        running = handle_events(session, args.cell_size)
        if not running:
            break

        # 2) update (gated on time inside the session)
        now = pygame.time.get_ticks()
        session.update(now)

        # 3) render
        screen = pygame.display.get_surface()
        draw_game(screen, font, session.state, session.game_count, now, cell_size=args.cell_size)
        pygame.display.flip()
        clock.tick(cfg.fps)

    logger.info("Closing after %d finished game(s)", session.game_count)
    pygame.quit()


if __name__ == "__main__":
    main()
