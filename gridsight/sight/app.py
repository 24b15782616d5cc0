# sight/app.py
from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import pygame

from sight import settings
from sight.io.mapfile import MapFormatError, load_board
from sight.scenes.inspector import InspectorScene
from sight.world.grid import GridBoard

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gridsight", description="Inspect line of sight on a grid map.")
    parser.add_argument("map", nargs="?", help="map JSON file (created on save if missing)")
    parser.add_argument("--width", type=int, default=settings.DEFAULT_BOARD_COLS, help="columns for a new board")
    parser.add_argument("--height", type=int, default=settings.DEFAULT_BOARD_ROWS, help="rows for a new board")
    parser.add_argument("--log-level", default="INFO", help="logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def _open_board(args: argparse.Namespace) -> tuple[GridBoard, Path]:
    path = Path(args.map or settings.DEFAULT_MAP_PATH)
    if path.exists():
        return load_board(path), path
    logger.info("No map at %s, starting a blank %dx%d board", path, args.width, args.height)
    return GridBoard(args.width, args.height), path


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        board, path = _open_board(args)
    except (OSError, MapFormatError) as e:
        logger.error("Could not open map: %s", e)
        return 1

    pygame.init()
    pygame.display.set_caption(f"{settings.WINDOW_TITLE} - {board.name}")
    screen = pygame.display.set_mode(settings.SCREEN_SIZE)
    clock = pygame.time.Clock()

    scene = InspectorScene(screen, board, map_path=path)

    running = True
    while running:
        # -- Input --
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            else:
                scene.handle_event(event)

        # -- Update --
        dt = min(clock.tick(settings.FPS) / 1000.0, settings.DT_CLAMP)
        scene.update(dt)

        # -- Render --
        scene.draw(screen)
        pygame.display.flip()

    pygame.quit()
    return 0
