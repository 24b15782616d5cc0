# sight/world/draw.py
from __future__ import annotations
import pygame

from sight import settings
from sight.world.camera import Camera2D
from sight.world.corners import EdgePoint
from sight.world.grid import Cell, Edge, EdgeDirection, GridBoard
from sight.world.los import LineOfSightResult

EDGE_STYLES: dict[Edge, tuple[tuple[int, int, int], int]] = {
    Edge.WALL: settings.WALL_STYLE,
    Edge.BLOCKING: settings.BLOCKING_EDGE_STYLE,
    Edge.IMPASSABLE: settings.IMPASSABLE_STYLE,
}


def _edge_end(e: EdgePoint) -> tuple[int, int]:
    return (e.x + 1, e.y) if e.dir is EdgeDirection.RIGHT else (e.x, e.y + 1)


def draw_cells(surface: pygame.Surface, board: GridBoard, camera: Camera2D) -> None:
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    cols, rows = camera.visible_cells()
    for c in cols:
        for r in rows:
            cell = board.get_cell(c, r)
            rect = camera.cell_rect(c, r)
            if cell is Cell.OUT_OF_BOUNDS:
                continue
            pygame.draw.rect(surface, settings.EMPTY_RGB, rect)
            pygame.draw.rect(surface, settings.GRID_COLOR, rect, width=1)
            if cell is Cell.BLOCKING:
                overlay.fill(settings.BLOCKING_RGBA, rect)
                pygame.draw.rect(overlay, settings.BLOCKING_BORDER_RGB, rect, width=1)
    surface.blit(overlay, (0, 0))


def draw_edges(surface: pygame.Surface, board: GridBoard, camera: Camera2D) -> None:
    cols, rows = camera.visible_cells()
    for x in range(cols.start, cols.stop + 1):
        for y in range(rows.start, rows.stop + 1):
            for dir in (EdgeDirection.RIGHT, EdgeDirection.DOWN):
                if not board.is_valid_edge(x, y, dir):
                    continue
                style = EDGE_STYLES.get(board.get_edge(x, y, dir))
                if style is None:
                    continue
                color, width = style
                e = EdgePoint(x, y, dir)
                a = camera.board_to_screen(x, y)
                b = camera.board_to_screen(*_edge_end(e))
                if board.get_edge(x, y, dir) is Edge.IMPASSABLE:
                    # dashed: draw the middle third and both ends
                    for t0, t1 in ((0.0, 1 / 6), (2 / 6, 4 / 6), (5 / 6, 1.0)):
                        pa = (a[0] + (b[0] - a[0]) * t0, a[1] + (b[1] - a[1]) * t0)
                        pb = (a[0] + (b[0] - a[0]) * t1, a[1] + (b[1] - a[1]) * t1)
                        pygame.draw.line(surface, color, pa, pb, width)
                else:
                    pygame.draw.line(surface, color, a, b, width)


def draw_board(surface: pygame.Surface, board: GridBoard, camera: Camera2D) -> None:
    draw_cells(surface, board, camera)
    draw_edges(surface, board, camera)


def draw_cell_highlight(surface: pygame.Surface, camera: Camera2D, cell: tuple[int, int], rgba, width: int = 2) -> None:
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    pygame.draw.rect(overlay, rgba, camera.cell_rect(*cell), width=width)
    surface.blit(overlay, (0, 0))


def draw_edge_candidate(surface: pygame.Surface, camera: Camera2D, edge: EdgePoint) -> None:
    a = camera.board_to_screen(edge.x, edge.y)
    b = camera.board_to_screen(*_edge_end(edge))
    pygame.draw.line(surface, settings.EDGE_CANDIDATE_RGB, a, b, 3)


def draw_sightline(surface: pygame.Surface, camera: Camera2D, result: LineOfSightResult) -> None:
    """Winning wedge in green, or a red centre-to-centre line when blocked."""
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    lines = result.sightlines()
    if lines:
        origin = camera.board_to_screen(*lines[0][0])
        ends = [camera.board_to_screen(*p) for _, p in lines]
        pygame.draw.polygon(overlay, settings.LOS_WEDGE_RGBA, [origin, *ends])
        for end in ends:
            pygame.draw.line(overlay, settings.LOS_CLEAR_RGBA, origin, end, width=3)
    else:
        sx, sy = result.source
        tx, ty = result.target
        a = camera.board_to_screen(sx + 0.5, sy + 0.5)
        b = camera.board_to_screen(tx + 0.5, ty + 0.5)
        pygame.draw.line(overlay, settings.LOS_BLOCKED_RGBA, a, b, width=4)
    surface.blit(overlay, (0, 0))
