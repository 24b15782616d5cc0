# sight/scenes/inspector.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pygame

from sight import settings
from sight.editor.tools import cycle_cell, cycle_edge, pick_cell, pick_edge
from sight.io.mapfile import save_board
from sight.world.camera import Camera2D
from sight.world.corners import EdgePoint
from sight.world.draw import (
    draw_board,
    draw_cell_highlight,
    draw_edge_candidate,
    draw_sightline,
)
from sight.world.grid import GridBoard
from sight.world.los import LineOfSightResult, check_line_of_sight

logger = logging.getLogger(__name__)

Coord = tuple[int, int]


@dataclass
class InspectorScene:
    """
    Line of sight inspector:
    - LMB picks the source cell, hovering a cell queries LOS to it
    - O: cell edit (LMB cycles Empty/Blocking/OutOfBounds)
    - W: edge edit (LMB near a cell side cycles Clear/Wall/Blocking/Impassable)
    - F: ignore figures, R: apply edge rules, Ctrl+S: save
    """
    screen: pygame.Surface
    board: GridBoard
    map_path: Path = field(default_factory=lambda: Path(settings.DEFAULT_MAP_PATH))
    camera: Camera2D = field(init=False)

    # drag
    _dragging: bool = field(default=False, init=False)
    _drag_start_screen: tuple[int, int] | None = field(default=None, init=False)
    _drag_start_offset: tuple[float, float] | None = field(default=None, init=False)

    # edit modes
    _cell_edit: bool = field(default=False, init=False)
    _edge_edit: bool = field(default=False, init=False)
    _ignore_figures: bool = field(default=False, init=False)

    # query
    _source: Coord | None = field(default=None, init=False)
    _hover: Coord | None = field(default=None, init=False)
    _result: LineOfSightResult | None = field(default=None, init=False)
    _message: str | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        sw, sh = self.screen.get_size()
        self.camera = Camera2D(self.board.width, self.board.height, sw, sh)
        self.camera.center_on_board(self.board.width / 2, self.board.height / 2)
        self._font = pygame.font.Font(None, settings.HUD_FONT_SIZE)

    # ---- Input ----
    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            self._handle_key(event)

        if event.type == pygame.MOUSEWHEEL:
            mx, my = pygame.mouse.get_pos()
            self.camera.zoom_at(mx, my, event.y * settings.ZOOM_STEP)

        # camera drag
        if event.type == pygame.MOUSEBUTTONDOWN and event.button in settings.MOUSE_DRAG_BUTTONS:
            self._dragging = True
            self._drag_start_screen = event.pos
            self._drag_start_offset = (self.camera.offset_x, self.camera.offset_y)

        if event.type == pygame.MOUSEBUTTONUP and event.button in settings.MOUSE_DRAG_BUTTONS:
            self._dragging = False
            self._drag_start_screen = None
            self._drag_start_offset = None

        if event.type == pygame.MOUSEMOTION:
            if self._dragging and self._drag_start_screen and self._drag_start_offset:
                sx, sy = self._drag_start_screen
                ox0, oy0 = self._drag_start_offset
                mx, my = event.pos
                self.camera.set_offset(ox0 - (mx - sx), oy0 - (my - sy))
            self._set_hover(event.pos)

        # left-click (editor priority)
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            fx, fy = self.camera.screen_to_board(*event.pos)

            if self._edge_edit:
                edge = pick_edge(self.board, fx, fy)
                if edge is not None:
                    cycle_edge(self.board, edge)
                    self._requery()
                return

            cell = pick_cell(self.board, fx, fy)
            if cell is None:
                return

            if self._cell_edit:
                cycle_cell(self.board, *cell)
                self._requery()
                return

            self._source = None if cell == self._source else cell
            self._requery()

    def _handle_key(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_ESCAPE:
            pygame.event.post(pygame.event.Event(pygame.QUIT))
        elif event.key == pygame.K_o:
            self._cell_edit = not self._cell_edit
            if self._cell_edit:
                self._edge_edit = False
        elif event.key == pygame.K_w:
            self._edge_edit = not self._edge_edit
            if self._edge_edit:
                self._cell_edit = False
        elif event.key == pygame.K_f:
            self._ignore_figures = not self._ignore_figures
            self._requery()
        elif event.key == pygame.K_r:
            self.board.apply_edge_rules()
            self._message = "Edge rules applied"
            self._requery()
        elif event.key == pygame.K_s and event.mod & pygame.KMOD_CTRL:
            self._save()

    def _save(self) -> None:
        try:
            save_board(self.board, self.map_path)
        except OSError as e:
            logger.warning("Could not save %s: %s", self.map_path, e)
            self._message = f"Save failed: {e.strerror or e}"
            return
        self._message = f"Saved {self.map_path}"

    # ---- Query ----
    def _set_hover(self, pos: tuple[int, int]) -> None:
        cell = pick_cell(self.board, *self.camera.screen_to_board(*pos))
        if cell != self._hover:
            self._hover = cell
            self._requery()

    def _requery(self) -> None:
        if self._source is None or self._hover is None:
            self._result = None
            return
        self._result = check_line_of_sight(
            self.board, self._source, self._hover, ignore_figures=self._ignore_figures
        )

    def _edge_under_mouse(self) -> Optional[EdgePoint]:
        fx, fy = self.camera.screen_to_board(*pygame.mouse.get_pos())
        return pick_edge(self.board, fx, fy)

    # ---- Fixed update ----
    def update(self, dt: float) -> None:
        # Ctrl+letter is a shortcut (Ctrl+S saves), not a pan
        if pygame.key.get_mods() & pygame.KMOD_CTRL:
            return
        keys = pygame.key.get_pressed()
        dx = (keys[pygame.K_RIGHT] or keys[pygame.K_d]) - (keys[pygame.K_LEFT] or keys[pygame.K_a])
        dy = (keys[pygame.K_DOWN] or keys[pygame.K_s]) - (keys[pygame.K_UP])
        if dx or dy:
            length = math.hypot(dx, dy)
            nx, ny = dx / length, dy / length
            fast = keys[pygame.K_LSHIFT] or keys[pygame.K_RSHIFT]
            speed = settings.CAMERA_PAN_SPEED * (settings.CAMERA_FAST_MULT if fast else 1.0)
            self.camera.move(nx * speed * dt, ny * speed * dt)

    # ---- Render ----
    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(settings.BG_COLOR)
        draw_board(surface, self.board, self.camera)

        if self._edge_edit:
            edge = self._edge_under_mouse()
            if edge is not None:
                draw_edge_candidate(surface, self.camera, edge)

        if self._source is not None:
            draw_cell_highlight(surface, self.camera, self._source, settings.SOURCE_RGBA, width=3)
        if self._result is not None:
            draw_sightline(surface, self.camera, self._result)
        if self._hover is not None:
            draw_cell_highlight(surface, self.camera, self._hover, (*settings.GRID_HILITE, 255))

        self._draw_hud(surface)

    # ---- HUD ----
    def _draw_hud(self, surface: pygame.Surface) -> None:
        pieces = [f"{self.board.name} ({self.board.width}x{self.board.height})"]
        if self._cell_edit:
            pieces.append("Cell Edit (O) | LMB cycle")
        if self._edge_edit:
            pieces.append("Edge Edit (W) | LMB cycle")
        if self._ignore_figures:
            pieces.append("Ignoring figures (F)")

        if self._source is None:
            pieces.append("LMB: pick source")
        elif self._result is not None:
            res = self._result
            if res.has_line_of_sight:
                corners = "/".join(c.name for c in res.target_corners)
                pieces.append(f"LOS: Yes | {res.source_corner.name} -> {corners}")
            else:
                pieces.append("LOS: No")

        if self._message:
            pieces.append(self._message)

        text = "  |  ".join(pieces)
        pad = 8
        surf_text = self._font.render(text, True, settings.HUD_TEXT_RGB)
        w, h = surf_text.get_size()
        pill = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        tint = settings.EDIT_HINT_RGBA if self._cell_edit or self._edge_edit else settings.HUD_BG_RGBA
        pill.fill(tint)
        pill.blit(surf_text, (pad, pad))
        surface.blit(pill, (10, 10))
