# sight/world/camera.py
from __future__ import annotations
from dataclasses import dataclass
import pygame

from sight import settings


@dataclass(slots=True)
class Camera2D:
    """Maps board units (cells/vertices) to screen pixels with pan and zoom."""
    cols: int
    rows: int
    screen_w: int
    screen_h: int
    cell_px: int = settings.CELL_PX
    offset_x: float = 0.0
    offset_y: float = 0.0

    def _clamp(self) -> None:
        # allow half a screen of slack so small boards can be centred
        max_x = max(0, self.cols * self.cell_px - self.screen_w // 2)
        max_y = max(0, self.rows * self.cell_px - self.screen_h // 2)
        self.offset_x = min(max(-self.screen_w / 2, self.offset_x), float(max_x))
        self.offset_y = min(max(-self.screen_h / 2, self.offset_y), float(max_y))

    def set_offset(self, x: float, y: float) -> None:
        self.offset_x, self.offset_y = x, y
        self._clamp()

    def move(self, dx: float, dy: float) -> None:
        self.offset_x += dx
        self.offset_y += dy
        self._clamp()

    def zoom_at(self, sx: int, sy: int, step: int) -> None:
        """Change cell size by `step` px, keeping the board point under (sx, sy) fixed."""
        bx, by = self.screen_to_board(sx, sy)
        self.cell_px = min(settings.CELL_PX_MAX, max(settings.CELL_PX_MIN, self.cell_px + step))
        self.set_offset(bx * self.cell_px - sx, by * self.cell_px - sy)

    # Conversions
    def board_to_screen(self, x: float, y: float) -> tuple[int, int]:
        return int(x * self.cell_px - self.offset_x), int(y * self.cell_px - self.offset_y)

    def screen_to_board(self, sx: float, sy: float) -> tuple[float, float]:
        return (sx + self.offset_x) / self.cell_px, (sy + self.offset_y) / self.cell_px

    def cell_rect(self, col: int, row: int) -> pygame.Rect:
        x, y = self.board_to_screen(col, row)
        return pygame.Rect(x, y, self.cell_px, self.cell_px)

    def visible_cells(self) -> tuple[range, range]:
        first_c = max(0, int(self.offset_x // self.cell_px))
        last_c = min(self.cols, int((self.offset_x + self.screen_w) // self.cell_px) + 1)
        first_r = max(0, int(self.offset_y // self.cell_px))
        last_r = min(self.rows, int((self.offset_y + self.screen_h) // self.cell_px) + 1)
        return range(first_c, last_c), range(first_r, last_r)

    def center_on_board(self, x: float, y: float) -> None:
        self.set_offset(x * self.cell_px - self.screen_w // 2, y * self.cell_px - self.screen_h // 2)
