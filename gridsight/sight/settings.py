# sight/settings.py
from __future__ import annotations

# Window / render
SCREEN_WIDTH: int = 1280
SCREEN_HEIGHT: int = 720
SCREEN_SIZE: tuple[int, int] = (SCREEN_WIDTH, SCREEN_HEIGHT)
WINDOW_TITLE: str = "gridsight - line of sight inspector"
FPS: int = 60
DT_CLAMP: float = 0.25

# Board defaults (in cells) when no map file is given
DEFAULT_BOARD_COLS: int = 26
DEFAULT_BOARD_ROWS: int = 20
DEFAULT_MAP_PATH: str = "map.json"

# Camera (pixels per cell, zoomed with the mouse wheel)
CELL_PX: int = 40
CELL_PX_MIN: int = 12
CELL_PX_MAX: int = 96
ZOOM_STEP: int = 4
CAMERA_PAN_SPEED: float = 800.0      # px/sec
CAMERA_FAST_MULT: float = 2.0        # hold Shift to go faster
MOUSE_DRAG_BUTTONS: tuple[int, ...] = (2, 3)  # middle or right

# Colors
BG_COLOR: tuple[int, int, int] = (15, 15, 20)
GRID_COLOR: tuple[int, int, int] = (45, 45, 60)
GRID_HILITE: tuple[int, int, int] = (70, 70, 100)
EMPTY_RGB: tuple[int, int, int] = (234, 241, 221)
BLOCKING_RGBA: tuple[int, int, int, int] = (160, 40, 40, 200)
BLOCKING_BORDER_RGB: tuple[int, int, int] = (220, 80, 80)

# Edges: (color, width in px)
WALL_STYLE: tuple[tuple[int, int, int], int] = ((0, 0, 0), 5)
BLOCKING_EDGE_STYLE: tuple[tuple[int, int, int], int] = ((255, 0, 0), 4)
IMPASSABLE_STYLE: tuple[tuple[int, int, int], int] = ((255, 0, 0), 4)
EDGE_CANDIDATE_RGB: tuple[int, int, int] = (0, 200, 255)

# Selection + sightline overlay
SOURCE_RGBA: tuple[int, int, int, int] = (0, 200, 255, 200)
LOS_CLEAR_RGBA: tuple[int, int, int, int] = (0, 255, 0, 180)
LOS_WEDGE_RGBA: tuple[int, int, int, int] = (0, 255, 0, 50)
LOS_BLOCKED_RGBA: tuple[int, int, int, int] = (255, 60, 60, 180)

# HUD / labels
HUD_BG_RGBA: tuple[int, int, int, int] = (0, 0, 0, 150)
HUD_TEXT_RGB: tuple[int, int, int] = (240, 240, 240)
HUD_FONT_SIZE: int = 20
EDIT_HINT_RGBA: tuple[int, int, int, int] = (30, 30, 30, 180)

# Edge picking (fractions of a cell)
EDGE_PICK_THRESHOLD: float = 0.3
EDGE_PICK_CORNER_THRESHOLD: float = 0.2
