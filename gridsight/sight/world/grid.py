# sight/world/grid.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)


class Cell(Enum):
    EMPTY = "Empty"
    BLOCKING = "Blocking"
    OUT_OF_BOUNDS = "OutOfBounds"


class Edge(Enum):
    CLEAR = "Clear"
    BLOCKING = "Blocking"
    IMPASSABLE = "Impassable"
    WALL = "Wall"


class EdgeDirection(Enum):
    DOWN = "Down"
    RIGHT = "Right"


# edges the editor sets by hand; apply_edge_rules() leaves these alone
USER_DEFINED_EDGES: frozenset[Edge] = frozenset({Edge.WALL, Edge.BLOCKING, Edge.IMPASSABLE})
LOS_BLOCKING_EDGES: frozenset[Edge] = frozenset({Edge.WALL, Edge.BLOCKING})


class OutOfBoundsError(IndexError):
    """Raised when writing a cell or edge that is not on the board."""


@dataclass(slots=True)
class GridBoard:
    """
    Cells live in cell space [0,width) x [0,height); edges hang off vertices in
    [0,width] x [0,height]. Vertex (x, y) owns the RIGHT edge to (x+1, y) and
    the DOWN edge to (x, y+1). Storage is flat and row-major.
    """
    width: int
    height: int
    name: str = "Unnamed Map"
    briefing_location: str = "Unset Location"
    map_type: str = "Unset Type"
    # editor metadata with no effect on sight: [{"title": ..., "tiles": [...]}, ...]
    tile_lists: list[dict[str, Any]] = field(default_factory=list)
    # per-cell editor labels, e.g. {"tileNumber": "4B", "startingPoint": True}
    cell_tags: dict[tuple[int, int], dict[str, Any]] = field(default_factory=dict)
    # layout-only edge kinds such as "TileBoundary"; the stored Edge stays CLEAR
    edge_tags: dict[tuple[int, int, EdgeDirection], str] = field(default_factory=dict)
    _cells: list[Cell] = field(init=False, repr=False)
    _right: list[Edge] = field(init=False, repr=False)
    _down: list[Edge] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("GridBoard dimensions must be positive")
        self._cells = [Cell.EMPTY] * (self.width * self.height)
        n_vertices = (self.width + 1) * (self.height + 1)
        self._right = [Edge.CLEAR] * n_vertices
        self._down = [Edge.CLEAR] * n_vertices
        logger.debug("Initialized GridBoard %dx%d (%s)", self.width, self.height, self.name)

    # --- index math ---
    def _cell_index(self, x: int, y: int) -> int:
        return y * self.width + x

    def _vertex_index(self, x: int, y: int) -> int:
        return y * (self.width + 1) + x

    def _edges_for(self, dir: EdgeDirection) -> list[Edge]:
        return self._right if dir is EdgeDirection.RIGHT else self._down

    # --- validity ---
    def is_valid_cell(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_valid_edge(self, x: int, y: int, dir: EdgeDirection) -> bool:
        if not (0 <= x <= self.width and 0 <= y <= self.height):
            return False
        if x == self.width and dir is EdgeDirection.RIGHT:
            return False
        if y == self.height and dir is EdgeDirection.DOWN:
            return False
        return True

    # --- reads (never raise) ---
    def get_cell(self, x: int, y: int) -> Cell:
        if not self.is_valid_cell(x, y):
            return Cell.OUT_OF_BOUNDS
        return self._cells[self._cell_index(x, y)]

    def get_edge(self, x: int, y: int, dir: EdgeDirection) -> Edge:
        if not self.is_valid_edge(x, y, dir):
            return Edge.WALL
        # only the left and top board edges are forced; right/bottom read as stored
        if x == 0 and dir is EdgeDirection.DOWN:
            return Edge.WALL
        if y == 0 and dir is EdgeDirection.RIGHT:
            return Edge.WALL
        return self._edges_for(dir)[self._vertex_index(x, y)]

    def does_edge_block_line_of_sight(self, x: int, y: int, dir: EdgeDirection) -> bool:
        return self.get_edge(x, y, dir) in LOS_BLOCKING_EDGES

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self._cells[self._cell_index(x, y)]

    # --- writes ---
    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        if not isinstance(cell, Cell):
            raise TypeError("cell must be a Cell enum member")
        if not self.is_valid_cell(x, y):
            raise OutOfBoundsError(f"Invalid cell coordinates ({x}, {y}) for board {self.width}x{self.height}")
        self._cells[self._cell_index(x, y)] = cell

    def set_edge(self, x: int, y: int, dir: EdgeDirection, edge: Edge) -> None:
        if not isinstance(edge, Edge):
            raise TypeError("edge must be an Edge enum member")
        if not self.is_valid_edge(x, y, dir):
            raise OutOfBoundsError(
                f"Invalid edge coordinates ({x}, {y}, {dir.value}) for board {self.width}x{self.height}"
            )
        self._edges_for(dir)[self._vertex_index(x, y)] = edge

    def stored_edge(self, x: int, y: int, dir: EdgeDirection) -> Edge:
        """Raw stored value, without the boundary rules applied by get_edge()."""
        if not self.is_valid_edge(x, y, dir):
            raise OutOfBoundsError(
                f"Invalid edge coordinates ({x}, {y}, {dir.value}) for board {self.width}x{self.height}"
            )
        return self._edges_for(dir)[self._vertex_index(x, y)]

    # --- editor metadata ---
    def set_cell_tags(self, x: int, y: int, tags: Mapping[str, Any]) -> None:
        """Replace a cell's editor labels; falsy values are dropped and no labels clears the cell."""
        if not self.is_valid_cell(x, y):
            raise OutOfBoundsError(f"Invalid cell coordinates ({x}, {y}) for board {self.width}x{self.height}")
        kept = {k: v for k, v in tags.items() if v}
        if kept:
            self.cell_tags[(x, y)] = kept
        else:
            self.cell_tags.pop((x, y), None)

    def set_edge_tag(self, x: int, y: int, dir: EdgeDirection, kind: Optional[str]) -> None:
        if not self.is_valid_edge(x, y, dir):
            raise OutOfBoundsError(
                f"Invalid edge coordinates ({x}, {y}, {dir.value}) for board {self.width}x{self.height}"
            )
        if kind:
            self.edge_tags[(x, y, dir)] = kind
        else:
            self.edge_tags.pop((x, y, dir), None)

    # --- edge rules ---
    @staticmethod
    def _resolve_boundary_edge(cell: Cell) -> Edge:
        return Edge.WALL if cell is not Cell.OUT_OF_BOUNDS else Edge.CLEAR

    @staticmethod
    def _resolve_edge(a: Cell, b: Cell, existing: Edge) -> Edge:
        a_in = a is not Cell.OUT_OF_BOUNDS
        b_in = b is not Cell.OUT_OF_BOUNDS
        if not a_in and not b_in:
            return Edge.CLEAR
        if a_in != b_in:
            return Edge.WALL
        if existing in USER_DEFINED_EDGES:
            return existing
        return Edge.CLEAR

    def apply_edge_rules(self) -> None:
        """Derive walls from the board footprint (in-bounds vs out-of-bounds cells).

        Only the left/top side of each cell is visited, so the right and bottom
        board boundaries keep whatever is stored there.
        """
        for x in range(self.width):
            for y in range(self.height):
                here = self.get_cell(x, y)
                if x == 0:
                    down = self._resolve_boundary_edge(here)
                else:
                    down = self._resolve_edge(here, self.get_cell(x - 1, y), self.stored_edge(x, y, EdgeDirection.DOWN))
                self.set_edge(x, y, EdgeDirection.DOWN, down)
                if y == 0:
                    right = self._resolve_boundary_edge(here)
                else:
                    right = self._resolve_edge(here, self.get_cell(x, y - 1), self.stored_edge(x, y, EdgeDirection.RIGHT))
                self.set_edge(x, y, EdgeDirection.RIGHT, right)
        logger.debug("Applied edge rules to %s", self.name)

    def copy(self) -> GridBoard:
        other = GridBoard(self.width, self.height, self.name, self.briefing_location, self.map_type)
        other._cells = list(self._cells)
        other._right = list(self._right)
        other._down = list(self._down)
        other.tile_lists = [{"title": t["title"], "tiles": list(t["tiles"])} for t in self.tile_lists]
        other.cell_tags = {k: dict(v) for k, v in self.cell_tags.items()}
        other.edge_tags = dict(self.edge_tags)
        return other
