# sight/io/mapfile.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from sight.world.grid import Cell, Edge, EdgeDirection, GridBoard

logger = logging.getLogger(__name__)

DEFAULT_GLYPHS: dict[str, Cell] = {
    ".": Cell.EMPTY,
    "#": Cell.BLOCKING,
    " ": Cell.OUT_OF_BOUNDS,
}
CELL_GLYPHS: dict[Cell, str] = {v: k for k, v in DEFAULT_GLYPHS.items()}

# edge names written by the original web editor
LEGACY_EDGES: dict[str, Edge] = {
    "Wall": Edge.WALL,
    "Blocking": Edge.BLOCKING,
    "Impassible": Edge.IMPASSABLE,
}


class MapFormatError(ValueError):
    """Raised when a map payload cannot be turned into a board."""


# --- JSON payloads ---
def _sparse(board: GridBoard, default: Any, value_at) -> dict[str, dict[str, str]]:
    rows: dict[str, dict[str, str]] = {}
    for y in range(board.height + 1):
        for x in range(board.width + 1):
            v = value_at(x, y)
            if v is None or v is default:
                continue
            rows.setdefault(str(y), {})[str(x)] = v.value
    return rows


def to_payload(board: GridBoard) -> dict[str, Any]:
    def cell_at(x: int, y: int) -> Optional[Cell]:
        return board.get_cell(x, y) if board.is_valid_cell(x, y) else None

    def edge_at(dir: EdgeDirection):
        def at(x: int, y: int) -> Optional[Edge]:
            return board.stored_edge(x, y, dir) if board.is_valid_edge(x, y, dir) else None
        return at

    payload: dict[str, Any] = {
        "name": board.name,
        "briefingLocation": board.briefing_location,
        "mapType": board.map_type,
        "cols": board.width,
        "rows": board.height,
        "tileLists": [{"title": t["title"], "tiles": list(t["tiles"])} for t in board.tile_lists],
        "cells": _sparse(board, Cell.EMPTY, cell_at),
        "right_edges": _sparse(board, Edge.CLEAR, edge_at(EdgeDirection.RIGHT)),
        "down_edges": _sparse(board, Edge.CLEAR, edge_at(EdgeDirection.DOWN)),
    }
    # editor labels are written only when present
    if board.cell_tags:
        tags: dict[str, dict[str, Any]] = {}
        for (x, y), labels in sorted(board.cell_tags.items(), key=lambda kv: (kv[0][1], kv[0][0])):
            tags.setdefault(str(y), {})[str(x)] = dict(labels)
        payload["cell_tags"] = tags
    for dir, key in ((EdgeDirection.RIGHT, "right_edge_tags"), (EdgeDirection.DOWN, "down_edge_tags")):
        rows: dict[str, dict[str, str]] = {}
        for (x, y, d), kind in sorted(board.edge_tags.items(), key=lambda kv: (kv[0][1], kv[0][0])):
            if d is dir:
                rows.setdefault(str(y), {})[str(x)] = kind
        if rows:
            payload[key] = rows
    return payload


def _entries(rows: Mapping[str, Mapping[str, Any]]):
    for y, cols in (rows or {}).items():
        for x, value in (cols or {}).items():
            yield int(x), int(y), value


def _parse_enum(enum_cls, value: Any, what: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise MapFormatError(f"Unknown {what} value: {value!r}") from None


def _legacy_cell(value: Any) -> Cell:
    if isinstance(value, Mapping) and value.get("inBounds"):
        return Cell.EMPTY
    return Cell.OUT_OF_BOUNDS


def _tile_lists(value: Any) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MapFormatError(f"'tileLists' must be a list, got {type(value).__name__}")
    return [{"title": str(entry["title"]), "tiles": [str(t) for t in entry["tiles"]]} for entry in value]


def _tags(value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise MapFormatError(f"Cell tags must be an object, got {value!r}")
    return value


def from_payload(payload: Mapping[str, Any]) -> GridBoard:
    try:
        width = int(payload["cols"])
        height = int(payload["rows"])
    except (KeyError, TypeError, ValueError) as e:
        raise MapFormatError(f"Map payload needs integer 'cols' and 'rows': {e}") from e
    if width <= 0 or height <= 0:
        raise MapFormatError(f"Map dimensions must be positive, got {width}x{height}")

    board = GridBoard(
        width,
        height,
        name=payload.get("name") or "Unnamed Map",
        briefing_location=payload.get("briefingLocation") or "Unset Location",
        map_type=payload.get("mapType") or "Unset Type",
    )
    legacy = "horizontal_edges" in payload or "vertical_edges" in payload

    try:
        board.tile_lists = _tile_lists(payload.get("tileLists"))
        if legacy:
            # the old editor stores no entry for out-of-bounds cells
            for x, y, _ in board.cells():
                board.set_cell(x, y, Cell.OUT_OF_BOUNDS)
            for x, y, value in _entries(payload.get("cells")):
                board.set_cell(x, y, _legacy_cell(value))
                if isinstance(value, Mapping):
                    board.set_cell_tags(x, y, {k: v for k, v in value.items() if k != "inBounds"})
            for key, dir in (("horizontal_edges", EdgeDirection.RIGHT), ("vertical_edges", EdgeDirection.DOWN)):
                for x, y, value in _entries(payload.get(key)):
                    if value in LEGACY_EDGES:
                        board.set_edge(x, y, dir, LEGACY_EDGES[value])
                    elif value != "Nothing":
                        # TileBoundary, CellBoundary, Difficult: kept across saves, clear for sight
                        board.set_edge_tag(x, y, dir, str(value))
        else:
            for x, y, value in _entries(payload.get("cells")):
                board.set_cell(x, y, _parse_enum(Cell, value, "cell"))
            for key, dir in (("right_edges", EdgeDirection.RIGHT), ("down_edges", EdgeDirection.DOWN)):
                for x, y, value in _entries(payload.get(key)):
                    board.set_edge(x, y, dir, _parse_enum(Edge, value, "edge"))
            for x, y, value in _entries(payload.get("cell_tags")):
                board.set_cell_tags(x, y, _tags(value))
            for key, dir in (("right_edge_tags", EdgeDirection.RIGHT), ("down_edge_tags", EdgeDirection.DOWN)):
                for x, y, value in _entries(payload.get(key)):
                    board.set_edge_tag(x, y, dir, str(value))
    except MapFormatError:
        raise
    except (IndexError, KeyError, TypeError, ValueError, AttributeError) as e:
        raise MapFormatError(f"Bad map entry in {board.name!r}: {e}") from e
    return board


def load_board(path: str | Path) -> GridBoard:
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise MapFormatError(f"{path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise MapFormatError(f"{path} is not valid JSON: {e}") from e
    board = from_payload(payload)
    logger.info("Loaded map %r (%dx%d) from %s", board.name, board.width, board.height, path)
    return board


def save_board(board: GridBoard, path: str | Path) -> None:
    path = Path(path)
    path.write_text(json.dumps(to_payload(board), indent=2), encoding="utf-8")
    logger.info("Saved map %r to %s", board.name, path)


# --- ASCII ---
def from_lines(lines: Sequence[str], mapping: Optional[dict[str, Cell]] = None) -> GridBoard:
    """Build a board from rows of glyphs ('.' empty, '#' blocking, ' ' out of bounds)."""
    glyphs = mapping or DEFAULT_GLYPHS
    if not lines:
        raise MapFormatError("from_lines() needs at least one row")
    width = max(len(line) for line in lines)
    board = GridBoard(width, len(lines))
    for y, line in enumerate(lines):
        for x in range(width):
            ch = line[x] if x < len(line) else " "
            if ch not in glyphs:
                raise MapFormatError(f"Unknown glyph {ch!r} at ({x}, {y})")
            board.set_cell(x, y, glyphs[ch])
    return board


def dump_board(board: GridBoard) -> list[str]:
    """
    Debug dump: one text row per vertex row and per cell row.
    Vertices are '+', blocking edges '-'/'|', other non-clear edges '~'/':'.
    """
    def h(x: int, y: int) -> str:
        e = board.get_edge(x, y, EdgeDirection.RIGHT)
        return "-" if e in (Edge.WALL, Edge.BLOCKING) else ("~" if e is Edge.IMPASSABLE else " ")

    def v(x: int, y: int) -> str:
        e = board.get_edge(x, y, EdgeDirection.DOWN)
        return "|" if e in (Edge.WALL, Edge.BLOCKING) else (":" if e is Edge.IMPASSABLE else " ")

    out: list[str] = []
    for y in range(board.height + 1):
        out.append("+" + "+".join(h(x, y) for x in range(board.width)) + "+")
        if y == board.height:
            break
        row = ""
        for x in range(board.width):
            row += v(x, y) + CELL_GLYPHS[board.get_cell(x, y)]
        out.append(row + v(board.width, y))
    return out
