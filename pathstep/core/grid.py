# pathstep/core/grid.py
#!/usr/bin/env python3
"""
Rectangular grid map for the search engine.

Cells are Invalid (blocked), Valid{cost} or OneWay{cost, direction, target}.
Movement cost is charged on departure: every edge out of a cell costs that
cell's ``cost``.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple, Union
import json
import logging

import numpy as np

from pathstep.core.types import MapFormatError, VisitedItem

logger = logging.getLogger(__name__)


class Point(NamedTuple):
    row: int
    col: int


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    def __str__(self) -> str:
        return self.value


# -------------------- cells --------------------

@dataclass(frozen=True)
class Invalid:
    def __str__(self) -> str:
        return "X"


INVALID = Invalid()


@dataclass(frozen=True)
class Valid:
    cost: int = 1

    def __str__(self) -> str:
        return " "


# (plain arrow, arrow with teleport target)
_ONE_WAY_GLYPHS = {
    Direction.UP: ("🠭", "↟"),
    Direction.DOWN: ("🠯", "↡"),
    Direction.LEFT: ("🠬", "↞"),
    Direction.RIGHT: ("🠮", "↠"),
}


@dataclass(frozen=True)
class OneWay:
    cost: int
    direction: Direction                # the way traffic flows through this cell
    target: Optional[Point] = None      # optional teleport destination

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", Direction(self.direction))
        if self.target is not None:
            object.__setattr__(self, "target", Point(*self.target))

    def __str__(self) -> str:
        plain, teleport = _ONE_WAY_GLYPHS[self.direction]
        return plain if self.target is None else teleport


Cell = Union[Invalid, Valid, OneWay]

# (delta_row, delta_col, one-way direction that forbids this move)
_MOVES: Tuple[Tuple[int, int, Direction], ...] = (
    (-1, 0, Direction.DOWN),    # up
    (0, -1, Direction.RIGHT),   # left
    (1, 0, Direction.UP),       # down
    (0, 1, Direction.LEFT),     # right
)


# -------------------- storage --------------------

class CellStorage:
    """Per-cell scratch values, one slot per grid cell."""

    def __init__(self, rows: int, columns: int, default: Any = None):
        self._cells: List[List[Any]] = [[default] * columns for _ in range(rows)]

    @property
    def rows(self) -> int:
        return len(self._cells)

    @property
    def columns(self) -> int:
        return len(self._cells[0]) if self._cells else 0

    def is_valid(self, node: Point) -> bool:
        row, col = node
        return 0 <= row < self.rows and 0 <= col < self.columns

    def get(self, node: Point) -> Any:
        return self._cells[node[0]][node[1]]

    def set(self, node: Point, value: Any) -> None:
        self._cells[node[0]][node[1]] = value

    def __iter__(self) -> Iterator[List[Any]]:
        return iter(self._cells)

    def __str__(self) -> str:
        return "".join("".join(str(v) for v in row) + "\n" for row in self._cells)


def format_visited(storage: CellStorage) -> str:
    """Text heat-map of settled costs, four columns per cell."""
    lines = []
    for row in storage:
        lines.append("".join(f"{v.cost:03} " if isinstance(v, VisitedItem) else "    " for v in row))
    return "\n".join(lines) + "\n"


def visited_costs(storage: CellStorage) -> np.ndarray:
    """Settled cost per cell as floats, NaN where nothing was settled."""
    out = np.full((storage.rows, storage.columns), np.nan, dtype=float)
    for r, row in enumerate(storage):
        for c, v in enumerate(row):
            if isinstance(v, VisitedItem):
                out[r, c] = v.cost
    return out


# -------------------- map --------------------

@dataclass
class GridMap:
    rows: int
    columns: int
    cells: List[List[Cell]] = field(default_factory=list)   # [row][col]

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[Valid(1)] * self.columns for _ in range(self.rows)]
        elif len(self.cells) != self.rows or any(len(r) != self.columns for r in self.cells):
            raise ValueError(f"cells shape does not match {self.rows}x{self.columns}")

    @classmethod
    def filled(cls, rows: int, columns: int, cost: int = 1) -> "GridMap":
        return cls(rows, columns, [[Valid(cost)] * columns for _ in range(rows)])

    def is_valid(self, node: Point) -> bool:
        row, col = node
        return 0 <= row < self.rows and 0 <= col < self.columns

    def cell(self, node: Point) -> Cell:
        return self.cells[node[0]][node[1]]

    def neighbors_of(self, node: Point) -> Iterator[Tuple[Point, int]]:
        row, col = node
        c = self.cells[row][col]
        if isinstance(c, Invalid):
            return

        blocked = c.direction if isinstance(c, OneWay) else None
        candidates: List[Point] = []
        for dr, dc, forbidding in _MOVES:
            if blocked == forbidding:
                continue
            p = Point(row + dr, col + dc)
            if self.is_valid(p):
                candidates.append(p)
        if isinstance(c, OneWay) and c.target is not None and self.is_valid(c.target):
            candidates.append(Point(*c.target))

        for p in candidates:
            if not isinstance(self.cells[p.row][p.col], Invalid):
                yield p, c.cost

    def create_storage(self, default: Any = None) -> CellStorage:
        return CellStorage(self.rows, self.columns, default)

    def resize(self, columns: int, rows: int) -> None:
        new_cells: List[List[Cell]] = [[INVALID] * columns for _ in range(rows)]
        for r in range(min(self.rows, rows)):
            for c in range(min(self.columns, columns)):
                new_cells[r][c] = self.cells[r][c]
        self.rows, self.columns, self.cells = rows, columns, new_cells

    def scale_up(self, factor: int) -> None:
        """Nearest-neighbor upscale: every cell becomes a factor x factor block."""
        if factor < 1:
            raise ValueError(f"scale factor must be >= 1, got {factor}")
        new_cells: List[List[Cell]] = []
        for row in self.cells:
            wide = [cell for cell in row for _ in range(factor)]
            new_cells.extend(list(wide) for _ in range(factor))
        self.rows *= factor
        self.columns *= factor
        self.cells = new_cells

    def __str__(self) -> str:
        return "".join("".join(str(c) for c in row) + "\n" for row in self.cells)

    # -------------------- serialization --------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "columns": self.columns,
            "cells": [[_cell_to_json(c) for c in row] for row in self.cells],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridMap":
        try:
            rows = int(data["rows"])
            columns = int(data["columns"])
            raw = data["cells"]
        except (KeyError, TypeError, ValueError) as ex:
            raise MapFormatError(f"missing or malformed map header: {ex}") from ex
        if not isinstance(raw, list) or not all(isinstance(r, list) for r in raw):
            raise MapFormatError("cells must be a list of rows")
        if len(raw) != rows or any(len(r) != columns for r in raw):
            raise MapFormatError(f"cells size mismatch, expected {rows}x{columns}")
        return cls(rows, columns, [[_cell_from_json(c) for c in row] for row in raw])


def _cell_to_json(c: Cell) -> Any:
    if isinstance(c, Valid):
        return {"Valid": {"cost": c.cost}}
    if isinstance(c, OneWay):
        target = None if c.target is None else {"row": c.target.row, "col": c.target.col}
        return {"OneWay": {"cost": c.cost, "direction": c.direction.value, "target": target}}
    return "Invalid"


def _cell_from_json(raw: Any) -> Cell:
    if raw == "Invalid":
        return INVALID
    try:
        if "Valid" in raw:
            return Valid(int(raw["Valid"]["cost"]))
        if "OneWay" in raw:
            body = raw["OneWay"]
            target = body.get("target")
            return OneWay(
                cost=int(body["cost"]),
                direction=Direction(body["direction"]),
                target=None if target is None else Point(int(target["row"]), int(target["col"])),
            )
    except (KeyError, TypeError, ValueError) as ex:
        raise MapFormatError(f"bad cell {raw!r}: {ex}") from ex
    raise MapFormatError(f"unknown cell {raw!r}")


def load_map(path: Union[str, Path]) -> GridMap:
    with open(path, "r") as f:
        data = json.load(f)
    grid = GridMap.from_dict(data)
    logger.debug("Loaded %dx%d map from %s", grid.rows, grid.columns, path)
    return grid


def save_map(grid: GridMap, path: Union[str, Path]) -> None:
    with open(path, "w") as f:
        json.dump(grid.to_dict(), f, indent=2)
