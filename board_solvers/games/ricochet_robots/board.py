from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

Position = Tuple[int, int]  # (row, col); upper left is (0, 0)


class Color(IntEnum):
    BLUE = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    RAINBOW = 4


class Shape(IntEnum):
    CRESCENT = 0
    GEAR = 1
    PLANET = 2
    STAR = 3
    HOLE = 4


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


# Robot colours in index order; RAINBOW is a target-only wildcard
ROBOT_COLORS: Tuple[Color, ...] = (Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW)
DIRECTIONS: Tuple[Direction, ...] = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

COLOR_CHARS: Dict[Color, str] = {
    Color.BLUE: "b",
    Color.RED: "r",
    Color.GREEN: "g",
    Color.YELLOW: "y",
    Color.RAINBOW: "w",
}
SHAPE_CHARS: Dict[Shape, str] = {
    Shape.CRESCENT: "c",
    Shape.GEAR: "g",
    Shape.PLANET: "p",
    Shape.STAR: "s",
    Shape.HOLE: "h",
}
# (delta_row, delta_col)
DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


def require_total(table: Mapping, enum_cls, name: str) -> None:
    missing = [member.name for member in enum_cls if member not in table]
    if missing:
        raise RuntimeError(f"{name} has no entry for {', '.join(missing)}")


require_total(COLOR_CHARS, Color, "COLOR_CHARS")
require_total(SHAPE_CHARS, Shape, "SHAPE_CHARS")
require_total(DIRECTION_DELTAS, Direction, "DIRECTION_DELTAS")


@dataclass(frozen=True)
class Target:
    color: Color
    shape: Shape

    def __str__(self) -> str:
        return f"{self.color.name} {self.shape.name}"


@dataclass(frozen=True)
class Cell:
    """Read-only view of one board square."""

    block_north: bool
    block_east: bool
    allowable_starting_square: bool
    target: Optional[Target] = None


class Board:
    """Immutable grid of walls, starting-square flags and targets.

    Walls are stored once per edge, on the north and east side of the cell
    they belong to. A wall on the south side of a cell is the north wall of
    the cell below it; a wall on the west side is the east wall of the cell
    to its left. The grid boundary always blocks movement and is not stored.
    """

    def __init__(
        self,
        height: int = 16,
        width: int | None = None,
        block_north: np.ndarray | None = None,
        block_east: np.ndarray | None = None,
        allowable_start: np.ndarray | None = None,
        targets: Mapping[Position, Target] | None = None,
    ):
        self.height = int(height)
        self.width = int(width) if width is not None else int(height)
        if self.height <= 0 or self.width <= 0:
            raise ValueError("board dimensions must be positive")
        shape = (self.height, self.width)

        self.block_north_grid = self._frozen_grid(block_north, shape, False, "block_north")
        self.block_east_grid = self._frozen_grid(block_east, shape, False, "block_east")
        self.allowable_start_grid = self._frozen_grid(allowable_start, shape, True, "allowable_start")

        checked: Dict[Position, Target] = {}
        for pos, target in (targets or {}).items():
            row, col = pos
            if not self.in_bounds((row, col)):
                raise ValueError(f"target {target} placed off the board at {pos}")
            if not isinstance(target, Target) or target.color not in COLOR_CHARS or target.shape not in SHAPE_CHARS:
                raise ValueError(f"invalid target at {pos}: {target!r}")
            checked[(int(row), int(col))] = target
        self._targets = MappingProxyType(checked)

        self._neighbors = self._build_neighbors()

    @staticmethod
    def _frozen_grid(grid: np.ndarray | None, shape: Tuple[int, int], fill: bool, name: str) -> np.ndarray:
        if grid is None:
            out = np.full(shape, fill, dtype=bool)
        else:
            out = np.array(grid, dtype=bool)
            if out.shape != shape:
                raise ValueError(f"{name} has shape {out.shape}, expected {shape}")
        out.setflags(write=False)
        return out

    # ---------------------------------------------------------------------
    # Movement helpers
    # ---------------------------------------------------------------------
    def _build_neighbors(self) -> Tuple[Tuple[Tuple[Optional[Position], ...], ...], ...]:
        # Per direction, per cell: the adjacent cell a robot may step into
        # ignoring other robots, or None when a wall or the edge is in the way.
        north = self.block_north_grid.tolist()
        east = self.block_east_grid.tolist()
        h, w = self.height, self.width
        table = []
        for direction in DIRECTIONS:
            rows = []
            for row in range(h):
                cells: List[Optional[Position]] = []
                for col in range(w):
                    if direction == Direction.UP:
                        ok = row > 0 and not north[row][col]
                    elif direction == Direction.DOWN:
                        ok = row < h - 1 and not north[row + 1][col]
                    elif direction == Direction.LEFT:
                        ok = col > 0 and not east[row][col - 1]
                    else:
                        ok = col < w - 1 and not east[row][col]
                    if ok:
                        dr, dc = DIRECTION_DELTAS[direction]
                        cells.append((row + dr, col + dc))
                    else:
                        cells.append(None)
                rows.append(tuple(cells))
            table.append(tuple(rows))
        return tuple(table)

    def neighbor(self, pos: Position, direction: Direction) -> Optional[Position]:
        """Cell reached by a single step from pos, or None if a wall or the edge blocks it."""
        row, col = pos
        return self._neighbors[direction][row][col]

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.height and 0 <= col < self.width

    # ---------------------------------------------------------------------
    # Cell queries
    # ---------------------------------------------------------------------
    def block_north(self, row: int, col: int) -> bool:
        return bool(self.block_north_grid[row, col])

    def block_east(self, row: int, col: int) -> bool:
        return bool(self.block_east_grid[row, col])

    def is_allowable_start(self, row: int, col: int) -> bool:
        return bool(self.allowable_start_grid[row, col])

    def target_at(self, pos: Position) -> Optional[Target]:
        return self._targets.get(pos)

    @property
    def targets(self) -> Mapping[Position, Target]:
        return self._targets

    def positions_of(self, target: Target) -> Tuple[Position, ...]:
        return tuple(sorted(pos for pos, t in self._targets.items() if t == target))

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds((row, col)):
            raise IndexError(f"cell ({row}, {col}) is off the board")
        return Cell(
            block_north=self.block_north(row, col),
            block_east=self.block_east(row, col),
            allowable_starting_square=self.is_allowable_start(row, col),
            target=self._targets.get((row, col)),
        )

    # ---------------------------------------------------------------------
    # Factory helpers
    # ---------------------------------------------------------------------
    @classmethod
    def empty(cls, size: int = 16) -> "Board":
        return cls(height=size, width=size)

    @classmethod
    def standard(cls) -> "Board":
        """The fixed 16x16 layout used for regular play."""
        from .layouts import build_standard_board

        return build_standard_board()


class BoardBuilder:
    """Mutable staging area for board data entry; ``build`` freezes it into a Board."""

    def __init__(self, height: int = 16, width: int | None = None):
        self.height = int(height)
        self.width = int(width) if width is not None else int(height)
        self.block_north = np.zeros((self.height, self.width), dtype=bool)
        self.block_east = np.zeros((self.height, self.width), dtype=bool)
        self.allowable_start = np.ones((self.height, self.width), dtype=bool)
        self.targets: Dict[Position, Target] = {}

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise ValueError(f"cell ({row}, {col}) is off the board")

    def add_wall(self, row: int, col: int, direction: Direction) -> "BoardBuilder":
        """Add a wall on the given side of cell (row, col).

        Walls on the outer boundary are implicit and therefore ignored.
        """
        self._check(row, col)
        direction = Direction(direction)
        if direction == Direction.UP:
            if row > 0:
                self.block_north[row, col] = True
        elif direction == Direction.DOWN:
            if row < self.height - 1:
                self.block_north[row + 1, col] = True
        elif direction == Direction.LEFT:
            if col > 0:
                self.block_east[row, col - 1] = True
        else:
            if col < self.width - 1:
                self.block_east[row, col] = True
        return self

    def add_target(self, row: int, col: int, color: Color, shape: Shape) -> "BoardBuilder":
        self._check(row, col)
        self.targets[(row, col)] = Target(Color(color), Shape(shape))
        return self

    def block_start(self, row: int, col: int) -> "BoardBuilder":
        self._check(row, col)
        self.allowable_start[row, col] = False
        return self

    def build(self) -> Board:
        return Board(
            height=self.height,
            width=self.width,
            block_north=self.block_north,
            block_east=self.block_east,
            allowable_start=self.allowable_start,
            targets=self.targets,
        )
