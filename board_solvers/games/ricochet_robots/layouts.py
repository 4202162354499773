"""Static wall and target data for the standard board."""
from __future__ import annotations

from typing import Dict, Tuple

from .board import Board, BoardBuilder, Color, Direction, Position, Shape

STANDARD_SIZE = 16

STANDARD_NORTH_WALLS: Tuple[Position, ...] = (
    (2, 5), (3, 7), (3, 11), (3, 13),
    (4, 0), (5, 3), (5, 6), (5, 10), (5, 12),
    (6, 1), (6, 15), (7, 7), (7, 8),
    (9, 3), (9, 7), (9, 8), (9, 12),
    (10, 15), (11, 6), (11, 10), (12, 14),
    (13, 1), (14, 0), (15, 4), (15, 11),
)

STANDARD_EAST_WALLS: Tuple[Position, ...] = (
    (0, 2), (0, 11), (1, 4), (2, 7), (2, 11), (3, 13),
    (4, 3), (4, 9), (5, 5), (5, 11), (6, 1),
    (7, 6), (7, 8), (8, 6), (8, 8),
    (9, 3), (9, 11), (10, 10), (11, 5),
    (12, 0), (12, 14), (14, 4), (14, 10), (15, 6), (15, 13),
)

STANDARD_TARGETS: Dict[Position, Tuple[Color, Shape]] = {
    (1, 5): (Color.BLUE, Shape.CRESCENT),
    (2, 7): (Color.RAINBOW, Shape.HOLE),
    (2, 11): (Color.RED, Shape.PLANET),
    (3, 13): (Color.YELLOW, Shape.CRESCENT),
    (4, 3): (Color.RED, Shape.STAR),
    (4, 10): (Color.GREEN, Shape.STAR),
    (5, 6): (Color.GREEN, Shape.PLANET),
    (5, 12): (Color.BLUE, Shape.GEAR),
    (6, 1): (Color.YELLOW, Shape.GEAR),
    (9, 3): (Color.YELLOW, Shape.STAR),
    (9, 12): (Color.BLUE, Shape.STAR),
    (10, 10): (Color.YELLOW, Shape.PLANET),
    (11, 6): (Color.BLUE, Shape.PLANET),
    (12, 1): (Color.GREEN, Shape.GEAR),
    (12, 14): (Color.RED, Shape.GEAR),
    (14, 4): (Color.RED, Shape.CRESCENT),
    (14, 11): (Color.GREEN, Shape.CRESCENT),
}

# Central 2x2 island; robots never start inside it
STANDARD_BLOCKED_STARTS: Tuple[Position, ...] = ((7, 7), (7, 8), (8, 7), (8, 8))


def build_standard_board() -> Board:
    builder = BoardBuilder(STANDARD_SIZE)
    for row, col in STANDARD_NORTH_WALLS:
        builder.add_wall(row, col, Direction.UP)
    for row, col in STANDARD_EAST_WALLS:
        builder.add_wall(row, col, Direction.RIGHT)
    for (row, col), (color, shape) in STANDARD_TARGETS.items():
        builder.add_target(row, col, color, shape)
    for row, col in STANDARD_BLOCKED_STARTS:
        builder.block_start(row, col)
    return builder.build()
