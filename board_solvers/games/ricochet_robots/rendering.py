from __future__ import annotations

from typing import Dict, Optional

import numpy as np

from .board import COLOR_CHARS, ROBOT_COLORS, SHAPE_CHARS, Board, Color, Target, require_total

RGB_COLORS: Dict[Color, tuple] = {
    Color.BLUE: (0, 0, 255),
    Color.RED: (255, 0, 0),
    Color.GREEN: (0, 170, 0),
    Color.YELLOW: (230, 200, 0),
    Color.RAINBOW: (160, 32, 240),
}
require_total(RGB_COLORS, Color, "RGB_COLORS")


def render_text(board: Board, robots=None, target: Optional[Target] = None) -> str:
    """
    Draw the board as text, two lines per board row and three characters per cell.

    - ``__`` above a cell with a north wall, ``|`` after a cell with an east wall
    - robots as their doubled upper-case colour letter
    - targets as colour letter + shape letter
    - ``.`` on empty squares robots may start on
    """
    occupied = {}
    if robots is not None:
        occupied = {pos: color for color, pos in zip(ROBOT_COLORS, robots.positions)}

    lines = [[" "] * (board.width * 3) for _ in range(board.height * 2)]
    for row in range(board.height):
        top, middle = lines[row * 2], lines[row * 2 + 1]
        for col in range(board.width):
            base = col * 3
            if board.block_north(row, col):
                top[base] = top[base + 1] = "_"
            if board.block_east(row, col):
                middle[base + 2] = "|"

            pos = (row, col)
            cell_target = board.target_at(pos)
            if pos in occupied:
                middle[base] = middle[base + 1] = COLOR_CHARS[occupied[pos]].upper()
            elif cell_target is not None:
                middle[base] = COLOR_CHARS[cell_target.color]
                middle[base + 1] = SHAPE_CHARS[cell_target.shape]
            elif board.is_allowable_start(row, col):
                middle[base] = "."

    text = "\n".join("".join(line) for line in lines)
    if target is not None:
        text += f"\ntarget: {target}"
    return text


def render_rgb(board: Board, robots=None, target: Optional[Target] = None, scale: int = 20) -> np.ndarray:
    """
    Render the board and robots as an HWC uint8 RGB image.

    - walls: black lines on the north/east cell edges plus the outer border
    - targets: thin border in the target colour, thick for the active target
    - robots: solid coloured squares
    """
    scale = max(8, int(scale))
    h, w = board.height * scale, board.width * scale
    img = np.full((h, w, 3), 255, dtype=np.uint8)

    # Outer border
    img[0, :, :] = 0
    img[-1, :, :] = 0
    img[:, 0, :] = 0
    img[:, -1, :] = 0

    north = board.block_north_grid
    east = board.block_east_grid
    for row in range(board.height):
        for col in range(board.width):
            cx, cy = col * scale, row * scale
            if north[row, col]:
                img[cy : cy + 2, cx : cx + scale, :] = 0
            if east[row, col]:
                img[cy : cy + scale, cx + scale - 2 : cx + scale, :] = 0

    pad = 3
    for (row, col), cell_target in board.targets.items():
        thickness = 3 if cell_target == target else 1
        color = RGB_COLORS[cell_target.color]
        x0, y0 = col * scale + pad, row * scale + pad
        x1, y1 = (col + 1) * scale - pad, (row + 1) * scale - pad
        img[y0 : y0 + thickness, x0:x1, :] = color
        img[y1 - thickness : y1, x0:x1, :] = color
        img[y0:y1, x0 : x0 + thickness, :] = color
        img[y0:y1, x1 - thickness : x1, :] = color

    if robots is not None:
        inner = pad + 2
        for color, (row, col) in zip(ROBOT_COLORS, robots.positions):
            cx, cy = col * scale, row * scale
            img[cy + inner : cy + scale - inner, cx + inner : cx + scale - inner, :] = RGB_COLORS[color]

    return img
