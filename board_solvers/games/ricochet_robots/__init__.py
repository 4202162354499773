"""Ricochet Robots movement engine and exact solvers."""
from .board import Board, BoardBuilder, Cell, Color, Direction, Shape, Target, ROBOT_COLORS, DIRECTIONS
from .game import (
    InvalidMoveError,
    MalformedStateError,
    Move,
    Robot,
    RobotState,
    RicochetRobotsGame,
    RRGameState,
    apply_move,
    goal_test,
    legal_moves,
    replay,
    slide,
    successors,
    target_achieved,
    validate_state,
)
from .solver_bfs import BFSSolver, solve_bfs
from .solver_dfs import DFSSolver, solve_dfs
from .rendering import render_rgb, render_text

__all__ = [
    "Board",
    "BoardBuilder",
    "Cell",
    "Color",
    "Direction",
    "Shape",
    "Target",
    "ROBOT_COLORS",
    "DIRECTIONS",
    "InvalidMoveError",
    "MalformedStateError",
    "Move",
    "Robot",
    "RobotState",
    "RicochetRobotsGame",
    "RRGameState",
    "apply_move",
    "goal_test",
    "legal_moves",
    "replay",
    "slide",
    "successors",
    "target_achieved",
    "validate_state",
    "BFSSolver",
    "solve_bfs",
    "DFSSolver",
    "solve_dfs",
    "render_rgb",
    "render_text",
]
