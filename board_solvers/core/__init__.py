"""
Core abstractions shared by the puzzle engines and their solvers.
"""
from .game import Game, GameState
from .solver import Solver, SolveResult, SolveStatus

__all__ = [
    "Game",
    "GameState",
    "Solver",
    "SolveResult",
    "SolveStatus",
]
