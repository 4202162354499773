from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ...core.solver import Solver, SolveResult, SolveStatus
from .board import Board, Target
from .game import Move, RobotState, goal_test, require_target, successors, validate_state

StateKey = Tuple[int, ...]
Path = Tuple[Move, ...]


class BFSSolver(Solver):
    """Level-order search returning every minimum-length solution.

    Each state remembers all of its shortest-path predecessor edges, not just
    the first one found. Every state on an optimal solution sits at its
    shortest depth, so expanding those edges backwards from the goal edges of
    the final level yields the complete set of optimal solutions.
    """

    def __init__(self, board: Board, max_depth: int | None = None, max_states: int | None = None):
        self.board = board
        self.max_depth = max_depth
        self.max_states = max_states

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------
    def solve(self, state: RobotState, goal: Target) -> SolveResult:
        validate_state(self.board, state)
        require_target(self.board, goal)
        achieved = goal_test(self.board, goal)
        if achieved(state):
            return SolveResult(SolveStatus.SOLVED, move_count=0, solutions=[()])

        root = state.key
        best_depth: Dict[StateKey, int] = {root: 0}
        parents: Dict[StateKey, List[Tuple[StateKey, Move]]] = {}
        frontier: List[RobotState] = [state]
        depth = 0
        nodes = 0

        while frontier:
            if self.max_depth is not None and depth >= self.max_depth:
                return SolveResult(SolveStatus.BOUND_REACHED, nodes_expanded=nodes)
            depth += 1
            goal_edges: List[Tuple[StateKey, Move]] = []
            next_frontier: List[RobotState] = []
            for current in frontier:
                nodes += 1
                key = current.key
                for move, nxt in successors(self.board, current):
                    if achieved(nxt):
                        # Goal states end a solution and are never expanded
                        goal_edges.append((key, move))
                        continue
                    nxt_key = nxt.key
                    seen = best_depth.get(nxt_key)
                    if seen is None:
                        best_depth[nxt_key] = depth
                        parents[nxt_key] = [(key, move)]
                        next_frontier.append(nxt)
                    elif seen == depth:
                        parents[nxt_key].append((key, move))

            if goal_edges:
                return SolveResult(
                    SolveStatus.SOLVED,
                    move_count=depth,
                    solutions=self._collect(root, parents, goal_edges),
                    nodes_expanded=nodes,
                )
            if self.max_states is not None and len(best_depth) > self.max_states:
                return SolveResult(SolveStatus.BOUND_REACHED, nodes_expanded=nodes)
            frontier = next_frontier

        return SolveResult(SolveStatus.UNSOLVABLE, nodes_expanded=nodes)

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------
    def _collect(
        self,
        root: StateKey,
        parents: Dict[StateKey, List[Tuple[StateKey, Move]]],
        goal_edges: List[Tuple[StateKey, Move]],
    ) -> List[Path]:
        paths: Dict[StateKey, List[Path]] = {root: [()]}

        def paths_to(key: StateKey) -> List[Path]:
            cached = paths.get(key)
            if cached is None:
                cached = [prefix + (move,) for parent, move in parents[key] for prefix in paths_to(parent)]
                paths[key] = cached
            return cached

        return [prefix + (move,) for key, move in goal_edges for prefix in paths_to(key)]


def solve_bfs(
    board: Board,
    robots: RobotState,
    target: Target,
    max_depth: Optional[int] = None,
    max_states: Optional[int] = None,
) -> SolveResult:
    return BFSSolver(board, max_depth=max_depth, max_states=max_states).solve(robots, target)
