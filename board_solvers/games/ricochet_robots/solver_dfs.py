from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from ...core.solver import Solver, SolveResult, SolveStatus
from .board import Board, Target
from .game import Move, RobotState, goal_test, require_target, successors, validate_state

StateKey = Tuple[int, ...]
Path = Tuple[Move, ...]

DEFAULT_MAX_DEPTH = 32


class _SearchContext:
    """Mutable bookkeeping for one solve call."""

    def __init__(self, achieved: Callable[[RobotState], bool]):
        self.achieved = achieved
        # key -> (largest move budget the state was searched with, shortest suffixes found)
        self.table: Dict[StateKey, Tuple[int, Tuple[Path, ...]]] = {}
        self.nodes = 0
        self.cutoff = False


class DFSSolver(Solver):
    """Depth-first branch-and-bound search for every minimum-length solution.

    The recursion answers "which shortest goal-reaching move sequences start
    at this state and fit in this many moves". A node with a move that hits
    the goal immediately is not expanded further; otherwise the budget handed
    to later children tightens to the best suffix found so far, keeping ties.
    A transposition table keyed by ``RobotState.key`` answers revisits that
    cannot do better than an earlier visit.

    With ``iterative_deepening`` (the default) the budget grows one move at a
    time up to ``max_depth``, so the first budget that yields solutions gives
    the optimum and the search never wanders deeper than it needs to. Without
    it a single pass starts from ``max_depth`` and only tightens as solutions
    are found; that mode is only practical on small boards.

    ``max_depth`` is a hard cap. Running into it is reported as
    ``BOUND_REACHED``; the puzzle may still have a longer solution.
    """

    def __init__(self, board: Board, max_depth: int = DEFAULT_MAX_DEPTH, iterative_deepening: bool = True):
        self.board = board
        self.max_depth = int(max_depth)
        self.iterative_deepening = iterative_deepening

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------
    def solve(self, state: RobotState, goal: Target) -> SolveResult:
        validate_state(self.board, state)
        require_target(self.board, goal)
        ctx = _SearchContext(goal_test(self.board, goal))
        if ctx.achieved(state):
            return SolveResult(SolveStatus.SOLVED, move_count=0, solutions=[()])

        if self.iterative_deepening:
            known = 0
            for budget in range(1, self.max_depth + 1):
                found = self._search(ctx, state, budget)
                if found:
                    return self._solved(found, ctx)
                # No new state within reach: the whole component has been seen
                if len(ctx.table) == known:
                    return SolveResult(SolveStatus.UNSOLVABLE, nodes_expanded=ctx.nodes)
                known = len(ctx.table)
            return SolveResult(SolveStatus.BOUND_REACHED, nodes_expanded=ctx.nodes)

        found = self._search(ctx, state, self.max_depth)
        if found:
            return self._solved(found, ctx)
        status = SolveStatus.BOUND_REACHED if ctx.cutoff else SolveStatus.UNSOLVABLE
        return SolveResult(status, nodes_expanded=ctx.nodes)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _search(self, ctx: _SearchContext, state: RobotState, budget: int) -> Tuple[Path, ...]:
        """Return every shortest goal-reaching suffix from state of at most budget moves."""
        if budget <= 0:
            ctx.cutoff = True
            return ()

        key = state.key
        entry = ctx.table.get(key)
        if entry is not None:
            searched, suffixes = entry
            if suffixes:
                # A non-empty answer is already the overall shortest from here
                return suffixes if len(suffixes[0]) <= budget else ()
            if searched >= budget:
                return ()

        ctx.nodes += 1
        children = list(successors(self.board, state))
        immediate = tuple((move,) for move, nxt in children if ctx.achieved(nxt))
        if immediate:
            ctx.table[key] = (budget, immediate)
            return immediate

        found: List[Path] = []
        best_len = None
        child_budget = budget - 1
        for move, nxt in children:
            sub = self._search(ctx, nxt, child_budget)
            if not sub:
                continue
            length = len(sub[0])
            if best_len is None or length < best_len:
                best_len = length
                child_budget = length
                found = []
            found.extend((move,) + suffix for suffix in sub)

        result = tuple(found)
        ctx.table[key] = (budget, result)
        return result

    def _solved(self, found: Tuple[Path, ...], ctx: _SearchContext) -> SolveResult:
        return SolveResult(
            SolveStatus.SOLVED,
            move_count=len(found[0]),
            solutions=list(found),
            nodes_expanded=ctx.nodes,
        )


def solve_dfs(
    board: Board,
    robots: RobotState,
    target: Target,
    max_depth: int = DEFAULT_MAX_DEPTH,
    iterative_deepening: bool = True,
) -> SolveResult:
    return DFSSolver(board, max_depth=max_depth, iterative_deepening=iterative_deepening).solve(robots, target)
