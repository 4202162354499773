import random

import pytest

from board_solvers.core.solver import SolveResult, SolveStatus
from board_solvers.games.ricochet_robots import (
    Board,
    BoardBuilder,
    BFSSolver,
    Color,
    DFSSolver,
    Direction,
    MalformedStateError,
    Move,
    RobotState,
    Shape,
    Target,
    replay,
    solve_bfs,
    solve_dfs,
    target_achieved,
)

BLUE, RED, GREEN, YELLOW = Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW
UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT

CORNER_TARGET = Target(BLUE, Shape.STAR)


def corner_board():
    """16x16 board without interior walls and a single target at (0, 0)."""
    return BoardBuilder(16).add_target(0, 0, BLUE, Shape.STAR).build()


def small_board():
    builder = BoardBuilder(5)
    builder.add_wall(1, 1, RIGHT)
    builder.add_wall(2, 3, UP)
    builder.add_wall(3, 0, RIGHT)
    builder.add_wall(3, 2, DOWN)
    builder.add_wall(2, 2, LEFT)
    builder.add_wall(4, 3, RIGHT)
    builder.add_target(0, 0, Color.RAINBOW, Shape.HOLE)
    builder.add_target(4, 4, BLUE, Shape.STAR)
    builder.add_target(2, 2, GREEN, Shape.PLANET)
    return builder.build()


def assert_valid_solutions(board, robots, target, result):
    assert result.solved
    assert len(result.solutions) == len(set(result.solutions))
    for solution in result.solutions:
        assert len(solution) == result.move_count
        assert target_achieved(board, replay(board, robots, solution), target)


def assert_equivalent(bfs, dfs):
    assert bfs.status == dfs.status
    assert bfs.move_count == dfs.move_count
    assert set(bfs.solutions) == set(dfs.solutions)


def test_single_slide_solution_on_open_board():
    board = corner_board()
    robots = RobotState(((0, 5), (15, 15), (10, 10), (5, 12)))
    for result in (solve_bfs(board, robots, CORNER_TARGET), solve_dfs(board, robots, CORNER_TARGET)):
        assert result.status == SolveStatus.SOLVED
        assert result.move_count == 1
        assert result.solutions == [(Move(BLUE, LEFT),)]


def test_blocking_robot_forces_longer_solution():
    board = corner_board()
    robots = RobotState(((0, 5), (0, 2), (10, 10), (15, 15)))
    bfs = solve_bfs(board, robots, CORNER_TARGET)
    dfs = solve_dfs(board, robots, CORNER_TARGET)
    assert bfs.move_count == 2
    assert set(bfs.solutions) == {(Move(RED, DOWN), Move(BLUE, LEFT))}
    assert_valid_solutions(board, robots, CORNER_TARGET, bfs)
    assert_equivalent(bfs, dfs)


def test_every_ordering_of_independent_moves_is_reported():
    board = corner_board()
    robots = RobotState(((0, 5), (0, 2), (0, 1), (10, 10)))
    bfs = solve_bfs(board, robots, CORNER_TARGET)
    dfs = solve_dfs(board, robots, CORNER_TARGET)
    assert bfs.move_count == 3
    solutions = set(bfs.solutions)
    assert (Move(RED, DOWN), Move(GREEN, DOWN), Move(BLUE, LEFT)) in solutions
    assert (Move(GREEN, DOWN), Move(RED, DOWN), Move(BLUE, LEFT)) in solutions
    assert (Move(BLUE, DOWN), Move(BLUE, LEFT), Move(BLUE, UP)) in solutions
    assert_valid_solutions(board, robots, CORNER_TARGET, bfs)
    assert_equivalent(bfs, dfs)


def test_rainbow_target_collects_all_robots_solutions():
    target = Target(Color.RAINBOW, Shape.HOLE)
    board = BoardBuilder(16).add_target(0, 0, Color.RAINBOW, Shape.HOLE).build()
    robots = RobotState(((0, 5), (5, 0), (10, 10), (15, 15)))
    bfs = solve_bfs(board, robots, target)
    assert bfs.move_count == 1
    assert set(bfs.solutions) == {(Move(BLUE, LEFT),), (Move(RED, UP),)}
    assert_equivalent(bfs, solve_dfs(board, robots, target))


def test_already_solved_is_empty_solution():
    board = corner_board()
    robots = RobotState(((0, 0), (0, 2), (10, 10), (15, 15)))
    for result in (solve_bfs(board, robots, CORNER_TARGET), solve_dfs(board, robots, CORNER_TARGET)):
        assert result.status == SolveStatus.SOLVED
        assert result.move_count == 0
        assert result.solutions == [()]


def test_standard_board_single_move():
    board = Board.standard()
    target = Target(YELLOW, Shape.GEAR)
    robots = RobotState(((0, 0), (15, 15), (0, 15), (10, 1)))
    bfs = solve_bfs(board, robots, target)
    dfs = solve_dfs(board, robots, target)
    assert bfs.solutions == [(Move(YELLOW, UP),)]
    assert_equivalent(bfs, dfs)


def test_standard_board_rainbow_target():
    board = Board.standard()
    target = Target(Color.RAINBOW, Shape.HOLE)
    robots = RobotState(((0, 0), (2, 0), (0, 15), (15, 15)))
    bfs = solve_bfs(board, robots, target)
    assert bfs.solutions == [(Move(RED, RIGHT),)]
    assert_equivalent(bfs, solve_dfs(board, robots, target))


class TestUnsolvable:
    """Targets that no robot can ever stop on."""

    @staticmethod
    def walled_in():
        builder = BoardBuilder(2, 3)
        builder.add_wall(0, 0, DOWN)
        builder.add_wall(0, 0, RIGHT)
        builder.add_target(0, 0, BLUE, Shape.STAR)
        return builder.build()

    def test_bfs_reports_unsolvable(self):
        board = self.walled_in()
        robots = RobotState(((1, 2), (1, 1), (1, 0), (0, 2)))
        result = solve_bfs(board, robots, CORNER_TARGET)
        assert result.status == SolveStatus.UNSOLVABLE
        assert result.solutions == []
        assert result.move_count is None
        assert not result.solved

    def test_dfs_reports_unsolvable(self):
        board = self.walled_in()
        robots = RobotState(((1, 2), (1, 1), (1, 0), (0, 2)))
        result = solve_dfs(board, robots, CORNER_TARGET)
        assert result.status == SolveStatus.UNSOLVABLE
        assert result.solutions == []

    def test_no_legal_moves(self):
        board = BoardBuilder(2).add_target(0, 0, BLUE, Shape.STAR).build()
        robots = RobotState(((1, 1), (0, 0), (1, 0), (0, 1)))
        assert solve_bfs(board, robots, CORNER_TARGET).status == SolveStatus.UNSOLVABLE
        assert solve_dfs(board, robots, CORNER_TARGET).status == SolveStatus.UNSOLVABLE


class TestBounds:
    """Caps report BOUND_REACHED rather than UNSOLVABLE."""

    robots = RobotState(((0, 5), (0, 2), (10, 10), (15, 15)))

    def test_bfs_depth_cap(self):
        result = solve_bfs(corner_board(), self.robots, CORNER_TARGET, max_depth=1)
        assert result.status == SolveStatus.BOUND_REACHED
        assert result.solutions == []

    def test_bfs_state_cap(self):
        result = solve_bfs(corner_board(), self.robots, CORNER_TARGET, max_states=5)
        assert result.status == SolveStatus.BOUND_REACHED

    def test_dfs_depth_cap(self):
        result = solve_dfs(corner_board(), self.robots, CORNER_TARGET, max_depth=1)
        assert result.status == SolveStatus.BOUND_REACHED
        assert result.solutions == []

    def test_dfs_cap_large_enough(self):
        result = solve_dfs(corner_board(), self.robots, CORNER_TARGET, max_depth=2)
        assert result.move_count == 2

    def test_dfs_single_pass_depth_cap(self):
        result = solve_dfs(corner_board(), self.robots, CORNER_TARGET, max_depth=1, iterative_deepening=False)
        assert result.status == SolveStatus.BOUND_REACHED


def test_invalid_inputs_are_rejected_up_front():
    board = corner_board()
    with pytest.raises(MalformedStateError):
        solve_bfs(board, RobotState(((0, 5), (0, 2), (10, 10), (16, 15))), CORNER_TARGET)
    with pytest.raises(MalformedStateError):
        solve_dfs(board, RobotState(((0, 5), (0, 2), (10, 10), (16, 15))), CORNER_TARGET)
    with pytest.raises(ValueError):
        solve_bfs(board, RobotState(((0, 5), (0, 2), (10, 10), (15, 15))), Target(RED, Shape.GEAR))


@pytest.mark.parametrize("target", [
    Target(Color.RAINBOW, Shape.HOLE),
    Target(BLUE, Shape.STAR),
    Target(GREEN, Shape.PLANET),
])
def test_bfs_and_dfs_agree_on_random_placements(target):
    board = small_board()
    rng = random.Random(1234)
    cells = [(row, col) for row in range(board.height) for col in range(board.width)]
    for _ in range(6):
        robots = RobotState(tuple(rng.sample(cells, 4)))
        bfs = BFSSolver(board).solve(robots, target)
        dfs = DFSSolver(board).solve(robots, target)
        assert_equivalent(bfs, dfs)
        if bfs.solved:
            assert_valid_solutions(board, robots, target, bfs)
            # Classic single-pass branch-and-bound finds the same set
            single = DFSSolver(board, max_depth=bfs.move_count + 1, iterative_deepening=False).solve(robots, target)
            assert_equivalent(bfs, single)


def test_no_solver_beats_a_known_optimum():
    board = corner_board()
    robots = RobotState(((0, 5), (0, 2), (0, 1), (10, 10)))
    # Three moves are needed: two robots block row 0 and column 0 is out of reach in one move
    for result in (solve_bfs(board, robots, CORNER_TARGET), solve_dfs(board, robots, CORNER_TARGET)):
        assert result.move_count >= 3
        assert_valid_solutions(board, robots, CORNER_TARGET, result)


def test_solver_result_to_dict():
    result = SolveResult(SolveStatus.SOLVED, move_count=1, solutions=[(Move(BLUE, LEFT),)], nodes_expanded=3)
    assert result.to_dict() == {
        "status": "solved",
        "move_count": 1,
        "solutions": [["BLUE LEFT"]],
        "nodes_expanded": 3,
    }
