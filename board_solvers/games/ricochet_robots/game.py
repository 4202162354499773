from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, NamedTuple, Sequence, Tuple

from ...core.game import Game, GameState
from .board import (
    COLOR_CHARS,
    DIRECTIONS,
    ROBOT_COLORS,
    Board,
    Color,
    Direction,
    Position,
    Target,
)
from .rendering import render_rgb, render_text

ROBOT_INDEX: Dict[Color, int] = {color: idx for idx, color in enumerate(ROBOT_COLORS)}


class InvalidMoveError(ValueError):
    """A move outside the current legal-move set was applied."""


class MalformedStateError(ValueError):
    """Robot positions violate the one-robot-per-colour, one-robot-per-cell rules."""


class Move(NamedTuple):
    color: Color
    direction: Direction

    def __str__(self) -> str:
        return f"{self.color.name} {self.direction.name}"

    @classmethod
    def parse(cls, text: str) -> "Move":
        """Parse 'blue up', 'b u', 'RED LEFT' and similar."""
        parts = text.strip().lower().split()
        if len(parts) != 2:
            raise ValueError(f"expected '<robot> <direction>', got {text!r}")
        color_word, dir_word = parts
        color = next(
            (c for c in ROBOT_COLORS if color_word in (c.name.lower(), COLOR_CHARS[c])),
            None,
        )
        direction = next(
            (d for d in DIRECTIONS if dir_word in (d.name.lower(), d.name[0].lower())),
            None,
        )
        if color is None or direction is None:
            raise ValueError(f"unrecognised move {text!r}")
        return cls(color, direction)


@dataclass(frozen=True)
class Robot:
    color: Color
    row: int
    col: int

    @property
    def position(self) -> Position:
        return (self.row, self.col)


@dataclass(frozen=True)
class RobotState:
    """Positions of all robots, indexed by colour (BLUE, RED, GREEN, YELLOW)."""

    positions: Tuple[Position, ...]
    # (colour index, row, col) for every robot, in colour order
    key: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            positions = tuple((int(row), int(col)) for row, col in self.positions)
        except (TypeError, ValueError) as exc:
            raise MalformedStateError(f"robot positions must be (row, col) pairs: {self.positions!r}") from exc
        if len(positions) != len(ROBOT_COLORS):
            raise MalformedStateError(f"expected {len(ROBOT_COLORS)} robots, got {len(positions)}")
        if len(set(positions)) != len(positions):
            raise MalformedStateError(f"two robots share a cell: {positions}")
        object.__setattr__(self, "positions", positions)
        object.__setattr__(
            self, "key", tuple(v for idx, (row, col) in enumerate(positions) for v in (idx, row, col))
        )

    @classmethod
    def from_robots(cls, robots: Iterable[Robot]) -> "RobotState":
        by_color: Dict[Color, Position] = {}
        for robot in robots:
            if robot.color not in ROBOT_INDEX:
                raise MalformedStateError(f"{robot.color.name} is not a robot colour")
            if robot.color in by_color:
                raise MalformedStateError(f"duplicate {robot.color.name} robot")
            by_color[robot.color] = robot.position
        missing = [c.name for c in ROBOT_COLORS if c not in by_color]
        if missing:
            raise MalformedStateError(f"missing robots: {', '.join(missing)}")
        return cls(tuple(by_color[c] for c in ROBOT_COLORS))

    @property
    def robots(self) -> List[Robot]:
        return [Robot(color, row, col) for color, (row, col) in zip(ROBOT_COLORS, self.positions)]

    def position(self, color: Color) -> Position:
        return self.positions[robot_index(color)]

    def robot_at(self, pos: Position) -> Color | None:
        for color, robot_pos in zip(ROBOT_COLORS, self.positions):
            if robot_pos == pos:
                return color
        return None

    def moved(self, color: Color, pos: Position) -> "RobotState":
        positions = list(self.positions)
        positions[robot_index(color)] = pos
        return RobotState(tuple(positions))


def robot_index(color: Color) -> int:
    try:
        return ROBOT_INDEX[Color(color)]
    except (KeyError, ValueError) as exc:
        raise InvalidMoveError(f"no robot with colour {color!r}") from exc


def validate_state(board: Board, robots: RobotState) -> None:
    """Reject states with robots outside the board."""
    for color, pos in zip(ROBOT_COLORS, robots.positions):
        if not board.in_bounds(pos):
            raise MalformedStateError(f"{color.name} robot at {pos} is off the {board.height}x{board.width} board")


def require_target(board: Board, target: Target) -> None:
    if not board.positions_of(target):
        raise ValueError(f"target {target} is not on the board")


# ---------------------------------------------------------------------------
# Movement engine
# ---------------------------------------------------------------------------
def slide(board: Board, robots: RobotState, color: Color, direction: Direction) -> Position:
    """Return where the robot of the given colour comes to rest sliding in direction."""
    pos = robots.positions[robot_index(color)]
    if not board.in_bounds(pos):
        raise MalformedStateError(f"{Color(color).name} robot at {pos} is off the {board.height}x{board.width} board")
    # The mover's own cell is in here too; a straight slide never re-enters it
    occupied = set(robots.positions)
    while True:
        nxt = board.neighbor(pos, direction)
        if nxt is None or nxt in occupied:
            return pos
        pos = nxt


def apply_move(board: Board, robots: RobotState, move: Tuple[Color, Direction]) -> RobotState:
    color, direction = move
    start = robots.position(color)
    dest = slide(board, robots, color, direction)
    if dest == start:
        raise InvalidMoveError(f"{Color(color).name} robot cannot move {Direction(direction).name} from {start}")
    return robots.moved(color, dest)


def replay(board: Board, robots: RobotState, moves: Iterable[Tuple[Color, Direction]]) -> RobotState:
    for move in moves:
        robots = apply_move(board, robots, move)
    return robots


# ---------------------------------------------------------------------------
# Move generation
# ---------------------------------------------------------------------------
def successors(board: Board, robots: RobotState) -> Iterator[Tuple[Move, RobotState]]:
    """Yield (move, resulting state) for every legal move, robot index then direction order."""
    for color, start in zip(ROBOT_COLORS, robots.positions):
        for direction in DIRECTIONS:
            dest = slide(board, robots, color, direction)
            if dest != start:
                yield Move(color, direction), robots.moved(color, dest)


def legal_moves(board: Board, robots: RobotState) -> List[Move]:
    return [move for move, _ in successors(board, robots)]


# ---------------------------------------------------------------------------
# Goal test
# ---------------------------------------------------------------------------
def goal_test(board: Board, target: Target) -> Callable[[RobotState], bool]:
    """Return a predicate telling whether a state has a matching robot on target."""
    cells = frozenset(board.positions_of(target))
    if target.color == Color.RAINBOW:
        indices: Sequence[int] = tuple(range(len(ROBOT_COLORS)))
    else:
        indices = (ROBOT_INDEX[target.color],)

    def achieved(robots: RobotState) -> bool:
        positions = robots.positions
        return any(positions[idx] in cells for idx in indices)

    return achieved


def target_achieved(board: Board, robots: RobotState, target: Target) -> bool:
    return goal_test(board, target)(robots)


# ---------------------------------------------------------------------------
# Live play
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RRGameState(GameState):
    """Immutable state for Ricochet Robots."""

    robots: RobotState
    target: Target
    move_count: int = 0
    # Full Board reference excluded from equality/hash
    board: Board = field(default=None, compare=False, hash=False, repr=False)

    @property
    def is_terminal(self) -> bool:
        return target_achieved(self.board, self.robots, self.target)


class RicochetRobotsGame(Game):
    """
    Single-player Ricochet Robots.

    A round ends when a robot of the target's colour (any robot for a
    RAINBOW target) stops on the active target. ``next_round`` picks a new
    target and keeps the robots where they are.
    """

    def __init__(self, board: Board | None = None, rng: random.Random | None = None) -> None:
        self.board = board or Board.standard()
        self.rng = rng or random.Random()

        # internal state
        self._state: RRGameState | None = None

    @property
    def state(self) -> RRGameState | None:
        return self._state

    # ------------------------------------------------------------------
    # Game interface
    # ------------------------------------------------------------------
    def reset(self, seed: int | None = None, target: Target | None = None) -> RRGameState:
        if seed is not None:
            self.rng.seed(seed)
        robots = RobotState(self._random_robot_positions())
        self._state = RRGameState(
            robots=robots,
            target=self._choose_target(target),
            move_count=0,
            board=self.board,
        )
        return self._state

    def start(self, robots: RobotState, target: Target) -> RRGameState:
        """Begin a round from externally chosen robot positions and target."""
        validate_state(self.board, robots)
        self._state = RRGameState(robots=robots, target=self._choose_target(target), board=self.board)
        return self._state

    def next_round(self, target: Target | None = None) -> RRGameState:
        if self._state is None:
            raise RuntimeError("Game not reset")
        self._state = RRGameState(
            robots=self._state.robots,
            target=self._choose_target(target),
            move_count=0,
            board=self.board,
        )
        return self._state

    def step(self, action: Tuple[Color, Direction]) -> Tuple[RRGameState, bool, Dict[str, Any]]:
        if self._state is None:
            raise RuntimeError("Game not reset")
        color, direction = action
        move = Move(Color(color), Direction(direction))
        robots = apply_move(self.board, self._state.robots, move)
        new_state = RRGameState(
            robots=robots,
            target=self._state.target,
            move_count=self._state.move_count + 1,
            board=self.board,
        )
        self._state = new_state
        done = new_state.is_terminal
        info: Dict[str, Any] = {"move": move, "position": robots.position(move.color)}
        return new_state, done, info

    def legal_actions(self, state: RRGameState | None = None) -> List[Move]:
        st = state or self._state
        if st is None:
            raise RuntimeError("Game not reset")
        return legal_moves(self.board, st.robots)

    def render(self, state: RRGameState | None = None, mode: str = "human") -> Any:
        st = state or self._state
        if st is None:
            raise RuntimeError("Game not reset")
        if mode == "human":
            print(render_text(self.board, st.robots, st.target))
        elif mode == "ansi":
            return render_text(self.board, st.robots, st.target)
        elif mode == "rgb_array":
            return render_rgb(self.board, st.robots, st.target, scale=20)
        else:
            raise ValueError(f"Unsupported render mode {mode}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _choose_target(self, target: Target | None) -> Target:
        if target is not None:
            require_target(self.board, target)
            return target
        if not self.board.targets:
            raise ValueError("board has no targets to choose from")
        # Sort for a seed-stable choice
        choices = [self.board.targets[pos] for pos in sorted(self.board.targets)]
        return self.rng.choice(choices)

    def _random_robot_positions(self) -> Tuple[Position, ...]:
        candidates = [
            (row, col)
            for row in range(self.board.height)
            for col in range(self.board.width)
            if self.board.is_allowable_start(row, col) and self.board.target_at((row, col)) is None
        ]
        if len(candidates) < len(ROBOT_COLORS):
            raise ValueError("not enough free starting squares for the robots")
        return tuple(self.rng.sample(candidates, len(ROBOT_COLORS)))
