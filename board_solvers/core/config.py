"""
YAML configuration for the solve scripts, plus the factories they use.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..games.ricochet_robots.board import ROBOT_COLORS, Board, Color, Shape, Target
from ..games.ricochet_robots.game import RobotState
from ..games.ricochet_robots.solver_bfs import BFSSolver
from ..games.ricochet_robots.solver_dfs import DEFAULT_MAX_DEPTH, DFSSolver
from .solver import Solver

ALGORITHMS = ("bfs", "dfs", "both")


@dataclass
class SolveConfig:
    """Settings for one solve run on the standard board."""
    seed: Optional[int] = None
    algorithm: str = "bfs"
    max_depth: int = DEFAULT_MAX_DEPTH
    max_states: Optional[int] = None
    iterative_deepening: bool = True
    # {"color": "BLUE", "shape": "GEAR"}; chosen at random when absent
    target: Optional[Dict[str, str]] = None
    # {"BLUE": [row, col], ...} for all four robots; placed at random when absent
    robots: Optional[Dict[str, List[int]]] = None

    def __post_init__(self):
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {self.algorithm}")
        if int(self.max_depth) < 1:
            raise ValueError("max_depth must be positive")
        if self.max_states is not None and int(self.max_states) < 1:
            raise ValueError("max_states must be positive")
        if self.target is not None:
            parse_target(self.target)
        if self.robots is not None:
            parse_robots(self.robots)

    def target_value(self) -> Optional[Target]:
        return parse_target(self.target) if self.target is not None else None

    def robots_value(self) -> Optional[RobotState]:
        return parse_robots(self.robots) if self.robots is not None else None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolveConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)


def parse_target(data: Dict[str, str]) -> Target:
    try:
        return Target(Color[str(data["color"]).upper()], Shape[str(data["shape"]).upper()])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Invalid target {data!r}") from exc


def parse_robots(data: Dict[str, List[int]]) -> RobotState:
    try:
        by_color = {Color[str(name).upper()]: tuple(pos) for name, pos in data.items()}
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Invalid robot placement {data!r}") from exc
    missing = [c.name for c in ROBOT_COLORS if c not in by_color]
    if missing or len(by_color) != len(ROBOT_COLORS):
        raise ValueError(f"Robot placement must name exactly {', '.join(c.name for c in ROBOT_COLORS)}")
    # MalformedStateError is a ValueError as well
    return RobotState(tuple(by_color[c] for c in ROBOT_COLORS))


def load_config(path: str | Path) -> SolveConfig:
    """Read a YAML file; the settings may sit at top level or under a ``solve`` key."""
    path = Path(path)
    with path.open() as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")
    section = data["solve"] if "solve" in data else data
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ValueError(f"The solve section in {path} must be a mapping")
    return SolveConfig.from_dict(section)


def make_solver(board: Board, config: SolveConfig, algorithm: str | None = None) -> Solver:
    algorithm = algorithm or config.algorithm
    if algorithm == "bfs":
        return BFSSolver(board, max_depth=config.max_depth, max_states=config.max_states)
    elif algorithm == "dfs":
        return DFSSolver(board, max_depth=config.max_depth, iterative_deepening=config.iterative_deepening)
    else:
        raise ValueError(f"Unknown solver: {algorithm}")
