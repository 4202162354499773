import pytest

from board_solvers.core.config import (
    SolveConfig,
    load_config,
    make_solver,
    parse_robots,
    parse_target,
)
from board_solvers.games.ricochet_robots import BFSSolver, Board, Color, DFSSolver, RobotState, Shape, Target


def test_defaults():
    config = SolveConfig()
    assert config.algorithm == "bfs"
    assert config.max_depth == 32
    assert config.target_value() is None
    assert config.robots_value() is None


def test_load_nested_and_top_level(tmp_path):
    nested = tmp_path / "nested.yaml"
    nested.write_text(
        "solve:\n"
        "  seed: 3\n"
        "  algorithm: dfs\n"
        "  max_depth: 10\n"
        "  target: {color: yellow, shape: gear}\n"
    )
    config = load_config(nested)
    assert config.seed == 3
    assert config.algorithm == "dfs"
    assert config.max_depth == 10
    assert config.target_value() == Target(Color.YELLOW, Shape.GEAR)

    flat = tmp_path / "flat.yaml"
    flat.write_text("algorithm: both\nmax_states: 1000\n")
    config = load_config(flat)
    assert config.algorithm == "both"
    assert config.max_states == 1000


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == SolveConfig()


@pytest.mark.parametrize("text", [
    "- just\n- a list\n",
    "solve:\n  unknown_key: 1\n",
    "solve:\n  algorithm: astar\n",
    "solve:\n  max_depth: 0\n",
    "solve:\n  target: {color: purple, shape: gear}\n",
    "solve:\n  robots: {BLUE: [0, 0], RED: [1, 1]}\n",
    "solve: 3\n",
])
def test_invalid_configs(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text)
    with pytest.raises(ValueError):
        load_config(path)


def test_parse_target():
    assert parse_target({"color": "RAINBOW", "shape": "hole"}) == Target(Color.RAINBOW, Shape.HOLE)
    with pytest.raises(ValueError):
        parse_target({"color": "BLUE"})


def test_parse_robots():
    robots = parse_robots({"yellow": [3, 3], "BLUE": [0, 0], "Red": [1, 1], "GREEN": [2, 2]})
    assert robots == RobotState(((0, 0), (1, 1), (2, 2), (3, 3)))
    with pytest.raises(ValueError):
        parse_robots({"BLUE": [0, 0], "RED": [0, 0], "GREEN": [2, 2], "YELLOW": [3, 3]})
    with pytest.raises(ValueError):
        parse_robots({"BLUE": [0, 0], "RED": [1, 1], "GREEN": [2, 2], "RAINBOW": [3, 3]})


def test_make_solver():
    board = Board.standard()
    config = SolveConfig(algorithm="both", max_depth=12, max_states=50)
    bfs = make_solver(board, config, algorithm="bfs")
    dfs = make_solver(board, config, algorithm="dfs")
    assert isinstance(bfs, BFSSolver)
    assert isinstance(dfs, DFSSolver)
    assert dfs.max_depth == 12
    with pytest.raises(ValueError):
        make_solver(board, config)


def test_to_dict_round_trip():
    config = SolveConfig(seed=1, target={"color": "BLUE", "shape": "STAR"})
    assert SolveConfig.from_dict(config.to_dict()) == config


def test_load_empty_solve_section(tmp_path):
    path = tmp_path / "blank.yaml"
    path.write_text("solve:\n")
    assert load_config(path) == SolveConfig()
