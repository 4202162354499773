#!/usr/bin/env python3
"""
Solve a Ricochet Robots puzzle on the standard board.

Usage:
    python scripts/solve.py configs/default.yaml
    python scripts/solve.py --seed 3 --algorithm both --json
"""
from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from board_solvers.core.config import SolveConfig, load_config, make_solver
from board_solvers.core.solver import SolveResult
from board_solvers.games.ricochet_robots import Board, RicochetRobotsGame, replay, target_achieved


def run_solver(name: str, game: RicochetRobotsGame, config: SolveConfig, quiet: bool = False) -> SolveResult:
    state = game.state
    solver = make_solver(game.board, config, algorithm=name)
    start = time.perf_counter()
    result = solver.solve(state.robots, state.target)
    elapsed = time.perf_counter() - start
    if not quiet:
        print(f"[{name}] {result.status.value}: move_count={result.move_count} "
              f"solutions={len(result.solutions)} nodes={result.nodes_expanded} time={elapsed:.2f}s")
    return result


def print_solutions(game: RicochetRobotsGame, result: SolveResult, limit: int) -> None:
    state = game.state
    for idx, solution in enumerate(result.solutions[:limit]):
        end = replay(game.board, state.robots, solution)
        ok = target_achieved(game.board, end, state.target)
        moves = ", ".join(str(move) for move in solution) or "(already solved)"
        print(f"  {idx + 1}. {moves}{'' if ok else '  [does not reach target!]'}")
    if len(result.solutions) > limit:
        print(f"  ... {len(result.solutions) - limit} more")


def main():
    parser = argparse.ArgumentParser(description="Find every minimum-move solution for a puzzle")
    parser.add_argument("config", type=str, nargs="?", help="Path to YAML configuration file")
    parser.add_argument("--seed", type=int, help="Seed for robot placement and target choice")
    parser.add_argument("--algorithm", choices=["bfs", "dfs", "both"], help="Solver to run")
    parser.add_argument("--max-depth", type=int, help="Hard cap on solution length")
    parser.add_argument("--show", type=int, default=10, help="Number of solutions to print")
    parser.add_argument("--json", action="store_true", help="Print results as JSON instead of text")
    args = parser.parse_args()

    config = SolveConfig()
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Configuration file not found: {config_path}")
            sys.exit(1)
        try:
            config = load_config(config_path)
        except ValueError as e:
            print(f"Invalid configuration: {e}")
            sys.exit(1)
    if args.seed is not None:
        config.seed = args.seed
    if args.algorithm is not None:
        config.algorithm = args.algorithm
    if args.max_depth is not None:
        config.max_depth = args.max_depth

    game = RicochetRobotsGame(board=Board.standard())
    robots = config.robots_value()
    if robots is not None:
        game.start(robots, config.target_value())
    else:
        game.reset(seed=config.seed, target=config.target_value())

    if not args.json:
        game.render()
        print()

    names = ["bfs", "dfs"] if config.algorithm == "both" else [config.algorithm]
    results = {}
    for name in names:
        results[name] = run_solver(name, game, config, quiet=args.json)

    if args.json:
        state = game.state
        print(json.dumps({
            "robots": {robot.color.name: list(robot.position) for robot in state.robots.robots},
            "target": str(state.target),
            "results": {name: result.to_dict() for name, result in results.items()},
        }, indent=2))
    else:
        for name, result in results.items():
            if result.solved:
                print(f"{name} solutions ({result.move_count} moves):")
                print_solutions(game, result, args.show)

    if len(results) == 2:
        bfs, dfs = results["bfs"], results["dfs"]
        if bfs.move_count != dfs.move_count or bfs.solution_set() != dfs.solution_set():
            print("BFS and DFS disagree!")
            sys.exit(2)


if __name__ == "__main__":
    main()
