#!/usr/bin/env python3
"""
Play Ricochet Robots in the terminal, one typed move per line.

Usage:
    python scripts/play.py --seed 5

Moves look like "blue up" or "b u". Type "hint" for an optimal solution,
"next" for a new target, "quit" to stop.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from board_solvers.games.ricochet_robots import Board, InvalidMoveError, Move, RicochetRobotsGame, solve_bfs


def main():
    parser = argparse.ArgumentParser(description="Play Ricochet Robots on the standard board")
    parser.add_argument("--seed", type=int, help="Seed for robot placement and target choice")
    args = parser.parse_args()

    game = RicochetRobotsGame(board=Board.standard())
    game.reset(seed=args.seed)
    game.render()
    print(f"Moves available: {', '.join(str(m) for m in game.legal_actions())}")

    for line in sys.stdin:
        command = line.strip().lower()
        if not command:
            continue
        if command in ("quit", "exit", "q"):
            break
        if command == "next":
            game.next_round()
            game.render()
            continue
        if command == "hint":
            state = game.state
            result = solve_bfs(game.board, state.robots, state.target)
            if result.solved:
                print(f"Optimal: {result.move_count} moves, e.g. "
                      f"{', '.join(str(m) for m in result.solutions[0]) or '(already there)'}")
            else:
                print(f"No solution ({result.status.value})")
            continue

        try:
            move = Move.parse(command)
            state, done, info = game.step(move)
        except InvalidMoveError as e:
            print(f"Illegal move: {e}")
            continue
        except ValueError as e:
            print(e)
            continue

        print(f"\nmove {move}\n")
        game.render()
        if done:
            print(f"Target reached in {state.move_count} moves! Type 'next' for a new target.")


if __name__ == "__main__":
    main()
