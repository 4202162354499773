from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class SolveStatus(str, Enum):
    SOLVED = "solved"
    # The whole reachable state space was searched without meeting the goal
    UNSOLVABLE = "unsolvable"
    # A depth or state cap stopped the search first; the puzzle may still be solvable
    BOUND_REACHED = "bound_reached"


@dataclass
class SolveResult:
    """Outcome of one solve call.

    ``solutions`` holds every optimal move sequence found; ``move_count`` is
    their common length and is None unless the puzzle was solved.
    """

    status: SolveStatus
    move_count: Optional[int] = None
    solutions: List[Tuple[Any, ...]] = field(default_factory=list)
    nodes_expanded: int = 0

    @property
    def solved(self) -> bool:
        return self.status == SolveStatus.SOLVED

    def solution_set(self) -> set:
        return set(self.solutions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "move_count": self.move_count,
            "solutions": [[str(move) for move in solution] for solution in self.solutions],
            "nodes_expanded": self.nodes_expanded,
        }


class Solver(ABC):
    """
    Exact search algorithm returning every minimum-length solution.
    """

    @abstractmethod
    def solve(self, state: Any, goal: Any) -> SolveResult:
        """
        Search from state until goal is met, the space is exhausted, or a bound is hit.
        """
        raise NotImplementedError
