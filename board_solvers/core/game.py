from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class GameState(ABC):
    """
    Immutable position of a puzzle round.

    Sub-classes add the concrete fields (robot positions, active target, ...).
    """

    @property
    @abstractmethod
    def is_terminal(self) -> bool:
        """True once the active goal is met."""
        raise NotImplementedError


class Game(ABC):
    """
    Interactive wrapper around a puzzle engine: one round at a time,
    one action per ``step``.
    """

    @property
    @abstractmethod
    def state(self) -> GameState | None:
        """Current state, or None before the first ``reset``."""
        raise NotImplementedError

    @abstractmethod
    def reset(self, seed: int | None = None) -> GameState:
        """Start a new round and return its initial state."""
        raise NotImplementedError

    @abstractmethod
    def step(self, action: Any) -> Tuple[GameState, bool, Dict[str, Any]]:
        """Apply action and return (next_state, done, info)."""
        raise NotImplementedError

    @abstractmethod
    def legal_actions(self, state: GameState | None = None) -> List[Any]:
        raise NotImplementedError

    @abstractmethod
    def render(self, state: GameState | None = None, mode: str = "human") -> Any:
        """
        mode:
            'human'     → print
            'ansi'      → str
            'rgb_array' → np.ndarray
        """
        raise NotImplementedError

    def play(self, actions: Iterable[Any]) -> GameState:
        """Step through actions in order, stopping early if the round ends."""
        state = self.state
        if state is None:
            raise RuntimeError("Game not reset")
        for action in actions:
            state, done, _ = self.step(action)
            if done:
                break
        return state
