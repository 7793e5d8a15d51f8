from abc import ABC, abstractmethod
from typing import Any, Hashable, Sequence


class Game(ABC):
    """Rules of a deterministic two-player zero-sum game, as seen by the engine.

    States must be immutable and hashable by content: the engine uses them as
    transposition table keys. Every method must be a pure function of its
    arguments.
    """

    @abstractmethod
    def actions(self, state: Hashable) -> Sequence[Any]:
        """Legal actions from state, in search order. Empty only at terminal states."""

    @abstractmethod
    def result(self, state: Hashable, action: Any) -> Hashable:
        """State reached by playing action in state."""

    @abstractmethod
    def is_terminal(self, state: Hashable) -> bool:
        ...

    @abstractmethod
    def utility(self, state: Hashable) -> float:
        """Final score of a terminal state. Positive favors the maximizing player."""

    @abstractmethod
    def should_cut_off(self, depth: int) -> bool:
        ...

    @abstractmethod
    def evaluate(self, state: Hashable) -> float:
        """Heuristic score used when the search stops at a non-terminal state."""
