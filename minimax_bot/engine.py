import logging
import math
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Hashable, Optional

from minimax_bot.game import Game

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecisionRecord:
    elapsed: timedelta
    value: float
    action: Optional[Any]
    state: Optional[Hashable]
    nodes_expanded: int


@dataclass
class SearchContext:
    """Mutable search state owned by a single decision.

    Only values of fully searched nodes are stored in the table; a value that
    ended in a cutoff is a bound and is never cached.
    """

    transposition_table: Dict[Hashable, float] = field(default_factory=dict)
    nodes_expanded: int = 0
    cache_hits: int = 0
    cutoffs: int = 0

    def reset(self):
        self.transposition_table.clear()
        self.nodes_expanded = 0
        self.cache_hits = 0
        self.cutoffs = 0


class MinimaxEngine:
    """Depth-limited minimax with alpha-beta pruning and a transposition table.

    - the root is a maximizing node; every root action is searched in full
    - interior nodes prune fail-hard, returning the best value found so far
    - the table is keyed by state only, not by depth or search window, so a
      state reached again at another depth reuses the value first computed
      for it even where the cutoff policy would now answer differently
    - recursion depth is bounded only by the game's cutoff policy
    """

    def __init__(self, game: Game):
        self.game = game

    def decide(self, state, context: Optional[SearchContext] = None) -> DecisionRecord:
        """Pick the action from state with the best worst-case value.

        The context, if given, is reset first and left populated afterwards.
        A record with action None means state had no legal action.
        """
        start = time.perf_counter()
        if context is None:
            context = SearchContext()
        context.reset()

        best_value = -math.inf
        best_action = None
        best_state = None
        context.nodes_expanded += 1

        max_bound = -math.inf
        min_bound = math.inf
        # The root does not cut off: its lower bound only narrows the window
        # handed to the next child.
        for action in self.game.actions(state):
            next_state = self.game.result(state, action)
            value = self.min_search(next_state, max_bound, min_bound, 1, context)
            if value > best_value:
                best_value = value
                best_action = action
                best_state = next_state
            max_bound = max(max_bound, best_value)

        elapsed = timedelta(seconds=time.perf_counter() - start)
        if best_action is None:
            logger.warning('No legal action from %s', state)
        else:
            logger.debug('Decided %s value=%s nodes=%d cache_hits=%d cutoffs=%d in %.3fs',
                         best_action, best_value, context.nodes_expanded,
                         context.cache_hits, context.cutoffs, elapsed.total_seconds())
        return DecisionRecord(elapsed, best_value, best_action, best_state, context.nodes_expanded)

    def max_search(self, state, lower_bound: float, upper_bound: float, depth: int,
                   context: SearchContext) -> float:
        """Value of state for the maximizing player within [lower_bound, upper_bound]."""
        return self._search(state, lower_bound, upper_bound, depth, context, maximizing=True)

    def min_search(self, state, lower_bound: float, upper_bound: float, depth: int,
                   context: SearchContext) -> float:
        """Value of state for the minimizing player within [lower_bound, upper_bound]."""
        return self._search(state, lower_bound, upper_bound, depth, context, maximizing=False)

    def _search(self, state, lower_bound: float, upper_bound: float, depth: int,
                context: SearchContext, maximizing: bool) -> float:
        table = context.transposition_table
        if state in table:
            context.cache_hits += 1
            return table[state]
        if self.game.is_terminal(state):
            return self.game.utility(state)
        if self.game.should_cut_off(depth):
            return self.game.evaluate(state)

        context.nodes_expanded += 1
        best = -math.inf if maximizing else math.inf
        for action in self.game.actions(state):
            next_state = self.game.result(state, action)
            value = self._search(next_state, lower_bound, upper_bound, depth + 1,
                                 context, not maximizing)
            if maximizing:
                if value > best:
                    best = value
                if best >= upper_bound:
                    context.cutoffs += 1
                    return best
                lower_bound = max(lower_bound, best)
            else:
                if value < best:
                    best = value
                if best <= lower_bound:
                    context.cutoffs += 1
                    return best
                upper_bound = min(upper_bound, best)

        table[state] = best
        return best
