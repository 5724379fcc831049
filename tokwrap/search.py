"""Best-first search for the cheapest line break placement.

This module hosts the decision procedure at the heart of the wrapper. Given a
window of at most 32 tokens it explores the lattice of break placements,
starting from "no breaks" and adding one break at a time, always expanding the
cheapest placement seen so far. Because placements are popped in non-decreasing
cost order, the first placement that satisfies the hard limit is the cheapest
one that does. If none does, the cheapest placement popped is returned instead
so the caller always gets an answer.
"""
from __future__ import annotations
from dataclasses import dataclass
from heapq import heappop, heappush
from typing import List, Optional, Sequence, Set, Tuple

from .scorer import Scorer, popcount
from .types import Token, WINDOW_SIZE


def _first_break(breaks: int) -> int:
    """Position of the lowest set bit."""
    return (breaks & -breaks).bit_length() - 1


@dataclass(frozen=True, eq=False)
class BreakState:
    """One scored placement in the search space.

    Ordering is the search priority: cheaper first, then solved before
    unsolved, then (when both placements break at all) the placement whose first
    break comes later, keeping more content on the first line. Equality and
    hashing only look at ``breaks``; the score is a pure function of it.
    """
    breaks: int
    cost: int
    solved: bool

    def compare(self, other: "BreakState") -> int:
        if self.cost != other.cost:
            return -1 if self.cost < other.cost else 1
        if self.solved != other.solved:
            return -1 if self.solved else 1
        if self.breaks and other.breaks:
            mine, theirs = _first_break(self.breaks), _first_break(other.breaks)
            if mine != theirs:
                return -1 if mine > theirs else 1
        return 0

    def priority(self) -> Tuple[int, int, int]:
        """Heap key consistent with ``compare`` for every non-empty placement."""
        first = _first_break(self.breaks) if self.breaks else 0
        return (self.cost, 0 if self.solved else 1, -first)

    def __lt__(self, other: "BreakState") -> bool:
        return self.compare(other) < 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BreakState):
            return NotImplemented
        return self.breaks == other.breaks

    def __hash__(self) -> int:
        return hash(self.breaks)

    @property
    def break_count(self) -> int:
        return popcount(self.breaks)


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search call.

    Attributes:
        breaks: Ascending absolute token indices followed by a line break.
        solved: False when no explored placement kept every line within the
                hard limit and the cheapest placement was returned instead.
        cost: Cost of the returned placement.
        explored: Number of placements popped from the frontier.
    """
    breaks: List[int]
    solved: bool
    cost: int
    explored: int


def breaks_to_indices(breaks: int, index: int) -> List[int]:
    """Converts a bit-set into ascending absolute token indices."""
    return [index + i for i in range(WINDOW_SIZE) if breaks & (1 << i)]


class _Frontier:
    """Min-ordered queue of placements that never queues the same bit-set twice."""

    def __init__(self) -> None:
        self._heap: List[Tuple[Tuple[int, int, int], int, BreakState]] = []
        self._seen: Set[int] = set()
        self._counter = 0

    def push(self, state: BreakState) -> bool:
        if state.breaks in self._seen:
            return False
        self._seen.add(state.breaks)
        heappush(self._heap, (state.priority(), self._counter, state))
        self._counter += 1
        return True

    def pop(self) -> BreakState:
        return heappop(self._heap)[2]

    def __contains__(self, breaks: int) -> bool:
        return breaks in self._seen

    def __len__(self) -> int:
        return len(self._heap)


def _expand(
    frontier: _Frontier,
    current: BreakState,
    tokens: Sequence[Token],
    depths: Sequence[int],
    scorer: Scorer,
    current_column: int,
    indent_level: int,
) -> None:
    """Queues every placement that adds one eligible break to ``current``."""
    for i, token in enumerate(tokens):
        bit = 1 << i
        if current.breaks & bit or not scorer.is_break_eligible(token):
            continue
        breaks = current.breaks | bit
        if breaks in frontier:
            continue
        cost, solved = scorer.score(breaks, tokens, depths, current_column, indent_level)
        frontier.push(BreakState(breaks, cost, solved))


def search_breaks(
    index: int,
    tokens: Sequence[Token],
    depths: Sequence[int],
    scorer: Scorer,
    current_column: int,
    indent_level: int,
    max_iterations: Optional[int] = None,
) -> SearchResult:
    """
    Finds the lowest cost break placement for a run of tokens.

    Only the first 32 tokens are considered; breaks after later tokens are left
    for a follow-up call by the caller.

    Args:
        index: Absolute index of ``tokens[0]`` in the caller's token stream.
        tokens: The run to wrap.
        depths: Nesting depth of each token, aligned with ``tokens``.
        scorer: The `Scorer` providing costs and break eligibility.
        current_column: Column already used on the current line.
        indent_level: Indent level of every line after the first one.
        max_iterations: Optional cap on the number of placements popped. When
                        reached, the cheapest placement seen so far is returned.

    Returns:
        A `SearchResult` with the chosen absolute break indices.

    Raises:
        ValueError: If ``tokens`` and ``depths`` differ in length or the
                    column/indent values are negative.
    """
    if len(tokens) != len(depths):
        raise ValueError("tokens and depths must have the same length")
    if current_column < 0 or indent_level < 0:
        raise ValueError("current_column and indent_level must be non-negative")

    tokens_end = min(len(tokens), WINDOW_SIZE)
    window = tokens[:tokens_end]
    window_depths = depths[:tokens_end]

    frontier = _Frontier()
    cost, solved = scorer.score(0, window, window_depths, current_column, indent_level)
    frontier.push(BreakState(0, cost, solved))

    lowest: Optional[BreakState] = None
    explored = 0
    while frontier:
        current = frontier.pop()
        explored += 1
        if lowest is None or current.cost < lowest.cost:
            lowest = current
        if current.solved:
            return SearchResult(breaks_to_indices(current.breaks, index), True, current.cost, explored)
        if max_iterations is not None and explored >= max_iterations:
            break
        _expand(frontier, current, window, window_depths, scorer, current_column, indent_level)

    # Nothing satisfied the hard limit; fall back to the cheapest placement.
    assert lowest is not None
    return SearchResult(breaks_to_indices(lowest.breaks, index), False, lowest.cost, explored)


def choose_line_breaks(
    index: int,
    tokens: Sequence[Token],
    depths: Sequence[int],
    scorer: Scorer,
    current_column: int,
    indent_level: int,
) -> List[int]:
    """Returns the absolute token indices after which a line break is inserted."""
    return search_breaks(index, tokens, depths, scorer, current_column, indent_level).breaks
