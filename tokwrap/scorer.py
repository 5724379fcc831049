"""Cost model for candidate line break placements."""
from __future__ import annotations
from typing import List, Sequence, Tuple

from .kinds import BreakTable
from .types import Limits, Token, WINDOW_SIZE


def popcount(breaks: int) -> int:
    return bin(breaks).count("1")


class Scorer:
    """
    Calculates the cost of breaking a token window at a given set of positions.

    A placement is an integer bit-set where bit ``i`` means "break after window
    token ``i``". Scoring combines four ingredients:

    1.  A per-break cost taken from the kind table and doubled for every level
        of nesting the break sits in.
    2.  A per-column penalty for each line that runs past the soft limit,
        scaled by the gap between the soft and hard limits.
    3.  A fixed penalty for every line break, also scaled by that gap, so that
        a wide gap makes a single long line comparatively cheaper.
    4.  A ``solved`` flag telling the search whether every produced line stays
        within the hard limit.

    Attributes:
        limits: The `Limits` in effect for the run being wrapped.
        table: The `BreakTable` providing eligibility and per-kind costs.
    """
    def __init__(self, limits: Limits, table: BreakTable):
        self.limits = limits
        self.table = table

    def is_break_eligible(self, token: Token) -> bool:
        return self.table.is_break_eligible(token.kind)

    def break_cost(self, token: Token, depth: int) -> int:
        """Cost of breaking after ``token`` at nesting ``depth``."""
        return self.table.break_cost(token.kind) * max(1, 2 * abs(depth))

    def _segment_widths(self, breaks: int, tokens: Sequence[Token]) -> List[int]:
        """Splits the window at the set bits and returns the width of each line."""
        widths: List[int] = []
        width = 0
        for i, token in enumerate(tokens):
            width += token.rendered_width
            if breaks & (1 << i):
                widths.append(width)
                width = 0
        # A break after the last token leaves an empty trailing line.
        widths.append(width)
        return widths

    def score(
        self,
        breaks: int,
        tokens: Sequence[Token],
        depths: Sequence[int],
        current_column: int,
        indent_level: int,
    ) -> Tuple[int, bool]:
        """
        Scores one break placement over a token window.

        Args:
            breaks: Bit-set of window positions followed by a line break.
            tokens: The window tokens (at most 32).
            depths: Nesting depth of each window token.
            current_column: Column already used on the current line before the
                            window starts.
            indent_level: Indent level of every line after the first one.

        Returns:
            A ``(cost, solved)`` tuple. ``cost`` is a non-negative integer;
            ``solved`` is False when a produced line overflows the hard limit,
            or when a single unbroken line overflows the soft limit by more
            than one line break would cost.
        """
        if len(tokens) > WINDOW_SIZE:
            raise ValueError(f"Token window exceeds {WINDOW_SIZE} positions: {len(tokens)}")
        if len(depths) != len(tokens):
            raise ValueError("depths must be aligned 1:1 with tokens")
        if breaks < 0 or breaks >> len(tokens):
            raise ValueError(f"Break placement {breaks:#x} lies outside the token window")

        soft_limit = self.limits.soft_limit
        hard_limit = self.limits.hard_limit
        gap = self.limits.gap
        newline_penalty = self.limits.newline_penalty

        cost = 0
        solved = True

        if breaks == 0:
            line_len = current_column + sum(t.rendered_width for t in tokens)
            if line_len > soft_limit:
                long_penalty = (line_len - soft_limit) * gap
                cost += long_penalty
                solved = long_penalty < newline_penalty
        else:
            for i, token in enumerate(tokens):
                if breaks & (1 << i):
                    cost += self.break_cost(token, depths[i])

            line_len = current_column
            for width in self._segment_widths(breaks, tokens):
                line_len += width
                if line_len > soft_limit:
                    cost += (line_len - soft_limit) * gap
                if line_len > hard_limit:
                    # Later lines are left unscored once the hard limit is blown.
                    solved = False
                    break
                line_len = indent_level * self.limits.indent_width

        cost += popcount(breaks) * newline_penalty
        return cost, solved
