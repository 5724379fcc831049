"""Token kind classification used by the line-breaking engine.

A ``BreakTable`` answers the two questions the search asks about a token kind:
may a line break follow it, and how expensive is that break aesthetically. The
default table is tuned for C-family sources: breaking after a comma or a logical
operator is free, breaking inside call parentheses is cheap, and breaking after
a member-access dot is a last resort.
"""
from __future__ import annotations
from typing import Dict, Mapping

__all__ = ["BreakTable", "DEFAULT_BREAK_COSTS"]

_BINARY_OPERATOR_COST = 200

DEFAULT_BREAK_COSTS: Dict[str, int] = {
    ",": 0,
    "||": 0,
    "&&": 0,
    "(": 60,
    "[": 300,
    ".": 900,
    "?": _BINARY_OPERATOR_COST,
    ":": _BINARY_OPERATOR_COST,
}
for _op in ("+", "-", "*", "/", "%", "~", "^", "^^", "|", "&", "<<", ">>", ">>>",
            "==", "!=", "<", "<=", ">", ">=", "in", "is"):
    DEFAULT_BREAK_COSTS[_op] = _BINARY_OPERATOR_COST


class BreakTable:
    """
    Lookup table mapping break-eligible token kinds to their break cost.

    Kinds that are absent from the table never receive a line break.
    """
    def __init__(self, costs: Mapping[str, int]):
        for kind, cost in costs.items():
            if int(cost) < 0:
                raise ValueError(f"Break cost for {kind!r} must be non-negative, got {cost}")
        self.costs = {str(kind): int(cost) for kind, cost in costs.items()}

    def is_break_eligible(self, kind: str) -> bool:
        return kind in self.costs

    def break_cost(self, kind: str) -> int:
        """Returns the cost of breaking after ``kind``. Raises ``KeyError`` for ineligible kinds."""
        try:
            return self.costs[kind]
        except KeyError:
            raise KeyError(f"Token kind {kind!r} is not break-eligible")

    def __repr__(self) -> str:
        return f"BreakTable({len(self.costs)} kinds)"
