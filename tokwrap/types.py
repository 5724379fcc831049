"""Core data types shared by the line-breaking engine.

``Token`` is the unit the formatter hands over for a single logical run, and
``Limits`` bundles the three numbers every scoring decision depends on. Both are
frozen so that a search call can treat them as read-only context.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Optional

__all__ = ["Token", "Limits", "WINDOW_SIZE"]

# Break placements are stored as a fixed-width bit-set of this many positions.
WINDOW_SIZE = 32

NEWLINE_PENALTY_FACTOR = 20


@dataclass(frozen=True)
class Token:
    """
    Represents a single source token inside a run that may need wrapping.

    Attributes:
        text: The token text exactly as it will be written.
        kind: The token kind (e.g. ``","``, ``"&&"``, ``"identifier"``). Drives the
              break-eligibility and break-cost lookups.
        depth: Bracket/paren nesting depth at this token. Only the absolute value
               is used when scoring.
        space_after: True when the formatter writes a space after the token. The
                     space counts towards the rendered width.
        width: Explicit display width, for tokens whose on-screen width differs
               from their character count.
        break_after: The final decision, assigned by the layout driver: True when
                     a line break follows this token.
    """
    text: str
    kind: str
    depth: int = 0
    space_after: bool = False
    width: Optional[int] = None
    break_after: bool = False

    @property
    def rendered_width(self) -> int:
        """Number of display columns the token occupies."""
        if self.width is not None:
            return self.width
        return len(self.text) + (1 if self.space_after else 0)

    @classmethod
    def get_field_names(cls) -> set[str]:
        """Returns the set of field names, used to filter serialized payloads."""
        return {f.name for f in fields(cls)}


@dataclass(frozen=True)
class Limits:
    """
    Line length limits for one wrapping call.

    Attributes:
        hard_limit: Length that no produced line may exceed.
        soft_limit: Preferred maximum; exceeding it is penalized but allowed.
        indent_width: Columns consumed by one indent level.
    """
    hard_limit: int
    soft_limit: int
    indent_width: int = 4

    def __post_init__(self) -> None:
        if self.hard_limit < 0 or self.soft_limit < 0 or self.indent_width < 0:
            raise ValueError(f"Limits must be non-negative, got {self}")
        if self.hard_limit < self.soft_limit:
            raise ValueError(
                f"hard_limit ({self.hard_limit}) must not be smaller than soft_limit ({self.soft_limit})"
            )

    @property
    def gap(self) -> int:
        return self.hard_limit - self.soft_limit

    @property
    def newline_penalty(self) -> int:
        """Fixed cost charged for every line break."""
        return self.gap * NEWLINE_PENALTY_FACTOR
