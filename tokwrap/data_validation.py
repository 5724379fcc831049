from __future__ import annotations
from typing import Any, Dict, List

from .config import Config
from .render import iter_lines, line_widths
from .types import Token


def validate(tokens: List[Token], cfg: Config, starting_column: int = 0) -> Dict[str, Any]:
    """
    Performs sanity checks on a list of wrapped tokens.

    The checks cover:
    -   Lines that run past the hard limit (errors).
    -   Lines that run past the soft limit (warnings).
    -   Line breaks placed after a token kind that does not allow one.

    Args:
        tokens: The list of wrapped `Token` objects to validate.
        cfg: The `Config` the tokens were wrapped with.
        starting_column: Column already used before the first token.

    Returns:
        A dictionary with the total `issue_count` and a list of `issues`, where
        each issue is a dictionary describing the problem.
    """
    issues = []
    table = cfg.table

    # 1. Per-line length checks
    spans = list(iter_lines(tokens))
    for line_no, ((start_idx, end_idx), width) in enumerate(zip(spans, line_widths(tokens, cfg, starting_column))):
        if width > cfg.hard_limit:
            issues.append({
                "type": "hard_limit_error",
                "line": line_no,
                "start_idx": start_idx,
                "end_idx": end_idx,
                "width": width,
                "message": f"Line {line_no} is {width} columns wide, above the hard limit of {cfg.hard_limit}."
            })
        elif width > cfg.soft_limit:
            issues.append({
                "type": "soft_limit_warning",
                "line": line_no,
                "start_idx": start_idx,
                "end_idx": end_idx,
                "width": width,
                "message": f"Line {line_no} is {width} columns wide, above the soft limit of {cfg.soft_limit}."
            })

    # 2. Per-token break placement checks
    for i, t in enumerate(tokens):
        if t.break_after and not table.is_break_eligible(t.kind):
            issues.append({
                "type": "ineligible_break_error",
                "idx": i,
                "message": f"Token '{t.text}' of kind '{t.kind}' does not allow a line break after it."
            })

    return {"issue_count": len(issues), "issues": issues}
