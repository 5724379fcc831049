"""Windowed driver that wraps a complete token run.

The search only looks at 32 tokens at a time. `wrap_tokens` slides that window
along the run: breaks chosen in the final window are all kept, while in earlier
windows only the breaks up to the last chosen one are committed, so the next
window can reconsider everything that follows it on a fresh line.
"""
from __future__ import annotations
from dataclasses import replace
from typing import List, Optional, Sequence, Set

from tqdm import tqdm

from .config import Config
from .scorer import Scorer
from .search import search_breaks
from .types import Token


def make_scorer(cfg: Config) -> Scorer:
    return Scorer(cfg.limits, cfg.table)


def choose_breaks(
    tokens: Sequence[Token],
    scorer: Scorer,
    cfg: Config,
    starting_column: int = 0,
) -> List[int]:
    """
    Chooses the break indices for a whole run, one search window at a time.

    Args:
        tokens: The complete run of tokens to wrap.
        scorer: The `Scorer` used by every window search.
        cfg: The active `Config` (window size, indentation, iteration cap).
        starting_column: Column already used before the first token.

    Returns:
        Ascending indices of the tokens followed by a line break.
    """
    depths = [t.depth for t in tokens]
    indent_level = cfg.continuation_level
    continuation_column = indent_level * cfg.indent_width

    chosen: List[int] = []
    pos = 0
    column = starting_column
    with tqdm(total=len(tokens), desc="Wrapping", unit="token", disable=not cfg.show_progress) as bar:
        while pos < len(tokens):
            end = min(pos + cfg.window_size, len(tokens))
            result = search_breaks(
                pos,
                tokens[pos:end],
                depths[pos:end],
                scorer,
                column,
                indent_level,
                max_iterations=cfg.max_search_iterations,
            )
            if end == len(tokens):
                chosen.extend(result.breaks)
                bar.update(end - pos)
                break

            if result.breaks:
                chosen.extend(result.breaks)
                next_pos = result.breaks[-1] + 1
                column = continuation_column
            else:
                # No break in this window: the whole window stays on the current line.
                next_pos = end
                column += sum(t.rendered_width for t in tokens[pos:end])
            bar.update(next_pos - pos)
            pos = next_pos

    return chosen


def wrap_tokens(
    tokens: List[Token],
    scorer: Optional[Scorer],
    cfg: Config,
    starting_column: int = 0,
) -> List[Token]:
    """Returns copies of ``tokens`` with ``break_after`` set where lines break."""
    if not tokens:
        return []
    if scorer is None:
        scorer = make_scorer(cfg)

    breaks: Set[int] = set(choose_breaks(tokens, scorer, cfg, starting_column))
    return [replace(token, break_after=i in breaks) for i, token in enumerate(tokens)]
