from __future__ import annotations
from typing import Iterator, List, Sequence, Tuple

from .config import Config
from .types import Token


def iter_lines(tokens: Sequence[Token]) -> Iterator[Tuple[int, int]]:
    """
    Yields the start and inclusive end index of each output line.

    A line ends at every token whose `break_after` flag is set. A break after the
    final token does not open an extra empty line.

    Args:
        tokens: A list of wrapped `Token` objects.

    Yields:
        ``(start_idx, end_idx)`` tuples, one per line.
    """
    if not tokens:
        return

    start_idx = 0
    for i, token in enumerate(tokens):
        if token.break_after:
            yield (start_idx, i)
            start_idx = i + 1

    if start_idx < len(tokens):
        yield (start_idx, len(tokens) - 1)


def line_widths(tokens: Sequence[Token], cfg: Config, starting_column: int = 0) -> List[int]:
    """Returns the column each line ends at, counting indentation and trailing spaces."""
    widths = []
    continuation_column = cfg.continuation_level * cfg.indent_width
    for line_no, (start, end) in enumerate(iter_lines(tokens)):
        column = starting_column if line_no == 0 else continuation_column
        widths.append(column + sum(t.rendered_width for t in tokens[start : end + 1]))
    return widths


def render_lines(tokens: Sequence[Token], cfg: Config, starting_column: int = 0) -> List[str]:
    """
    Renders wrapped tokens into text lines.

    The first line is written as-is (its `starting_column` is owned by the
    caller); every following line is indented by the continuation indent.
    Trailing whitespace is stripped from each line.
    """
    indent = " " * (cfg.continuation_level * cfg.indent_width)
    lines = []
    for line_no, (start, end) in enumerate(iter_lines(tokens)):
        text = "".join(t.text + (" " if t.space_after else "") for t in tokens[start : end + 1])
        prefix = "" if line_no == 0 else indent
        lines.append((prefix + text).rstrip())
    return lines


def tokens_to_text(tokens: Sequence[Token], cfg: Config) -> str:
    """Joins the rendered lines with newlines, ending with a trailing newline."""
    lines = render_lines(tokens, cfg)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
