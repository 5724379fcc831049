"""Manages the loading and validation of the wrapping configuration.

This module defines the `Config` dataclass, the single container for the line
length limits, indentation settings, and search knobs used by the engine. The
`load_config` function reads them from a `config.yaml` file and merges any
break-cost overrides, either inline or from a separate JSON table, over the
built-in defaults.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional
import yaml
import json
from pathlib import Path

from .kinds import BreakTable, DEFAULT_BREAK_COSTS
from .types import Limits, WINDOW_SIZE


@dataclass
class Config:
    """
    A typed configuration object that holds all settings for the wrapping engine.

    Attributes:
        hard_limit: Line length that must never be exceeded.
        soft_limit: Preferred line length; overflow is penalized per column.
        indent_width: Number of columns per indent level.
        base_indent_level: Indent level of the first line of a run.
        continuation_indent: Extra indent levels applied to every wrapped line.
        window_size: Number of tokens considered per search call (at most 32).
        max_search_iterations: Optional cap on the number of placements popped
                               per search call. ``None`` searches exhaustively.
        break_costs: Mapping of break-eligible token kinds to their break cost.
        show_progress: Display a progress bar while wrapping long runs.
    """
    hard_limit: int = 120
    soft_limit: int = 80
    indent_width: int = 4
    base_indent_level: int = 0
    continuation_indent: int = 1
    window_size: int = WINDOW_SIZE
    max_search_iterations: Optional[int] = None
    break_costs: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_BREAK_COSTS))
    show_progress: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.window_size <= WINDOW_SIZE:
            raise ValueError(f"window_size must be between 1 and {WINDOW_SIZE}, got {self.window_size}")
        if self.max_search_iterations is not None and self.max_search_iterations < 1:
            raise ValueError("max_search_iterations must be positive when set")
        if self.base_indent_level < 0 or self.continuation_indent < 0:
            raise ValueError("Indent levels must be non-negative")
        # Validates the limits eagerly so a bad config fails at load time.
        self.limits

    @property
    def limits(self) -> Limits:
        return Limits(self.hard_limit, self.soft_limit, self.indent_width)

    @property
    def table(self) -> BreakTable:
        return BreakTable(self.break_costs)

    @property
    def continuation_level(self) -> int:
        """Indent level used for every line after the first one of a run."""
        return self.base_indent_level + self.continuation_indent


def load_config(path: str = "config.yaml") -> Config:
    """
    Loads and validates a configuration file into a single Config object.

    The YAML file groups the line length settings under a `limits` section and
    the search settings under a `search` section. Break costs listed under
    `break_costs` are merged over the defaults, or replace them entirely when
    `replace_break_costs` is true. A `break_costs_file` entry may point to a JSON
    table (relative to the YAML file) that is merged in the same way.

    Args:
        path: The path to the `config.yaml` file.

    Returns:
        A fully populated and validated `Config` object.

    Raises:
        FileNotFoundError: If the specified `config.yaml` file cannot be found.
        ValueError: If the YAML cannot be parsed or the values are invalid.
        TypeError: If the root of the YAML file is not a dictionary.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file at {path}: {e}")

    if y is None:
        y = {}
    if not isinstance(y, dict):
        raise TypeError(f"Configuration file {path} must be a dictionary.")

    limits_yaml = y.get("limits", {}) or {}
    search_yaml = y.get("search", {}) or {}

    if y.get("replace_break_costs", False):
        break_costs: Dict[str, int] = {}
    else:
        break_costs = dict(DEFAULT_BREAK_COSTS)

    costs_path_str = y.get("break_costs_file")
    if costs_path_str:
        full_costs_path = Path(path).parent / costs_path_str
        if full_costs_path.exists():
            with open(full_costs_path, "r", encoding="utf-8") as f:
                try:
                    costs_json = json.load(f)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Error decoding JSON from {full_costs_path}: {e}")
            if not isinstance(costs_json, dict):
                raise TypeError(f"Break cost table {full_costs_path} must be a dictionary.")
            break_costs.update({str(k): int(v) for k, v in costs_json.items()})
        else:
            print(f"Warning: Could not load break cost table from {full_costs_path}. Using defaults.")

    inline_costs = y.get("break_costs", {}) or {}
    if not isinstance(inline_costs, dict):
        raise TypeError(f"'break_costs' in {path} must be a dictionary.")
    break_costs.update({str(k): int(v) for k, v in inline_costs.items()})

    max_iterations = search_yaml.get("max_iterations")

    return Config(
        hard_limit=int(limits_yaml.get("max_line_length", 120)),
        soft_limit=int(limits_yaml.get("soft_max_line_length", 80)),
        indent_width=int(limits_yaml.get("indent_size", 4)),
        base_indent_level=int(y.get("base_indent_level", 0)),
        continuation_indent=int(y.get("continuation_indent", 1)),
        window_size=int(search_yaml.get("window_size", WINDOW_SIZE)),
        max_search_iterations=int(max_iterations) if max_iterations else None,
        break_costs=break_costs,
        show_progress=bool(y.get("show_progress", False)),
    )
