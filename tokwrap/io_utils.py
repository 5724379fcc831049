"""Provides utility functions for loading and saving token runs.

Token runs are stored as JSON with the token list under a "tokens" key. Loading
tolerates extra, unknown fields so that files produced by richer front ends can
be fed in directly; saving writes every `Token` field, including the
`break_after` decision.
"""
import json
from dataclasses import asdict
from typing import List
from .types import Token


def load_tokens(path: str) -> List[Token]:
    """
    Loads a list of Token objects from a JSON file.

    Args:
        path: The path to the input JSON file.

    Returns:
        A list of `Token` dataclass instances.

    Raises:
        FileNotFoundError: If the file at the specified path does not exist.
        ValueError: If the file is not valid JSON.
        TypeError: If the JSON structure is incorrect (e.g., "tokens" key is
                   missing or not a list, or an item in the list is not a
                   dictionary).
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Token file not found at: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from {path}: {e}")

    items = data.get("tokens") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise TypeError(f"Expected a 'tokens' key with a list of objects in {path}")

    out = []
    token_fields = Token.get_field_names()
    for i, t_dict in enumerate(items):
        if not isinstance(t_dict, dict):
            raise TypeError(f"Token item at index {i} in {path} is not a dictionary.")

        filtered_dict = {k: v for k, v in t_dict.items() if k in token_fields}

        try:
            out.append(Token(**filtered_dict))
        except TypeError as e:
            raise TypeError(f"Mismatch between JSON object and Token dataclass at index {i} in {path}: {e}")

    return out


def save_tokens(path: str, tokens: List[Token]) -> None:
    """Saves a list of Token objects to a JSON file under a "tokens" key."""
    data = {"tokens": [asdict(t) for t in tokens]}

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
