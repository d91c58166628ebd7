"""Bracket structure notation → base pairs."""

from __future__ import annotations

import logging
from typing import Dict, List

from .errors import FormatError, InvalidArgument

LOGGER = logging.getLogger(__name__)

BRACKET_PAIRS = ("()", "[]", "{}", "<>", "Aa", "Bb")
UNPAIRED = "."

_OPENERS = {pair[0]: pair for pair in BRACKET_PAIRS}
_CLOSERS = {pair[1]: pair for pair in BRACKET_PAIRS}


def decode_structure(notation: str) -> Dict[int, int]:
    """Return ``{opener: closer}`` 0-based positions for a bracket string.

    Each bracket type has its own stack, so pseudoknots written with
    different bracket types (``"([)]"``) decode as crossing pairs. A closer
    with nothing to close raises :class:`FormatError`; openers still waiting
    at the end are left unpaired.
    """

    if notation is None:
        raise InvalidArgument("Missing structure notation.")
    stacks: Dict[str, List[int]] = {pair: [] for pair in BRACKET_PAIRS}
    pairs: Dict[int, int] = {}
    for idx, char in enumerate(notation.rstrip()):
        if char == UNPAIRED:
            continue
        if char in _OPENERS:
            stacks[_OPENERS[char]].append(idx)
        elif char in _CLOSERS:
            stack = stacks[_CLOSERS[char]]
            if not stack:
                raise FormatError(f"Unmatched closing bracket {char!r}", position=idx)
            pairs[stack.pop()] = idx
        else:
            raise FormatError(f"Unexpected character {char!r} in structure notation", position=idx)
    unclosed = sorted(idx for stack in stacks.values() for idx in stack)
    if unclosed:
        LOGGER.warning("structure notation leaves %d opener(s) unclosed at %s", len(unclosed), unclosed)
    return pairs


__all__ = ["BRACKET_PAIRS", "UNPAIRED", "decode_structure"]
