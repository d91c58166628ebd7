"""Base-pair coordinates.

Dot-plot files number bases from 1. Every public call in this package takes
and returns 0-based positions; :class:`BasePairKey` always holds the on-disk
(1-based) pair and is the key type of every annotation collection.
"""

from __future__ import annotations

import operator
from typing import NamedTuple, Tuple

from .errors import InvalidArgument


def _base_index(value: object, name: str) -> int:
    if value is None:
        raise InvalidArgument(f"Missing {name} base index.")
    if isinstance(value, bool):
        raise InvalidArgument(f"Invalid {name} base index {value!r}.")
    try:
        index = operator.index(value)
    except TypeError as exc:
        raise InvalidArgument(f"Invalid {name} base index {value!r}.") from exc
    if index < 0:
        raise InvalidArgument(f"Base index must be non-negative, got {name}={index}.")
    return index


class BasePairKey(NamedTuple):
    """1-based ``(first, second)`` pair as written in the file."""

    first: int
    second: int

    @classmethod
    def from_zero_based(cls, first: object, second: object) -> "BasePairKey":
        return cls(_base_index(first, "first") + 1, _base_index(second, "second") + 1)

    @classmethod
    def parse(cls, text: str) -> "BasePairKey":
        """Parse the ``"first-second"`` rendering back into a key."""

        head, sep, tail = text.partition("-")
        if not sep:
            raise ValueError(f"Base-pair key must look like 'first-second', got {text!r}")
        return cls(int(head), int(tail))

    def to_zero_based(self) -> Tuple[int, int]:
        return self.first - 1, self.second - 1

    def __str__(self) -> str:
        return f"{self.first}-{self.second}"


__all__ = ["BasePairKey"]
