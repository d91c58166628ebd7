"""PostScript definitions carried by a dot plot."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import InvalidArgument

LOGGER = logging.getLogger(__name__)

# Always written by the serializer itself, never stored.
IMPLICIT_NAMES = frozenset({"DPdict", "Helvetica"})

# Sequence length; its single-line definition closes the definition block.
LENGTH_NAME = "len"

SEQUENCE_NAME = "sequence"

FIXED_DEFINITIONS: Mapping[str, str] = {
    "obox": (
        "{\n"
        "logscale {\n"
        "      log dup add lpmin div 1 exch sub dup 0 lt { pop 0 } if\n"
        "   } if\n"
        "   3 1 roll\n"
        "   exch len exch sub 1 add rect\n"
        "} bind"
    ),
    "lobox": "{3 1 roll\nlen exch sub 1 add rect\n} bind",
    "rect": (
        "{ %size x y rect - draws rectangle centered on x,y\n"
        "2 index 0.5 mul sub            % x -= 0.5\n"
        "exch 2 index 0.5 mul sub exch  % y -= 0.5\n"
        "3 -1 roll dup rectstroke\n"
        "} bind"
    ),
    "cross": (
        "{ %size x y box - draws box centered on x,y\n"
        "   0.5 sub            % x -= 0.5\n"
        "   exch  0.5 sub exch  % y -= 0.5\n"
        "   1 index 1 index newpath moveto 1 index 1 add 1 index 1 add lineto stroke\n"
        "   1 index 1 add 1 index newpath moveto 1 index 1 index 1 add lineto stroke\n"
        "} bind"
    ),
    "lcross": "{\n   3 1 roll\n   len exch sub 1 add cross\n} bind",
    "ucross": "{\n   3 1 roll\n   exch len exch sub 1 add cross\n} bind",
}


def _check_name(name: object) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidArgument(f"Definition name must be a non-empty string, got {name!r}.")
    if any(char in name for char in "/{\n") or " " in name:
        raise InvalidArgument(f"Invalid definition name {name!r}.")
    return name


class DefinitionTable(MutableMapping):
    """Name → PostScript body mapping.

    Bodies are kept verbatim and may span several lines. Iteration order is
    insertion order, but nothing downstream depends on it except that
    :meth:`ordered` always yields ``len`` last.
    """

    def __init__(self, entries: Optional[Mapping[str, str]] = None) -> None:
        self._entries: Dict[str, str] = {}
        if entries:
            self.update(entries)

    def __getitem__(self, name: str) -> str:
        return self._entries[name]

    def __setitem__(self, name: str, value: str) -> None:
        if value is None:
            raise InvalidArgument(f"Missing value for definition '{name}'.")
        self._entries[_check_name(name)] = str(value)

    def __delitem__(self, name: str) -> None:
        del self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DefinitionTable({self._entries!r})"

    def add_missing(self) -> List[str]:
        """Insert any fixed-body definition that is absent; return the added names."""

        added = []
        for name, body in FIXED_DEFINITIONS.items():
            if name not in self._entries:
                self._entries[name] = body
                added.append(name)
        if added:
            LOGGER.debug("synthesized definitions: %s", ", ".join(added))
        return added

    def ordered(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(name, body)`` pairs with the ``len`` definition last."""

        for name, value in self._entries.items():
            if name != LENGTH_NAME:
                yield name, value
        if LENGTH_NAME in self._entries:
            yield LENGTH_NAME, self._entries[LENGTH_NAME]


__all__ = [
    "DefinitionTable",
    "FIXED_DEFINITIONS",
    "IMPLICIT_NAMES",
    "LENGTH_NAME",
    "SEQUENCE_NAME",
]
