"""In-memory dot plot and the calls that edit it."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np

from .annotations import AnnotationKind, AnnotationStore, ColoredRecord
from .definitions import LENGTH_NAME, SEQUENCE_NAME, DefinitionTable
from .errors import InvalidArgument
from .keys import BasePairKey
from .structure import decode_structure

LOGGER = logging.getLogger(__name__)

KindLike = Union[AnnotationKind, str]

_SEQUENCE_LITERAL = re.compile(r"\((.*)\)", re.DOTALL)


def _unit_interval(value: object, name: str) -> float:
    if value is None:
        raise InvalidArgument(f"Missing {name}.")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Invalid {name} {value!r}.") from exc
    if not 0.0 <= number <= 1.0:
        raise InvalidArgument(f"{name.capitalize()} must lie in [0, 1], got {number}.")
    return number


def _color(red: object, green: object, blue: object) -> Tuple[float, float, float]:
    return (
        _unit_interval(red, "red channel"),
        _unit_interval(green, "green channel"),
        _unit_interval(blue, "blue channel"),
    )


@dataclass
class DotPlot:
    """A parsed dot plot.

    ``leading_comments`` and ``leading_commands`` are raw lines (terminators
    included) that are written back untouched. All base positions taken or
    returned by methods are 0-based.
    """

    definitions: DefinitionTable = field(default_factory=DefinitionTable)
    annotations: AnnotationStore = field(default_factory=AnnotationStore)
    leading_comments: List[str] = field(default_factory=list)
    leading_commands: List[str] = field(default_factory=list)
    mirrored: bool = False

    # -- probabilities -----------------------------------------------------

    def get_probability(self, first: int, second: int) -> float:
        """Pair probability stored in the upper triangle.

        Returns 0 for pairs never set, including negative or non-integer
        positions, which can never name a stored pair.
        """

        try:
            key = BasePairKey.from_zero_based(first, second)
        except InvalidArgument:
            return 0.0
        record = self.annotations.upper_boxes.get(key)
        if record is None:
            return 0.0
        return record.size * record.size

    def set_base_pair_probability(self, first: int, second: int, probability: float) -> None:
        """Store ``sqrt(probability)`` as the upper box size, keeping its color.

        Only the upper triangle is touched, also after :meth:`mirror`.
        """

        key = BasePairKey.from_zero_based(first, second)
        size = math.sqrt(_unit_interval(probability, "probability"))
        boxes = self.annotations.upper_boxes
        existing = boxes.get(key)
        boxes[key] = existing.with_size(size) if existing is not None else ColoredRecord(size=size)

    # -- colored entries ---------------------------------------------------

    def set_colored_entry(
        self,
        kind: KindLike,
        first: int,
        second: int,
        red: float,
        green: float,
        blue: float,
    ) -> None:
        """Color the ``kind`` marker at a pair; new markers get size 1."""

        target = self.annotations.collection(kind)
        key = BasePairKey.from_zero_based(first, second)
        rgb = _color(red, green, blue)
        existing = target.get(key)
        target[key] = existing.with_color(*rgb) if existing is not None else ColoredRecord(1.0, *rgb)

    def set_upper_full_box(self, first: int, second: int, red: float, green: float, blue: float) -> None:
        self.set_colored_entry(AnnotationKind.UPPER_FULL_BOX, first, second, red, green, blue)

    def set_lower_full_box(self, first: int, second: int, red: float, green: float, blue: float) -> None:
        self.set_colored_entry(AnnotationKind.LOWER_FULL_BOX, first, second, red, green, blue)

    def set_upper_empty_box(self, first: int, second: int, red: float, green: float, blue: float) -> None:
        self.set_colored_entry(AnnotationKind.UPPER_EMPTY_BOX, first, second, red, green, blue)

    def set_lower_empty_box(self, first: int, second: int, red: float, green: float, blue: float) -> None:
        self.set_colored_entry(AnnotationKind.LOWER_EMPTY_BOX, first, second, red, green, blue)

    def set_upper_cross(self, first: int, second: int, red: float, green: float, blue: float) -> None:
        self.set_colored_entry(AnnotationKind.UPPER_CROSS, first, second, red, green, blue)

    def set_lower_cross(self, first: int, second: int, red: float, green: float, blue: float) -> None:
        self.set_colored_entry(AnnotationKind.LOWER_CROSS, first, second, red, green, blue)

    def annotate_from_structure(
        self,
        structure: str,
        kind: KindLike,
        red: float,
        green: float,
        blue: float,
    ) -> int:
        """Color every pair of a bracket structure; return the number of pairs."""

        resolved = AnnotationKind.coerce(kind)
        rgb = _color(red, green, blue)
        pairs = decode_structure(structure)
        for opener, closer in pairs.items():
            self.set_colored_entry(resolved, opener, closer, *rgb)
        LOGGER.debug("annotated %d pair(s) as %s", len(pairs), resolved.keyword)
        return len(pairs)

    # -- bulk transforms ---------------------------------------------------

    def mirror(self) -> None:
        """Replace the lower boxes with black copies of the upper boxes."""

        self.annotations.lower_boxes = {
            key: record.with_color(0.0, 0.0, 0.0) for key, record in self.annotations.upper_boxes.items()
        }
        self.mirrored = True
        LOGGER.debug("mirrored %d upper box(es)", len(self.annotations.lower_boxes))

    # -- read helpers ------------------------------------------------------

    def records(self, kind: KindLike) -> Iterator[Tuple[Tuple[int, int], ColoredRecord]]:
        """Yield ``((first, second), record)`` with 0-based positions."""

        for key, record in self.annotations.collection(kind).items():
            yield key.to_zero_based(), record

    @property
    def sequence_length(self) -> Optional[int]:
        """Length from a literal ``len`` value or from the ``sequence`` string."""

        raw = self.definitions.get(LENGTH_NAME)
        if raw is not None:
            try:
                return int(raw.strip())
            except ValueError:
                pass
        sequence = self.definitions.get(SEQUENCE_NAME)
        if sequence is None:
            return None
        match = _SEQUENCE_LITERAL.search(sequence)
        if match is None:
            return None
        letters = re.sub(r"\\\r?\n|\\|\s", "", match.group(1))
        return len(letters)

    def probability_matrix(self) -> np.ndarray:
        """Symmetric ``n x n`` matrix of upper-box pair probabilities."""

        n = self.sequence_length
        if n is None:
            keys = self.annotations.upper_boxes.keys()
            n = max((max(key) for key in keys), default=0)
        matrix = np.zeros((n, n), dtype=float)
        for (first, second), record in self.records(AnnotationKind.UPPER_FULL_BOX):
            if 0 <= first < n and 0 <= second < n:
                matrix[first, second] = matrix[second, first] = record.size * record.size
            else:
                LOGGER.warning("upper box %d-%d lies outside a %d nt sequence", first + 1, second + 1, n)
        return matrix


__all__ = ["DotPlot"]
