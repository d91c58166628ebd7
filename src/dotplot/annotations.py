"""Colored box and cross annotations keyed by base pair."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .errors import InvalidArgument
from .keys import BasePairKey


class AnnotationKind(str, Enum):
    """The six record kinds; values are the PostScript keywords."""

    UPPER_FULL_BOX = "ubox"
    LOWER_FULL_BOX = "lbox"
    UPPER_EMPTY_BOX = "obox"
    LOWER_EMPTY_BOX = "lobox"
    UPPER_CROSS = "ucross"
    LOWER_CROSS = "lcross"

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def collection(self) -> str:
        """Attribute name of the matching :class:`AnnotationStore` collection."""

        return _COLLECTIONS[self]

    @classmethod
    def coerce(cls, kind: Union["AnnotationKind", str, None]) -> "AnnotationKind":
        """Accept a member, its keyword (``"ubox"``) or its name (``"upper_full_box"``)."""

        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            token = kind.strip()
            found = KIND_BY_KEYWORD.get(token.lower())
            if found is not None:
                return found
            try:
                return cls[token.upper().replace("-", "_")]
            except KeyError:
                pass
        choices = ", ".join(member.keyword for member in cls)
        raise InvalidArgument(f"Unknown annotation kind {kind!r}. Choose from: {choices}")


_COLLECTIONS = {
    AnnotationKind.UPPER_FULL_BOX: "upper_boxes",
    AnnotationKind.LOWER_FULL_BOX: "lower_boxes",
    AnnotationKind.UPPER_EMPTY_BOX: "upper_empty_boxes",
    AnnotationKind.LOWER_EMPTY_BOX: "lower_empty_boxes",
    AnnotationKind.UPPER_CROSS: "upper_crosses",
    AnnotationKind.LOWER_CROSS: "lower_crosses",
}

KIND_BY_KEYWORD: Dict[str, AnnotationKind] = {kind.keyword: kind for kind in AnnotationKind}

BLACK = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class ColoredRecord:
    """A marker at one base pair.

    For full boxes ``size`` is the square root of the pair probability; for
    empty boxes and crosses it is a plain magnitude.
    """

    size: float
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    @property
    def color(self) -> Tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def with_color(self, red: float, green: float, blue: float) -> "ColoredRecord":
        return replace(self, red=red, green=green, blue=blue)

    def with_size(self, size: float) -> "ColoredRecord":
        return replace(self, size=size)


Collection = Dict[BasePairKey, ColoredRecord]


@dataclass
class AnnotationStore:
    """Six independent collections, one per :class:`AnnotationKind`."""

    upper_boxes: Collection = field(default_factory=dict)
    lower_boxes: Collection = field(default_factory=dict)
    upper_empty_boxes: Collection = field(default_factory=dict)
    lower_empty_boxes: Collection = field(default_factory=dict)
    upper_crosses: Collection = field(default_factory=dict)
    lower_crosses: Collection = field(default_factory=dict)

    def collection(self, kind: Union[AnnotationKind, str]) -> Collection:
        return getattr(self, AnnotationKind.coerce(kind).collection)

    def put(self, kind: AnnotationKind, key: BasePairKey, record: ColoredRecord) -> Optional[ColoredRecord]:
        """Store ``record`` and return the record it replaced, if any."""

        target = self.collection(kind)
        previous = target.get(key)
        target[key] = record
        return previous

    def counts(self) -> Dict[AnnotationKind, int]:
        return {kind: len(self.collection(kind)) for kind in AnnotationKind}

    def __len__(self) -> int:
        return sum(self.counts().values())


__all__ = [
    "AnnotationKind",
    "AnnotationStore",
    "BLACK",
    "ColoredRecord",
    "KIND_BY_KEYWORD",
]
