"""Write a :class:`DotPlot` back out as PostScript."""

from __future__ import annotations

import logging
from typing import List

from .annotations import AnnotationKind
from .definitions import LENGTH_NAME
from .errors import InvalidArgument
from .model import DotPlot

LOGGER = logging.getLogger(__name__)

DICT_PROLOGUE = "/DPdict 100 dict def\nDPdict begin\n"
TRAILER = "showpage\nend\n"


def format_number(value: float) -> str:
    """Shortest text that reads back to the same float (``1.0`` → ``1``)."""

    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _terminated(line: str) -> str:
    return line if line.endswith("\n") else line + "\n"


def _is_blank_command(line: str) -> bool:
    return line.rstrip("\r\n") in ("", " ")


def serialize(dotplot: DotPlot) -> str:
    """Render the whole document; ``len`` is the last definition written."""

    if LENGTH_NAME not in dotplot.definitions:
        raise InvalidArgument(f"Cannot serialize a dot plot without a '{LENGTH_NAME}' definition.")

    parts: List[str] = [_terminated(line) for line in dotplot.leading_comments]
    parts.append(DICT_PROLOGUE)
    for name, value in dotplot.definitions.ordered():
        parts.append(f"/{name} {value} def\n\n")
    parts.extend(_terminated(line) for line in dotplot.leading_commands if not _is_blank_command(line))

    for kind in AnnotationKind:
        for key, record in dotplot.annotations.collection(kind).items():
            red, green, blue = (format_number(channel) for channel in record.color)
            parts.append(
                f"{red} {green} {blue} setrgbcolor "
                f"{key.first} {key.second} {format_number(record.size)} {kind.keyword}\n"
            )
    parts.append(TRAILER)
    LOGGER.debug(
        "serialized %d definition(s) and %d record(s)", len(dotplot.definitions), len(dotplot.annotations)
    )
    return "".join(parts)


__all__ = ["format_number", "serialize"]
