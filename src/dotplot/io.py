"""Open and save dot-plot files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .errors import FileError
from .model import DotPlot
from .parser import parse
from .serializer import serialize

LOGGER = logging.getLogger(__name__)

# Byte-transparent, so foreign comment text survives a round trip.
ENCODING = "latin-1"


def open_dotplot(path: str | Path, *, strict_colors: Optional[bool] = None) -> DotPlot:
    """Read and parse a dot plot from ``path``."""

    source = Path(path)
    if not source.exists():
        raise FileError(f"Dot plot '{source}' does not exist.")
    try:
        with source.open("r", encoding=ENCODING, newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise FileError(f"Unable to read dot plot '{source}': {exc}") from exc
    LOGGER.debug("read %d characters from %s", len(text), source)
    return parse(text, strict_colors=strict_colors)


def save_dotplot(dotplot: DotPlot, path: str | Path) -> None:
    """Write ``dotplot`` to ``path``, replacing any existing file."""

    target = Path(path)
    text = serialize(dotplot)
    try:
        with target.open("w", encoding=ENCODING, newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise FileError(f"Unable to write dot plot '{target}': {exc}") from exc
    LOGGER.debug("wrote %d characters to %s", len(text), target)


__all__ = ["ENCODING", "open_dotplot", "save_dotplot"]
