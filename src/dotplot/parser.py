"""Line-oriented reader for dot-plot PostScript.

The document is read in one forward pass through five phases::

    COMMENTS         lines starting with '%' or ' ', and blank lines
    DEFINITIONS      '/name value def' entries, closed by a one-line '/len'
    MULTILINE_VALUE  continuation lines of a definition, up to ' def'
    COMMANDS         raw drawing commands, up to and including 'drawgrid'
    BODY             'ubox'/'lbox'/... records, up to 'showpage'

Lines between definitions that do not start with '/' (``DPdict begin``,
``%%BeginProlog``, blank lines) are dropped; the serializer writes its own.
"""

from __future__ import annotations

import logging
import math
import re
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

from . import config
from .annotations import KIND_BY_KEYWORD, AnnotationKind, AnnotationStore, ColoredRecord
from .definitions import IMPLICIT_NAMES, LENGTH_NAME, DefinitionTable
from .errors import FormatError
from .keys import BasePairKey
from .model import DotPlot

LOGGER = logging.getLogger(__name__)

DEFINITION_END = " def"
GRID_COMMAND = "drawgrid"
PAGE_END = "showpage"

_NAME_STRIP = re.compile(r"[/{\r\n]")


class ParserState(Enum):
    COMMENTS = auto()
    DEFINITIONS = auto()
    MULTILINE_VALUE = auto()
    COMMANDS = auto()
    BODY = auto()
    DONE = auto()


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, keeping terminators."""

    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def _chomp(line: str) -> str:
    return line.rstrip("\r\n")


def _drop_def(text: str) -> str:
    head, _, tail = text.rpartition(DEFINITION_END)
    return head + tail


class DotPlotParser:
    """Single-use state machine turning lines into a :class:`DotPlot`."""

    def __init__(self, lines: List[str], *, strict_colors: Optional[bool] = None) -> None:
        self._lines = lines
        self._line_number = 0
        self._strict_colors = config.strict_colors() if strict_colors is None else strict_colors
        self.state = ParserState.COMMENTS
        self._definitions = DefinitionTable()
        self._annotations = AnnotationStore()
        self._comments: List[str] = []
        self._commands: List[str] = []
        self._pending: Optional[Tuple[str, List[str]]] = None
        self._handlers: Dict[ParserState, Callable[[str], None]] = {
            ParserState.COMMENTS: self._read_comment,
            ParserState.DEFINITIONS: self._read_definition,
            ParserState.MULTILINE_VALUE: self._read_continuation,
            ParserState.COMMANDS: self._read_command,
            ParserState.BODY: self._read_record,
        }

    def parse(self) -> DotPlot:
        for line in self._lines:
            self._line_number += 1
            self._handlers[self.state](line)
            if self.state is ParserState.DONE:
                break
        else:
            self._finish_early()
        LOGGER.debug(
            "parsed %d comment line(s), %d definition(s), %d command line(s), %d record(s)",
            len(self._comments),
            len(self._definitions),
            len(self._commands),
            len(self._annotations),
        )
        return DotPlot(
            definitions=self._definitions,
            annotations=self._annotations,
            leading_comments=self._comments,
            leading_commands=self._commands,
        )

    # -- phases ------------------------------------------------------------

    def _read_comment(self, line: str) -> None:
        if not _chomp(line) or line.startswith(("%", " ")):
            self._comments.append(line)
            return
        self.state = ParserState.DEFINITIONS
        self._read_definition(line)

    def _read_definition(self, line: str) -> None:
        if not line.startswith("/"):
            return
        name = _NAME_STRIP.sub("", line.split(" ", 1)[0])
        if not name:
            raise FormatError("definition without a name", line_number=self._line_number, line=_chomp(line))
        if name in IMPLICIT_NAMES:
            return
        value = _chomp(re.sub(rf"^/{re.escape(name)} *", "", line, count=1))
        if DEFINITION_END not in value:
            self._pending = (name, [value])
            self.state = ParserState.MULTILINE_VALUE
            return
        self._definitions[name] = _drop_def(value)
        if name == LENGTH_NAME:
            self._end_definitions()

    def _read_continuation(self, line: str) -> None:
        text = _chomp(line)
        name, parts = self._pending
        if DEFINITION_END in text:
            parts.append(_drop_def(text))
            self._definitions[name] = "\n".join(parts)
            self._pending = None
            self.state = ParserState.DEFINITIONS
        else:
            parts.append(text)

    def _end_definitions(self) -> None:
        self._definitions.add_missing()
        self.state = ParserState.COMMANDS

    def _read_command(self, line: str) -> None:
        self._commands.append(line)
        if _chomp(line) == GRID_COMMAND:
            self.state = ParserState.BODY

    def _read_record(self, line: str) -> None:
        text = _chomp(line)
        if text.startswith("%"):
            return
        if text == PAGE_END:
            self.state = ParserState.DONE
            return
        kind, key, record = self._parse_record(text)
        previous = self._annotations.put(kind, key, record)
        if previous is not None:
            LOGGER.warning("line %d: %s %s overrides an earlier record", self._line_number, kind.keyword, key)

    def _finish_early(self) -> None:
        if self.state in (ParserState.COMMENTS, ParserState.DEFINITIONS, ParserState.MULTILINE_VALUE):
            raise FormatError(
                f"input ended inside the definition block (no single-line /{LENGTH_NAME} definition)",
                line_number=self._line_number,
            )
        if self.state is ParserState.COMMANDS:
            raise FormatError(f"input ended before a '{GRID_COMMAND}' line", line_number=self._line_number)
        LOGGER.warning("input ended without '%s'; keeping %d record(s)", PAGE_END, len(self._annotations))
        self.state = ParserState.DONE

    # -- records -----------------------------------------------------------

    def _parse_record(self, text: str) -> Tuple[AnnotationKind, BasePairKey, ColoredRecord]:
        fields = text.split(" ")
        while fields and not fields[-1]:
            fields.pop()
        if len(fields) not in (4, 8):
            raise FormatError("invalid record line", line_number=self._line_number, line=text)
        kind = KIND_BY_KEYWORD.get(fields[-1])
        if kind is None:
            raise FormatError(
                f"unknown record keyword {fields[-1]!r}", line_number=self._line_number, line=text
            )
        if len(fields) == 8:
            color_fields = fields[0:3]
            first, second, size = fields[4:7]
        else:
            color_fields = ["0", "0", "0"]
            first, second, size = fields[0:3]
        try:
            key = BasePairKey(int(first), int(second))
            red, green, blue = (float(value) for value in color_fields)
            record = ColoredRecord(size=float(size), red=red, green=green, blue=blue)
        except ValueError as exc:
            raise FormatError(
                f"invalid {kind.keyword} record: {exc}", line_number=self._line_number, line=text
            ) from exc
        if not all(math.isfinite(value) for value in (record.size, *record.color)):
            raise FormatError(
                f"{kind.keyword} record has a non-finite number", line_number=self._line_number, line=text
            )
        if self._strict_colors and not all(0.0 <= channel <= 1.0 for channel in record.color):
            raise FormatError(
                f"{kind.keyword} color outside [0, 1]", line_number=self._line_number, line=text
            )
        return kind, key, record


def parse(text: str, *, strict_colors: Optional[bool] = None) -> DotPlot:
    """Parse a whole dot-plot document.

    ``strict_colors`` defaults to the ``DOTPLOT_STRICT_COLORS`` setting.
    """

    return DotPlotParser(split_lines(text), strict_colors=strict_colors).parse()


__all__ = ["DotPlotParser", "ParserState", "parse", "split_lines"]
