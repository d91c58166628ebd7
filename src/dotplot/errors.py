"""Error types raised while reading, editing and writing dot plots."""

from __future__ import annotations

from typing import Optional


class DotPlotError(Exception):
    """Base error for dot-plot failures."""


class FileError(DotPlotError, OSError):
    """Raised when a dot-plot path is missing or cannot be opened."""


class InvalidArgument(DotPlotError, ValueError):
    """Raised when a mutation receives a missing or out-of-range value."""


class FormatError(DotPlotError, ValueError):
    """Raised when input text does not follow the dot-plot layout.

    ``line_number`` is 1-based and ``line`` holds the offending text without
    its line terminator. Structure-notation failures set ``position`` (0-based
    character index) instead.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        position: Optional[int] = None,
    ) -> None:
        self.reason = message
        self.line_number = line_number
        self.line = line
        self.position = position
        details = []
        if line_number is not None:
            details.append(f"line {line_number}")
        if position is not None:
            details.append(f"position {position}")
        if line is not None:
            details.append(repr(line))
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


__all__ = ["DotPlotError", "FileError", "FormatError", "InvalidArgument"]
