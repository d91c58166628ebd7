"""Runtime configuration helpers."""

from __future__ import annotations

import logging
import os

_LOG_LEVEL_ENV = "DOTPLOT_LOG_LEVEL"
_STRICT_COLORS_ENV = "DOTPLOT_STRICT_COLORS"

DEFAULT_LOG_LEVEL = "WARNING"

LOGGER = logging.getLogger(__name__)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"", "0", "false", "no"}:
        return False
    if raw in {"1", "true", "yes"}:
        return True
    return default


def resolve_log_level(preferred: str | None = None) -> int:
    """Resolve the logging level requested by CLI/env."""

    name = (preferred or os.getenv(_LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{name}'.")
    return level


def strict_colors() -> bool:
    """Whether parsed record colors must lie in [0, 1]."""

    strict = _env_bool(_STRICT_COLORS_ENV, default=False)
    LOGGER.debug("strict_colors=%s env=%s", strict, os.getenv(_STRICT_COLORS_ENV))
    return strict


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "resolve_log_level",
    "strict_colors",
    "_LOG_LEVEL_ENV",
    "_STRICT_COLORS_ENV",
]
