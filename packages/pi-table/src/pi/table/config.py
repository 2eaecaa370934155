"""Environment-driven defaults for new tables.

``PI_TABLE_WIDTH`` sets the available line width used by proportional
columns, ``PI_TABLE_STYLE`` the style new tables start with.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from pi.table.style import STYLES, TableStyle

logger = logging.getLogger(__name__)

DEFAULT_AVAILABLE_WIDTH = 120
DEFAULT_STYLE: TableStyle = "classic"

WIDTH_ENV = "PI_TABLE_WIDTH"
STYLE_ENV = "PI_TABLE_STYLE"


@dataclass
class TableDefaults:
    available_width: int = DEFAULT_AVAILABLE_WIDTH
    style: TableStyle = DEFAULT_STYLE


def _env_width() -> int:
    raw = os.environ.get(WIDTH_ENV)
    if raw is None or not raw.strip():
        return DEFAULT_AVAILABLE_WIDTH
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", WIDTH_ENV, raw)
        return DEFAULT_AVAILABLE_WIDTH
    if value < 0:
        logger.warning("Ignoring %s=%r: must be non-negative", WIDTH_ENV, raw)
        return DEFAULT_AVAILABLE_WIDTH
    return value


def _env_style() -> TableStyle:
    raw = os.environ.get(STYLE_ENV)
    if raw is None or not raw.strip():
        return DEFAULT_STYLE
    value = raw.strip().lower()
    if value not in STYLES:
        logger.warning("Ignoring %s=%r: unknown style", STYLE_ENV, raw)
        return DEFAULT_STYLE
    return value  # type: ignore[return-value]


def load_defaults() -> TableDefaults:
    """Read the current environment into a :class:`TableDefaults`."""
    return TableDefaults(available_width=_env_width(), style=_env_style())


def resolve_available_width(*candidates: int | None) -> int:
    """First non-``None`` candidate, else the configured default."""
    for candidate in candidates:
        if candidate is not None:
            if candidate < 0:
                raise ValueError(f"Available width must be non-negative, got {candidate}")
            return candidate
    return _env_width()
