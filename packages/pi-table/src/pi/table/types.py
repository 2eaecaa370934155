"""Core value types: alignments, padding and column width constraints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union, get_args

Alignment = Literal["left", "center", "right"]

VerticalAlignment = Literal["top", "middle", "bottom"]

ALIGNMENTS: tuple[str, ...] = get_args(Alignment)
VERTICAL_ALIGNMENTS: tuple[str, ...] = get_args(VerticalAlignment)


def check_alignment(value: str) -> Alignment:
    if value not in ALIGNMENTS:
        msg = f"Unknown alignment {value!r}; expected one of {', '.join(ALIGNMENTS)}"
        raise ValueError(msg)
    return value  # type: ignore[return-value]


def check_vertical_alignment(value: str) -> VerticalAlignment:
    if value not in VERTICAL_ALIGNMENTS:
        msg = (
            f"Unknown vertical alignment {value!r}; "
            f"expected one of {', '.join(VERTICAL_ALIGNMENTS)}"
        )
        raise ValueError(msg)
    return value  # type: ignore[return-value]


def _check_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


# --- Padding ---


@dataclass(frozen=True)
class Padding:
    """Blank space inside every cell: columns left/right, lines top/bottom."""

    left: int = 1
    right: int = 1
    top: int = 0
    bottom: int = 0

    def __post_init__(self) -> None:
        for name in ("left", "right", "top", "bottom"):
            _check_non_negative(f"Padding.{name}", getattr(self, name))

    @classmethod
    def uniform(cls, padding: int) -> Padding:
        return cls(left=padding, right=padding)

    @property
    def horizontal(self) -> int:
        return self.left + self.right


# --- Width constraints ---


@dataclass(frozen=True)
class Fixed:
    """Column is exactly ``width`` wide regardless of content."""

    width: int

    def __post_init__(self) -> None:
        _check_non_negative("Fixed width", self.width)


@dataclass(frozen=True)
class Min:
    """Column is at least ``width`` wide and grows with content."""

    width: int

    def __post_init__(self) -> None:
        _check_non_negative("Min width", self.width)


@dataclass(frozen=True)
class Max:
    """Column is at most ``width`` wide; wider content wraps or truncates."""

    width: int

    def __post_init__(self) -> None:
        _check_non_negative("Max width", self.width)


@dataclass(frozen=True)
class Proportional:
    """Column takes ``percent`` percent of the available content width."""

    percent: int

    def __post_init__(self) -> None:
        if not 0 <= self.percent <= 100:
            raise ValueError(f"Proportional percent must be in 0..100, got {self.percent}")


@dataclass(frozen=True)
class Wrap:
    """Column is capped at ``width`` and always word-wraps, never truncates."""

    width: int

    def __post_init__(self) -> None:
        _check_non_negative("Wrap width", self.width)


WidthConstraint = Union[Fixed, Min, Max, Proportional, Wrap]
